"""
字段核对数据模型
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


NOT_FOUND_VALUE = "(not found)"
NO_DATA_VALUE = "-"


class FieldCategory(str, Enum):
    """字段分类"""
    CONTENT = "content"         # 营销文案
    COMPLIANCE = "compliance"   # 成分、警示语
    SPECS = "specs"             # 净含量、尺寸


class MatchStatus(str, Enum):
    """核对状态"""
    MATCH = "match"
    WARNING = "warning"
    ERROR = "error"
    PENDING = "pending"  # 该文档还没有提取出任何字段


class SourceField(BaseModel):
    """
    键/值/分类三元组

    参考规格（QIL）和图片提取结果共用这一结构。
    """
    model_config = ConfigDict(frozen=True)

    key: str
    value: str
    category: FieldCategory = FieldCategory.CONTENT


# 语义上的别名
ReferenceField = SourceField
ExtractedField = SourceField


class ExtractedDocument(BaseModel):
    """一张包装图片的提取结果"""
    document_id: str
    name: Optional[str] = None
    ocr_text: Optional[str] = None
    fields: List[SourceField] = []


class DocumentOutcome(BaseModel):
    """单个参考字段在单个文档上的核对结果"""
    model_config = ConfigDict(frozen=True)

    document_index: int
    value: str
    status: MatchStatus
    matched_key: Optional[str] = None


class ReconciliationResult(BaseModel):
    """单个参考字段的核对汇总"""
    model_config = ConfigDict(frozen=True)

    field: SourceField
    outcomes: List[DocumentOutcome]
    has_error: bool
    has_warning: bool


class ReconciliationSummary(BaseModel):
    """整批核对统计"""
    model_config = ConfigDict(frozen=True)

    match_count: int
    warning_count: int
    error_count: int
    total_count: int
    all_pass: bool
