"""
审核配置与结果
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .issues import Finding
from .lexicon import Domain, Market


class ReviewConfig(BaseModel):
    """
    单次审核的显式配置

    每次调用都要传入，核心流程不读取任何全局状态。
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str
    domain: Optional[Domain] = None
    market: Optional[Market] = None
    context_size: int = Field(default=30, ge=0)
    check_brackets: bool = True


class TextReviewResult(BaseModel):
    """一段文本的审核结果"""
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    total_issues: int
    findings: List[Finding]
    summary: Dict[str, Any]
