"""
词库数据模型 - 规则与命中
"""
import re
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PatternType(str, Enum):
    """匹配方式"""
    KEYWORD = "keyword"  # 整词匹配
    REGEX = "regex"      # 正则表达式


class Domain(str, Enum):
    """行业"""
    GENERAL = "general"
    COSMETICS = "cosmetics"
    FOOD = "food"
    PHARMA = "pharma"
    SUPPLEMENT = "supplement"


class Market(str, Enum):
    """市场"""
    GENERAL = "general"
    US = "US"
    EU = "EU"
    CN = "CN"
    CA = "CA"


class RuleSeverity(str, Enum):
    """规则优先级（P0 最严重）"""
    P0 = "P0"
    P1 = "P1"
    P2 = "P2"

    @property
    def rank(self) -> int:
        return int(self.value[1])


class LexiconEntry(BaseModel):
    """
    词库规则

    加载时即完成校验：pattern 不能为空，正则必须能编译。
    不合法的规则在加载阶段被拒绝，不会拖到匹配阶段。
    """
    model_config = ConfigDict(frozen=True)

    id: str
    pattern: str
    pattern_type: PatternType = PatternType.KEYWORD
    domain: Domain = Domain.GENERAL
    market: Market = Market.GENERAL
    severity: RuleSeverity = RuleSeverity.P1
    reason: str
    suggestion: str
    source: Optional[str] = None
    source_url: Optional[str] = None
    category: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_camel_case(cls, data):
        # 词库文件沿用前端的字段名
        if isinstance(data, dict):
            data = dict(data)
            for camel, snake in (("patternType", "pattern_type"), ("sourceUrl", "source_url")):
                if camel in data and snake not in data:
                    data[snake] = data.pop(camel)
        return data

    @field_validator("pattern")
    @classmethod
    def _pattern_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("pattern 不能为空")
        return value

    @model_validator(mode="after")
    def _pattern_compiles(self):
        build_pattern(self.pattern, self.pattern_type)
        return self


# 中日韩文字、假名、谚文
_CJK_RANGES = "\u2e80-\u9fff\uac00-\ud7af\uf900-\ufaff\uff66-\uff9f"
_CJK = re.compile(f"[{_CJK_RANGES}]")

# 除中日韩文字以外的 Unicode 单词字符（含带重音的拉丁字母）
_WORD_CHAR = f"[^\\W{_CJK_RANGES}]"


@lru_cache(maxsize=None)
def build_pattern(pattern: str, pattern_type: PatternType) -> re.Pattern:
    """
    构造匹配用的正则（大小写不敏感）

    关键词：转义后加整词边界。边界只加在关键词首尾为单词字符的一侧，
    中日韩文字不算单词字符：这类文字没有空格分词，加了边界就永远匹配不上。

    Raises:
        ValueError: pattern 为空或正则无法编译
    """
    if not pattern:
        raise ValueError("pattern 不能为空")

    if pattern_type == PatternType.KEYWORD:
        body = re.escape(pattern)
        if _is_word_char(pattern[0]):
            body = rf"(?<!{_WORD_CHAR})" + body
        if _is_word_char(pattern[-1]):
            body = body + rf"(?!{_WORD_CHAR})"
        return re.compile(body, re.IGNORECASE)

    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ValueError(f"正则无法编译: {pattern!r} ({e})") from e


def _is_word_char(char: str) -> bool:
    return (char.isalnum() or char == "_") and not _CJK.match(char)


class LexiconHit(BaseModel):
    """词库命中"""
    model_config = ConfigDict(frozen=True)

    entry: LexiconEntry
    matched_text: str
    position: int  # 在原文中的字符偏移
    context: str   # 命中位置的上下文，被截断的一侧带省略号
