"""
审核发现 - 三类问题共用一个最小接口

- LexiconIssue: 词库命中，确定性结果，置信度固定为 certain
- AiSuggestionIssue: 外部 AI 给出的建议，默认需要人工确认
- DeterministicIssue: 结构性检查（括号配对等）
"""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    """严重程度"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


class ConfidenceLevel(str, Enum):
    """置信度级别"""
    CERTAIN = "certain"
    LIKELY = "likely"
    POSSIBLE = "possible"
    NEEDS_CONFIRMATION = "needs_confirmation"


class IssueKind(str, Enum):
    LEXICON = "lexicon"
    AI_SUGGESTION = "ai_suggestion"
    DETERMINISTIC = "deterministic"


class RuleHit(BaseModel):
    """问题对应的规则出处"""
    model_config = ConfigDict(frozen=True)

    type: Literal["lexicon"] = "lexicon"
    id: str
    source: Optional[str] = None
    source_url: Optional[str] = None


class LexiconIssue(BaseModel):
    """词库命中生成的问题"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["lexicon"] = "lexicon"
    id: str
    type: Literal["lexicon"] = "lexicon"
    original: str
    problem: str
    suggestion: str
    severity: Severity
    confidence: ConfidenceLevel = ConfidenceLevel.CERTAIN
    context: str
    rule_hits: List[RuleHit] = []

    @field_validator("confidence")
    @classmethod
    def _always_certain(cls, value: ConfidenceLevel) -> ConfidenceLevel:
        if value != ConfidenceLevel.CERTAIN:
            raise ValueError("词库命中的置信度只能是 certain")
        return value

    @property
    def description(self) -> str:
        return self.problem

    @property
    def location(self) -> str:
        return self.context


class AiSuggestionIssue(BaseModel):
    """
    外部 AI 给出的问题

    由视觉/对话模型产生，本系统不做判断，只负责归一化和展示。
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["ai_suggestion"] = "ai_suggestion"
    id: str
    type: str = "content"  # 上游的 8 类检查项，原样保留
    original: Optional[str] = None
    problem: str
    suggestion: str = ""
    location_desc: Optional[str] = None
    severity: Severity = Severity.MEDIUM
    confidence: ConfidenceLevel = ConfidenceLevel.NEEDS_CONFIRMATION

    @field_validator("confidence")
    @classmethod
    def _never_certain(cls, value: ConfidenceLevel) -> ConfidenceLevel:
        # 只有词库命中才能是 certain
        if value == ConfidenceLevel.CERTAIN:
            return ConfidenceLevel.NEEDS_CONFIRMATION
        return value

    @property
    def description(self) -> str:
        return self.problem

    @property
    def location(self) -> str:
        return self.location_desc or self.original or ""


class DeterministicIssue(BaseModel):
    """确定性检查结果（括号配对等）"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["deterministic"] = "deterministic"
    id: str
    check_type: Literal["bracket_mismatch", "encoding_error", "format_error"]
    description: str
    position: int
    context: str
    severity: Severity = Severity.MEDIUM

    @property
    def location(self) -> str:
        return self.context


Finding = Annotated[
    Union[LexiconIssue, AiSuggestionIssue, DeterministicIssue],
    Field(discriminator="kind"),
]
