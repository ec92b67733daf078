"""
问题格式化 - 词库命中转成统一的问题记录
"""
from typing import List

from ..models.issues import ConfidenceLevel, LexiconIssue, RuleHit, Severity
from ..models.lexicon import LexiconHit, RuleSeverity

SEVERITY_MAP = {
    RuleSeverity.P0: Severity.HIGH,
    RuleSeverity.P1: Severity.MEDIUM,
    RuleSeverity.P2: Severity.LOW,
}


def hits_to_issues(hits: List[LexiconHit]) -> List[LexiconIssue]:
    """
    将词库命中转换为问题

    置信度固定为 certain：界面靠这个字段区分词库结果和 AI 结果，不能按启发式计算。
    问题ID由规则ID和序号构成，相同输入得到相同输出。
    """
    issues = []
    for idx, hit in enumerate(hits):
        entry = hit.entry
        issues.append(LexiconIssue(
            id=f"lex-{entry.id}-{idx}",
            original=hit.matched_text,
            problem=entry.reason,
            suggestion=entry.suggestion,
            severity=SEVERITY_MAP[entry.severity],
            confidence=ConfidenceLevel.CERTAIN,
            context=hit.context,
            rule_hits=[RuleHit(id=entry.id, source=entry.source, source_url=entry.source_url)]
        ))
    return issues
