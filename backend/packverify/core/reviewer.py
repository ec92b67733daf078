"""
包装审核器 - 汇总词库、确定性检查和外部 AI 的问题
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from ..models.fields import ReconciliationResult, ReconciliationSummary, SourceField
from ..models.issues import AiSuggestionIssue, Finding, IssueKind, Severity
from ..models.review import ReviewConfig, TextReviewResult
from .deterministic_checker import check_brackets
from .field_reconciler import FieldReconciler
from .issue_formatter import hits_to_issues
from .lexicon_catalog import LexiconCatalog
from .lexicon_matcher import LexiconMatcher
from .reconciliation_aggregator import sort_for_review, summarize


class PackagingReviewer:
    """
    包装审核器

    核心流程：
    1. 词库匹配 -> 去重 -> 格式化
    2. 括号配对检查
    3. 合并外部模型给出的建议
    4. 排序和生成摘要

    所有配置通过 ReviewConfig 显式传入。
    """

    def __init__(self, catalog: LexiconCatalog, reconciler: Optional[FieldReconciler] = None):
        self.matcher = LexiconMatcher(catalog)
        self.reconciler = reconciler or FieldReconciler()

    def review_text(
        self,
        text: str,
        config: ReviewConfig,
        ai_suggestions: Iterable[AiSuggestionIssue] = ()
    ) -> TextReviewResult:
        """
        审核一段 OCR 文本

        Args:
            text: OCR 文本
            config: 本次审核配置
            ai_suggestions: 外部模型给出的问题（已是结构化数据）

        Returns:
            审核结果
        """
        hits = self.matcher.match_text(
            text,
            domain=config.domain,
            market=config.market,
            context_size=config.context_size
        )

        findings: List[Finding] = list(hits_to_issues(hits))
        if config.check_brackets:
            findings.extend(check_brackets(text, config.context_size))
        findings.extend(ai_suggestions)

        findings = order_findings(findings)
        summary = summarize_findings(findings)

        logger.info(
            f"审核完成 [{config.model_id}]: 词库 {summary['by_kind'][IssueKind.LEXICON.value]} 个, "
            f"确定性 {summary['by_kind'][IssueKind.DETERMINISTIC.value]} 个, "
            f"AI {summary['by_kind'][IssueKind.AI_SUGGESTION.value]} 个"
        )

        return TextReviewResult(
            model_id=config.model_id,
            total_issues=len(findings),
            findings=findings,
            summary=summary
        )

    def reconcile(
        self,
        reference_fields: Sequence[SourceField],
        documents: Sequence[Sequence[SourceField]]
    ) -> Tuple[List[ReconciliationResult], ReconciliationSummary]:
        """核对参考规格，返回复核顺序的结果和统计"""
        results = self.reconciler.reconcile(reference_fields, documents)
        return sort_for_review(results), summarize(results)


def order_findings(findings: Iterable[Finding]) -> List[Finding]:
    """按严重程度排序，同级别保持原顺序"""
    return sorted(findings, key=lambda f: f.severity.rank)


def summarize_findings(findings: Sequence[Finding]) -> Dict[str, Any]:
    """
    生成审核摘要

    Args:
        findings: 问题列表（任意类型）

    Returns:
        摘要信息
    """
    summary = {
        "total": len(findings),
        "by_severity": {s.value: 0 for s in Severity},
        "by_kind": {k.value: 0 for k in IssueKind}
    }

    for finding in findings:
        summary["by_severity"][finding.severity.value] += 1
        summary["by_kind"][finding.kind] += 1

    return summary
