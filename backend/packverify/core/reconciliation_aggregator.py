"""
核对结果汇总
"""
from typing import List, Sequence

from ..models.fields import ReconciliationResult, ReconciliationSummary


def sort_for_review(results: Sequence[ReconciliationResult]) -> List[ReconciliationResult]:
    """
    排序以便人工复核：差异在前，警告其次，其余在后

    三组内部保持原有的参考字段顺序。
    """
    errors = [r for r in results if r.has_error]
    warnings = [r for r in results if not r.has_error and r.has_warning]
    rest = [r for r in results if not r.has_error and not r.has_warning]
    return errors + warnings + rest


def filter_differences(results: Sequence[ReconciliationResult]) -> List[ReconciliationResult]:
    """只看差异"""
    return [r for r in results if r.has_error or r.has_warning]


def summarize(results: Sequence[ReconciliationResult]) -> ReconciliationSummary:
    """按参考字段统计匹配/警告/差异数"""
    error_count = sum(1 for r in results if r.has_error)
    warning_count = sum(1 for r in results if r.has_warning and not r.has_error)
    total_count = len(results)
    match_count = total_count - error_count - warning_count

    return ReconciliationSummary(
        match_count=match_count,
        warning_count=warning_count,
        error_count=error_count,
        total_count=total_count,
        all_pass=error_count == 0 and warning_count == 0
    )
