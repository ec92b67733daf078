"""
字段核对 - 参考规格与图片提取字段逐项比对
"""
from typing import List, Optional, Sequence

from loguru import logger

from ..models.fields import (
    NO_DATA_VALUE,
    NOT_FOUND_VALUE,
    DocumentOutcome,
    MatchStatus,
    ReconciliationResult,
    SourceField,
)


def normalize(value: str) -> str:
    """去首尾空白并转小写"""
    return value.strip().lower()


def find_candidate(reference_key: str, extracted: Sequence[SourceField]) -> Optional[SourceField]:
    """
    查找与参考字段对应的提取字段

    提取步骤可能改写字段名，所以键名双向包含也算匹配。
    多个候选时优先键名完全相同的，否则取文档中第一个包含关系成立的。
    """
    for field in extracted:
        if field.key == reference_key:
            return field

    if not reference_key:
        return None

    for field in extracted:
        # 空键名会被任何字符串包含
        if field.key and (field.key in reference_key or reference_key in field.key):
            return field

    return None


def classify_values(reference_value: str, extracted_value: str) -> MatchStatus:
    """
    判定两个值的一致程度

    - 归一化后相等: match
    - 一方包含另一方: warning
    - 其他: error
    """
    expected = normalize(reference_value)
    actual = normalize(extracted_value)

    if expected == actual:
        return MatchStatus.MATCH
    if actual in expected or expected in actual:
        return MatchStatus.WARNING
    return MatchStatus.ERROR


class FieldReconciler:
    """
    字段核对器

    每次调用都从头计算，不保留任何中间状态，也不修改输入。
    """

    def reconcile(
        self,
        reference_fields: Sequence[SourceField],
        documents: Sequence[Sequence[SourceField]]
    ) -> List[ReconciliationResult]:
        """
        核对参考规格

        Args:
            reference_fields: 参考字段（QIL）
            documents: 每个文档的提取字段，按文档顺序

        Returns:
            每个参考字段一条结果，顺序与参考字段一致
        """
        results = []
        for field in reference_fields:
            outcomes = [
                self._compare(field, index, extracted)
                for index, extracted in enumerate(documents)
            ]
            has_error = any(o.status == MatchStatus.ERROR for o in outcomes)
            has_warning = not has_error and any(o.status == MatchStatus.WARNING for o in outcomes)
            results.append(ReconciliationResult(
                field=field,
                outcomes=outcomes,
                has_error=has_error,
                has_warning=has_warning
            ))

        logger.debug(f"字段核对: {len(reference_fields)} 个字段 x {len(documents)} 个文档")
        return results

    def _compare(
        self,
        field: SourceField,
        document_index: int,
        extracted: Sequence[SourceField]
    ) -> DocumentOutcome:
        if not extracted:
            return DocumentOutcome(
                document_index=document_index,
                value=NO_DATA_VALUE,
                status=MatchStatus.PENDING
            )

        candidate = find_candidate(field.key, extracted)
        if candidate is None:
            return DocumentOutcome(
                document_index=document_index,
                value=NOT_FOUND_VALUE,
                status=MatchStatus.ERROR
            )

        return DocumentOutcome(
            document_index=document_index,
            value=candidate.value,
            status=classify_values(field.value, candidate.value),
            matched_key=candidate.key
        )
