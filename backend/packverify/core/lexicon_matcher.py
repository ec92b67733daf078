"""
词库匹配 - 本地匹配，不消耗 API token，结果完全确定
"""
import re
from typing import Dict, List, Optional

from loguru import logger

from ..models.lexicon import Domain, LexiconEntry, LexiconHit, Market, build_pattern
from .lexicon_catalog import LexiconCatalog

ELLIPSIS = "..."


class LexiconMatcher:
    """
    词库匹配器

    流程：
    1. 按行业/市场过滤规则（general 对所有行业/市场生效）
    2. 关键词整词匹配 / 正则匹配，大小写不敏感
    3. 同一位置只保留优先级最高的命中
    """

    def __init__(self, catalog: LexiconCatalog, context_size: int = 30):
        self.catalog = catalog
        self.context_size = context_size

    def match_text(
        self,
        text: str,
        domain: Optional[Domain] = None,
        market: Optional[Market] = None,
        context_size: Optional[int] = None
    ) -> List[LexiconHit]:
        """
        匹配词库

        Args:
            text: OCR 提取的文本
            domain: 行业（为空则匹配所有行业）
            market: 市场（为空则匹配所有市场）
            context_size: 上下文窗口大小（默认使用实例配置）

        Returns:
            去重后按位置排序的命中列表
        """
        if not text:
            return []

        size = self.context_size if context_size is None else context_size
        hits = self.find_hits(text, domain, market, size)
        resolved = resolve_hits(hits)

        logger.debug(f"🔍 词库匹配: {len(hits)} 个原始命中 -> {len(resolved)} 个")
        return resolved

    def find_hits(
        self,
        text: str,
        domain: Optional[Domain] = None,
        market: Optional[Market] = None,
        context_size: int = 30
    ) -> List[LexiconHit]:
        """扫描全部适用规则，返回未去重的命中（规则顺序，规则内按位置）"""
        hits: List[LexiconHit] = []
        if not text:
            return hits

        for entry in self.catalog:
            if not _applies(entry, domain, market):
                continue

            pattern = _pattern_for(entry)
            if pattern is None:
                continue

            for match in pattern.finditer(text):
                # 零宽匹配没有可展示的原文
                if match.end() == match.start():
                    continue
                hits.append(LexiconHit(
                    entry=entry,
                    matched_text=match.group(0),
                    position=match.start(),
                    context=get_context(text, match.start(), match.end() - match.start(), context_size)
                ))

        return hits


def _applies(entry: LexiconEntry, domain: Optional[Domain], market: Optional[Market]) -> bool:
    if domain and entry.domain != Domain.GENERAL and entry.domain != domain:
        return False
    if market and entry.market != Market.GENERAL and entry.market != market:
        return False
    return True


def _pattern_for(entry: LexiconEntry) -> Optional[re.Pattern]:
    # 加载时已校验过；model_construct 构造的规则没有经过校验
    try:
        return build_pattern(entry.pattern, entry.pattern_type)
    except ValueError as e:
        logger.warning(f"规则 {entry.id} 的 pattern 无效，已跳过: {e}")
        return None


def get_context(text: str, position: int, match_length: int, context_size: int = 30) -> str:
    """截取命中位置前后的上下文，被截断的一侧加省略号"""
    start = max(0, position - context_size)
    end = min(len(text), position + match_length + context_size)
    context = text[start:end]

    if start > 0:
        context = ELLIPSIS + context
    if end < len(text):
        context = context + ELLIPSIS

    return context


def resolve_hits(hits: List[LexiconHit]) -> List[LexiconHit]:
    """
    去重：同一位置只保留优先级最高的命中

    优先级相同时保留词库中靠前的规则。位置不同的命中即使区间重叠也都保留。

    Args:
        hits: 原始命中（规则顺序）

    Returns:
        按位置升序排列的命中
    """
    by_position: Dict[int, List[LexiconHit]] = {}
    for hit in hits:
        by_position.setdefault(hit.position, []).append(hit)

    result = []
    for group in by_position.values():
        # sorted 是稳定排序，同级别保持词库顺序
        result.append(sorted(group, key=lambda h: h.entry.severity.rank)[0])

    return sorted(result, key=lambda h: h.position)
