"""
词库 - 只读的规则集合
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from loguru import logger
from pydantic import ValidationError

from ..exceptions import LexiconLoadError
from ..models.lexicon import LexiconEntry


class LexiconCatalog:
    """
    词库

    功能：
    1. 从 JSON 文件加载规则
    2. 加载时校验每条规则，不合法的规则记录警告后丢弃
    3. 加载后不可修改，规则顺序即文件顺序（去重时的次级排序依据）
    """

    def __init__(self, entries: Iterable[LexiconEntry] = (), version: Optional[str] = None):
        self._entries: Tuple[LexiconEntry, ...] = tuple(entries)
        self._by_id: Dict[str, LexiconEntry] = {e.id: e for e in self._entries}
        self.version = version

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LexiconCatalog":
        """
        从文件加载词库

        文件格式：{"version": "...", "entries": [...]}，也接受直接给出规则数组。

        Raises:
            LexiconLoadError: 文件不存在、无法读取或不是合法 JSON
        """
        path = Path(path)
        if not path.exists():
            raise LexiconLoadError(f"词库文件不存在: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LexiconLoadError(f"词库文件读取失败 {path}: {e}") from e

        if isinstance(data, dict):
            raw_entries = data.get("entries", [])
            version = data.get("version")
        elif isinstance(data, list):
            raw_entries = data
            version = None
        else:
            raise LexiconLoadError(f"词库格式错误: {path}")

        catalog = cls.from_entries(raw_entries, version=version)
        logger.info(f"📚 加载词库: {path.name}, 共 {len(catalog)} 条规则")
        return catalog

    @classmethod
    def from_entries(
        cls,
        raw_entries: Iterable[Dict[str, Any]],
        version: Optional[str] = None
    ) -> "LexiconCatalog":
        """
        从原始字典构建词库

        Args:
            raw_entries: 规则字典列表
            version: 词库版本

        Returns:
            词库实例（只包含通过校验的规则）
        """
        entries: List[LexiconEntry] = []
        seen_ids = set()
        rejected = 0

        for index, raw in enumerate(raw_entries):
            entry_id = raw.get("id", f"#{index}") if isinstance(raw, dict) else f"#{index}"
            try:
                entry = LexiconEntry.model_validate(raw)
            except ValidationError as e:
                rejected += 1
                reasons = "; ".join(err["msg"] for err in e.errors())
                logger.warning(f"⚠️  跳过无效规则 {entry_id}: {reasons}")
                continue

            if entry.id in seen_ids:
                rejected += 1
                logger.warning(f"⚠️  跳过重复规则ID: {entry.id}")
                continue

            seen_ids.add(entry.id)
            entries.append(entry)

        if rejected:
            logger.warning(f"词库加载: {rejected} 条规则被拒绝")

        return cls(entries, version=version)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LexiconEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> Tuple[LexiconEntry, ...]:
        return self._entries

    def get(self, rule_id: str) -> Optional[LexiconEntry]:
        return self._by_id.get(rule_id)

    def stats(self) -> Dict[str, Any]:
        """按行业、优先级、市场统计规则数"""
        stats = {
            "total": len(self._entries),
            "by_domain": {},
            "by_severity": {},
            "by_market": {}
        }

        for entry in self._entries:
            domain = entry.domain.value
            severity = entry.severity.value
            market = entry.market.value
            stats["by_domain"][domain] = stats["by_domain"].get(domain, 0) + 1
            stats["by_severity"][severity] = stats["by_severity"].get(severity, 0) + 1
            stats["by_market"][market] = stats["by_market"].get(market, 0) + 1

        return stats
