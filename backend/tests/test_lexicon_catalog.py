"""
词库加载测试
"""
import json

import pytest

from packverify.core.lexicon_catalog import LexiconCatalog
from packverify.exceptions import LexiconLoadError
from packverify.models.lexicon import Domain, PatternType, RuleSeverity

from conftest import make_entry


def test_valid_entries_keep_file_order():
    catalog = LexiconCatalog.from_entries([
        make_entry("a", "alpha"),
        make_entry("b", "beta"),
        make_entry("c", "gamma"),
    ])
    assert [e.id for e in catalog] == ["a", "b", "c"]
    assert len(catalog) == 3


def test_camel_case_fields_are_accepted():
    catalog = LexiconCatalog.from_entries([
        make_entry("r", "x\\d+", patternType="regex", sourceUrl="https://example.org/rule"),
    ])
    entry = catalog.get("r")
    assert entry.pattern_type == PatternType.REGEX
    assert entry.source_url == "https://example.org/rule"


def test_invalid_regex_is_rejected_at_load():
    catalog = LexiconCatalog.from_entries([
        make_entry("bad", "([unclosed", patternType="regex"),
        make_entry("good", "fine"),
    ])
    assert [e.id for e in catalog] == ["good"]


@pytest.mark.parametrize("pattern", ["", "   "])
def test_empty_pattern_is_rejected(pattern):
    catalog = LexiconCatalog.from_entries([make_entry("empty", pattern)])
    assert len(catalog) == 0


def test_unknown_domain_is_rejected():
    catalog = LexiconCatalog.from_entries([make_entry("x", "word", domain="toys")])
    assert len(catalog) == 0


def test_duplicate_ids_keep_first():
    catalog = LexiconCatalog.from_entries([
        make_entry("dup", "first"),
        make_entry("dup", "second"),
    ])
    assert len(catalog) == 1
    assert catalog.get("dup").pattern == "first"


def test_entries_are_immutable():
    catalog = LexiconCatalog.from_entries([make_entry("a", "alpha")])
    with pytest.raises(Exception):
        catalog.get("a").pattern = "changed"
    assert isinstance(catalog.entries, tuple)


def test_from_file_accepts_bare_list(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps([make_entry("a", "alpha")]), encoding="utf-8")
    catalog = LexiconCatalog.from_file(path)
    assert len(catalog) == 1
    assert catalog.version is None


def test_from_file_missing_raises(tmp_path):
    with pytest.raises(LexiconLoadError):
        LexiconCatalog.from_file(tmp_path / "missing.json")


def test_from_file_invalid_json_raises(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LexiconLoadError):
        LexiconCatalog.from_file(path)


def test_bundled_catalog_loads_every_entry(bundled_catalog):
    assert len(bundled_catalog) == 14
    assert bundled_catalog.version == "2025.06"
    cure = bundled_catalog.get("cos-us-001")
    assert cure.domain == Domain.COSMETICS
    assert cure.severity == RuleSeverity.P0


def test_stats_counts_by_dimension():
    catalog = LexiconCatalog.from_entries([
        make_entry("a", "alpha", domain="food", severity="P0"),
        make_entry("b", "beta", domain="food", market="EU"),
        make_entry("c", "gamma"),
    ])
    stats = catalog.stats()
    assert stats["total"] == 3
    assert stats["by_domain"] == {"food": 2, "general": 1}
    assert stats["by_severity"] == {"P0": 1, "P1": 2}
    assert stats["by_market"] == {"general": 2, "EU": 1}
