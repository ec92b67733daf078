"""
包装审核器测试
"""
import pytest

from packverify.core.reviewer import PackagingReviewer, order_findings, summarize_findings
from packverify.models.fields import SourceField
from packverify.models.issues import AiSuggestionIssue, ConfidenceLevel, Severity
from packverify.models.lexicon import Domain, Market
from packverify.models.review import ReviewConfig

from conftest import SAMPLE_TEXT


@pytest.fixture
def reviewer(bundled_catalog):
    return PackagingReviewer(bundled_catalog)


def test_review_text_with_bundled_catalog(reviewer):
    config = ReviewConfig(model_id="m1", domain=Domain.COSMETICS, market=Market.US)
    result = reviewer.review_text(SAMPLE_TEXT, config)

    originals = [f.original for f in result.findings]
    assert set(originals) == {"cure", "FDA approved", "treat", "heal", "disease", "miracle"}
    assert result.model_id == "m1"
    assert result.total_issues == 6
    # high 在前
    assert [f.severity for f in result.findings[:2]] == [Severity.HIGH, Severity.HIGH]
    assert result.summary["by_severity"] == {"high": 2, "medium": 3, "low": 1}
    assert result.summary["by_kind"]["lexicon"] == 6


def test_market_filter_drops_us_only_rules(reviewer):
    config = ReviewConfig(model_id="m1", domain=Domain.COSMETICS, market=Market.EU)
    originals = {f.original for f in reviewer.review_text(SAMPLE_TEXT, config).findings}
    assert "FDA approved" not in originals
    assert "treat" not in originals
    assert "cure" in originals


def test_ai_suggestions_are_merged_and_never_certain(reviewer):
    suggestion = AiSuggestionIssue(
        id="ai-1",
        problem="Font too small for the warning statement",
        severity=Severity.HIGH,
        confidence=ConfidenceLevel.CERTAIN,
    )
    config = ReviewConfig(model_id="m1", check_brackets=False)
    result = reviewer.review_text("plain text", config, [suggestion])

    assert result.total_issues == 1
    finding = result.findings[0]
    assert finding.kind == "ai_suggestion"
    assert finding.confidence == ConfidenceLevel.NEEDS_CONFIRMATION
    assert finding.description == "Font too small for the warning statement"


def test_bracket_checks_can_be_disabled(reviewer):
    text = "Net Wt. 340g (12oz"
    assert reviewer.review_text(text, ReviewConfig(model_id="m")).summary["by_kind"]["deterministic"] == 1
    assert reviewer.review_text(text, ReviewConfig(model_id="m", check_brackets=False)).total_issues == 0


def test_review_empty_text(reviewer):
    result = reviewer.review_text("", ReviewConfig(model_id="m"))
    assert result.findings == []
    assert result.summary["total"] == 0


def test_reconcile_returns_review_order(reviewer):
    reference = [SourceField(key="Brand", value="Acme"), SourceField(key="Ingredients", value="Arabica")]
    results, summary = reviewer.reconcile(reference, [[SourceField(key="Brand", value="Acme")]])
    assert [r.field.key for r in results] == ["Ingredients", "Brand"]
    assert summary.error_count == 1


def test_order_findings_is_stable():
    findings = [
        AiSuggestionIssue(id="a", problem="p", severity=Severity.LOW),
        AiSuggestionIssue(id="b", problem="p", severity=Severity.HIGH),
        AiSuggestionIssue(id="c", problem="p", severity=Severity.LOW),
        AiSuggestionIssue(id="d", problem="p", severity=Severity.HIGH),
    ]
    assert [f.id for f in order_findings(findings)] == ["b", "d", "a", "c"]


def test_summarize_findings_counts_every_kind():
    summary = summarize_findings([])
    assert summary["by_kind"] == {"lexicon": 0, "ai_suggestion": 0, "deterministic": 0}
    assert summary["by_severity"] == {"high": 0, "medium": 0, "low": 0}
