"""
核对结果排序与统计测试
"""
from collections import Counter

from packverify.core.field_reconciler import FieldReconciler
from packverify.core.reconciliation_aggregator import filter_differences, sort_for_review, summarize
from packverify.models.fields import SourceField


def field(key, value):
    return SourceField(key=key, value=value)


REFERENCE = [
    field("Brand", "Acme"),                  # match
    field("Net Weight", "340g (12oz)"),      # warning
    field("Ingredients", "Arabica"),         # error (not found)
    field("Origin", "Colombia"),             # match
    field("Roast", "Dark"),                  # error
    field("Flavor", "Chocolate notes"),      # warning
]
DOCUMENT = [
    field("Brand", "ACME"),
    field("Net Weight", "340g"),
    field("Origin", " colombia "),
    field("Roast", "Medium"),
    field("Flavor", "chocolate"),
]


def _results():
    return FieldReconciler().reconcile(REFERENCE, [DOCUMENT])


def test_sort_groups_error_warning_match():
    ordered = sort_for_review(_results())
    assert [r.field.key for r in ordered] == [
        "Ingredients", "Roast",
        "Net Weight", "Flavor",
        "Brand", "Origin",
    ]


def test_sort_is_a_permutation():
    results = _results()
    ordered = sort_for_review(results)
    assert Counter(r.field.key for r in ordered) == Counter(r.field.key for r in results)
    assert len(ordered) == len(results)


def test_sort_does_not_mutate_input():
    results = _results()
    keys = [r.field.key for r in results]
    sort_for_review(results)
    assert [r.field.key for r in results] == keys


def test_sort_empty():
    assert sort_for_review([]) == []


def test_summary_counts():
    summary = summarize(_results())
    assert summary.error_count == 2
    assert summary.warning_count == 2
    assert summary.match_count == 2
    assert summary.total_count == 6
    assert summary.all_pass is False


def test_all_pass():
    results = FieldReconciler().reconcile([field("Brand", "Acme")], [[field("Brand", "acme")]])
    summary = summarize(results)
    assert summary.all_pass is True
    assert summary.match_count == 1


def test_pending_counts_as_match_bucket():
    results = FieldReconciler().reconcile([field("Brand", "Acme")], [[]])
    summary = summarize(results)
    assert summary.match_count == 1
    assert summary.all_pass is True


def test_summary_of_nothing():
    summary = summarize([])
    assert summary.total_count == 0
    assert summary.all_pass is True


def test_filter_differences():
    keys = [r.field.key for r in filter_differences(_results())]
    assert keys == ["Net Weight", "Ingredients", "Roast", "Flavor"]
