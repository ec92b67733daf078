"""
括号配对检查测试
"""
from packverify.core.deterministic_checker import check_brackets
from packverify.models.issues import Severity


def test_balanced_text_has_no_issues():
    assert check_brackets("Net Wt. 340g (12oz) [approx.] {x}") == []


def test_full_width_brackets_are_paired():
    assert check_brackets("净含量（500g）【新品】《说明》「提示」") == []


def test_unclosed_opening_bracket():
    issues = check_brackets("Net Wt. 340g (12oz")
    assert len(issues) == 1
    assert issues[0].check_type == "bracket_mismatch"
    assert issues[0].position == 13
    assert issues[0].severity == Severity.MEDIUM
    assert "(" in issues[0].description


def test_stray_closing_bracket():
    issues = check_brackets("340g 12oz)")
    assert [i.position for i in issues] == [9]


def test_mixed_width_pair_is_a_mismatch():
    issues = check_brackets("净含量（500g)")
    # 半角右括号不能闭合全角左括号
    assert sorted(i.position for i in issues) == [3, 8]


def test_issues_sorted_by_position():
    issues = check_brackets(") text (")
    assert [i.position for i in issues] == [0, 7]


def test_empty_text():
    assert check_brackets("") == []


def test_common_interface():
    issue = check_brackets("(")[0]
    assert issue.kind == "deterministic"
    assert issue.location == issue.context == "("
