"""
确定性检查 - 括号配对
"""
from typing import List, Tuple

from loguru import logger

from ..models.issues import DeterministicIssue, Severity
from .lexicon_matcher import get_context

BRACKET_PAIRS = {
    ")": "(",
    "]": "[",
    "}": "{",
    "）": "（",
    "】": "【",
    "」": "「",
    "》": "《",
}
OPENING = set(BRACKET_PAIRS.values())


def check_brackets(text: str, context_size: int = 30) -> List[DeterministicIssue]:
    """
    检查括号是否配对

    多余的右括号在出现处报告；扫描结束仍未闭合的左括号在其位置报告。

    Args:
        text: OCR 文本
        context_size: 上下文窗口大小

    Returns:
        按位置排序的问题列表
    """
    if not text:
        return []

    stack: List[Tuple[str, int]] = []
    problems: List[Tuple[int, str]] = []

    for position, char in enumerate(text):
        if char in OPENING:
            stack.append((char, position))
        elif char in BRACKET_PAIRS:
            expected = BRACKET_PAIRS[char]
            if stack and stack[-1][0] == expected:
                stack.pop()
            else:
                problems.append((position, f"右括号 “{char}” 没有对应的 “{expected}”"))

    closing_for = {v: k for k, v in BRACKET_PAIRS.items()}
    for char, position in stack:
        problems.append((position, f"左括号 “{char}” 没有闭合的 “{closing_for[char]}”"))

    problems.sort(key=lambda p: p[0])

    issues = [
        DeterministicIssue(
            id=f"det-bracket-{position}",
            check_type="bracket_mismatch",
            description=description,
            position=position,
            context=get_context(text, position, 1, context_size),
            severity=Severity.MEDIUM
        )
        for position, description in problems
    ]

    if issues:
        logger.debug(f"括号检查: 发现 {len(issues)} 处不配对")
    return issues
