"""Conversion of detections into user-facing issues."""

import time

from ..models import (
    Element,
    ElementInfo,
    Issue,
    IssueDetails,
    Position,
    Size,
)
from .base import DetectionResult, Rule

MAX_TEXT_LENGTH = 50
UNNAMED = "Unnamed"


def truncate_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Truncate text to ``limit`` characters, appending an ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def build_element_info(element: Element) -> ElementInfo:
    """Snapshot the display fields of an element."""
    position = None
    if element.has_position:
        position = Position(x=round(element.x), y=round(element.y))
    size = None
    if element.has_size:
        size = Size(width=round(element.width), height=round(element.height))
    return ElementInfo(
        name=element.name or UNNAMED,
        type=element.type,
        position=position,
        size=size,
        text_content=(
            truncate_text(element.characters) if element.characters else None
        ),
    )


def create_issue(rule: Rule, element: Element, result: DetectionResult) -> Issue:
    """Build the issue for a positive detection.

    Severity and category always come from the rule. The expected/actual
    details come from the first evidence entry carrying each field; the
    full evidence list is kept on the issue as well.
    """
    expected = next(
        (e.expected for e in result.evidence if e.expected is not None), None
    )
    actual = next((e.value for e in result.evidence if e.value is not None), None)

    return Issue(
        id=f"issue_{rule.id}_{element.id}_{time.time_ns() // 1_000_000}",
        element_id=element.id,
        category=rule.category,
        severity=rule.severity,
        description=rule.description,
        rule_id=rule.id,
        element_info=build_element_info(element),
        details=IssueDetails(
            expected_value=expected,
            actual_value=actual,
            auto_fixable=rule.fix_function is not None,
        ),
        evidence=tuple(result.evidence),
        confidence=result.confidence,
        suggestions=tuple(result.suggestions),
    )
