"""Efficiency rules."""

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import DetectionResult, Rule, RuleContext, create_basic_rule
from ._helpers import clamp_confidence, element_refs

# Width/height difference under which two elements count as the same size
SIZE_TOLERANCE = 10
MAX_SIMILAR_ELEMENTS = 2


def find_similar_elements(element: Element, elements: list[Element]) -> list[Element]:
    """Other elements of the same type and roughly the same size."""
    if not element.has_size:
        return []
    return [
        el
        for el in elements
        if el.id != element.id
        and el.type == element.type
        and el.has_size
        and abs(el.width - element.width) < SIZE_TOLERANCE
        and abs(el.height - element.height) < SIZE_TOLERANCE
    ]


def detect_redundant_elements(
    element: Element, context: RuleContext
) -> DetectionResult:
    similar = find_similar_elements(element, context.all_elements)
    if len(similar) <= MAX_SIMILAR_ELEMENTS:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence((len(similar) - MAX_SIMILAR_ELEMENTS) / 3),
        evidence=[
            Evidence(
                kind=EvidenceKind.PATTERN,
                description=f"{len(similar)} similar elements found",
                value=element_refs(similar),
                severity=SeverityLevel.MEDIUM if len(similar) > 4 else SeverityLevel.LOW,
            )
        ],
        suggestions=[
            "Consider merging similar elements",
            "Create reusable components",
            "Simplify the interface by removing redundancy",
        ],
    )


def efficiency_rules() -> list[Rule]:
    return [
        create_basic_rule(
            "efficiency-redundant-elements",
            "Redundant elements",
            "Duplicate or redundant elements complicate the interface",
            IssueCategory.EFFICIENCY,
            SeverityLevel.LOW,
            detect_redundant_elements,
        ),
    ]
