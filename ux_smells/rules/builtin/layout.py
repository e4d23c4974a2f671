"""Layout rules."""

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import DetectionResult, Rule, RuleContext, create_basic_rule
from ._helpers import clamp_confidence, element_refs, rectangles_overlap


def detect_overlapping_elements(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag elements whose bounding box intersects a sibling's."""
    if not element.has_geometry:
        return DetectionResult.not_detected()

    overlapping = [
        sibling
        for sibling in context.sibling_elements
        if rectangles_overlap(element, sibling)
    ]
    if not overlapping:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(len(overlapping) / 2),
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description=f"Overlaps {len(overlapping)} element(s)",
                value=element_refs(overlapping),
                severity=(
                    SeverityLevel.HIGH if len(overlapping) > 2 else SeverityLevel.MEDIUM
                ),
            )
        ],
        suggestions=[
            "Reposition the elements to avoid the overlap",
            "Use Auto Layout where available",
            "Check whether the overlap is intentional",
        ],
    )


def layout_rules() -> list[Rule]:
    return [
        create_basic_rule(
            "layout-elements-overlapping",
            "Overlapping elements",
            "Elements overlap unintentionally, causing confusion",
            IssueCategory.LAYOUT,
            SeverityLevel.MEDIUM,
            detect_overlapping_elements,
        ),
    ]
