"""Consistency rules: button styling and color palette size."""

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import DetectionResult, Rule, RuleContext, create_basic_rule
from ._helpers import clamp_confidence, is_button_element

MAX_BUTTON_SIZES = 3
MAX_PALETTE_COLORS = 12


def find_button_inconsistencies(other_buttons: list[Element]) -> list[str]:
    """Describe how the other buttons of the document disagree in style."""
    inconsistencies = []

    sizes = {(button.width, button.height) for button in other_buttons}
    if len(sizes) > MAX_BUTTON_SIZES:
        inconsistencies.append("varied sizes")

    filled = [button for button in other_buttons if button.fills]
    if filled and len(filled) != len(other_buttons):
        inconsistencies.append("inconsistent colors")

    return inconsistencies


def detect_mixed_button_styles(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_button_element(element):
        return DetectionResult.not_detected()

    other_buttons = [
        el
        for el in context.all_elements
        if el.id != element.id and is_button_element(el)
    ]
    if not other_buttons:
        return DetectionResult.not_detected()

    inconsistencies = find_button_inconsistencies(other_buttons)
    if not inconsistencies:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(len(inconsistencies) / 3),
        evidence=[
            Evidence(
                kind=EvidenceKind.PATTERN,
                description=f"Inconsistencies detected: {', '.join(inconsistencies)}",
                value=inconsistencies,
                severity=(
                    SeverityLevel.HIGH
                    if len(inconsistencies) > 2
                    else SeverityLevel.MEDIUM
                ),
            )
        ],
        suggestions=[
            "Create a consistent button system",
            "Define a clear hierarchy (primary, secondary, tertiary)",
            "Use reusable components to keep buttons consistent",
        ],
    )


def count_unique_solid_colors(elements: list[Element]) -> int:
    """Count distinct solid fill colors (compared as 0-255 RGB)."""
    colors = {
        fill.color.to_rgb255()
        for el in elements
        for fill in el.fills
        if fill.is_solid
    }
    return len(colors)


def detect_non_standard_colors(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag filled elements of documents using more than 12 solid colors."""
    if not element.fills:
        return DetectionResult.not_detected()

    unique_colors = count_unique_solid_colors(context.all_elements)
    if unique_colors <= MAX_PALETTE_COLORS:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(
            (unique_colors - MAX_PALETTE_COLORS) / MAX_PALETTE_COLORS
        ),
        evidence=[
            Evidence(
                kind=EvidenceKind.PATTERN,
                description=f"{unique_colors} unique colors detected",
                value=unique_colors,
                expected="At most 8-12 colors in the palette",
                severity=SeverityLevel.HIGH if unique_colors > 20 else SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Define a limited color palette",
            "Use color variables or design tokens",
            "Merge similar colors",
        ],
    )


def consistency_rules() -> list[Rule]:
    return [
        create_basic_rule(
            "consistency-button-styles-mixed",
            "Inconsistent button styles",
            "Buttons use different styles without a clear hierarchy",
            IssueCategory.CONSISTENCY,
            SeverityLevel.MEDIUM,
            detect_mixed_button_styles,
        ),
        create_basic_rule(
            "consistency-colors-non-standard",
            "Non-standard colors",
            "Too many different colors are used without a defined color system",
            IssueCategory.CONSISTENCY,
            SeverityLevel.MEDIUM,
            detect_non_standard_colors,
        ),
    ]
