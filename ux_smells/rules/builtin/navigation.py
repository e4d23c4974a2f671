"""Navigation rules: hierarchy, labelling and form structure."""

import re

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import DetectionResult, Rule, RuleContext, create_basic_rule
from ._helpers import (
    any_name_contains,
    clamp_confidence,
    is_dropdown_element,
    is_form_field_element,
    is_interactive_element,
    is_near_element,
    lower_label,
    lower_name,
)

MAX_FONT_SIZES = 6
MIN_FONT_SIZE_STEP = 2
COMPLEX_FORM_FIELDS = 5

UNCLEAR_TERMS = ("button", "text", "element", "item", "thing", "click here", "read more")
PLACEHOLDER_NAME = re.compile(r"^(btn|txt|el)\d*$")
INDICATOR_KEYWORDS = ("arrow", "chevron", "down", "dropdown", "flecha")
GROUPING_KEYWORDS = ("group", "section", "fieldset", "grupo", "seccion")


def find_hierarchy_problems(text_elements: list[Element]) -> list[str]:
    """Check the document's type scale for too many or too close sizes."""
    problems = []
    sizes = sorted(
        {el.font_size for el in text_elements if el.font_size}, reverse=True
    )

    if len(sizes) > MAX_FONT_SIZES:
        problems.append("too many font sizes")

    if any(
        larger - smaller < MIN_FONT_SIZE_STEP
        for larger, smaller in zip(sizes, sizes[1:])
    ):
        problems.append("minimal differences between sizes")

    return problems


def detect_unclear_hierarchy(element: Element, context: RuleContext) -> DetectionResult:
    if element.type != "TEXT" or not element.font_size:
        return DetectionResult.not_detected()

    problems = find_hierarchy_problems(
        [el for el in context.all_elements if el.type == "TEXT"]
    )
    if not problems:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(len(problems) / 2),
        evidence=[
            Evidence(
                kind=EvidenceKind.PATTERN,
                description=f"Hierarchy problems: {', '.join(problems)}",
                value=problems,
                severity=SeverityLevel.HIGH if len(problems) > 1 else SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Establish a clear type scale",
            "Use progressive font sizes (e.g. 32px, 24px, 18px, 16px)",
            "Apply consistent font weights for each level",
        ],
    )


def has_unclear_label(element: Element) -> bool:
    label = lower_label(element)
    return (
        any(term in label for term in UNCLEAR_TERMS)
        or len(label) < 3
        or PLACEHOLDER_NAME.match(label) is not None
    )


def detect_unclear_labels(element: Element, context: RuleContext) -> DetectionResult:
    if not is_interactive_element(element) and element.type != "TEXT":
        return DetectionResult.not_detected()
    if not has_unclear_label(element):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.6,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="Non-descriptive label detected",
                value=element.name or element.characters or "No text",
                severity=SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Use descriptive, specific labels",
            'Avoid generic terms such as "Button" or "Text"',
            "Describe the action the user will perform",
        ],
    )


def detect_missing_dropdown_indicator(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_dropdown_element(element):
        return DetectionResult.not_detected()

    name = lower_name(element)
    if any(keyword in name for keyword in INDICATOR_KEYWORDS):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.8,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="Missing indicator",
                value="No indicator",
                expected="Clearly visible down arrow icon",
                severity=SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Add a down arrow icon on the right side",
            "Use the same indicator on every dropdown",
            "Give the indicator enough contrast",
            "Consider hover and focus states for the indicator",
        ],
    )


def detect_unclear_required_field(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag fields named as required with no asterisk/required text nearby."""
    if not is_form_field_element(element):
        return DetectionResult.not_detected()

    name = lower_name(element)
    if "required" not in name and "obligatorio" not in name:
        return DetectionResult.not_detected()

    has_indication = any(
        el.type == "TEXT"
        and is_near_element(element, el)
        and (
            "*" in (el.characters or "")
            or "required" in lower_name(el)
            or "asterisk" in lower_name(el)
        )
        for el in context.sibling_elements
    )
    if has_indication:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.7,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="Required field without a visual indicator",
                value="missing_required_indicator",
                expected='Asterisk (*) or "Required" text',
                severity=SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Add an asterisk (*) next to the field label",
            "Use a consistent color for required fields",
            "Explain the marker at the top of the form",
            "Mark optional fields instead if most fields are required",
        ],
    )


def detect_missing_form_grouping(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag fields of forms with five or more fields and no grouping layers."""
    if not is_form_field_element(element):
        return DetectionResult.not_detected()

    field_count = sum(1 for el in context.all_elements if is_form_field_element(el))
    if field_count < COMPLEX_FORM_FIELDS:
        return DetectionResult.not_detected()
    if any_name_contains(context.all_elements, GROUPING_KEYWORDS):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.5,
        evidence=[
            Evidence(
                kind=EvidenceKind.PATTERN,
                description=f"{field_count} fields without clear grouping",
                value=field_count,
                expected="Visual grouping by sections",
                severity=SeverityLevel.LOW,
            )
        ],
        suggestions=[
            "Group related fields visually",
            "Use section titles for groups of fields",
            "Apply consistent spacing between groups",
            "Consider fieldsets or visual containers",
        ],
    )


def navigation_rules() -> list[Rule]:
    return [
        create_basic_rule(
            "navigation-hierarchy-unclear",
            "Unclear visual hierarchy",
            "Elements do not follow a clear visual hierarchy, making navigation harder",
            IssueCategory.NAVIGATION,
            SeverityLevel.HIGH,
            detect_unclear_hierarchy,
        ),
        create_basic_rule(
            "navigation-labels-unclear",
            "Non-descriptive labels",
            "Elements have names or labels that do not clearly describe their purpose",
            IssueCategory.NAVIGATION,
            SeverityLevel.MEDIUM,
            detect_unclear_labels,
        ),
        create_basic_rule(
            "forms-dropdown-indicators-missing",
            "Dropdowns without visual indicators",
            "Dropdown menus have no clear indicator of their behavior",
            IssueCategory.NAVIGATION,
            SeverityLevel.MEDIUM,
            detect_missing_dropdown_indicator,
        ),
        create_basic_rule(
            "forms-required-fields-unclear",
            "Required fields without clear indication",
            "Mandatory fields are not clearly marked",
            IssueCategory.NAVIGATION,
            SeverityLevel.MEDIUM,
            detect_unclear_required_field,
        ),
        create_basic_rule(
            "forms-logical-grouping-missing",
            "Forms without logical grouping",
            "Form fields are not grouped logically",
            IssueCategory.NAVIGATION,
            SeverityLevel.LOW,
            detect_missing_form_grouping,
        ),
    ]
