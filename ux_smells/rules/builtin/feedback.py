"""Feedback rules: interaction, loading and error states."""

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import DetectionResult, Rule, RuleContext, create_basic_rule
from ._helpers import (
    any_name_contains,
    is_form_element,
    is_interactive_element,
    is_submit_button,
)

STATE_KEYWORDS = ("hover", "active", "disabled", "pressed", "focus")
LOADING_KEYWORDS = ("loading", "spinner", "progress", "wait")
ERROR_KEYWORDS = ("error", "invalid", "required", "warning", "alert")


def detect_missing_interaction_states(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag interactive elements when no layer of the document names a state."""
    if not is_interactive_element(element):
        return DetectionResult.not_detected()
    if any_name_contains(context.all_elements, STATE_KEYWORDS):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.7,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="No interaction states found",
                value="missing_states",
                severity=SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Create hover, active and disabled states",
            "Use component variants for the different states",
            "Give clear visual feedback on interaction",
        ],
    )


def detect_missing_loading_feedback(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_submit_button(element):
        return DetectionResult.not_detected()
    if any_name_contains(context.all_elements, LOADING_KEYWORDS):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.5,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="Submit button without a loading indicator",
                value="missing_loading_state",
                severity=SeverityLevel.LOW,
            )
        ],
        suggestions=[
            "Add a spinner or loading indicator",
            "Disable the button while the action runs",
            "Show progress when possible",
        ],
    )


def detect_missing_form_error_states(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_form_element(element):
        return DetectionResult.not_detected()
    if any_name_contains(context.all_elements, ERROR_KEYWORDS):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.8,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="No error states found for the form",
                value="missing_error_states",
                severity=SeverityLevel.HIGH,
            )
        ],
        suggestions=[
            "Create visual states for validation errors",
            "Use colors, icons and clear messages for errors",
            "Place error messages next to the field at fault",
            "Provide real-time validation hints",
        ],
    )


def feedback_rules() -> list[Rule]:
    return [
        create_basic_rule(
            "feedback-interaction-states-missing",
            "Missing interaction states",
            "Interactive elements show no clear states (hover, active, disabled)",
            IssueCategory.FEEDBACK,
            SeverityLevel.MEDIUM,
            detect_missing_interaction_states,
        ),
        create_basic_rule(
            "feedback-loading-missing",
            "Missing loading indicators",
            "There are no visual indicators for processes that take time",
            IssueCategory.FEEDBACK,
            SeverityLevel.LOW,
            detect_missing_loading_feedback,
        ),
        create_basic_rule(
            "forms-error-states-missing",
            "Missing form error states",
            "Form fields have no clearly defined error states",
            IssueCategory.FEEDBACK,
            SeverityLevel.HIGH,
            detect_missing_form_error_states,
        ),
    ]
