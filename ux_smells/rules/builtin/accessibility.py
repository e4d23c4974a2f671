"""Accessibility rules: contrast, text size, touch targets and form fields."""

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import (
    DetectionResult,
    ElementChange,
    FixResult,
    Rule,
    RuleContext,
    create_basic_rule,
)
from ._helpers import (
    DATE_PATTERN,
    any_name_contains,
    clamp_confidence,
    is_checkbox_or_radio_element,
    is_datepicker_element,
    is_element_inside,
    is_input_element,
    is_interactive_element,
    is_label_well_positioned,
    is_near_element,
)

MIN_FONT_SIZE = 16
MIN_TOUCH_TARGET = 44
MIN_INPUT_WIDTH = 120
MIN_INPUT_HEIGHT = 32
MAX_INPUT_HEIGHT = 60
MIN_CHECKBOX_SIZE = 20
# Padding assumed around a control sitting inside a frame (8px per side)
CONTAINER_PADDING = 16

GENERIC_LABELS = ("text", "label", "campo")


def detect_insufficient_contrast(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag text whose first fill is a light grey.

    This is an approximation: no background is sampled, so the check only
    catches the common "light grey on white" case.
    """
    if element.type != "TEXT" or not element.fills:
        return DetectionResult.not_detected()

    fill = element.fills[0]
    if not fill.is_solid:
        return DetectionResult.not_detected()

    color = fill.color
    if not (color.r > 0.6 and color.g > 0.6 and color.b > 0.6):
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.8,
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description="Light grey text color detected",
                value={"r": color.r, "g": color.g, "b": color.b},
                expected="Higher contrast color",
                severity=SeverityLevel.HIGH,
            )
        ],
        suggestions=[
            "Use a darker text color",
            "Check the contrast with a tool such as WebAIM",
            "Keep a minimum ratio of 4.5:1 for body text",
        ],
    )


def detect_small_font_size(element: Element, context: RuleContext) -> DetectionResult:
    if element.type != "TEXT" or not element.font_size:
        return DetectionResult.not_detected()

    font_size = element.font_size
    if font_size >= MIN_FONT_SIZE:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence((MIN_FONT_SIZE - font_size) / MIN_FONT_SIZE),
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description=f"Font size: {font_size}px",
                value=font_size,
                expected=MIN_FONT_SIZE,
                severity=SeverityLevel.HIGH if font_size < 12 else SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            f"Increase the font size to at least {MIN_FONT_SIZE}px",
            "Consider legibility on mobile devices",
            "Make sure the text is readable for users with low vision",
        ],
    )


async def fix_small_font_size(element: Element, context: RuleContext) -> FixResult:
    """Propose raising the font size to the minimum."""
    if element.font_size is None or element.font_size >= MIN_FONT_SIZE:
        return FixResult(success=False, warnings=["Font size is already adequate"])
    return FixResult(
        success=True,
        changes=[
            ElementChange(
                property="fontSize",
                old_value=element.font_size,
                new_value=MIN_FONT_SIZE,
                reason=f"Minimum readable font size is {MIN_FONT_SIZE}px",
            )
        ],
    )


def detect_small_touch_target(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_interactive_element(element) or not element.has_size:
        return DetectionResult.not_detected()

    width, height = element.width, element.height
    if width >= MIN_TOUCH_TARGET and height >= MIN_TOUCH_TARGET:
        return DetectionResult.not_detected()

    min_dimension = min(width, height)
    return DetectionResult(
        detected=True,
        confidence=clamp_confidence((MIN_TOUCH_TARGET - min_dimension) / MIN_TOUCH_TARGET),
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description=f"Current size: {width}x{height}px",
                value={"width": width, "height": height},
                expected={"width": MIN_TOUCH_TARGET, "height": MIN_TOUCH_TARGET},
                severity=(
                    SeverityLevel.HIGH if min_dimension < 32 else SeverityLevel.MEDIUM
                ),
            )
        ],
        suggestions=[
            f"Increase the size to at least {MIN_TOUCH_TARGET}x{MIN_TOUCH_TARGET}px",
            "Add padding to enlarge the touch area",
            "Check usability on mobile devices",
        ],
    )


async def fix_small_touch_target(element: Element, context: RuleContext) -> FixResult:
    """Propose growing each short side to the minimum touch target."""
    if not element.has_size:
        return FixResult(success=False, warnings=["Element has no size"])

    changes = [
        ElementChange(
            property=prop,
            old_value=current,
            new_value=MIN_TOUCH_TARGET,
            reason=f"Touch targets need at least {MIN_TOUCH_TARGET}px",
        )
        for prop, current in (("width", element.width), ("height", element.height))
        if current < MIN_TOUCH_TARGET
    ]
    if not changes:
        return FixResult(success=False, warnings=["Touch target is already adequate"])
    return FixResult(success=True, changes=changes)


def detect_missing_input_label(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag inputs without a nearby, descriptive, well-placed text label."""
    if not is_input_element(element):
        return DetectionResult.not_detected()

    nearby_texts = [
        el
        for el in context.sibling_elements
        if el.type == "TEXT" and is_near_element(element, el)
    ]
    has_label = bool(nearby_texts)
    label_text = ""
    if has_label:
        closest = nearby_texts[0]
        label_text = closest.characters or closest.name
        is_descriptive = (
            len(label_text) > 2 and label_text.lower() not in GENERIC_LABELS
        )
        if is_descriptive and is_label_well_positioned(element, closest):
            return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=0.6 if has_label else 0.9,
        evidence=[
            Evidence(
                kind=EvidenceKind.VIOLATION,
                description="Inadequate label" if has_label else "Missing label",
                value=label_text or "No label",
                expected="Descriptive, well positioned label",
                severity=SeverityLevel.HIGH,
            )
        ],
        suggestions=[
            "Add a descriptive label above or to the left of the field",
            "Use placeholder text as a complement to the label, not a replacement",
            "Make sure the label is semantically associated with the input",
            'Avoid generic labels such as "Field" or "Input"',
        ],
    )


def detect_inadequate_input_size(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_input_element(element):
        return DetectionResult.not_detected()

    width = element.width or 0
    height = element.height or 0
    is_too_small = width < MIN_INPUT_WIDTH or height < MIN_INPUT_HEIGHT
    is_too_tall = height > MAX_INPUT_HEIGHT

    if is_too_small:
        confidence = max(
            (MIN_INPUT_WIDTH - width) / MIN_INPUT_WIDTH,
            (MIN_INPUT_HEIGHT - height) / MIN_INPUT_HEIGHT,
        )
    elif is_too_tall:
        confidence = (height - MAX_INPUT_HEIGHT) / height
    else:
        return DetectionResult.not_detected()

    recommended_width = max(MIN_INPUT_WIDTH, width)
    recommended_height = max(MIN_INPUT_HEIGHT, min(MAX_INPUT_HEIGHT, height))
    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(confidence),
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description=f"Current size: {width}x{height}px",
                value={"width": width, "height": height},
                expected={"width": recommended_width, "height": recommended_height},
                severity=SeverityLevel.MEDIUM if is_too_small else SeverityLevel.LOW,
            )
        ],
        suggestions=[
            f"Resize the field to at least {recommended_width}x{recommended_height}px",
            "Consider the expected content (email, phone number, ...)",
            "Keep a large enough touch area for mobile devices",
            "Keep proportions consistent with the other fields of the form",
        ],
    )


def detect_inaccessible_datepicker(
    element: Element, context: RuleContext
) -> DetectionResult:
    if not is_datepicker_element(element):
        return DetectionResult.not_detected()

    problems = []
    has_text_input = any(
        is_input_element(el) and is_near_element(element, el)
        for el in context.sibling_elements
    )
    if not has_text_input:
        problems.append("missing_text_input")

    if "keyboard" not in element.name.lower() and not any_name_contains(
        context.all_elements, ("keyboard",)
    ):
        problems.append("keyboard_navigation")

    has_date_format = any(
        el.type == "TEXT" and el.characters and DATE_PATTERN.search(el.characters)
        for el in context.all_elements
    )
    if not has_date_format:
        problems.append("unclear_date_format")

    if not problems:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(len(problems) / 3),
        evidence=[
            Evidence(
                kind=EvidenceKind.PATTERN,
                description=f"Accessibility problems: {', '.join(problems)}",
                value=problems,
                severity=SeverityLevel.HIGH if len(problems) > 2 else SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            "Provide a text input alternative for dates",
            "Use a clear, consistent date format (DD/MM/YYYY)",
            "Support keyboard navigation inside the calendar",
            "Add appropriate labels and descriptions",
            "Consider local date formats",
        ],
    )


def detect_small_checkbox_radio(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Flag selection controls smaller than 20px or with a touch area under 44px."""
    if not is_checkbox_or_radio_element(element) or not element.has_size:
        return DetectionResult.not_detected()

    size = min(element.width, element.height)
    effective_size = size
    if any(
        el.type == "FRAME" and is_element_inside(element, el)
        for el in context.sibling_elements
    ):
        effective_size += CONTAINER_PADDING

    if size >= MIN_CHECKBOX_SIZE and effective_size >= MIN_TOUCH_TARGET:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(
            (MIN_TOUCH_TARGET - effective_size) / MIN_TOUCH_TARGET
        ),
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description=f"Element size: {size}px, touch area: {effective_size}px",
                value={"element_size": size, "touch_area": effective_size},
                expected={
                    "element_size": MIN_CHECKBOX_SIZE,
                    "touch_area": MIN_TOUCH_TARGET,
                },
                severity=SeverityLevel.HIGH if size < 16 else SeverityLevel.MEDIUM,
            )
        ],
        suggestions=[
            f"Increase the control to at least {MIN_CHECKBOX_SIZE}px",
            f"Keep a {MIN_TOUCH_TARGET}px touch area including padding",
            "Leave enough space between options of a multiple choice",
            "Consider making the whole row clickable",
        ],
    )


def accessibility_rules() -> list[Rule]:
    """Fresh instances of the accessibility rules, in registration order."""
    return [
        create_basic_rule(
            "accessibility-contrast-insufficient",
            "Insufficient color contrast",
            "The contrast between text and background does not meet WCAG 2.1 AA",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.HIGH,
            detect_insufficient_contrast,
        ),
        create_basic_rule(
            "accessibility-font-size-small",
            "Font size too small",
            "The text is too small to be read comfortably",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.MEDIUM,
            detect_small_font_size,
            fix_small_font_size,
        ),
        create_basic_rule(
            "accessibility-touch-target-small",
            "Touch target too small",
            "Interactive elements should be at least 44x44px to be accessible",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.HIGH,
            detect_small_touch_target,
            fix_small_touch_target,
        ),
        create_basic_rule(
            "forms-input-label-missing",
            "Input fields without clear labels",
            "Input fields have no descriptive label or it is poorly positioned",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.HIGH,
            detect_missing_input_label,
        ),
        create_basic_rule(
            "forms-input-size-inadequate",
            "Input fields with inadequate size",
            "Input fields are too small or not suited to their expected content",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.MEDIUM,
            detect_inadequate_input_size,
        ),
        create_basic_rule(
            "forms-datepicker-accessibility",
            "Datepickers with accessibility problems",
            "Date pickers do not follow accessibility best practices",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.HIGH,
            detect_inaccessible_datepicker,
        ),
        create_basic_rule(
            "forms-checkbox-radio-size-small",
            "Checkboxes and radio buttons too small",
            "Selection controls are too small for touch interaction",
            IssueCategory.ACCESSIBILITY,
            SeverityLevel.MEDIUM,
            detect_small_checkbox_radio,
        ),
    ]
