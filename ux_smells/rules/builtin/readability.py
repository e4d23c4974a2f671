"""Readability rules for text elements."""

from ...models import Element, Evidence, EvidenceKind, IssueCategory, SeverityLevel
from ..base import DetectionResult, Rule, RuleContext, create_basic_rule
from ._helpers import clamp_confidence

MIN_LINE_HEIGHT_RATIO = 1.2
MAX_LINE_HEIGHT_RATIO = 2.0
IDEAL_LINE_HEIGHT_RATIO = 1.5

MAX_CHARS_PER_LINE = 75
# Average glyph width as a share of the font size
AVERAGE_CHAR_WIDTH_RATIO = 0.6


def detect_poor_line_height(element: Element, context: RuleContext) -> DetectionResult:
    """Flag line-height/font-size ratios outside [1.2, 2.0].

    Auto line heights have no fixed value and are never flagged.
    """
    if element.type != "TEXT" or not element.font_size or element.line_height is None:
        return DetectionResult.not_detected()

    line_height = element.line_height.in_pixels(element.font_size)
    if not line_height:
        return DetectionResult.not_detected()

    ratio = line_height / element.font_size
    if MIN_LINE_HEIGHT_RATIO <= ratio <= MAX_LINE_HEIGHT_RATIO:
        return DetectionResult.not_detected()

    too_tight = ratio < MIN_LINE_HEIGHT_RATIO
    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(
            abs(ratio - IDEAL_LINE_HEIGHT_RATIO) / IDEAL_LINE_HEIGHT_RATIO
        ),
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description=f"Line height ratio: {ratio:.2f}",
                value=ratio,
                expected=IDEAL_LINE_HEIGHT_RATIO,
                severity=(
                    SeverityLevel.HIGH
                    if ratio < 1.1 or ratio > 2.5
                    else SeverityLevel.MEDIUM
                ),
            )
        ],
        suggestions=[
            (
                "Increase the line spacing to improve legibility"
                if too_tight
                else "Reduce the excessive line spacing"
            ),
            f"Start from a ratio of {IDEAL_LINE_HEIGHT_RATIO}",
            "Take line length into account when adjusting the spacing",
        ],
    )


def detect_excessive_line_length(
    element: Element, context: RuleContext
) -> DetectionResult:
    """Estimate characters per line from the box width and flag more than 75."""
    if element.type != "TEXT" or not element.width or not element.font_size:
        return DetectionResult.not_detected()

    chars_per_line = element.width / (element.font_size * AVERAGE_CHAR_WIDTH_RATIO)
    if chars_per_line <= MAX_CHARS_PER_LINE:
        return DetectionResult.not_detected()

    return DetectionResult(
        detected=True,
        confidence=clamp_confidence(
            (chars_per_line - MAX_CHARS_PER_LINE) / MAX_CHARS_PER_LINE
        ),
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description=f"About {round(chars_per_line)} characters per line",
                value=chars_per_line,
                expected=MAX_CHARS_PER_LINE,
                severity=(
                    SeverityLevel.HIGH if chars_per_line > 100 else SeverityLevel.MEDIUM
                ),
            )
        ],
        suggestions=[
            "Reduce the width of the text container",
            "Use several columns for long texts",
            "Keep between 45 and 75 characters per line",
        ],
    )


def readability_rules() -> list[Rule]:
    return [
        create_basic_rule(
            "readability-line-height-poor",
            "Inadequate line spacing",
            "Line spacing is too small or too large, hurting legibility",
            IssueCategory.READABILITY,
            SeverityLevel.MEDIUM,
            detect_poor_line_height,
        ),
        create_basic_rule(
            "readability-line-length-excessive",
            "Excessive line length",
            "Lines of text are too long, making reading harder",
            IssueCategory.READABILITY,
            SeverityLevel.MEDIUM,
            detect_excessive_line_length,
        ),
    ]
