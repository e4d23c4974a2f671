"""Built-in UX smell rules.

Rules are grouped by category, one module per category. Each module
exposes a factory returning fresh rule instances so that registries never
share mutable rule state.
"""

from ..base import Rule
from .accessibility import accessibility_rules
from .consistency import consistency_rules
from .efficiency import efficiency_rules
from .feedback import feedback_rules
from .layout import layout_rules
from .navigation import navigation_rules
from .readability import readability_rules


def default_rules() -> list[Rule]:
    """All built-in rules in registration order."""
    return [
        *accessibility_rules(),
        *layout_rules(),
        *readability_rules(),
        *consistency_rules(),
        *navigation_rules(),
        *feedback_rules(),
        *efficiency_rules(),
    ]


__all__ = [
    "accessibility_rules",
    "consistency_rules",
    "default_rules",
    "efficiency_rules",
    "feedback_rules",
    "layout_rules",
    "navigation_rules",
    "readability_rules",
]
