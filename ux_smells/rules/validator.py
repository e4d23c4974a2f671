"""
Structural and behavioral validation of rules before registration.

The validator is the only place a rule's detection function runs before
production use: it is exercised once against a probe element, and any
exception it raises becomes a validation error.
"""

import inspect
import re
from dataclasses import dataclass, field
from typing import Any

from ..models import Element, IssueCategory, SeverityLevel
from ..smells_logging import LogCategory, get_category_logger
from .advanced import RuleSet
from .base import Rule, RuleConfiguration, RuleContext

logger = get_category_logger(LogCategory.VALIDATOR)

RULE_ID_PATTERN = re.compile(r"^[a-z0-9-]+$")

PROBE_ELEMENT = Element(id="test", name="Test Element", type="RECTANGLE")


@dataclass
class ValidationResult:
    """Outcome of validating a rule or rule set."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class RuleValidator:
    """Validates rules and rule sets.

    All checks run; every failure is accumulated rather than stopping at
    the first one.
    """

    def validate_rule(self, rule: Rule) -> ValidationResult:
        """Validate a rule.

        Args:
            rule: Rule to validate.

        Returns:
            ValidationResult with the accumulated errors and warnings.
        """
        errors: list[str] = []
        warnings: list[str] = []

        if _is_blank(rule.id):
            errors.append("Rule ID is required")
        if _is_blank(rule.name):
            errors.append("Rule name is required")
        if _is_blank(rule.description):
            errors.append("Rule description is required")
        if rule.detection_function is None:
            errors.append("Detection function is required")

        if isinstance(rule.id, str) and rule.id and not RULE_ID_PATTERN.match(rule.id):
            errors.append(
                "Rule ID must contain only lowercase letters, numbers, and hyphens"
            )

        if not isinstance(rule.category, IssueCategory):
            errors.append(f"Unknown rule category: {rule.category}")
        if not isinstance(rule.severity, SeverityLevel):
            errors.append(f"Unknown rule severity: {rule.severity}")

        if rule.detection_function is not None:
            self._probe_detection(rule, errors, warnings)

        if rule.fix_function is not None and not inspect.iscoroutinefunction(
            rule.fix_function
        ):
            warnings.append("Fix function should be a coroutine function")

        if errors:
            logger.debug(f"Rule {rule.id} failed validation: {errors}")

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def _probe_detection(
        self, rule: Rule, errors: list[str], warnings: list[str]
    ) -> None:
        """Run the detection function once against the probe element."""
        context = RuleContext(
            sibling_elements=[],
            all_elements=[PROBE_ELEMENT],
            rule_config=RuleConfiguration(),
        )
        try:
            result = rule.detection_function(PROBE_ELEMENT, context)
        except Exception as e:
            errors.append(f"Detection function throws error: {e}")
            return

        detected = getattr(result, "detected", None)
        confidence = getattr(result, "confidence", None)

        if not isinstance(detected, bool):
            errors.append(
                'Detection function must return a boolean "detected" property'
            )
        if not _is_number(confidence) or not 0 <= confidence <= 1:
            errors.append(
                "Detection function must return a confidence value between 0 and 1"
            )
        elif detected is False and confidence != 0:
            warnings.append(
                "Detection function returned a non-zero confidence without a detection"
            )

    def validate_rule_set(self, rule_set: RuleSet) -> ValidationResult:
        """Validate a rule set and its groups."""
        errors: list[str] = []
        warnings: list[str] = []

        if _is_blank(rule_set.id):
            errors.append("RuleSet ID is required")
        if _is_blank(rule_set.name):
            errors.append("RuleSet name is required")
        if not rule_set.groups:
            errors.append("RuleSet must contain at least one group")

        for index, group in enumerate(rule_set.groups):
            if _is_blank(group.id):
                errors.append(f"Group {index} is missing ID")
            if not group.rules:
                warnings.append(f"Group {group.id} contains no rules")

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
