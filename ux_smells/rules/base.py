"""
Base classes and types for the UX smell rule engine.

This module provides the plugin contract every detection rule follows:
the detection result, the per-element context, rule configuration and
metadata, and the fix result returned by optional auto-fix functions.
"""

import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..models import (
    Element,
    Evidence,
    IssueCategory,
    SeverityLevel,
    Value,
    from_value,
    to_value,
)


@dataclass
class DetectionResult:
    """Outcome of running one rule against one element.

    By convention ``confidence`` is 0 whenever ``detected`` is False.
    """

    detected: bool
    confidence: float = 0.0
    evidence: list[Evidence] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @classmethod
    def not_detected(cls) -> "DetectionResult":
        """Result for an element the rule has nothing to say about."""
        return cls(detected=False, confidence=0.0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "detected": self.detected,
            "confidence": self.confidence,
            "evidence": [e.to_dict() for e in self.evidence],
            "suggestions": list(self.suggestions),
        }


@dataclass
class RuleParameter:
    """A tunable parameter a rule exposes."""

    name: str
    type: str  # number | string | boolean | select
    default_value: Value | None = None
    description: str = ""
    min: float | None = None
    max: float | None = None
    required: bool = False
    options: list[str] | None = None

    def __post_init__(self) -> None:
        self.default_value = to_value(self.default_value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "default_value": from_value(self.default_value),
            "description": self.description,
        }
        validation = {
            "min": self.min,
            "max": self.max,
            "required": self.required or None,
            "options": self.options,
        }
        validation = {k: v for k, v in validation.items() if v is not None}
        if validation:
            result["validation"] = validation
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleParameter":
        """Create RuleParameter from dictionary."""
        validation = data.get("validation", {})
        return cls(
            name=data["name"],
            type=data.get("type", "string"),
            default_value=data.get("default_value"),
            description=data.get("description", ""),
            min=validation.get("min"),
            max=validation.get("max"),
            required=validation.get("required", False),
            options=validation.get("options"),
        )


@dataclass
class RuleConfiguration:
    """Per-rule parameters, numeric thresholds and free-form customizations."""

    parameters: dict[str, RuleParameter] = field(default_factory=dict)
    thresholds: dict[str, float] = field(default_factory=dict)
    customizations: dict[str, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.customizations = {
            key: to_value(value) for key, value in self.customizations.items()
        }

    @property
    def is_empty(self) -> bool:
        return not (self.parameters or self.thresholds or self.customizations)

    def merge(self, other: dict[str, Any]) -> "RuleConfiguration":
        """Shallow merge: each top-level key supplied replaces the stored one."""
        overlay = RuleConfiguration.from_dict(other)
        return RuleConfiguration(
            parameters=overlay.parameters if "parameters" in other else dict(self.parameters),
            thresholds=overlay.thresholds if "thresholds" in other else dict(self.thresholds),
            customizations=(
                overlay.customizations
                if "customizations" in other
                else dict(self.customizations)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "parameters": {k: p.to_dict() for k, p in self.parameters.items()},
            "thresholds": dict(self.thresholds),
            "customizations": {
                k: from_value(v) for k, v in self.customizations.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleConfiguration":
        """Create RuleConfiguration from dictionary."""
        return cls(
            parameters={
                key: RuleParameter.from_dict({"name": key, **param})
                for key, param in (data.get("parameters") or {}).items()
            },
            thresholds={
                key: float(value)
                for key, value in (data.get("thresholds") or {}).items()
            },
            customizations=dict(data.get("customizations") or {}),
        )


@dataclass
class RuleMetadata:
    """Authoring information attached to a rule."""

    author: str = "UX Smells Detector"
    version: str = "1.0.0"
    created: datetime = field(default_factory=datetime.now)
    last_modified: datetime = field(default_factory=datetime.now)
    documentation: str | None = None
    compatibility: list[str] = field(default_factory=lambda: ["1.0.0"])

    def to_dict(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "version": self.version,
            "created": self.created.isoformat(),
            "last_modified": self.last_modified.isoformat(),
            "documentation": self.documentation,
            "compatibility": list(self.compatibility),
        }


@dataclass
class RuleContext:
    """Context passed to rules for evaluation."""

    sibling_elements: list[Element] = field(default_factory=list)
    all_elements: list[Element] = field(default_factory=list)
    rule_config: RuleConfiguration = field(default_factory=RuleConfiguration)
    parent_element: Element | None = None


@dataclass
class ElementChange:
    """A single property change proposed by a fix function."""

    property: str
    old_value: Any
    new_value: Any
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "property": self.property,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "reason": self.reason,
        }


@dataclass
class FixResult:
    """Result of an auto-fix attempt."""

    success: bool
    changes: list[ElementChange] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "changes": [c.to_dict() for c in self.changes],
            "warnings": list(self.warnings),
        }


DetectionFunction = Callable[[Element, RuleContext], DetectionResult]
FixFunction = Callable[[Element, RuleContext], Awaitable[FixResult]]


@dataclass
class Rule:
    """A detection rule.

    Rules are plain data plus a detection callable. Category and severity
    accept enum members or their string values; strings outside the enums
    are left as-is so the validator can report them.
    """

    id: str
    name: str
    description: str
    category: IssueCategory
    severity: SeverityLevel
    detection_function: DetectionFunction | None
    fix_function: FixFunction | None = None
    enabled: bool = True
    configuration: RuleConfiguration | None = None
    metadata: RuleMetadata | None = None

    def __post_init__(self) -> None:
        with contextlib.suppress(ValueError):
            self.category = IssueCategory(self.category)
        with contextlib.suppress(ValueError):
            self.severity = SeverityLevel(self.severity)

    @property
    def auto_fixable(self) -> bool:
        return self.fix_function is not None

    def detect(self, element: Element, context: RuleContext) -> DetectionResult:
        """Run the detection function against one element."""
        return self.detection_function(element, context)

    def to_dict(self) -> dict[str, Any]:
        """Describe the rule (without its callables)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": getattr(self.category, "value", self.category),
            "severity": getattr(self.severity, "value", self.severity),
            "enabled": self.enabled,
            "auto_fixable": self.auto_fixable,
        }


def create_basic_rule(
    id: str,
    name: str,
    description: str,
    category: IssueCategory,
    severity: SeverityLevel,
    detection_function: DetectionFunction,
    fix_function: FixFunction | None = None,
) -> Rule:
    """Build an enabled rule with empty configuration and default metadata.

    No validation happens here; registration validates.
    """
    now = datetime.now()
    return Rule(
        id=id,
        name=name,
        description=description,
        category=category,
        severity=severity,
        detection_function=detection_function,
        fix_function=fix_function,
        enabled=True,
        configuration=RuleConfiguration(),
        metadata=RuleMetadata(created=now, last_modified=now),
    )
