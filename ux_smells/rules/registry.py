"""
Rule registry for running UX smell rules over batches of elements.

The RuleRegistry owns the rule map and the enabled set, validates rules
before registration, runs every enabled rule against each element in
isolation and aggregates the resulting issues.
"""

import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..models import Element, Issue
from ..smells_logging import LogCategory, get_category_logger
from .advanced import AdvancedRule, check_rule_conditions
from .base import DetectionResult, Rule, RuleConfiguration, RuleContext
from .config import RegistryConfiguration, RuleConfigEntry
from .issues import create_issue
from .validator import RuleValidator, ValidationResult

logger = get_category_logger(LogCategory.REGISTRY)
engine_logger = get_category_logger(LogCategory.ENGINE)


@dataclass
class RuleError:
    """Error raised by a rule while analyzing one element."""

    rule_id: str
    element_id: str
    error_message: str
    exception_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "element_id": self.element_id,
            "error_message": self.error_message,
            "exception_type": self.exception_type,
        }


@dataclass
class AnalysisResult:
    """Result of running the enabled rules against one element."""

    element_id: str
    issues: list[Issue] = field(default_factory=list)
    rule_results: dict[str, DetectionResult] = field(default_factory=dict)
    executed_rules: int = 0
    errors: list[RuleError] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "element_id": self.element_id,
            "issues": [i.to_dict() for i in self.issues],
            "rule_results": {k: r.to_dict() for k, r in self.rule_results.items()},
            "executed_rules": self.executed_rules,
            "errors": [e.to_dict() for e in self.errors],
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class BatchAnalysisResult:
    """Result of analyzing a batch of elements."""

    results: list[AnalysisResult] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    total_elements: int = 0
    execution_time_ms: float = 0.0
    issues_by_category: dict[str, int] = field(default_factory=dict)
    issues_by_severity: dict[str, int] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def total_issues(self) -> int:
        return len(self.issues)

    @property
    def errors(self) -> list[RuleError]:
        """Every rule error of the batch, in processing order."""
        return [error for result in self.results for error in result.errors]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "results": [r.to_dict() for r in self.results],
            "total_issues": self.total_issues,
            "total_elements": self.total_elements,
            "execution_time_ms": self.execution_time_ms,
            "issues_by_category": dict(self.issues_by_category),
            "issues_by_severity": dict(self.issues_by_severity),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class RegistryStatistics:
    """Counts of registered rules."""

    total_rules: int
    enabled_rules: int
    disabled_rules: int
    rules_by_category: dict[str, int]
    rules_by_severity: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_rules": self.total_rules,
            "enabled_rules": self.enabled_rules,
            "disabled_rules": self.disabled_rules,
            "rules_by_category": dict(self.rules_by_category),
            "rules_by_severity": dict(self.rules_by_severity),
        }


def _enum_value(value: Any) -> str:
    return getattr(value, "value", str(value))


class RuleRegistry:
    """Registry and executor for UX smell rules.

    Rules run in registration order. A mutation never interleaves with a
    running batch: both take the same re-entrant lock.

    Example usage:
        registry = RuleRegistry()
        result = registry.add_rule(my_rule)
        if result.valid:
            registry.enable_rule(my_rule.id)

        batch = registry.analyze_elements(elements)
        print(batch.issues_by_severity)
    """

    def __init__(self, validator: RuleValidator | None = None):
        self.validator = validator or RuleValidator()
        self._rules: dict[str, Rule] = {}
        self._enabled: set[str] = set()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_rule(self, rule: Rule) -> ValidationResult:
        """Validate and register a rule.

        An existing rule with the same id is replaced; the enabled set is
        left untouched. Invalid rules are not registered.

        Args:
            rule: Rule to register.

        Returns:
            The validation result. Never raises for invalid rules.
        """
        validation = self.validator.validate_rule(rule)

        if not validation.valid:
            logger.error(
                f"Failed to add rule {rule.id}: {'; '.join(validation.errors)}",
                extra={"rule_id": rule.id},
            )
            return validation

        with self._lock:
            self._rules[rule.id] = rule

        if validation.warnings:
            logger.warning(
                f"Warnings for rule {rule.id}: {'; '.join(validation.warnings)}",
                extra={"rule_id": rule.id},
            )
        logger.debug(f"Registered rule: {rule.id}")
        return validation

    def remove_rule(self, rule_id: str) -> bool:
        """Remove a rule and its enabled flag.

        Returns:
            True if the rule was found and removed.
        """
        with self._lock:
            if rule_id not in self._rules:
                return False
            del self._rules[rule_id]
            self._enabled.discard(rule_id)
        logger.debug(f"Removed rule: {rule_id}")
        return True

    def enable_rule(self, rule_id: str) -> bool:
        """Enable a registered rule. Unknown ids are a no-op returning False."""
        with self._lock:
            if rule_id not in self._rules:
                return False
            self._enabled.add(rule_id)
        return True

    def disable_rule(self, rule_id: str) -> bool:
        """Disable a rule. Returns True only if it was enabled."""
        with self._lock:
            if rule_id not in self._enabled:
                return False
            self._enabled.discard(rule_id)
        return True

    def is_rule_enabled(self, rule_id: str) -> bool:
        return rule_id in self._enabled

    def get_rule(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[Rule]:
        """Get all registered rules in registration order."""
        with self._lock:
            return list(self._rules.values())

    def get_enabled_rules(self) -> list[Rule]:
        """Get rules that are in the enabled set and flagged enabled."""
        with self._lock:
            return [
                rule
                for rule_id, rule in self._rules.items()
                if rule_id in self._enabled and rule.enabled
            ]

    def configure_enabled_rules(self, rule_ids: list[str]) -> list[str]:
        """Reset the enabled set to exactly the given (known) ids.

        Returns:
            The ids that were actually enabled.
        """
        with self._lock:
            self._enabled.clear()
            enabled = [rule_id for rule_id in rule_ids if self.enable_rule(rule_id)]
        logger.debug(f"Enabled rules reset to: {enabled}")
        return enabled

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze_element(
        self, element: Element, context: RuleContext
    ) -> AnalysisResult:
        """Run every enabled rule against one element.

        A rule that raises is recorded as a RuleError and treated as "no
        issue"; the remaining rules still run.

        Args:
            element: Element to analyze.
            context: Sibling/batch view for the element.

        Returns:
            AnalysisResult with the issues and raw detection results.
        """
        result = AnalysisResult(element_id=element.id)

        with self._lock:
            for rule in self.get_enabled_rules():
                self._execute_rule(rule, element, context, result)

        return result

    def _execute_rule(
        self,
        rule: Rule,
        element: Element,
        context: RuleContext,
        result: AnalysisResult,
    ) -> None:
        """Execute a single rule, recording any exception on the result.

        Condition checks, detection, learning updates and issue creation
        all run under the same guard.
        """
        try:
            if isinstance(rule, AdvancedRule) and not check_rule_conditions(
                rule, element, context
            ):
                return

            result.executed_rules += 1
            detection = rule.detect(element, context)
            if not isinstance(detection, DetectionResult):
                raise TypeError(
                    f"Detection returned {type(detection).__name__}, "
                    "expected DetectionResult"
                )

            result.rule_results[rule.id] = detection
            if isinstance(rule, AdvancedRule) and rule.learning_data is not None:
                rule.learning_data.record_execution(detection.detected)
            if detection.detected:
                result.issues.append(create_issue(rule, element, detection))
        except Exception as e:
            result.errors.append(
                RuleError(
                    rule_id=rule.id,
                    element_id=element.id,
                    error_message=str(e),
                    exception_type=type(e).__name__,
                )
            )
            engine_logger.warning(
                f"Rule {rule.id} failed on element {element.id}: {e}",
                extra={"rule_id": rule.id, "element_id": element.id},
            )

    def analyze_elements(self, elements: list[Element]) -> BatchAnalysisResult:
        """Analyze a batch of elements.

        Each element is analyzed with its siblings (every other element of
        the batch, in order) and the whole batch as context.

        Args:
            elements: Elements to analyze, in processing order.

        Returns:
            BatchAnalysisResult with issues concatenated in element order.
        """
        start_time = time.time()
        results: list[AnalysisResult] = []
        issues: list[Issue] = []

        with self._lock:
            for index, element in enumerate(elements):
                context = RuleContext(
                    sibling_elements=elements[:index] + elements[index + 1 :],
                    all_elements=list(elements),
                    rule_config=RuleConfiguration(),
                    parent_element=None,
                )
                element_result = self.analyze_element(element, context)
                results.append(element_result)
                issues.extend(element_result.issues)

        execution_time_ms = (time.time() - start_time) * 1000
        batch = BatchAnalysisResult(
            results=results,
            issues=issues,
            total_elements=len(elements),
            execution_time_ms=execution_time_ms,
            issues_by_category=dict(Counter(i.category.value for i in issues)),
            issues_by_severity=dict(Counter(i.severity.value for i in issues)),
        )

        engine_logger.info(
            f"Analyzed {len(elements)} elements: {batch.total_issues} issues "
            f"in {execution_time_ms:.1f}ms",
            extra={"element_count": len(elements), "duration_ms": execution_time_ms},
        )
        return batch

    # ------------------------------------------------------------------
    # Statistics and configuration
    # ------------------------------------------------------------------

    def get_statistics(self) -> RegistryStatistics:
        """Summarize registered rules by state, category and severity."""
        with self._lock:
            all_rules = self.get_all_rules()
            enabled = self.get_enabled_rules()
        return RegistryStatistics(
            total_rules=len(all_rules),
            enabled_rules=len(enabled),
            disabled_rules=len(all_rules) - len(enabled),
            rules_by_category=dict(Counter(_enum_value(r.category) for r in all_rules)),
            rules_by_severity=dict(Counter(_enum_value(r.severity) for r in all_rules)),
        )

    def export_configuration(self) -> RegistryConfiguration:
        """Snapshot every rule's enabled state and configuration."""
        with self._lock:
            entries = [
                RuleConfigEntry(
                    id=rule_id,
                    enabled=rule_id in self._enabled,
                    configuration=(
                        rule.configuration.to_dict()
                        if rule.configuration is not None
                        else None
                    ),
                )
                for rule_id, rule in self._rules.items()
            ]
        return RegistryConfiguration(rules=entries)

    def import_configuration(
        self, config: RegistryConfiguration | dict[str, Any]
    ) -> bool:
        """Apply a configuration snapshot, best effort.

        Unknown rule ids are skipped silently. Malformed entries in a raw
        dictionary, and entries whose configuration cannot be parsed, are
        skipped with a warning and leave their rule untouched. Supplied
        configuration is merged shallowly into the stored rule configuration.

        Args:
            config: A RegistryConfiguration or its dictionary form.

        Returns:
            True once the configuration has been applied.
        """
        if isinstance(config, RegistryConfiguration):
            entries = list(config.rules)
        else:
            entries = []
            for raw in config.get("rules") or []:
                try:
                    entries.append(RuleConfigEntry.from_dict(raw))
                except (ValueError, AttributeError) as e:
                    logger.warning(f"Skipping malformed rule entry: {e}")

        with self._lock:
            for entry in entries:
                rule = self._rules.get(entry.id)
                if rule is None:
                    continue

                configuration = rule.configuration
                if entry.configuration is not None:
                    try:
                        configuration = (
                            rule.configuration or RuleConfiguration()
                        ).merge(entry.configuration)
                    except (ValueError, TypeError, AttributeError) as e:
                        logger.warning(
                            f"Skipping rule entry {entry.id}: invalid configuration: {e}",
                            extra={"rule_id": entry.id},
                        )
                        continue

                if entry.enabled:
                    self.enable_rule(entry.id)
                else:
                    self.disable_rule(entry.id)
                rule.configuration = configuration

        logger.info(f"Imported configuration for {len(entries)} rule entries")
        return True


def create_rule_registry(
    register_defaults: bool = True,
    config: RegistryConfiguration | dict[str, Any] | None = None,
) -> RuleRegistry:
    """Factory function to create and wire a rule registry.

    Args:
        register_defaults: Register and enable the built-in rules.
        config: Optional configuration applied after registration.

    Returns:
        Configured RuleRegistry instance.
    """
    registry = RuleRegistry()

    if register_defaults:
        from .builtin import default_rules

        for rule in default_rules():
            if registry.add_rule(rule).valid:
                registry.enable_rule(rule.id)
        logger.info(f"Initialized {len(registry)} default rules")

    if config is not None:
        registry.import_configuration(config)

    return registry
