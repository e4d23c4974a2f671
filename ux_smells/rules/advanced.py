"""
Advanced rules, execution conditions and rule sets.

Advanced rules extend the basic contract with a priority, tags,
dependencies on other rules, conditions gating execution, and learning
data accumulated from executions and user feedback.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from ..models import Element, IssueCategory
from .base import Rule, RuleContext


@dataclass
class UserFeedback:
    """Reviewer feedback on a single issue."""

    rule_id: str
    element_id: str
    feedback: str  # helpful | not_helpful | false_positive
    comment: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class LearningData:
    """Execution and feedback counters for a rule."""

    execution_count: int = 0
    detection_count: int = 0
    false_positive_count: int = 0
    user_feedback: list[UserFeedback] = field(default_factory=list)
    last_updated: datetime = field(default_factory=datetime.now)

    @property
    def accuracy(self) -> float:
        """Share of executions that produced a true detection (1.0 if unused)."""
        if self.execution_count == 0:
            return 1.0
        return (self.detection_count - self.false_positive_count) / self.execution_count

    def record_execution(self, detected: bool) -> None:
        self.execution_count += 1
        if detected:
            self.detection_count += 1
        self.last_updated = datetime.now()

    def record_feedback(self, feedback: UserFeedback) -> None:
        self.user_feedback.append(feedback)
        if feedback.feedback == "false_positive":
            self.false_positive_count += 1
        self.last_updated = datetime.now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "execution_count": self.execution_count,
            "detection_count": self.detection_count,
            "false_positive_count": self.false_positive_count,
            "feedback_count": len(self.user_feedback),
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass
class RuleCondition:
    """A predicate that must hold for an advanced rule to run on an element."""

    type: str  # element_type | element_count | page_type | custom
    operator: str  # equals | not_equals | greater_than | less_than | contains
    value: Any
    description: str = ""


def evaluate_condition(actual: Any, operator: str, expected: Any) -> bool:
    """Apply a comparison operator. Unknown operators pass."""
    if operator == "equals":
        return actual == expected
    if operator == "not_equals":
        return actual != expected
    if operator == "greater_than":
        return actual > expected
    if operator == "less_than":
        return actual < expected
    if operator == "contains":
        return str(expected).lower() in str(actual).lower()
    return True


@dataclass
class AdvancedRule(Rule):
    """Rule with priority, tags, dependencies, conditions and learning data."""

    priority: int = 5
    tags: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    conditions: list[RuleCondition] = field(default_factory=list)
    learning_data: LearningData | None = None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(
            {
                "priority": self.priority,
                "tags": list(self.tags),
                "dependencies": list(self.dependencies),
            }
        )
        if self.learning_data is not None:
            result["learning_data"] = self.learning_data.to_dict()
        return result


def create_advanced_rule(
    basic: Rule,
    priority: int,
    tags: list[str] | tuple[str, ...] = (),
    dependencies: list[str] | tuple[str, ...] = (),
) -> AdvancedRule:
    """Promote a basic rule, starting with no conditions and fresh learning data."""
    base_fields = {f.name: getattr(basic, f.name) for f in fields(Rule)}
    return AdvancedRule(
        **base_fields,
        priority=priority,
        tags=list(tags),
        dependencies=list(dependencies),
        conditions=[],
        learning_data=LearningData(),
    )


def check_rule_conditions(
    rule: AdvancedRule, element: Element, context: RuleContext
) -> bool:
    """Check that every condition of the rule holds for this element.

    page_type and custom conditions are not evaluated and always pass.
    """
    for condition in rule.conditions:
        if condition.type == "element_type":
            actual: Any = element.type
        elif condition.type == "element_count":
            actual = len(context.all_elements)
        else:
            continue
        if not evaluate_condition(actual, condition.operator, condition.value):
            return False
    return True


def calculate_effective_priority(rule: AdvancedRule, context: RuleContext) -> float:
    """Priority scaled by learning accuracy and batch size, clamped to [1, 10]."""
    priority = float(rule.priority)
    if rule.learning_data is not None:
        priority *= rule.learning_data.accuracy
    # Large documents
    if len(context.all_elements) > 100:
        priority *= 0.9
    return max(1.0, min(10.0, priority))


@dataclass
class RuleGroup:
    """Named group of rule ids within a rule set."""

    id: str
    name: str
    description: str
    category: IssueCategory
    rules: list[str] = field(default_factory=list)
    priority: int = 5
    enabled: bool = True


@dataclass
class RuleSetMetadata:
    author: str = "UX Smells Detector"
    created: datetime = field(default_factory=datetime.now)
    last_modified: datetime = field(default_factory=datetime.now)
    tags: list[str] = field(default_factory=list)
    compatibility: list[str] = field(default_factory=lambda: ["1.0.0"])


@dataclass
class RuleSet:
    """Versioned collection of rule groups."""

    id: str
    name: str
    description: str
    version: str = "1.0.0"
    groups: list[RuleGroup] = field(default_factory=list)
    global_configuration: dict[str, Any] = field(default_factory=dict)
    metadata: RuleSetMetadata = field(default_factory=RuleSetMetadata)

    @property
    def rule_ids(self) -> list[str]:
        """Rule ids of enabled groups, in group order without duplicates."""
        seen: dict[str, None] = {}
        for group in self.groups:
            if group.enabled:
                for rule_id in group.rules:
                    seen.setdefault(rule_id, None)
        return list(seen)


def create_rule_set(
    id: str, name: str, description: str, groups: list[RuleGroup]
) -> RuleSet:
    return RuleSet(id=id, name=name, description=description, groups=list(groups))
