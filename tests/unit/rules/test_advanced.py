"""Unit tests for ux_smells.rules.advanced module."""

from ux_smells.models import IssueCategory
from ux_smells.rules.advanced import (
    AdvancedRule,
    LearningData,
    RuleCondition,
    RuleGroup,
    UserFeedback,
    calculate_effective_priority,
    check_rule_conditions,
    create_advanced_rule,
    create_rule_set,
    evaluate_condition,
)
from ux_smells.rules.base import RuleContext

from conftest import make_element, make_rule


class TestCreateAdvancedRule:
    def test_copies_basic_fields(self):
        basic = make_rule("promoted")
        rule = create_advanced_rule(basic, priority=8, tags=["forms"], dependencies=["other"])
        assert isinstance(rule, AdvancedRule)
        assert rule.id == "promoted"
        assert rule.detection_function is basic.detection_function
        assert rule.severity is basic.severity
        assert rule.priority == 8
        assert rule.tags == ["forms"]
        assert rule.dependencies == ["other"]
        assert rule.conditions == []
        assert rule.learning_data.execution_count == 0

    def test_to_dict(self):
        data = create_advanced_rule(make_rule("described"), priority=3).to_dict()
        assert data["priority"] == 3
        assert data["learning_data"]["execution_count"] == 0


class TestLearningData:
    """Tests for execution and feedback counters."""

    def test_accuracy_without_executions(self):
        assert LearningData().accuracy == 1.0

    def test_accuracy(self):
        data = LearningData()
        for detected in (True, True, False, True):
            data.record_execution(detected)
        data.record_feedback(UserFeedback("r", "e", "false_positive"))
        data.record_feedback(UserFeedback("r", "e", "helpful"))
        assert data.execution_count == 4
        assert data.detection_count == 3
        assert data.false_positive_count == 1
        assert data.accuracy == 0.5
        assert len(data.user_feedback) == 2


class TestConditions:
    def test_evaluate_condition_operators(self):
        assert evaluate_condition("TEXT", "equals", "TEXT")
        assert evaluate_condition("TEXT", "not_equals", "FRAME")
        assert evaluate_condition(10, "greater_than", 5)
        assert evaluate_condition(3, "less_than", 5)
        assert evaluate_condition("Primary Button", "contains", "button")
        assert evaluate_condition("anything", "unknown-operator", None)

    def test_element_count_condition(self):
        rule = create_advanced_rule(make_rule("big-docs"), priority=5)
        rule.conditions.append(RuleCondition("element_count", "greater_than", 2))
        element = make_element()
        assert not check_rule_conditions(rule, element, RuleContext(all_elements=[element]))
        assert check_rule_conditions(
            rule, element, RuleContext(all_elements=[element] * 3)
        )

    def test_unevaluated_condition_types_pass(self):
        rule = create_advanced_rule(make_rule("page-rule"), priority=5)
        rule.conditions.append(RuleCondition("page_type", "equals", "checkout"))
        rule.conditions.append(RuleCondition("custom", "equals", "x"))
        assert check_rule_conditions(rule, make_element(), RuleContext())


class TestEffectivePriority:
    def test_scaled_by_accuracy(self):
        rule = create_advanced_rule(make_rule("p-rule"), priority=8)
        rule.learning_data.record_execution(True)
        rule.learning_data.record_execution(False)
        assert calculate_effective_priority(rule, RuleContext()) == 4.0

    def test_large_documents(self):
        rule = create_advanced_rule(make_rule("p-rule"), priority=10)
        context = RuleContext(all_elements=[make_element()] * 101)
        assert calculate_effective_priority(rule, context) == 9.0

    def test_clamped(self):
        rule = create_advanced_rule(make_rule("p-rule"), priority=0)
        assert calculate_effective_priority(rule, RuleContext()) == 1.0
        rule.priority = 50
        assert calculate_effective_priority(rule, RuleContext()) == 10.0


class TestRuleSet:
    def _group(self, id, rules, enabled=True):
        return RuleGroup(
            id=id,
            name=id,
            description="",
            category=IssueCategory.ACCESSIBILITY,
            rules=rules,
            enabled=enabled,
        )

    def test_rule_ids(self):
        rule_set = create_rule_set(
            "set",
            "Set",
            "",
            [
                self._group("g1", ["a", "b"]),
                self._group("g2", ["b", "c"]),
                self._group("g3", ["d"], enabled=False),
            ],
        )
        assert rule_set.rule_ids == ["a", "b", "c"]
        assert rule_set.version == "1.0.0"
