"""Unit tests for ux_smells.rules.validator module."""

from ux_smells.models import IssueCategory
from ux_smells.rules.advanced import RuleGroup, create_rule_set
from ux_smells.rules.base import DetectionResult, FixResult
from ux_smells.rules.validator import PROBE_ELEMENT, RuleValidator

from conftest import RecordingDetector, make_rule, never_detect


def raising_detector(element, context):
    raise ValueError("cannot read fills")


def non_bool_detector(element, context):
    return DetectionResult(detected="yes", confidence=0.5)


def out_of_range_detector(element, context):
    return DetectionResult(detected=True, confidence=1.5)


def bool_confidence_detector(element, context):
    return DetectionResult(detected=True, confidence=True)


def noisy_detector(element, context):
    return DetectionResult(detected=False, confidence=0.3)


class TestValidateRule:
    """Tests for RuleValidator.validate_rule."""

    def setup_method(self):
        self.validator = RuleValidator()

    def test_valid_rule(self):
        result = self.validator.validate_rule(make_rule("valid-rule-1"))
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_missing_fields_accumulate(self):
        rule = make_rule("  ")
        rule.name = ""
        rule.description = "   "
        rule.detection_function = None
        result = self.validator.validate_rule(rule)
        assert not result.valid
        assert result.errors == [
            "Rule ID is required",
            "Rule name is required",
            "Rule description is required",
            "Detection function is required",
            "Rule ID must contain only lowercase letters, numbers, and hyphens",
        ]

    def test_id_pattern(self):
        for bad_id in ("Upper-Case", "with_underscore", "spaces here", "dots.too"):
            result = self.validator.validate_rule(make_rule(bad_id))
            assert not result.valid, bad_id
            assert (
                "Rule ID must contain only lowercase letters, numbers, and hyphens"
                in result.errors
            )

    def test_unknown_category_and_severity(self):
        result = self.validator.validate_rule(
            make_rule("enum-rule", category="cosmic", severity="extreme")
        )
        assert "Unknown rule category: cosmic" in result.errors
        assert "Unknown rule severity: extreme" in result.errors

    def test_raising_detector_is_contained(self):
        """The exception never escapes; it becomes an error string."""
        result = self.validator.validate_rule(make_rule("raiser", raising_detector))
        assert not result.valid
        assert result.errors == ["Detection function throws error: cannot read fills"]

    def test_non_bool_detected(self):
        result = self.validator.validate_rule(make_rule("non-bool", non_bool_detector))
        assert 'Detection function must return a boolean "detected" property' in result.errors

    def test_confidence_range(self):
        result = self.validator.validate_rule(make_rule("range", out_of_range_detector))
        assert (
            "Detection function must return a confidence value between 0 and 1"
            in result.errors
        )

    def test_bool_confidence_rejected(self):
        result = self.validator.validate_rule(
            make_rule("bool-conf", bool_confidence_detector)
        )
        assert not result.valid

    def test_non_zero_confidence_without_detection_warns(self):
        result = self.validator.validate_rule(make_rule("noisy", noisy_detector))
        assert result.valid
        assert result.warnings == [
            "Detection function returned a non-zero confidence without a detection"
        ]

    def test_sync_fix_function_warns(self):
        def sync_fix(element, context):
            return FixResult(success=True)

        result = self.validator.validate_rule(
            make_rule("sync-fix", never_detect, fix_function=sync_fix)
        )
        assert result.valid
        assert result.warnings == ["Fix function should be a coroutine function"]

    def test_async_fix_function_accepted(self):
        async def async_fix(element, context):
            return FixResult(success=True)

        result = self.validator.validate_rule(
            make_rule("async-fix", never_detect, fix_function=async_fix)
        )
        assert result.warnings == []

    def test_probe_element_and_context(self):
        """Detection runs once against the probe with an empty context."""
        calls = []

        def spy(element, context):
            calls.append((element, context))
            return DetectionResult.not_detected()

        self.validator.validate_rule(make_rule("spy", spy))
        assert len(calls) == 1
        element, context = calls[0]
        assert element is PROBE_ELEMENT
        assert element.id == "test"
        assert element.name == "Test Element"
        assert element.type == "RECTANGLE"
        assert context.sibling_elements == []
        assert context.all_elements == [PROBE_ELEMENT]
        assert context.rule_config.is_empty
        assert context.parent_element is None

    def test_recording_detector_ignores_probe(self):
        detector = RecordingDetector()
        self.validator.validate_rule(make_rule("recorder", detector))
        assert detector.calls == []


class TestValidateRuleSet:
    """Tests for RuleValidator.validate_rule_set."""

    def setup_method(self):
        self.validator = RuleValidator()

    def _group(self, id="group-1", rules=("a",)):
        return RuleGroup(
            id=id,
            name="Group",
            description="A group",
            category=IssueCategory.LAYOUT,
            rules=list(rules),
        )

    def test_valid_rule_set(self):
        rule_set = create_rule_set("set-1", "Set", "A set", [self._group()])
        assert self.validator.validate_rule_set(rule_set).valid

    def test_missing_identity_and_groups(self):
        rule_set = create_rule_set("", "", "A set", [])
        result = self.validator.validate_rule_set(rule_set)
        assert result.errors == [
            "RuleSet ID is required",
            "RuleSet name is required",
            "RuleSet must contain at least one group",
        ]

    def test_group_checks(self):
        rule_set = create_rule_set(
            "set-1", "Set", "A set", [self._group(id=""), self._group(id="empty", rules=())]
        )
        result = self.validator.validate_rule_set(rule_set)
        assert result.errors == ["Group 0 is missing ID"]
        assert result.warnings == ["Group empty contains no rules"]
