"""UX smell rules package.

This package provides the rule contract, the validator, the registry
that runs rules over batches of elements, and the built-in rules.
"""

from .advanced import (
    AdvancedRule,
    LearningData,
    RuleCondition,
    RuleGroup,
    RuleSet,
    UserFeedback,
    calculate_effective_priority,
    check_rule_conditions,
    create_advanced_rule,
    create_rule_set,
)
from .base import (
    DetectionResult,
    ElementChange,
    FixResult,
    Rule,
    RuleConfiguration,
    RuleContext,
    RuleMetadata,
    RuleParameter,
    create_basic_rule,
)
from .builtin import default_rules
from .config import RegistryConfiguration, RuleConfigEntry
from .issues import create_issue
from .registry import (
    AnalysisResult,
    BatchAnalysisResult,
    RegistryStatistics,
    RuleError,
    RuleRegistry,
    create_rule_registry,
)
from .validator import RuleValidator, ValidationResult

__all__ = [
    # Contract
    "DetectionResult",
    "ElementChange",
    "FixResult",
    "Rule",
    "RuleConfiguration",
    "RuleContext",
    "RuleMetadata",
    "RuleParameter",
    "create_basic_rule",
    # Advanced rules
    "AdvancedRule",
    "LearningData",
    "RuleCondition",
    "RuleGroup",
    "RuleSet",
    "UserFeedback",
    "calculate_effective_priority",
    "check_rule_conditions",
    "create_advanced_rule",
    "create_rule_set",
    # Validation
    "RuleValidator",
    "ValidationResult",
    # Issues
    "create_issue",
    # Registry
    "AnalysisResult",
    "BatchAnalysisResult",
    "RegistryStatistics",
    "RuleError",
    "RuleRegistry",
    "create_rule_registry",
    # Configuration
    "RegistryConfiguration",
    "RuleConfigEntry",
    # Built-in rules
    "default_rules",
]
