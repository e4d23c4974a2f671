"""Presentation boundary for the UX smell detector.

SmellsService is the request/response surface a UI or CLI talks to: it
owns a wired registry, runs analyses, lists rules and moves configuration
in and out.
"""

import asyncio
from typing import Any

from .config import SmellsConfig
from .models import Element
from .rules.base import FixResult, RuleContext
from .rules.registry import (
    BatchAnalysisResult,
    RegistryStatistics,
    RuleRegistry,
    create_rule_registry,
)
from .smells_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.SERVICE)


class SmellsService:
    """Runs analyses against a rule registry.

    Example usage:
        service = SmellsService()
        result = service.analyze(elements, enabled_rule_ids=["layout-elements-overlapping"])
        for issue in result.issues:
            print(issue.rule_id, issue.element_id)
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: SmellsConfig | None = None,
    ):
        """Initialize the service.

        Args:
            registry: Registry to use. Defaults to one with the built-in
                rules registered and enabled.
            config: Optional settings applied to the registry on first use.
        """
        self.config = config
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        """Lazy-initialized registry with settings applied."""
        if self._registry is None:
            registry = create_rule_registry(register_defaults=True)
            if self.config is not None:
                registry.import_configuration(
                    self.config.to_registry_configuration(registry)
                )
            self._registry = registry
        return self._registry

    def analyze(
        self,
        elements: list[Element],
        enabled_rule_ids: list[str] | None = None,
    ) -> BatchAnalysisResult:
        """Analyze a batch of elements.

        Args:
            elements: Flat list of elements.
            enabled_rule_ids: When given, the enabled set is reset to
                exactly these ids before the run.

        Returns:
            BatchAnalysisResult for the batch.
        """
        if enabled_rule_ids is not None:
            enabled = self.registry.configure_enabled_rules(enabled_rule_ids)
            logger.debug(f"Configured {len(enabled)} enabled rules: {enabled}")
        return self.registry.analyze_elements(elements)

    def list_rules(self) -> list[dict[str, Any]]:
        """Describe every registered rule.

        ``enabled`` is the rule's own flag, not registry membership in the
        enabled set.
        """
        return [
            {
                "id": rule.id,
                "name": rule.name,
                "description": rule.description,
                "category": rule.category.value,
                "severity": rule.severity.value,
                "enabled": rule.enabled,
            }
            for rule in self.registry.get_all_rules()
        ]

    def enabled_rule_ids(self) -> list[str]:
        return [rule.id for rule in self.registry.get_enabled_rules()]

    def get_statistics(self) -> RegistryStatistics:
        return self.registry.get_statistics()

    def export_configuration(self) -> dict[str, Any]:
        return self.registry.export_configuration().to_dict()

    def import_configuration(self, data: dict[str, Any]) -> bool:
        return self.registry.import_configuration(data)

    async def apply_fix(
        self,
        rule_id: str,
        element: Element,
        context: RuleContext | None = None,
    ) -> FixResult | None:
        """Run a rule's auto-fix for one element.

        Args:
            rule_id: Rule whose fix function to run.
            element: Element to fix.
            context: Optional context; defaults to a batch of just the element.

        Returns:
            The FixResult, or None for unknown rules and rules without a fix.
        """
        rule = self.registry.get_rule(rule_id)
        if rule is None or rule.fix_function is None:
            logger.warning(f"No fix available for rule {rule_id}")
            return None

        if context is None:
            context = RuleContext(sibling_elements=[], all_elements=[element])
        return await rule.fix_function(element, context)

    def apply_fix_sync(
        self,
        rule_id: str,
        element: Element,
        context: RuleContext | None = None,
    ) -> FixResult | None:
        """Synchronous wrapper for apply_fix()."""
        return asyncio.run(self.apply_fix(rule_id, element, context))
