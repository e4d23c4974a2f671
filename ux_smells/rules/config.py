"""
Export/import format for registry configuration.

A registry configuration records, per rule, whether it is enabled and its
configuration. It is the only state the registry persists.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

CONFIGURATION_VERSION = "1.0.0"


@dataclass
class RuleConfigEntry:
    """Enabled flag and optional configuration for one rule."""

    id: str
    enabled: bool = True
    configuration: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleConfigEntry":
        """Create RuleConfigEntry from dictionary.

        Raises:
            ValueError: If the entry has no string id.
        """
        rule_id = data.get("id")
        if not isinstance(rule_id, str):
            raise ValueError(f"Rule entry is missing an id: {data!r}")
        configuration = data.get("configuration")
        return cls(
            id=rule_id,
            enabled=bool(data.get("enabled", True)),
            configuration=configuration if isinstance(configuration, dict) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"id": self.id, "enabled": self.enabled}
        if self.configuration is not None:
            result["configuration"] = self.configuration
        return result


@dataclass
class RegistryConfiguration:
    """Snapshot of every rule's enabled state and configuration."""

    version: str = CONFIGURATION_VERSION
    timestamp: datetime = field(default_factory=datetime.now)
    rules: list[RuleConfigEntry] = field(default_factory=list)

    def get(self, rule_id: str) -> RuleConfigEntry | None:
        for entry in self.rules:
            if entry.id == rule_id:
                return entry
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegistryConfiguration":
        """Create RegistryConfiguration from dictionary.

        Malformed rule entries raise ``ValueError``; callers that want
        best-effort loading should go through the registry import instead.
        """
        timestamp = data.get("timestamp")
        return cls(
            version=data.get("version", CONFIGURATION_VERSION),
            timestamp=(
                datetime.fromisoformat(timestamp)
                if isinstance(timestamp, str)
                else datetime.now()
            ),
            rules=[RuleConfigEntry.from_dict(r) for r in data.get("rules", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "timestamp": self.timestamp.isoformat(),
            "rules": [r.to_dict() for r in self.rules],
        }
