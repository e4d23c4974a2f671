"""Settings for the UX smell detector.

Precedence (highest to lowest):
1. Explicit overrides
2. Environment variables (UX_SMELLS_LOG_LEVEL, UX_SMELLS_LOG_FORMAT)
3. Project config (.ux-smells/ux-smells.config.json, then ux-smells.config.json)
4. Defaults
"""

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .cli.errors import ConfigurationError
from .rules.config import RegistryConfiguration, RuleConfigEntry
from .smells_logging import get_logger

if TYPE_CHECKING:
    from .rules.registry import RuleRegistry

logger = get_logger()

CONFIG_FILENAME = "ux-smells.config.json"
CONFIG_DIRNAME = ".ux-smells"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
FORMATS = ("text", "json")


class SmellsConfig(BaseModel):
    """Project settings with validation."""

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")
    enable_file_logging: bool = Field(default=False)

    # Rules
    disabled_rules: list[str] = Field(default_factory=list)
    rule_overrides: dict[str, dict[str, Any]] = Field(default_factory=dict)

    # Output
    output_format: str = Field(default="text")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format", "output_format")
    @classmethod
    def validate_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in FORMATS:
            raise ValueError(f"format must be one of {', '.join(FORMATS)}")
        return fmt

    @field_validator("disabled_rules")
    @classmethod
    def validate_rule_ids(cls, rule_ids: list[str]) -> list[str]:
        for rule_id in rule_ids:
            if not rule_id.strip():
                raise ValueError("Rule ids must not be empty")
        return rule_ids

    def to_registry_configuration(
        self, registry: "RuleRegistry"
    ) -> RegistryConfiguration:
        """Turn these settings into a configuration for ``registry``.

        Every registered rule gets an entry: disabled if listed in
        ``disabled_rules``, enabled otherwise, carrying its override when
        one is set.
        """
        disabled = set(self.disabled_rules)
        return RegistryConfiguration(
            rules=[
                RuleConfigEntry(
                    id=rule.id,
                    enabled=rule.id not in disabled,
                    configuration=self.rule_overrides.get(rule.id),
                )
                for rule in registry.get_all_rules()
            ]
        )


class SmellsConfigLoader:
    """Loads SmellsConfig from a project directory and the environment."""

    def __init__(self, project_path: Path | None = None):
        self.project_path = Path(project_path) if project_path else Path.cwd()

    @property
    def config_path(self) -> Path | None:
        """First existing config file, or None."""
        candidates = [
            self.project_path / CONFIG_DIRNAME / CONFIG_FILENAME,
            self.project_path / CONFIG_FILENAME,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    def load(self, config_file: Path | None = None, **overrides: Any) -> SmellsConfig:
        """Load settings from all sources.

        Args:
            config_file: Explicit config file, replacing project discovery.
            **overrides: Explicit setting overrides.

        Returns:
            Validated SmellsConfig.

        Raises:
            ConfigurationError: If a config file is unreadable or invalid.
        """
        config_dict: dict[str, Any] = {}

        path = config_file or self.config_path
        if path is not None:
            config_dict.update(self._read_file(path))
            logger.debug(f"Loaded {len(config_dict)} settings from {path}")

        env_vars = {
            "log_level": os.environ.get("UX_SMELLS_LOG_LEVEL"),
            "log_format": os.environ.get("UX_SMELLS_LOG_FORMAT"),
        }
        env_count = 0
        for key, value in env_vars.items():
            if value is not None:
                config_dict[key] = value
                env_count += 1
        if env_count > 0:
            logger.debug(f"Applied {env_count} environment variables")

        config_dict.update(overrides)

        try:
            return SmellsConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings: {e.errors()[0]['msg']}",
                config_file=str(path) if path else None,
            ) from e

    def _read_file(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Config file not found: {path}", config_file=str(path)
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Config file is not valid JSON: {e}", config_file=str(path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object", config_file=str(path)
            )
        return data


def load_config(
    project_path: Path | None = None,
    config_file: Path | None = None,
    **overrides: Any,
) -> SmellsConfig:
    """Load settings for a project directory."""
    return SmellsConfigLoader(project_path).load(config_file=config_file, **overrides)
