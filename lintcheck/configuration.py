from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from lintcheck.dialects import Dialect
from lintcheck.errors import LintcheckError
from lintcheck.rules.base import Rule
from lintcheck.rules.registry import DEFAULT_REGISTRY, RuleRegistry

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"only_rules", "disabled_rules"})


class Configuration(BaseModel):
    """Selects which rules run and how each of them is configured.

    Attributes:
        only_rules: When set, the exhaustive list of rules allowed to run.
        disabled_rules: Rules that never run.
        configured_rules: Pre-built rule instances overriding defaults.
        registry: Rule classes available to the configuration.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    only_rules: list[str] | None = None
    disabled_rules: list[str] = Field(default_factory=list)
    configured_rules: list[Rule] = Field(default_factory=list)
    registry: RuleRegistry = Field(default=DEFAULT_REGISTRY, exclude=True)

    @classmethod
    def isolating(
        cls,
        rule_identifier: str,
        rule_configuration: Any = None,
        *,
        registry: RuleRegistry = DEFAULT_REGISTRY,
    ) -> Configuration:
        """Build a configuration that runs exactly one rule.

        Raises:
            UnknownRuleError: If the rule is not registered.
            RuleConfigurationError: If the rule rejects ``rule_configuration``.
        """
        rule = registry.get(rule_identifier).from_configuration(rule_configuration)
        return cls(only_rules=[rule_identifier], configured_rules=[rule], registry=registry)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, registry: RuleRegistry = DEFAULT_REGISTRY
    ) -> Configuration:
        only_rules = data.get("only_rules")
        disabled_rules = list(data.get("disabled_rules") or [])
        configured: list[Rule] = []
        for key, value in data.items():
            if key in RESERVED_KEYS:
                continue
            if key not in registry:
                logger.warning("Ignoring configuration for unknown rule '%s'", key)
                continue
            configured.append(registry.get(key).from_configuration(value))
        return cls(
            only_rules=list(only_rules) if only_rules is not None else None,
            disabled_rules=disabled_rules,
            configured_rules=configured,
            registry=registry,
        )

    @classmethod
    def from_yaml(
        cls, path: str | Path, *, registry: RuleRegistry = DEFAULT_REGISTRY
    ) -> Configuration:
        """Load a configuration file.

        Raises:
            OSError: If the file cannot be read.
            LintcheckError: If the file is not a YAML mapping.
            RuleConfigurationError: If a rule rejects its options.
        """
        config_path = Path(path)
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise LintcheckError(f"Failed to parse configuration {config_path}: {e}") from e
        if not isinstance(data, Mapping):
            raise LintcheckError(f"Configuration {config_path} must be a mapping")
        return cls.from_mapping(data, registry=registry)

    def is_enabled(self, rule_identifier: str) -> bool:
        if rule_identifier in self.disabled_rules:
            return False
        return self.only_rules is None or rule_identifier in self.only_rules

    @property
    def rules(self) -> list[Rule]:
        configured = {rule.identifier(): rule for rule in self.configured_rules}
        rules: list[Rule] = []
        for rule_class in self.registry:
            identifier = rule_class.identifier()
            if not self.is_enabled(identifier):
                continue
            rules.append(configured.get(identifier) or rule_class.from_configuration())
        return rules

    def rules_for(self, dialect: Dialect) -> Iterator[Rule]:
        for rule in self.rules:
            if rule.dialect.name == dialect.name:
                yield rule

