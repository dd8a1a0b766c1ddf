from lintcheck.rules.base import CorrectableRule, Rule
from lintcheck.rules.registry import DEFAULT_REGISTRY, RuleRegistry

__all__ = ["CorrectableRule", "DEFAULT_REGISTRY", "Rule", "RuleRegistry"]
