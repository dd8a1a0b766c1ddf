from collections.abc import Iterable, Iterator

from lintcheck.errors import UnknownRuleError
from lintcheck.rules.base import Rule
from lintcheck.rules.none_comparison import NoneComparisonRule
from lintcheck.rules.weak_delegate import WeakDelegateRule


class RuleRegistry:
    """Mapping of rule identifiers to rule classes."""

    def __init__(self, rules: Iterable[type[Rule]] = ()) -> None:
        self._rules: dict[str, type[Rule]] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: type[Rule]) -> type[Rule]:
        identifier = rule.identifier()
        if identifier in self._rules and self._rules[identifier] is not rule:
            raise ValueError(f"Rule identifier already registered: {identifier}")
        self._rules[identifier] = rule
        return rule

    def get(self, identifier: str) -> type[Rule]:
        try:
            return self._rules[identifier]
        except KeyError:
            raise UnknownRuleError(identifier) from None

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._rules

    def __iter__(self) -> Iterator[type[Rule]]:
        return iter(sorted(self._rules.values(), key=lambda rule: rule.identifier()))

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def identifiers(self) -> list[str]:
        return sorted(self._rules)


DEFAULT_REGISTRY = RuleRegistry([NoneComparisonRule, WeakDelegateRule])
