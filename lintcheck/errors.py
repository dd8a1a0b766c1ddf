class LintcheckError(Exception):
    """Base class for errors raised by lintcheck."""


class RuleConfigurationError(LintcheckError):
    """Raised when a rule rejects the configuration it was given."""

    def __init__(self, rule_identifier: str, reason: str) -> None:
        super().__init__(f"Invalid configuration for rule '{rule_identifier}': {reason}")
        self.rule_identifier = rule_identifier
        self.reason = reason


class UnknownRuleError(LintcheckError):
    def __init__(self, rule_identifier: str) -> None:
        super().__init__(f"Unknown rule: {rule_identifier}")
        self.rule_identifier = rule_identifier


class ParseError(LintcheckError):
    """Raised when source text cannot be turned into a syntax tree."""
