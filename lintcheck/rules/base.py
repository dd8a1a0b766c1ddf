import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from lintcheck.dialects import PYTHON, Dialect
from lintcheck.errors import RuleConfigurationError
from lintcheck.models.correction import Correction, TextEdit
from lintcheck.models.diagnostic import Diagnostic, Severity
from lintcheck.models.location import Location
from lintcheck.models.parser.source_file import SourceFile
from lintcheck.models.rule_description import RuleDescription

logger = logging.getLogger(__name__)


class Rule(ABC, BaseModel):
    """A style rule that inspects a file and reports diagnostics.

    Class attributes describe the rule; instance fields are its
    configuration. ``comment_doesnt_violate`` and ``string_doesnt_violate``
    state whether triggering examples are expected to stay silent once they
    are embedded in a comment or a string literal.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: ClassVar[RuleDescription]
    dialect: ClassVar[Dialect] = PYTHON
    comment_doesnt_violate: ClassVar[bool] = True
    string_doesnt_violate: ClassVar[bool] = True

    severity: Severity = Severity.WARNING

    @classmethod
    def identifier(cls) -> str:
        return cls.description.identifier

    @classmethod
    def from_configuration(cls, configuration: Any = None) -> Self:
        """Build a rule from its user-facing configuration.

        Args:
            configuration: None for defaults, a severity name, or a mapping of
                option names to values.

        Raises:
            RuleConfigurationError: If the configuration is not valid for the rule.
        """
        if configuration is None:
            configuration = {}
        elif isinstance(configuration, str):
            configuration = {"severity": configuration}
        if not isinstance(configuration, Mapping):
            raise RuleConfigurationError(
                cls.identifier(),
                f"expected a severity or a mapping, got {type(configuration).__name__}",
            )
        try:
            return cls.model_validate(dict(configuration))
        except ValidationError as e:
            raise RuleConfigurationError(cls.identifier(), str(e)) from e

    @abstractmethod
    def validate_file(self, file: SourceFile) -> list[Diagnostic]:
        pass

    def make_diagnostic(self, location: Location, message: str | None = None) -> Diagnostic:
        return Diagnostic(
            rule_identifier=self.identifier(),
            rule_name=self.description.name,
            severity=self.severity,
            message=message or self.description.description,
            location=location,
        )


class CorrectableRule(Rule):
    """A rule that can also rewrite the text it flags."""

    @abstractmethod
    def edits(self, file: SourceFile) -> list[TextEdit]:
        """Propose rewrites against the current contents of ``file``."""

    def correct(self, file: SourceFile) -> list[Correction]:
        """Apply this rule's edits to ``file``.

        Edits inside regions where the rule is disabled are dropped, as are
        edits overlapping one already accepted. The rest are applied from the
        last offset to the first so earlier offsets stay valid.

        Returns:
            Corrections in ascending offset order.
        """
        accepted: list[tuple[TextEdit, Location]] = []
        for edit in sorted(self.edits(file), key=lambda e: (e.offset, e.end), reverse=True):
            location = Location.from_character_offset(file, edit.offset)
            if not file.is_rule_enabled(self.identifier(), location):
                continue
            if accepted and edit.end > accepted[-1][0].offset:
                logger.debug("Skipping overlapping %s edit at %s", self.identifier(), location)
                continue
            accepted.append((edit, location))

        if not accepted:
            return []

        contents = file.contents
        for edit, _location in accepted:
            contents = contents[: edit.offset] + edit.replacement + contents[edit.end :]
        file.replace_contents(contents)

        return [
            Correction(
                rule_identifier=self.identifier(),
                rule_name=self.description.name,
                location=location,
            )
            for _edit, location in reversed(accepted)
        ]
