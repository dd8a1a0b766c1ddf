import re
from enum import StrEnum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from lintcheck.dialects import DIRECTIVE_PREFIX, Dialect
from lintcheck.models.line_index import split_lines
from lintcheck.models.location import Location
from lintcheck.utils.lexing import mask_literals

ALL_RULES: Final[str] = "all"


class CommandModifier(StrEnum):
    """Scope of a disable directive."""

    NONE = ""
    NEXT = "next"
    THIS = "this"
    PREVIOUS = "previous"


class DisableCommand(BaseModel):
    """A disable directive found in source text."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=1)
    character: int = Field(..., ge=1)
    rule_identifiers: frozenset[str]
    modifier: CommandModifier = CommandModifier.NONE

    def applies_to(self, rule_identifier: str) -> bool:
        return ALL_RULES in self.rule_identifiers or rule_identifier in self.rule_identifiers

    def covers(self, location: Location) -> bool:
        if location.line is None:
            return False
        match self.modifier:
            case CommandModifier.NEXT:
                return location.line == self.line + 1
            case CommandModifier.THIS:
                return location.line == self.line
            case CommandModifier.PREVIOUS:
                return location.line == self.line - 1
            case _:
                return (location.line, location.character or 0) >= (self.line, self.character)


def _directive_pattern(dialect: Dialect) -> re.Pattern[str]:
    return re.compile(
        re.escape(dialect.line_comment)
        + r"\s*"
        + re.escape(DIRECTIVE_PREFIX)
        + r":disable(?::(?P<modifier>next|this|previous))?"
        + r"[ \t]+(?P<rules>\w+(?:[ \t]*,?[ \t]*\w+)*)"
    )


def parse_disable_commands(contents: str, dialect: Dialect) -> list[DisableCommand]:
    """Collect every disable directive in ``contents``, in source order.

    Directive text inside a string literal is not a directive.
    """
    pattern = _directive_pattern(dialect)
    code = mask_literals(contents, dialect, comments=False)
    commands: list[DisableCommand] = []
    for line_number, line in enumerate(split_lines(code), start=1):
        for match in pattern.finditer(line):
            identifiers = frozenset(re.split(r"[\s,]+", match.group("rules").strip()))
            commands.append(
                DisableCommand(
                    line=line_number,
                    character=match.start() + 1,
                    rule_identifiers=identifiers,
                    modifier=CommandModifier(match.group("modifier") or ""),
                )
            )
    return commands
