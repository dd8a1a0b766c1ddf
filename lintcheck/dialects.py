from collections.abc import Callable
from typing import Any, Final

import tree_sitter_python as tspython
from pydantic import BaseModel, ConfigDict, Field

DIRECTIVE_PREFIX: Final[str] = "lintcheck"


class Dialect(BaseModel):
    """Lexical profile of a source language rules can be written for.

    Attributes:
        name: Unique dialect name.
        extensions: File suffixes handled by the dialect, first one preferred.
        line_comment: Token starting a comment that runs to the end of the line.
        block_comment: Opening and closing delimiters of a block comment, if any.
        string_quotes: Characters opening a string literal; tripled, they open
            a multi-line literal.
        language_loader: Callable returning the tree-sitter language pointer,
            or None when the dialect is only analysed lexically.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    extensions: tuple[str, ...] = Field(default=())
    line_comment: str
    block_comment: tuple[str, str] | None = None
    string_quotes: tuple[str, ...] = Field(default=('"',))
    language_loader: Callable[[], Any] | None = Field(default=None, exclude=True)

    @property
    def has_grammar(self) -> bool:
        return self.language_loader is not None

    def comment_out(self, text: str) -> str:
        if self.block_comment is not None:
            opening, closing = self.block_comment
            return f"{opening}\n  {text}\n {closing}"
        return "\n".join(
            f"{self.line_comment} {line}" if line else self.line_comment
            for line in text.split("\n")
        )

    def string_literal(self, text: str) -> str:
        escaped = (
            text.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\r", "\\r")
            .replace("\n", "\\n")
        )
        return f'"{escaped}"'

    def disable_directive(self, rule_identifier: str) -> str:
        return f"{self.line_comment} {DIRECTIVE_PREFIX}:disable {rule_identifier}\n"

    def matches(self, suffix: str) -> bool:
        return suffix.lower() in self.extensions


PYTHON: Final[Dialect] = Dialect(
    name="python",
    extensions=(".py",),
    line_comment="#",
    string_quotes=('"', "'"),
    language_loader=tspython.language,
)

SWIFT: Final[Dialect] = Dialect(
    name="swift",
    extensions=(".swift",),
    line_comment="//",
    block_comment=("/*", "*/"),
)

DIALECTS: Final[tuple[Dialect, ...]] = (PYTHON, SWIFT)


def dialect_for_suffix(suffix: str) -> Dialect | None:
    for dialect in DIALECTS:
        if dialect.matches(suffix):
            return dialect
    return None
