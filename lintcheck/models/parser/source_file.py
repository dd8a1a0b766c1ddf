import logging
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field
from tree_sitter import Tree

from lintcheck.dialects import PYTHON, Dialect
from lintcheck.models.line_index import LineIndex
from lintcheck.models.location import Location
from lintcheck.services.commands import DisableCommand, parse_disable_commands
from lintcheck.services.parse_cache import ParseCache

logger = logging.getLogger(__name__)


class SourceFile(BaseModel):
    """In-memory view of source text that rules run against."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    contents: str
    dialect: Dialect = PYTHON
    cache: ParseCache = Field(default_factory=ParseCache, exclude=True)

    @property
    def path(self) -> Path | None:
        return None

    @property
    def identifier(self) -> str | None:
        """File identifier stamped on locations, None for in-memory text."""
        return None

    @property
    def line_index(self) -> LineIndex:
        return self.cache.line_index(self.contents)

    @property
    def tree(self) -> Tree:
        return self.cache.tree(self.dialect, self.contents)

    @property
    def disable_commands(self) -> list[DisableCommand]:
        return parse_disable_commands(self.contents, self.dialect)

    def is_rule_enabled(self, rule_identifier: str, location: Location) -> bool:
        return not any(
            command.applies_to(rule_identifier) and command.covers(location)
            for command in self.disable_commands
        )

    def replace_contents(self, contents: str) -> None:
        self.contents = contents


class StoredSourceFile(SourceFile):
    """Storage-backed view: writes go to disk before they reach memory."""

    stored_path: Path

    @classmethod
    def load(
        cls, path: Path, dialect: Dialect = PYTHON, cache: ParseCache | None = None
    ) -> Self:
        """Read a file from storage.

        Raises:
            OSError: If the file cannot be read.
        """
        contents = path.read_bytes().decode("utf-8")
        return cls(
            contents=contents,
            stored_path=path,
            dialect=dialect,
            cache=cache if cache is not None else ParseCache(),
        )

    @property
    def path(self) -> Path:
        return self.stored_path

    @property
    def identifier(self) -> str:
        return str(self.stored_path)

    def replace_contents(self, contents: str) -> None:
        try:
            self.stored_path.write_text(contents, encoding="utf-8", newline="")
        except OSError:
            logger.exception("Failed to write corrected contents to %s", self.stored_path)
            raise
        super().replace_contents(contents)
