from __future__ import annotations

from functools import total_ordering
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from lintcheck.models.parser.source_file import SourceFile


@total_ordering
class Location(BaseModel):
    """Position of a diagnostic or correction within a file.

    A location whose line and character are both None is file-level: the
    offset it was built from could not be mapped onto the file contents.

    Locations are totally ordered by file, then line, then character. An
    absent component sorts before any present value and two absent
    components compare equal, which keeps the order consistent with
    equality.
    """

    model_config = ConfigDict(frozen=True)

    file: str | None = None
    line: int | None = Field(default=None, ge=1)
    character: int | None = Field(default=None, ge=1)

    @classmethod
    def from_character_offset(cls, file: SourceFile, offset: int) -> Location:
        position = file.line_index.line_and_character(offset)
        if position is None:
            return cls(file=file.identifier)
        line, character = position
        return cls(file=file.identifier, line=line, character=character)

    @classmethod
    def from_byte_offset(cls, file: SourceFile, offset: int) -> Location:
        character_offset = file.line_index.character_offset(offset)
        if character_offset is None:
            return cls(file=file.identifier)
        return cls.from_character_offset(file, character_offset)

    @property
    def is_resolved(self) -> bool:
        return self.line is not None and self.character is not None

    def sort_key(self) -> tuple[bool, str, bool, int, bool, int]:
        return (
            self.file is not None,
            self.file or "",
            self.line is not None,
            self.line or 0,
            self.character is not None,
            self.character or 0,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        # {full_path_to_file}{:line}{:character}
        parts = [self.file if self.file is not None else "<nopath>"]
        if self.line is not None:
            parts.append(f":{self.line}")
        if self.character is not None:
            parts.append(f":{self.character}")
        return "".join(parts)
