from pydantic import BaseModel, ConfigDict, Field

from lintcheck.models.location import Location


class TextEdit(BaseModel):
    """A rewrite proposed by a rule, in character offsets of the unmodified text."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(..., ge=0)
    length: int = Field(default=0, ge=0)
    replacement: str

    @property
    def end(self) -> int:
        return self.offset + self.length


class Correction(BaseModel):
    """Record that a rule rewrote the file at a location.

    Corrections are compared by position only; the rewritten content is
    checked on the file as a whole.
    """

    model_config = ConfigDict(frozen=True)

    rule_identifier: str
    rule_name: str
    location: Location

    def __str__(self) -> str:
        return f"{self.location} Corrected {self.rule_name}"
