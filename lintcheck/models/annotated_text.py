from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AnnotatedText(BaseModel):
    """Example text paired with the offsets where violations are expected.

    Offsets index into ``text`` and are kept in ascending order.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    marker_offsets: tuple[int, ...] = Field(default=())

    @model_validator(mode="after")
    def validate_offsets(self) -> Self:
        if list(self.marker_offsets) != sorted(self.marker_offsets):
            raise ValueError("marker_offsets must be in ascending order")
        if any(offset < 0 or offset > len(self.text) for offset in self.marker_offsets):
            raise ValueError("marker_offsets must fall within text")
        return self

    @property
    def has_markers(self) -> bool:
        return bool(self.marker_offsets)
