import re
from bisect import bisect_right
from typing import Final

NEWLINE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split text on line breaks without yielding a trailing empty line."""
    lines = NEWLINE_PATTERN.split(text)
    if lines and lines[-1] == "" and len(lines) > 1:
        lines.pop()
    return lines


class LineIndex:
    """Translate offsets within a piece of text into line/character pairs.

    Offsets are character (code point) offsets unless stated otherwise.
    Line and character numbers are 1-based.
    """

    def __init__(self, contents: str) -> None:
        self._length: int = len(contents)
        self._line_starts: list[int] = [0] + [
            match.end() for match in NEWLINE_PATTERN.finditer(contents)
        ]
        self._byte_to_character: dict[int, int] | None = None
        if len(contents.encode("utf-8")) != self._length:
            mapping: dict[int, int] = {}
            position = 0
            for index, char in enumerate(contents):
                mapping[position] = index
                position += len(char.encode("utf-8"))
            mapping[position] = self._length
            self._byte_to_character = mapping

    def character_offset(self, byte_offset: int) -> int | None:
        """Map a UTF-8 byte offset to a character offset.

        Returns None when the offset is out of range or points inside a
        multi-byte character.
        """
        if self._byte_to_character is None:
            if 0 <= byte_offset <= self._length:
                return byte_offset
            return None
        return self._byte_to_character.get(byte_offset)

    def line_and_character(self, offset: int) -> tuple[int, int] | None:
        if offset < 0 or offset > self._length:
            return None
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1
