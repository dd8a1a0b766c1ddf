from typing import Final

from lintcheck.models.annotated_text import AnnotatedText

VIOLATION_MARKER: Final[str] = "↓"


def strip_markers(text: str, marker: str = VIOLATION_MARKER) -> AnnotatedText:
    """Remove violation markers from example text.

    Offsets are recorded against the text with every earlier marker already
    removed, so adjacent markers resolve to the same offset.

    Args:
        text: Example text possibly containing markers.
        marker: Single reserved character used as the marker.

    Returns:
        AnnotatedText: Clean text and the ascending marker offsets within it.
    """
    offsets: list[int] = []
    index = text.find(marker)
    while index != -1:
        offsets.append(index)
        text = text[:index] + text[index + len(marker):]
        index = text.find(marker, index)
    return AnnotatedText(text=text, marker_offsets=tuple(sorted(offsets)))
