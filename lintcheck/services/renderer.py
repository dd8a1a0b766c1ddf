from collections.abc import Iterable

from lintcheck.models.diagnostic import Diagnostic
from lintcheck.models.line_index import split_lines
from lintcheck.models.location import Location
from lintcheck.services.marker_codec import VIOLATION_MARKER

FENCE = "```"


def _fenced(lines: list[str]) -> str:
    return "\n".join([FENCE, *lines, FENCE])


def diagnostic_message(diagnostic: Diagnostic) -> str:
    return (
        f"{diagnostic.severity}: {diagnostic.rule_name} Violation: "
        f"{diagnostic.message} ({diagnostic.rule_identifier})"
    )


def render_diagnostics(diagnostics: Iterable[Diagnostic], text: str) -> str:
    """Annotate text with a caret line below every diagnosed line.

    Diagnostics are applied from the last location to the first so that an
    inserted line never shifts the lines still waiting for annotation.
    Diagnostics without a position are listed after the fenced block.
    """
    lines = split_lines(text)
    unplaced: list[Diagnostic] = []
    for diagnostic in sorted(diagnostics, key=lambda d: d.location, reverse=True):
        line, character = diagnostic.location.line, diagnostic.location.character
        if line is None or character is None:
            unplaced.append(diagnostic)
            continue
        annotation = " " * (character - 1) + "^ " + diagnostic_message(diagnostic)
        if line >= len(lines):
            lines.append(annotation)
        else:
            lines.insert(line, annotation)

    rendered = _fenced(lines)
    if unplaced:
        rendered += "\nDiagnostics without a position:\n" + "\n".join(
            f"  {diagnostic}" for diagnostic in reversed(unplaced)
        )
    return rendered


def render_locations(
    locations: Iterable[Location], text: str, marker: str = VIOLATION_MARKER
) -> str:
    """Reinsert markers at the given locations, from the last one to the first."""
    lines = split_lines(text)
    for location in sorted(locations, reverse=True):
        line, character = location.line, location.character
        if line is None or character is None:
            continue
        if line > len(lines):
            lines.extend([""] * (line - len(lines)))
        content = lines[line - 1]
        index = min(character - 1, len(content))
        lines[line - 1] = content[:index] + marker + content[index:]
    return _fenced(lines)


def render_source(text: str) -> str:
    """Fence text as-is for inclusion in failure reports."""
    return _fenced(split_lines(text))
