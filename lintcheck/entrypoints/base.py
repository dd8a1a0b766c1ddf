import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Final

from lintcheck.configuration import Configuration
from lintcheck.dialects import dialect_for_suffix
from lintcheck.models.correction import Correction
from lintcheck.models.diagnostic import Diagnostic
from lintcheck.models.parser.source_file import StoredSourceFile
from lintcheck.services.linter import Linter
from lintcheck.services.parse_cache import ParseCache

logger = logging.getLogger(__name__)

EXCLUDED_DIR_NAMES: Final[frozenset[str]] = frozenset(
    {"__pycache__", ".git", ".venv", "venv", ".mypy_cache", ".pytest_cache"}
)


def discover_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Expand files and directories into the lintable files they contain.

    Args:
        paths: Files or directories given by the user.

    Yields:
        Paths whose suffix belongs to a known dialect, sorted per directory.

    Raises:
        ValueError: If a path does not exist.
    """
    for path in paths:
        try:
            resolved = path.resolve()
        except (OSError, RuntimeError) as e:
            raise ValueError(f"Invalid path: {path} - {e}") from e
        if not resolved.exists():
            raise ValueError(f"Path does not exist: {path}")
        if resolved.is_file():
            if dialect_for_suffix(resolved.suffix) is not None:
                yield resolved
            continue
        for candidate in sorted(resolved.rglob("*")):
            if any(part in EXCLUDED_DIR_NAMES for part in candidate.parts):
                continue
            if candidate.is_file() and dialect_for_suffix(candidate.suffix) is not None:
                yield candidate


def load_file(path: Path, cache: ParseCache) -> StoredSourceFile:
    dialect = dialect_for_suffix(path.suffix)
    if dialect is None:
        raise ValueError(f"No dialect handles files with suffix '{path.suffix}'")
    return StoredSourceFile.load(path, dialect=dialect, cache=cache)


def lint_paths(paths: Iterable[Path], configuration: Configuration) -> list[Diagnostic]:
    """Lint every discovered file and return diagnostics sorted by location."""
    cache = ParseCache()
    diagnostics: list[Diagnostic] = []
    for path in discover_files(paths):
        cache.clear()
        file = load_file(path, cache)
        diagnostics.extend(Linter(file=file, configuration=configuration).diagnostics())
    return sorted(diagnostics, key=lambda diagnostic: diagnostic.location)


def correct_paths(paths: Iterable[Path], configuration: Configuration) -> list[Correction]:
    """Correct every discovered file in place."""
    cache = ParseCache()
    corrections: list[Correction] = []
    for path in discover_files(paths):
        cache.clear()
        file = load_file(path, cache)
        corrections.extend(Linter(file=file, configuration=configuration).correct())
    return sorted(corrections, key=lambda correction: correction.location)
