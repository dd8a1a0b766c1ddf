import logging
import uuid
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from lintcheck.configuration import Configuration
from lintcheck.dialects import Dialect
from lintcheck.models.location import Location
from lintcheck.models.parser.source_file import StoredSourceFile
from lintcheck.services.linter import Linter
from lintcheck.services.marker_codec import strip_markers
from lintcheck.services.parse_cache import ParseCache
from lintcheck.services.renderer import render_locations, render_source
from lintcheck.settings import VerifierSettings
from lintcheck.verification.report import ConformanceCheck, ConformanceFailure, FailureKind

logger = logging.getLogger(__name__)


def _format_locations(locations: Sequence[Location]) -> str:
    return "[" + ", ".join(str(location) for location in locations) + "]"


class CorrectionVerifier(BaseModel):
    """Round-trip one correction case through storage and check the outcome.

    Every call writes the de-annotated text to a freshly named scratch file
    under ``settings.scratch_dir`` and corrects it from there. Scratch files
    are left in place.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    configuration: Configuration
    dialect: Dialect
    cache: ParseCache = Field(default_factory=ParseCache)
    settings: VerifierSettings = Field(default_factory=VerifierSettings)

    def _scratch_path(self) -> Path:
        suffix = self.dialect.extensions[0] if self.dialect.extensions else ""
        return self.settings.scratch_dir / f"{uuid.uuid4().hex}{suffix}"

    def _infrastructure_failure(self, check: ConformanceCheck, message: str) -> ConformanceFailure:
        return ConformanceFailure(check=check, kind=FailureKind.INFRASTRUCTURE, message=message)

    def verify(
        self,
        before: str,
        expected: str,
        check: ConformanceCheck = ConformanceCheck.CORRECTIONS,
    ) -> list[ConformanceFailure]:
        """Correct ``before`` and compare the result with ``expected``.

        Args:
            before: Text to correct, optionally marked where edits are expected.
            expected: Exact text the correction must produce.
            check: Property the failures are reported under.

        Returns:
            Failures found; empty when the correction behaved.
        """
        self.cache.clear()
        annotated = strip_markers(before)
        path = self._scratch_path()

        try:
            path.write_text(annotated.text, encoding="utf-8", newline="")
        except OSError as e:
            logger.exception("Failed to write scratch file %s", path)
            return [self._infrastructure_failure(check, f"couldn't write scratch file {path}: {e}")]

        try:
            file = StoredSourceFile.load(path, dialect=self.dialect, cache=self.cache)
        except (OSError, UnicodeDecodeError) as e:
            logger.exception("Failed to read scratch file %s", path)
            return [self._infrastructure_failure(check, f"couldn't read scratch file {path}: {e}")]

        # Expected locations must be resolved against the contents before correction.
        expected_locations = [
            Location.from_character_offset(file, offset) for offset in annotated.marker_offsets
        ]

        try:
            corrections = sorted(
                Linter(file=file, configuration=self.configuration).correct(),
                key=lambda correction: correction.location,
            )
        except OSError as e:
            logger.exception("Failed to persist corrections to %s", path)
            return [self._infrastructure_failure(check, f"couldn't persist corrections to {path}: {e}")]

        actual_locations = [correction.location for correction in corrections]
        failures: list[ConformanceFailure] = []

        def fail(message: str, context: str = "") -> None:
            failures.append(ConformanceFailure(check=check, message=message, context=context))

        location_report = (
            f"actual locations: {_format_locations(actual_locations)}, "
            f"expected locations: {_format_locations(expected_locations)}"
        )
        if not annotated.has_markers:
            expected_count = 0 if annotated.text == expected else 1
            if len(corrections) != expected_count:
                fail(
                    f"expected {expected_count} correction(s) but got {len(corrections)}; "
                    + location_report,
                    render_locations(actual_locations, annotated.text),
                )
        else:
            if len(corrections) != len(expected_locations):
                fail(
                    f"expected {len(expected_locations)} correction(s) but got "
                    f"{len(corrections)}; " + location_report,
                    render_locations(actual_locations, annotated.text),
                )
            if any(
                actual != wanted for actual, wanted in zip(actual_locations, expected_locations)
            ):
                fail(
                    "correction locations didn't match expected locations; " + location_report,
                    render_locations(expected_locations, annotated.text),
                )

        if file.contents != expected:
            fail(
                "corrected contents differ from expected contents",
                "actual:\n" + render_source(file.contents) + "\nexpected:\n" + render_source(expected),
            )

        try:
            persisted = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.exception("Failed to re-read scratch file %s", path)
            failures.append(
                self._infrastructure_failure(check, f"couldn't re-read scratch file {path}: {e}")
            )
            return failures

        if persisted != expected:
            fail(
                f"persisted contents of {path} differ from expected contents",
                "persisted:\n" + render_source(persisted) + "\nexpected:\n" + render_source(expected),
            )

        for failure in failures:
            logger.warning("Correction check failed for %s: %s", path, failure.message)
        return failures
