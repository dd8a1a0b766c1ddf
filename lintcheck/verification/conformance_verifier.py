import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from lintcheck.configuration import Configuration
from lintcheck.dialects import Dialect
from lintcheck.errors import RuleConfigurationError, UnknownRuleError
from lintcheck.models.diagnostic import Diagnostic
from lintcheck.models.location import Location
from lintcheck.models.parser.source_file import SourceFile
from lintcheck.models.rule_description import RuleDescription
from lintcheck.rules.base import Rule
from lintcheck.rules.registry import DEFAULT_REGISTRY, RuleRegistry
from lintcheck.services.linter import Linter
from lintcheck.services.marker_codec import strip_markers
from lintcheck.services.parse_cache import ParseCache
from lintcheck.services.renderer import render_diagnostics, render_locations, render_source
from lintcheck.settings import VerifierSettings
from lintcheck.verification.correction_verifier import CorrectionVerifier
from lintcheck.verification.report import (
    ConformanceCheck,
    ConformanceFailure,
    FailureKind,
    VerificationReport,
)

logger = logging.getLogger(__name__)

type Check = Callable[[Configuration, Dialect], list[ConformanceFailure]]


class ConformanceVerifier(BaseModel):
    """Verify a rule against the examples its description declares.

    Every property is checked and reported independently, so a single run
    surfaces every defect of the rule. Only a rule that cannot be
    constructed stops the run early.

    Attributes:
        description: Declared metadata of the rule under test.
        rule_configuration: Optional rule-specific configuration.
        comment_doesnt_violate: Triggering examples stay silent inside a comment.
        string_doesnt_violate: Triggering examples stay silent inside a string literal.
        registry: Registry the rule is looked up in.
        settings: Scratch storage settings for correction round trips.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    description: RuleDescription
    rule_configuration: Any = None
    comment_doesnt_violate: bool = True
    string_doesnt_violate: bool = True
    registry: RuleRegistry = Field(default=DEFAULT_REGISTRY, exclude=True)
    settings: VerifierSettings = Field(default_factory=VerifierSettings)
    _cache: ParseCache = PrivateAttr(default_factory=ParseCache)

    @property
    def identifier(self) -> str:
        return self.description.identifier

    def verify(self) -> VerificationReport:
        report = VerificationReport(rule_identifier=self.identifier)
        logger.info("Verifying rule %s", self.identifier)

        try:
            dialect = self.registry.get(self.identifier).dialect
            configuration = Configuration.isolating(
                self.identifier, self.rule_configuration, registry=self.registry
            )
        except (UnknownRuleError, RuleConfigurationError) as e:
            logger.error("Cannot construct rule %s: %s", self.identifier, e)
            report.failures.append(
                ConformanceFailure(
                    check=ConformanceCheck.CONFIGURATION,
                    kind=FailureKind.CONSTRUCTION,
                    message=str(e),
                )
            )
            return report

        checks: list[Check] = [
            self._check_non_triggering,
            self._check_triggering,
            self._check_comment_context,
            self._check_string_context,
            self._check_disable_directive,
            self._check_corrections,
            self._check_correction_stability,
            self._check_disabled_corrections,
        ]
        for check in checks:
            self._cache.clear()
            failures = check(configuration, dialect)
            for failure in failures:
                logger.warning("%s failed %s: %s", self.identifier, failure.check, failure.message)
            report.failures.extend(failures)

        logger.info("Rule %s finished with %d failure(s)", self.identifier, len(report.failures))
        return report

    def _violations(
        self, text: str, configuration: Configuration, dialect: Dialect
    ) -> list[Diagnostic]:
        self._cache.clear()
        file = SourceFile(contents=text, dialect=dialect, cache=self._cache)
        return Linter(file=file, configuration=configuration).diagnostics()

    def _correction_verifier(
        self, configuration: Configuration, dialect: Dialect
    ) -> CorrectionVerifier:
        return CorrectionVerifier(
            configuration=configuration,
            dialect=dialect,
            cache=self._cache,
            settings=self.settings,
        )

    def _check_non_triggering(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        failures: list[ConformanceFailure] = []
        for example in self.description.non_triggering_examples:
            text = strip_markers(example).text
            diagnostics = self._violations(text, configuration, dialect)
            if diagnostics:
                failures.append(
                    ConformanceFailure(
                        check=ConformanceCheck.NON_TRIGGERING,
                        message=f"non-triggering example violated {len(diagnostics)} time(s)",
                        context=render_diagnostics(diagnostics, text),
                    )
                )
        return failures

    def _check_triggering(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        failures: list[ConformanceFailure] = []
        for example in self.description.triggering_examples:
            annotated = strip_markers(example)
            diagnostics = sorted(
                self._violations(annotated.text, configuration, dialect),
                key=lambda diagnostic: diagnostic.location,
            )

            if not annotated.has_markers:
                if not diagnostics:
                    failures.append(
                        ConformanceFailure(
                            check=ConformanceCheck.UNLOCALIZED_TRIGGERING,
                            message="triggering example did not violate",
                            context=render_source(annotated.text),
                        )
                    )
                continue

            failures.extend(
                self._compare_locations(
                    annotated.text, annotated.marker_offsets, diagnostics, dialect
                )
            )
        return failures

    def _compare_locations(
        self,
        text: str,
        offsets: tuple[int, ...],
        diagnostics: list[Diagnostic],
        dialect: Dialect,
    ) -> list[ConformanceFailure]:
        file = SourceFile(contents=text, dialect=dialect, cache=self._cache)
        expected = [Location.from_character_offset(file, offset) for offset in offsets]
        actual = [diagnostic.location for diagnostic in diagnostics]
        failures: list[ConformanceFailure] = []

        def fail(message: str, context: str) -> None:
            failures.append(
                ConformanceFailure(
                    check=ConformanceCheck.LOCALIZED_TRIGGERING, message=message, context=context
                )
            )

        unexpected = [diagnostic for diagnostic in diagnostics if diagnostic.location not in expected]
        if unexpected:
            fail(
                "triggering example violated at unexpected location(s)",
                render_diagnostics(unexpected, text),
            )

        missing = [location for location in expected if location not in actual]
        if missing:
            fail(
                "triggering example did not violate at expected location(s)",
                render_locations(missing, text),
            )

        if len(actual) != len(expected):
            fail(
                f"expected {len(expected)} violation(s) but got {len(actual)}",
                render_diagnostics(diagnostics, text),
            )

        mismatched = [
            (found, wanted) for found, wanted in zip(actual, expected) if found != wanted
        ]
        if mismatched:
            pairs = ", ".join(f"{found} != {wanted}" for found, wanted in mismatched)
            fail(
                f"violations didn't match expected locations: {pairs}",
                render_locations(expected, text),
            )
        return failures

    def _check_embedded(
        self,
        check: ConformanceCheck,
        embed: Callable[[str], str],
        expected_per_trigger: int,
        configuration: Configuration,
        dialect: Dialect,
    ) -> list[ConformanceFailure]:
        triggers = self.description.triggering_examples
        total = 0
        contexts: list[str] = []
        for example in triggers:
            embedded = embed(strip_markers(example).text)
            diagnostics = self._violations(embedded, configuration, dialect)
            total += len(diagnostics)
            if len(diagnostics) != expected_per_trigger:
                contexts.append(render_diagnostics(diagnostics, embedded))

        expected_total = expected_per_trigger * len(triggers)
        if total == expected_total:
            return []
        return [
            ConformanceFailure(
                check=check,
                message=f"expected {expected_total} violation(s) across {len(triggers)} "
                f"embedded triggering example(s) but got {total}",
                context="\n".join(contexts),
            )
        ]

    def _check_comment_context(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        return self._check_embedded(
            ConformanceCheck.COMMENT_CONTEXT,
            dialect.comment_out,
            0 if self.comment_doesnt_violate else 1,
            configuration,
            dialect,
        )

    def _check_string_context(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        return self._check_embedded(
            ConformanceCheck.STRING_CONTEXT,
            dialect.string_literal,
            0 if self.string_doesnt_violate else 1,
            configuration,
            dialect,
        )

    def _check_disable_directive(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        directive = dialect.disable_directive(self.identifier)
        return self._check_embedded(
            ConformanceCheck.DISABLE_DIRECTIVE,
            lambda text: directive + text,
            0,
            configuration,
            dialect,
        )

    def _check_corrections(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        verifier = self._correction_verifier(configuration, dialect)
        failures: list[ConformanceFailure] = []
        for correction in self.description.corrections:
            failures.extend(
                verifier.verify(correction.before, correction.after, ConformanceCheck.CORRECTIONS)
            )
        return failures

    def _check_correction_stability(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        verifier = self._correction_verifier(configuration, dialect)
        failures: list[ConformanceFailure] = []
        for example in self.description.non_triggering_examples:
            failures.extend(verifier.verify(example, example, ConformanceCheck.CORRECTION_STABILITY))
        return failures

    def _check_disabled_corrections(
        self, configuration: Configuration, dialect: Dialect
    ) -> list[ConformanceFailure]:
        verifier = self._correction_verifier(configuration, dialect)
        directive = dialect.disable_directive(self.identifier)
        failures: list[ConformanceFailure] = []
        for correction in self.description.corrections:
            cleaned = strip_markers(directive + correction.before).text
            failures.extend(verifier.verify(cleaned, cleaned, ConformanceCheck.DISABLED_CORRECTIONS))
        return failures


def verify_rule(
    rule: type[Rule],
    rule_configuration: Any = None,
    *,
    comment_doesnt_violate: bool | None = None,
    string_doesnt_violate: bool | None = None,
    settings: VerifierSettings | None = None,
) -> VerificationReport:
    """Verify ``rule`` in isolation, defaulting flags to those the rule declares."""
    verifier = ConformanceVerifier(
        description=rule.description,
        rule_configuration=rule_configuration,
        comment_doesnt_violate=(
            rule.comment_doesnt_violate if comment_doesnt_violate is None else comment_doesnt_violate
        ),
        string_doesnt_violate=(
            rule.string_doesnt_violate if string_doesnt_violate is None else string_doesnt_violate
        ),
        registry=RuleRegistry([rule]),
        settings=settings or VerifierSettings(),
    )
    return verifier.verify()
