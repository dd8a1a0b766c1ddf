import pytest

from lintcheck.rules.none_comparison import NoneComparisonRule
from lintcheck.rules.registry import RuleRegistry
from lintcheck.rules.weak_delegate import WeakDelegateRule
from lintcheck.settings import VerifierSettings
from lintcheck.verification import (
    ConformanceCheck,
    ConformanceError,
    ConformanceVerifier,
    FailureKind,
    verify_rule,
)
from tests.verification.fake_rules import (
    AssignmentRule,
    DirectiveIgnoringRule,
    DuplicatingAssignmentRule,
    EverywhereRule,
    OffByOneAssignmentRule,
    OverEagerRule,
    RequiredLimitRule,
    SilentRule,
    SloppyTrailingWhitespaceRule,
    ThresholdRule,
    TrailingWhitespaceRule,
)


def _checks(report) -> set[ConformanceCheck]:
    return {failure.check for failure in report.failures}


@pytest.mark.parametrize("rule", [NoneComparisonRule, WeakDelegateRule])
def test_verify_rule__builtin_rules__pass(rule, settings: VerifierSettings) -> None:
    report = verify_rule(rule, settings=settings)

    assert report.passed, report.summary()
    report.raise_for_failures()


def test_verify_rule__rule_reporting_at_markers__passes(settings: VerifierSettings) -> None:
    report = verify_rule(AssignmentRule, settings=settings)

    assert report.passed, report.summary()
    assert report.rule_identifier == "assignment"


def test_verify_rule__correctable_rule__passes(settings: VerifierSettings) -> None:
    report = verify_rule(TrailingWhitespaceRule, settings=settings)

    assert report.passed, report.summary()


def test_verify_rule__off_by_one_locations__reports_every_mismatch(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(OffByOneAssignmentRule, settings=settings)

    failures = report.failures_for(ConformanceCheck.LOCALIZED_TRIGGERING)
    assert _checks(report) == {ConformanceCheck.LOCALIZED_TRIGGERING}
    assert len(failures) == 6
    messages = [failure.message for failure in failures]
    assert messages.count("triggering example violated at unexpected location(s)") == 2
    assert messages.count("triggering example did not violate at expected location(s)") == 2
    assert sum(message.startswith("violations didn't match") for message in messages) == 2
    assert "<nopath>:1:4 != <nopath>:1:3" in messages[2]


def test_verify_rule__duplicate_diagnostics__reports_counts(settings: VerifierSettings) -> None:
    report = verify_rule(DuplicatingAssignmentRule, settings=settings)

    localized = report.failures_for(ConformanceCheck.LOCALIZED_TRIGGERING)
    assert [failure.message for failure in localized] == [
        "expected 1 violation(s) but got 2",
        "expected 1 violation(s) but got 2",
    ]
    assert _checks(report) == {
        ConformanceCheck.LOCALIZED_TRIGGERING,
        ConformanceCheck.COMMENT_CONTEXT,
        ConformanceCheck.STRING_CONTEXT,
    }
    assert "expected 2 violation(s)" in report.failures_for(ConformanceCheck.COMMENT_CONTEXT)[0].message


def test_verify_rule__rule_ignoring_context__fails_context_checks(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(EverywhereRule, settings=settings)

    assert _checks(report) == {
        ConformanceCheck.NON_TRIGGERING,
        ConformanceCheck.COMMENT_CONTEXT,
        ConformanceCheck.STRING_CONTEXT,
    }
    non_triggering = report.failures_for(ConformanceCheck.NON_TRIGGERING)[0]
    assert non_triggering.message == "non-triggering example violated 1 time(s)"
    assert "^ warning: Everywhere Violation" in non_triggering.context
    assert all(failure.kind == FailureKind.ASSERTION for failure in report.failures)


def test_verify_rule__unmarked_trigger_without_violation__fails(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(SilentRule, settings=settings)

    assert [failure.check for failure in report.failures] == [
        ConformanceCheck.UNLOCALIZED_TRIGGERING
    ]
    assert report.failures[0].message == "triggering example did not violate"


def test_verify_rule__invalid_configuration__stops_with_construction_failure(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(ThresholdRule, {"threshold": "many"}, settings=settings)

    assert len(report.failures) == 1
    failure = report.failures[0]
    assert failure.check == ConformanceCheck.CONFIGURATION
    assert failure.kind == FailureKind.CONSTRUCTION
    assert "threshold" in failure.message


def test_verify_rule__rule_without_usable_defaults__stops_with_construction_failure(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(RequiredLimitRule, settings=settings)

    assert [failure.kind for failure in report.failures] == [FailureKind.CONSTRUCTION]
    assert report.failures[0].check == ConformanceCheck.CONFIGURATION
    assert "limit" in report.failures[0].message


def test_verify_rule__valid_configuration__is_used(settings: VerifierSettings) -> None:
    report = verify_rule(ThresholdRule, {"threshold": 3}, settings=settings)

    assert report.passed


def test_conformance_verifier__unregistered_rule__reports_construction_failure(
    settings: VerifierSettings,
) -> None:
    verifier = ConformanceVerifier(
        description=AssignmentRule.description, registry=RuleRegistry(), settings=settings
    )

    report = verifier.verify()

    assert [failure.kind for failure in report.failures] == [FailureKind.CONSTRUCTION]
    assert "assignment" in report.failures[0].message


def test_verify_rule__partial_correction__fails_content_checks(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(SloppyTrailingWhitespaceRule, settings=settings)

    assert _checks(report) == {ConformanceCheck.CORRECTIONS}
    messages = [failure.message for failure in report.failures]
    assert messages[0] == "corrected contents differ from expected contents"
    assert messages[1].startswith("persisted contents of ")


def test_verify_rule__correction_ignoring_directive__fails_disabled_corrections(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(DirectiveIgnoringRule, settings=settings)

    failures = report.failures_for(ConformanceCheck.DISABLED_CORRECTIONS)
    assert failures
    assert _checks(report) == {ConformanceCheck.DISABLED_CORRECTIONS}
    assert failures[0].message.startswith("expected 0 correction(s) but got 1")


def test_verify_rule__correcting_unflagged_code__fails_correction_stability(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(OverEagerRule, settings=settings)

    assert _checks(report) == {ConformanceCheck.CORRECTION_STABILITY}
    messages = [failure.message for failure in report.failures]
    assert len(messages) == 3
    assert messages[0].startswith("expected 0 correction(s) but got 1")
    assert messages[1] == "corrected contents differ from expected contents"
    assert messages[2].startswith("persisted contents of ")
    assert "b=2" in report.failures[1].context


def test_verify_rule__missing_scratch_dir__reports_infrastructure_failures(tmp_path) -> None:
    settings = VerifierSettings(scratch_dir=tmp_path / "missing")

    report = verify_rule(TrailingWhitespaceRule, settings=settings)

    assert [failure.check for failure in report.failures] == [
        ConformanceCheck.CORRECTIONS,
        ConformanceCheck.CORRECTION_STABILITY,
        ConformanceCheck.DISABLED_CORRECTIONS,
    ]
    assert all(failure.kind == FailureKind.INFRASTRUCTURE for failure in report.failures)


def test_raise_for_failures__failing_report__raises_with_summary(
    settings: VerifierSettings,
) -> None:
    report = verify_rule(SilentRule, settings=settings)

    with pytest.raises(ConformanceError) as excinfo:
        report.raise_for_failures()

    assert excinfo.value.report is report
    assert "silent: 1 conformance failure(s)" in str(excinfo.value)
    assert "[unlocalized_triggering]" in str(excinfo.value)
