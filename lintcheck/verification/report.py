from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ConformanceCheck(StrEnum):
    """Independent properties verified against a rule."""

    CONFIGURATION = "configuration"
    NON_TRIGGERING = "non_triggering"
    UNLOCALIZED_TRIGGERING = "unlocalized_triggering"
    LOCALIZED_TRIGGERING = "localized_triggering"
    COMMENT_CONTEXT = "comment_context"
    STRING_CONTEXT = "string_context"
    DISABLE_DIRECTIVE = "disable_directive"
    CORRECTIONS = "corrections"
    CORRECTION_STABILITY = "correction_stability"
    DISABLED_CORRECTIONS = "disabled_corrections"


class FailureKind(StrEnum):
    ASSERTION = "assertion"
    INFRASTRUCTURE = "infrastructure"
    CONSTRUCTION = "construction"


class ConformanceFailure(BaseModel):
    """A single property that did not hold.

    Attributes:
        check: Property that failed.
        kind: Whether the rule misbehaved, the environment failed, or the
            rule could not be constructed at all.
        message: What went wrong, including counts and location lists.
        context: Rendered source annotated with diagnostics or markers.
    """

    model_config = ConfigDict(frozen=True)

    check: ConformanceCheck
    kind: FailureKind = FailureKind.ASSERTION
    message: str
    context: str = ""

    def __str__(self) -> str:
        text = f"[{self.check}] {self.message}"
        if self.context:
            text += f"\n{self.context}"
        return text


class ConformanceError(AssertionError):
    """Raised when a verification report contains failures."""

    def __init__(self, report: "VerificationReport") -> None:
        super().__init__(report.summary())
        self.report = report


class VerificationReport(BaseModel):
    """Every failure found while verifying one rule."""

    rule_identifier: str
    failures: list[ConformanceFailure] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def failures_for(self, check: ConformanceCheck) -> list[ConformanceFailure]:
        return [failure for failure in self.failures if failure.check == check]

    def summary(self) -> str:
        if self.passed:
            return f"{self.rule_identifier}: all conformance checks passed"
        lines = [f"{self.rule_identifier}: {len(self.failures)} conformance failure(s)"]
        lines.extend(str(failure) for failure in self.failures)
        return "\n\n".join(lines)

    def raise_for_failures(self) -> None:
        if self.failures:
            raise ConformanceError(self)
