from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from lintcheck.models.location import Location


class Severity(StrEnum):
    """Severity levels a rule can report with."""

    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A single rule violation reported against a file."""

    model_config = ConfigDict(frozen=True)

    rule_identifier: str = Field(..., description="Identifier of the triggered rule")
    rule_name: str = Field(..., description="Human-readable rule name")
    severity: Severity = Field(..., description="Reported severity level")
    message: str = Field(..., description="Human-readable description of the issue")
    location: Location = Field(..., description="Where the violation occurs")

    def __str__(self) -> str:
        return (
            f"{self.location}: {self.severity}: {self.rule_name} Violation: "
            f"{self.message} ({self.rule_identifier})"
        )
