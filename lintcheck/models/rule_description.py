from pydantic import BaseModel, ConfigDict, Field


class CorrectionExample(BaseModel):
    """A declared correction case.

    ``before`` may carry violation markers at the positions where edits are
    expected; ``after`` is the exact text the correction must produce.
    """

    model_config = ConfigDict(frozen=True)

    before: str
    after: str


class RuleDescription(BaseModel):
    """Static metadata a rule declares about itself."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., pattern=r"^\w+$")
    name: str
    description: str
    non_triggering_examples: tuple[str, ...] = ()
    triggering_examples: tuple[str, ...] = ()
    corrections: tuple[CorrectionExample, ...] = ()
