from .report import (
    ConformanceCheck,
    ConformanceError,
    ConformanceFailure,
    FailureKind,
    VerificationReport,
)
from .correction_verifier import CorrectionVerifier
from .conformance_verifier import ConformanceVerifier, verify_rule

__all__ = [
    "ConformanceCheck",
    "ConformanceError",
    "ConformanceFailure",
    "ConformanceVerifier",
    "CorrectionVerifier",
    "FailureKind",
    "VerificationReport",
    "verify_rule",
]
