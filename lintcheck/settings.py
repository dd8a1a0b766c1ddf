import os
import tempfile
from pathlib import Path

from pydantic import BaseModel


class VerifierSettings(BaseModel):
    """Environment-backed settings for rule verification.

    Attributes:
        scratch_dir: Directory receiving the scratch files written by the
            correction round trip. Files are never removed by lintcheck.
    """

    scratch_dir: Path = Path(os.getenv("LINTCHECK_SCRATCH_DIR", tempfile.gettempdir()))
