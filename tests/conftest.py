import pytest

from lintcheck.services.parse_cache import ParseCache
from lintcheck.settings import VerifierSettings


@pytest.fixture
def settings(tmp_path) -> VerifierSettings:
    """Verifier settings writing scratch files into a per-test directory."""
    return VerifierSettings(scratch_dir=tmp_path)


@pytest.fixture
def cache() -> ParseCache:
    return ParseCache()
