"""
Shared fixtures
"""

import pytest

from core.base import StrokeSurface
from tests.fakes import make_surface


@pytest.fixture
def surface() -> StrokeSurface:
    return make_surface()


@pytest.fixture(autouse=True)
def no_credentials(monkeypatch):
    """Tests never pick up real API credentials from the environment"""
    for name in ("GOOGLE_VISION_API_KEY", "JDOODLE_CLIENT_ID", "JDOODLE_CLIENT_SECRET"):
        monkeypatch.delenv(name, raising=False)
