"""Pytest configuration and fixtures."""

import os
import zipfile
from pathlib import Path

import pytest

from osftext.config import reset_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "osf"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: tests that run the command line programs end to end"
    )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep OSFTEXT_ variables from the developer's shell out of the tests."""
    for var in [k for k in os.environ if k.startswith("OSFTEXT_")]:
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_osf_path() -> Path:
    """Path to a small but complete OSF document."""
    return FIXTURES_DIR / "coffee_shop.osf"


@pytest.fixture
def sample_osf_bytes(sample_osf_path: Path) -> bytes:
    return sample_osf_path.read_bytes()


@pytest.fixture
def make_fadein(tmp_path: Path):
    """Build a zip-packaged project containing the given members."""

    def _make(members: dict[str, bytes], name: str = "screenplay.fadein") -> Path:
        archive_path = tmp_path / name
        with zipfile.ZipFile(archive_path, "w") as archive:
            for member, data in members.items():
                archive.writestr(member, data)
        return archive_path

    return _make
