"""Shared test fixtures for plangate."""

from pathlib import Path

import pytest

from plangate.checks.rules import load_phase_rules

FIXTURES = Path(__file__).parent / "fixtures"

PROFILE_REL = "docs/source/02-architecture/planning-behavior-profile.yaml"


def _write(root: Path, rel: str, text: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def write(tmp_path):
    """Create ``tmp_path/rel`` with the given text, making parent directories."""
    def _make(rel: str, text: str = "") -> Path:
        return _write(tmp_path, rel, text)
    return _make


@pytest.fixture
def phase_rules():
    return load_phase_rules()


@pytest.fixture
def profile_root(tmp_path):
    """A target root with the fixture profile at the primary fallback location."""
    _write(tmp_path, PROFILE_REL, (FIXTURES / "planning-behavior-profile.yaml").read_text())
    return tmp_path
