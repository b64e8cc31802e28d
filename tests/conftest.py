"""Pytest configuration and fixtures."""

import os
import shutil
from pathlib import Path

import pytest

from scriptengine.config import ScriptEngineSettings, reset_settings, set_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "scripts"

DINER_SCRIPT = """Title: Test

INT. DINER - DAY

JOE
(tired)
I need coffee.

She pours it.
"""


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path, monkeypatch):
    """Run every test with default settings inside a scratch directory.

    SCRIPTENGINE_* variables from the developer's shell and config files in
    the repository root must not leak into tests.
    """
    for var in [k for k in os.environ if k.startswith("SCRIPTENGINE_")]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    reset_settings()
    set_settings(ScriptEngineSettings())

    yield

    reset_settings()


@pytest.fixture
def diner_script() -> str:
    """Minimal one-scene Fountain script."""
    return DINER_SCRIPT


@pytest.fixture
def script_files(tmp_path: Path) -> Path:
    """Copy the fixture scripts into a temporary directory.

    Tests must never modify the files under tests/fixtures directly.
    """
    target = tmp_path / "scripts"
    shutil.copytree(FIXTURES_DIR, target)
    return target


@pytest.fixture
def fountain_path(script_files: Path) -> Path:
    return script_files / "coffee_shop.fountain"


@pytest.fixture
def fdx_path(script_files: Path) -> Path:
    return script_files / "coffee_shop.fdx"
