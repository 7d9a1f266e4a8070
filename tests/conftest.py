"""Pytest fixtures for varion tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Directory holding example scripts."""
    return FIXTURES_DIR


@pytest.fixture
def two_node_script():
    """A node continuing to a terminal node via @next."""
    return """\
:: start
Hello there.
@next end

:: end
Goodbye.
"""


@pytest.fixture
def branching_script():
    """A node offering three choices."""
    return """\
:: hub
Where to?
* North => north
* South => south
* Back => hub

:: north
Cold.

:: south
Warm.
"""


@pytest.fixture
def script_dir(tmp_path, two_node_script):
    """A directory with one valid and one invalid script."""
    (tmp_path / "good.va").write_text(two_node_script, encoding="utf-8")
    (tmp_path / "bad.vion").write_text(
        ":: start\n* Go => missing_node\n", encoding="utf-8"
    )
    (tmp_path / "notes.txt").write_text("not a script", encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def _clear_varion_env(monkeypatch):
    """Keep VARION_* variables from the outer environment out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("VARION_"):
            monkeypatch.delenv(name, raising=False)
