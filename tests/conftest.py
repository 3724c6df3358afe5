# tests/conftest.py
"""Pytest configuration with shared fixtures for the edithistory tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Generator

import pytest

from edithistory.core.History import History
from tests.stubs import StubBuffer


# --- Logging isolation ---
@pytest.fixture(autouse=True)
def restore_root_handlers() -> Generator[None, None, None]:
    """Restore root logger handlers and level after each test.

    `setup_logging` replaces the root handlers; without this, file handlers created
    in one test's temporary directory would leak into the next.
    """
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


# --- History fixtures ---
@pytest.fixture
def history() -> History:
    """Provide a history with the default capacity."""
    return History()


@pytest.fixture
def small_history() -> History:
    """Provide a history bounded to two undo steps."""
    return History.with_capacity(2)


@pytest.fixture
def buffer(history: History) -> StubBuffer:
    """Provide an empty stub buffer wired to ``history``."""
    return StubBuffer(history)


@pytest.fixture
def hello_buffer(history: History) -> StubBuffer:
    """Provide a stub buffer preloaded with ``"hello"`` and an empty history.

    The preloaded text is not part of the history, as after opening a file.
    """
    return StubBuffer(history, "hello")


# --- Config fixtures ---
@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a TOML config overriding part of the history table."""
    path = tmp_path / "config.toml"
    path.write_text(
        '[history]\nmax_size = 5\ninsert_merge_gap = 1\n\n[logging]\nconsole_level = "ERROR"\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def snapshot_config() -> dict[str, Any]:
    return {"history": {"mode": "snapshot", "max_size": 3}}
