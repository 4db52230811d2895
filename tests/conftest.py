"""Shared test fixtures and configuration."""

import logging
import os

import pytest

from search_analysis.analysis.tokens import Token


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Strip SEARCH_ANALYSIS_* variables so settings always start from defaults."""
    for key in list(os.environ):
        if key.upper().startswith("SEARCH_ANALYSIS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(os.path.dirname(__file__))


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after a test reconfigures it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def make_token():
    def _make(term: str, position: int = 0, start_offset: int = 0) -> Token:
        return Token(term=term, position=position, start_offset=start_offset)

    return _make
