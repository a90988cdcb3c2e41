# tests/cli/conftest.py
"""Shared fixtures for CLI tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo the CLI's logging setup.

    Each invocation points the root handler at CliRunner's temporary
    stderr, which is closed once the invocation returns.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
