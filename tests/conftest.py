"""Shared pytest fixtures and test helpers for postmeta tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from postmeta.domain.article import ArticleMetadata


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty directory posts are written into."""
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def article() -> ArticleMetadata:
    """The reference post used throughout the suite."""
    return ArticleMetadata(
        title="Hello World",
        date="2024-01-05",
        categories=["tech"],
        tags=["rust", "gui"],
    )


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory with no config discoverable.

    Use via ``@pytest.mark.usefixtures("_isolated_dir")`` on command test
    classes. Tests that need the path can also request ``tmp_path`` directly.
    """
    monkeypatch.delenv("POSTMETA_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handlers and levels installed by configure_logging during a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("postmeta")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
