"""Shared pytest fixtures for loc-analyzer tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI tests configure logging against CliRunner's streams; undo that."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small mixed-language project on disk."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text('"""Entry point."""\n\nimport os\n# setup\nprint(os.name)\n')
    (tmp_path / "src" / "util.js").write_text("// helper\nfunction f() {\n  return 1;\n}\n")
    (tmp_path / "src" / "style.css").write_text("/* theme */\nbody {\n  color: red;\n}\n")
    (tmp_path / "notes.xyz").write_text("not source\n")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "hook.py").write_text("print('skip me')\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("var x = 1;\n")
    return tmp_path
