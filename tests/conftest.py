"""Shared pytest fixtures for the rn-scaffold test suite.

Provides reusable fixtures for:
- Temporary workspace roots
- Output channels that capture progress without printing
- Template renderers and default options/config
- Small tree descriptions used across materializer tests
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from rn_scaffold.config import Config, ScaffoldOptions
from rn_scaffold.scaffolder.templates import TemplateRenderer
from rn_scaffold.utils import OutputChannel


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty workspace root (auto-cleanup)."""
    root = tmp_path / "workspace"
    root.mkdir()
    yield root


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@pytest.fixture
def captured_console() -> Console:
    """Rich console writing into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def channel(captured_console: Console) -> OutputChannel:
    """Output channel whose echo goes to ``captured_console``."""
    return OutputChannel("test", console=captured_console)


# ---------------------------------------------------------------------------
# Scaffolding inputs
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def default_options() -> ScaffoldOptions:
    return ScaffoldOptions()


@pytest.fixture
def minimal_options() -> ScaffoldOptions:
    """Every optional subtree switched off."""
    return ScaffoldOptions(
        template="none",
        generate_tests=False,
        generate_styles=False,
        include_redux=False,
        include_navigation=False,
    )


@pytest.fixture
def config(workspace: Path) -> Config:
    """Config rooted at the temporary workspace, progress echo off."""
    return Config(workspace_root=workspace, show_progress=False)


@pytest.fixture
def sample_tree() -> dict[str, Any]:
    """The nested plain form of a small project layout."""
    return {
        "src": {
            "utils": {"helpers.ts": "export const x = 1;\n"},
            "assets": {},
        },
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def snapshot(root: Path) -> dict[str, str | None]:
    """Map every path under *root* to its text (``None`` for directories)."""
    result: dict[str, str | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        result[rel] = None if path.is_dir() else path.read_text(encoding="utf-8")
    return result


@pytest.fixture
def tree_snapshot():
    """Expose :func:`snapshot` to tests."""
    return snapshot
