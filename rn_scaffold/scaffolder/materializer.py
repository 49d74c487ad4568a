"""Tree materialization: turns a tree description into files and folders.

The walk is depth-first and pre-order: a directory and its ``README.md`` are
written before any of its children.  Filesystem calls run in a worker thread
via ``asyncio.to_thread`` but are awaited one at a time, so the walk never
has two operations in flight.

Re-running over an existing layout is safe with respect to directories
(existing ones are reused) but every file and ``README.md`` is rewritten,
discarding local edits made since the previous run.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..utils import OutputChannel
from .tree import Directory, File, from_mapping, walk

README_FILENAME = "README.md"

FALLBACK_DESCRIPTION = "Add description here."

DIRECTORY_DESCRIPTIONS: dict[str, str] = {
    "src": "Source code for the React Native application",
    "assets": "Static assets like images, fonts, etc.",
    "images": "Image assets used in the application",
    "fonts": "Custom fonts used in the application",
    "icons": "Icon assets used in the application",
    "components": "Reusable React Native components",
    "common": "Common/shared components used across the application",
    "screens": "Screen-specific components",
    "Home": "Home screen and its styles",
    "navigation": "Navigation configuration and stack navigators",
    "services": "Services for API calls, storage, etc.",
    "api": "API service configurations and implementations",
    "storage": "Local storage implementations",
    "utils": "Utility functions and helper methods",
    "hooks": "Custom React hooks",
    "store": "State management (Redux/Context) related files",
    "actions": "Redux actions/action creators",
    "reducers": "Redux reducers",
    "types": "TypeScript type definitions",
    "theme": "Theme configuration (colors, typography, etc.)",
    "localization": "Internationalization and localization files",
    "config": "Application configuration files",
}


def describe(name: str) -> str:
    """Return the one-line description for a directory named *name*."""
    return DIRECTORY_DESCRIPTIONS.get(name, FALLBACK_DESCRIPTION)


def readme_content(name: str) -> str:
    """Return the ``README.md`` text written into directory *name*."""
    return f"# {name}\n\n{describe(name)}\n"


@dataclass
class MaterializeResult:
    """What a single :meth:`TreeMaterializer.materialize` call touched."""

    root: Path
    created_dirs: list[Path] = field(default_factory=list)
    existing_dirs: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    readmes: list[Path] = field(default_factory=list)

    @property
    def directories(self) -> list[Path]:
        """Every directory visited, created or not."""
        return self.created_dirs + self.existing_dirs


class TreeMaterializer:
    """Writes a :class:`~rn_scaffold.scaffolder.tree.Directory` to disk.

    Progress lines go to *channel*; when none is given a silent channel is
    used so the lines are still available on ``self.channel.lines``.
    """

    def __init__(self, channel: OutputChannel | None = None) -> None:
        self.channel = channel if channel is not None else OutputChannel(echo=False)

    async def materialize(
        self,
        base_path: str | Path,
        tree: Directory | Mapping[str, Any],
    ) -> MaterializeResult:
        """Create *tree* under *base_path*.

        Args:
            base_path: Existing, writable directory.  It is never removed or
                recreated; only children are written below it.
            tree: A typed tree or its plain nested ``dict`` form.

        Returns:
            A :class:`MaterializeResult` listing every path touched.

        Raises:
            OSError: The first filesystem failure, unchanged.  Entries
                written before the failure are left in place.
        """
        if not isinstance(tree, Directory):
            tree = from_mapping(tree)
        root = Path(base_path)
        result = MaterializeResult(root=root)
        for relative, node in walk(tree):
            full_path = root / relative
            self.channel.append_line(f"Processing: {full_path}")

            if isinstance(node, File):
                await asyncio.to_thread(_write_text, full_path, node.content)
                self.channel.append_line(f"Created file: {full_path}")
                result.files.append(full_path)
                continue

            if not isinstance(node, Directory):
                raise TypeError(f"{full_path}: unsupported tree node {node!r}")

            created = await asyncio.to_thread(ensure_directory, full_path)
            if created:
                self.channel.append_line(f"Created directory: {full_path}")
                result.created_dirs.append(full_path)
            else:
                self.channel.append_line(f"Directory already exists: {full_path}")
                result.existing_dirs.append(full_path)

            readme_path = full_path / README_FILENAME
            self.channel.append_line(f"Creating {README_FILENAME} in: {full_path}")
            await asyncio.to_thread(_write_text, readme_path, readme_content(full_path.name))
            self.channel.append_line(f"Created {README_FILENAME} in: {full_path}")
            result.readmes.append(readme_path)

        return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def ensure_directory(path: Path) -> bool:
    """Create *path* (and parents) unless it is already a directory.

    Returns ``True`` when the directory was created.  A plain file in the
    way raises ``FileExistsError``.
    """
    if path.is_dir():
        return False
    path.mkdir(parents=True)
    return True


def _write_text(path: Path, content: str) -> None:
    """Create or truncate *path* and write *content* without newline translation."""
    path.write_text(content, encoding="utf-8", newline="")
