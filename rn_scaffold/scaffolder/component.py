"""Single component generation.

Scaffolds one UI component into an existing project: the component file, an
optional Jest test, an optional stylesheet module, and an ``export`` line in
the folder's ``index.ts`` barrel.  The files are written through the tree
materializer as a flat directory, so they are overwritten on every run just
like project scaffolding.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from ..utils import OutputChannel, is_component_name
from .materializer import TreeMaterializer, ensure_directory
from .templates import TemplateRenderer
from .tree import Directory, File

BARREL_FILENAME = "index.ts"

DEFAULT_COMPONENTS_DIR = "src/components/common"
DEFAULT_THEME_IMPORT = "../../theme"


@dataclass
class ComponentResult:
    """Outcome of :meth:`ComponentGenerator.generate`."""

    name: str
    directory: Path
    files: list[Path] = field(default_factory=list)
    barrel: Path | None = None
    barrel_updated: bool = False


class ComponentGenerator:
    """Renders and writes the file set of a single component."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        channel: OutputChannel | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.materializer = TreeMaterializer(channel)
        self.channel = self.materializer.channel

    # -- Rendering ---------------------------------------------------------

    def available_templates(self) -> list[str]:
        """Names of the component templates that ship a ``component.tsx.j2``."""
        names = set()
        for path in self.renderer.list_templates("components"):
            parts = PurePosixPath(path).parts
            if len(parts) == 3 and parts[2] == "component.tsx.j2":
                names.add(parts[1])
        return sorted(names)

    def build_files(
        self,
        name: str,
        template: str = "blank",
        *,
        generate_tests: bool = True,
        generate_styles: bool = True,
        theme_import: str = DEFAULT_THEME_IMPORT,
    ) -> Directory:
        """Return the flat tree of files for component *name*.

        Keys are ``<name>.tsx`` plus, when enabled, ``<name>.test.tsx`` and
        ``<name>.styles.ts``.
        """
        context: dict[str, Any] = {
            "component_name": name,
            "separate_styles": generate_styles,
            "theme_import": theme_import,
        }
        prefix = f"components/{template}"
        files: dict[str, File] = {
            f"{name}.tsx": File(self.renderer.render(f"{prefix}/component.tsx.j2", context)),
        }
        if generate_tests:
            files[f"{name}.test.tsx"] = File(
                self.renderer.render(f"{prefix}/test.tsx.j2", context)
            )
        if generate_styles:
            files[f"{name}.styles.ts"] = File(
                self.renderer.render(f"{prefix}/styles.ts.j2", context)
            )
        return Directory(files)

    def render_barrel(self, folder_name: str, component_names: list[str]) -> str:
        """Render an ``index.ts`` that re-exports *component_names*."""
        return self.renderer.render(
            "components/index.ts.j2",
            {"folder_name": folder_name, "component_names": component_names},
        )

    # -- Generation --------------------------------------------------------

    async def generate(
        self,
        project_root: str | Path,
        name: str,
        *,
        template: str = "blank",
        components_dir: str = DEFAULT_COMPONENTS_DIR,
        generate_tests: bool = True,
        generate_styles: bool = True,
    ) -> ComponentResult:
        """Write component *name* into ``<project_root>/<components_dir>``.

        The target folder is created if needed.  The barrel gains an
        ``export * from './<name>';`` line unless it already has one.

        Raises:
            ValueError: For a name that is not PascalCase, an unknown
                template, or a *components_dir* outside the project.
            OSError: On the first filesystem failure.
        """
        if not is_component_name(name):
            raise ValueError(
                f"Invalid component name {name!r}: use PascalCase, e.g. 'UserCard'"
            )
        available = self.available_templates()
        if template not in available:
            raise ValueError(
                f"Unknown component template {template!r} (available: {', '.join(available)})"
            )

        root = Path(project_root)
        target = root / _checked_relative(components_dir)
        theme_import = _relative_import(target, root / "src" / "theme")

        created = await asyncio.to_thread(ensure_directory, target)
        if created:
            self.channel.append_line(f"Created directory: {target}")

        files = self.build_files(
            name,
            template,
            generate_tests=generate_tests,
            generate_styles=generate_styles,
            theme_import=theme_import,
        )
        written = await self.materializer.materialize(target, files)

        barrel = target / BARREL_FILENAME
        updated = await asyncio.to_thread(_update_barrel, barrel, name)
        if updated:
            self.channel.append_line(f"Updated barrel: {barrel}")
        else:
            self.channel.append_line(f"Barrel already exports {name}: {barrel}")

        return ComponentResult(
            name=name,
            directory=target,
            files=written.files,
            barrel=barrel,
            barrel_updated=updated,
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def export_line(name: str) -> str:
    """The barrel line that re-exports component *name*."""
    return f"export * from './{name}';"


def _update_barrel(path: Path, name: str) -> bool:
    """Append the export for *name* to the barrel at *path*.

    Returns ``False`` when the barrel already contains the line.
    """
    line = export_line(name)
    if not path.exists():
        path.write_text(f"// Export all components\n{line}\n", encoding="utf-8", newline="")
        return True

    text = path.read_text(encoding="utf-8")
    if line in (existing.strip() for existing in text.splitlines()):
        return False
    if text and not text.endswith("\n"):
        text += "\n"
    path.write_text(f"{text}{line}\n", encoding="utf-8", newline="")
    return True


def _checked_relative(components_dir: str) -> Path:
    relative = Path(components_dir)
    if relative.is_absolute() or ".." in relative.parts:
        raise ValueError(
            f"components_dir must be a path inside the project, got {components_dir!r}"
        )
    return relative


def _relative_import(source_dir: Path, target: Path) -> str:
    """Return the ES module specifier for *target* as seen from *source_dir*."""
    relative = Path(os.path.relpath(target, source_dir)).as_posix()
    return relative if relative.startswith(".") else f"./{relative}"
