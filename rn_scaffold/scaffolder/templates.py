"""Packaged React Native templates and the renderer that fills them in.

Templates live under ``rn_scaffold/scaffolder/templates/``:

- ``project/`` mirrors the generated project, one ``<file>.j2`` per output
  file (``project/src/App.tsx.j2`` renders ``src/App.tsx``).
- ``components/<template>/`` holds ``component.tsx.j2``, ``test.tsx.j2``,
  ``styles.ts.j2`` and an ``_styles.j2`` partial shared by the inline and
  separate stylesheet variants.
- ``components/index.ts.j2`` is the barrel.

Rendering only produces strings; all writes go through the tree materializer.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

PACKAGED_TEMPLATES = Path(__file__).parent / "templates"

#: Suffix of every template file.
TEMPLATE_SUFFIX = ".j2"


def build_environment(search_path: Path) -> Environment:
    """Jinja2 environment for TypeScript/JSON output.

    Autoescaping is off (nothing here is HTML), trailing newlines are kept
    and block tags do not leave blank lines behind.
    """
    env = Environment(
        loader=FileSystemLoader(str(search_path)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["js_string"] = js_string
    return env


class TemplateRenderer:
    """Renders ``.j2`` templates from a template root.

    Defaults to the packaged templates; tests pass their own directory.
    Names starting with ``_`` are partials, pulled in with ``{% include %}``
    and never listed.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else PACKAGED_TEMPLATES
        self.env = build_environment(self.template_dir)

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative, ``/``-separated) with *context*.

        Raises:
            jinja2.TemplateNotFound: No such template under the root.
        """
        return self.env.get_template(template_path).render(**context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Sorted template paths under *prefix*, partials excluded."""
        base = self.template_dir.joinpath(prefix) if prefix else self.template_dir
        if not base.is_dir():
            return []
        found = []
        for path in base.rglob(f"*{TEMPLATE_SUFFIX}"):
            if path.name.startswith("_"):
                continue
            found.append(path.relative_to(self.template_dir).as_posix())
        return sorted(found)


def slugify(value: str) -> str:
    """``"My Awesome App"`` -> ``"my-awesome-app"`` (npm package names)."""
    return re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")


def js_string(value: str) -> str:
    """Quote *value* as a TypeScript string literal (double quotes, escaped)."""
    return json.dumps(value, ensure_ascii=False)
