"""Project scaffolding orchestrator.

Builds the tree description of a React Native + TypeScript project from the
packaged templates and a :class:`~rn_scaffold.config.ScaffoldOptions`
record, then hands it to the tree materializer.  Every option gates a whole
subtree: excluded parts become absent entries and leave no trace on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..config import ScaffoldOptions
from ..utils import OutputChannel
from .component import ComponentGenerator
from .materializer import MaterializeResult, TreeMaterializer
from .templates import TemplateRenderer, slugify
from .tree import ABSENT, Directory, File, from_mapping


# ---------------------------------------------------------------------------
# package.json dependency sets
# ---------------------------------------------------------------------------

BASE_DEPENDENCIES: list[tuple[str, str]] = [
    ("react", "18.2.0"),
    ("react-native", "0.72.6"),
    ("react-native-safe-area-context", "^4.7.4"),
]

NAVIGATION_DEPENDENCIES: list[tuple[str, str]] = [
    ("@react-navigation/native", "^6.1.9"),
    ("@react-navigation/stack", "^6.3.20"),
    ("react-native-gesture-handler", "^2.13.4"),
    ("react-native-screens", "^3.27.0"),
]

REDUX_DEPENDENCIES: list[tuple[str, str]] = [
    ("@reduxjs/toolkit", "^1.9.7"),
    ("react-redux", "^8.1.3"),
]

BASE_DEV_DEPENDENCIES: list[tuple[str, str]] = [
    ("@types/react", "^18.2.37"),
    ("typescript", "^5.2.2"),
]

TEST_DEV_DEPENDENCIES: list[tuple[str, str]] = [
    ("@testing-library/react-native", "^12.4.0"),
    ("jest", "^29.7.0"),
]

#: Exported component name for each component template.
COMPONENT_EXPORT_NAMES: dict[str, str] = {
    "button": "Button",
    "card": "Card",
}

#: package.json name used when the project name has no ASCII letters or digits.
FALLBACK_PACKAGE_NAME = "react-native-app"


class ProjectGenerator:
    """Scaffolds the full project layout.

    Given a ``ScaffoldOptions`` record, produces:
    - ``package.json`` with dependencies matching the options
    - ``src/`` with api, assets, components, screens, services, utils,
      hooks, theme, types and config modules
    - ``src/navigation`` when navigation is included
    - ``src/store`` with reducers and actions when redux is included
    - a ``README.md`` in every directory
    """

    def __init__(
        self,
        options: ScaffoldOptions | None = None,
        renderer: TemplateRenderer | None = None,
        channel: OutputChannel | None = None,
    ) -> None:
        self.options = options or ScaffoldOptions()
        self.renderer = renderer or TemplateRenderer()
        self.materializer = TreeMaterializer(channel)
        self.components = ComponentGenerator(self.renderer, self.materializer.channel)

    # -- Public API --------------------------------------------------------

    async def generate(self, root: str | Path, project_name: str) -> MaterializeResult:
        """Materialize the project tree directly under *root*.

        Args:
            root: Existing workspace directory.
            project_name: Display name used in ``package.json`` and screens.

        Returns:
            The materializer's record of the paths touched.
        """
        tree = self.build_tree(project_name)
        return await self.materializer.materialize(root, tree)

    def build_tree(self, project_name: str) -> Directory:
        """Return the tree description for *project_name* and the options."""
        ctx = self.build_context(project_name)
        opts = self.options

        def render(path: str) -> File:
            return File(self.renderer.render(f"project/{path}.j2", ctx))

        navigation = {
            "index.ts": render("src/navigation/index.ts"),
            "AppNavigator.tsx": render("src/navigation/AppNavigator.tsx"),
        }
        store = {
            "index.ts": render("src/store/index.ts"),
            "reducers": {"index.ts": render("src/store/reducers/index.ts")},
            "actions": {"index.ts": render("src/store/actions/index.ts")},
        }

        src: dict[str, Any] = {
            "App.tsx": render("src/App.tsx"),
            "api": {
                "index.ts": render("src/api/index.ts"),
                "endpoints.ts": render("src/api/endpoints.ts"),
            },
            "assets": {
                "images": {},
                "fonts": {},
                "icons": {},
            },
            "components": {
                "common": self._common_components(),
            },
            "navigation": navigation if opts.include_navigation else ABSENT,
            "screens": {
                "Home": {
                    "HomeScreen.tsx": render("src/screens/Home/HomeScreen.tsx"),
                    "styles.ts": render("src/screens/Home/styles.ts"),
                },
            },
            "services": {
                "index.ts": render("src/services/index.ts"),
                "storage": {"index.ts": render("src/services/storage/index.ts")},
            },
            "store": store if opts.include_redux else ABSENT,
            "utils": {
                "index.ts": render("src/utils/index.ts"),
                "helpers.ts": render("src/utils/helpers.ts"),
            },
            "hooks": {
                "index.ts": render("src/hooks/index.ts"),
                "useForm.ts": render("src/hooks/useForm.ts"),
                "useToggle.ts": render("src/hooks/useToggle.ts"),
            },
            "theme": {
                "index.ts": render("src/theme/index.ts"),
                "colors.ts": render("src/theme/colors.ts"),
                "spacing.ts": render("src/theme/spacing.ts"),
            },
            "types": {"index.ts": render("src/types/index.ts")},
            "config": {"index.ts": render("src/config/index.ts")},
        }

        return from_mapping({
            "src": src,
            "package.json": render("package.json"),
        })

    # -- Context building --------------------------------------------------

    def build_context(self, project_name: str) -> dict[str, Any]:
        """Build the Jinja2 template context from the name and options."""
        opts = self.options
        templates = opts.component_templates()

        dependencies = list(BASE_DEPENDENCIES)
        if opts.include_navigation:
            dependencies += NAVIGATION_DEPENDENCIES
        if opts.include_redux:
            dependencies += REDUX_DEPENDENCIES
        dev_dependencies = list(BASE_DEV_DEPENDENCIES)
        if opts.generate_tests:
            dev_dependencies += TEST_DEV_DEPENDENCIES

        return {
            "project_name": project_name,
            "package_name": slugify(project_name) or FALLBACK_PACKAGE_NAME,
            "include_navigation": opts.include_navigation,
            "include_redux": opts.include_redux,
            "generate_tests": opts.generate_tests,
            "generate_styles": opts.generate_styles,
            "root_component": "AppNavigator" if opts.include_navigation else "HomeScreen",
            "has_button": "button" in templates,
            "dependencies": sorted(dependencies),
            "dev_dependencies": sorted(dev_dependencies),
        }

    # -- Components --------------------------------------------------------

    def _common_components(self) -> Directory:
        """Selected component templates plus the ``index.ts`` barrel."""
        children: dict[str, File] = {}
        exported: list[str] = []
        for template in self.options.component_templates():
            name = COMPONENT_EXPORT_NAMES[template]
            files = self.components.build_files(
                name,
                template,
                generate_tests=self.options.generate_tests,
                generate_styles=self.options.generate_styles,
            )
            children.update(files.children)
            exported.append(name)
        children["index.ts"] = File(self.components.render_barrel("common", exported))
        return Directory(children)
