"""Tests for the project scaffolding orchestrator.

Covers:
- Tree shape for the default options
- Option gating (navigation, redux, tests, styles, component templates)
- package.json dependencies following the options
- App.tsx root component variants
- Materialization into a workspace, including re-runs
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rn_scaffold.config import ScaffoldOptions
from rn_scaffold.scaffolder.materializer import readme_content
from rn_scaffold.scaffolder.project import (
    FALLBACK_PACKAGE_NAME,
    NAVIGATION_DEPENDENCIES,
    REDUX_DEPENDENCIES,
    ProjectGenerator,
)
from rn_scaffold.scaffolder.tree import Absent, Directory, File, walk


pytestmark = pytest.mark.unit


def _paths(tree: Directory) -> list[str]:
    return [path for path, _ in walk(tree)]


def _text(tree: Directory, path: str) -> str:
    node = tree
    for part in path.split("/"):
        node = node[part]
    assert isinstance(node, File)
    return node.content


# ---------------------------------------------------------------------------
# Tree shape
# ---------------------------------------------------------------------------


class TestBuildTree:
    def test_top_level(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree("Demo")
        assert [name for name, _ in tree.items()] == ["src", "package.json"]

    def test_default_src_modules(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree("Demo")
        src = tree["src"]

        for name in (
            "api", "assets", "components", "navigation", "screens", "services",
            "store", "utils", "hooks", "theme", "types", "config",
        ):
            assert isinstance(src[name], Directory), name
        assert isinstance(src["App.tsx"], File)

    def test_asset_folders_are_empty(self, default_options: ScaffoldOptions):
        assets = ProjectGenerator(default_options).build_tree("Demo")["src"]["assets"]
        assert [name for name, _ in assets.items()] == ["images", "fonts", "icons"]
        assert all(len(node) == 0 for _, node in assets.items())

    def test_default_common_components(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree("Demo")
        common = tree["src"]["components"]["common"]

        assert sorted(name for name, _ in common.items()) == [
            "Button.styles.ts",
            "Button.test.tsx",
            "Button.tsx",
            "Card.styles.ts",
            "Card.test.tsx",
            "Card.tsx",
            "index.ts",
        ]
        assert _text(common, "index.ts") == (
            "// Export all common components\n"
            "export * from './Button';\n"
            "export * from './Card';\n"
        )

    def test_store_has_reducers_and_actions(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree("Demo")
        assert "src/store/reducers/index.ts" in _paths(tree)
        assert "src/store/actions/index.ts" in _paths(tree)

    def test_project_name_in_navigator(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree("Demo")
        navigator = _text(tree, "src/navigation/AppNavigator.tsx")
        assert 'options={{ title: "Demo" }}' in navigator

    def test_project_name_is_quoted(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree('Bob\'s "Best" App')

        quoted = '"Bob\'s \\"Best\\" App"'
        assert f"title: {quoted}" in _text(tree, "src/navigation/AppNavigator.tsx")
        assert f"appName: {quoted}," in _text(tree, "src/config/index.ts")
        assert 'const WELCOME = "Welcome to Bob\'s \\"Best\\" App";' in _text(
            tree, "src/screens/Home/HomeScreen.tsx"
        )


# ---------------------------------------------------------------------------
# Option gating
# ---------------------------------------------------------------------------


class TestOptions:
    def test_navigation_off_is_absent(self):
        tree = ProjectGenerator(ScaffoldOptions(include_navigation=False)).build_tree("Demo")
        assert isinstance(tree["src"]["navigation"], Absent)
        assert not any(p.startswith("src/navigation") for p in _paths(tree))

    def test_redux_off_is_absent(self):
        tree = ProjectGenerator(ScaffoldOptions(include_redux=False)).build_tree("Demo")
        assert isinstance(tree["src"]["store"], Absent)

    def test_no_tests_no_styles(self):
        options = ScaffoldOptions(template="button", generate_tests=False, generate_styles=False)
        common = ProjectGenerator(options).build_tree("Demo")["src"]["components"]["common"]

        assert sorted(name for name, _ in common.items()) == ["Button.tsx", "index.ts"]
        button = _text(common, "Button.tsx")
        assert "StyleSheet.create" in button
        assert "from '../../theme'" in button

    def test_template_none_leaves_empty_barrel(self, minimal_options: ScaffoldOptions):
        common = ProjectGenerator(minimal_options).build_tree("Demo")["src"]["components"]["common"]
        assert [name for name, _ in common.items()] == ["index.ts"]
        assert _text(common, "index.ts") == "// Export all common components\n"

    def test_home_screen_uses_button_only_when_selected(self):
        with_button = ProjectGenerator(ScaffoldOptions(template="button")).build_tree("Demo")
        without = ProjectGenerator(ScaffoldOptions(template="card")).build_tree("Demo")

        assert "import { Button }" in _text(with_button, "src/screens/Home/HomeScreen.tsx")
        assert "Button" not in _text(without, "src/screens/Home/HomeScreen.tsx")


# ---------------------------------------------------------------------------
# package.json and App.tsx
# ---------------------------------------------------------------------------


class TestPackageJson:
    def _package(self, options: ScaffoldOptions) -> dict:
        tree = ProjectGenerator(options).build_tree("My Awesome App")
        return json.loads(_text(tree, "package.json"))

    def test_default_dependencies(self, default_options: ScaffoldOptions):
        data = self._package(default_options)

        assert data["name"] == "my-awesome-app"
        for dep, version in NAVIGATION_DEPENDENCIES + REDUX_DEPENDENCIES:
            assert data["dependencies"][dep] == version
        assert "jest" in data["devDependencies"]

    def test_minimal_dependencies(self, minimal_options: ScaffoldOptions):
        data = self._package(minimal_options)

        assert "react-redux" not in data["dependencies"]
        assert "@react-navigation/native" not in data["dependencies"]
        assert "jest" not in data["devDependencies"]
        assert "test" not in data["scripts"]

    def test_dependencies_sorted(self, default_options: ScaffoldOptions):
        names = list(self._package(default_options)["dependencies"])
        assert names == sorted(names)

    def test_name_without_ascii_falls_back(self, default_options: ScaffoldOptions):
        tree = ProjectGenerator(default_options).build_tree("日本語")
        assert json.loads(_text(tree, "package.json"))["name"] == FALLBACK_PACKAGE_NAME


class TestAppComponent:
    def test_default_wraps_navigator_in_provider(self, default_options: ScaffoldOptions):
        app = _text(ProjectGenerator(default_options).build_tree("Demo"), "src/App.tsx")

        assert "<Provider store={store}>" in app
        assert "        <AppNavigator />" in app

    def test_minimal_renders_home_screen(self, minimal_options: ScaffoldOptions):
        app = _text(ProjectGenerator(minimal_options).build_tree("Demo"), "src/App.tsx")

        assert "react-redux" not in app
        assert "<Provider store" not in app
        assert "<SafeAreaProvider>" in app
        assert "navigation" not in app
        assert "      <HomeScreen />" in app

    def test_build_context_keys(self, default_options: ScaffoldOptions):
        ctx = ProjectGenerator(default_options).build_context("Demo")
        assert ctx["root_component"] == "AppNavigator"
        assert ctx["has_button"] is True
        assert ctx["project_name"] == "Demo"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class TestGenerate:
    async def test_writes_into_root(self, workspace: Path, default_options, channel):
        result = await ProjectGenerator(default_options, channel=channel).generate(workspace, "Demo")

        assert (workspace / "package.json").is_file()
        assert (workspace / "src" / "App.tsx").is_file()
        assert (workspace / "src" / "components" / "common" / "Card.tsx").is_file()
        assert result.root == workspace
        assert channel.lines

    async def test_readme_in_every_directory(self, workspace: Path, default_options):
        await ProjectGenerator(default_options).generate(workspace, "Demo")

        directories = [p for p in workspace.rglob("*") if p.is_dir()]
        assert directories
        for directory in directories:
            readme = directory / "README.md"
            assert readme.read_text(encoding="utf-8") == readme_content(directory.name)

    async def test_gated_directories_not_created(self, workspace: Path, minimal_options):
        await ProjectGenerator(minimal_options).generate(workspace, "Demo")

        assert not (workspace / "src" / "store").exists()
        assert not (workspace / "src" / "navigation").exists()
        assert not list((workspace / "src").rglob("*.test.tsx"))

    async def test_rerun_restores_files(self, workspace: Path, default_options, tree_snapshot):
        generator = ProjectGenerator(default_options)
        await generator.generate(workspace, "Demo")
        first = tree_snapshot(workspace)

        (workspace / "src" / "App.tsx").write_text("// edited\n")
        result = await generator.generate(workspace, "Demo")

        assert tree_snapshot(workspace) == first
        assert result.created_dirs == []
