"""rn-scaffold configuration.

Typed configuration for both commands.  Settings use Pydantic v2 models so
they are validated at construction time and can be read from a settings file
(JSON or YAML), from ``RN_SCAFFOLD_*`` environment variables, or overridden
from the command line.

Precedence, lowest first: defaults, settings file, environment, CLI flags.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Component templates shipped with the scaffolder, in generation order.
COMPONENT_TEMPLATE_NAMES: tuple[str, ...] = ("button", "card")

#: Settings file names looked up in the workspace root, in priority order.
SETTINGS_FILE_NAMES: tuple[str, ...] = (
    ".rn-scaffold.json",
    ".rn-scaffold.yml",
    ".rn-scaffold.yaml",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ScaffoldOptions(BaseModel):
    """Options that gate which parts of the project tree are generated.

    Settings files may use either the snake_case field names or the camelCase
    aliases (``generateTests``, ``includeRedux`` ...).
    """

    model_config = ConfigDict(populate_by_name=True)

    template: str = Field(
        default="all",
        description='"all", "none", or a comma-separated list of component templates',
    )
    generate_tests: bool = Field(default=True, alias="generateTests")
    generate_styles: bool = Field(default=True, alias="generateStyles")
    include_redux: bool = Field(default=True, alias="includeRedux")
    include_navigation: bool = Field(default=True, alias="includeNavigation")

    @field_validator("template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        value = value.strip().lower()
        if value in ("all", "none"):
            return value
        names = [n.strip() for n in value.split(",") if n.strip()]
        if not names:
            raise ValueError("template must name at least one component template")
        unknown = [n for n in names if n not in COMPONENT_TEMPLATE_NAMES]
        if unknown:
            raise ValueError(
                f"unknown component template(s): {', '.join(unknown)} "
                f"(available: {', '.join(COMPONENT_TEMPLATE_NAMES)})"
            )
        return ",".join(names)

    def component_templates(self) -> list[str]:
        """Return the selected component templates in generation order."""
        if self.template == "all":
            return list(COMPONENT_TEMPLATE_NAMES)
        if self.template == "none":
            return []
        selected = set(self.template.split(","))
        return [name for name in COMPONENT_TEMPLATE_NAMES if name in selected]


class Config(BaseModel):
    """Global rn-scaffold configuration.

    Instances are created once by the CLI entry point and passed to the
    commands in :mod:`rn_scaffold.commands`.
    """

    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(default="", alias="projectName")
    workspace_root: Path | None = Field(default=None, alias="workspaceRoot")
    options: ScaffoldOptions = Field(default_factory=ScaffoldOptions)
    components_dir: str = Field(default="src/components/common", alias="componentsDir")
    log_file: Path | None = Field(default=None, alias="logFile")
    show_progress: bool = Field(default=True, alias="showProgress")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to *path*.

        YAML is written when the suffix is ``.yml`` or ``.yaml``, JSON
        otherwise.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.suffix in (".yml", ".yaml"):
            data = self.model_dump(mode="json", exclude_none=True)
            target.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        else:
            target.write_text(
                self.model_dump_json(indent=2, exclude_none=True), encoding="utf-8"
            )
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from a JSON or YAML settings file.

        Args:
            path: The settings file to read.

        Returns:
            A validated ``Config`` instance.
        """
        source = Path(path)
        raw = source.read_text(encoding="utf-8")
        if source.suffix in (".yml", ".yaml"):
            data = yaml.safe_load(raw) or {}
            if not isinstance(data, dict):
                raise ValueError(f"{source}: expected a mapping at the top level")
            return cls.model_validate(data)
        return cls.model_validate_json(raw)

    @classmethod
    def discover(cls, root: Path) -> "Config":
        """Load the first settings file found in *root*, or the defaults.

        The returned config always has ``workspace_root`` set to *root*.
        """
        for name in SETTINGS_FILE_NAMES:
            candidate = Path(root) / name
            if candidate.is_file():
                config = cls.load(candidate)
                break
        else:
            config = cls()
        return config.model_copy(update={"workspace_root": Path(root)})

    # ------------------------------------------------------------------
    # Environment and overrides
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, base: "Config | None" = None) -> "Config":
        """Apply ``RN_SCAFFOLD_*`` environment variables on top of *base*.

        Recognised variables (all optional):
            RN_SCAFFOLD_PROJECT_NAME, RN_SCAFFOLD_ROOT, RN_SCAFFOLD_TEMPLATE,
            RN_SCAFFOLD_GENERATE_TESTS, RN_SCAFFOLD_GENERATE_STYLES,
            RN_SCAFFOLD_INCLUDE_REDUX, RN_SCAFFOLD_INCLUDE_NAVIGATION,
            RN_SCAFFOLD_COMPONENTS_DIR, RN_SCAFFOLD_LOG_FILE.
        """
        config = base or cls()

        option_kwargs: dict[str, Any] = {}
        if os.environ.get("RN_SCAFFOLD_TEMPLATE"):
            option_kwargs["template"] = os.environ["RN_SCAFFOLD_TEMPLATE"]
        for field in ("generate_tests", "generate_styles", "include_redux", "include_navigation"):
            raw = os.environ.get(f"RN_SCAFFOLD_{field.upper()}")
            if raw:
                option_kwargs[field] = _parse_bool(raw, f"RN_SCAFFOLD_{field.upper()}")

        kwargs: dict[str, Any] = {}
        if os.environ.get("RN_SCAFFOLD_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["RN_SCAFFOLD_PROJECT_NAME"]
        if os.environ.get("RN_SCAFFOLD_ROOT"):
            kwargs["workspace_root"] = Path(os.environ["RN_SCAFFOLD_ROOT"])
        if os.environ.get("RN_SCAFFOLD_COMPONENTS_DIR"):
            kwargs["components_dir"] = os.environ["RN_SCAFFOLD_COMPONENTS_DIR"]
        if os.environ.get("RN_SCAFFOLD_LOG_FILE"):
            kwargs["log_file"] = Path(os.environ["RN_SCAFFOLD_LOG_FILE"])

        return config.with_overrides(**kwargs, **option_kwargs)

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with every non-``None`` override applied.

        Keys that name a :class:`ScaffoldOptions` field update ``options``;
        the rest update the config itself.  Values are re-validated.
        """
        option_fields = set(ScaffoldOptions.model_fields)
        option_updates = {
            k: v for k, v in overrides.items() if v is not None and k in option_fields
        }
        config_updates = {
            k: v for k, v in overrides.items() if v is not None and k not in option_fields
        }

        data = self.model_dump()
        data["options"].update(option_updates)
        data.update(config_updates)
        return Config.model_validate(data)


def _parse_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name}: expected a boolean, got {raw!r}")
