"""User-facing commands.

Two commands are exposed, mirroring what a user triggers from the CLI:

- :func:`generate_structure` scaffolds the whole project layout into the
  workspace root.
- :func:`generate_component` adds a single component to an existing project.

Both check the workspace before touching the disk, treat an empty name as a
cancelled prompt (returning ``None``), and turn filesystem failures into a
:class:`ScaffoldError` carrying the operating-system message.
"""

from __future__ import annotations

from pathlib import Path

from rn_scaffold.config import Config
from rn_scaffold.scaffolder import (
    ComponentGenerator,
    ComponentResult,
    MaterializeResult,
    ProjectGenerator,
)
from rn_scaffold.utils import OutputChannel, printable

NO_WORKSPACE_MESSAGE = "Please open a workspace first!"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a command fails; the message is shown to the user as is."""


class WorkspaceError(ScaffoldError):
    """Raised when there is no usable workspace root."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_channel(config: Config) -> OutputChannel:
    """Create the output channel described by *config*.

    Raises:
        LogFileError: The configured log file cannot be written.
    """
    channel = OutputChannel(echo=config.show_progress, log_file=config.log_file)
    channel.check_log_file()
    return channel


def resolve_workspace(config: Config) -> Path:
    """Return the absolute workspace root, or raise :class:`WorkspaceError`."""
    if config.workspace_root is None:
        raise WorkspaceError(NO_WORKSPACE_MESSAGE)
    root = Path(config.workspace_root).expanduser()
    if not root.is_dir():
        raise WorkspaceError(f"Workspace root is not a directory: {root}")
    return root.resolve()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def generate_structure(
    config: Config,
    project_name: str | None = None,
    channel: OutputChannel | None = None,
) -> MaterializeResult | None:
    """Scaffold the project layout into the configured workspace root.

    Args:
        config: Resolved configuration (workspace root and options).
        project_name: Name entered by the user.  Falls back to
            ``config.project_name``; an empty name cancels the command.
        channel: Progress sink.  Defaults to one built from *config*.

    Returns:
        The materializer result, or ``None`` when cancelled.

    Raises:
        WorkspaceError: No usable workspace root.
        ScaffoldError: The name is not valid UTF-8, or a filesystem
            operation failed.
        LogFileError: The progress log could not be written.
    """
    channel = channel or make_channel(config)
    channel.append_line('Command "generate" was triggered')

    try:
        root = resolve_workspace(config)
    except WorkspaceError as exc:
        channel.append_line(f"Error: {exc}")
        raise

    name = (project_name if project_name is not None else config.project_name).strip()
    if not name:
        return None

    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        message = f"Invalid project name '{printable(name)}': not valid UTF-8"
        channel.append_line(f"Error: {message}")
        raise ScaffoldError(message) from None

    generator = ProjectGenerator(config.options, channel=channel)
    try:
        result = await generator.generate(root, name)
    except (OSError, UnicodeError) as exc:
        message = f"Error creating folder structure: {exc}"
        channel.append_line(message)
        raise ScaffoldError(message) from exc

    channel.append_line(f"React Native folder structure for {name} created successfully!")
    return result


async def generate_component(
    config: Config,
    component_name: str | None,
    template: str = "blank",
    channel: OutputChannel | None = None,
) -> ComponentResult | None:
    """Scaffold one component into ``config.components_dir``.

    Test and style files follow ``config.options.generate_tests`` and
    ``config.options.generate_styles``.

    Returns:
        The component result, or ``None`` when *component_name* is empty.

    Raises:
        WorkspaceError: No usable workspace root.
        ScaffoldError: Invalid name/template, or a filesystem failure.
    """
    channel = channel or make_channel(config)
    channel.append_line('Command "component" was triggered')

    try:
        root = resolve_workspace(config)
    except WorkspaceError as exc:
        channel.append_line(f"Error: {exc}")
        raise

    name = (component_name or "").strip()
    if not name:
        return None

    generator = ComponentGenerator(channel=channel)
    try:
        result = await generator.generate(
            root,
            name,
            template=template,
            components_dir=config.components_dir,
            generate_tests=config.options.generate_tests,
            generate_styles=config.options.generate_styles,
        )
    except ValueError as exc:
        channel.append_line(f"Error: {exc}")
        raise ScaffoldError(str(exc)) from exc
    except OSError as exc:
        message = f"Error creating component: {exc}"
        channel.append_line(message)
        raise ScaffoldError(message) from exc

    channel.append_line(f"Component {name} created successfully!")
    return result
