"""Command-line entry point.

Usage::

    rn-scaffold generate MyAwesomeApp --root ./workspace
    rn-scaffold generate --no-redux --template button
    rn-scaffold component UserCard --template card --no-tests

Missing names are prompted for unless ``--no-input`` is given.  Generation
always rewrites the files it owns: re-running ``generate`` over an existing
project restores every template file and ``README.md`` to its generated
content.
"""

from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from rich.prompt import Confirm, Prompt

from rn_scaffold import __version__
from rn_scaffold.commands import (
    ScaffoldError,
    generate_component,
    generate_structure,
    make_channel,
    resolve_workspace,
)
from rn_scaffold.config import COMPONENT_TEMPLATE_NAMES, SETTINGS_FILE_NAMES, Config
from rn_scaffold.utils import (
    LogFileError,
    OutputChannel,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    printable,
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the ``rn-scaffold`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="rn-scaffold",
        description="Scaffold React Native project structures and components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  rn-scaffold generate MyAwesomeApp\n"
            "  rn-scaffold generate MyAwesomeApp --root ./app --no-redux\n"
            "  rn-scaffold component UserCard --template card\n"
            "\n"
            "Files written by a previous run are overwritten without backup.\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root", "-r",
        default=None,
        help="Workspace root (default: current directory)",
    )
    common.add_argument(
        "--config", "-c",
        default=None,
        help="Settings file (JSON or YAML). Default: .rn-scaffold.{json,yml,yaml} in the root",
    )
    common.add_argument(
        "--tests",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="generate_tests",
        help="Emit Jest test stubs",
    )
    common.add_argument(
        "--styles",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="generate_styles",
        help="Emit separate stylesheet modules",
    )
    common.add_argument("--log-file", default=None, help="Append progress lines to this file")
    common.add_argument("--quiet", "-q", action="store_true", help="Do not echo progress lines")
    common.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; a missing name cancels the command",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser(
        "generate",
        parents=[common],
        help="Generate the full project folder structure",
    )
    gen.add_argument("name", nargs="?", default=None, help="Project name")
    gen.add_argument(
        "--template", "-t",
        default=None,
        help=(
            'Component templates to include: "all", "none" or a comma-separated '
            f"list of {', '.join(COMPONENT_TEMPLATE_NAMES)}"
        ),
    )
    gen.add_argument(
        "--redux",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="include_redux",
        help="Include the Redux store module",
    )
    gen.add_argument(
        "--navigation",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="include_navigation",
        help="Include the navigation module",
    )
    gen.add_argument(
        "--ask",
        action="store_true",
        help="Prompt for every option, using the configured values as defaults",
    )
    gen.add_argument(
        "--save-settings",
        action="store_true",
        help="Write the project name and options to the settings file after generating",
    )

    comp = sub.add_parser(
        "component",
        parents=[common],
        help="Add a single component to an existing project",
    )
    comp.add_argument("name", nargs="?", default=None, help="Component name (PascalCase)")
    comp.add_argument(
        "--template", "-t",
        default="blank",
        help="Component template: blank, button or card (default: blank)",
    )
    comp.add_argument(
        "--directory", "-d",
        default=None,
        dest="components_dir",
        help="Target folder relative to the root (default: src/components/common)",
    )

    return parser


# ---------------------------------------------------------------------------
# Configuration resolution
# ---------------------------------------------------------------------------


def load_config(args: argparse.Namespace) -> Config:
    """Resolve settings: defaults < settings file < environment < flags."""
    root = Path(args.root or os.environ.get("RN_SCAFFOLD_ROOT") or Path.cwd())
    if args.config:
        config = Config.load(Path(args.config))
        if config.workspace_root is None:
            config = config.model_copy(update={"workspace_root": root})
    else:
        config = Config.discover(root)

    config = Config.from_env(config)

    overrides: dict[str, Any] = {
        "workspace_root": Path(args.root) if args.root else None,
        "generate_tests": args.generate_tests,
        "generate_styles": args.generate_styles,
        "log_file": Path(args.log_file) if args.log_file else None,
        "show_progress": False if args.quiet else None,
    }
    if args.command == "generate":
        overrides.update(
            template=args.template,
            include_redux=args.include_redux,
            include_navigation=args.include_navigation,
        )
    else:
        overrides["components_dir"] = args.components_dir
    return config.with_overrides(**overrides)


def ask_options(config: Config) -> Config:
    """Prompt for each scaffold option, defaulting to the configured values."""
    opts = config.options
    template = Prompt.ask(
        "Component templates to include",
        default=opts.template,
        console=console,
    )
    return config.with_overrides(
        template=template,
        generate_tests=Confirm.ask("Generate test stubs?", default=opts.generate_tests, console=console),
        generate_styles=Confirm.ask("Generate style files?", default=opts.generate_styles, console=console),
        include_navigation=Confirm.ask(
            "Include navigation?", default=opts.include_navigation, console=console
        ),
        include_redux=Confirm.ask(
            "Include Redux store?", default=opts.include_redux, console=console
        ),
    )


# ---------------------------------------------------------------------------
# Command runners
# ---------------------------------------------------------------------------


def settings_path(args: argparse.Namespace, root: Path) -> Path:
    """The ``--config`` file, else the settings file in *root* (created as YAML)."""
    if args.config:
        return Path(args.config)
    for name in SETTINGS_FILE_NAMES:
        if (root / name).is_file():
            return root / name
    return root / SETTINGS_FILE_NAMES[1]


def save_settings(args: argparse.Namespace, config: Config, name: str, root: Path) -> Path:
    """Persist *name* and the scaffold options; run-only settings are left out."""
    target = settings_path(args, root)
    settings = Config(
        project_name=name,
        options=config.options,
        components_dir=config.components_dir,
    )
    try:
        return settings.save(target)
    except OSError as exc:
        raise ScaffoldError(f"Cannot save settings to {target}: {exc}") from exc


def _run_generate(args: argparse.Namespace, config: Config, channel: OutputChannel) -> int:
    root = resolve_workspace(config)
    name = args.name or config.project_name
    if not args.no_input:
        if args.ask:
            config = ask_options(config)
        if not name:
            name = Prompt.ask(
                "Enter your React Native project name [dim](e.g. MyAwesomeApp)[/dim]",
                default="",
                show_default=False,
                console=console,
            )

    if name.strip() and (root / "src").exists():
        print_warning(f"Existing files under {root / 'src'} will be overwritten.")

    result = asyncio.run(generate_structure(config, name, channel))
    if result is None:
        return 0

    if args.save_settings:
        saved = save_settings(args, config, name.strip(), root)
        channel.append_line(f"Saved settings to {saved}")

    print_success(f"React Native folder structure for {printable(name.strip())} created successfully!")
    print_summary_table(
        {
            "Root": str(result.root),
            "Directories": f"{len(result.directories)} ({len(result.created_dirs)} new)",
            "Files written": len(result.files) + len(result.readmes),
        }
    )
    return 0


def _run_component(args: argparse.Namespace, config: Config, channel: OutputChannel) -> int:
    resolve_workspace(config)
    name = args.name
    if not name and not args.no_input:
        name = Prompt.ask(
            "Enter the component name [dim](e.g. UserCard)[/dim]",
            default="",
            show_default=False,
            console=console,
        )

    result = asyncio.run(generate_component(config, name, args.template, channel))
    if result is None:
        return 0

    print_success(f"Component {result.name} created in {result.directory}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``rn-scaffold`` and ``python -m rn_scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        channel = make_channel(config)
    except (ValidationError, ValueError, OSError, yaml.YAMLError, LogFileError) as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    try:
        if args.command == "generate":
            return _run_generate(args, config, channel)
        return _run_component(args, config, channel)
    except (ScaffoldError, LogFileError) as exc:
        print_error(str(exc))
        return 1
    except ValidationError as exc:
        print_error(f"Invalid option: {exc}")
        return 1
    except (KeyboardInterrupt, EOFError):
        # Interrupted prompt: same as cancelling it.
        console.print()
        return 0
