#!/usr/bin/env python3
"""Generate CLI reference documentation from the typer app, sub-command groups included."""

import inspect
import sys
from pathlib import Path

# Add parent directory to path to import offertory
sys.path.insert(0, str(Path(__file__).parent.parent))

from typing import Any

import typer

from offertory.cli import app


def format_option(param_name: str, param: Any) -> str:
    """Format an option with its flags and help text."""
    flags = list(getattr(param, "param_decls", None) or [f"--{param_name.replace('_', '-')}"])
    parts = [f"- {', '.join(f'`{flag}`' for flag in flags)}"]

    if getattr(param, "help", None):
        parts.append(f": {param.help}")

    default = getattr(param, "default", None)
    if default is not None and default is not False and default is not ...:
        parts.append(f" (default: {default})")

    return "".join(parts)


def command_name_of(command_obj: Any) -> str:
    return command_obj.name or (command_obj.callback.__name__ if command_obj.callback else "unknown")


def generate_command_doc(full_name: str, command_obj: Any) -> str:
    """Generate documentation for a single command."""
    callback = command_obj.callback
    doc = (callback.__doc__ or "No description available.").strip()

    sig = inspect.signature(callback)
    arguments = []
    options = []
    for param_name, param in sig.parameters.items():
        if param.default == inspect.Parameter.empty:
            arguments.append(param_name.upper())
        elif isinstance(param.default, typer.models.ArgumentInfo):
            arguments.append(f"[{param_name.upper()}]")
        elif hasattr(param.default, "help"):
            options.append(format_option(param_name, param.default))

    usage = " ".join(["offertory", full_name, *arguments, "[OPTIONS]" if options else ""]).strip()
    lines = [f"### {full_name}", "", doc, "", "**Usage:**", "", "```bash", usage, "```", ""]

    if arguments:
        lines.extend(["**Arguments:**", ""])
        lines.extend(f"- `{arg}`" + (" (required)" if not arg.startswith("[") else "") for arg in arguments)
        lines.append("")

    if options:
        lines.extend(["**Options:**", ""])
        lines.extend(options)
        lines.append("")

    return "\n".join(lines)


def generate_cli_reference() -> str:
    """Generate complete CLI reference documentation."""
    lines = [
        "---",
        "tags: [reference]",
        "---",
        "",
        "# CLI Commands Reference",
        "",
        "Complete reference for all offertory CLI commands and options.",
        "",
        "## Usage",
        "",
        "```bash",
        "offertory [--verbose] [COMMAND] [OPTIONS]",
        "```",
        "",
        "## Global Options",
        "",
        "| Option | Description |",
        "|--------|-------------|",
        "| `--verbose`, `-v` | Show debug logging |",
        "| `--help` | Show help message and exit |",
        "",
        "## Commands",
        "",
    ]

    for command_obj in sorted(app.registered_commands, key=command_name_of):
        lines.append(generate_command_doc(command_name_of(command_obj), command_obj))
        lines.append("")

    for group in sorted(app.registered_groups, key=lambda g: g.name or ""):
        sub_app = group.typer_instance
        lines.extend([f"## {group.name}", "", (sub_app.info.help or "").strip(), ""])
        for command_obj in sorted(sub_app.registered_commands, key=command_name_of):
            lines.append(generate_command_doc(f"{group.name} {command_name_of(command_obj)}", command_obj))
            lines.append("")

    return "\n".join(lines)


def main() -> None:
    """Generate and write CLI reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "reference" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(generate_cli_reference(), encoding="utf-8")
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
