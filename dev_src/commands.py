#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI entry point for the development environment launcher.
"""

from pathlib import Path
from typing import Annotated, Callable, Optional

import typer
from rich.table import Table

from .dispatch import Command, priority_order, resolve_command
from .host import build_context
from .manager import LauncherManager
from .models import LauncherContext
from .nfs import NfsConfigurator
from .output import console, error, warning
from .runner import CommandRunner, LauncherError

app = typer.Typer(
    name="dev",
    help="Start, stop and shell into the project's Docker Compose services",
    add_completion=False,
)


# ============================================================================
# Actions
# ============================================================================


def print_help() -> int:
    table = Table(
        title="dev - development environment launcher",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Description", style="green")
    for name, _, description in priority_order():
        table.add_row(name, description)

    console.print()
    console.print(table)
    console.print()
    console.print("Usage: dev [COMMAND] [ARGS...]")
    console.print(
        "[dim]Commands may be abbreviated; the first match in the list "
        "above wins (s = shell, st = start, stat = status).[/dim]"
    )
    return 0


def run_action(
    command: Command,
    context: LauncherContext,
    runner: CommandRunner,
    args: Optional[list[str]] = None,
) -> int:
    """Run one resolved command and return its exit code"""
    manager = LauncherManager(context, runner)
    nfs = NfsConfigurator(context, runner)

    handlers: dict[Command, Callable[[], int]] = {
        Command.SHELL: lambda: manager.shell(args),
        Command.START: manager.start,
        Command.STOP: manager.stop,
        Command.STATUS: manager.status,
        Command.DOWN: manager.down,
        Command.LOGS: manager.logs,
        Command.PULL: manager.pull,
        Command.PURGE: manager.purge,
        Command.NFS_SETUP: nfs.setup,
        Command.NFS_REMOVE: nfs.remove,
        Command.HELP: print_help,
    }
    return handlers[command]()


# ============================================================================
# CLI Commands
# ============================================================================


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
def dev(
    ctx: typer.Context,
    command: Annotated[
        Optional[str],
        typer.Argument(help="Command to run, may be abbreviated (default: shell)"),
    ] = None,
):
    """Development environment launcher. Run 'dev help' for the command list."""
    resolution = resolve_command(command)
    if resolution.defaulted:
        if command:
            warning(f"Unknown command '{command}', opening a shell")
        else:
            warning("No command given, opening a shell")
    args = list(ctx.args)
    if args and resolution.command != Command.SHELL:
        warning(
            f"'{resolution.matched}' takes no arguments, ignoring: "
            f"{' '.join(args)}"
        )
        args = []

    if resolution.command == Command.HELP:
        raise typer.Exit(print_help())

    runner = CommandRunner()
    try:
        context = build_context(Path.cwd(), runner)
        code = run_action(resolution.command, context, runner, args)
    except LauncherError as e:
        error(str(e))
        raise typer.Exit(e.exit_code)
    except FileNotFoundError as e:
        error(f"Command not found: {e.filename}")
        raise typer.Exit(127)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)

    raise typer.Exit(code)


def main():
    """Main entry point"""
    app()
