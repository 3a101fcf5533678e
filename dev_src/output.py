#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console output shared by the launcher modules.
"""

from rich.console import Console
from rich.markup import escape

# Rich Console for beautiful output
console = Console()


def notice(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")


def warning(message: str) -> None:
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def error(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")


def show_command(cmd: list[str]) -> None:
    """Echo an external command before it runs"""
    console.print(f"\n[dim]Running: {escape(' '.join(cmd))}[/dim]\n")
