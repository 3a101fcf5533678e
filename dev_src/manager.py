#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Launcher manager for Docker Compose operations.
"""

import shutil
from dataclasses import dataclass
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.panel import Panel

from .models import LauncherContext, LauncherSettings
from .output import console, notice, warning
from .runner import CommandRunner


@dataclass
class SettingsLoadResult:
    """Outcome of loading the optional project settings file"""

    settings: Optional[LauncherSettings] = None
    error: Optional[str] = None
    found: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def merge_settings(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base; nested mappings are combined"""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


# ============================================================================
# Core Launcher Manager
# ============================================================================


class LauncherManager:
    """Runs compose-backed actions for one project"""

    def __init__(
        self, context: LauncherContext, runner: Optional[CommandRunner] = None
    ):
        self.context = context
        self.runner = runner or CommandRunner()

    def run_compose(self, args: list[str], check: bool = True) -> int:
        """Run docker compose command"""
        cmd = self.context.settings.compose_command + args
        result = self.runner.run(
            cmd,
            check=check,
            cwd=self.context.project_root,
            env=self.context.compose_env(),
        )
        return result.returncode

    def start(self) -> int:
        """Start containers in detached mode"""
        code = self.run_compose(["up", "-d"])
        console.print(
            Panel(
                f"[green]✓[/green] {self.context.project_name} is running\n\n"
                f"Open [bold]{self.context.url}[/bold] in your browser.\n"
                "Use 'dev shell' to enter the container, "
                "'dev stop' to stop it.",
                title="[bold green]Started[/bold green]",
                border_style="green",
            )
        )
        return code

    def shell(self, args: Optional[list[str]] = None) -> int:
        """Start the project and attach to the service container"""
        self.start()
        size = shutil.get_terminal_size()
        command = list(args) if args else list(self.context.settings.shell_command)
        return self.run_compose(
            [
                "exec",
                "-e",
                f"COLUMNS={size.columns}",
                "-e",
                f"LINES={size.lines}",
                self.context.settings.service,
            ]
            + command
        )

    def stop(self) -> int:
        return self.run_compose(["stop"])

    def down(self) -> int:
        """Remove containers and their volumes"""
        return self.run_compose(["down", "-v"])

    def purge(self) -> int:
        """down, then force-remove the project image"""
        self.down()
        notice(f"Removing image {self.context.settings.image}")
        result = self.runner.run(
            ["docker", "rmi", "-f", self.context.settings.image],
            env=self.context.compose_env(),
        )
        return result.returncode

    def status(self) -> int:
        return self.run_compose(["ps"])

    def logs(self) -> int:
        return self.run_compose(["logs", "-f", self.context.settings.service])

    def load_local_settings(self) -> SettingsLoadResult:
        """Load project overrides from the local settings file.

        Never raises: a missing file and an invalid file both yield a
        result the caller inspects.
        """
        path = self.context.project_root / self.context.settings.local_settings_file
        if not path.exists():
            return SettingsLoadResult()

        try:
            with open(path, encoding="utf-8") as f:
                overrides = yaml.safe_load(f) or {}
            if not isinstance(overrides, dict):
                return SettingsLoadResult(
                    found=True, error=f"{path.name} must contain a mapping"
                )
            merged = merge_settings(self.context.settings.model_dump(), overrides)
            return SettingsLoadResult(
                settings=LauncherSettings.model_validate(merged), found=True
            )
        except (OSError, yaml.YAMLError, ValidationError) as e:
            return SettingsLoadResult(found=True, error=f"{path.name}: {e}")

    def pull(self) -> int:
        """Pull images, then rebuild on fresh base images"""
        loaded = self.load_local_settings()
        if not loaded.ok:
            warning(f"Ignoring local settings ({loaded.error})")
        elif loaded.settings is not None:
            notice(f"Loaded {self.context.settings.local_settings_file}")
            self.context = self.context.with_settings(loaded.settings)

        pull_args = ["pull"]
        if self.context.settings.pull_ignore_failures:
            pull_args.append("--ignore-pull-failures")
        code = self.run_compose(pull_args, check=False)
        if code != 0:
            warning("Some images could not be pulled, continuing with build")

        return self.run_compose(["build", "--pull"])
