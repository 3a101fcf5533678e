#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
NFS sharing between macOS and Docker Desktop.

Setup runs these steps in order, each gated on the previous one:
confirm, wait for the runtime, stop containers, prune volumes, quit the
runtime, edit /etc/exports and /etc/nfs.conf, restart nfsd, relaunch the
runtime and wait until it answers again.
"""

import os
import time
from functools import partial
from pathlib import Path
from typing import Callable, Optional

import typer

from .host import is_root
from .manager import LauncherManager
from .models import LauncherContext, Platform
from .output import console, notice, warning
from .runner import (
    CommandFailedError,
    CommandRunner,
    PreconditionError,
    RuntimeNotReadyError,
)


# ============================================================================
# Host file editing
# ============================================================================


def ensure_line(text: str, line: str) -> str:
    """Return text with line appended unless an identical line exists"""
    if line in text.splitlines():
        return text
    if text and not text.endswith("\n"):
        text += "\n"
    return text + line + "\n"


def remove_line(text: str, line: str) -> str:
    """Return text without any line equal to line"""
    kept = [existing for existing in text.splitlines() if existing != line]
    return "\n".join(kept) + "\n" if kept else ""


def read_host_file(path: Path) -> str:
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def write_host_file(path: Path, content: str, runner: CommandRunner) -> None:
    """Write directly when permitted, otherwise through sudo tee"""
    writable = (
        os.access(path, os.W_OK)
        if path.exists()
        else os.access(path.parent, os.W_OK)
    )
    if writable:
        path.write_text(content, encoding="utf-8")
        return
    runner.run(["sudo", "tee", str(path)], input=content)


# ============================================================================
# NFS configurator
# ============================================================================


class NfsConfigurator:
    """Configures host NFS exports for Docker Desktop volume mounts"""

    def __init__(
        self,
        context: LauncherContext,
        runner: Optional[CommandRunner] = None,
        confirm: Callable[[str], bool] = typer.confirm,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.context = context
        self.runner = runner or CommandRunner()
        self.confirm = confirm
        self.sleep = sleep
        self.clock = clock

    @property
    def exports_path(self) -> Path:
        return Path(self.context.settings.nfs.exports_path)

    @property
    def nfs_conf_path(self) -> Path:
        return Path(self.context.settings.nfs.nfs_conf_path)

    @property
    def exports_line(self) -> str:
        return self.context.settings.nfs.exports_line(
            self.context.uid, self.context.gid
        )

    def check_preconditions(self) -> None:
        if self.context.platform != Platform.MAC:
            raise PreconditionError("NFS setup is only supported on macOS")
        if is_root():
            raise PreconditionError(
                "Do not run this with sudo; it asks for privileges when needed"
            )

    def wait_for_runtime(self) -> None:
        """Poll docker until it answers or the timeout elapses"""
        nfs = self.context.settings.nfs
        deadline = self.clock() + nfs.runtime_wait_timeout
        with console.status(f"Waiting for {nfs.runtime_app} to start..."):
            while not self.runner.succeeds(["docker", "info"]):
                if self.clock() >= deadline:
                    raise RuntimeNotReadyError(
                        f"{nfs.runtime_app} did not start within "
                        f"{nfs.runtime_wait_timeout:.0f}s"
                    )
                self.sleep(nfs.runtime_poll_interval)

    def add_host_line(self, path: Path, line: str) -> None:
        current = read_host_file(path)
        updated = ensure_line(current, line)
        if updated == current:
            notice(f"{path} already configured")
            return
        write_host_file(path, updated, self.runner)
        notice(f"Updated {path}")

    def apply_host_config(self) -> None:
        """Add the exports and nfs.conf lines if they are missing.

        Each file is edited on its own; a failure on one is reported and
        the other is still attempted.
        """
        for path, line in (
            (self.exports_path, self.exports_line),
            (self.nfs_conf_path, self.context.settings.nfs.nfs_conf_line),
        ):
            self._tolerant(
                partial(self.add_host_line, path, line), f"Editing {path}"
            )

    def drop_export(self) -> None:
        current = read_host_file(self.exports_path)
        updated = remove_line(current, self.exports_line)
        if updated == current:
            notice(f"No NFS export found in {self.exports_path}")
            return
        write_host_file(self.exports_path, updated, self.runner)
        notice(f"Removed NFS export from {self.exports_path}")

    def restart_nfsd(self) -> None:
        self.runner.run(["sudo", "nfsd", "restart"])

    def _tolerant(self, step: Callable[[], None], label: str) -> bool:
        try:
            step()
        except (CommandFailedError, OSError) as e:
            warning(f"{label} failed: {e}")
            return False
        return True

    def setup(self) -> int:
        self.check_preconditions()

        console.print(
            "[bold]This will stop the project containers, prune unused Docker "
            "volumes, restart Docker and edit /etc/exports and "
            "/etc/nfs.conf.[/bold]"
        )
        if not self.confirm("Continue?"):
            notice("Cancelled, nothing was changed")
            return 0

        app = self.context.settings.nfs.runtime_app
        self.wait_for_runtime()

        manager = LauncherManager(self.context, self.runner)
        manager.stop()
        self.runner.run(["docker", "volume", "prune", "-f"])

        notice(f"Quitting {app}")
        self.runner.run(["osascript", "-e", f'quit app "{app}"'])

        self.apply_host_config()
        self._tolerant(self.restart_nfsd, "Restarting nfsd")

        notice(f"Starting {app}")
        self.runner.run(["open", "-a", app])
        self.wait_for_runtime()

        console.print("[green]✓[/green] NFS sharing is configured")
        return 0

    def remove(self) -> int:
        self.check_preconditions()

        removed = self._tolerant(self.drop_export, f"Editing {self.exports_path}")
        restarted = self._tolerant(self.restart_nfsd, "Restarting nfsd")
        if removed and restarted:
            console.print("[green]✓[/green] NFS sharing removed")
        else:
            warning("NFS removal finished with errors, see above")
        return 0
