#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
External process execution.
"""

import subprocess
from pathlib import Path
from typing import Optional

from .output import show_command


class LauncherError(Exception):
    """Base error; carries the process exit code to use"""

    exit_code = 1


class PreconditionError(LauncherError):
    """Host environment does not allow the requested action"""


class RuntimeNotReadyError(LauncherError):
    """Container runtime did not answer before the timeout"""


class CommandFailedError(LauncherError):
    """An external command exited non-zero"""

    def __init__(self, cmd: list[str], returncode: int):
        super().__init__(f"'{' '.join(cmd)}' exited with status {returncode}")
        self.cmd = cmd
        self.returncode = returncode
        self.exit_code = returncode


class CommandRunner:
    """Runs external commands one at a time, to completion"""

    def run(
        self,
        cmd: list[str],
        *,
        check: bool = True,
        cwd: Optional[Path] = None,
        env: Optional[dict[str, str]] = None,
        input: Optional[str] = None,
        quiet: bool = False,
    ) -> subprocess.CompletedProcess:
        """Run cmd and return the completed process.

        With check=True a non-zero exit raises CommandFailedError. quiet
        suppresses the echo and discards the command's output, which is
        used for readiness probes.
        """
        if not quiet:
            show_command(cmd)

        result = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            input=input,
            text=True,
            stdout=subprocess.DEVNULL if quiet or input is not None else None,
            stderr=subprocess.DEVNULL if quiet else None,
        )
        if check and result.returncode != 0:
            raise CommandFailedError(cmd, result.returncode)
        return result

    def succeeds(self, cmd: list[str], env: Optional[dict[str, str]] = None) -> bool:
        """Run cmd silently and report whether it exited 0"""
        try:
            return self.run(cmd, check=False, env=env, quiet=True).returncode == 0
        except FileNotFoundError:
            return False

    def output(self, cmd: list[str], env: Optional[dict[str, str]] = None) -> str:
        """Run cmd and return its stdout; raises CommandFailedError on failure"""
        result = subprocess.run(cmd, capture_output=True, text=True, env=env)
        if result.returncode != 0:
            raise CommandFailedError(cmd, result.returncode)
        return result.stdout
