# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

import subprocess
from pathlib import Path
from typing import Optional

import pytest

from dev_src import nfs as nfs_module
from dev_src.models import LauncherContext, LauncherSettings, NfsConfig, Platform
from dev_src.runner import CommandFailedError, CommandRunner


class RecordingRunner(CommandRunner):
    """Records commands instead of running them.

    ``failures`` maps a substring of the joined command line to the exit
    code that command should report.
    """

    def __init__(
        self,
        failures: Optional[dict[str, int]] = None,
        version: str = "2.24.6",
        ready_after: int = 0,
    ):
        self.calls: list[list[str]] = []
        self.inputs: list[Optional[str]] = []
        self.probes = 0
        self.failures = failures or {}
        self.version = version
        self.ready_after = ready_after

    def _returncode(self, cmd: list[str]) -> int:
        line = " ".join(cmd)
        for needle, code in self.failures.items():
            if needle in line:
                return code
        return 0

    def run(self, cmd, *, check=True, cwd=None, env=None, input=None, quiet=False):
        self.calls.append(list(cmd))
        self.inputs.append(input)
        code = self._returncode(cmd)
        if check and code != 0:
            raise CommandFailedError(cmd, code)
        return subprocess.CompletedProcess(cmd, code)

    def succeeds(self, cmd, env=None):
        self.probes += 1
        return self.probes > self.ready_after

    def output(self, cmd, env=None):
        return self.version + "\n"

    def joined(self) -> list[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_context(tmp_path: Path):
    def _make(platform: Platform = Platform.MAC, **overrides) -> LauncherContext:
        settings = LauncherSettings(
            nfs=NfsConfig(
                share_root="/System/Volumes/Data",
                exports_path=str(tmp_path / "exports"),
                nfs_conf_path=str(tmp_path / "nfs.conf"),
            ),
            **overrides,
        )
        return LauncherContext(
            settings=settings,
            project_root=tmp_path,
            project_name="myproject",
            platform=platform,
            compose_file=tmp_path / f"docker-compose.{platform.value}.yml",
            compose_version="2.24.6",
            uid=501,
            gid=20,
        )

    return _make


@pytest.fixture
def context(make_context) -> LauncherContext:
    return make_context()


@pytest.fixture(autouse=True)
def not_root(monkeypatch):
    monkeypatch.setattr(nfs_module, "is_root", lambda: False)
