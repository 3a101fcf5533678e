#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Host inspection: platform, identity, compose version and project naming.
"""

import os
import platform
import re
from pathlib import Path
from typing import Optional

import yaml

from .models import LauncherContext, LauncherSettings, Platform
from .output import warning
from .runner import CommandFailedError, CommandRunner, PreconditionError

# docker-compose started keeping '-' and '_' in project names with 1.21.0
SEPARATOR_SAFE_VERSION = (1, 21, 0)
UNKNOWN_VERSION = "0.0.0"

_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")

CONFIG_FILE = "dev.yaml"


def detect_platform() -> Platform:
    return Platform.MAC if platform.system() == "Darwin" else Platform.LINUX


def inside_container() -> bool:
    """True when running inside a Docker container"""
    return Path("/.dockerenv").exists()


def is_root() -> bool:
    return os.geteuid() == 0


def parse_version(s: str) -> Optional[tuple[int, int, int]]:
    m = _VERSION_RE.search(s)
    if not m:
        return None
    return (int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))


def detect_compose_version(
    runner: CommandRunner, compose_command: list[str]
) -> str:
    """Read the short version string of the compose CLI"""
    try:
        out = runner.output(compose_command + ["version", "--short"]).strip()
    except (CommandFailedError, FileNotFoundError):
        return UNKNOWN_VERSION
    out = out.lstrip("vV")
    return out if parse_version(out) else UNKNOWN_VERSION


def normalize_project_name(name: str, compose_version: str) -> str:
    """Normalize a directory name the way compose derives project names.

    Compose releases before 1.21.0 drop '-' and '_' as well.
    """
    name = re.sub(r"[^a-z0-9_-]", "", name.lower())
    version = parse_version(compose_version)
    if version is None or version < SEPARATOR_SAFE_VERSION:
        name = re.sub(r"[-_]", "", name)
    if not name:
        raise PreconditionError(
            "Cannot derive a compose project name from the directory name; "
            "rename it to use letters or digits"
        )
    return name


def select_compose_file(
    project_root: Path, settings: LauncherSettings, host: Platform
) -> Path:
    """Local override file wins over the platform default"""
    override = project_root / settings.compose_file_override
    if override.exists():
        return override
    return project_root / settings.compose_file_template.format(platform=host.value)


def load_settings(project_root: Path) -> LauncherSettings:
    """Load dev.yaml if present; env vars and .env take precedence"""
    config_path = project_root / CONFIG_FILE
    data = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    return LauncherSettings(**data)


def build_context(
    project_root: Path,
    runner: CommandRunner,
    settings: Optional[LauncherSettings] = None,
) -> LauncherContext:
    """Resolve every per-invocation value once"""
    if inside_container():
        raise PreconditionError(
            "dev must run on the host, not inside a container"
        )

    if settings is None:
        settings = load_settings(project_root)

    host = detect_platform()
    compose_version = detect_compose_version(runner, settings.compose_command)
    if compose_version == UNKNOWN_VERSION:
        warning("Could not determine the compose version")

    return LauncherContext(
        settings=settings,
        project_root=project_root,
        project_name=normalize_project_name(project_root.name, compose_version),
        platform=host,
        compose_file=select_compose_file(project_root, settings, host),
        compose_version=compose_version,
        uid=os.getuid(),
        gid=os.getgid(),
    )
