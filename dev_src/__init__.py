#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Development environment launcher package.
"""

from .commands import app, main, run_action
from .dispatch import Command, Resolution, resolve_command
from .manager import LauncherManager, SettingsLoadResult
from .models import LauncherContext, LauncherSettings, NfsConfig, Platform
from .nfs import NfsConfigurator
from .runner import (
    CommandFailedError,
    CommandRunner,
    LauncherError,
    PreconditionError,
    RuntimeNotReadyError,
)

__all__ = [
    # Commands
    "app",
    "main",
    "run_action",
    # Dispatch
    "Command",
    "Resolution",
    "resolve_command",
    # Manager
    "LauncherManager",
    "SettingsLoadResult",
    "NfsConfigurator",
    # Models
    "LauncherContext",
    "LauncherSettings",
    "NfsConfig",
    "Platform",
    # Errors
    "CommandFailedError",
    "CommandRunner",
    "LauncherError",
    "PreconditionError",
    "RuntimeNotReadyError",
]
