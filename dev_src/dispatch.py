#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command names and abbreviation lookup.

A token selects the first name in PRIORITY_ORDER that starts with it, so
``s`` is shell, ``st`` is start and ``stat`` is status.
"""

from enum import Enum
from typing import NamedTuple, Optional


class Command(str, Enum):
    SHELL = "shell"
    START = "start"
    STOP = "stop"
    STATUS = "status"
    DOWN = "down"
    LOGS = "logs"
    PULL = "pull"
    PURGE = "purge"
    NFS_SETUP = "nfs"
    NFS_REMOVE = "rnfs"
    HELP = "help"


DEFAULT_COMMAND = Command.SHELL

PRIORITY_ORDER: list[tuple[str, Command, str]] = [
    ("shell", Command.SHELL, "Start containers and open a shell (default)"),
    ("exec", Command.SHELL, "Same as shell; arguments run in the container"),
    ("start", Command.START, "Start containers in the background"),
    ("stop", Command.STOP, "Stop containers, keeping their data"),
    ("status", Command.STATUS, "List container states"),
    ("down", Command.DOWN, "Remove containers and volumes (data is lost)"),
    ("logs", Command.LOGS, "Follow the service logs"),
    ("pull", Command.PULL, "Pull images and rebuild with fresh base images"),
    ("purge", Command.PURGE, "Run down, then remove the project image"),
    ("nfs", Command.NFS_SETUP, "Configure NFS sharing for Docker (macOS)"),
    ("rnfs", Command.NFS_REMOVE, "Remove the NFS export (macOS)"),
    ("help", Command.HELP, "Show this help"),
]


class Resolution(NamedTuple):
    command: Command
    token: Optional[str]
    matched: Optional[str]
    defaulted: bool


def priority_order() -> list[tuple[str, Command, str]]:
    return list(PRIORITY_ORDER)


def resolve_command(token: Optional[str]) -> Resolution:
    """Map a user token to a Command; unknown or empty input means shell"""
    if token is None or not token.strip():
        return Resolution(DEFAULT_COMMAND, token, None, True)

    needle = token.strip().lower()
    for name, command, _ in PRIORITY_ORDER:
        if name.startswith(needle):
            return Resolution(command, token, name, False)

    return Resolution(DEFAULT_COMMAND, token, None, True)
