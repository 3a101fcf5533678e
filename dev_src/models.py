#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Configuration models for the development environment launcher.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

# ============================================================================
# Pydantic Models for Configuration
# ============================================================================


class Platform(str, Enum):
    """Supported host platforms"""

    MAC = "mac"
    LINUX = "linux"


class NfsConfig(BaseModel):
    """macOS NFS sharing configuration"""

    share_root: str = Field(
        default="/System/Volumes/Data",
        description="Host directory exported to Docker Desktop over NFS",
    )
    exports_path: str = Field(
        default="/etc/exports", description="NFS export list on the host"
    )
    nfs_conf_path: str = Field(
        default="/etc/nfs.conf", description="nfsd configuration file"
    )
    nfs_conf_line: str = Field(
        default="nfs.server.mount.require_resv_port = 0",
        description="Line required in nfs.conf for Docker Desktop mounts",
    )
    runtime_app: str = Field(
        default="Docker", description="Container runtime application name"
    )
    runtime_poll_interval: float = Field(
        default=2.0, gt=0, description="Seconds between runtime readiness checks"
    )
    runtime_wait_timeout: float = Field(
        default=300.0, gt=0, description="Seconds to wait for the runtime"
    )

    def exports_line(self, uid: int, gid: int) -> str:
        """Export entry mapping all NFS access to the invoking user"""
        return f"{self.share_root} -alldirs -mapall={uid}:{gid} localhost"


class LauncherSettings(BaseSettings):
    """Main launcher configuration"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DEV_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    compose_command: list[str] = Field(
        default_factory=lambda: ["docker", "compose"],
        description="Orchestration CLI invocation",
    )
    service: str = Field(default="web", description="Service used by shell/logs")
    image: str = Field(
        default="web", description="Image removed by purge (docker rmi -f)"
    )
    shell_command: list[str] = Field(
        default_factory=lambda: ["bash", "-l"],
        description="Command run by shell when no arguments are given",
    )
    url_scheme: str = Field(default="http")
    url_host: str = Field(default="localhost")
    url_port: int = Field(default=8000, ge=1, le=65535)
    compose_file_override: str = Field(
        default="docker-compose.local.yml",
        description="Local compose file taking precedence over platform defaults",
    )
    compose_file_template: str = Field(
        default="docker-compose.{platform}.yml",
        description="Platform default compose file name",
    )
    local_settings_file: str = Field(
        default="dev.local.yaml",
        description="Optional project settings loaded before pull",
    )
    pull_ignore_failures: bool = Field(
        default=True, description="Pass --ignore-pull-failures to compose pull"
    )
    nfs: NfsConfig = Field(default_factory=NfsConfig)

    @field_validator("compose_command", "shell_command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        """Reject empty command lines"""
        if not v or not all(part.strip() for part in v):
            raise ValueError("Command must contain at least one non-empty word")
        return v

    @field_validator("compose_file_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        if "{platform}" not in v:
            raise ValueError("compose_file_template must contain '{platform}'")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.
        Priority: env vars > .env file > YAML (init) > file secrets > defaults
        """
        return env_settings, dotenv_settings, init_settings, file_secret_settings


class LauncherContext(BaseModel):
    """Values resolved once at startup and handed to every action"""

    model_config = ConfigDict(frozen=True)

    settings: LauncherSettings
    project_root: Path
    project_name: str
    platform: Platform
    compose_file: Path
    compose_version: str
    uid: int
    gid: int

    @property
    def url(self) -> str:
        s = self.settings
        return f"{s.url_scheme}://{s.url_host}:{s.url_port}"

    def compose_env(self) -> dict[str, str]:
        """Environment for child processes; os.environ itself is left alone"""
        env = os.environ.copy()
        env.update(
            {
                "COMPOSE_PROJECT_NAME": self.project_name,
                "COMPOSE_FILE": str(self.compose_file),
                "COMPOSE_VERSION": self.compose_version,
                "USER_ID": str(self.uid),
                "GROUP_ID": str(self.gid),
                "APP_URL": self.url,
            }
        )
        return env

    def with_settings(self, settings: LauncherSettings) -> "LauncherContext":
        return self.model_copy(update={"settings": settings})
