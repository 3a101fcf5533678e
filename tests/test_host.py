from pathlib import Path

import pytest

from dev_src import host
from dev_src.models import LauncherSettings, Platform
from dev_src.runner import CommandFailedError, PreconditionError


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.20.0", "myappdir"),
        ("1.21.0", "my-app_dir"),
        ("1.29.2", "my-app_dir"),
        ("2.24.6", "my-app_dir"),
        ("0.0.0", "myappdir"),
    ],
)
def test_project_name_separators_depend_on_compose_version(
    version: str, expected: str
):
    assert host.normalize_project_name("my-app_dir", version) == expected


def test_project_name_drops_other_characters_and_lowercases():
    assert host.normalize_project_name("My.App Dir", "2.0.0") == "myappdir"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.21.0", (1, 21, 0)),
        ("2.24", (2, 24, 0)),
        ("docker-compose version 1.29.2, build 5becea4c", (1, 29, 2)),
        ("nonsense", None),
    ],
)
def test_parse_version(text: str, expected):
    assert host.parse_version(text) == expected


def test_detect_compose_version_strips_leading_v(runner):
    runner.version = "v2.24.6"
    assert host.detect_compose_version(runner, ["docker", "compose"]) == "2.24.6"


def test_detect_compose_version_unknown_on_failure(runner, monkeypatch):
    def failing_output(cmd, env=None):
        raise CommandFailedError(cmd, 1)

    monkeypatch.setattr(runner, "output", failing_output)
    assert host.detect_compose_version(runner, ["docker-compose"]) == "0.0.0"


def test_detect_compose_version_unknown_when_missing(runner, monkeypatch):
    def missing_output(cmd, env=None):
        raise FileNotFoundError(2, "No such file", cmd[0])

    monkeypatch.setattr(runner, "output", missing_output)
    assert host.detect_compose_version(runner, ["docker-compose"]) == "0.0.0"


@pytest.mark.parametrize(
    ("system", "expected"),
    [("Darwin", Platform.MAC), ("Linux", Platform.LINUX)],
)
def test_detect_platform(monkeypatch, system: str, expected: Platform):
    monkeypatch.setattr(host.platform, "system", lambda: system)
    assert host.detect_platform() == expected


def test_compose_file_defaults_to_platform_file(tmp_path: Path):
    settings = LauncherSettings()
    assert (
        host.select_compose_file(tmp_path, settings, Platform.MAC)
        == tmp_path / "docker-compose.mac.yml"
    )
    assert (
        host.select_compose_file(tmp_path, settings, Platform.LINUX)
        == tmp_path / "docker-compose.linux.yml"
    )


def test_local_compose_file_takes_precedence(tmp_path: Path):
    override = tmp_path / "docker-compose.local.yml"
    override.write_text("services: {}\n")
    settings = LauncherSettings()
    assert host.select_compose_file(tmp_path, settings, Platform.MAC) == override


def test_load_settings_reads_yaml(tmp_path: Path):
    (tmp_path / "dev.yaml").write_text(
        "service: app\nurl_port: 8080\nnfs:\n  runtime_poll_interval: 5\n"
    )
    settings = host.load_settings(tmp_path)
    assert settings.service == "app"
    assert settings.url_port == 8080
    assert settings.nfs.runtime_poll_interval == 5


def test_load_settings_without_file_uses_defaults(tmp_path: Path):
    settings = host.load_settings(tmp_path)
    assert settings.compose_command == ["docker", "compose"]
    assert settings.service == "web"


def test_build_context_resolves_values(tmp_path: Path, runner, monkeypatch):
    project = tmp_path / "my-app"
    project.mkdir()
    monkeypatch.setattr(host, "inside_container", lambda: False)
    monkeypatch.setattr(host.platform, "system", lambda: "Linux")
    runner.version = "1.20.0"

    context = host.build_context(project, runner, LauncherSettings())

    assert context.project_name == "myapp"
    assert context.platform == Platform.LINUX
    assert context.compose_file == project / "docker-compose.linux.yml"
    assert context.compose_version == "1.20.0"
    assert runner.calls == []


def test_build_context_refuses_to_run_inside_container(
    tmp_path: Path, runner, monkeypatch
):
    monkeypatch.setattr(host, "inside_container", lambda: True)
    with pytest.raises(PreconditionError):
        host.build_context(tmp_path, runner, LauncherSettings())


@pytest.mark.parametrize(
    ("name", "version"),
    [("日本語", "2.24.0"), ("---", "1.20.0"), ("...", "2.24.0")],
)
def test_unusable_directory_name_is_rejected(name: str, version: str):
    with pytest.raises(PreconditionError):
        host.normalize_project_name(name, version)
