"""Tests for the sunny diagnostics CLI."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sunny.binding.platform_detect import PlatformKey
from sunny.binding.resolvers import NativeBindingResolver
from sunny.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep CLI runs away from real settings files and the cwd log."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("SUNNY_LOG_PATH", str(tmp_path / "sunny.log.jsonl"))
    monkeypatch.setenv("SUNNY_BINDING_DIR", str(tmp_path))


def _patch_resolver(key, loader=None):
    def factory(settings):
        return NativeBindingResolver(binding_dir=settings.binding.directory, loader=loader, platform_key=key)

    return patch("sunny.main.create_resolver", side_effect=factory)


def test_platform_command(runner):
    with _patch_resolver(PlatformKey("linux", "arm64", "musl")):
        result = runner.invoke(cli, ["platform"])

    assert result.exit_code == 0
    assert "linux" in result.output
    assert "arm64" in result.output
    assert "musl" in result.output


def test_candidates_command_lists_darwin_order(runner, tmp_path):
    (tmp_path / "sunny.darwin-x64.so").write_bytes(b"")

    with _patch_resolver(PlatformKey("darwin", "x64")):
        result = runner.invoke(cli, ["candidates"])

    assert result.exit_code == 0
    assert result.output.index("sunny.darwin-universal.so") < result.output.index("sunny.darwin-x64.so")
    assert "yes" in result.output


def test_candidates_unsupported_platform(runner):
    with _patch_resolver(PlatformKey("sunos", "sparc")):
        result = runner.invoke(cli, ["candidates"])

    assert result.exit_code == 1
    assert "Unsupported Platform" in result.output


def test_check_success(runner, spy_loader_cls, binding_factory):
    loader = spy_loader_cls(packages={"sunny_linux_x64_gnu": binding_factory()})

    with _patch_resolver(PlatformKey("linux", "x64", "gnu"), loader):
        result = runner.invoke(cli, ["check"])

    assert result.exit_code == 0
    assert "Loaded linux-x64-gnu" in result.output
    assert "Tier: package" in result.output
    assert "sunny-linux-x64-gnu" in result.output


def test_check_failure_exits_nonzero(runner, spy_loader_cls):
    with _patch_resolver(PlatformKey("linux", "x64", "musl"), spy_loader_cls()):
        result = runner.invoke(cli, ["check"])

    assert result.exit_code == 1
    assert "Platform Package Failed To Load" in result.output
    assert "pip install sunny-linux-x64-musl" in result.output


def test_log_level_option_writes_jsonl(runner, tmp_path, spy_loader_cls, binding_factory):
    loader = spy_loader_cls(packages={"sunny_linux_x64_gnu": binding_factory()})

    with _patch_resolver(PlatformKey("linux", "x64", "gnu"), loader):
        result = runner.invoke(cli, ["--log-level", "DEBUG", "check"])

    assert result.exit_code == 0
    log = (tmp_path / "sunny.log.jsonl").read_text(encoding="utf-8")
    assert "[binding:resolve]" in log


def test_candidates_unsupported_mac_arch_lists_universal(runner):
    with _patch_resolver(PlatformKey("darwin", "ia32")):
        result = runner.invoke(cli, ["candidates"])

    assert result.exit_code == 0
    assert "sunny.darwin-universal.so" in result.output
    assert "No per-arch binary" in result.output
