import json
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from . import __version__
from .cli import app


LINUX_CFG = b"""\
target_arch="x86_64"
target_os="linux"
target_family="unix"
target_env="gnu"
target_endian="little"
target_pointer_width="64"
target_vendor="unknown"
target_feature="sse"
target_feature="sse2"
unix
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_subprocess_run(mocker):
    """Fixture to mock subprocess.run."""
    mock_run = mocker.patch("subprocess.run")
    mock_run.return_value = MagicMock(returncode=0, stdout=LINUX_CFG, stderr=b"")
    return mock_run


@pytest.fixture(autouse=True)
def clear_rustc_override(monkeypatch):
    monkeypatch.delenv("RUSTC", raising=False)


def test_version(runner):
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_show_json(runner, mock_subprocess_run):
    """Test JSON output of the show command."""
    result = runner.invoke(app, ["show", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["target_arch"] == "x86_64"
    assert data["target_pointer_width"] == 64
    assert data["raw"]["unix"] == []
    assert data["raw"]["target_feature"] == ["sse", "sse2"]


def test_show_table(runner, mock_subprocess_run):
    """Test the human-readable table."""
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0
    assert "target_arch" in result.output
    assert "x86_64" in result.output
    assert "unix" in result.output


def test_show_with_target_and_override(runner, mock_subprocess_run, monkeypatch):
    """Test that --target and RUSTC reach the command line."""
    monkeypatch.setenv("RUSTC", "rustc-beta")

    result = runner.invoke(app, ["show", "--target", "i686-unknown-linux-gnu"])

    assert result.exit_code == 0
    assert mock_subprocess_run.call_args.args[0] == [
        "rustc-beta", "--target", "i686-unknown-linux-gnu", "--print", "cfg"
    ]


def test_show_with_config_file(runner, mock_subprocess_run, tmp_path):
    """Test loading the executable from a JSON config file."""
    config_file = tmp_path / "rustc_cfg.json"
    config_file.write_text(json.dumps({"executable": "/opt/rust/bin/rustc"}))

    result = runner.invoke(app, ["show", "--config", str(config_file)])

    assert result.exit_code == 0
    assert mock_subprocess_run.call_args.args[0][0] == "/opt/rust/bin/rustc"


def test_show_process_error(runner, mock_subprocess_run):
    """Test that toolchain failures exit with code 1."""
    mock_subprocess_run.return_value = MagicMock(
        returncode=1, stdout=b"", stderr=b"error: unknown target"
    )

    result = runner.invoke(app, ["show"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "unknown target" in result.output


def test_show_spawn_error(runner, mock_subprocess_run):
    """Test that a missing toolchain exits with code 1."""
    mock_subprocess_run.side_effect = FileNotFoundError(2, "No such file or directory")

    result = runner.invoke(app, ["show"])

    assert result.exit_code == 1
    assert "rustc" in result.output


def test_get_repeated_key(runner, mock_subprocess_run):
    """Test printing every value of a repeated key."""
    result = runner.invoke(app, ["get", "target_feature"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["sse", "sse2"]


def test_get_bare_flag(runner, mock_subprocess_run):
    """Test that a bare flag succeeds without printing values."""
    result = runner.invoke(app, ["get", "unix"])

    assert result.exit_code == 0
    assert result.output == ""


def test_get_absent_key(runner, mock_subprocess_run):
    """Test that an absent key exits with code 1."""
    result = runner.invoke(app, ["get", "windows"])

    assert result.exit_code == 1
    assert "not set" in result.output


def test_parse_file(runner, mock_subprocess_run, tmp_path):
    """Test parsing captured output from a file."""
    cfg_file = tmp_path / "cfg.txt"
    cfg_file.write_bytes(LINUX_CFG)

    result = runner.invoke(app, ["parse", str(cfg_file), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output)["target_os"] == "linux"
    mock_subprocess_run.assert_not_called()


def test_parse_stdin(runner):
    """Test parsing captured output from stdin."""
    result = runner.invoke(app, ["parse", "-", "--json"], input=LINUX_CFG.decode())

    assert result.exit_code == 0
    assert json.loads(result.output)["target_endian"] == "little"


def test_parse_invalid_input(runner):
    """Test that parse errors exit with code 1."""
    result = runner.invoke(app, ["parse", "-"], input='target_os="linux"\n')

    assert result.exit_code == 1
    assert "target_arch" in result.output


def test_parse_missing_file(runner, tmp_path):
    """Test that an unreadable file exits with code 1."""
    result = runner.invoke(app, ["parse", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_targets(runner, mock_subprocess_run):
    """Test listing target triples."""
    mock_subprocess_run.return_value = MagicMock(
        returncode=0, stdout=b"aarch64-linux-android\nx86_64-unknown-freebsd\n", stderr=b""
    )

    result = runner.invoke(app, ["targets"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["aarch64-linux-android", "x86_64-unknown-freebsd"]


def test_show_blank_target_is_ignored(runner, mock_subprocess_run):
    """Test that a blank --target is not passed to the toolchain."""
    result = runner.invoke(app, ["show", "--target", " "])

    assert result.exit_code == 0
    assert mock_subprocess_run.call_args.args[0] == ["rustc", "--print", "cfg"]
