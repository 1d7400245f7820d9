"""Tests for CheckRunner."""

import os

from relbisect.release.version import parse_version
from relbisect.runner.check import CheckRunner, prepend_path


def write_tool(bin_dir, name, body):
    bin_dir.mkdir(parents=True, exist_ok=True)
    tool = bin_dir / name
    tool.write_text(f"#!/bin/sh\n{body}\n")
    tool.chmod(0o755)
    return tool


def test_successful_command_is_good(tmp_path):
    result = CheckRunner("true").run(parse_version("1.0.0"), tmp_path)

    assert result.bad is False
    assert result.returncode == 0
    assert result.version == "1.0.0"
    assert result.log_file is None


def test_failed_command_is_bad(tmp_path):
    result = CheckRunner("exit 3").run(parse_version("1.0.0"), tmp_path)

    assert result.bad is True
    assert result.returncode == 3


def test_missing_command_is_bad(tmp_path):
    """A command that cannot start is indistinguishable from a failure."""
    runner = CheckRunner("relbisect-no-such-command-xyz")

    result = runner.run(parse_version("1.0.0"), tmp_path)

    assert result.bad is True
    assert result.returncode == 127


def test_bin_dir_is_first_on_path(tmp_path):
    """The release's executables shadow anything else on PATH."""
    release_bin = tmp_path / "release" / "bin"
    other_bin = tmp_path / "other"
    write_tool(release_bin, "mytool", "exit 0")
    write_tool(other_bin, "mytool", "exit 1")

    runner = CheckRunner(
        "mytool", base_path=f"{other_bin}{os.pathsep}{os.environ['PATH']}"
    )

    assert runner.run(parse_version("2.0.0"), release_bin).bad is False


def test_output_saved_when_output_dir_set(tmp_path):
    output_dir = tmp_path / "logs"
    runner = CheckRunner("echo 'checked ok'", output_dir=output_dir)

    result = runner.run(parse_version("3.1.0"), tmp_path)

    assert result.log_file.parent == output_dir
    assert "3.1.0" in result.log_file.name
    assert "checked ok" in result.log_file.read_text()


def test_prepend_path():
    assert prepend_path("/opt/bin", "/usr/bin") == f"/opt/bin{os.pathsep}/usr/bin"
    assert prepend_path("/opt/bin", "") == "/opt/bin"
    assert prepend_path("/opt/bin", None) == "/opt/bin"
