"""
Tests for launching the distribution binary.
"""

import hashlib
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from godelw.core.exceptions import ChecksumMismatchError, LaunchError
from godelw.core.platform import PlatformInfo
from godelw.distribution import launcher
from godelw.distribution.launcher import build_command, launch


@pytest.fixture
def binary(tmp_path):
    path = tmp_path / "godel"
    path.write_bytes(b"#!/bin/sh\nexit 0\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def binary_platform(binary):
    return PlatformInfo("linux", "amd64", hashlib.sha256(binary.read_bytes()).hexdigest())


class TestBuildCommand:
    def test_appends_wrapper_flag(self):
        argv = build_command(Path("/cache/godel"), ["verify", "--apply"], Path("/p/godelw"))

        assert argv == ["/cache/godel", "verify", "--apply", "--wrapper", "/p/godelw"]

    def test_no_arguments(self):
        argv = build_command(Path("/cache/godel"), [], Path("/p/godelw"))

        assert argv == ["/cache/godel", "--wrapper", "/p/godelw"]


class TestLaunch:
    def test_execs_with_forwarded_args(self, binary, binary_platform, tmp_path):
        exec_fn = Mock(return_value=None)

        result = launch(
            binary, binary_platform, ["--help"], tmp_path / "godelw", exec_fn=exec_fn
        )

        assert result == 0
        exec_fn.assert_called_once_with(
            str(binary),
            [str(binary), "--help", "--wrapper", str(tmp_path / "godelw")],
        )

    def test_checksum_mismatch_prevents_exec(self, binary, tmp_path):
        exec_fn = Mock()
        wrong = PlatformInfo("linux", "amd64", "0" * 64)

        with pytest.raises(ChecksumMismatchError):
            launch(binary, wrong, [], tmp_path / "godelw", exec_fn=exec_fn)

        exec_fn.assert_not_called()

    def test_uses_os_execv(self, binary, binary_platform, tmp_path):
        with patch("godelw.distribution.launcher.os.execv") as execv:
            launch(binary, binary_platform, ["build"], tmp_path / "godelw")

        execv.assert_called_once()
        assert execv.call_args[0][1][:2] == [str(binary), "build"]

    def test_spawns_when_execv_unavailable(self, binary, binary_platform, tmp_path, monkeypatch):
        monkeypatch.delattr(launcher.os, "execv")
        completed = Mock(returncode=7)

        with patch("godelw.distribution.launcher.subprocess.run", return_value=completed) as run:
            result = launch(binary, binary_platform, ["x"], tmp_path / "godelw")

        assert result == 7
        assert run.call_args[0][0] == [str(binary), "x", "--wrapper", str(tmp_path / "godelw")]

    @pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")
    def test_spawn_propagates_real_exit_status(self, tmp_path, monkeypatch):
        script = tmp_path / "godel"
        script.write_text("#!/bin/sh\nexit 5\n")
        script.chmod(0o755)
        info = PlatformInfo("linux", "amd64", hashlib.sha256(script.read_bytes()).hexdigest())
        monkeypatch.delattr(launcher.os, "execv")

        assert launch(script, info, [], tmp_path / "godelw") == 5

    def test_exec_failure_raises_launch_error(self, binary, binary_platform, tmp_path):
        exec_fn = Mock(side_effect=PermissionError(13, "Permission denied"))

        with pytest.raises(LaunchError, match="Permission denied") as exc_info:
            launch(binary, binary_platform, [], tmp_path / "godelw", exec_fn=exec_fn)

        assert exc_info.value.binary == binary

    @pytest.mark.skipif(sys.platform == "win32", reason="relies on POSIX file modes")
    def test_binary_without_exec_bit(self, binary, binary_platform, tmp_path, monkeypatch):
        binary.chmod(0o644)
        monkeypatch.delattr(launcher.os, "execv")

        with pytest.raises(LaunchError, match="Failed to execute") as exc_info:
            launch(binary, binary_platform, [], tmp_path / "godelw")

        assert exc_info.value.binary == binary
