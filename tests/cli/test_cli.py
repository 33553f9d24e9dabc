"""
Tests for the godelw command-line interface.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from godelw.cli.parser import CLI, WrapperContext, main
from tests.fixtures.distributions import write_project


class TestWrapperContext:
    """Test resolving the project directory and wrapper path."""

    def test_wrapper_directory_with_config(self, tmp_path):
        write_project(tmp_path, "https://example.com/godel.tgz")

        context = WrapperContext.from_invocation(str(tmp_path / "godelw"), {})

        assert context.script_home == tmp_path
        assert context.wrapper_path == tmp_path / "godelw"
        assert context.settings_file == tmp_path / "godel" / "config" / "godelw.yml"
        assert context.properties_file == tmp_path / "godel" / "config" / "godel.properties"

    def test_env_override(self, tmp_path):
        project = tmp_path / "project"
        write_project(tmp_path, "https://example.com/godel.tgz")

        context = WrapperContext.from_invocation(
            str(tmp_path / "godelw"), {"GODELW_PROJECT_DIR": str(project)}
        )

        assert context.script_home == project
        assert context.wrapper_path == tmp_path / "godelw"

    def test_falls_back_to_cwd(self, tmp_path, monkeypatch):
        project = tmp_path / "project"
        project.mkdir()
        monkeypatch.chdir(project)

        context = WrapperContext.from_invocation(str(tmp_path / "venv" / "bin" / "godelw"), {})

        assert context.script_home == Path.cwd()
        assert context.wrapper_path == tmp_path / "venv" / "bin" / "godelw"

    def test_relative_argv0_is_made_absolute(self, tmp_path, monkeypatch):
        write_project(tmp_path, "https://example.com/godel.tgz")
        monkeypatch.chdir(tmp_path)

        context = WrapperContext.from_invocation("./godelw", {})

        assert context.wrapper_path.is_absolute()
        assert context.wrapper_path.name == "godelw"


class TestCLIRun:
    """Test CLI.run() wiring and error reporting."""

    def test_missing_settings_exits_1(self, tmp_path, capsys):
        (tmp_path / "godel" / "config").mkdir(parents=True)
        cli = CLI(environ={"GODEL_HOME": str(tmp_path / "cache")})

        assert cli.run(["verify"], argv0=str(tmp_path / "godelw")) == 1

        err = capsys.readouterr().err
        assert "Configuration file does not exist" in err
        assert "godelw.yml" in err

    def test_debug_log_format(self, tmp_path, capsys):
        (tmp_path / "godel" / "config").mkdir(parents=True)
        cli = CLI(environ={"GODELW_LOG_LEVEL": "debug", "GODEL_HOME": str(tmp_path / "c")})

        cli.run([], argv0=str(tmp_path / "godelw"))

        assert "ERROR [godelw.cli.parser]" in capsys.readouterr().err

    def test_unknown_log_level_defaults_to_info(self, tmp_path):
        (tmp_path / "godel" / "config").mkdir(parents=True)
        cli = CLI(environ={"GODELW_LOG_LEVEL": "chatty", "GODEL_HOME": str(tmp_path / "c")})

        cli.run([], argv0=str(tmp_path / "godelw"))

        assert logging.getLogger().level == logging.INFO

    def test_delegates_to_installed_binary(self, tmp_path):
        write_project(
            tmp_path,
            "https://example.com/godel.tgz",
            checksums={"darwin": "a" * 64, "linux": "a" * 64},
        )
        cache = tmp_path / "cache"
        cli = CLI(environ={"GODEL_HOME": str(cache)})

        with patch("godelw.cli.parser.DistributionInstaller") as installer_cls, patch(
            "godelw.cli.parser.launch", return_value=3
        ) as launch:
            installer_cls.return_value.ensure_installed.return_value = Path("/bin/godel")

            result = cli.run(["verify", "--apply"], argv0=str(tmp_path / "godelw"))

        assert result == 3
        settings, platform_info, layout, properties_file = installer_cls.call_args[0]
        assert settings.version == "2.17.0"
        assert platform_info.checksum == "a" * 64
        assert layout.root == cache
        assert properties_file == tmp_path / "godel" / "config" / "godel.properties"
        launch.assert_called_once_with(
            Path("/bin/godel"), platform_info, ["verify", "--apply"], tmp_path / "godelw"
        )


def test_main_exits_with_run_status():
    with patch.object(CLI, "run", return_value=1):
        with pytest.raises(SystemExit) as exc_info:
            main()

    assert exc_info.value.code == 1
