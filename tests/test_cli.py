"""Tests for stackbrew_gen.cli."""

from __future__ import annotations

import os
import signal
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from conftest import FakeRemote
from stackbrew_gen.cli import cli
from stackbrew_gen.config import load_config
from stackbrew_gen.models import GeneratorConfig, RenderContext
from stackbrew_gen.render import render_dockerfile

MANIFEST = "Maintainers: A\nGitRepo: r\n\nTags: latest, 4.0.0\n\n"


class TestGenerate:
    """Tests for the generate command."""

    @patch("stackbrew_gen.cli.run_generate")
    def test_defaults(self, mock_run: MagicMock) -> None:
        """Without options, the built-in config and the cwd are used."""
        mock_run.return_value = MANIFEST

        result = CliRunner().invoke(cli, ["generate"])

        assert result.exit_code == 0
        assert result.output == MANIFEST
        mock_run.assert_called_once_with(GeneratorConfig(), Path("."))

    @patch("stackbrew_gen.cli.run_generate")
    def test_config_and_output_dir(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = MANIFEST
        config_path = tmp_path / "stackbrew.toml"
        config_path.write_text("max_versions = 2\n")

        result = CliRunner().invoke(
            cli,
            ["generate", "--config", str(config_path), "--output-dir", str(tmp_path / "out")],
        )

        assert result.exit_code == 0
        config, output_dir = mock_run.call_args.args
        assert config.max_versions == 2
        assert output_dir == tmp_path / "out"

    @patch("stackbrew_gen.cli.run_generate")
    def test_git_failure_uses_git_exit_code(self, mock_run: MagicMock) -> None:
        """A failing git command surfaces its stderr and return code."""
        mock_run.side_effect = subprocess.CalledProcessError(
            128, ["git", "ls-remote"], stderr="fatal: repository not found\n"
        )

        result = CliRunner().invoke(cli, ["generate"])

        assert result.exit_code == 128
        assert "fatal: repository not found" in result.output

    @patch("stackbrew_gen.pipeline.git_ok")
    @patch("stackbrew_gen.pipeline.git")
    def test_sigterm_removes_clone(
        self,
        mock_git: MagicMock,
        mock_git_ok: MagicMock,
        remote: FakeRemote,
        tmp_path: Path,
    ) -> None:
        """SIGTERM during the clone exits 143 and leaves nothing behind."""

        def git(*args: str, check: bool = True) -> str:
            output = remote.git(*args, check=check)
            if args[0] == "clone":
                os.kill(os.getpid(), signal.SIGTERM)
            return output

        mock_git.side_effect = git
        mock_git_ok.side_effect = remote.git_ok
        output_dir = tmp_path / "out"

        result = CliRunner().invoke(cli, ["generate", "--output-dir", str(output_dir)])

        assert result.exit_code == 128 + signal.SIGTERM
        assert len(remote.clone_dirs) == 1
        assert not Path(remote.clone_dirs[0]).exists()
        assert not output_dir.exists()

    @patch("stackbrew_gen.cli.run_generate")
    def test_restores_sigterm_handler(self, mock_run: MagicMock) -> None:
        """The SIGTERM handler is only installed for the duration of the run."""
        mock_run.return_value = MANIFEST
        before = signal.getsignal(signal.SIGTERM)

        CliRunner().invoke(cli, ["generate"])

        assert signal.getsignal(signal.SIGTERM) == before

    @patch("stackbrew_gen.cli.run_generate")
    def test_restores_sigterm_handler_on_git_failure(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.CalledProcessError(128, ["git"])
        before = signal.getsignal(signal.SIGTERM)

        CliRunner().invoke(cli, ["generate"])

        assert signal.getsignal(signal.SIGTERM) == before

    def test_missing_config_file(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["generate", "--config", str(tmp_path / "missing.toml")]
        )

        assert result.exit_code == 2


class TestRender:
    """Tests for the render command."""

    def test_prints_dockerfile(self) -> None:
        result = CliRunner().invoke(cli, ["render", "3.10.0"])

        assert result.exit_code == 0
        assert result.output == render_dockerfile(RenderContext(version="3.10.0"))

    def test_rejects_non_numeric_version(self) -> None:
        result = CliRunner().invoke(cli, ["render", "3.10.0-rc1"])

        assert result.exit_code == 2
        assert "MAJOR.MINOR[.PATCH]" in result.output


class TestInit:
    """Tests for the init command."""

    def test_writes_default_config(self, tmp_path: Path) -> None:
        dest = tmp_path / "conf" / "stackbrew.toml"

        result = CliRunner().invoke(cli, ["init", "--path", str(dest)])

        assert result.exit_code == 0
        assert "✓ Wrote config to" in result.output
        assert load_config(dest) == GeneratorConfig()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        dest = tmp_path / "stackbrew.toml"
        dest.write_text("# mine\n")

        result = CliRunner().invoke(cli, ["init", "--path", str(dest)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert dest.read_text() == "# mine\n"
