"""Unit tests for the tmux-compose CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tmux_compose.cli.main import main


class TestCLI:
    """Test cases for CLI commands."""

    @pytest.fixture
    def runner(self):
        """Click CLI runner."""
        return CliRunner()

    @pytest.fixture(autouse=True)
    def tmux_installed(self):
        with patch("tmux_compose.cli.main.shutil.which", return_value="/usr/bin/tmux") as mock:
            yield mock

    @pytest.fixture(autouse=True)
    def mock_setup_logging(self):
        with patch("tmux_compose.cli.main.setup_logging") as mock:
            yield mock

    @pytest.fixture(autouse=True)
    def no_settle_sleep(self):
        with patch("tmux_compose.core.engine.time.sleep"):
            yield

    @pytest.fixture
    def driver(self, fake_driver):
        with patch("tmux_compose.cli.compose.get_tmux_driver", return_value=fake_driver):
            yield fake_driver

    def test_help_exits_nonzero(self, runner):
        """Test -h prints usage and exits with an error status."""
        result = runner.invoke(main, ["-h"])
        assert result.exit_code == 1
        assert "Usage:" in result.output
        assert "--file" in result.output
        assert "up" in result.output

    def test_missing_command(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "No command given" in result.output

    def test_unknown_command(self, runner, compose_file):
        result = runner.invoke(main, ["-f", str(compose_file), "sideways"])
        assert result.exit_code != 0
        assert "No such command" in result.output

    def test_verbose_and_quiet_conflict(self, runner, compose_file, driver):
        result = runner.invoke(main, ["-f", str(compose_file), "-v", "-q", "up"])
        assert result.exit_code == 2
        assert "Cannot use both --verbose and --quiet" in result.output

    def test_missing_tmux(self, runner, compose_file, tmux_installed):
        tmux_installed.return_value = None
        result = runner.invoke(main, ["-f", str(compose_file), "up"])
        assert result.exit_code == 1
        assert "tmux is required but not installed" in result.output

    def test_missing_config_file(self, runner, tmp_path, driver):
        missing = tmp_path / "missing.yml"
        result = runner.invoke(main, ["--file", str(missing), "up"])
        assert result.exit_code == 1
        assert f"Config file '{missing}' not found." in result.output
        assert driver.calls == []

    def test_invalid_config_file(self, runner, tmp_path, driver):
        path = tmp_path / "tmux-compose.yml"
        path.write_text("sessions:\n  - name: dev\n  - name: dev\n")
        result = runner.invoke(main, ["-f", str(path), "up"])
        assert result.exit_code == 1
        assert "Duplicate session names: dev" in result.output
        assert driver.mutating_calls == []

    def test_up(self, runner, compose_file, driver):
        result = runner.invoke(main, ["-f", str(compose_file), "up"])
        assert result.exit_code == 0
        assert "Created session 'dev'" in result.output
        assert "All sessions created successfully!" in result.output
        assert "tmux attach -t SESSION_NAME" in result.output
        assert "dev" in driver.sessions

    def test_up_default_file_in_cwd(self, runner, compose_file, driver, monkeypatch):
        monkeypatch.chdir(compose_file.parent)
        result = runner.invoke(main, ["up"])
        assert result.exit_code == 0
        assert "dev" in driver.sessions

    def test_up_existing_session(self, runner, compose_file, driver):
        driver.sessions["dev"] = [{"name": "window1", "panes": 1}]
        result = runner.invoke(main, ["-f", str(compose_file), "up"])
        assert result.exit_code == 0
        assert "Session 'dev' already exists, skipping..." in result.output
        assert driver.mutating_calls == []

    def test_up_layout_warning(self, runner, compose_file, driver):
        driver.fail_on["select_layout"] = "dev:server"
        result = runner.invoke(main, ["-f", str(compose_file), "up"])
        assert result.exit_code == 0
        assert "Warning: Failed to apply layout 'main-vertical'" in result.output

    def test_up_failure_sets_exit_code(self, runner, compose_file, driver):
        driver.fail_on["create_window"] = "dev:server"
        result = runner.invoke(main, ["-f", str(compose_file), "up"])
        assert result.exit_code == 1
        assert "Failed to create session 'dev'" in result.output
        assert "1 session(s) failed: dev" in result.output

    def test_up_json(self, runner, compose_file, driver):
        result = runner.invoke(main, ["--json", "-f", str(compose_file), "up"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["command"] == "up"
        assert data["ok"] is True
        assert data["sessions"][0]["outcome"] == "created"
        operations = [s["operation"] for s in data["sessions"][0]["steps"]]
        assert operations.count("split-window") == 2

    def test_up_quiet(self, runner, compose_file, driver):
        result = runner.invoke(main, ["-q", "-f", str(compose_file), "up"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_verbose_lists_steps(self, runner, compose_file, driver, mock_setup_logging):
        result = runner.invoke(main, ["-v", "-f", str(compose_file), "up"])
        assert result.exit_code == 0
        assert "[VERBOSE] dev: split-window dev:server -> ok" in result.output
        assert mock_setup_logging.call_args.args[0] == "INFO"

    def test_settings_flags(self, runner, compose_file, fake_driver):
        with patch(
            "tmux_compose.cli.compose.get_tmux_driver", return_value=fake_driver
        ) as get_driver, patch("tmux_compose.cli.compose.ReconciliationEngine") as engine:
            engine.return_value.up.return_value.sessions = []
            engine.return_value.up.return_value.by_outcome.return_value = []
            result = runner.invoke(
                main,
                ["-f", str(compose_file), "-L", "compose", "--settle-delay", "0.5", "up"],
            )
        assert result.exit_code == 0
        get_driver.assert_called_once_with("compose")
        engine.assert_called_once_with(fake_driver, settle_delay=0.5)

    def test_down(self, runner, tmp_path, driver):
        path = tmp_path / "tmux-compose.yml"
        path.write_text("sessions:\n  - name: dev\n  - name: monitoring\n")
        driver.sessions["dev"] = [{"name": "window1", "panes": 1}]

        result = runner.invoke(main, ["-f", str(path), "down"])

        assert result.exit_code == 0
        assert "Stopped session 'dev'" in result.output
        assert "Session 'monitoring' not found, skipping..." in result.output
        assert "All sessions stopped!" in result.output
        assert driver.operations("kill_session") == [("kill_session", "dev")]

    def test_ls_empty(self, runner, compose_file, driver):
        result = runner.invoke(main, ["-f", str(compose_file), "ls"])
        assert result.exit_code == 0
        assert "No active tmux sessions." in result.output

    def test_ls(self, runner, compose_file, driver):
        driver.sessions["dev"] = [{"name": "a", "panes": 1}, {"name": "b", "panes": 1}]
        result = runner.invoke(main, ["-f", str(compose_file), "ls"])
        assert result.exit_code == 0
        assert "Running tmux sessions:" in result.output
        assert "dev: 2 windows" in result.output

    def test_ls_json(self, runner, compose_file, driver):
        driver.sessions["dev"] = [{"name": "a", "panes": 1}]
        result = runner.invoke(main, ["--json", "-f", str(compose_file), "ls"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"name": "dev", "windows": 1, "attached": False}
        ]
