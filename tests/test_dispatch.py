"""Tests for forwarding the cargo subcommand."""

from unittest.mock import MagicMock, patch

from dispatch import normalize_command, run_cargo


class TestNormalizeCommand:
    """Leading separator handling."""

    def test_strips_double_dash(self):
        assert normalize_command(["--", "build", "--release"]) == ["build", "--release"]

    def test_keeps_inner_double_dash(self):
        assert normalize_command(["test", "--", "--nocapture"]) == ["test", "--", "--nocapture"]

    def test_none(self):
        assert normalize_command(None) == []

    def test_only_double_dash(self):
        assert normalize_command(["--"]) == []


class TestRunCargo:
    """Exit status mapping."""

    @patch("dispatch.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        assert run_cargo(["build"]) == 0
        assert mock_run.call_args[0][0] == ["cargo", "build"]

    @patch("dispatch.subprocess.run")
    def test_passes_exit_code_through(self, mock_run):
        mock_run.return_value = MagicMock(returncode=101)
        assert run_cargo(["test", "--", "--nocapture"], cargo="/usr/bin/cargo") == 101
        assert mock_run.call_args[0][0] == ["/usr/bin/cargo", "test", "--", "--nocapture"]

    @patch("dispatch.subprocess.run")
    def test_signal_maps_to_127(self, mock_run):
        mock_run.return_value = MagicMock(returncode=-9)
        assert run_cargo(["build"]) == 127

    @patch("dispatch.subprocess.run", side_effect=FileNotFoundError("cargo"))
    def test_spawn_failure_maps_to_127(self, _mock_run):
        assert run_cargo(["build"]) == 127
