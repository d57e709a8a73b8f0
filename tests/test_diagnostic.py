"""Tests for the diagnostic CLI."""

from unittest.mock import MagicMock, patch

import pytest

from muxctl.backends.base import MultiplexerBackend
from muxctl.diagnostic import (
    check_available,
    check_list_sessions,
    check_round_trip,
    main,
)
from muxctl.errors import ExternalProcessError
from muxctl.parsing import PaneSize


@pytest.fixture
def fake_backend():
    """A contract-shaped mock whose pane echoes what was sent to it."""
    backend = MagicMock(spec=MultiplexerBackend)
    backend.backend_name = "tmux"
    backend.is_available.return_value = True
    backend.list_sessions.return_value = ["dev"]
    backend.query_pane_size.return_value = PaneSize(80, 24, True)
    backend.capture_pane_output.return_value = "$ echo muxctl-literal\n$ echo muxctl-paste\n"
    backend.has_session.side_effect = [True, True, False]
    return backend


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("muxctl.diagnostic.time.sleep"):
        yield


class TestChecks:

    def test_available(self, fake_backend):
        assert check_available(fake_backend)["passed"] is True

    def test_not_available(self, fake_backend):
        fake_backend.is_available.return_value = False
        result = check_available(fake_backend)
        assert result["passed"] is False
        assert "not found" in result["details"]["error"]

    def test_list_sessions(self, fake_backend):
        result = check_list_sessions(fake_backend, "de")
        assert result["passed"] is True
        assert result["details"]["sessions"] == ["dev"]
        fake_backend.list_sessions.assert_called_once_with("de")

    def test_list_sessions_no_server_is_not_failure(self, fake_backend):
        fake_backend.list_sessions.side_effect = ExternalProcessError(
            ["tmux", "list-sessions"], 1, "no server running on /tmp/tmux-1000/default"
        )
        assert check_list_sessions(fake_backend)["passed"] is True

    def test_list_sessions_other_error(self, fake_backend):
        fake_backend.list_sessions.side_effect = ExternalProcessError(["tmux"], 1, "boom")
        assert check_list_sessions(fake_backend)["passed"] is False

    def test_round_trip(self, fake_backend):
        result = check_round_trip(fake_backend)

        assert result["passed"] is True
        assert result["details"]["pane_size"] == (80, 24, True)
        assert result["details"]["killed"] is True
        name = result["session"]
        fake_backend.create_session.assert_called_once_with(name, env={"MUXCTL_DIAG": "1"})
        fake_backend.resize_pane.assert_called_once_with(name, 80, 24)
        fake_backend.kill_session.assert_called_once_with(name)

    def test_round_trip_keep(self, fake_backend):
        fake_backend.has_session.side_effect = [True]
        check_round_trip(fake_backend, keep=True)
        fake_backend.kill_session.assert_not_called()

    def test_round_trip_create_failure(self, fake_backend):
        fake_backend.create_session.side_effect = ExternalProcessError(["tmux"], 1, "bad dir")
        fake_backend.has_session.side_effect = [False]
        result = check_round_trip(fake_backend)
        assert result["passed"] is False
        assert "bad dir" in result["details"]["error"]


class TestMain:

    def test_exit_code_when_unavailable(self, fake_backend, capsys):
        fake_backend.is_available.return_value = False
        with patch("muxctl.diagnostic.get_backend", return_value=fake_backend):
            assert main(["--quiet"]) == 1
        assert "FAIL" in capsys.readouterr().out

    def test_exit_code_when_all_pass(self, fake_backend, capsys):
        with patch("muxctl.diagnostic.get_backend", return_value=fake_backend) as mock_get:
            assert main(["--backend", "tmux"]) == 0
        mock_get.assert_called_once_with("tmux")
        assert "MUXCTL DIAGNOSTIC" in capsys.readouterr().out
