"""Tests for terminal capability probes."""

from unittest.mock import patch

import pytest

from muxctl.host import terminal


@pytest.fixture
def windows():
    with patch("muxctl.host.terminal.platform.system", return_value="Windows"):
        yield


@pytest.fixture
def linux():
    with patch("muxctl.host.terminal.platform.system", return_value="Linux"):
        yield


class TestUnix:

    def test_capabilities(self, linux, monkeypatch):
        monkeypatch.setenv("WT_SESSION", "ignored-on-unix")
        assert terminal.is_windows_terminal() is False
        assert terminal.is_conhost() is False
        assert terminal.supports_nerd_fonts() is True
        assert terminal.supports_24bit_color() is True


class TestWindows:

    def test_windows_terminal(self, windows, monkeypatch):
        monkeypatch.setenv("WT_SESSION", "0b1c2d3e")
        assert terminal.is_windows_terminal() is True
        assert terminal.is_conhost() is False
        assert terminal.supports_nerd_fonts() is True
        assert terminal.supports_24bit_color() is True

    def test_conhost(self, windows, monkeypatch):
        monkeypatch.delenv("WT_SESSION", raising=False)
        assert terminal.is_windows_terminal() is False
        assert terminal.is_conhost() is True
        assert terminal.supports_nerd_fonts() is False
        assert terminal.supports_24bit_color() is False
