"""Pytest configuration and shared fixtures for muxctl tests."""

import pytest

from muxctl.backends import reset_backend
from muxctl.host.install import reset_install_method
from muxctl.services.config_service import CONFIG_PATH_ENV, reset_config_service


@pytest.fixture(autouse=True)
def isolate_singletons(tmp_path, monkeypatch):
    """Reset module-level singletons and point config lookup at an empty path.

    This ensures a developer's own muxctl.yaml never leaks into test runs.
    """
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "muxctl.yaml"))
    reset_backend()
    reset_config_service()
    reset_install_method()
    yield
    reset_backend()
    reset_config_service()
    reset_install_method()
