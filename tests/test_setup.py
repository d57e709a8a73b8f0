"""Verify project setup is correct."""

import sys
from pathlib import Path


def test_python_version():
    """Verify Python version is 3.10+."""
    assert sys.version_info >= (3, 10), "Python 3.10+ required"


def test_package_directory_exists():
    """Verify muxctl/ directory structure exists."""
    project_root = Path(__file__).parent.parent
    package = project_root / "muxctl"

    assert (package / "__init__.py").exists(), "muxctl/__init__.py should exist"
    assert (package / "backends").is_dir(), "muxctl/backends/ should exist"
    assert (package / "models").is_dir(), "muxctl/models/ should exist"
    assert (package / "services").is_dir(), "muxctl/services/ should exist"
    assert (package / "host").is_dir(), "muxctl/host/ should exist"


def test_package_importable():
    """Verify muxctl package is importable."""
    import muxctl

    assert muxctl.__version__ == "0.1.0"


def test_pydantic_available():
    """Verify pydantic is installed."""
    import pydantic

    assert pydantic.VERSION.startswith("2.")
