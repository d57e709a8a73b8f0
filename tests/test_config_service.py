"""Tests for ConfigService."""

import tempfile
from pathlib import Path

import pytest
import yaml

from muxctl.models.config import MuxConfig
from muxctl.services.config_service import (
    ConfigService,
    get_config_service,
    reset_config_service,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_config(path: Path, data) -> Path:
    path.write_text(yaml.dump(data))
    return path


class TestConfigServiceLoad:
    """Tests for loading configuration."""

    def test_load_defaults_when_no_file(self, temp_dir):
        """Returns default config when file doesn't exist."""
        config = ConfigService(temp_dir / "nonexistent.yaml").load()

        assert config.backend == "auto"
        assert config.command_timeout == 10
        assert config.operation_logging.enabled is False

    def test_load_values(self, temp_dir):
        path = write_config(
            temp_dir / "muxctl.yaml",
            {
                "backend": "tmux",
                "command_timeout": 30,
                "operation_logging": {"enabled": True, "debug_enabled": True},
            },
        )
        config = ConfigService(path).load()

        assert config.backend == "tmux"
        assert config.command_timeout == 30
        assert config.operation_logging.enabled is True
        assert config.operation_logging.debug_enabled is True

    def test_empty_file_gives_defaults(self, temp_dir):
        path = temp_dir / "muxctl.yaml"
        path.write_text("")
        assert ConfigService(path).load() == MuxConfig()

    def test_invalid_yaml_gives_defaults(self, temp_dir):
        path = temp_dir / "muxctl.yaml"
        path.write_text("backend: [unclosed")
        assert ConfigService(path).load() == MuxConfig()

    def test_non_mapping_gives_defaults(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", ["tmux"])
        assert ConfigService(path).load() == MuxConfig()

    def test_out_of_range_timeout_gives_defaults(self, temp_dir):
        """Validation failures fall back to defaults."""
        path = write_config(temp_dir / "muxctl.yaml", {"command_timeout": 0})
        assert ConfigService(path).load().command_timeout == 10


class TestConfigMigration:
    """Tests for legacy key migration."""

    def test_terminal_backend_renamed(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", {"terminal_backend": "psmux"})
        assert ConfigService(path).load().backend == "psmux"

    def test_timeout_renamed(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", {"timeout": 42})
        assert ConfigService(path).load().command_timeout == 42

    def test_unknown_backend_falls_back_to_auto(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", {"backend": "screen"})
        assert ConfigService(path).load().backend == "auto"

    def test_new_key_wins_over_legacy(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", {"backend": "tmux", "terminal_backend": "psmux"})
        assert ConfigService(path).load().backend == "tmux"


class TestConfigServiceCaching:

    def test_get_config_caches(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", {"backend": "tmux"})
        service = ConfigService(path)
        first = service.get_config()
        write_config(path, {"backend": "psmux"})
        assert service.get_config() is first

    def test_reload_reads_disk(self, temp_dir):
        path = write_config(temp_dir / "muxctl.yaml", {"backend": "tmux"})
        service = ConfigService(path)
        service.get_config()
        write_config(path, {"backend": "psmux"})
        assert service.reload().backend == "psmux"


class TestConfigServiceSave:

    def test_save_round_trip(self, temp_dir):
        path = temp_dir / "muxctl.yaml"
        service = ConfigService(path)
        assert service.save(MuxConfig(backend="psmux", command_timeout=7)) is True

        saved = yaml.safe_load(path.read_text())
        assert saved["backend"] == "psmux"
        assert saved["command_timeout"] == 7

    def test_save_without_config_returns_false(self, temp_dir):
        assert ConfigService(temp_dir / "muxctl.yaml").save() is False


class TestConfigServiceSingleton:

    def test_singleton(self):
        assert get_config_service() is get_config_service()

    def test_env_var_path(self, temp_dir, monkeypatch):
        path = temp_dir / "from-env.yaml"
        monkeypatch.setenv("MUXCTL_CONFIG", str(path))
        reset_config_service()
        assert get_config_service().config_path == path

    def test_explicit_path(self, temp_dir):
        reset_config_service()
        assert get_config_service(temp_dir / "x.yaml").config_path == temp_dir / "x.yaml"
