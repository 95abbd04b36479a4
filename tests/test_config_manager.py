"""
Unit tests for ConfigManager and the settings/policy dataclasses.
"""

import pytest
import json
import tempfile
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config.config_manager import (
    ConfigManager, AppConfig, OutputSettings, Paths, UserSettings, WorkPolicy,
    default_config_path
)


class TestUserSettings:
    """Tests for UserSettings dataclass."""

    def test_default_values(self):
        settings = UserSettings()

        assert settings.standard_in_time == "10:30"
        assert settings.max_out_time == "20:31"
        assert settings.enable_max_time is True
        assert settings.late_buffer_minutes == 30


class TestWorkPolicy:
    """Tests for WorkPolicy dataclass."""

    def test_default_values(self):
        policy = WorkPolicy()

        assert policy.daily_target_hours == 9.5
        assert policy.weekly_target_hours == 47.5
        assert policy.half_day_credit_hours == 4.75
        assert policy.full_day_credit_hours == 9.5
        assert policy.safety_buffer_minutes == 2

    def test_half_day_credit_minutes(self):
        assert WorkPolicy().half_day_credit_minutes == 285
        assert WorkPolicy(half_day_credit_hours=4.0).half_day_credit_minutes == 240


class TestOutputSettings:
    """Tests for OutputSettings dataclass."""

    def test_default_values(self):
        output = OutputSettings()

        assert output.output_dir == ""
        assert output.filename_pattern == "WorkSync_{year}_W{week}.xlsx"
        assert output.generate_pdf is True
        assert output.pdf_output_dir == ""
        assert output.pdf_filename_pattern == "WorkSync_{year}_W{week}.pdf"


class TestDefaultConfigPath:
    """Tests for default_config_path."""

    def test_source_checkout(self, monkeypatch):
        monkeypatch.delenv("WORKSYNC_CONFIG", raising=False)
        src_dir = (Path(__file__).parent.parent / "src").resolve()

        assert default_config_path().resolve() == src_dir / "config.json"
        assert ConfigManager().config_path.resolve() == src_dir / "config.json"

    def test_environment_override(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "worksync.json"
            monkeypatch.setenv("WORKSYNC_CONFIG", str(config_path))

            manager = ConfigManager()
            manager.load()
            manager.save()

            assert manager.config_path == config_path
            assert config_path.exists()


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_load_default_config(self):
        """Test loading default config when file doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            manager = ConfigManager(config_path)
            config = manager.load()

            assert isinstance(config, AppConfig)
            assert config.settings.standard_in_time == "10:30"
            assert config.policy.weekly_target_hours == 47.5

    def test_save_and_load_config(self):
        """Test saving and loading modified values."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            manager = ConfigManager(config_path)

            config = manager.load()
            config.settings.standard_in_time = "09:45"
            config.settings.enable_max_time = False
            config.policy.weekly_target_hours = 45.0
            config.paths.last_import_file = "/tmp/week.txt"
            config.output_settings.generate_pdf = False

            manager.save()

            config2 = ConfigManager(config_path).load()

            assert config2.settings.standard_in_time == "09:45"
            assert config2.settings.enable_max_time is False
            assert config2.policy.weekly_target_hours == 45.0
            assert config2.paths.last_import_file == "/tmp/week.txt"
            assert config2.output_settings.generate_pdf is False

    def test_partial_config_uses_defaults(self):
        """Sections missing from an older file fall back to defaults."""
        old_config_data = {
            "settings": {"standard_in_time": "10:00", "max_out_time": "20:00"}
        }

        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(old_config_data, f)

            config = ConfigManager(config_path).load()

            assert config.settings.standard_in_time == "10:00"
            assert config.settings.max_out_time == "20:00"
            assert config.settings.late_buffer_minutes == 30
            assert config.policy == WorkPolicy()
            assert config.paths == Paths()
            assert config.output_settings == OutputSettings()

    def test_invalid_json_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            config_path.write_text("{ not json", encoding='utf-8')

            config = ConfigManager(config_path).load()

            assert config == AppConfig()

    def test_update_persists(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            manager = ConfigManager(config_path)
            manager.load()

            manager.update(settings=UserSettings(standard_in_time="11:00"))

            data = json.loads(config_path.read_text(encoding='utf-8'))
            assert data["settings"]["standard_in_time"] == "11:00"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
