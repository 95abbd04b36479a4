"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between the settings dataclasses and JSON persistence.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")

# Environment override for the config file location
_CONFIG_ENV = "WORKSYNC_CONFIG"


def default_config_path() -> Path:
    """
    Config file used when none is given.

    WORKSYNC_CONFIG wins; otherwise src/config.json in a source checkout, or
    config.json in the working directory for an installed package.
    """
    env_path = os.environ.get(_CONFIG_ENV)
    if env_path:
        return Path(env_path)
    src_dir = Path(__file__).parent.parent
    if src_dir.name == "src":
        return src_dir / "config.json"
    return Path.cwd() / "config.json"


@dataclass
class UserSettings:
    """User-facing punch settings.

    Passed by value into every engine operation; the engine never changes it.
    """
    standard_in_time: str = "10:30"   # expected arrival
    max_out_time: str = "20:31"       # hard punch-out cap
    enable_max_time: bool = True
    late_buffer_minutes: int = 30     # grace after standard_in_time


@dataclass
class WorkPolicy:
    """Quota policy: daily/weekly targets and leave credits, in hours."""
    daily_target_hours: float = 9.5
    weekly_target_hours: float = 47.5
    half_day_credit_hours: float = 4.75
    full_day_credit_hours: float = 9.5
    safety_buffer_minutes: int = 2
    on_track_tolerance_hours: float = 0.1

    @property
    def half_day_credit_minutes(self) -> float:
        return self.half_day_credit_hours * 60


@dataclass
class Paths:
    """File paths configuration."""
    last_import_file: str = ""


@dataclass
class OutputSettings:
    """Output settings for generated week reports."""
    output_dir: str = ""  # Default empty = project root
    filename_pattern: str = "WorkSync_{year}_W{week}.xlsx"
    generate_pdf: bool = True
    pdf_output_dir: str = ""   # empty = same directory as the xlsx
    pdf_filename_pattern: str = "WorkSync_{year}_W{week}.pdf"


@dataclass
class AppConfig:
    """Main application configuration container."""
    settings: UserSettings = field(default_factory=UserSettings)
    policy: WorkPolicy = field(default_factory=WorkPolicy)
    paths: Paths = field(default_factory=Paths)
    output_settings: OutputSettings = field(default_factory=OutputSettings)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or default_config_path()
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to load config {self.config_path}, using defaults: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.debug(f"Config saved: {self.config_path}")

    def update(self, **kwargs) -> None:
        """Update specific configuration values."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        self.save()

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "settings": {
                "standard_in_time": config.settings.standard_in_time,
                "max_out_time": config.settings.max_out_time,
                "enable_max_time": config.settings.enable_max_time,
                "late_buffer_minutes": config.settings.late_buffer_minutes
            },
            "policy": {
                "daily_target_hours": config.policy.daily_target_hours,
                "weekly_target_hours": config.policy.weekly_target_hours,
                "half_day_credit_hours": config.policy.half_day_credit_hours,
                "full_day_credit_hours": config.policy.full_day_credit_hours,
                "safety_buffer_minutes": config.policy.safety_buffer_minutes,
                "on_track_tolerance_hours": config.policy.on_track_tolerance_hours
            },
            "paths": {
                "last_import_file": config.paths.last_import_file
            },
            "output_settings": {
                "output_dir": config.output_settings.output_dir,
                "filename_pattern": config.output_settings.filename_pattern,
                "generate_pdf": config.output_settings.generate_pdf,
                "pdf_output_dir": config.output_settings.pdf_output_dir,
                "pdf_filename_pattern": config.output_settings.pdf_filename_pattern
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        settings_data = data.get("settings", {})
        policy_data = data.get("policy", {})
        paths_data = data.get("paths", {})
        output_settings_data = data.get("output_settings", {})

        # Build UserSettings
        settings = UserSettings(
            standard_in_time=settings_data.get("standard_in_time", "10:30"),
            max_out_time=settings_data.get("max_out_time", "20:31"),
            enable_max_time=settings_data.get("enable_max_time", True),
            late_buffer_minutes=int(settings_data.get("late_buffer_minutes", 30))
        )

        # Build WorkPolicy
        policy = WorkPolicy(
            daily_target_hours=float(policy_data.get("daily_target_hours", 9.5)),
            weekly_target_hours=float(policy_data.get("weekly_target_hours", 47.5)),
            half_day_credit_hours=float(policy_data.get("half_day_credit_hours", 4.75)),
            full_day_credit_hours=float(policy_data.get("full_day_credit_hours", 9.5)),
            safety_buffer_minutes=int(policy_data.get("safety_buffer_minutes", 2)),
            on_track_tolerance_hours=float(policy_data.get("on_track_tolerance_hours", 0.1))
        )

        paths = Paths(
            last_import_file=paths_data.get("last_import_file", "")
        )

        output_settings = OutputSettings(
            output_dir=output_settings_data.get("output_dir", ""),
            filename_pattern=output_settings_data.get("filename_pattern", "WorkSync_{year}_W{week}.xlsx"),
            generate_pdf=output_settings_data.get("generate_pdf", True),
            pdf_output_dir=output_settings_data.get("pdf_output_dir", ""),
            pdf_filename_pattern=output_settings_data.get("pdf_filename_pattern", "WorkSync_{year}_W{week}.pdf")
        )

        return AppConfig(
            settings=settings,
            policy=policy,
            paths=paths,
            output_settings=output_settings
        )
