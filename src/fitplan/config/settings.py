"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

EMPTY_CANDIDATE_POLICIES = ("error", "widen")
OUTPUT_FORMATS = ("table", "json")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fitplan"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "fitplan.db"


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class RetryConfig:
    """Bounded wait for a per-day plan to become visible.

    With backoff 1.0 the delay is fixed (3 attempts, 1 second apart);
    larger values grow the delay exponentially.
    """

    attempts: int = 3
    initial_delay_seconds: float = 1.0
    backoff: float = 1.0


@dataclass
class MealPlanConfig:
    """Meal plan generation settings."""

    snack_count: int = 1
    empty_candidates: str = "error"  # "error" or "widen"


@dataclass
class MentalConfig:
    """Windows used by the mental health stats engine."""

    journal_window_days: int = 30
    breathing_window_hours: int = 24


@dataclass
class DefaultsConfig:
    """Values used when seeding new records, plus CLI output defaults."""

    water_intake_ml: int = 2000
    output_format: str = "table"  # "table" or "json"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    meal_plans: MealPlanConfig = field(default_factory=MealPlanConfig)
    mental: MentalConfig = field(default_factory=MentalConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fitplan/config.yaml

        Returns:
            Settings instance

        Raises:
            ValueError: If meal_plans.empty_candidates or defaults.output_format
                is not a known value
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "database" in data:
            db_data = data["database"]
            if "path" in db_data:
                settings.database.path = Path(db_data["path"]).expanduser()

        if "retry" in data:
            retry_data = data["retry"]
            if "attempts" in retry_data:
                settings.retry.attempts = int(retry_data["attempts"])
            if "initial_delay_seconds" in retry_data:
                settings.retry.initial_delay_seconds = float(
                    retry_data["initial_delay_seconds"]
                )
            if "backoff" in retry_data:
                settings.retry.backoff = float(retry_data["backoff"])

        if "meal_plans" in data:
            meal_data = data["meal_plans"]
            if "snack_count" in meal_data:
                settings.meal_plans.snack_count = int(meal_data["snack_count"])
            if "empty_candidates" in meal_data:
                policy = meal_data["empty_candidates"]
                if policy not in EMPTY_CANDIDATE_POLICIES:
                    raise ValueError(
                        f"meal_plans.empty_candidates must be one of "
                        f"{EMPTY_CANDIDATE_POLICIES}, got '{policy}'"
                    )
                settings.meal_plans.empty_candidates = policy

        if "mental" in data:
            mental_data = data["mental"]
            if "journal_window_days" in mental_data:
                settings.mental.journal_window_days = int(
                    mental_data["journal_window_days"]
                )
            if "breathing_window_hours" in mental_data:
                settings.mental.breathing_window_hours = int(
                    mental_data["breathing_window_hours"]
                )

        if "defaults" in data:
            def_data = data["defaults"]
            if "water_intake_ml" in def_data:
                settings.defaults.water_intake_ml = int(def_data["water_intake_ml"])
            if "output_format" in def_data:
                output_format = def_data["output_format"]
                if output_format not in OUTPUT_FORMATS:
                    raise ValueError(
                        f"defaults.output_format must be one of "
                        f"{OUTPUT_FORMATS}, got '{output_format}'"
                    )
                settings.defaults.output_format = output_format

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fitplan/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {
                "path": str(self.database.path),
            },
            "retry": {
                "attempts": self.retry.attempts,
                "initial_delay_seconds": self.retry.initial_delay_seconds,
                "backoff": self.retry.backoff,
            },
            "meal_plans": {
                "snack_count": self.meal_plans.snack_count,
                "empty_candidates": self.meal_plans.empty_candidates,
            },
            "mental": {
                "journal_window_days": self.mental.journal_window_days,
                "breathing_window_hours": self.mental.breathing_window_hours,
            },
            "defaults": {
                "water_intake_ml": self.defaults.water_intake_ml,
                "output_format": self.defaults.output_format,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
