"""
Configuration for ParaLens.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from paralens.models.location import Location
from paralens.utils.exceptions import ConfigurationError


def _default_intervals() -> dict[Location, int]:
    return {
        Location.INBOX: 2,
        Location.PROJECTS: 7,
        Location.AREAS: 30,
        Location.RESOURCES: 90,
        Location.ARCHIVE: 180,
    }


class ReviewConfig(BaseModel):
    """Review cadence configuration."""

    default_intervals: dict[Location, int] = Field(default_factory=_default_intervals)


class FlowConfig(BaseModel):
    """Flow estimation configuration (thresholds in days)."""

    window_days: int | None = Field(default=90, ge=1)  # None = all time
    projects_archive_min_age: int = 90
    projects_archive_min_stale: int = 30
    areas_archive_min_age: int = 180
    areas_archive_min_stale: int = 90
    resources_archive_min_age: int = 365
    resources_archive_min_stale: int = 180
    # Age bands used to guess where an archived note came from
    archive_from_projects_below: int = 90
    archive_from_areas_below: int = 180


class PipelineConfig(BaseModel):
    """Pipeline reconstruction configuration."""

    window_days: int = Field(default=30, ge=1)


class CalendarConfig(BaseModel):
    """Task calendar configuration."""

    grid_days: int = Field(default=28, ge=1)
    lookahead_days: int = Field(default=7, ge=1)


class ActivityConfig(BaseModel):
    """Activity heatmap and vault statistics configuration."""

    window_days: int = Field(default=90, ge=1)
    heatmap_levels: int = Field(default=4, ge=1)
    recent_periods: list[int] = Field(default_factory=lambda: [1, 7, 30, 90])
    top_tags: int = 10
    tag_cloud_limit: int = 50
    system_tags: list[str] = Field(
        default_factory=lambda: ["all", "inbox", "projects", "areas", "resources", "archive"]
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    review: ReviewConfig = Field(default_factory=ReviewConfig)
    flow: FlowConfig = Field(default_factory=FlowConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    activity: ActivityConfig = Field(default_factory=ActivityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            PARALENS_FLOW_WINDOW_DAYS: Flow window in days (0 = all time)
            PARALENS_PIPELINE_WINDOW_DAYS: Pipeline window in days
            PARALENS_CALENDAR_GRID_DAYS: Calendar grid length
            PARALENS_CALENDAR_LOOKAHEAD_DAYS: Open-task look-ahead window
            PARALENS_ACTIVITY_WINDOW_DAYS: Heatmap / tag cloud window
            PARALENS_REVIEW_<LOCATION>_DAYS: Default cadence per location
            PARALENS_LOG_LEVEL: Log level
            PARALENS_LOG_TO_FILE: Enable file sink
            PARALENS_LOG_DIR: Log directory
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            if value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            try:
                if isinstance(default, int):
                    return int(value)
                if isinstance(default, float):
                    return float(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {key}: {value!r}", context={"key": key}
                ) from e
            return value

        defaults = cls()

        intervals = {
            location: get_env(f"PARALENS_REVIEW_{location.name}_DAYS", days)
            for location, days in defaults.review.default_intervals.items()
        }
        flow_window = get_env("PARALENS_FLOW_WINDOW_DAYS", defaults.flow.window_days)

        # Plain dicts so every value is validated by _from_dict
        return cls._from_dict(
            {
                "review": {"default_intervals": intervals},
                "flow": {**defaults.flow.model_dump(), "window_days": flow_window or None},
                "pipeline": {
                    "window_days": get_env(
                        "PARALENS_PIPELINE_WINDOW_DAYS", defaults.pipeline.window_days
                    ),
                },
                "calendar": {
                    "grid_days": get_env("PARALENS_CALENDAR_GRID_DAYS", defaults.calendar.grid_days),
                    "lookahead_days": get_env(
                        "PARALENS_CALENDAR_LOOKAHEAD_DAYS", defaults.calendar.lookahead_days
                    ),
                },
                "activity": {
                    **defaults.activity.model_dump(),
                    "window_days": get_env(
                        "PARALENS_ACTIVITY_WINDOW_DAYS", defaults.activity.window_days
                    ),
                },
                "logging": {
                    "level": get_env("PARALENS_LOG_LEVEL", "INFO"),
                    "log_to_file": get_env("PARALENS_LOG_TO_FILE", True),
                    "log_dir": get_env("PARALENS_LOG_DIR", "logs"),
                    "file_rotation": get_env("PARALENS_LOG_FILE_ROTATION", "10 MB"),
                    "file_retention": get_env("PARALENS_LOG_FILE_RETENTION", "7 days"),
                    "compression": get_env("PARALENS_LOG_COMPRESSION", "zip"),
                    "serialize": get_env("PARALENS_LOG_SERIALIZE", True),
                },
            },
            source="environment",
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ConfigurationError: If YAML is invalid or doesn't describe a Config
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        return cls._from_dict(_load_yaml(yaml_path), source=str(yaml_path))

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            config_dict = _load_yaml(Path(yaml_path))
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        final_dict = {**config_dict}

        # Apply env overrides (non-default sections)
        default = cls()
        for section in ("review", "flow", "pipeline", "calendar", "activity", "logging"):
            if getattr(env_config, section) != getattr(default, section):
                final_dict[section] = getattr(env_config, section).model_dump()

        return cls._from_dict(final_dict, source=str(yaml_path)) if final_dict else env_config

    @classmethod
    def _from_dict(cls, data: dict[str, Any], source: str) -> "Config":
        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {source}: {e}") from e


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", context={"path": str(path)}) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {path}", context={"path": str(path)}
        )
    return data


# Default config instance
default_config = Config()
