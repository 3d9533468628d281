"""
Tests for configuration management.

Tests config loading from:
1. Defaults
2. Environment variables
3. YAML files
4. Combined (env overrides YAML)
"""

import pytest
import yaml

from paralens.config import CalendarConfig, Config, FlowConfig, ReviewConfig
from paralens.models import Location
from paralens.utils.exceptions import ConfigurationError


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_config_creation(self):
        """Test creating config with defaults."""
        config = Config()

        assert config.review.default_intervals == {
            Location.INBOX: 2,
            Location.PROJECTS: 7,
            Location.AREAS: 30,
            Location.RESOURCES: 90,
            Location.ARCHIVE: 180,
        }
        assert config.flow.window_days == 90
        assert config.flow.projects_archive_min_age == 90
        assert config.pipeline.window_days == 30
        assert config.calendar.grid_days == 28
        assert config.calendar.lookahead_days == 7
        assert config.activity.recent_periods == [1, 7, 30, 90]
        assert config.logging.level == "INFO"

    def test_alternate_interval_table(self):
        """Test passing a custom interval table."""
        review = ReviewConfig(default_intervals={"inbox": 1, "projects": 3})

        assert review.default_intervals == {Location.INBOX: 1, Location.PROJECTS: 3}

    def test_flow_window_can_be_unbounded(self):
        assert FlowConfig(window_days=None).window_days is None

    def test_rejects_non_positive_grid(self):
        with pytest.raises(ValueError):
            CalendarConfig(grid_days=0)


class TestConfigFromEnv:
    """Test loading configuration from environment variables."""

    def test_from_env_basic(self, monkeypatch):
        monkeypatch.setenv("PARALENS_PIPELINE_WINDOW_DAYS", "60")
        monkeypatch.setenv("PARALENS_CALENDAR_GRID_DAYS", "35")
        monkeypatch.setenv("PARALENS_REVIEW_PROJECTS_DAYS", "14")
        monkeypatch.setenv("PARALENS_LOG_LEVEL", "DEBUG")

        config = Config.from_env()

        assert config.pipeline.window_days == 60
        assert config.calendar.grid_days == 35
        assert config.review.default_intervals[Location.PROJECTS] == 14
        assert config.review.default_intervals[Location.AREAS] == 30
        assert config.logging.level == "DEBUG"

    def test_from_env_with_booleans(self, monkeypatch):
        monkeypatch.setenv("PARALENS_LOG_TO_FILE", "false")

        assert Config.from_env().logging.log_to_file is False

    def test_zero_flow_window_means_all_time(self, monkeypatch):
        monkeypatch.setenv("PARALENS_FLOW_WINDOW_DAYS", "0")

        assert Config.from_env().flow.window_days is None

    def test_empty_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("PARALENS_PIPELINE_WINDOW_DAYS", "")

        assert Config.from_env().pipeline.window_days == 30

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("PARALENS_PIPELINE_WINDOW_DAYS", "thirty")

        with pytest.raises(ConfigurationError):
            Config.from_env()

    @pytest.mark.parametrize(
        "key",
        [
            "PARALENS_PIPELINE_WINDOW_DAYS",
            "PARALENS_CALENDAR_GRID_DAYS",
            "PARALENS_ACTIVITY_WINDOW_DAYS",
        ],
    )
    def test_out_of_range_value(self, monkeypatch, key):
        monkeypatch.setenv(key, "0")

        with pytest.raises(ConfigurationError):
            Config.from_env()

    def test_env_file(self, tmp_path, monkeypatch):
        # setenv then delenv so teardown removes whatever load_dotenv writes
        monkeypatch.setenv("PARALENS_ACTIVITY_WINDOW_DAYS", "1")
        monkeypatch.delenv("PARALENS_ACTIVITY_WINDOW_DAYS")
        env_file = tmp_path / ".env.test"
        env_file.write_text("PARALENS_ACTIVITY_WINDOW_DAYS=45\n")

        config = Config.from_env(env_file=env_file)

        assert config.activity.window_days == 45


class TestConfigFromYaml:
    """Test loading configuration from YAML files."""

    def test_from_yaml(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            yaml.dump(
                {
                    "review": {"default_intervals": {"inbox": 1, "areas": 14}},
                    "calendar": {"grid_days": 14},
                }
            )
        )

        config = Config.from_yaml(yaml_file)

        assert config.review.default_intervals == {Location.INBOX: 1, Location.AREAS: 14}
        assert config.calendar.grid_days == 14
        assert config.pipeline.window_days == 30

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("review: [unclosed")

        with pytest.raises(ConfigurationError):
            Config.from_yaml(yaml_file)

    def test_non_mapping_yaml(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            Config.from_yaml(yaml_file)

    def test_invalid_values(self, tmp_path):
        yaml_file = tmp_path / "values.yaml"
        yaml_file.write_text("calendar:\n  grid_days: -1\n")

        with pytest.raises(ConfigurationError):
            Config.from_yaml(yaml_file)

    def test_empty_yaml(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert Config.from_yaml(yaml_file) == Config()


class TestConfigCombined:
    """Env vars override YAML."""

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            yaml.dump({"pipeline": {"window_days": 10}, "calendar": {"grid_days": 14}})
        )
        monkeypatch.setenv("PARALENS_PIPELINE_WINDOW_DAYS", "60")

        config = Config.from_env_or_yaml(yaml_path=yaml_file)

        assert config.pipeline.window_days == 60
        assert config.calendar.grid_days == 14

    def test_yaml_only(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"activity": {"top_tags": 5}}))

        config = Config.from_env_or_yaml(yaml_path=yaml_file)

        assert config.activity.top_tags == 5

    def test_neither(self):
        assert Config.from_env_or_yaml() == Config()
