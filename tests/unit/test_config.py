"""Tests for configuration module."""

import pytest
import yaml

from cloud_cost_dashboard.config.loader import get_cached_config, load_config
from cloud_cost_dashboard.config.schema import (
    AnalyticsConfig,
    AnomalyDetectionConfig,
    Config,
    ForecastConfig,
    LLMConfig,
)


class TestConfig:
    """Tests for Config schema."""

    def test_default_config(self):
        """Test that default config is valid."""
        config = Config()
        assert config.project_name == "cloud-cost-dashboard"
        assert config.environment == "dev"
        assert config.llm.provider == "anthropic"

    def test_analytics_defaults(self):
        """Test the documented analytic defaults."""
        config = AnalyticsConfig()
        assert config.aggregation.granularity == "daily"
        assert config.anomaly_detection.method == "std_dev"
        assert config.anomaly_detection.std_dev.window_size == 7
        assert config.anomaly_detection.std_dev.std_deviations == 2.0
        assert config.anomaly_detection.percent_change.threshold_percent == 30.0
        assert config.forecast.horizon_months == 3
        assert config.resources.idle.max_cost == 5.0
        assert config.resources.idle.max_occurrences == 5
        assert config.resources.idle.min_duration_days == 10
        assert config.savings.rightsizing_families == ["m5", "t3"]
        assert config.savings.ebs_storage == 100.0
        assert config.summary.max_rows == 50_000

    def test_config_from_dict(self):
        """Test creating config from a nested dictionary."""
        config = Config(
            **{
                "environment": "prod",
                "analytics": {"anomaly_detection": {"std_dev": {"window_size": 14}}},
                "llm": {"provider": "openai"},
            }
        )
        assert config.environment == "prod"
        assert config.analytics.anomaly_detection.std_dev.window_size == 14
        assert config.analytics.anomaly_detection.std_dev.std_deviations == 2.0
        assert config.llm.provider == "openai"


class TestConfigValidation:
    """Tests for config validation."""

    def test_invalid_window_size(self):
        """Test that a zero window raises error."""
        with pytest.raises(ValueError):
            AnomalyDetectionConfig(std_dev={"window_size": 0})

    def test_invalid_std_deviations(self):
        """Test that k must be positive."""
        with pytest.raises(ValueError):
            AnomalyDetectionConfig(std_dev={"std_deviations": 0})

    def test_invalid_method(self):
        """Test that unknown detection methods are rejected."""
        with pytest.raises(ValueError):
            AnomalyDetectionConfig(method="both")

    def test_invalid_forecast_horizon(self):
        """Test that a negative horizon raises error."""
        with pytest.raises(ValueError):
            ForecastConfig(horizon_months=-1)

    def test_invalid_environment(self):
        """Test that unknown environments are rejected."""
        with pytest.raises(ValueError):
            Config(environment="qa")

    def test_invalid_max_tokens(self):
        """Test the output token bounds."""
        with pytest.raises(ValueError):
            LLMConfig(max_tokens=10)


class TestLoadConfig:
    """Tests for the YAML loader."""

    def test_missing_files_give_defaults(self, tmp_path):
        """Test that an empty config directory yields the defaults."""
        config = load_config(tmp_path, environment="dev")
        assert config == Config()

    def test_environment_override_merges(self, tmp_path):
        """Test that config.<env>.yaml deep-merges over config.yaml."""
        (tmp_path / "config.yaml").write_text(
            yaml.safe_dump(
                {
                    "project_name": "billing",
                    "analytics": {"forecast": {"horizon_months": 6, "lookback_months": 2}},
                }
            )
        )
        (tmp_path / "config.prod.yaml").write_text(
            yaml.safe_dump({"analytics": {"forecast": {"horizon_months": 12}}})
        )

        config = load_config(tmp_path, environment="prod")

        assert config.environment == "prod"
        assert config.project_name == "billing"
        assert config.analytics.forecast.horizon_months == 12
        assert config.analytics.forecast.lookback_months == 2

    def test_env_var_overrides(self, tmp_path, monkeypatch):
        """Test that environment variables win over files."""
        (tmp_path / "config.yaml").write_text(
            yaml.safe_dump({"analytics": {"anomaly_detection": {"std_dev": {"window_size": 5}}}})
        )
        monkeypatch.setenv("ANOMALY_WINDOW_SIZE", "14")
        monkeypatch.setenv("ANOMALY_STD_DEVIATIONS", "3.5")
        monkeypatch.setenv("ANOMALY_METHOD", "percent_change")
        monkeypatch.setenv("FORECAST_HORIZON_MONTHS", "6")
        monkeypatch.setenv("LLM_PROVIDER", "openai")

        config = load_config(tmp_path)

        detection = config.analytics.anomaly_detection
        assert detection.method == "percent_change"
        assert detection.std_dev.window_size == 14
        assert detection.std_dev.std_deviations == 3.5
        assert config.analytics.forecast.horizon_months == 6
        assert config.llm.provider == "openai"

    def test_invalid_env_var(self, tmp_path, monkeypatch):
        """Test that a non-numeric override raises."""
        monkeypatch.setenv("ANOMALY_WINDOW_SIZE", "seven")
        with pytest.raises(ValueError, match="ANOMALY_WINDOW_SIZE"):
            load_config(tmp_path)

    def test_non_mapping_file(self, tmp_path):
        """Test that a YAML list at the top level is rejected."""
        (tmp_path / "config.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(tmp_path)

    def test_cached_config_uses_config_dir(self, tmp_path, monkeypatch):
        """Test that the cached loader reads CONFIG_DIR once."""
        (tmp_path / "config.yaml").write_text(yaml.safe_dump({"project_name": "cached"}))
        monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
        get_cached_config.cache_clear()

        assert get_cached_config().project_name == "cached"
        assert get_cached_config() is get_cached_config()
