"""Configuration management for Cloud Cost Dashboard."""

from cloud_cost_dashboard.config.schema import (
    AggregationConfig,
    AnalyticsConfig,
    AnomalyDetectionConfig,
    Config,
    ForecastConfig,
    LLMConfig,
    ResourceProfileConfig,
    SavingsConfig,
    SummaryConfig,
)
from cloud_cost_dashboard.config.loader import get_cached_config, load_config

__all__ = [
    "Config",
    "AnalyticsConfig",
    "AggregationConfig",
    "AnomalyDetectionConfig",
    "ForecastConfig",
    "ResourceProfileConfig",
    "SavingsConfig",
    "SummaryConfig",
    "LLMConfig",
    "load_config",
    "get_cached_config",
]
