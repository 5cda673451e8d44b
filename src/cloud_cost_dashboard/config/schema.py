"""Pydantic configuration schema for Cloud Cost Dashboard."""

from typing import Literal

from pydantic import BaseModel, Field


class AggregationConfig(BaseModel):
    """Cost aggregation configuration."""

    granularity: Literal["daily", "monthly"] = "daily"
    top_services: int = Field(default=5, ge=1)


class StdDevThresholdsConfig(BaseModel):
    """Thresholds for the trailing-window standard deviation detector."""

    window_size: int = Field(default=7, ge=1, le=365)  # Days in trailing window
    std_deviations: float = Field(default=2.0, gt=0)  # Sigma multiplier (k)


class PercentChangeThresholdsConfig(BaseModel):
    """Thresholds for the percent-increase-over-average detector."""

    lookback_days: int = Field(default=7, ge=1, le=365)
    threshold_percent: float = Field(default=30.0, ge=0)
    minimum_average: float = Field(default=0.1, ge=0)  # Ignore tiny baselines


class AnomalyDetectionConfig(BaseModel):
    """Anomaly detection configuration."""

    method: Literal["std_dev", "percent_change"] = "std_dev"
    std_dev: StdDevThresholdsConfig = Field(default_factory=StdDevThresholdsConfig)
    percent_change: PercentChangeThresholdsConfig = Field(
        default_factory=PercentChangeThresholdsConfig
    )
    top_contributors: int = Field(default=3, ge=1)


class ForecastConfig(BaseModel):
    """Monthly forecast configuration."""

    horizon_months: int = Field(default=3, ge=0, le=36)
    lookback_months: int = Field(default=3, ge=1, le=24)


class IdleThresholdsConfig(BaseModel):
    """
    Idle resource heuristic.

    A resource is an idle candidate when all three hold:
    total_cost < max_cost, occurrences < max_occurrences,
    duration_days > min_duration_days.
    """

    max_cost: float = Field(default=5.0, ge=0)
    max_occurrences: int = Field(default=5, ge=0)
    min_duration_days: int = Field(default=10, ge=0)


class ResourceProfileConfig(BaseModel):
    """Resource profiling configuration."""

    idle: IdleThresholdsConfig = Field(default_factory=IdleThresholdsConfig)
    top_expensive: int = Field(default=5, ge=1)
    idle_limit: int = Field(default=3, ge=1)


class SavingsConfig(BaseModel):
    """Savings opportunity heuristics (dollar thresholds)."""

    high_cost_ec2: float = Field(default=500.0, ge=0)  # Aggregated per instance
    rightsizing_row_cost: float = Field(default=100.0, ge=0)  # Per line item
    rightsizing_total_cost: float = Field(default=200.0, ge=0)  # Aggregated per instance
    rightsizing_families: list[str] = Field(default=["m5", "t3"])
    data_transfer_out: float = Field(default=50.0, ge=0)  # Per line item
    ebs_volume: float = Field(default=50.0, ge=0)  # Aggregated per volume
    ebs_storage: float = Field(default=100.0, ge=0)  # Per line item
    s3_standard_storage: float = Field(default=20.0, ge=0)  # Per line item


class SummaryConfig(BaseModel):
    """Insights summary configuration."""

    max_rows: int = Field(default=50_000, ge=1)


class AnalyticsConfig(BaseModel):
    """Configuration for every billing analytic."""

    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    anomaly_detection: AnomalyDetectionConfig = Field(default_factory=AnomalyDetectionConfig)
    forecast: ForecastConfig = Field(default_factory=ForecastConfig)
    resources: ResourceProfileConfig = Field(default_factory=ResourceProfileConfig)
    savings: SavingsConfig = Field(default_factory=SavingsConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)


class AnthropicConfig(BaseModel):
    """Anthropic API configuration."""

    model_id: str = "claude-sonnet-4-20250514"
    # api_key loaded from environment or Secrets Manager


class OpenAIConfig(BaseModel):
    """OpenAI API configuration."""

    model_id: str = "gpt-4o"
    # api_key loaded from environment or Secrets Manager


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: Literal["anthropic", "openai"] = "anthropic"
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    temperature: float = Field(default=0.3, ge=0, le=1)
    max_tokens: int = Field(default=1000, ge=50, le=8000)
    timeout_seconds: float = Field(default=25.0, gt=0, le=900)  # Below the API Gateway 29s limit
    max_retries: int = Field(default=2, ge=0, le=5)


class Config(BaseModel):
    """Root configuration for Cloud Cost Dashboard."""

    project_name: str = "cloud-cost-dashboard"
    environment: Literal["dev", "staging", "prod"] = "dev"

    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
