"""Pytest configuration and fixtures."""

import pytest

from cloud_cost_dashboard.config.loader import get_cached_config
from cloud_cost_dashboard.handlers import common

_OVERRIDE_ENV_VARS = (
    "LLM_PROVIDER",
    "ANOMALY_METHOD",
    "ANOMALY_WINDOW_SIZE",
    "ANOMALY_STD_DEVIATIONS",
    "FORECAST_HORIZON_MONTHS",
    "CONFIG_ENV",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test against default config and a fresh LLM client."""
    for name in _OVERRIDE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "empty-config"
    config_dir.mkdir()
    monkeypatch.setenv("CONFIG_DIR", str(config_dir))
    get_cached_config.cache_clear()
    common._llm_client = None
    yield
    get_cached_config.cache_clear()
    common._llm_client = None


@pytest.fixture
def sample_raw_rows():
    """Raw CUR rows as they come out of csv.DictReader."""
    return [
        {
            "lineItem/UsageStartDate": "2024-01-01T00:00:00Z",
            "lineItem/UnblendedCost": "12.50",
            "product/ProductFamily": "Compute Instance",
            "product/ProductName": "Amazon Elastic Compute Cloud",
            "product/region": "us-east-1",
            "lineItem/ResourceId": "i-0abc",
            "lineItem/UsageType": "BoxUsage:m5.large",
            "product/instanceType": "m5.large",
        },
        {
            "lineItem/UsageStartDate": "2024-01-02T00:00:00Z",
            "lineItem/UnblendedCost": "3.25",
            "product/ServiceCode": "AmazonS3",
            "product/regionCode": "eu-west-1",
            "lineItem/ResourceId": "my-bucket",
            "lineItem/UsageType": "TimedStorage-ByteHrs",
        },
        {
            "lineItem/UsageStartDate": "2024-01-02T00:00:00Z",
            "lineItem/UnblendedCost": "abc",
        },
    ]


@pytest.fixture
def sample_summary_dict():
    """Billing summary as posted by the dashboard."""
    return {
        "totalOverallCost": "123.45",
        "serviceCosts": [["Compute Instance", 100.0], ["Storage", 23.45]],
        "topServices": "Compute Instance: $100.00, Storage: $23.45",
        "topExpensiveResources": [
            {
                "resourceId": "i-0abc",
                "service": "Compute Instance",
                "totalCost": 100.0,
                "usageTypes": "BoxUsage:m5.large",
                "occurrences": 24,
                "durationDays": 1,
            }
        ],
        "idleResources": [
            {
                "resourceId": "vol-0old",
                "service": "Storage",
                "totalCost": 1.5,
                "occurrences": 2,
                "durationDays": 30,
            }
        ],
        "numRowsProcessed": 25,
        "dataTruncated": False,
    }
