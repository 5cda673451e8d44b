"""Tests for the billing summary."""

from datetime import date

import pytest

from cloud_cost_dashboard.analysis.summary import build_billing_summary
from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.config.schema import AnalyticsConfig


def create_record(cost: float, service: str, resource_id: str | None = None, day: int = 1) -> BillingRecord:
    """Helper to create a test record in January 2024."""
    return BillingRecord(
        usage_date=date(2024, 1, day),
        unblended_cost=cost,
        service=service,
        resource_id=resource_id,
    )


@pytest.fixture
def records():
    """A small bill with one idle volume."""
    return [
        create_record(100.0, "Compute", "i-1"),
        create_record(20.0, "Storage", "bucket-1"),
        create_record(1.0, "Storage", "vol-1", day=1),
        create_record(1.0, "Storage", "vol-1", day=25),
        create_record(0.5, "Support"),
        create_record(-10.0, "Credits"),
    ]


class TestBuildBillingSummary:
    """Tests for summary building."""

    def test_totals_and_rankings(self, records):
        """Test totals, service ranking and resource lists."""
        summary = build_billing_summary(records)

        assert summary.total_cost == pytest.approx(122.5)
        assert summary.top_services[0] == ("Compute", 100.0)
        assert [s for s, _ in summary.top_services] == ["Compute", "Storage", "Support"]
        assert summary.top_expensive_resources[0].resource_id == "i-1"
        assert [p.resource_id for p in summary.idle_resources] == ["vol-1"]
        assert summary.rows_processed == 6
        assert summary.data_truncated is False

    def test_row_limit(self, records):
        """Test that only the first max_rows records are summarized."""
        config = AnalyticsConfig(summary={"max_rows": 2})
        summary = build_billing_summary(records, config)

        assert summary.rows_processed == 2
        assert summary.data_truncated is True
        assert summary.total_cost == pytest.approx(120.0)

    def test_truncated_upstream(self, records):
        """Test that a larger source row count marks the summary truncated."""
        summary = build_billing_summary(records, total_rows=100)
        assert summary.data_truncated is True

    def test_empty(self):
        """Test an empty bill."""
        summary = build_billing_summary([])
        assert summary.total_cost == 0
        assert summary.top_services == []
        assert summary.top_expensive_resources == []

    def test_to_dict(self, records):
        """Test the camelCase shape posted to the AI endpoints."""
        data = build_billing_summary(records).to_dict()

        assert data["totalOverallCost"] == "122.50"
        assert data["serviceCosts"][0] == ["Compute", 100.0]
        assert data["topServices"].startswith("Compute: $100.00")
        assert data["idleResources"][0]["resourceId"] == "vol-1"
        assert data["numRowsProcessed"] == 6
        assert data["dataTruncated"] is False
