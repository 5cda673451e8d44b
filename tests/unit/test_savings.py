"""Tests for savings opportunity heuristics."""

from datetime import date

import pytest

from cloud_cost_dashboard.analysis.savings import (
    DATA_TRANSFER_OUT,
    EBS_STORAGE,
    EBS_VOLUME,
    EC2_RIGHTSIZING,
    HIGH_COST_EC2,
    S3_TIERING,
    find_savings_opportunities,
)
from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.config.schema import SavingsConfig

EC2 = "Amazon Elastic Compute Cloud"
S3 = "Amazon Simple Storage Service"
EBS = "Amazon Elastic Block Store"


def create_record(cost: float, **kwargs) -> BillingRecord:
    """Helper to create a test record in us-east-1."""
    kwargs.setdefault("region", "us-east-1")
    return BillingRecord(usage_date=date(2024, 1, 1), unblended_cost=cost, **kwargs)


class TestFindSavingsOpportunities:
    """Tests for the savings scan."""

    def test_no_findings_for_small_bill(self):
        """Test that low costs produce nothing."""
        records = [
            create_record(5.0, product_name=EC2, resource_id="i-1", instance_type="m5.large"),
            create_record(1.0, product_name=S3, usage_type="TimedStorage-ByteHrs"),
        ]
        assert find_savings_opportunities(records) == []

    def test_every_kind_in_order(self):
        """Test each heuristic and the order findings are reported in."""
        records = [
            create_record(300.0, product_name=EC2, resource_id="i-big", instance_type="m5.xlarge"),
            create_record(
                60.0, product_name="AWS Data Transfer", usage_type="USE1-DataTransfer-Out-Bytes"
            ),
            create_record(300.0, product_name=EC2, resource_id="i-big", instance_type="m5.xlarge"),
            create_record(120.0, product_name=EBS, usage_type="EBS:SnapshotUsage"),
            create_record(70.0, product_name=EC2, resource_id="vol-123", usage_type="EBS:VolumeUsage.gp2"),
            create_record(
                25.0, product_name=S3, resource_id="logs-bucket", usage_type="TimedStorage-ByteHrs"
            ),
        ]
        findings = find_savings_opportunities(records)

        assert [f.kind for f in findings] == [
            HIGH_COST_EC2,
            DATA_TRANSFER_OUT,
            EBS_STORAGE,
            S3_TIERING,
            EC2_RIGHTSIZING,
            EBS_VOLUME,
        ]
        assert findings[0].resource_id == "i-big"
        assert findings[0].cost == pytest.approx(600.0)
        assert findings[2].cost == pytest.approx(120.0)
        assert findings[4].cost == pytest.approx(600.0)
        assert findings[5].resource_id == "vol-123"

    def test_rightsizing_only_for_listed_families(self):
        """Test that only configured instance families are right-sizing candidates."""
        records = [
            create_record(150.0, product_name=EC2, resource_id="i-c5", instance_type="c5.large"),
            create_record(150.0, product_name=EC2, resource_id="i-c5", instance_type="c5.large"),
            create_record(150.0, product_name=EC2, resource_id="i-t3", instance_type="t3.large"),
            create_record(150.0, product_name=EC2, resource_id="i-t3", instance_type="t3.large"),
        ]
        kinds = {(f.kind, f.resource_id) for f in find_savings_opportunities(records)}
        assert kinds == {(EC2_RIGHTSIZING, "i-t3")}

    def test_rightsizing_ignores_small_line_items(self):
        """Test that only line items above the per-row threshold count toward right-sizing."""
        records = [
            create_record(90.0, product_name=EC2, resource_id="i-1", instance_type="m5.large")
            for _ in range(4)
        ]
        assert find_savings_opportunities(records) == []

    def test_ec2_matched_on_service_when_no_product_name(self):
        """Test EC2 detection from the service label."""
        records = [create_record(600.0, service="Amazon EC2", resource_id="i-1")]
        [finding] = find_savings_opportunities(records)
        assert finding.kind == HIGH_COST_EC2
        assert "N/A" in finding.issue

    def test_s3_standard_storage_usage_type(self):
        """Test the alternate S3 Standard storage usage type."""
        records = [create_record(21.0, product_name=S3, usage_type="StandardStorage")]
        [finding] = find_savings_opportunities(records)
        assert finding.kind == S3_TIERING
        assert finding.to_dict()["resourceId"] == "N/A"

    def test_ebs_storage_line_items(self):
        """Test that only EBS line items above the threshold are flagged."""
        records = [
            create_record(100.0, product_name=EBS, usage_type="EBS:VolumeUsage.gp3"),
            create_record(150.0, product_name=EBS, usage_type="EBS:SnapshotUsage"),
            create_record(150.0, product_name=S3, usage_type="Requests-Tier1"),
        ]
        [finding] = find_savings_opportunities(records)
        assert finding.kind == EBS_STORAGE
        assert finding.cost == 150.0
        assert "us-east-1" in finding.issue

        assert find_savings_opportunities(records, SavingsConfig(ebs_storage=200.0)) == []

    def test_custom_thresholds(self):

        """Test that thresholds come from config."""
        config = SavingsConfig(data_transfer_out=5.0)
        records = [create_record(10.0, usage_type="DataTransfer-Out-Bytes")]
        [finding] = find_savings_opportunities(records, config)
        assert finding.kind == DATA_TRANSFER_OUT

    def test_to_dict(self):
        """Test serialization for the dashboard."""
        records = [create_record(60.0, usage_type="DataTransfer-Out-Bytes", resource_id="nat-1")]
        data = find_savings_opportunities(records)[0].to_dict()
        assert data["type"] == DATA_TRANSFER_OUT
        assert data["resourceId"] == "nat-1"
        assert data["region"] == "us-east-1"
        assert data["initialSuggestion"]
