"""
Heuristic cost-saving opportunities.

These checks work from billing data alone, without utilization metrics, so
every finding is a candidate for review rather than a verdict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.config.schema import SavingsConfig

HIGH_COST_EC2 = "High Cost EC2 Instance"
EC2_RIGHTSIZING = "EC2 Right-sizing Candidate"
DATA_TRANSFER_OUT = "High Data Transfer Out"
EBS_VOLUME = "EBS Volume Optimization"
EBS_STORAGE = "High EBS Storage Cost"
S3_TIERING = "S3 Storage Tiering Opportunity"


@dataclass(frozen=True)
class SavingsOpportunity:
    """A resource or line item worth reviewing for savings."""

    kind: str
    resource_id: str | None
    cost: float
    region: str
    issue: str
    suggestion: str

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "resourceId": self.resource_id or "N/A",
            "cost": self.cost,
            "region": self.region,
            "issue": self.issue,
            "initialSuggestion": self.suggestion,
        }


@dataclass
class _InstanceUsage:
    region: str
    instance_type: str | None = None
    total_cost: float = 0.0
    rightsizing_cost: float = 0.0  # Only line items above the per-row threshold


@dataclass
class _ScanState:
    instances: dict[str, _InstanceUsage] = field(default_factory=dict)
    volumes: dict[str, _InstanceUsage] = field(default_factory=dict)
    line_items: list[SavingsOpportunity] = field(default_factory=list)


def _service_name(record: BillingRecord) -> str:
    return record.product_name or record.service


def _is_ec2(record: BillingRecord) -> bool:
    name = _service_name(record)
    return "EC2" in name or "Elastic Compute Cloud" in name


def _is_ebs_volume(record: BillingRecord) -> bool:
    return bool(record.resource_id and record.resource_id.startswith("vol-"))


def _is_s3_standard_storage(record: BillingRecord) -> bool:
    name = _service_name(record)
    if "S3" not in name and "Simple Storage Service" not in name:
        return False
    usage_type = record.usage_type or ""
    return "TimedStorage-ByteHrs" in usage_type or (
        "Storage" in usage_type and "Standard" in usage_type
    )


def find_savings_opportunities(
    records: Iterable[BillingRecord],
    config: SavingsConfig | None = None,
) -> list[SavingsOpportunity]:
    """
    Scan billing records for savings candidates.

    Returns:
        High-cost EC2 instances first, then line-item findings (data transfer,
        EBS storage, S3 storage) in discovery order, then right-sizing and EBS
        volume candidates.
    """
    config = config or SavingsConfig()
    state = _ScanState()

    for record in records:
        if not record.has_cost:
            continue
        _scan_record(record, config, state)

    high_cost = [
        SavingsOpportunity(
            kind=HIGH_COST_EC2,
            resource_id=resource_id,
            cost=usage.total_cost,
            region=usage.region,
            issue=(
                f"EC2 instance '{resource_id}' ({usage.instance_type or 'N/A'}, "
                f"{usage.region}) has accumulated a high cost."
            ),
            suggestion=(
                "Review its utilization (CPU, memory, network). Consider right-sizing "
                "to a smaller instance type if underutilized."
            ),
        )
        for resource_id, usage in state.instances.items()
        if usage.total_cost > config.high_cost_ec2
    ]

    rightsizing = [
        SavingsOpportunity(
            kind=EC2_RIGHTSIZING,
            resource_id=resource_id,
            cost=usage.rightsizing_cost,
            region=usage.region,
            issue=(
                f"EC2 instance '{resource_id}' ({usage.instance_type}, {usage.region}) "
                "has a high cost and might be over-provisioned."
            ),
            suggestion=(
                "Analyze CPU, memory, and network utilization in CloudWatch. Consider a "
                "smaller or burstable instance type if utilization is low."
            ),
        )
        for resource_id, usage in state.instances.items()
        if usage.rightsizing_cost > config.rightsizing_total_cost
        and usage.instance_type
        and usage.instance_type.startswith(tuple(config.rightsizing_families))
    ]

    volumes = [
        SavingsOpportunity(
            kind=EBS_VOLUME,
            resource_id=resource_id,
            cost=usage.total_cost,
            region=usage.region,
            issue=f"High cost detected for EBS volume '{resource_id}' in {usage.region}.",
            suggestion=(
                "Verify the volume is attached and in use. Delete unattached volumes "
                "and old snapshots."
            ),
        )
        for resource_id, usage in state.volumes.items()
        if usage.total_cost > config.ebs_volume
    ]

    return high_cost + state.line_items + rightsizing + volumes


def _scan_record(record: BillingRecord, config: SavingsConfig, state: _ScanState) -> None:
    cost = record.unblended_cost
    resource_id = record.resource_id

    if _is_ec2(record) and resource_id and not _is_ebs_volume(record):
        usage = state.instances.setdefault(resource_id, _InstanceUsage(region=record.region))
        usage.total_cost += cost
        if record.instance_type:
            usage.instance_type = usage.instance_type or record.instance_type
            if cost > config.rightsizing_row_cost:
                usage.rightsizing_cost += cost

    if _is_ebs_volume(record):
        usage = state.volumes.setdefault(resource_id, _InstanceUsage(region=record.region))
        usage.total_cost += cost

    usage_type = record.usage_type or ""
    if "DataTransfer-Out" in usage_type and cost > config.data_transfer_out:
        state.line_items.append(
            SavingsOpportunity(
                kind=DATA_TRANSFER_OUT,
                resource_id=resource_id,
                cost=cost,
                region=record.region,
                issue=f"Unexpectedly high data transfer out cost detected in {record.region}.",
                suggestion=(
                    "Review network logs for unexpected egress. Check for unoptimized "
                    "traffic patterns or large file transfers."
                ),
            )
        )

    if "Amazon Elastic Block Store" in _service_name(record) and cost > config.ebs_storage:
        state.line_items.append(
            SavingsOpportunity(
                kind=EBS_STORAGE,
                resource_id=resource_id,
                cost=cost,
                region=record.region,
                issue=f"High EBS storage cost detected in {record.region}.",
                suggestion=(
                    "Verify the volume is attached to an active instance. Delete unattached "
                    "volumes and old snapshots."
                ),
            )
        )

    if _is_s3_standard_storage(record) and cost > config.s3_standard_storage:
        state.line_items.append(
            SavingsOpportunity(
                kind=S3_TIERING,
                resource_id=resource_id,
                cost=cost,
                region=record.region,
                issue=f"Significant S3 Standard storage cost detected in {record.region}.",
                suggestion=(
                    "Review S3 access patterns. Move infrequently accessed data to "
                    "S3 Standard-IA or Glacier."
                ),
            )
        )
