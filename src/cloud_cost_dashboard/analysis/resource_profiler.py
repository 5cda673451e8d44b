"""Per-resource cost profiles and idle-resource detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.config.schema import IdleThresholdsConfig

UNKNOWN_USAGE_TYPE = "Unknown UsageType"


@dataclass(frozen=True)
class ResourceProfile:
    """Cost and usage rollup for a single resource ID."""

    resource_id: str
    service: str
    total_cost: float
    usage_types: tuple[str, ...]
    first_seen: date | None
    last_seen: date | None
    occurrences: int
    duration_days: int  # Inclusive of both endpoints; 0 when undated
    is_idle: bool = False

    def to_dict(self) -> dict:
        return {
            "resourceId": self.resource_id,
            "service": self.service,
            "totalCost": self.total_cost,
            "usageTypes": ", ".join(self.usage_types),
            "firstSeen": self.first_seen.isoformat() if self.first_seen else None,
            "lastSeen": self.last_seen.isoformat() if self.last_seen else None,
            "occurrences": self.occurrences,
            "durationDays": self.duration_days,
            "isIdle": self.is_idle,
        }


@dataclass
class _ResourceUsage:
    service: str
    total_cost: float = 0.0
    usage_types: dict[str, None] = field(default_factory=dict)  # Ordered set
    first_seen: date | None = None
    last_seen: date | None = None
    occurrences: int = 0

    def add(self, record: BillingRecord) -> None:
        self.total_cost += record.unblended_cost
        self.usage_types[record.usage_type or UNKNOWN_USAGE_TYPE] = None
        self.occurrences += 1

        day = record.usage_date
        if day is None:
            return
        if self.first_seen is None or day < self.first_seen:
            self.first_seen = day
        if self.last_seen is None or day > self.last_seen:
            self.last_seen = day


def duration_days(first_seen: date | None, last_seen: date | None) -> int:
    """Days between first and last sighting, counting both ends. 0 if undated."""
    if first_seen is None or last_seen is None:
        return 0
    return abs((last_seen - first_seen).days) + 1


def is_idle_candidate(
    total_cost: float,
    occurrences: int,
    days: int,
    thresholds: IdleThresholdsConfig,
) -> bool:
    """Low cost, rarely billed, but present over a long span."""
    return (
        total_cost < thresholds.max_cost
        and occurrences < thresholds.max_occurrences
        and days > thresholds.min_duration_days
    )


def build_resource_profiles(
    records: Iterable[BillingRecord],
    thresholds: IdleThresholdsConfig | None = None,
) -> list[ResourceProfile]:
    """
    Build one profile per resource ID in a single pass.

    Only records with a positive cost and a resource ID contribute. The
    profile's service is the one on the first contributing record.

    Args:
        records: Normalized billing records.
        thresholds: Idle heuristic thresholds. Defaults apply when None.

    Returns:
        Profiles in order of first appearance.
    """
    thresholds = thresholds or IdleThresholdsConfig()
    usage: dict[str, _ResourceUsage] = {}

    for record in records:
        if not record.has_cost or not record.resource_id:
            continue
        if record.resource_id not in usage:
            usage[record.resource_id] = _ResourceUsage(service=record.service)
        usage[record.resource_id].add(record)

    profiles = []
    for resource_id, details in usage.items():
        days = duration_days(details.first_seen, details.last_seen)
        profiles.append(
            ResourceProfile(
                resource_id=resource_id,
                service=details.service,
                total_cost=details.total_cost,
                usage_types=tuple(details.usage_types),
                first_seen=details.first_seen,
                last_seen=details.last_seen,
                occurrences=details.occurrences,
                duration_days=days,
                is_idle=is_idle_candidate(
                    details.total_cost, details.occurrences, days, thresholds
                ),
            )
        )

    return profiles


def top_expensive(profiles: Iterable[ResourceProfile], n: int = 5) -> list[ResourceProfile]:
    """The n most expensive resources, highest cost first."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    return sorted(profiles, key=lambda p: p.total_cost, reverse=True)[:n]


def idle_candidates(
    profiles: Iterable[ResourceProfile],
    limit: int | None = None,
) -> list[ResourceProfile]:
    """Idle candidates, highest cost first, optionally capped at limit."""
    idle = sorted(
        (p for p in profiles if p.is_idle),
        key=lambda p: p.total_cost,
        reverse=True,
    )
    return idle if limit is None else idle[:limit]
