"""
Prompts for the billing-aware endpoints: chat, estimate, insights.

Each builder accepts the camelCase JSON the dashboard posts and tolerates
missing or malformed fields.
"""

from __future__ import annotations

from typing import Any


def _money(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return "N/A"


def build_chat_prompt(question: str, csv_context: dict[str, Any]) -> str:
    """
    Build a prompt answering a user question about their bill.

    Args:
        question: The user's question.
        csv_context: Billing summary (see BillingSummary.to_dict).
    """
    truncated_note = "Note: Partial data only.\n" if csv_context.get("dataTruncated") else ""
    return f"""Answer the user's question about their AWS bill.

## Billing Summary
- Total Cost: {_money(csv_context.get('totalOverallCost'))}
- Top Services: {csv_context.get('topServices') or 'N/A'}
- Rows Processed: {csv_context.get('numRowsProcessed', 'N/A')}
{truncated_note}
## Question
"{question}"

Answer from the summary above. Keep it short and focused on cost optimization.
"""


def build_estimate_prompt(resource_type: str, size: str, region: str, duration: Any) -> str:
    """Build a prompt estimating the monthly cost of a resource."""
    return f"""Estimate the monthly cost of an AWS {resource_type} of size {size} in the {region} region, running approximately {duration} hours per month.

Give a high-level estimate in USD broken down by the main AWS components.
Start with "Estimated Monthly Cost: $XXX.XX".
"""


def _service_cost_pairs(service_costs: Any) -> list[tuple[Any, Any]]:
    """Accept [[service, cost], ...] or {service: cost}; other entries are dropped."""
    if isinstance(service_costs, dict):
        return list(service_costs.items())
    if not isinstance(service_costs, list):
        return []
    return [
        (entry[0], entry[1])
        for entry in service_costs
        if isinstance(entry, (list, tuple)) and len(entry) == 2
    ]


def _resource_lines(resources: Any, include_usage_types: bool) -> list[str]:
    if not isinstance(resources, list):
        return []

    lines = []
    for res in resources:
        if not isinstance(res, dict):
            continue
        line = (
            f"- Resource ID: {res.get('resourceId') or 'N/A'}, "
            f"Service: {res.get('service', 'Unknown Service')}, "
            f"Cost: {_money(res.get('totalCost'))}"
        )
        if include_usage_types:
            line += f", Usage Types: {res.get('usageTypes', '')}"
        line += (
            f", Occurrences: {res.get('occurrences', 0)}, "
            f"Duration: {res.get('durationDays', 0)} days"
        )
        lines.append(line)
    return lines


def build_insights_prompt(summary: dict[str, Any]) -> str:
    """
    Build a prompt for cost optimization insights from a billing summary.

    Args:
        summary: Billing summary (see BillingSummary.to_dict).
    """
    parts = [
        "Analyze the following AWS billing summary. Give a brief, actionable list of "
        "the top 3-5 cost optimization recommendations as bullet points, under 200 words.",
        "",
    ]

    if summary.get("totalOverallCost"):
        parts.append(f"Total Unblended Cost: {_money(summary['totalOverallCost'])}")
        parts.append("")

    service_costs = _service_cost_pairs(summary.get("serviceCosts"))
    if service_costs:
        parts.append("Top Services by Cost:")
        for service, cost in service_costs:
            parts.append(f"- {service}: {_money(cost)}")
        parts.append("")

    expensive = _resource_lines(summary.get("topExpensiveResources"), include_usage_types=True)
    if expensive:
        parts.append("Top Expensive Individual Resources:")
        parts.extend(expensive)
        parts.append("")

    idle = _resource_lines(summary.get("idleResources"), include_usage_types=False)
    if idle:
        parts.append("Potential Idle/Underutilized Resources (Low Cost/Usage):")
        parts.extend(idle)
        parts.append("")

    if summary.get("dataTruncated"):
        parts.append(
            "Note: Only a sample of the billing rows was summarized because the file is large."
        )
        parts.append("")

    parts.append("Start directly with the recommendations.")
    return "\n".join(parts)
