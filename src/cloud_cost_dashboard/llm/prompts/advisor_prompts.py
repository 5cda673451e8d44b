"""
Advisor endpoints.

Each advisor receives a free-form ``promptContext`` from the dashboard and
answers under a single JSON field. The route table maps the URL segment
(``/api/ai/<name>``) to that field and the advisor's system prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cloud_cost_dashboard.llm.prompts.cost_prompts import _money


@dataclass(frozen=True)
class AdvisorRoute:
    """One advisor endpoint."""

    name: str
    response_field: str
    system_prompt: str
    max_tokens: int = 800


ADVISOR_ROUTES: dict[str, AdvisorRoute] = {
    route.name: route
    for route in (
        AdvisorRoute(
            name="recommendation",
            response_field="recommendation",
            system_prompt="You are a FinOps engineer. Give a concise, actionable recommendation "
            "for the AWS cost optimization opportunity described.",
            max_tokens=400,
        ),
        AdvisorRoute(
            name="resource-optimization",
            response_field="optimizationPlan",
            system_prompt="You are an AWS solutions architect. Produce a short step-by-step "
            "optimization plan for the resource described, including expected savings.",
        ),
        AdvisorRoute(
            name="explain-anomaly",
            response_field="explanation",
            system_prompt="You are a FinOps analyst. Explain the likely causes of the AWS cost "
            "anomaly described and what to investigate first.",
            max_tokens=500,
        ),
        AdvisorRoute(
            name="explain-cloud",
            response_field="explanation",
            system_prompt="You explain AWS architectures and services in plain language to "
            "non-specialists.",
        ),
        AdvisorRoute(
            name="cloud-career-guide",
            response_field="careerGuideContent",
            system_prompt="You are a cloud career mentor. Give practical guidance on skills, "
            "certifications and next steps.",
        ),
        AdvisorRoute(
            name="dr-planner",
            response_field="drPlan",
            system_prompt="You are an AWS disaster recovery specialist. Propose a DR plan with "
            "RTO/RPO targets, strategy and cost trade-offs.",
            max_tokens=1200,
        ),
        AdvisorRoute(
            name="iam-simplifier",
            response_field="iamGuidance",
            system_prompt="You are an AWS IAM expert. Explain the access policy or request "
            "described and suggest a least-privilege alternative.",
        ),
        AdvisorRoute(
            name="generate-playbook",
            response_field="playbook",
            system_prompt="You are an SRE. Write a concise operations playbook with numbered "
            "steps for the scenario described.",
            max_tokens=1200,
        ),
        AdvisorRoute(
            name="service-decision",
            response_field="serviceDecision",
            system_prompt="You help teams choose between AWS services. Compare the options "
            "for the requirements described and recommend one.",
        ),
        AdvisorRoute(
            name="flashcards-quizzes",
            response_field="learningContent",
            system_prompt="You are an AWS instructor. Produce flashcards and a short quiz on "
            "the topic described.",
        ),
        AdvisorRoute(
            name="teach-me-setup",
            response_field="learningContent",
            system_prompt="You are an AWS instructor. Teach the setup described step by step, "
            "explaining why each component is there.",
        ),
    )
}


def _percent(value: Any) -> str:
    try:
        return f"{float(value):+.1f}%"
    except (TypeError, ValueError):
        return "N/A"


def _contributor_line(contributor: Any) -> str | None:
    # AnomalyRecord dicts, or preformatted "EC2: $10.00" strings from the page
    if isinstance(contributor, dict):
        service = contributor.get("service", "Unknown Service")
        return f"- {service}: {_money(contributor.get('cost'))}"
    if isinstance(contributor, str) and contributor.strip():
        return f"- {contributor.strip()}"
    return None


def build_anomaly_explanation_prompt(anomaly: dict[str, Any]) -> str:
    """
    Build a prompt explaining a detected anomaly.

    Args:
        anomaly: Anomaly as serialized by AnomalyRecord.to_dict. Contributors
            may also be plain strings.
    """
    contributors = anomaly.get("topContributors")
    if not isinstance(contributors, list):
        contributors = []
    contributor_lines = "\n".join(
        line for line in map(_contributor_line, contributors) if line is not None
    )

    return f"""Explain this AWS cost anomaly.

## Anomaly Details
- Date: {anomaly.get('date', 'Unknown')}
- Type: {anomaly.get('type', 'Unknown')}
- Cost: {_money(anomaly.get('cost'))}
- Trailing Average: {_money(anomaly.get('average'))}
- Change: {_percent(anomaly.get('percentChange'))}

## Top Contributing Services
{contributor_lines or '- None reported'}

Provide the most likely explanation, what to check first, and whether action is needed.
"""
