"""LLM prompts for the dashboard's AI endpoints."""

from cloud_cost_dashboard.llm.prompts.system_prompt import SYSTEM_PROMPT
from cloud_cost_dashboard.llm.prompts.cost_prompts import (
    build_chat_prompt,
    build_estimate_prompt,
    build_insights_prompt,
)
from cloud_cost_dashboard.llm.prompts.advisor_prompts import (
    ADVISOR_ROUTES,
    AdvisorRoute,
    build_anomaly_explanation_prompt,
)

__all__ = [
    "SYSTEM_PROMPT",
    "ADVISOR_ROUTES",
    "AdvisorRoute",
    "build_anomaly_explanation_prompt",
    "build_chat_prompt",
    "build_estimate_prompt",
    "build_insights_prompt",
]
