"""
Cloud Cost Dashboard - AWS billing analytics with AI-assisted insights.

Backend for a browser-based cost dashboard:
- Normalization of AWS Cost and Usage Report rows
- Cost aggregation, anomaly detection, forecasting and resource profiling
- Heuristic savings opportunities
- Lambda handlers that proxy prompts to a hosted LLM
"""

__version__ = "0.1.0"
