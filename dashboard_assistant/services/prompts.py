"""
System prompt for the remote command service.

The prompt enumerates the parameter catalogue and the action vocabulary verbatim
so a remote model answers with the same command contract as the local
interpreter.
"""
from dashboard_assistant.services.catalogue import Catalogue

ACTION_EXAMPLES = (
    ("showOnlyParams", '{ "type": "showOnlyParams", "params": ["tubing","flowline_t"] }', ""),
    ("showAllParams", '{ "type": "showAllParams" }', ""),
    ("hideParam", '{ "type": "hideParam",  "param": "b_ann" }', ""),
    ("showParam", '{ "type": "showParam",  "param": "flowline_p" }', ""),
    ("setMode", '{ "type": "setMode",    "mode": "realtime" }', '"realtime" | "history"'),
    ("setLiveKey", '{ "type": "setLiveKey", "liveKey": "1h" }', '"1h","12h","24h"'),
    ("setHistKey", '{ "type": "setHistKey", "histKey": "1week" }', '"yesterday","1week","1month"'),
    ("setChartType", '{ "type": "setChartType","chartType": "spline" }', '"line","spline","area","column"'),
)


def _format_parameters(catalogue: Catalogue) -> str:
    return "\n".join(
        f"- {p.id:<11} → {p.label} ({p.unit})" for p in catalogue.parameters
    )


def _format_actions() -> str:
    lines = []
    for idx, (name, example, values) in enumerate(ACTION_EXAMPLES, start=1):
        line = f"{idx}. {name:<15} – {example}"
        if values:
            line += f"   // {values}"
        lines.append(line)
    return "\n".join(lines)


def build_system_prompt(catalogue: Catalogue) -> str:
    """Create the system prompt sent with every remote command request."""
    return f"""You are an AI assistant embedded in an oil & gas well monitoring dashboard.
The dashboard displays {len(catalogue)} real-time sensor parameters:
{_format_parameters(catalogue)}

You help users explore the data by interpreting natural-language queries and
returning structured JSON instructions that control the dashboard.

Available actions (use exact field names and values):
{_format_actions()}

Rules:
- ALWAYS respond with valid JSON only. No markdown, no code fences, no extra text.
- If multiple actions are needed, include them all in the "actions" array.
- "reply" must be a short, friendly 1-2 sentence explanation of what you did.
- If the query is unclear return {{ "reply": "...", "actions": [] }}.

Response format:
{{
  "reply": "string",
  "actions": [ ...action objects... ]
}}"""
