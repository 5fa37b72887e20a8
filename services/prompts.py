# services/prompts.py
import json
from typing import Any, Dict, Optional

from models import AIMode

RESPONSE_RULES = """\
- Plain language only
- No code blocks, no markdown tables
- Answer ONLY what is asked
- Be short & precise"""

PERSONAS = {
    AIMode.BOTH: (
        "You are GrowthOS AI (Hybrid).",
        "- Prefer company data if relevant\n- Otherwise use general knowledge",
    ),
    AIMode.JARVIS: (
        "You are GrowthOS Jarvis (Company AI).",
        "- Answer ONLY from company data\n- No assumptions\n- If the data does not contain the answer, say so",
    ),
    AIMode.GEMI: (
        "You are Gemini AI.",
        "- Answer from general knowledge\n- Answer clearly and professionally",
    ),
}


def _to_json(value: Any) -> str:
    return json.dumps(value, default=str, ensure_ascii=False)


def compose_prompt(
    question: str,
    mode: AIMode = AIMode.BOTH,
    metrics: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Build the full instruction block sent to the completion API.

    GEMI never carries company metrics or data, whatever the caller passes.
    """
    persona, mode_rules = PERSONAS[mode]
    parts = [persona, "", "RULES:", mode_rules, RESPONSE_RULES, ""]

    if mode != AIMode.GEMI:
        parts += [
            "Company Metrics:",
            _to_json(metrics or {}),
            "",
            "Company Data:",
            _to_json(data or {}),
            "",
        ]

    parts += ["Question:", question]
    return "\n".join(parts)


def compose_alert_prompt(metrics: Dict[str, Any], data: Dict[str, Any]) -> str:
    """Prompt for the periodic risk / growth scan."""
    return "\n".join([
        "You are GrowthOS Jarvis (Company AI) running an automatic health check.",
        "",
        "RULES:",
        "- Use ONLY the company data below",
        "- Report the single most important risk or growth signal",
        "- At most three sentences",
        RESPONSE_RULES,
        "",
        "Company Metrics:",
        _to_json(metrics),
        "",
        "Company Data:",
        _to_json(data),
    ])
