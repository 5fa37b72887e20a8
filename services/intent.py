# services/intent.py
from typing import Any, Dict

from models import CompanyData, Intent

# Checked in order, first hit wins
INTENT_KEYWORDS = (
    (Intent.ATTENDANCE, ("attendance",)),
    (Intent.LEAVE, ("leave",)),
    (Intent.EMPLOYEE, ("employee", "staff")),
    (Intent.PERFORMANCE, ("performance",)),
    (Intent.SALES, ("sales", "revenue")),
    (Intent.PROJECT, ("project",)),
    (Intent.RISK, ("risk",)),
    (Intent.GROWTH, ("growth",)),
)

# Intents missing here (RISK, GROWTH, GENERAL) get the whole aggregate
RELEVANT_FIELDS = {
    Intent.ATTENDANCE: ("attendance", "users"),
    Intent.LEAVE: ("leaves", "users"),
    Intent.EMPLOYEE: ("users",),
    Intent.PERFORMANCE: ("performance", "users"),
    Intent.SALES: ("sales",),
    Intent.PROJECT: ("projects",),
}


def classify_intent(prompt: str | None) -> Intent:
    text = (prompt or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(k in text for k in keywords):
            return intent
    return Intent.GENERAL


def select_relevant_data(intent: Intent, data: CompanyData) -> Dict[str, Any]:
    """Only the parts of the aggregate needed to answer `intent`."""
    return data.to_payload(RELEVANT_FIELDS.get(intent))
