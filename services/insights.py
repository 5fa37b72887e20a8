# services/insights.py
import logging
from typing import Any, Dict

from db import RealtimeStore
from models import AIMode, AlertRecord, InsightRecord, Intent
from utils import now_ms

logger = logging.getLogger(__name__)


def record_insight(
    realtime: RealtimeStore,
    prompt: str,
    intent: Intent,
    mode: AIMode,
    reply: str,
    metrics: Dict[str, Any] | None,
) -> str | None:
    """
    Append a prompt/reply pair to the insight log.

    Best effort: a failed write is logged and the caller's reply is unaffected.
    """
    entry = InsightRecord(
        prompt=prompt,
        intent=intent,
        mode=mode,
        reply=reply,
        metrics=metrics,
        created_at=now_ms(),
    )
    try:
        key = realtime.push("insights", entry.to_store())
        logger.info(f"Insight recorded: {key} intent={intent.value}")
        return key
    except Exception as e:
        logger.warning(f"Failed to record insight (intent={intent.value}): {e}", exc_info=True)
        return None


def record_alert(realtime: RealtimeStore, message: str, metrics: Dict[str, Any]) -> Dict[str, Any]:
    alert = AlertRecord(message=message, metrics=metrics, created_at=now_ms()).to_store()
    key = realtime.push("alerts", alert)
    logger.info(f"Alert recorded: {key}")
    return {"id": key, **alert}
