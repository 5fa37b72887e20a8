"""
AI Service - Company Data Question Answering
=============================================
Aggregate -> metrics + intent -> relevant data -> prompt -> Gemini -> insight log.
"""

import asyncio
import logging
from typing import Any, Dict, Tuple

from db import DocumentStore, RealtimeStore
from models import AIMode, Intent
from services.company_data import fetch_company_data
from services.completion import CompletionClient, CompletionError
from services.insights import record_alert, record_insight
from services.intent import classify_intent, select_relevant_data
from services.metrics import calculate_metrics
from services.prompts import compose_alert_prompt, compose_prompt

logger = logging.getLogger(__name__)

EMPTY_PROMPT_REPLY = "Please ask a question."


async def _complete(completion: CompletionClient, prompt: str) -> str:
    try:
        return await completion.generate(prompt)
    except Exception as e:
        # Raw API errors stay in the logs, callers only see CompletionError
        logger.exception(f"Completion API call failed: {e}")
        raise CompletionError(str(e)) from e


async def answer_query(
    question: str,
    mode: AIMode,
    realtime: RealtimeStore,
    documents: DocumentStore,
    completion: CompletionClient,
) -> Tuple[str, Intent]:
    """
    Answer a free-text question about the company.

    Raises:
        UpstreamServiceError: a store read failed
        CompletionError: the Gemini call failed
    """
    intent = classify_intent(question)

    if not question.strip():
        return EMPTY_PROMPT_REPLY, intent

    metrics = None
    if mode == AIMode.GEMI:
        prompt = compose_prompt(question, mode)
    else:
        data = await fetch_company_data(realtime, documents)
        metrics = calculate_metrics(data).to_payload()
        prompt = compose_prompt(question, mode, metrics, select_relevant_data(intent, data))

    logger.info(f"AI query: mode={mode.value} intent={intent.value} prompt_chars={len(prompt)}")
    reply = await _complete(completion, prompt)

    await asyncio.to_thread(record_insight, realtime, question, intent, mode, reply, metrics)
    return reply, intent


async def run_auto_insight(
    realtime: RealtimeStore,
    documents: DocumentStore,
    completion: CompletionClient,
) -> Dict[str, Any]:
    """Scan the whole aggregate for the top risk / growth signal and store it as an alert."""
    data = await fetch_company_data(realtime, documents)
    metrics = calculate_metrics(data).to_payload()
    prompt = compose_alert_prompt(metrics, data.to_payload())

    message = await _complete(completion, prompt)
    return await asyncio.to_thread(record_alert, realtime, message, metrics)
