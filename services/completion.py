# services/completion.py
import logging

from google import genai

import config

logger = logging.getLogger(__name__)

AI_FAILED_MESSAGE = "AI failed while analyzing the request."


class CompletionError(Exception):
    """The completion API call failed (auth, quota, network, ...)."""


class CompletionClient:
    """Stateless text-in / text-out wrapper around the Gemini API."""

    def __init__(self, api_key: str, model: str = config.GEMINI_MODEL):
        self._client = genai.Client(api_key=api_key)
        self.model = model

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return response.text or ""
