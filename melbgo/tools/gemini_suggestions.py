"""Gemini-backed travel tips for itinerary events"""
import asyncio
import logging
from typing import Optional

import google.generativeai as genai

from ..config import settings

logger = logging.getLogger(__name__)

FAILURE_PLACEHOLDER = "Could not fetch suggestion."
EMPTY_PLACEHOLDER = "No suggestion available."

PROMPT_TEMPLATE = (
    "I am in Melbourne, Australia at {location} around {time_of_day}. "
    "Give me one short, specific travel tip or a nearby hidden gem recommendation (under 30 words)."
)


class SuggestionService:
    """
    Best-effort tip generator.

    Never raises: a missing API key or any API failure returns
    FAILURE_PLACEHOLDER, an empty answer returns EMPTY_PLACEHOLDER.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(model_name=self.model_name)
        return self._model

    async def suggest(self, location: str, time_of_day: str = "daytime") -> str:
        if not self.api_key:
            logger.warning("⚠️ GEMINI_API_KEY is not set, returning placeholder suggestion")
            return FAILURE_PLACEHOLDER

        prompt = PROMPT_TEMPLATE.format(location=location, time_of_day=time_of_day or "daytime")
        try:
            model = self._get_model()
            logger.info(f"📤 Requesting tip for '{location}' from {self.model_name}")
            response = await asyncio.to_thread(model.generate_content, prompt)
            text = response.text.strip() if response and response.text else ""
        except Exception as e:
            logger.error(f"❌ Gemini API Error: {type(e).__name__}: {str(e)}")
            return FAILURE_PLACEHOLDER

        return text or EMPTY_PLACEHOLDER
