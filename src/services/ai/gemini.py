"""Gemini AI provider implementation."""

from typing import Optional

import google.generativeai as genai

from src.core.logging import get_logger
from src.services.ai.base import AIProvider

logger = get_logger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class GeminiProvider(AIProvider):
    """Chat replies and summaries through Google Gemini.

    The persona arrives as the system prompt on every call, so a model
    object is built per request with it as the system instruction.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: Optional[str] = None,
    ) -> None:
        self._api_key = api_key
        self._model_name = model

        if self._api_key:
            client_options = {"api_endpoint": base_url} if base_url else None
            genai.configure(api_key=self._api_key, client_options=client_options)
            logger.info(
                "GeminiProvider configured: model=%s, endpoint=%s",
                self._model_name,
                base_url or "default",
            )

    @property
    def name(self) -> str:
        return "gemini"

    def is_available(self) -> bool:
        return bool(self._api_key)

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 120,
        temperature: float = 0.9,
    ) -> str:
        """Raises:
            RuntimeError: If the key is missing or the API call fails.
        """
        if not self.is_available():
            raise RuntimeError("GeminiProvider is not available. Check API key.")

        model = genai.GenerativeModel(self._model_name, system_instruction=system_prompt)
        try:
            response = model.generate_content(
                prompt,
                generation_config={
                    "max_output_tokens": max_tokens,
                    "temperature": temperature,
                },
            )
            return response.text.strip()
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise RuntimeError(f"Gemini API error: {e}") from e
