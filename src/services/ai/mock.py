"""Mock AI provider for testing and fallback."""

import json
from typing import Optional

from src.services.ai.base import AIProvider

MOCK_SUMMARY_RESPONSE = json.dumps(
    {
        "summary": "[Mock] The owner and the pet chatted for a while.",
        "important": [],
    },
    ensure_ascii=False,
)

MOCK_CHAT_REPLY = "[Mock] Mrrp! I'm floating right here (=^･ω･^=)"


class MockProvider(AIProvider):
    """Mock AI provider that returns static text.

    Used for testing and as a fallback when no API key is configured.
    """

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 120,
        temperature: float = 0.9,
    ) -> str:
        """Generate mock text response.

        Returns a JSON summary when the request asks for JSON,
        otherwise a static chat reply.
        """
        if "JSON" in prompt or (system_prompt and "JSON" in system_prompt):
            return MOCK_SUMMARY_RESPONSE
        return MOCK_CHAT_REPLY
