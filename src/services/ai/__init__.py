"""AI provider module for pet chat."""

from src.services.ai.base import AIProvider
from src.services.ai.factory import get_ai_provider
from src.services.ai.gemini import GeminiProvider
from src.services.ai.mock import MockProvider

__all__ = [
    "AIProvider",
    "GeminiProvider",
    "MockProvider",
    "get_ai_provider",
]
