"""Factory for creating AI provider instances."""

from typing import Optional

from src.config import settings
from src.core.logging import get_logger
from src.services.ai.base import AIProvider
from src.services.ai.gemini import DEFAULT_GEMINI_MODEL, GeminiProvider
from src.services.ai.mock import MockProvider

logger = get_logger(__name__)


def get_ai_provider(
    provider_name: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
) -> AIProvider:
    """Get an AI provider instance.

    Args:
        provider_name: Optional provider name. If not specified,
                      uses AI_PROVIDER from config.
        api_key: API key override; None uses AI_API_KEY.
        model: Model override; None uses AI_MODEL.
        base_url: API endpoint override; None uses AI_BASE_URL.

    Returns:
        An AIProvider instance. Unknown names and a missing API key
        fall back to MockProvider.
    """
    name = (provider_name or settings.AI_PROVIDER).lower()

    if name == "mock":
        logger.debug("Using MockProvider")
        return MockProvider()

    if name == "gemini":
        key = settings.AI_API_KEY if api_key is None else api_key
        if not key:
            logger.warning("AI_API_KEY not set, falling back to MockProvider")
            return MockProvider()
        model_name = model or settings.AI_MODEL or DEFAULT_GEMINI_MODEL
        endpoint = settings.AI_BASE_URL if base_url is None else base_url
        logger.debug("Using GeminiProvider with model: %s", model_name)
        return GeminiProvider(api_key=key, model=model_name, base_url=endpoint)

    logger.warning("Unknown provider '%s', falling back to MockProvider", name)
    return MockProvider()
