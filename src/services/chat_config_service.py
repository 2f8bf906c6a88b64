"""채팅 Provider 설정 Service: 런타임 변경 + DB 영속화

저장된 값이 없는 필드는 환경 설정(Settings)의 값을 쓴다.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from src.config import settings
from src.db.models import ChatConfigModel
from src.services.ai.base import AIProvider
from src.services.ai.factory import get_ai_provider

logger = logging.getLogger(__name__)

CONFIG_ROW_ID = 1
UPDATABLE_FIELDS = ("provider", "api_key", "base_url", "model")


@dataclass(frozen=True)
class ChatConfig:
    """현재 유효한 Provider 설정"""

    provider: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None


def default_chat_config() -> ChatConfig:
    return ChatConfig(
        provider=settings.AI_PROVIDER,
        api_key=settings.AI_API_KEY,
        base_url=settings.AI_BASE_URL,
        model=settings.AI_MODEL,
    )


def provider_from_config(config: ChatConfig) -> AIProvider:
    return get_ai_provider(
        config.provider,
        api_key=config.api_key,
        model=config.model,
        base_url=config.base_url,
    )


class ChatConfigService:
    """설정 1행을 읽고 부분 갱신한다"""

    def __init__(self, db: Session):
        self._db = db
        self._lock = threading.Lock()

    def load(self) -> ChatConfig:
        with self._lock:
            return self._merge(self._db.get(ChatConfigModel, CONFIG_ROW_ID))

    def update(self, updates: Mapping[str, Any]) -> ChatConfig:
        """보낸 필드만 반영. None은 환경 기본값으로 되돌린다.

        Raises:
            ValueError: 알 수 없는 필드.
        """
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown chat config fields: {sorted(unknown)}")

        with self._lock:
            row = self._db.get(ChatConfigModel, CONFIG_ROW_ID)
            if row is None:
                row = ChatConfigModel(id=CONFIG_ROW_ID)
                self._db.add(row)
            for name, value in updates.items():
                setattr(row, name, value)
            self._db.commit()
            config = self._merge(row)

        logger.info(
            "Chat config updated: provider=%s, fields=%s",
            config.provider,
            sorted(updates),
        )
        return config

    @staticmethod
    def _merge(row: Optional[ChatConfigModel]) -> ChatConfig:
        defaults = default_chat_config()
        if row is None:
            return defaults
        return ChatConfig(
            provider=row.provider or defaults.provider,
            api_key=defaults.api_key if row.api_key is None else row.api_key,
            base_url=defaults.base_url if row.base_url is None else row.base_url,
            model=row.model or defaults.model,
        )
