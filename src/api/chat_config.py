"""Chat provider settings endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.pet import get_chat_service
from src.api.schemas import ChatConfigResponse, ChatConfigUpdateRequest
from src.core.logging import get_logger
from src.services.chat_config_service import ChatConfigService, provider_from_config
from src.services.chat_service import ChatService

logger = get_logger(__name__)

router = APIRouter(prefix="/chat/config", tags=["chat"])


def get_chat_config_service(request: Request) -> ChatConfigService:
    """ChatConfigService 인스턴스 반환 (의존성 주입)"""
    service: ChatConfigService = request.app.state.chat_config_service
    return service


@router.get("", response_model=ChatConfigResponse, response_model_by_alias=True)
def read_chat_config(
    config_service: ChatConfigService = Depends(get_chat_config_service),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatConfigResponse:
    """현재 Provider 설정 (API 키는 마스킹)"""
    return ChatConfigResponse.from_config(
        config_service.load(), chat_service.provider_name
    )


@router.put("", response_model=ChatConfigResponse, response_model_by_alias=True)
def update_chat_config(
    request: ChatConfigUpdateRequest,
    config_service: ChatConfigService = Depends(get_chat_config_service),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatConfigResponse:
    """설정 저장 후 Provider를 다시 만든다."""
    try:
        config = config_service.update(request.model_dump(exclude_unset=True))
        chat_service.set_provider(provider_from_config(config))
    except Exception as e:
        logger.error("Chat config update failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return ChatConfigResponse.from_config(config, chat_service.provider_name)
