"""Pet API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    ActionRequest,
    ChatHistoryResponse,
    ChatRequest,
    ChatResponse,
    DirectionRequest,
    PassThroughRequest,
    PetResponse,
)
from src.core.logging import get_logger
from src.services.chat_service import ChatService
from src.services.pet_service import PetService

logger = get_logger(__name__)

router = APIRouter(prefix="/pets", tags=["pets"])


def get_pet_service(request: Request) -> PetService:
    """PetService 인스턴스 반환 (의존성 주입)"""
    service: PetService = request.app.state.pet_service
    return service


def get_chat_service(request: Request) -> ChatService:
    """ChatService 인스턴스 반환 (의존성 주입)"""
    service: ChatService = request.app.state.chat_service
    return service


@router.get("/{pet_id}", response_model=PetResponse, response_model_by_alias=True)
def get_pet(
    pet_id: str,
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    """현재 펫 상태. 처음 조회하면 기본 상태로 생성된다."""
    try:
        return PetResponse.from_snapshot(service.get_state(pet_id))
    except Exception as e:
        logger.error("Failed to load pet %s: %s", pet_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/{pet_id}/actions", response_model=PetResponse, response_model_by_alias=True
)
def perform_action(
    pet_id: str,
    request: ActionRequest,
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    """feed / play / sleep 실행"""
    try:
        return PetResponse.from_snapshot(service.perform_action(pet_id, request.action))
    except Exception as e:
        logger.error("Action %s failed for pet %s: %s", request.action.value, pet_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{pet_id}/tick", response_model=PetResponse, response_model_by_alias=True)
def advance_tick(
    pet_id: str,
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    """시간 1 tick 수동 진행"""
    try:
        return PetResponse.from_snapshot(service.tick(pet_id))
    except Exception as e:
        logger.error("Tick failed for pet %s: %s", pet_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.put(
    "/{pet_id}/pass-through", response_model=PetResponse, response_model_by_alias=True
)
def update_pass_through(
    pet_id: str,
    request: PassThroughRequest,
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    if request.enabled is None:
        snapshot = service.toggle_pass_through(pet_id)
    else:
        snapshot = service.set_pass_through(pet_id, request.enabled)
    return PetResponse.from_snapshot(snapshot)


@router.put(
    "/{pet_id}/direction", response_model=PetResponse, response_model_by_alias=True
)
def update_direction(
    pet_id: str,
    request: DirectionRequest,
    service: PetService = Depends(get_pet_service),
) -> PetResponse:
    return PetResponse.from_snapshot(service.set_direction(pet_id, request.direction))


@router.post("/{pet_id}/chat", response_model=ChatResponse)
def chat(
    pet_id: str,
    request: ChatRequest,
    pet_service: PetService = Depends(get_pet_service),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """펫과 대화. 현재 상태가 답장 톤에 반영된다."""
    try:
        state = pet_service.get_state(pet_id).state
        reply = chat_service.send_message(pet_id, state, request.message)
        return ChatResponse(success=True, message=reply)
    except Exception as e:
        logger.error("Chat failed for pet %s: %s", pet_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{pet_id}/chat/history", response_model=ChatHistoryResponse)
def chat_history(
    pet_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    return ChatHistoryResponse.from_history(chat_service.get_history(pet_id))
