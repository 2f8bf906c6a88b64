"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.chat_config import router as chat_config_router
from src.api.health import router as health_router
from src.api.pet import router as pet_router
from src.config import settings
from src.core.event_bus import EventBus
from src.core.logging import get_logger, setup_logging
from src.db.database import SessionLocal, engine as db_engine
from src.db.models import Base
from src.services.chat_config_service import ChatConfigService, provider_from_config
from src.services.chat_service import ChatService
from src.services.pet_service import PetService
from src.services.tick_scheduler import TickScheduler

setup_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)

    event_bus = EventBus()
    app.state.event_bus = event_bus

    # 서비스마다 세션 분리 (각자 Lock으로 직렬화)
    pet_session = SessionLocal()
    chat_session = SessionLocal()
    config_session = SessionLocal()

    pet_service = PetService(db=pet_session, event_bus=event_bus)
    app.state.pet_service = pet_service
    logger.info("PetService initialized.")

    # 저장된 Provider 설정 (없으면 환경 설정)
    chat_config_service = ChatConfigService(db=config_session)
    app.state.chat_config_service = chat_config_service
    ai_provider = provider_from_config(chat_config_service.load())
    chat_service = ChatService(
        db=chat_session, ai_provider=ai_provider, event_bus=event_bus
    )
    app.state.chat_service = chat_service
    logger.info("ChatService initialized (provider=%s).", ai_provider.name)

    # 기본 펫 로드 (없으면 생성)
    pet_service.get_state(settings.DEFAULT_PET_ID)

    scheduler = None
    if settings.TICK_ENABLED:
        scheduler = TickScheduler(
            pet_service,
            pet_id=settings.DEFAULT_PET_ID,
            interval_seconds=settings.TICK_INTERVAL_SECONDS,
        )
        scheduler.start()
    app.state.tick_scheduler = scheduler

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    if scheduler is not None:
        await scheduler.stop()
    pet_session.close()
    chat_session.close()
    config_session.close()


app = FastAPI(title="Desk Companion", lifespan=lifespan)

app.include_router(health_router)
app.include_router(pet_router)
app.include_router(chat_config_router)
