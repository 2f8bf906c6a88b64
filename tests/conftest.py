"""Shared test fixtures."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.core.event_bus import EventBus
from src.db.database import get_db
from src.db.models import Base
from src.main import app
from src.services.ai.mock import MockProvider
from src.services.chat_config_service import ChatConfigService
from src.services.chat_service import ChatService
from src.services.pet_service import PetService

# 모든 세션이 같은 인메모리 DB를 보도록 단일 커넥션 공유
TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)


def _override_get_db() -> Generator[Session, None, None]:
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.drop_all(TEST_ENGINE)
    Base.metadata.create_all(TEST_ENGINE)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def pet_service(db_session: Session, bus: EventBus) -> PetService:
    return PetService(db_session, bus)


@pytest.fixture()
def chat_service(db_session: Session, bus: EventBus) -> ChatService:
    return ChatService(db_session, MockProvider(), bus)


@pytest.fixture()
def chat_config_service(db_session: Session) -> ChatConfigService:
    return ChatConfigService(db_session)


@pytest.fixture()
def client(
    pet_service: PetService,
    chat_service: ChatService,
    chat_config_service: ChatConfigService,
) -> TestClient:
    """FastAPI TestClient wired to in-memory services (lifespan not run)."""
    app.state.pet_service = pet_service
    app.state.chat_service = chat_service
    app.state.chat_config_service = chat_config_service
    app.state.tick_scheduler = None
    return TestClient(app)
