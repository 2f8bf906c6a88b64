"""API request/response schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.core.pet import Direction, MoodLabel, PetAction, PetStatus
from src.services.chat_config_service import ChatConfig
from src.services.chat_service import ChatHistory
from src.services.pet_service import PetSnapshot


# === Request Schemas ===


class ActionRequest(BaseModel):
    """펫 액션 요청"""

    action: PetAction = Field(..., description="액션 타입: feed, play, sleep")


class PassThroughRequest(BaseModel):
    """마우스 통과 플래그 설정. enabled 생략 시 토글"""

    enabled: Optional[bool] = Field(default=None, description="설정값 (None=토글)")


class DirectionRequest(BaseModel):
    """바라보는 방향 설정"""

    direction: Direction


class ChatRequest(BaseModel):
    """대화 요청. 빈 메시지는 펫에게 먼저 말을 걸게 한다"""

    message: str = Field(default="", max_length=500, description="사용자 메시지")


class ChatConfigUpdateRequest(BaseModel):
    """채팅 Provider 설정 변경. 보낸 필드만 반영, null은 환경 기본값으로 복귀"""

    model_config = ConfigDict(populate_by_name=True)

    provider: Optional[Literal["mock", "gemini"]] = None
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    model: Optional[str] = None


# === Response Schemas ===


class PetStateInfo(BaseModel):
    """펫 상태 (직렬화 키는 camelCase)"""

    model_config = ConfigDict(populate_by_name=True)

    satiation: float
    mood: float
    cleanliness: float
    energy: float
    health: float
    exp: float
    level: int
    status: PetStatus
    direction: Direction
    pass_through: bool = Field(alias="passThrough")
    feeding_progress: float = Field(alias="feedingProgress")
    playing_progress: int = Field(alias="playingProgress")
    eating_duration: int = Field(alias="eatingDuration")
    derived_mood: MoodLabel = Field(alias="derivedMood")


class PetResponse(BaseModel):
    """펫 스냅샷 응답"""

    model_config = ConfigDict(populate_by_name=True)

    pet_id: str = Field(alias="petId")
    state: PetStateInfo
    last_action: str = Field(alias="lastAction")
    activity: str
    tick_count: int = Field(alias="tickCount")
    leveled_up: bool = Field(default=False, alias="leveledUp")

    @classmethod
    def from_snapshot(cls, snapshot: PetSnapshot) -> "PetResponse":
        return cls(
            pet_id=snapshot.pet_id,
            state=PetStateInfo.model_validate(snapshot.state.to_dict()),
            last_action=snapshot.last_action,
            activity=snapshot.activity,
            tick_count=snapshot.tick_count,
            leveled_up=snapshot.state.leveled_up,
        )


class ChatResponse(BaseModel):
    """대화 응답"""

    success: bool
    message: str


class ChatMessageInfo(BaseModel):
    role: str
    content: str


class ChatHistoryResponse(BaseModel):
    """대화 기록 응답"""

    history: list[ChatMessageInfo] = []
    summaries: list[str] = []
    facts: list[str] = []

    @classmethod
    def from_history(cls, history: ChatHistory) -> "ChatHistoryResponse":
        return cls(
            history=[
                ChatMessageInfo(role=role, content=content)
                for role, content in history.history
            ],
            summaries=history.summaries,
            facts=history.facts,
        )


API_KEY_MASK = "***configured***"


class ChatConfigResponse(BaseModel):
    """채팅 Provider 설정 응답. API 키는 노출하지 않는다"""

    model_config = ConfigDict(populate_by_name=True)

    provider: str
    api_key: str = Field(alias="apiKey")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    model: Optional[str] = None
    active_provider: str = Field(alias="activeProvider")

    @classmethod
    def from_config(cls, config: ChatConfig, active_provider: str) -> "ChatConfigResponse":
        return cls(
            provider=config.provider,
            api_key=API_KEY_MASK if config.api_key else "",
            base_url=config.base_url,
            model=config.model,
            active_provider=active_provider,
        )
