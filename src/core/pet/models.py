"""펫 상태 도메인 모델 (DB 무관)

모든 상태 값은 불변(frozen)이며, 상태 전이 함수는 항상 새 값을 반환한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

STAT_MIN = 0.0
STAT_MAX = 100.0


class PetStatus(str, Enum):
    NORMAL = "normal"
    EATING = "eating"
    PLAYING = "playing"
    SLEEPING = "sleeping"
    FORAGING = "foraging"


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class MoodLabel(str, Enum):
    ECSTATIC = "ecstatic"
    JOYFUL = "joyful"
    NEUTRAL = "neutral"
    RESTLESS = "restless"
    ANXIOUS = "anxious"
    EXHAUSTED = "exhausted"


class PetAction(str, Enum):
    FEED = "feed"
    PLAY = "play"
    SLEEP = "sleep"


# 파이썬 속성명 → 직렬화(JSON) 키
WIRE_KEYS: dict[str, str] = {
    "satiation": "satiation",
    "mood": "mood",
    "cleanliness": "cleanliness",
    "energy": "energy",
    "health": "health",
    "exp": "exp",
    "level": "level",
    "status": "status",
    "direction": "direction",
    "pass_through": "passThrough",
    "feeding_progress": "feedingProgress",
    "playing_progress": "playingProgress",
    "eating_duration": "eatingDuration",
}


@dataclass(frozen=True)
class PetState:
    """정규화된 펫 상태 스냅샷

    satiation은 "높을수록 배부름" 극성이다. 분류 임계값, 감쇠 방향,
    전이 조건 모두 이 극성을 전제로 한다.
    """

    # 기본 수치 (0~100)
    satiation: float = 80.0
    mood: float = 70.0
    cleanliness: float = 90.0
    energy: float = 85.0
    health: float = 95.0

    # 성장
    exp: float = 0.0
    level: int = 1

    # 활동 상태
    status: PetStatus = PetStatus.NORMAL
    direction: Direction = Direction.RIGHT
    pass_through: bool = False

    # 진행 중 활동 (tick에서만 감소)
    feeding_progress: float = 0.0
    playing_progress: int = 0
    eating_duration: int = 0

    def to_dict(self) -> dict[str, Any]:
        """저장/전송용 평면 레코드."""
        record: dict[str, Any] = {}
        for name, key in WIRE_KEYS.items():
            value = getattr(self, name)
            if isinstance(value, Enum):
                value = value.value
            record[key] = value
        return record


@dataclass(frozen=True)
class FinalizedState(PetState):
    """Finalizer 출력. derived_mood는 매번 새로 계산된다.

    leveled_up은 이 값을 만든 연산의 결과 보고용이며 저장되지 않는다.
    """

    derived_mood: MoodLabel = MoodLabel.NEUTRAL
    leveled_up: bool = False

    def to_dict(self) -> dict[str, Any]:
        record = super().to_dict()
        record["derivedMood"] = self.derived_mood.value
        return record


DEFAULT_STATE = PetState()

