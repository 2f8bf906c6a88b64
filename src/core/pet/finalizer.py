"""모든 공개 연산의 마지막 단계: 재정규화 + 기분 라벨 부착"""

from dataclasses import asdict
from typing import Any

from src.core.pet.models import FinalizedState
from src.core.pet.mood import derive_mood
from src.core.pet.normalizer import normalize


def finalize(state: Any, leveled_up: bool = False) -> FinalizedState:
    """입력에 남아 있던 derived_mood는 버리고 항상 새로 계산한다."""
    normalized = normalize(state)
    return FinalizedState(
        **asdict(normalized),
        derived_mood=derive_mood(normalized),
        leveled_up=leveled_up,
    )
