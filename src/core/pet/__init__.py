"""펫 상태 전이 Core 패키지

DB 무관 순수 Python 로직. 타이머/I/O/공유 상태 없음.
"""

from src.core.pet.actions import (
    ACTIONS,
    feed,
    perform_action,
    play,
    set_direction,
    set_pass_through,
    sleep,
)
from src.core.pet.activity import ACTION_LABELS, describe_activity
from src.core.pet.experience import EXP_BASE, apply_exp, exp_to_next_level
from src.core.pet.finalizer import finalize
from src.core.pet.models import (
    DEFAULT_STATE,
    Direction,
    FinalizedState,
    MoodLabel,
    PetAction,
    PetState,
    PetStatus,
)
from src.core.pet.mood import MOOD_THRESHOLDS, derive_mood
from src.core.pet.normalizer import normalize
from src.core.pet.tick import apply_tick

__all__ = [
    "PetState",
    "FinalizedState",
    "PetStatus",
    "PetAction",
    "Direction",
    "MoodLabel",
    "DEFAULT_STATE",
    "normalize",
    "MOOD_THRESHOLDS",
    "derive_mood",
    "EXP_BASE",
    "apply_exp",
    "exp_to_next_level",
    "ACTIONS",
    "feed",
    "play",
    "sleep",
    "perform_action",
    "set_pass_through",
    "set_direction",
    "apply_tick",
    "finalize",
    "ACTION_LABELS",
    "describe_activity",
]
