"""Desk Companion Core Engine"""
__version__ = "0.1.0"

from src.core.pet import (
    FinalizedState,
    MoodLabel,
    PetAction,
    PetState,
    PetStatus,
    apply_tick,
    derive_mood,
    feed,
    normalize,
    play,
    sleep,
)

__all__ = [
    "PetState",
    "FinalizedState",
    "PetStatus",
    "PetAction",
    "MoodLabel",
    "normalize",
    "derive_mood",
    "apply_tick",
    "feed",
    "play",
    "sleep",
]
