"""표시용 활동 설명 / 마지막 액션 라벨"""

from src.core.pet.models import PetAction, PetStatus

ACTIVITY_DESCRIPTIONS: dict[PetStatus, str] = {
    PetStatus.NORMAL: "Drifting around, slowly burning energy",
    PetStatus.EATING: "Enjoying a snack 🍖",
    PetStatus.PLAYING: "Playing happily 🎮",
    PetStatus.SLEEPING: "Sleeping to recover energy 💤",
    PetStatus.FORAGING: "Foraging for food on its own 🌿",
}

ACTION_LABELS: dict[PetAction, str] = {
    PetAction.FEED: "Fed",
    PetAction.PLAY: "Played",
    PetAction.SLEEP: "Put to sleep",
}

INITIAL_ACTION_LABEL = "Just arrived"


def describe_activity(status: PetStatus) -> str:
    return ACTIVITY_DESCRIPTIONS[PetStatus(status)]
