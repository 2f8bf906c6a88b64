"""플레이어 액션 핸들러 (feed / play / sleep)

액션은 외부 요청으로만 발생하며 tick과 무관하다.
현재 status를 검사하지 않는다: 같은 액션을 반복하면 타이머가 재시작되고
보너스가 다시 지급된다.
"""

import logging
from dataclasses import replace
from typing import Any, Callable

from src.core.pet.experience import apply_exp
from src.core.pet.finalizer import finalize
from src.core.pet.models import Direction, FinalizedState, PetAction, PetStatus
from src.core.pet.normalizer import clamp, normalize

logger = logging.getLogger(__name__)

# === feed ===
FEED_EATING_TICKS = 3
FEED_PROGRESS = 100
FEED_MOOD_BONUS = 3
FEED_EXP = 5

# === play ===
PLAY_TICKS = 5
PLAY_MOOD_BONUS = 5
PLAY_ENERGY_COST = 3
PLAY_EXP = 6

# === sleep ===
SLEEP_ENERGY_BONUS = 20
SLEEP_MOOD_BONUS = 3


def feed(state: Any) -> FinalizedState:
    """식사 시작: 3 tick 동안 eating, 이후 소화 진행도 100에서 감소."""
    s = normalize(state)
    eating = replace(
        s,
        status=PetStatus.EATING,
        eating_duration=FEED_EATING_TICKS,
        feeding_progress=FEED_PROGRESS,
        mood=clamp(s.mood + FEED_MOOD_BONUS),
    )
    result, leveled_up = apply_exp(eating, FEED_EXP)
    return finalize(result, leveled_up=leveled_up)


def play(state: Any) -> FinalizedState:
    """놀이 시작: 5 tick 동안 playing."""
    s = normalize(state)
    playing = replace(
        s,
        status=PetStatus.PLAYING,
        playing_progress=PLAY_TICKS,
        mood=clamp(s.mood + PLAY_MOOD_BONUS),
        energy=clamp(s.energy - PLAY_ENERGY_COST),
    )
    result, leveled_up = apply_exp(playing, PLAY_EXP)
    return finalize(result, leveled_up=leveled_up)


def sleep(state: Any) -> FinalizedState:
    """수면 진입. 경험치 없음."""
    s = normalize(state)
    return finalize(
        replace(
            s,
            energy=clamp(s.energy + SLEEP_ENERGY_BONUS),
            mood=clamp(s.mood + SLEEP_MOOD_BONUS),
            status=PetStatus.SLEEPING,
        )
    )


ACTIONS: dict[PetAction, Callable[[Any], FinalizedState]] = {
    PetAction.FEED: feed,
    PetAction.PLAY: play,
    PetAction.SLEEP: sleep,
}


def perform_action(state: Any, action: PetAction | str) -> FinalizedState:
    """액션 이름으로 핸들러 호출.

    Raises:
        ValueError: 알 수 없는 액션 이름.
    """
    handler = ACTIONS[PetAction(action)]
    result = handler(state)
    logger.debug("Action %s -> status=%s", PetAction(action).value, result.status.value)
    return result


# === 표시 플래그 (호출자 소유, 상태 전이 없음) ===


def set_pass_through(state: Any, enabled: bool) -> FinalizedState:
    return finalize(replace(normalize(state), pass_through=bool(enabled)))


def set_direction(state: Any, direction: Direction | str) -> FinalizedState:
    """허용값 외 방향은 finalize 단계에서 right로 정규화된다."""
    return finalize(replace(normalize(state), direction=direction))
