"""시간 경과(tick) 처리: 활동 상태 유한 상태 기계

처리 순서 (고정):
1. eating 진행
2. playing 진행
3. 소화 (status 무관)
4. tick 이전 status 기준 감쇠/회복 + 전이 판정

전이 조건은 tick 이전 스냅샷(pre)을 기준으로 판단하고,
수치 변경은 작업 사본(work)에 누적한다. 단, sleeping/foraging 분기는 회복 수치를
pre에서 다시 계산하므로 같은 tick의 소화 효과(mood, foraging은 satiation도)를 덮어쓴다.
모든 수치는 변경 직후 클램핑한다.
"""

import logging
import math
from dataclasses import replace
from typing import Any, Callable

from src.core.pet.finalizer import finalize
from src.core.pet.models import FinalizedState, PetState, PetStatus
from src.core.pet.normalizer import clamp, normalize

logger = logging.getLogger(__name__)

# 소화: tick당 최대 소비 진행도, 진행도 5당 satiation +1
DIGEST_PER_TICK = 10
DIGEST_UNITS_PER_SATIATION = 5

# 수면
SLEEP_ENERGY_REGEN = 4
WAKE_ENERGY = 65

# 채집
FORAGE_SATIATION_GAIN = 3
FORAGE_ENERGY_COST = 0.5
FORAGE_DONE_SATIATION = 50

# 평상시 감쇠
HUNGRY_SATIATION = 30
FORAGE_TRIGGER_SATIATION = 25
FORAGE_TRIGGER_ENERGY = 30
COLLAPSE_ENERGY = 15
TIRED_ENERGY = 20


def _advance_eating(work: PetState) -> PetState:
    if work.status is not PetStatus.EATING:
        return work
    duration = work.eating_duration
    mood = work.mood
    if duration > 0:
        duration -= 1
        mood = clamp(mood + 1)
    status = PetStatus.NORMAL if duration <= 0 else PetStatus.EATING
    return replace(work, eating_duration=duration, mood=mood, status=status)


def _advance_playing(work: PetState) -> PetState:
    if work.status is not PetStatus.PLAYING:
        return work
    progress = work.playing_progress
    mood, energy = work.mood, work.energy
    if progress > 0:
        progress -= 1
        mood = clamp(mood + 2)
        energy = clamp(energy - 1)
    status = PetStatus.NORMAL if progress <= 0 else PetStatus.PLAYING
    return replace(
        work, playing_progress=progress, mood=mood, energy=energy, status=status
    )


def _digest(work: PetState) -> PetState:
    if work.feeding_progress <= 0:
        return work
    consumed = min(DIGEST_PER_TICK, work.feeding_progress)
    return replace(
        work,
        feeding_progress=work.feeding_progress - consumed,
        satiation=clamp(
            work.satiation + math.floor(consumed / DIGEST_UNITS_PER_SATIATION)
        ),
        mood=clamp(work.mood + 1),
    )


# === status별 감쇠/회복 (pre: tick 이전, work: 작업 사본) ===


def _sleeping(pre: PetState, work: PetState) -> PetState:
    energy = clamp(pre.energy + SLEEP_ENERGY_REGEN)
    mood = clamp(pre.mood + 1)
    status = PetStatus.NORMAL if energy >= WAKE_ENERGY else work.status
    return replace(work, energy=energy, mood=mood, status=status)


def _foraging(pre: PetState, work: PetState) -> PetState:
    satiation = clamp(pre.satiation + FORAGE_SATIATION_GAIN)
    energy = clamp(pre.energy - FORAGE_ENERGY_COST)
    mood = clamp(pre.mood + 1)
    status = PetStatus.NORMAL if satiation >= FORAGE_DONE_SATIATION else work.status
    return replace(work, satiation=satiation, energy=energy, mood=mood, status=status)


def _normal(pre: PetState, work: PetState) -> PetState:
    # 소화 중인 tick에는 satiation이 줄지 않는다
    satiation = work.satiation
    if pre.feeding_progress <= 0:
        satiation = clamp(satiation - 1)
    mood = clamp(work.mood - (2 if satiation < HUNGRY_SATIATION else 1))
    energy = clamp(work.energy - 1)
    status = work.status

    if satiation < FORAGE_TRIGGER_SATIATION and energy > FORAGE_TRIGGER_ENERGY:
        status = PetStatus.FORAGING
    if energy < COLLAPSE_ENERGY:
        status = PetStatus.SLEEPING
    if energy < TIRED_ENERGY:
        mood = clamp(mood - 1)

    return replace(work, satiation=satiation, mood=mood, energy=energy, status=status)


def _in_action(pre: PetState, work: PetState) -> PetState:
    # eating/playing 효과는 1~2단계에서 이미 적용됨
    return work


STATUS_HANDLERS: dict[PetStatus, Callable[[PetState, PetState], PetState]] = {
    PetStatus.NORMAL: _normal,
    PetStatus.EATING: _in_action,
    PetStatus.PLAYING: _in_action,
    PetStatus.SLEEPING: _sleeping,
    PetStatus.FORAGING: _foraging,
}


def apply_tick(state: Any) -> FinalizedState:
    """1 tick 진행."""
    pre = normalize(state)
    work = _advance_eating(pre)
    work = _advance_playing(work)
    work = _digest(work)
    work = STATUS_HANDLERS[pre.status](pre, work)

    if work.status is not pre.status:
        logger.debug("Status transition: %s -> %s", pre.status.value, work.status.value)
    return finalize(work)
