"""경험치 / 레벨업 판정"""

import logging
from dataclasses import replace
from typing import Any

from src.core.pet.models import PetState
from src.core.pet.normalizer import clamp, is_finite_number, normalize

logger = logging.getLogger(__name__)

# 레벨업 필요 경험치 = level * EXP_BASE
EXP_BASE = 50
LEVEL_UP_HEALTH_BONUS = 5


def exp_to_next_level(level: int) -> int:
    return level * EXP_BASE


def apply_exp(state: Any, gained: float) -> tuple[PetState, bool]:
    """경험치 적용.

    Returns: (새 상태, 레벨업 여부)

    호출당 최대 1회만 레벨업한다 (연쇄 레벨업 없음).
    레벨업 시 health +5 (클램핑).
    """
    s = normalize(state)
    gain = max(0.0, float(gained)) if is_finite_number(gained) else 0.0

    exp = s.exp + gain
    need = exp_to_next_level(s.level)
    if exp < need:
        return replace(s, exp=exp), False

    next_state = replace(
        s,
        exp=exp - need,
        level=s.level + 1,
        health=clamp(s.health + LEVEL_UP_HEALTH_BONUS),
    )
    logger.debug("Level up: %d -> %d (exp=%.1f)", s.level, next_state.level, next_state.exp)
    return next_state, True
