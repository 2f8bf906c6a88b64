"""상태 정규화: 임의/부분 입력을 정규 PetState로 변환

실패 경로 없음: 잘못된 입력은 모두 기본값으로 대체된다.
"""

import math
from collections.abc import Mapping
from typing import Any

from src.core.pet.models import (
    DEFAULT_STATE,
    STAT_MAX,
    STAT_MIN,
    WIRE_KEYS,
    Direction,
    PetState,
    PetStatus,
)

BOUNDED_STATS = ("satiation", "mood", "cleanliness", "energy", "health")

# 이전 저장 형식에서 satiation을 가리키던 키 (극성 동일: 높을수록 배부름)
LEGACY_ALIASES: dict[str, tuple[str, ...]] = {
    "satiation": ("hunger",),
}


def clamp(value: float, low: float = STAT_MIN, high: float = STAT_MAX) -> float:
    return max(low, min(high, value))


def is_finite_number(value: Any) -> bool:
    """bool/문자열은 숫자로 취급하지 않는다."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # float로 표현할 수 없는 거대 정수
        return False


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_record(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, PetState):
        return raw.to_dict()
    if isinstance(raw, Mapping):
        return raw
    return {}


def _lookup(record: Mapping[str, Any], name: str) -> Any:
    """wire 키 → snake_case 키 → 레거시 별칭 순으로 조회."""
    for key in (WIRE_KEYS[name], name, *LEGACY_ALIASES.get(name, ())):
        if key in record:
            return record[key]
    return None


def _coerce_status(value: Any) -> PetStatus:
    try:
        return PetStatus(value)
    except (ValueError, TypeError):
        return PetStatus.NORMAL


def _coerce_direction(value: Any) -> Direction:
    try:
        return Direction(value)
    except (ValueError, TypeError):
        return Direction.RIGHT


def normalize(raw: Any) -> PetState:
    """부분/손상 레코드를 정규 상태로 변환.

    - 제한 수치(satiation 등): 비유한/누락 → 기본값, 그 외 0~100 클램핑
    - exp: 기본 0, 하한 0
    - level: 기본 1, 반올림 후 하한 1
    - feedingProgress: 기본 0, 0~100 클램핑
    - playingProgress / eatingDuration: 기본 0, 반올림 후 하한 0
    - status / direction: 허용값 외 → normal / right
    - passThrough: bool 변환

    멱등: normalize(normalize(x)) == normalize(x)
    """
    record = _as_record(raw)

    stats: dict[str, float] = {}
    for name in BOUNDED_STATS:
        value = _lookup(record, name)
        if is_finite_number(value):
            stats[name] = clamp(float(value))
        else:
            stats[name] = float(getattr(DEFAULT_STATE, name))

    exp = _lookup(record, "exp")
    level = _lookup(record, "level")
    feeding = _lookup(record, "feeding_progress")
    playing = _lookup(record, "playing_progress")
    eating = _lookup(record, "eating_duration")

    return PetState(
        **stats,
        exp=max(0.0, float(exp)) if is_finite_number(exp) else 0.0,
        level=max(1, round_half_up(level)) if is_finite_number(level) else 1,
        status=_coerce_status(_lookup(record, "status")),
        direction=_coerce_direction(_lookup(record, "direction")),
        pass_through=bool(_lookup(record, "pass_through")),
        feeding_progress=clamp(float(feeding)) if is_finite_number(feeding) else 0.0,
        playing_progress=(
            max(0, round_half_up(playing)) if is_finite_number(playing) else 0
        ),
        eating_duration=(
            max(0, round_half_up(eating)) if is_finite_number(eating) else 0
        ),
    )
