"""기분 라벨 분류

satiation / energy 두 수치에 대한 순서 있는 임계값 규칙.
선언 순서가 곧 우선순위이며, 순서를 바꾸면 관측 결과가 달라진다.
"""

from typing import Any

from src.core.pet.models import MoodLabel
from src.core.pet.normalizer import normalize

MOOD_THRESHOLDS: dict[str, float] = {
    "ECSTATIC_ENERGY": 90,
    "ECSTATIC_SATIATION": 90,
    "JOYFUL_ENERGY": 70,
    "JOYFUL_SATIATION": 75,
    "EXHAUSTED_ENERGY": 15,
    "RESTLESS_SATIATION": 40,
    "RESTLESS_ENERGY": 40,
    "ANXIOUS_SATIATION": 25,
    "ANXIOUS_ENERGY": 40,
}


def derive_mood(state: Any) -> MoodLabel:
    """첫 번째로 일치하는 규칙의 라벨을 반환.

    1. energy >= 90 and satiation >= 90 → ecstatic
    2. energy >= 70 and satiation >= 75 → joyful
    3. energy <= 15 → exhausted
    4. satiation <= 40 and energy >= 40 → restless
    5. satiation <= 25 and energy < 40 → anxious
    6. 그 외 → neutral
    """
    state = normalize(state)
    t = MOOD_THRESHOLDS
    satiation, energy = state.satiation, state.energy

    if energy >= t["ECSTATIC_ENERGY"] and satiation >= t["ECSTATIC_SATIATION"]:
        return MoodLabel.ECSTATIC
    if energy >= t["JOYFUL_ENERGY"] and satiation >= t["JOYFUL_SATIATION"]:
        return MoodLabel.JOYFUL
    if energy <= t["EXHAUSTED_ENERGY"]:
        return MoodLabel.EXHAUSTED
    if satiation <= t["RESTLESS_SATIATION"] and energy >= t["RESTLESS_ENERGY"]:
        return MoodLabel.RESTLESS
    if satiation <= t["ANXIOUS_SATIATION"] and energy < t["ANXIOUS_ENERGY"]:
        return MoodLabel.ANXIOUS
    return MoodLabel.NEUTRAL
