"""Finalizer / 활동 설명 테스트"""

import pytest

from src.core.pet.activity import ACTION_LABELS, ACTIVITY_DESCRIPTIONS, describe_activity
from src.core.pet.finalizer import finalize
from src.core.pet.models import WIRE_KEYS, FinalizedState, MoodLabel, PetAction, PetStatus
from src.core.pet.mood import derive_mood
from src.core.pet.normalizer import normalize

SAMPLES = [
    {},
    {"energy": 95, "satiation": 95},
    {"energy": 10, "status": "sleeping"},
    {"satiation": 20, "energy": 50, "level": 3.5},
]


class TestFinalize:
    @pytest.mark.parametrize("raw", SAMPLES)
    def test_mood_matches_normalized_state(self, raw) -> None:
        assert finalize(raw).derived_mood is derive_mood(normalize(raw))

    def test_stale_mood_replaced(self) -> None:
        result = finalize({"energy": 10, "derivedMood": "ecstatic"})
        assert result.derived_mood is MoodLabel.EXHAUSTED

    def test_leveled_up_flag(self) -> None:
        assert finalize({}).leveled_up is False
        assert finalize({}, leveled_up=True).leveled_up is True

    def test_returns_finalized_state(self) -> None:
        assert isinstance(finalize(None), FinalizedState)

    def test_wire_record_keys(self) -> None:
        record = finalize({}).to_dict()
        assert set(record) == set(WIRE_KEYS.values()) | {"derivedMood"}
        assert record["passThrough"] is False
        assert record["status"] == "normal"
        assert "leveled_up" not in record and "leveledUp" not in record

    @pytest.mark.parametrize("raw", SAMPLES)
    def test_wire_record_round_trip(self, raw) -> None:
        assert normalize(finalize(raw).to_dict()) == normalize(raw)


class TestActivity:
    def test_every_status_described(self) -> None:
        assert set(ACTIVITY_DESCRIPTIONS) == set(PetStatus)

    def test_every_action_labelled(self) -> None:
        assert set(ACTION_LABELS) == set(PetAction)

    def test_describe_by_value(self) -> None:
        assert describe_activity("sleeping") == ACTIVITY_DESCRIPTIONS[PetStatus.SLEEPING]
