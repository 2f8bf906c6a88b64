"""액션 핸들러 테스트 (feed / play / sleep / 표시 플래그)"""

import pytest

from src.core.pet.actions import (
    ACTIONS,
    feed,
    perform_action,
    play,
    set_direction,
    set_pass_through,
    sleep,
)
from src.core.pet.models import Direction, MoodLabel, PetAction, PetStatus


class TestFeed:
    def test_feed_starts_eating(self) -> None:
        result = feed({"status": "normal", "mood": 50, "exp": 0, "level": 1})
        assert result.status is PetStatus.EATING
        assert result.eating_duration == 3
        assert result.feeding_progress == 100
        assert result.mood == 53
        assert result.exp == 5
        assert result.leveled_up is False
        assert result.derived_mood is MoodLabel.JOYFUL

    def test_feed_restarts_while_eating(self) -> None:
        once = feed({"mood": 50})
        twice = feed(once)
        assert twice.status is PetStatus.EATING
        assert twice.eating_duration == 3
        assert twice.mood == 56
        assert twice.exp == 10

    def test_feed_can_level_up(self) -> None:
        result = feed({"exp": 48, "level": 1})
        assert result.leveled_up is True
        assert result.level == 2
        assert result.exp == 3
        assert result.health == 100

    def test_feed_mood_clamped(self) -> None:
        assert feed({"mood": 99}).mood == 100


class TestPlay:
    def test_play_starts_playing(self) -> None:
        result = play({"mood": 50, "energy": 50})
        assert result.status is PetStatus.PLAYING
        assert result.playing_progress == 5
        assert result.mood == 55
        assert result.energy == 47
        assert result.exp == 6

    def test_play_energy_clamped(self) -> None:
        assert play({"energy": 1}).energy == 0


class TestSleep:
    def test_sleep_restores_energy_without_exp(self) -> None:
        result = sleep({"energy": 50, "mood": 50, "exp": 10})
        assert result.status is PetStatus.SLEEPING
        assert result.energy == 70
        assert result.mood == 53
        assert result.exp == 10
        assert result.leveled_up is False

    def test_sleep_energy_clamped(self) -> None:
        assert sleep({"energy": 90}).energy == 100


class TestPerformAction:
    def test_every_action_has_handler(self) -> None:
        assert set(ACTIONS) == set(PetAction)

    @pytest.mark.parametrize("action", ["feed", "play", "sleep"])
    def test_dispatch_by_name(self, action: str) -> None:
        raw = {"mood": 40, "energy": 60}
        assert perform_action(raw, action) == ACTIONS[PetAction(action)](raw)

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(ValueError):
            perform_action({}, "dance")

    def test_corrupt_input_is_normalized_first(self) -> None:
        result = perform_action({"mood": "bad", "status": "dancing"}, PetAction.SLEEP)
        assert result.mood == 73
        assert result.status is PetStatus.SLEEPING


class TestDisplayFlags:
    def test_set_pass_through(self) -> None:
        assert set_pass_through({}, True).pass_through is True
        assert set_pass_through({"passThrough": True}, False).pass_through is False

    def test_set_direction(self) -> None:
        assert set_direction({}, "left").direction is Direction.LEFT
        assert set_direction({"direction": "left"}, Direction.RIGHT).direction is Direction.RIGHT

    def test_invalid_direction_normalized_to_right(self) -> None:
        assert set_direction({"direction": "left"}, "up").direction is Direction.RIGHT

    def test_flags_do_not_touch_status(self) -> None:
        result = set_pass_through({"status": "sleeping", "energy": 30}, True)
        assert result.status is PetStatus.SLEEPING
        assert result.energy == 30
