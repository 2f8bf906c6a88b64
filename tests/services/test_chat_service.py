"""ChatService 테스트: 답장, 대체 응답, 기록 요약"""

from typing import Optional

import pytest
from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, PetEvent
from src.core.event_types import EventTypes
from src.core.pet import finalize
from src.services.ai.base import AIProvider
from src.services.ai.mock import MOCK_CHAT_REPLY
from src.services.chat_prompts import DEFAULT_NUDGE, build_system_prompt
from src.services.chat_service import (
    LOCAL_SUMMARY_MAX_CHARS,
    MAX_FACTS,
    ChatService,
    extract_json,
    merge_facts,
    summarize_locally,
)


class ScriptedProvider(AIProvider):
    """대화에는 고정 답장, 요약 요청에는 지정한 응답을 돌려준다."""

    def __init__(self, summary_response: str = "", fail_summary: bool = False):
        self.summary_response = summary_response
        self.fail_summary = fail_summary
        self.calls: list[tuple[str, Optional[str]]] = []

    @property
    def name(self) -> str:
        return "scripted"

    def is_available(self) -> bool:
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 120,
        temperature: float = 0.9,
    ) -> str:
        self.calls.append((prompt, system_prompt))
        if system_prompt and "JSON" in system_prompt:
            if self.fail_summary:
                raise RuntimeError("summary down")
            return self.summary_response
        return "Nya!"


class BrokenProvider(ScriptedProvider):
    def generate(self, prompt, system_prompt=None, max_tokens=120, temperature=0.9):
        raise RuntimeError("boom")


STATE = finalize({})


def _chat(service: ChatService, count: int, pet_id: str = "p1") -> None:
    for i in range(count):
        service.send_message(pet_id, STATE, f"hi {i}")


class TestSendMessage:
    def test_mock_reply_is_recorded(self, chat_service: ChatService) -> None:
        reply = chat_service.send_message("p1", STATE, "  hello  ")
        assert reply == MOCK_CHAT_REPLY
        assert chat_service.get_history("p1").history == [
            ("user", "hello"),
            ("assistant", MOCK_CHAT_REPLY),
        ]

    def test_empty_message_nudges(self, db_session: Session, bus: EventBus) -> None:
        provider = ScriptedProvider()
        service = ChatService(db_session, provider, bus)

        service.send_message("p1", STATE, "   ")

        prompt, _ = provider.calls[0]
        assert f"Owner: {DEFAULT_NUDGE}" in prompt
        assert service.get_history("p1").history == [("assistant", "Nya!")]

    def test_provider_failure_uses_fallback(
        self, db_session: Session, bus: EventBus
    ) -> None:
        service = ChatService(db_session, BrokenProvider(), bus)
        reply = service.send_message("p1", STATE, "hello")
        assert reply == "Mew... I can't find my words right now (boom)"

    def test_recent_history_in_prompt(self, db_session: Session, bus: EventBus) -> None:
        provider = ScriptedProvider()
        service = ChatService(db_session, provider, bus)
        service.send_message("p1", STATE, "first")
        service.send_message("p1", STATE, "second")

        prompt, _ = provider.calls[-1]
        assert prompt.splitlines() == [
            "Owner: first",
            "Floatcat: Nya!",
            "Owner: second",
            "Floatcat:",
        ]

    def test_emits_chat_replied(self, chat_service: ChatService, bus: EventBus) -> None:
        received: list[PetEvent] = []
        bus.subscribe(EventTypes.CHAT_REPLIED, received.append)
        chat_service.send_message("p1", STATE, "")
        assert received[0].data == {"pet_id": "p1", "has_user_message": False}

    def test_every_reply_emits(self, chat_service: ChatService, bus: EventBus) -> None:
        received: list[PetEvent] = []
        bus.subscribe(EventTypes.CHAT_REPLIED, received.append)
        chat_service.send_message("p1", STATE, "one")
        chat_service.send_message("p1", STATE, "two")
        assert len(received) == 2

    def test_set_provider_switches_replies(self, chat_service: ChatService) -> None:
        assert chat_service.provider_name == "mock"
        chat_service.set_provider(ScriptedProvider())
        assert chat_service.provider_name == "scripted"
        assert chat_service.send_message("p1", STATE, "hello") == "Nya!"

    def test_histories_are_per_pet(self, chat_service: ChatService) -> None:
        chat_service.send_message("p1", STATE, "hello")
        assert chat_service.get_history("p2").history == []


class TestCompaction:
    def test_below_batch_size_not_compacted(self, chat_service: ChatService) -> None:
        _chat(chat_service, 4)
        history = chat_service.get_history("p1")
        assert len(history.history) == 8
        assert history.summaries == []

    def test_batch_is_summarized(self, chat_service: ChatService) -> None:
        _chat(chat_service, 5)
        history = chat_service.get_history("p1")
        assert history.history == []
        assert len(history.summaries) == 1
        assert "[Mock] The owner and the pet chatted" in history.summaries[0]
        assert history.facts == []

    def test_important_points_become_facts(
        self, db_session: Session, bus: EventBus
    ) -> None:
        provider = ScriptedProvider(
            'Sure! {"summary": "Talked about fish", "important": ["Owner likes fish", "  ", 3]}'
        )
        service = ChatService(db_session, provider, bus)
        _chat(service, 5)

        history = service.get_history("p1")
        assert history.summaries[0].endswith("Talked about fish")
        assert history.facts == ["Owner likes fish"]

    def test_non_json_summary_kept_as_text(
        self, db_session: Session, bus: EventBus
    ) -> None:
        service = ChatService(db_session, ScriptedProvider("  just a recap  "), bus)
        _chat(service, 5)
        assert service.get_history("p1").summaries[0].endswith("just a recap")

    def test_summary_failure_uses_local_summary(
        self, db_session: Session, bus: EventBus
    ) -> None:
        service = ChatService(db_session, ScriptedProvider(fail_summary=True), bus)
        _chat(service, 5)

        summary = service.get_history("p1").summaries[0]
        assert "You said: “hi 0”" in summary
        assert summary.endswith("...")


class TestMemory:
    def test_level_up_recorded_as_fact(
        self, chat_service: ChatService, bus: EventBus
    ) -> None:
        bus.emit(
            PetEvent(
                event_type=EventTypes.PET_LEVELED_UP,
                data={"pet_id": "p1", "level": 2},
                source="pet_service",
            )
        )
        assert chat_service.get_history("p1").facts == ["Reached Lv.2"]

    def test_facts_reach_system_prompt(
        self, db_session: Session, bus: EventBus
    ) -> None:
        provider = ScriptedProvider()
        service = ChatService(db_session, provider, bus)
        bus.emit(
            PetEvent(
                event_type=EventTypes.PET_LEVELED_UP,
                data={"pet_id": "p1", "level": 3},
                source="pet_service",
            )
        )
        service.send_message("p1", STATE, "hey")

        _, system_prompt = provider.calls[0]
        assert "Important memories: Reached Lv.3" in system_prompt


class TestPrompts:
    def test_state_hints(self) -> None:
        prompt = build_system_prompt(finalize({"satiation": 20, "energy": 10}))
        assert "Satiation: 20/100 (hungry)" in prompt
        assert "Energy: 10/100 (tired)" in prompt
        assert "Mood: worn out" in prompt

    def test_only_recent_facts(self) -> None:
        facts = [f"fact-{i}" for i in range(7)]
        prompt = build_system_prompt(STATE, facts=facts)
        assert "fact-6" in prompt
        assert "fact-1" not in prompt


class TestHelpers:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, None),
            ("", None),
            ("no json here", None),
            ('noise {"a": 1} noise', {"a": 1}),
            ("{not json}", None),
        ],
    )
    def test_extract_json(self, raw, expected) -> None:
        assert extract_json(raw) == expected

    def test_merge_facts_dedupes_in_order(self) -> None:
        assert merge_facts(["a", "b"], ["b", " c ", ""]) == ["a", "b", "c"]

    def test_merge_facts_keeps_most_recent(self) -> None:
        existing = [f"f{i}" for i in range(MAX_FACTS)]
        merged = merge_facts(existing, ["new"])
        assert len(merged) == MAX_FACTS
        assert merged[0] == "f1"
        assert merged[-1] == "new"

    def test_local_summary(self) -> None:
        summary = summarize_locally([("user", "hi"), ("assistant", "yo")])
        assert summary == "You said: “hi” Floatcat said: “yo”"

    def test_local_summary_truncated(self) -> None:
        summary = summarize_locally([("user", "x" * 500)])
        assert len(summary) == LOCAL_SUMMARY_MAX_CHARS + 3
        assert summary.endswith("...")
