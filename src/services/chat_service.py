"""펫 대화 Service: AI Provider 호출, 대화 기록/장기 기억 관리

기록이 SUMMARY_BATCH_SIZE개 쌓일 때마다 가장 오래된 묶음을 요약해
장기 기억(summary)과 중요 사실(fact)로 옮긴다.
"""

import json
import logging
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from src.config import settings
from src.core.event_bus import EventBus, PetEvent
from src.core.event_types import EventTypes
from src.core.pet import FinalizedState
from src.db.models import ChatMemoryModel, ChatMessageModel
from src.services.ai.base import AIProvider
from src.services.chat_prompts import (
    PET_NAME,
    build_chat_prompt,
    build_summary_prompts,
    build_system_prompt,
)

logger = logging.getLogger(__name__)

SOURCE = "chat_service"

HISTORY_WINDOW = 10
SUMMARY_BATCH_SIZE = 10
MAX_SUMMARIES = 60
MAX_FACTS = 120
SUMMARY_MAX_TOKENS = 300

LOCAL_SUMMARY_MAX_CHARS = 120

FALLBACK_REPLY = "Mew... I can't find my words right now ({error})"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass
class ChatHistory:
    """대화 기록 조회 결과"""

    history: list[tuple[str, str]] = field(default_factory=list)
    summaries: list[str] = field(default_factory=list)
    facts: list[str] = field(default_factory=list)


def extract_json(raw: str | None) -> dict[str, Any] | None:
    """응답 텍스트에서 첫 JSON 객체를 추출. 실패 시 None."""
    if not raw:
        return None
    match = _JSON_OBJECT.search(raw)
    if match is None:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("Summary JSON parse failed: %s", e)
        return None
    return parsed if isinstance(parsed, dict) else None


def summarize_locally(batch: list[tuple[str, str]]) -> str:
    """AI 요약 실패 시 대체 요약 (최근 10개, 120자 제한)."""
    parts = []
    for role, content in batch[-SUMMARY_BATCH_SIZE:]:
        if role == "user":
            parts.append(f"You said: “{content}”")
        elif role == "assistant":
            parts.append(f"{PET_NAME} said: “{content}”")
    summary = " ".join(parts)
    if len(summary) > LOCAL_SUMMARY_MAX_CHARS:
        return summary[:LOCAL_SUMMARY_MAX_CHARS] + "..."
    return summary


def merge_facts(existing: list[str], new: list[str]) -> list[str]:
    """순서 유지 중복 제거, 최근 MAX_FACTS개만 유지."""
    merged = dict.fromkeys(existing)
    for item in new:
        trimmed = item.strip()
        if trimmed:
            merged[trimmed] = None
    return list(merged)[-MAX_FACTS:]


class ChatService:
    """대화 + 기억 관리"""

    def __init__(self, db: Session, ai_provider: AIProvider, event_bus: EventBus):
        self._db = db
        self._ai = ai_provider
        self._bus = event_bus
        self._lock = threading.Lock()
        self._register_event_handlers()

    def _register_event_handlers(self) -> None:
        self._bus.subscribe(EventTypes.PET_LEVELED_UP, self._on_pet_leveled_up)

    @property
    def provider_name(self) -> str:
        return self._ai.name

    def set_provider(self, ai_provider: AIProvider) -> None:
        """설정 변경 후 Provider 교체. 진행 중인 대화가 끝난 뒤 적용된다."""
        with self._lock:
            self._ai = ai_provider
        logger.info("Chat provider switched to %s", ai_provider.name)

    # === 대화 ===

    def send_message(
        self, pet_id: str, state: FinalizedState, message: str = ""
    ) -> str:
        """메시지 전송 후 펫의 답장 반환.

        1. 최근 HISTORY_WINDOW개 기록 + 기억으로 프롬프트 구성
        2. AI 호출 (실패 시 FALLBACK_REPLY)
        3. 기록 추가, 필요 시 오래된 묶음 요약
        """
        clean_message = message.strip() if isinstance(message, str) else ""

        with self._lock:
            self._bus.reset_chain()
            memory = self._load_memory(pet_id)
            recent = [
                (row.role, row.content)
                for row in self._load_messages(pet_id)[-HISTORY_WINDOW:]
            ]
            system_prompt = build_system_prompt(
                state, facts=memory.facts, summaries=memory.summaries
            )
            prompt = build_chat_prompt(recent, clean_message)
            reply = self._generate_reply(prompt, system_prompt)

            if clean_message:
                self._db.add(
                    ChatMessageModel(pet_id=pet_id, role="user", content=clean_message)
                )
            self._db.add(ChatMessageModel(pet_id=pet_id, role="assistant", content=reply))
            self._db.commit()

            self._compact_history(pet_id)

        self._bus.emit(
            PetEvent(
                event_type=EventTypes.CHAT_REPLIED,
                data={"pet_id": pet_id, "has_user_message": bool(clean_message)},
                source=SOURCE,
            )
        )
        return reply

    def get_history(self, pet_id: str) -> ChatHistory:
        with self._lock:
            memory = self._load_memory(pet_id)
            memory.history = [
                (row.role, row.content) for row in self._load_messages(pet_id)
            ]
            return memory

    def _generate_reply(self, prompt: str, system_prompt: str) -> str:
        try:
            reply = self._ai.generate(
                prompt,
                system_prompt=system_prompt,
                max_tokens=settings.CHAT_MAX_TOKENS,
            )
        except Exception as e:
            logger.warning("AI chat failed, using fallback reply: %s", e)
            return FALLBACK_REPLY.format(error=e)
        return reply.strip() or "(speechless)"

    # === 기억 정리 ===

    def _compact_history(self, pet_id: str) -> None:
        """기록이 SUMMARY_BATCH_SIZE 이상이면 앞에서부터 묶음 단위로 요약."""
        rows = self._load_messages(pet_id)
        if len(rows) < SUMMARY_BATCH_SIZE:
            return

        memory = self._load_memory(pet_id)
        facts = memory.facts
        while len(rows) >= SUMMARY_BATCH_SIZE:
            batch_rows, rows = rows[:SUMMARY_BATCH_SIZE], rows[SUMMARY_BATCH_SIZE:]
            batch = [(row.role, row.content) for row in batch_rows]
            summary, important = self._summarize(batch)

            stamp = datetime.now(timezone.utc).isoformat()
            self._db.add(
                ChatMemoryModel(pet_id=pet_id, kind="summary", content=f"[{stamp}] {summary}")
            )
            facts = merge_facts(facts, important)
            for row in batch_rows:
                self._db.delete(row)

        self._replace_facts(pet_id, facts)
        self._db.commit()
        self._trim_summaries(pet_id)
        logger.info("Chat history compacted for pet=%s", pet_id)

    def _summarize(self, batch: list[tuple[str, str]]) -> tuple[str, list[str]]:
        """Returns: (요약, 중요 사실 목록)"""
        system_prompt, prompt = build_summary_prompts(batch)
        try:
            raw = self._ai.generate(
                prompt, system_prompt=system_prompt, max_tokens=SUMMARY_MAX_TOKENS
            )
        except Exception as e:
            logger.warning("AI summary failed, using local summary: %s", e)
            return summarize_locally(batch), []

        parsed = extract_json(raw)
        summary = raw.strip()
        important: list[str] = []
        if parsed is not None:
            if isinstance(parsed.get("summary"), str) and parsed["summary"].strip():
                summary = parsed["summary"].strip()
            if isinstance(parsed.get("important"), list):
                important = [
                    item for item in parsed["important"]
                    if isinstance(item, str) and item.strip()
                ]
        return summary, important

    def _replace_facts(self, pet_id: str, facts: list[str]) -> None:
        self._db.query(ChatMemoryModel).filter(
            ChatMemoryModel.pet_id == pet_id,
            ChatMemoryModel.kind == "fact",
        ).delete()
        for fact in facts:
            self._db.add(ChatMemoryModel(pet_id=pet_id, kind="fact", content=fact))

    def _trim_summaries(self, pet_id: str) -> None:
        rows = (
            self._db.query(ChatMemoryModel)
            .filter(
                ChatMemoryModel.pet_id == pet_id,
                ChatMemoryModel.kind == "summary",
            )
            .order_by(ChatMemoryModel.id)
            .all()
        )
        excess = len(rows) - MAX_SUMMARIES
        if excess <= 0:
            return
        for row in rows[:excess]:
            self._db.delete(row)
        self._db.commit()

    # === EventBus 핸들러 ===

    def _on_pet_leveled_up(self, event: PetEvent) -> None:
        """레벨업을 중요 사실로 기록."""
        pet_id = event.data.get("pet_id", "")
        level = event.data.get("level")
        if not pet_id or level is None:
            return
        with self._lock:
            memory = self._load_memory(pet_id)
            self._replace_facts(pet_id, merge_facts(memory.facts, [f"Reached Lv.{level}"]))
            self._db.commit()
        logger.debug("Level-up fact recorded: pet=%s, level=%s", pet_id, level)

    # === 조회 헬퍼 ===

    def _load_messages(self, pet_id: str) -> list[ChatMessageModel]:
        return (
            self._db.query(ChatMessageModel)
            .filter(ChatMessageModel.pet_id == pet_id)
            .order_by(ChatMessageModel.id)
            .all()
        )

    def _load_memory(self, pet_id: str) -> ChatHistory:
        rows = (
            self._db.query(ChatMemoryModel)
            .filter(ChatMemoryModel.pet_id == pet_id)
            .order_by(ChatMemoryModel.id)
            .all()
        )
        return ChatHistory(
            summaries=[row.content for row in rows if row.kind == "summary"],
            facts=[row.content for row in rows if row.kind == "fact"],
        )
