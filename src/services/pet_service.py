"""펫 Service: Core↔DB 연결, EventBus 통신

모든 트리거(액션, tick, 표시 플래그 변경)는 이 서비스 하나를 거친다.
load → Core 전이 → save 전 구간을 단일 Lock으로 직렬화하므로
같은 pet에 대한 동시 요청이 서로의 결과를 덮어쓰지 않는다.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, PetEvent
from src.core.event_types import EventTypes
from src.core.pet import (
    ACTION_LABELS,
    FinalizedState,
    PetAction,
    apply_tick,
    describe_activity,
    finalize,
    perform_action,
    set_direction,
    set_pass_through,
)
from src.core.pet.activity import INITIAL_ACTION_LABEL
from src.core.pet.models import DEFAULT_STATE, Direction
from src.db.models import PetModel

logger = logging.getLogger(__name__)

SOURCE = "pet_service"


@dataclass(frozen=True)
class PetSnapshot:
    """Service 출력: Core 상태 + 표시용 메타데이터"""

    pet_id: str
    state: FinalizedState
    last_action: str
    activity: str
    tick_count: int


class PetService:
    """펫 상태 보관자 (single writer)"""

    def __init__(self, db: Session, event_bus: EventBus):
        self._db = db
        self._bus = event_bus
        self._lock = threading.Lock()

    # === 조회 ===

    def get_state(self, pet_id: str) -> PetSnapshot:
        """현재 스냅샷. 없으면 기본 상태로 생성."""
        with self._lock:
            self._bus.reset_chain()
            orm, created = self._load_or_create(pet_id)
            snapshot = self._to_snapshot(orm, finalize(orm.snapshot))
        if created:
            self._emit_created(pet_id)
        return snapshot

    # === 전이 ===

    def perform_action(self, pet_id: str, action: PetAction | str) -> PetSnapshot:
        """feed / play / sleep 실행."""
        pet_action = PetAction(action)

        def _apply(orm: PetModel) -> FinalizedState:
            orm.last_action = ACTION_LABELS[pet_action]
            return perform_action(orm.snapshot, pet_action)

        snapshot = self._transition(pet_id, _apply)
        self._bus.emit(
            PetEvent(
                event_type=EventTypes.PET_ACTION_PERFORMED,
                data={"pet_id": pet_id, "action": pet_action.value},
                source=SOURCE,
            )
        )
        logger.info(
            "Action %s on pet=%s -> status=%s, mood=%s",
            pet_action.value,
            pet_id,
            snapshot.state.status.value,
            snapshot.state.derived_mood.value,
        )
        return snapshot

    def tick(self, pet_id: str) -> PetSnapshot:
        """시간 1단위 진행."""

        def _apply(orm: PetModel) -> FinalizedState:
            orm.tick_count = (orm.tick_count or 0) + 1
            return apply_tick(orm.snapshot)

        snapshot = self._transition(pet_id, _apply)
        self._bus.emit(
            PetEvent(
                event_type=EventTypes.PET_TICKED,
                data={"pet_id": pet_id, "tick_count": snapshot.tick_count},
                source=SOURCE,
            )
        )
        logger.debug("Tick #%d for pet=%s", snapshot.tick_count, pet_id)
        return snapshot

    def set_pass_through(self, pet_id: str, enabled: bool) -> PetSnapshot:
        snapshot = self._transition(
            pet_id, lambda orm: set_pass_through(orm.snapshot, enabled)
        )
        self._emit_flags(pet_id, snapshot)
        return snapshot

    def toggle_pass_through(self, pet_id: str) -> PetSnapshot:
        snapshot = self._transition(
            pet_id,
            lambda orm: set_pass_through(
                orm.snapshot, not finalize(orm.snapshot).pass_through
            ),
        )
        self._emit_flags(pet_id, snapshot)
        return snapshot

    def set_direction(self, pet_id: str, direction: Direction | str) -> PetSnapshot:
        snapshot = self._transition(
            pet_id, lambda orm: set_direction(orm.snapshot, direction)
        )
        self._emit_flags(pet_id, snapshot)
        return snapshot

    def _transition(
        self,
        pet_id: str,
        apply: Callable[[PetModel], FinalizedState],
    ) -> PetSnapshot:
        """공통 전이 처리: load → apply → save → 상태 변화 이벤트.

        이벤트 발행은 Lock 밖에서 한다 (핸들러가 서비스를 재호출할 수 있음).
        """
        with self._lock:
            self._bus.reset_chain()
            orm, created = self._load_or_create(pet_id)
            before = finalize(orm.snapshot)
            after = apply(orm)
            orm.snapshot = after.to_dict()
            self._db.commit()
            snapshot = self._to_snapshot(orm, after)

        if created:
            self._emit_created(pet_id)
        if before.status is not after.status:
            self._bus.emit(
                PetEvent(
                    event_type=EventTypes.PET_STATUS_CHANGED,
                    data={
                        "pet_id": pet_id,
                        "from_status": before.status.value,
                        "to_status": after.status.value,
                    },
                    source=SOURCE,
                )
            )
        if after.leveled_up:
            logger.info("Pet %s leveled up to Lv.%d", pet_id, after.level)
            self._bus.emit(
                PetEvent(
                    event_type=EventTypes.PET_LEVELED_UP,
                    data={"pet_id": pet_id, "level": after.level},
                    source=SOURCE,
                )
            )
        return snapshot

    def _emit_flags(self, pet_id: str, snapshot: PetSnapshot) -> None:
        self._bus.emit(
            PetEvent(
                event_type=EventTypes.PET_FLAGS_CHANGED,
                data={
                    "pet_id": pet_id,
                    "pass_through": snapshot.state.pass_through,
                    "direction": snapshot.state.direction.value,
                },
                source=SOURCE,
            )
        )

    def _emit_created(self, pet_id: str) -> None:
        self._bus.emit(
            PetEvent(
                event_type=EventTypes.PET_CREATED,
                data={"pet_id": pet_id},
                source=SOURCE,
            )
        )

    # === ORM ↔ Core 변환 ===

    def _load_or_create(self, pet_id: str) -> tuple[PetModel, bool]:
        """Returns: (ORM, 새로 생성했는지 여부)"""
        orm = self._db.get(PetModel, pet_id)
        if orm is not None:
            return orm, False

        orm = PetModel(
            pet_id=pet_id,
            snapshot=finalize(DEFAULT_STATE).to_dict(),
            last_action=INITIAL_ACTION_LABEL,
            tick_count=0,
        )
        self._db.add(orm)
        self._db.commit()
        logger.info("Pet created: %s", pet_id)
        return orm, True

    def _to_snapshot(self, orm: PetModel, state: FinalizedState) -> PetSnapshot:
        return PetSnapshot(
            pet_id=orm.pet_id,
            state=state,
            last_action=orm.last_action or INITIAL_ACTION_LABEL,
            activity=describe_activity(state.status),
            tick_count=orm.tick_count or 0,
        )
