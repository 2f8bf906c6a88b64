"""EventBus: 서비스 간 동기식 이벤트 전달

규칙:
- 서비스는 다른 서비스를 직접 호출하지 않고 이벤트로 통신한다
- 이벤트 데이터는 pet_id 등 식별자와 스칼라 값만 담는다
- 한 번의 상태 전이(chain) 안에서 전파 깊이는 MAX_DEPTH로 제한
- 같은 chain에서 동일 source:event_type 중복 발행은 무시
- chain은 스레드별로 추적한다 (tick 워커와 API 스레드가 서로의 chain을 건드리지 않음)
"""

import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable

from src.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5


@dataclass
class PetEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: EventTypes 상수
        data: 식별자 위주의 페이로드
        source: 발행한 서비스 이름
    """

    event_type: str
    data: dict[str, Any]
    source: str

    depth: int = field(default=0, repr=False)


EventHandler = Callable[[PetEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe(EventTypes.PET_LEVELED_UP, chat_service.on_leveled_up)
        bus.emit(PetEvent(EventTypes.PET_LEVELED_UP, {"pet_id": "default"}, "pet_service"))
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        # API 스레드풀과 tick 워커가 같은 버스를 공유한다
        self._lock = threading.RLock()
        # chain(깊이, 중복 추적)은 스레드별로 유지
        self._local = threading.local()

    def _chain_state(self) -> threading.local:
        state = self._local
        if not hasattr(state, "chain"):
            state.chain = set()
            state.depth = 0
        return state

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)
        logger.debug("Subscribed %s -> %s", event_type, handler.__qualname__)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug("Unsubscribed %s -> %s", event_type, handler.__qualname__)
        else:
            logger.warning("Handler not registered: %s -> %s", event_type, handler.__qualname__)

    def emit(self, event: PetEvent) -> None:
        """등록된 핸들러를 순서대로 호출.

        핸들러 예외는 로그만 남기고 다음 핸들러로 진행한다.
        """
        with self._lock:
            self._emit(event)

    def _emit(self, event: PetEvent) -> None:
        state = self._chain_state()
        if state.depth >= MAX_DEPTH:
            logger.warning(
                "Event depth limit (%d) reached, dropped %s:%s",
                MAX_DEPTH,
                event.source,
                event.event_type,
            )
            return

        chain_key = f"{event.source}:{event.event_type}"
        if chain_key in state.chain:
            logger.warning("Duplicate event in chain dropped: %s", chain_key)
            return
        state.chain.add(chain_key)
        event.depth = state.depth

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            return

        logger.debug(
            "Emit %s (source=%s, depth=%d, handlers=%d)",
            event.event_type,
            event.source,
            state.depth,
            len(handlers),
        )
        state.depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Event handler failed: %s (event=%s)",
                        handler.__qualname__,
                        event.event_type,
                    )
        finally:
            state.depth -= 1

    def reset_chain(self) -> None:
        """상태 전이 1회를 시작할 때 호출. 호출한 스레드의 중복 추적만 초기화."""
        state = self._chain_state()
        state.chain.clear()
        state.depth = 0

    def clear(self) -> None:
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())
