"""주기적 tick 스케줄러

Core는 타이머를 갖지 않으므로 호출자가 시간을 흘려 보낸다.
각 tick은 워커 스레드에서 PetService.tick을 호출하므로
API 요청과 같은 Lock으로 직렬화된다.
"""

import asyncio
import logging
from typing import Optional

from src.services.pet_service import PetService

logger = logging.getLogger(__name__)


class TickScheduler:
    """asyncio 태스크 기반 고정 간격 tick"""

    def __init__(
        self,
        pet_service: PetService,
        pet_id: str,
        interval_seconds: float,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive: {interval_seconds}")
        self._service = pet_service
        self._pet_id = pet_id
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """실행 중인 이벤트 루프 안에서 호출."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"tick:{self._pet_id}")
        logger.info(
            "Tick scheduler started: pet=%s, interval=%.1fs",
            self._pet_id,
            self._interval,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Tick scheduler stopped: pet=%s", self._pet_id)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.tick_once()

    async def tick_once(self) -> None:
        """tick 1회. 실패해도 루프는 계속된다."""
        try:
            await asyncio.to_thread(self._service.tick, self._pet_id)
        except Exception:
            logger.exception("Scheduled tick failed for pet=%s", self._pet_id)
