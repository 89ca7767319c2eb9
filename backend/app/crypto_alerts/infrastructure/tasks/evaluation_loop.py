"""Background task running the alert evaluation cycle periodically."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Optional

from app.crypto_alerts.application.exceptions import SourceUnavailableError
from app.crypto_alerts.application.use_cases.evaluate_alerts import (
    CycleResult,
    EvaluateAlertsUseCase,
)

logger = logging.getLogger(__name__)

ActivationHook = Callable[[CycleResult], Awaitable[None]]


class EvaluationLoop:
    """Runs EvaluateAlertsUseCase every ``interval`` on the event loop.

    A failing cycle is logged and the loop keeps going; only stop() ends it.
    """

    def __init__(
        self,
        use_case: EvaluateAlertsUseCase,
        interval: timedelta,
        on_activations: Optional[ActivationHook] = None,
    ) -> None:
        self._use_case = use_case
        self._interval = interval
        self._on_activations = on_activations
        self._task: Optional[asyncio.Task] = None

    @property
    def interval(self) -> timedelta:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        logger.info(f"Starting evaluation loop (every {self._interval.total_seconds():g}s)...")
        self._task = asyncio.create_task(self._run(), name="alert-evaluation")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            logger.info("Evaluation loop cancelled")
        self._task = None

    async def run_once(self) -> Optional[CycleResult]:
        """Run one cycle, logging instead of raising on failure.

        Returns:
            The cycle summary, or None if the cycle failed.
        """
        try:
            result = await self._use_case.execute()
        except SourceUnavailableError as e:
            logger.warning(f"Evaluation cycle skipped: {e.message}")
            return None
        except Exception as e:
            logger.exception(f"Evaluation cycle error: {e}")
            return None

        if result.activations and self._on_activations is not None:
            try:
                await self._on_activations(result)
            except Exception as e:
                logger.exception(f"Activation hook error: {e}")

        return result

    async def _run(self) -> None:
        seconds = self._interval.total_seconds()
        while True:
            await self.run_once()
            await asyncio.sleep(seconds)
