import asyncio
import logging
from typing import Set

from src.app.services.notifier import INotifier

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Fire-and-forget delivery of notifications.

    Each dispatch runs as its own task so the request path never waits on
    it. Outstanding tasks are tracked so shutdown can drain them within a
    bounded window.
    """

    def __init__(self, notifier: INotifier):
        self.notifier = notifier
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def dispatch(self, destination: str, message: str) -> asyncio.Task:
        task = asyncio.create_task(self._deliver(destination, message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _deliver(self, destination: str, message: str) -> None:
        try:
            await self.notifier.send(destination, message)
        except Exception:
            # Failures never reach the request that triggered the notification
            logger.exception("Failed to send notification")

    async def drain(self, timeout: float) -> int:
        """
        Wait up to ``timeout`` seconds for outstanding notifications.

        Returns the number of tasks that had to be cancelled.
        """
        if not self._tasks:
            return 0

        logger.info(f"Waiting for {len(self._tasks)} notification(s) to finish")
        _, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning(f"Cancelled {len(pending)} notification(s) at shutdown")
            await asyncio.gather(*pending, return_exceptions=True)
        return len(pending)
