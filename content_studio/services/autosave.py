"""Debounce-then-commit for content drafts."""
import asyncio
from typing import Any, Awaitable, Callable, Dict, Hashable

from content_studio.logging_config import get_logger

logger = get_logger(__name__)

Commit = Callable[[Hashable, Any], Awaitable[Any]]


class Debouncer:
    """
    Per-key quiet window: every schedule() restarts the wait with the newest
    value, and only the last value is committed once `delay` passes with no
    further edits. Pending commits are cancelled by aclose().
    """

    def __init__(self, delay: float, commit: Commit) -> None:
        self.delay = delay
        self._commit = commit
        self._pending: Dict[Hashable, asyncio.Task] = {}

    def schedule(self, key: Hashable, value: Any) -> None:
        previous = self._pending.pop(key, None)
        if previous is not None:
            previous.cancel()
        self._pending[key] = asyncio.ensure_future(self._run(key, value))

    async def _run(self, key: Hashable, value: Any) -> None:
        await asyncio.sleep(self.delay)
        # Past the window: a newer schedule() must start a fresh task, not cancel this commit.
        if self._pending.get(key) is asyncio.current_task():
            del self._pending[key]
        try:
            await self._commit(key, value)
            logger.info("autosave.committed", key=str(key))
        except Exception as e:
            logger.warning("autosave.commit_failed", key=str(key), error=str(e))

    async def flush(self, key: Hashable) -> None:
        """Wait for the pending commit of `key`, if any."""
        task = self._pending.get(key)
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def aclose(self) -> None:
        tasks = list(self._pending.values())
        self._pending.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("autosave.closed", cancelled=len(tasks))
