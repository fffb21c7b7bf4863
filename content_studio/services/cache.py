"""
Read-through cache for assembled content views.

Entries are keyed by semantic strings (see the *_key helpers) and carry a
freshness window plus the keys whose data they embed. Invalidating a key drops
it and every entry that declared it as a dependency. Concurrent fetches for the
same key share one load; a load that overlaps an invalidation of its key (or of
anything it embeds) still answers its callers but is not stored.
"""
import asyncio
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Iterable, Optional, Set, Union
from uuid import UUID

from content_studio.logging_config import get_logger
from content_studio.schemas.common import PLATFORMS, Platform

logger = get_logger(__name__)

Loader = Callable[[], Awaitable[Any]]
DependsOn = Union[Iterable[str], Callable[[Any], Iterable[str]]]


def brands_key(user_id: UUID) -> str:
    return f"brands-{user_id}"


def brand_key(brand_id: UUID) -> str:
    return f"brand-{brand_id}"


def brands_content_key(scope_id: UUID) -> str:
    """Brand tree key; scope is a user id (all brands) or a single brand id."""
    return f"brands-content-{scope_id}"


def angles_key(brand_id: UUID, platform: Optional[Union[Platform, str]] = None) -> str:
    if platform is None:
        return f"content-angles-{brand_id}"
    return f"content-angles-{brand_id}-{Platform(platform).value}"


def ideas_key(angle_id: UUID) -> str:
    return f"content-ideas-{angle_id}"


def content_key(idea_id: UUID) -> str:
    return f"generated-content-{idea_id}"


@dataclass
class _Entry:
    value: Any
    expires_at: float
    depends_on: FrozenSet[str]


# Background refresh stops after this many intervals without a read of its key.
REFRESH_IDLE_INTERVALS = 3


class ContentCache:
    """Process-wide cache instance; built once by the application context."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._inflight: Dict[str, asyncio.Task] = {}
        # dependency key -> stored keys embedding it
        self._dependents: Dict[str, Set[str]] = defaultdict(set)
        self._seq = 0
        # Invalidation stamps are kept only while some load that started earlier is running.
        self._invalidated_at: Dict[str, int] = {}
        # started_at -> number of loads still running
        self._running: Dict[int, int] = defaultdict(int)
        self._refreshers: Dict[str, asyncio.Task] = {}
        self._last_read: Dict[str, float] = {}

    async def fetch(
        self,
        key: str,
        loader: Loader,
        *,
        ttl: float,
        depends_on: DependsOn = (),
    ) -> Any:
        if key in self._refreshers:
            self._last_read[key] = self._clock()
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at > self._clock():
            logger.debug("cache.hit", key=key)
            return entry.value
        task = self._inflight.get(key)
        if task is None:
            logger.debug("cache.miss", key=key)
            task = self._start_load(key, loader, ttl, depends_on)
        # Shielded so one caller going away does not cancel the shared load.
        return await asyncio.shield(task)

    async def refresh(self, key: str, loader: Loader, *, ttl: float, depends_on: DependsOn = ()) -> Any:
        """Load now regardless of freshness; the current value stays served until replaced."""
        task = self._inflight.get(key) or self._start_load(key, loader, ttl, depends_on)
        return await asyncio.shield(task)

    def _start_load(self, key: str, loader: Loader, ttl: float, depends_on: DependsOn) -> asyncio.Task:
        started_at = self._seq
        self._running[started_at] += 1
        task = asyncio.ensure_future(self._load(key, loader, ttl, depends_on, started_at))
        self._inflight[key] = task
        return task

    async def _load(self, key: str, loader: Loader, ttl: float, depends_on: DependsOn, started_at: int) -> Any:
        try:
            value = await loader()
            deps = frozenset(depends_on(value) if callable(depends_on) else depends_on)
            stale = [k for k in (key, *deps) if self._invalidated_at.get(k, -1) >= started_at]
            if stale:
                logger.info("cache.load_discarded", key=key, invalidated=stale)
                return value
            self._store(key, value, ttl, deps)
            return value
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]
            self._finish_load(started_at)

    def _finish_load(self, started_at: int) -> None:
        self._running[started_at] -= 1
        if self._running[started_at] <= 0:
            del self._running[started_at]
        if not self._running:
            self._invalidated_at.clear()
            return
        oldest = min(self._running)
        for k in [k for k, seq in self._invalidated_at.items() if seq < oldest]:
            del self._invalidated_at[k]

    def _store(self, key: str, value: Any, ttl: float, deps: FrozenSet[str]) -> None:
        self._drop(key)
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + ttl, depends_on=deps)
        for dep in deps:
            self._dependents[dep].add(key)

    def _drop(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for dep in entry.depends_on:
            holders = self._dependents.get(dep)
            if holders is not None:
                holders.discard(key)
                if not holders:
                    del self._dependents[dep]
        return True

    def _closure(self, key: str) -> Set[str]:
        seen = {key}
        pending = [key]
        while pending:
            for holder in self._dependents.get(pending.pop(), ()):
                if holder not in seen:
                    seen.add(holder)
                    pending.append(holder)
        return seen

    def invalidate(self, key: str) -> Set[str]:
        """Drop `key` and every entry embedding it; returns the keys affected."""
        self._seq += 1
        affected = self._closure(key)
        dropped = []
        for k in affected:
            if self._running:
                self._invalidated_at[k] = self._seq
            # Callers already awaiting an in-flight load still get its value.
            self._inflight.pop(k, None)
            if self._drop(k):
                dropped.append(k)
        self._seq += 1
        logger.debug("cache.invalidate", key=key, dropped=sorted(dropped))
        return affected

    def invalidate_many(self, keys: Iterable[str]) -> Set[str]:
        affected: Set[str] = set()
        for key in keys:
            affected |= self.invalidate(key)
        return affected

    def invalidate_idea_content(self, idea_id: UUID, angle_id: UUID, brand_id: UUID) -> Set[str]:
        """
        After content for one idea changed: its content, its angle's idea list
        and its brand's tree. The returned set also holds every cached entry
        embedding those keys; in practice that is the per-user brand tree
        (brands-content-<userId>) behind the dashboard, when one is cached.
        """
        return self.invalidate_many(
            [content_key(idea_id), ideas_key(angle_id), brands_content_key(brand_id)]
        )

    def invalidate_angle_content(self, angle_id: UUID, brand_id: UUID) -> Set[str]:
        keys = [ideas_key(angle_id), brands_content_key(brand_id), angles_key(brand_id)]
        keys.extend(angles_key(brand_id, p) for p in PLATFORMS)
        return self.invalidate_many(keys)

    def invalidate_all_brand_content(self, brand_id: UUID) -> Set[str]:
        keys = [brands_content_key(brand_id), angles_key(brand_id), brand_key(brand_id)]
        keys.extend(angles_key(brand_id, p) for p in PLATFORMS)
        return self.invalidate_many(keys)

    def invalidate_user(self, user_id: UUID) -> Set[str]:
        return self.invalidate_many([brands_key(user_id), brands_content_key(user_id)])

    def schedule_refresh(
        self,
        key: str,
        loader: Loader,
        *,
        ttl: float,
        interval: float,
        depends_on: DependsOn = (),
    ) -> bool:
        """
        Start a background loop reloading `key` every `interval` seconds (once per key).
        The loop ends once the key has gone unread for REFRESH_IDLE_INTERVALS intervals.
        """
        if interval <= 0 or key in self._refreshers:
            return False
        self._last_read[key] = self._clock()
        self._refreshers[key] = asyncio.ensure_future(self._refresh_loop(key, loader, ttl, interval, depends_on))
        logger.info("cache.refresh_scheduled", key=key, interval=interval)
        return True

    def refreshing(self, key: str) -> bool:
        return key in self._refreshers

    async def _refresh_loop(self, key: str, loader: Loader, ttl: float, interval: float, depends_on: DependsOn) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                idle = self._clock() - self._last_read.get(key, 0.0)
                if idle >= interval * REFRESH_IDLE_INTERVALS:
                    logger.info("cache.refresh_stopped", key=key, idle_seconds=round(idle, 3))
                    return
                try:
                    await self.refresh(key, loader, ttl=ttl, depends_on=depends_on)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    logger.warning("cache.refresh_failed", key=key, error=str(e))
        finally:
            if self._refreshers.get(key) is asyncio.current_task():
                del self._refreshers[key]
                self._last_read.pop(key, None)

    async def aclose(self) -> None:
        tasks = list(self._refreshers.values()) + list(self._inflight.values())
        self._refreshers.clear()
        self._last_read.clear()
        self._inflight.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._running.clear()
        self._invalidated_at.clear()
