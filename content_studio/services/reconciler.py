"""Keeps a ContentCache coherent with contentGenerated events."""
from typing import Callable, Optional

from content_studio.logging_config import get_logger
from content_studio.schemas.events import CONTENT_GENERATED, ContentGeneratedEvent
from content_studio.services.cache import ContentCache
from content_studio.services.event_bus import EventBus

logger = get_logger(__name__)


class CacheReconciler:
    """Invalidates the idea/angle/brand keys touched by each generated content."""

    def __init__(self, cache: ContentCache, bus: EventBus) -> None:
        self._cache = cache
        self._unsubscribe: Optional[Callable[[], None]] = bus.subscribe(CONTENT_GENERATED, self.on_content_generated)

    def on_content_generated(self, event: ContentGeneratedEvent) -> None:
        affected = self._cache.invalidate_idea_content(event.idea_id, event.angle_id, event.brand_id)
        logger.info(
            "cache.reconciled",
            idea_id=str(event.idea_id),
            brand_id=str(event.brand_id),
            keys=sorted(affected),
        )

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
