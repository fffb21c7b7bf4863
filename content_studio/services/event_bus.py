"""In-process publish/subscribe bus for domain events."""
from collections import defaultdict
from typing import Any, Callable, Dict, List

from content_studio.logging_config import get_logger

logger = get_logger(__name__)

Handler = Callable[[Any], None]


class _Subscription:
    __slots__ = ("event", "handler", "active")

    def __init__(self, event: str, handler: Handler) -> None:
        self.event = event
        self.handler = handler
        self.active = True


class EventBus:
    """
    Synchronous fan-out to the handlers subscribed when `publish` is called.
    No buffering or replay. A handler that raises is logged and the remaining
    handlers still run. Subscribing or unsubscribing from inside a handler is
    allowed: delivery walks a snapshot and skips subscriptions cancelled meanwhile.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[_Subscription]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """Register `handler`; the returned callable unsubscribes it (idempotent)."""
        sub = _Subscription(event, handler)
        self._subscriptions[event].append(sub)

        def unsubscribe() -> None:
            if not sub.active:
                return
            sub.active = False
            subs = self._subscriptions.get(event)
            if subs is not None and sub in subs:
                subs.remove(sub)

        return unsubscribe

    def publish(self, event: str, payload: Any = None) -> int:
        """Deliver `payload` to current subscribers; returns how many handlers succeeded."""
        delivered = 0
        for sub in list(self._subscriptions.get(event, ())):
            if not sub.active:
                continue
            try:
                sub.handler(payload)
                delivered += 1
            except Exception:
                logger.exception(
                    "event_bus.handler_failed",
                    event_name=event,
                    handler=getattr(sub.handler, "__qualname__", repr(sub.handler)),
                )
        logger.debug("event_bus.published", event_name=event, delivered=delivered)
        return delivered
