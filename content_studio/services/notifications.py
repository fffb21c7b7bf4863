"""Toast notifications: published on the bus, buffered per user for the front end to poll."""
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, List, Optional
from uuid import UUID

from content_studio.logging_config import get_logger
from content_studio.schemas.events import SHOW_TOAST, ToastEvent, ToastType
from content_studio.services.event_bus import EventBus

logger = get_logger(__name__)

MAX_TOASTS = 50


def publish_toast(
    bus: EventBus,
    user_id: Optional[UUID],
    message: str,
    toast_type: ToastType = ToastType.SUCCESS,
) -> None:
    bus.publish(SHOW_TOAST, ToastEvent(message=message, type=toast_type, user_id=user_id))


def publish_failure(bus: EventBus, user_id: Optional[UUID], action: str, error: Exception) -> None:
    """Error toast for a failed user action; the error itself still propagates."""
    detail = getattr(error, "message", None) or str(error)
    publish_toast(bus, user_id, f"{action} failed: {detail}", ToastType.ERROR)


class ToastCenter:
    """Keeps the most recent toasts of each user until drained."""

    def __init__(self, bus: EventBus, maxlen: int = MAX_TOASTS) -> None:
        self._maxlen = maxlen
        self._toasts: Dict[Optional[UUID], Deque[ToastEvent]] = defaultdict(lambda: deque(maxlen=self._maxlen))
        self._unsubscribe: Optional[Callable[[], None]] = bus.subscribe(SHOW_TOAST, self._on_toast)

    def _on_toast(self, toast: ToastEvent) -> None:
        self._toasts[toast.user_id].append(toast)
        if toast.type is ToastType.ERROR:
            logger.info("toast.error", message=toast.message)

    def recent(self, user_id: Optional[UUID]) -> List[ToastEvent]:
        return list(self._toasts.get(user_id, ()))

    def drain(self, user_id: Optional[UUID]) -> List[ToastEvent]:
        toasts = self._toasts.pop(user_id, None)
        return list(toasts) if toasts else []

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
