"""Business logic services."""
from content_studio.services.cache import ContentCache
from content_studio.services.event_bus import EventBus
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.record_store import Collection, RecordStore

__all__ = [
    "Collection",
    "ContentCache",
    "EventBus",
    "GenerationGateway",
    "RecordStore",
]
