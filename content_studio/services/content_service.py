"""
Generated content: generate → persist → announce, plus manual save and
debounced draft autosave.

Ordering: the upsert completes before contentGenerated is published. A failed
generation or write publishes an error toast only; caches are left untouched.
"""
from typing import Any, Tuple
from uuid import UUID

from content_studio.errors import StudioError
from content_studio.logging_config import get_logger
from content_studio.schemas.content import DraftAcceptedResponse, GeneratedContentOut
from content_studio.schemas.events import CONTENT_GENERATED, ContentGeneratedEvent
from content_studio.schemas.generation import GenerateContentData
from content_studio.services.autosave import Debouncer
from content_studio.services.briefs import angle_brief, brand_brief, build_payload, idea_brief
from content_studio.services.cache import ContentCache
from content_studio.services.event_bus import EventBus
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.notifications import publish_failure, publish_toast
from content_studio.services.record_store import Collection, RecordStore

logger = get_logger(__name__)


class ContentService:
    def __init__(
        self,
        store: RecordStore,
        cache: ContentCache,
        bus: EventBus,
        gateway: GenerationGateway,
        autosave_delay: float = 2.0,
    ) -> None:
        self.store = store
        self.cache = cache
        self.bus = bus
        self.gateway = gateway
        self.autosave = Debouncer(autosave_delay, self._commit_draft)

    async def generate_content(self, user_id: UUID, idea_id: UUID) -> GeneratedContentOut:
        try:
            out, angle_id = await self._generate_and_store(user_id, idea_id)
        except StudioError as e:
            logger.warning("generation.failed", identifier="generateContent", idea_id=str(idea_id), error=e.message)
            publish_failure(self.bus, user_id, "Content generation", e)
            raise
        self.bus.publish(
            CONTENT_GENERATED,
            ContentGeneratedEvent(idea_id=idea_id, brand_id=out.brand_id, angle_id=angle_id, content=out),
        )
        publish_toast(self.bus, user_id, "Content generated successfully!")
        return out

    async def _generate_and_store(self, user_id: UUID, idea_id: UUID) -> Tuple[GeneratedContentOut, UUID]:
        idea = await self.store.get(Collection.CONTENT_IDEAS, idea_id, owner_id=user_id)
        angle = await self.store.get(Collection.CONTENT_ANGLES, idea.angle_id, owner_id=user_id)
        brand = await self.store.get(Collection.BRANDS, angle.brand_id, owner_id=user_id)
        data = build_payload(
            GenerateContentData,
            idea_id=idea.id,
            platform=angle.platform,
            content_idea=idea_brief(idea),
            brand_data=brand_brief(brand),
            selected_angle=angle_brief(angle),
        )
        result = await self.gateway.generate_content(data)
        row = await self.store.upsert(
            Collection.GENERATED_CONTENT,
            {
                "idea_id": idea.id,
                "brand_id": brand.id,
                "platform": angle.platform,
                "content": result.content,
                "image_url": result.image_url or None,
            },
            "idea_id",
            owner_id=user_id,
        )
        logger.info("content.generated", idea_id=str(idea_id), content_id=str(row.id))
        return GeneratedContentOut.model_validate(row), angle.id

    async def save_content(self, user_id: UUID, content_id: UUID, text: str, *, notify: bool = True) -> GeneratedContentOut:
        """Persist an edited text and refresh every view embedding it."""
        try:
            row = await self.store.update(Collection.GENERATED_CONTENT, content_id, {"content": text}, owner_id=user_id)
            idea = await self.store.get(Collection.CONTENT_IDEAS, row.idea_id, owner_id=user_id)
        except StudioError as e:
            if notify:
                publish_failure(self.bus, user_id, "Saving content", e)
            raise
        self.cache.invalidate_idea_content(row.idea_id, idea.angle_id, row.brand_id)
        if notify:
            publish_toast(self.bus, user_id, "Content saved")
        return GeneratedContentOut.model_validate(row)

    async def save_draft(self, user_id: UUID, content_id: UUID, text: str) -> DraftAcceptedResponse:
        """Accept a draft edit; it is committed once edits pause for the autosave window."""
        await self.store.get(Collection.GENERATED_CONTENT, content_id, owner_id=user_id)
        self.autosave.schedule((user_id, content_id), text)
        return DraftAcceptedResponse(content_id=content_id, commit_in_seconds=self.autosave.delay)

    async def _commit_draft(self, key: Tuple[UUID, UUID], text: Any) -> None:
        user_id, content_id = key
        await self.save_content(user_id, content_id, text, notify=False)

    async def aclose(self) -> None:
        await self.autosave.aclose()
