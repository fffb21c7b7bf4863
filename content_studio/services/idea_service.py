"""Content ideas: generated in batches per angle."""
from uuid import UUID

from content_studio.errors import NothingGeneratedError, StudioError
from content_studio.logging_config import get_logger
from content_studio.schemas.content import ContentIdeaOut, GenerateIdeasResponse
from content_studio.schemas.generation import GenerateIdeasData
from content_studio.services.briefs import angle_brief, brand_brief, build_payload
from content_studio.services.cache import ContentCache
from content_studio.services.event_bus import EventBus
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.notifications import publish_failure, publish_toast
from content_studio.services.record_store import Collection, RecordStore

logger = get_logger(__name__)


class IdeaService:
    def __init__(
        self,
        store: RecordStore,
        cache: ContentCache,
        bus: EventBus,
        gateway: GenerationGateway,
    ) -> None:
        self.store = store
        self.cache = cache
        self.bus = bus
        self.gateway = gateway

    async def generate_ideas(self, user_id: UUID, angle_id: UUID) -> GenerateIdeasResponse:
        try:
            return await self._generate_ideas(user_id, angle_id)
        except StudioError as e:
            publish_failure(self.bus, user_id, "Idea generation", e)
            raise

    async def _generate_ideas(self, user_id: UUID, angle_id: UUID) -> GenerateIdeasResponse:
        angle = await self.store.get(Collection.CONTENT_ANGLES, angle_id, owner_id=user_id)
        brand = await self.store.get(Collection.BRANDS, angle.brand_id, owner_id=user_id)
        data = build_payload(
            GenerateIdeasData,
            angle_id=angle.id,
            platform=angle.platform,
            selected_angle=angle_brief(angle),
            brand_data=brand_brief(brand),
        )
        result = await self.gateway.generate_ideas(data)
        if not result.ideas:
            # Recognized shape with zero items, as opposed to UnrecognizedShapeError.
            raise NothingGeneratedError("No ideas were generated")

        # Ideas always carry their angle's platform.
        rows = [
            {
                "angle_id": angle.id,
                "platform": angle.platform,
                "topic": draft.topic,
                "description": draft.description,
                "image_prompt": draft.image_prompt,
            }
            for draft in result.ideas
        ]
        inserted = await self.store.insert(Collection.CONTENT_IDEAS, rows, owner_id=user_id)
        self.cache.invalidate_angle_content(angle.id, angle.brand_id)
        logger.info("ideas.generated", angle_id=str(angle_id), created=len(inserted))
        publish_toast(self.bus, user_id, f"Generated {len(inserted)} content ideas")
        return GenerateIdeasResponse(
            angle_id=angle_id,
            created=len(inserted),
            ideas=[ContentIdeaOut.model_validate(i) for i in inserted],
        )
