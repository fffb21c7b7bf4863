"""Content angles: per-platform generation, confirmed cascade delete."""
from typing import List, Sequence
from uuid import UUID

from content_studio.errors import (
    ConfirmationRequiredError,
    GenerationError,
    NothingGeneratedError,
    StudioError,
)
from content_studio.logging_config import get_logger
from content_studio.schemas.brand import DeletePreview, DeleteResult
from content_studio.schemas.common import PLATFORMS, Platform
from content_studio.schemas.content import ContentAngleOut, GenerateAnglesResponse
from content_studio.schemas.generation import GenerateAnglesData
from content_studio.services.briefs import build_payload
from content_studio.services.cache import ContentCache, content_key
from content_studio.services.event_bus import EventBus
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.notifications import publish_failure, publish_toast
from content_studio.services.record_store import Collection, RecordStore

logger = get_logger(__name__)


def ordered_platforms(platforms: Sequence[Platform]) -> List[Platform]:
    """Deduplicated, in display order."""
    wanted = {Platform(p) for p in platforms}
    return [p for p in PLATFORMS if p in wanted]


class StrategyService:
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

    async def generate_angles(
        self,
        user_id: UUID,
        brand_id: UUID,
        platforms: Sequence[Platform],
    ) -> GenerateAnglesResponse:
        """
        One webhook round trip per platform. A platform whose round trip fails
        is skipped; the call fails only when no platform produced angles.
        All produced angles are inserted as one batch.
        """
        try:
            return await self._generate_angles(user_id, brand_id, platforms)
        except StudioError as e:
            publish_failure(self.bus, user_id, "Angle generation", e)
            raise

    async def _generate_angles(
        self,
        user_id: UUID,
        brand_id: UUID,
        platforms: Sequence[Platform],
    ) -> GenerateAnglesResponse:
        brand = await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id)
        rows = []
        failed: List[Platform] = []
        errors: List[GenerationError] = []
        for platform in ordered_platforms(platforms):
            data = build_payload(
                GenerateAnglesData,
                brand_id=brand.id,
                name=brand.name,
                website=brand.website,
                additional_info=brand.additional_info,
                target_audience=brand.target_audience,
                brand_tone=brand.brand_tone,
                key_offer=brand.key_offer,
                image_guidelines=brand.image_guidelines,
                platforms=[platform],
            )
            try:
                result = await self.gateway.generate_angles(data)
            except GenerationError as e:
                logger.warning(
                    "generation.failed",
                    identifier="generateAngles",
                    brand_id=str(brand_id),
                    platform=platform.value,
                    error=e.message,
                )
                failed.append(platform)
                errors.append(e)
                continue
            rows.extend(
                {
                    "brand_id": brand.id,
                    "platform": platform.value,
                    "header": draft.header,
                    "description": draft.description,
                    "tonality": draft.tonality,
                    "objective": draft.objective,
                }
                for draft in result.angles
            )

        if not rows:
            if errors:
                raise errors[0]
            raise NothingGeneratedError("No angles were generated")

        inserted = await self.store.insert(Collection.CONTENT_ANGLES, rows, owner_id=user_id)
        self.cache.invalidate_all_brand_content(brand_id)
        logger.info(
            "angles.generated",
            brand_id=str(brand_id),
            created=len(inserted),
            failed_platforms=[p.value for p in failed],
        )
        publish_toast(self.bus, user_id, f"Generated {len(inserted)} content angles")
        return GenerateAnglesResponse(
            brand_id=brand_id,
            created=len(inserted),
            angles=[ContentAngleOut.model_validate(a) for a in inserted],
            failed_platforms=failed,
        )

    async def delete_preview(self, user_id: UUID, angle_id: UUID) -> DeletePreview:
        angle = await self.store.get(Collection.CONTENT_ANGLES, angle_id, owner_id=user_id)
        idea_ids = await self._idea_ids(user_id, angle_id)
        generated = 0
        if idea_ids:
            generated = await self.store.count(
                Collection.GENERATED_CONTENT, owner_id=user_id, filters={"idea_id": idea_ids}
            )
        return DeletePreview(
            entity="angle",
            id=angle.id,
            name=angle.header,
            confirm_with=angle.header,
            cascade=(
                f'Deleting angle "{angle.header}" also deletes its {len(idea_ids)} ideas '
                f"and {generated} generated posts."
            ),
            angles=1,
            ideas=len(idea_ids),
            generated=generated,
        )

    async def _idea_ids(self, user_id: UUID, angle_id: UUID) -> List[UUID]:
        ideas = await self.store.select(Collection.CONTENT_IDEAS, owner_id=user_id, filters={"angle_id": angle_id})
        return [i.id for i in ideas]

    async def delete_angle(self, user_id: UUID, angle_id: UUID, confirm: str) -> DeleteResult:
        """Delete generated content, ideas, then the angle; requires the exact angle header."""
        angle = await self.store.get(Collection.CONTENT_ANGLES, angle_id, owner_id=user_id)
        if confirm != angle.header:
            raise ConfirmationRequiredError(
                "Type the exact angle title to confirm deletion",
                extra={"confirm_with": angle.header},
            )
        idea_ids = await self._idea_ids(user_id, angle_id)
        generated, ideas, angles = await self.store.delete_in_order(
            [
                (Collection.GENERATED_CONTENT, {"idea.angle_id": angle_id}),
                (Collection.CONTENT_IDEAS, {"angle_id": angle_id}),
                (Collection.CONTENT_ANGLES, {"id": angle_id}),
            ],
            owner_id=user_id,
        )
        self.cache.invalidate_angle_content(angle_id, angle.brand_id)
        self.cache.invalidate_many(content_key(i) for i in idea_ids)
        logger.info("angle.deleted", angle_id=str(angle_id), ideas=ideas, generated=generated)
        publish_toast(self.bus, user_id, f'Deleted angle "{angle.header}"')
        return DeleteResult(entity="angle", id=angle_id, angles=angles, ideas=ideas, generated=generated)
