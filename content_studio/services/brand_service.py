"""Brands: create (with background angle generation), update, autofill, confirmed delete."""
import asyncio
from typing import List, Set, Tuple
from uuid import UUID

from content_studio.errors import ConfirmationRequiredError, StudioError
from content_studio.logging_config import get_logger
from content_studio.schemas.brand import (
    AutofillRequest,
    AutofillResponse,
    BrandCreate,
    BrandOut,
    BrandUpdate,
    DeletePreview,
    DeleteResult,
)
from content_studio.schemas.common import Platform
from content_studio.schemas.generation import AutofillData
from content_studio.services.briefs import build_payload
from content_studio.services.cache import ContentCache, brand_key, content_key
from content_studio.services.event_bus import EventBus
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.notifications import publish_failure, publish_toast
from content_studio.services.record_store import Collection, RecordStore
from content_studio.services.strategy_service import StrategyService, ordered_platforms

logger = get_logger(__name__)


class BrandService:
    def __init__(
        self,
        store: RecordStore,
        cache: ContentCache,
        bus: EventBus,
        gateway: GenerationGateway,
        strategy: StrategyService,
    ) -> None:
        self.store = store
        self.cache = cache
        self.bus = bus
        self.gateway = gateway
        self.strategy = strategy
        self._jobs: Set[asyncio.Task] = set()

    async def create_brand(self, user_id: UUID, payload: BrandCreate) -> Tuple[BrandOut, List[Platform]]:
        """Insert the brand and start angle generation for the requested platforms."""
        row = payload.model_dump(exclude={"generate_angles_for"})
        row["user_id"] = user_id
        (brand,) = await self.store.insert(Collection.BRANDS, [row], owner_id=user_id)
        self.cache.invalidate_user(user_id)
        logger.info("brand.created", brand_id=str(brand.id))
        publish_toast(self.bus, user_id, f'Brand "{brand.name}" created')

        platforms = ordered_platforms(payload.generate_angles_for)
        if platforms:
            self._spawn(self._generate_initial_angles(user_id, brand.id, platforms))
        return BrandOut.model_validate(brand), platforms

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._jobs.add(task)
        task.add_done_callback(self._jobs.discard)
        return task

    async def _generate_initial_angles(self, user_id: UUID, brand_id: UUID, platforms: List[Platform]) -> None:
        try:
            await self.strategy.generate_angles(user_id, brand_id, platforms)
        except StudioError as e:
            # Already reported as a toast; the brand stays and angles can be regenerated.
            logger.warning("brand.initial_angles_failed", brand_id=str(brand_id), error=e.message)

    async def wait_for_jobs(self) -> None:
        if self._jobs:
            await asyncio.gather(*list(self._jobs), return_exceptions=True)

    async def update_brand(self, user_id: UUID, brand_id: UUID, patch: BrandUpdate) -> BrandOut:
        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            row = await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id)
            return BrandOut.model_validate(row)
        row = await self.store.update(Collection.BRANDS, brand_id, changes, owner_id=user_id)
        # brand-<id> is embedded by the brand list and every tree holding the brand.
        self.cache.invalidate(brand_key(brand_id))
        logger.info("brand.updated", brand_id=str(brand_id), fields=sorted(changes))
        publish_toast(self.bus, user_id, "Brand updated")
        return BrandOut.model_validate(row)

    async def autofill(self, user_id: UUID, payload: AutofillRequest) -> AutofillResponse:
        """Ask the workflow for audience/tone/offer suggestions; nothing is stored."""
        data = build_payload(AutofillData, **payload.model_dump())
        try:
            result = await self.gateway.autofill(data)
        except StudioError as e:
            publish_failure(self.bus, user_id, "Autofill", e)
            raise
        return AutofillResponse(
            target_audience=result.target_audience,
            brand_tone=result.brand_tone,
            key_offer=result.key_offer,
        )

    async def _children(self, user_id: UUID, brand_id: UUID) -> Tuple[List[UUID], List[UUID]]:
        angles = await self.store.select(Collection.CONTENT_ANGLES, owner_id=user_id, filters={"brand_id": brand_id})
        angle_ids = [a.id for a in angles]
        idea_ids: List[UUID] = []
        if angle_ids:
            ideas = await self.store.select(Collection.CONTENT_IDEAS, owner_id=user_id, filters={"angle_id": angle_ids})
            idea_ids = [i.id for i in ideas]
        return angle_ids, idea_ids

    async def delete_preview(self, user_id: UUID, brand_id: UUID) -> DeletePreview:
        brand = await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id)
        angle_ids, idea_ids = await self._children(user_id, brand_id)
        generated = await self.store.count(Collection.GENERATED_CONTENT, owner_id=user_id, filters={"brand_id": brand_id})
        return DeletePreview(
            entity="brand",
            id=brand.id,
            name=brand.name,
            confirm_with=brand.name,
            cascade=(
                f'Deleting brand "{brand.name}" also deletes {len(angle_ids)} content angles, '
                f"{len(idea_ids)} ideas and {generated} generated posts."
            ),
            angles=len(angle_ids),
            ideas=len(idea_ids),
            generated=generated,
        )

    async def delete_brand(self, user_id: UUID, brand_id: UUID, confirm: str) -> DeleteResult:
        """Delete generated content, ideas, angles, then the brand; requires the exact brand name."""
        brand = await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id)
        if confirm != brand.name:
            raise ConfirmationRequiredError(
                "Type the exact brand name to confirm deletion",
                extra={"confirm_with": brand.name},
            )
        angle_ids, idea_ids = await self._children(user_id, brand_id)
        generated, ideas, angles, _ = await self.store.delete_in_order(
            [
                (Collection.GENERATED_CONTENT, {"brand_id": brand_id}),
                (Collection.CONTENT_IDEAS, {"angle.brand_id": brand_id}),
                (Collection.CONTENT_ANGLES, {"brand_id": brand_id}),
                (Collection.BRANDS, {"id": brand_id}),
            ],
            owner_id=user_id,
        )
        for angle_id in angle_ids:
            self.cache.invalidate_angle_content(angle_id, brand_id)
        self.cache.invalidate_many(content_key(i) for i in idea_ids)
        self.cache.invalidate_all_brand_content(brand_id)
        self.cache.invalidate_user(user_id)
        logger.info("brand.deleted", brand_id=str(brand_id), angles=angles, ideas=ideas, generated=generated)
        publish_toast(self.bus, user_id, f'Deleted brand "{brand.name}"')
        return DeleteResult(entity="brand", id=brand_id, angles=angles, ideas=ideas, generated=generated)

    async def aclose(self) -> None:
        jobs = list(self._jobs)
        for task in jobs:
            task.cancel()
        if jobs:
            await asyncio.gather(*jobs, return_exceptions=True)
