"""
Cached read paths. Every view is loaded through the record store with the
caller's ownership filter and stored under its semantic cache key together
with the keys of everything it embeds.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Set, Tuple
from uuid import UUID

from content_studio.config import Settings
from content_studio.errors import NotFoundError
from content_studio.logging_config import get_logger
from content_studio.schemas.brand import BrandOut
from content_studio.schemas.common import Platform
from content_studio.schemas.content import (
    AngleSummaryOut,
    BrandWithContent,
    ContentAngleOut,
    ContentAngleWithIdeas,
    ContentIdeaWithGenerated,
    GeneratedContentResponse,
    IdeaCounts,
)
from content_studio.schemas.hierarchy import BrandTree, DashboardResponse
from content_studio.services import hierarchy
from content_studio.services.cache import (
    ContentCache,
    angles_key,
    brand_key,
    brands_content_key,
    brands_key,
    content_key,
    ideas_key,
)
from content_studio.services.record_store import (
    ANGLE_TREE_SHAPE,
    BRAND_TREE_SHAPE,
    IDEA_SHAPE,
    Collection,
    RecordStore,
)
from content_studio.utils.text import clean_and_truncate_description, format_objective_text

logger = get_logger(__name__)

SUMMARY_LENGTH = 150


@dataclass(frozen=True)
class _Owned:
    """Cached value tagged with the user it was loaded for."""

    owner_id: UUID
    value: Any


def _tree_keys(tree: BrandTree) -> Set[str]:
    brand_id = tree.brand.id
    keys = {brand_key(brand_id), angles_key(brand_id)}
    for group in tree.platforms:
        for node in group.angles:
            keys.add(ideas_key(node.angle.id))
            keys.update(content_key(i.idea.id) for i in node.ideas)
    return keys


def _angle_keys(angle: ContentAngleWithIdeas) -> Set[str]:
    return {content_key(i.id) for i in angle.content_ideas}


class ContentQueries:
    def __init__(self, store: RecordStore, cache: ContentCache, settings: Settings) -> None:
        self.store = store
        self.cache = cache
        self.settings = settings

    async def _fetch(
        self,
        key: str,
        owner_id: UUID,
        loader: Callable[[], Awaitable[Any]],
        *,
        ttl: float,
        depends_on: Optional[Callable[[Any], Iterable[str]]] = None,
        entity: str,
        entity_id: UUID,
        redirect_to: str = "/dashboard",
    ) -> Any:
        async def load() -> _Owned:
            return _Owned(owner_id, await loader())

        owned = await self.cache.fetch(
            key,
            load,
            ttl=ttl,
            depends_on=(lambda o: depends_on(o.value)) if depends_on else (),
        )
        if owned.owner_id != owner_id:
            raise NotFoundError(entity, entity_id, redirect_to=redirect_to)
        return owned.value

    # --- brands ---

    async def list_brands(self, user_id: UUID) -> List[BrandOut]:
        async def load() -> List[BrandOut]:
            rows = await self.store.select(Collection.BRANDS, owner_id=user_id)
            return [BrandOut.model_validate(r) for r in hierarchy.newest_first(rows)]

        return await self._fetch(
            brands_key(user_id),
            user_id,
            load,
            ttl=self.settings.brands_ttl_seconds,
            depends_on=lambda brands: [brand_key(b.id) for b in brands],
            entity="User",
            entity_id=user_id,
        )

    async def get_brand(self, user_id: UUID, brand_id: UUID) -> BrandOut:
        async def load() -> BrandOut:
            row = await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id)
            return BrandOut.model_validate(row)

        return await self._fetch(
            brand_key(brand_id),
            user_id,
            load,
            ttl=self.settings.brand_ttl_seconds,
            entity="Brand",
            entity_id=brand_id,
        )

    async def brand_tree(self, user_id: UUID, brand_id: UUID) -> BrandTree:
        async def load() -> BrandTree:
            row = await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id, shape=BRAND_TREE_SHAPE)
            return hierarchy.assemble_brand(BrandWithContent.model_validate(row))

        return await self._fetch(
            brands_content_key(brand_id),
            user_id,
            load,
            ttl=self.settings.brand_tree_ttl_seconds,
            depends_on=_tree_keys,
            entity="Brand",
            entity_id=brand_id,
        )

    async def _load_user_trees(self, user_id: UUID) -> List[BrandTree]:
        rows = await self.store.select(Collection.BRANDS, owner_id=user_id, shape=BRAND_TREE_SHAPE)
        return hierarchy.assemble([BrandWithContent.model_validate(r) for r in rows])

    def _user_tree_keys(self, user_id: UUID, trees: List[BrandTree]) -> Set[str]:
        keys = {brands_key(user_id)}
        for tree in trees:
            keys.add(brands_content_key(tree.brand.id))
            keys |= _tree_keys(tree)
        return keys

    async def brand_trees(self, user_id: UUID) -> List[BrandTree]:
        """Every brand tree of the user; kept warm by a background refresh."""
        key = brands_content_key(user_id)

        async def load() -> _Owned:
            return _Owned(user_id, await self._load_user_trees(user_id))

        def depends_on(owned: _Owned) -> Set[str]:
            return self._user_tree_keys(user_id, owned.value)

        ttl = self.settings.brand_tree_ttl_seconds
        owned = await self.cache.fetch(key, load, ttl=ttl, depends_on=depends_on)
        self.cache.schedule_refresh(
            key,
            load,
            ttl=ttl,
            interval=self.settings.brand_tree_refresh_seconds,
            depends_on=depends_on,
        )
        return owned.value

    async def dashboard(self, user_id: UUID) -> DashboardResponse:
        trees = await self.brand_trees(user_id)
        return DashboardResponse(brands=trees, totals=hierarchy.summarize(trees))

    # --- angles ---

    async def list_angles(self, user_id: UUID, brand_id: UUID, platform: Optional[Platform] = None) -> List[ContentAngleOut]:
        async def load() -> List[ContentAngleOut]:
            await self.store.get(Collection.BRANDS, brand_id, owner_id=user_id)
            filters = {"brand_id": brand_id}
            if platform is not None:
                filters["platform"] = Platform(platform).value
            rows = await self.store.select(Collection.CONTENT_ANGLES, owner_id=user_id, filters=filters)
            return [ContentAngleOut.model_validate(r) for r in hierarchy.newest_first(rows)]

        return await self._fetch(
            angles_key(brand_id, platform),
            user_id,
            load,
            ttl=self.settings.angles_ttl_seconds,
            entity="Brand",
            entity_id=brand_id,
        )

    async def angle_with_ideas(self, user_id: UUID, angle_id: UUID) -> ContentAngleWithIdeas:
        """Angle plus its ideas and their generated content, cached as the angle's idea list."""

        async def load() -> ContentAngleWithIdeas:
            row = await self.store.get(Collection.CONTENT_ANGLES, angle_id, owner_id=user_id, shape=ANGLE_TREE_SHAPE)
            return ContentAngleWithIdeas.model_validate(row)

        return await self._fetch(
            ideas_key(angle_id),
            user_id,
            load,
            ttl=self.settings.ideas_ttl_seconds,
            depends_on=_angle_keys,
            entity="Angle",
            entity_id=angle_id,
        )

    async def angle_summaries(
        self,
        user_id: UUID,
        brand_id: UUID,
        platform: Optional[Platform] = None,
    ) -> List[AngleSummaryOut]:
        """Strategy page rows: angle, plain-text preview and idea counts."""
        angles = await self.list_angles(user_id, brand_id, platform)
        detailed = await asyncio.gather(*(self.angle_with_ideas(user_id, a.id) for a in angles))
        out = []
        for angle, full in zip(angles, detailed):
            preview = clean_and_truncate_description(angle.description, SUMMARY_LENGTH)
            counts = hierarchy.angle_counts(full)
            out.append(
                AngleSummaryOut(
                    **angle.model_dump(),
                    summary=preview.truncated,
                    summary_truncated=preview.is_truncated,
                    objective_short=format_objective_text(angle.objective),
                    idea_count=counts.idea_count,
                    generated_count=counts.generated_count,
                    pending_count=counts.pending_count,
                )
            )
        return out

    # --- ideas / content ---

    async def list_ideas(self, user_id: UUID, angle_id: UUID) -> Tuple[List[ContentIdeaWithGenerated], IdeaCounts]:
        """(ideas newest first, counts) for one angle; ideas on another platform are left out."""
        angle = await self.angle_with_ideas(user_id, angle_id)
        counts = hierarchy.angle_counts(angle)
        ideas = hierarchy.newest_first(hierarchy.matching_ideas(angle))
        return ideas, IdeaCounts(
            total=counts.idea_count,
            generated=counts.generated_count,
            pending=counts.pending_count,
        )

    async def idea_content(self, user_id: UUID, idea_id: UUID) -> GeneratedContentResponse:
        async def load() -> GeneratedContentResponse:
            row = await self.store.get(Collection.CONTENT_IDEAS, idea_id, owner_id=user_id, shape=IDEA_SHAPE)
            idea = ContentIdeaWithGenerated.model_validate(row)
            latest = hierarchy.latest_content(idea)
            return GeneratedContentResponse(idea_id=idea_id, has_content=latest is not None, content=latest)

        return await self._fetch(
            content_key(idea_id),
            user_id,
            load,
            ttl=self.settings.content_ttl_seconds,
            entity="Idea",
            entity_id=idea_id,
        )
