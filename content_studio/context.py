"""
Composition root: one explicitly built set of collaborators per process
(or per test). Nothing here is a module-level singleton.
"""
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from content_studio.config import Settings
from content_studio.db import build_engine, build_session_factory, create_all
from content_studio.logging_config import get_logger
from content_studio.services.brand_service import BrandService
from content_studio.services.cache import ContentCache
from content_studio.services.content_queries import ContentQueries
from content_studio.services.content_service import ContentService
from content_studio.services.event_bus import EventBus
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.idea_service import IdeaService
from content_studio.services.mock_workflow import MockWorkflow
from content_studio.services.notifications import ToastCenter
from content_studio.services.reconciler import CacheReconciler
from content_studio.services.record_store import RecordStore
from content_studio.services.strategy_service import StrategyService

logger = get_logger(__name__)


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    store: RecordStore
    cache: ContentCache
    bus: EventBus
    gateway: GenerationGateway
    mock_workflow: MockWorkflow
    queries: ContentQueries
    strategy: StrategyService
    brands: BrandService
    ideas: IdeaService
    content: ContentService
    toasts: ToastCenter
    reconciler: CacheReconciler
    owns_engine: bool = field(default=True)

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        engine: Optional[AsyncEngine] = None,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        gateway: Optional[GenerationGateway] = None,
        mock_workflow: Optional[MockWorkflow] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "AppContext":
        from content_studio.routers.mock_n8n import build_mock_app

        owns_engine = engine is None
        if engine is None:
            engine = build_engine(settings.database_url)
        store = RecordStore(session_factory or build_session_factory(engine))
        cache = ContentCache(clock=clock) if clock is not None else ContentCache()
        bus = EventBus()
        mock_workflow = mock_workflow or MockWorkflow(settings.mock_delay_scale)
        if gateway is None:
            gateway = GenerationGateway.from_settings(settings, build_mock_app(mock_workflow))
        strategy = StrategyService(store, cache, bus, gateway)
        return cls(
            settings=settings,
            engine=engine,
            store=store,
            cache=cache,
            bus=bus,
            gateway=gateway,
            mock_workflow=mock_workflow,
            queries=ContentQueries(store, cache, settings),
            strategy=strategy,
            brands=BrandService(store, cache, bus, gateway, strategy),
            ideas=IdeaService(store, cache, bus, gateway),
            content=ContentService(store, cache, bus, gateway, settings.autosave_delay_seconds),
            toasts=ToastCenter(bus),
            reconciler=CacheReconciler(cache, bus),
            owns_engine=owns_engine,
        )

    async def start(self, *, create_schema: bool = False) -> None:
        if create_schema:
            await create_all(self.engine)
        logger.info(
            "context.started",
            mock_webhook=self.gateway.is_mock,
            create_schema=create_schema,
        )

    async def aclose(self) -> None:
        await self.content.aclose()
        await self.brands.aclose()
        await self.cache.aclose()
        self.reconciler.close()
        self.toasts.close()
        if self.owns_engine:
            await self.engine.dispose()
        logger.info("context.closed")
