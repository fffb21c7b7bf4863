"""Test helpers: settings, a scripted webhook and row seeding through the record store."""
import json
import uuid
from typing import Any, Dict, List, Optional

import httpx

from content_studio.config import Settings
from content_studio.context import AppContext
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.record_store import Collection

TEST_SETTINGS: Dict[str, Any] = {
    "APP_ENV": "test",
    "DATABASE_URL": "sqlite+aiosqlite://",
    "MOCK_N8N_DELAY_SCALE": 0,
    "BRAND_TREE_REFRESH_SECONDS": 0,
    "AUTOSAVE_DELAY_SECONDS": 0.05,
}

FAKE_WEBHOOK_URL = "http://n8n.test/webhook/content"


def make_settings(**overrides: Any) -> Settings:
    values = dict(TEST_SETTINGS)
    values.update(overrides)
    return Settings(**values)


def fake_gateway(answers: Dict[str, Any], calls: Optional[List[dict]] = None) -> GenerationGateway:
    """
    Gateway whose webhook answers from `answers[identifier]`: a JSON value, an
    httpx.Response, or a callable taking the request envelope and returning either.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if calls is not None:
            calls.append(body)
        answer = answers[body["identifier"]]
        if callable(answer):
            answer = answer(body)
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)

    return GenerationGateway(FAKE_WEBHOOK_URL, transport=httpx.MockTransport(handler))


def user_headers(user_id: uuid.UUID) -> Dict[str, str]:
    return {"X-User-ID": str(user_id)}


async def seed_brand(ctx: AppContext, user_id: uuid.UUID, name: str = "Acme", **fields: Any):
    row = {"name": name, "website": "https://acme.example", **fields}
    (brand,) = await ctx.store.insert(Collection.BRANDS, [row], owner_id=user_id)
    return brand


async def seed_angle(
    ctx: AppContext,
    user_id: uuid.UUID,
    brand_id: uuid.UUID,
    platform: str = "twitter",
    header: str = "Angle",
):
    (angle,) = await ctx.store.insert(
        Collection.CONTENT_ANGLES,
        [{"brand_id": brand_id, "platform": platform, "header": header, "description": "Desc"}],
        owner_id=user_id,
    )
    return angle


async def seed_ideas(ctx: AppContext, user_id: uuid.UUID, angle, count: int, platform: Optional[str] = None):
    rows = [
        {"angle_id": angle.id, "platform": platform or angle.platform, "topic": f"Topic {i}"}
        for i in range(count)
    ]
    return await ctx.store.insert(Collection.CONTENT_IDEAS, rows, owner_id=user_id)


async def seed_content(ctx: AppContext, user_id: uuid.UUID, idea, brand_id: uuid.UUID, text: str = "Post"):
    return await ctx.store.upsert(
        Collection.GENERATED_CONTENT,
        {"idea_id": idea.id, "brand_id": brand_id, "platform": idea.platform, "content": text},
        "idea_id",
        owner_id=user_id,
    )
