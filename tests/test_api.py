"""
HTTP surface via ASGITransport: auth header, the full brand → content flow on
the mock webhook, error bodies, confirmed deletes, the n8n proxy and health.
"""
import uuid

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from content_studio.context import AppContext
from content_studio.main import create_app
from helpers import fake_gateway, make_settings, seed_angle, seed_brand, seed_ideas, user_headers


@pytest.mark.asyncio
async def test_missing_or_invalid_user_header_is_401(client) -> None:
    resp = await client.get("/api/brands")
    assert resp.status_code == 401
    resp = await client.get("/api/brands", headers={"X-User-ID": "not-a-uuid"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_full_flow_on_mock_webhook(client, ctx, user_id) -> None:
    headers = user_headers(user_id)
    resp = await client.post(
        "/api/brands",
        json={"name": "Acme", "website": "https://acme.example", "generate_angles_for": ["twitter"]},
        headers=headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["angles_generation"] == "scheduled"
    assert body["platforms"] == ["twitter"]
    brand_id = body["brand"]["id"]
    await ctx.brands.wait_for_jobs()

    angles = (await client.get(f"/api/brands/{brand_id}/angles", headers=headers)).json()
    assert len(angles) == 6
    assert all(a["platform"] == "twitter" and a["idea_count"] == 0 for a in angles)
    angle_id = angles[0]["id"]

    resp = await client.post(f"/api/angles/{angle_id}/ideas/generate", headers=headers)
    assert resp.status_code == 201
    assert resp.json()["created"] == 10

    listing = (await client.get(f"/api/angles/{angle_id}/ideas", headers=headers)).json()
    assert listing["counts"] == {"total": 10, "generated": 0, "pending": 10}
    idea_id = listing["ideas"][0]["id"]

    resp = await client.post(f"/api/ideas/{idea_id}/content/generate", headers=headers)
    assert resp.status_code == 201
    assert "Acme" in resp.json()["content"]

    content = (await client.get(f"/api/ideas/{idea_id}/content", headers=headers)).json()
    assert content["has_content"] is True

    dashboard = (await client.get("/api/dashboard", headers=headers)).json()
    assert dashboard["totals"] == {"brands": 1, "angles": 6, "ideas": 10, "generated": 1, "pending": 9}

    tree = (await client.get(f"/api/brands/{brand_id}/tree", headers=headers)).json()
    assert [g["platform"] for g in tree["platforms"]] == ["twitter"]

    toasts = (await client.get("/api/toasts", headers=headers)).json()
    messages = [t["message"] for t in toasts]
    assert 'Brand "Acme" created' in messages
    assert messages[-1] == "Content generated successfully!"
    assert all("user_id" not in t for t in toasts)
    assert (await client.get("/api/toasts", headers=headers)).json() == []

    await client.post(f"/api/ideas/{idea_id}/content/generate", headers=headers)
    peeked = (await client.get("/api/toasts", params={"drain": "false"}, headers=headers)).json()
    assert [t["message"] for t in peeked] == ["Content generated successfully!"]
    assert (await client.get("/api/toasts", headers=headers)).json() == peeked


@pytest.mark.asyncio
async def test_not_found_body_carries_redirect(client, user_id) -> None:
    resp = await client.get(f"/api/brands/{uuid.uuid4()}/tree", headers=user_headers(user_id))
    assert resp.status_code == 404
    body = resp.json()
    assert body["code"] == "not_found"
    assert body["detail"] == "Brand not found"
    assert body["extra"]["redirect_to"] == "/dashboard"


@pytest.mark.asyncio
async def test_brand_of_another_user_is_404(client, ctx, user_id) -> None:
    brand = await seed_brand(ctx, user_id)
    resp = await client.get(f"/api/brands/{brand.id}", headers=user_headers(uuid.uuid4()))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_angle_requires_exact_header(client, ctx, user_id) -> None:
    headers = user_headers(user_id)
    brand = await seed_brand(ctx, user_id)
    angle = await seed_angle(ctx, user_id, brand.id, header="Founder Story")
    await seed_ideas(ctx, user_id, angle, 2)

    preview = (await client.get(f"/api/angles/{angle.id}/delete-preview", headers=headers)).json()
    assert preview["confirm_with"] == "Founder Story"
    assert preview["ideas"] == 2

    resp = await client.delete(f"/api/angles/{angle.id}", headers=headers)
    assert resp.status_code == 409
    assert resp.json()["code"] == "confirmation_required"

    resp = await client.delete(f"/api/angles/{angle.id}", params={"confirm": "Founder Story"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["ideas"] == 2
    assert (await client.get(f"/api/angles/{angle.id}/ideas", headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_patch_brand_is_reflected_in_list(client, ctx, user_id) -> None:
    headers = user_headers(user_id)
    brand = await seed_brand(ctx, user_id)
    assert (await client.get("/api/brands", headers=headers)).json()[0]["brand_tone"] is None

    resp = await client.patch(f"/api/brands/{brand.id}", json={"brand_tone": "Playful"}, headers=headers)
    assert resp.status_code == 200
    listing = (await client.get("/api/brands", headers=headers)).json()
    assert listing[0]["brand_tone"] == "Playful"


@pytest.mark.asyncio
async def test_invalid_body_is_422(client, user_id) -> None:
    resp = await client.post("/api/brands", json={"name": ""}, headers=user_headers(user_id))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_n8n_proxy_forwards_to_mock(client, user_id) -> None:
    headers = user_headers(user_id)
    resp = await client.post(
        "/api/n8n",
        json={"identifier": "autofill", "data": {"name": "Acme", "website": "acme.example"}},
        headers=headers,
    )
    assert resp.status_code == 200
    assert {"targetAudience", "brandTone", "keyOffer"} <= set(resp.json())

    resp = await client.post("/api/n8n", json={"data": {}}, headers=headers)
    assert resp.status_code == 422
    assert resp.json()["code"] == "invalid_payload"


@pytest.mark.asyncio
async def test_health_and_root(client) -> None:
    assert (await client.get("/health")).json() == {"status": "ok"}
    root = (await client.get("/")).json()
    assert root["name"] == "content_studio"
    ready = await client.get("/api/readyz")
    assert ready.status_code == 200
    assert ready.json()["generation"] == "mock"


@pytest.mark.asyncio
async def test_webhook_failure_is_502(engine, user_id) -> None:
    answers = {"generateIdeas": httpx.Response(500, text="boom")}
    ctx = AppContext.build(make_settings(), engine=engine, gateway=fake_gateway(answers))
    try:
        brand = await seed_brand(ctx, user_id)
        angle = await seed_angle(ctx, user_id, brand.id)
        transport = ASGITransport(app=create_app(ctx))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(f"/api/angles/{angle.id}/ideas/generate", headers=user_headers(user_id))
        assert resp.status_code == 502
        assert resp.json()["code"] == "generation_status"
        ideas, counts = await ctx.queries.list_ideas(user_id, angle.id)
        assert ideas == []
        assert counts.total == 0
    finally:
        await ctx.aclose()
