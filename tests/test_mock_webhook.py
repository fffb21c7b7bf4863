"""
Mock n8n webhook (POST /api/mock-n8n): validation errors and answer shapes.
Runs with MOCK_N8N_DELAY_SCALE=0.
"""
import uuid

import pytest

from content_studio.schemas.generation import GenerationIdentifier
from content_studio.services.mock_workflow import DELAYS, MockWorkflow, MockWorkflowError, domain_of

ANGLE = {"header": "Behind the Scenes", "description": "D", "tonality": "Candid", "objective": "O"}
BRAND = {"name": "Acme", "website": "https://acme.example"}


async def _post(client, body):
    return await client.post("/api/mock-n8n", json=body)


@pytest.mark.asyncio
async def test_unknown_identifier_is_400(client) -> None:
    resp = await _post(client, {"identifier": "summarize", "data": {}})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Unknown identifier: summarize"}


@pytest.mark.asyncio
async def test_body_must_be_json(client) -> None:
    resp = await client.post("/api/mock-n8n", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "identifier, data",
    [
        ("generateIdeas", {"platform": "twitter"}),
        ("generateAngles", {"brandId": "b1", **BRAND}),
        ("generateAngles", {"brandId": "b1", **BRAND, "platforms": []}),
        ("generateIdeas", {"angleId": "a1", "platform": "twitter", "selectedAngle": ANGLE}),
        ("generateContent", {"ideaId": "i1", "platform": "twitter", "contentIdea": {"topic": "t"}, "brandData": BRAND}),
        ("generateContent", {"ideaId": "i1", "platform": "twitter", "contentIdea": {"topic": "t"}, "selectedAngle": ANGLE}),
    ],
)
async def test_missing_required_fields_is_400(client, identifier, data) -> None:
    resp = await _post(client, {"identifier": identifier, "data": data})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Missing required fields")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "identifier, data",
    [
        ("generateAngles", {"brandId": "b1", **BRAND, "platforms": "twitter"}),
        ("generateIdeas", {"angleId": "a1", "platform": "twitter", "selectedAngle": "Founder story", "brandData": BRAND}),
        ("generateIdeas", {"angleId": "a1", "platform": "twitter", "selectedAngle": ANGLE, "brandData": ["Acme"]}),
        ("generateContent", {"ideaId": "i1", "platform": "twitter", "contentIdea": "t", "brandData": BRAND, "selectedAngle": ANGLE}),
    ],
)
async def test_mistyped_fields_are_400(client, identifier, data) -> None:
    resp = await _post(client, {"identifier": identifier, "data": data})
    assert resp.status_code == 400
    assert "must be" in resp.json()["error"]


@pytest.mark.asyncio
async def test_invalid_platform_is_400(client) -> None:
    body = {
        "identifier": "generateContent",
        "data": {
            "ideaId": str(uuid.uuid4()),
            "platform": "tiktok",
            "contentIdea": {"topic": "t"},
            "brandData": BRAND,
            "selectedAngle": ANGLE,
        },
    }
    resp = await _post(client, body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid platform. Must be twitter, linkedin, or newsletter"}

    body = {
        "identifier": "generateAngles",
        "data": {"brandId": str(uuid.uuid4()), **BRAND, "platforms": ["twitter", "myspace"]},
    }
    assert (await _post(client, body)).status_code == 400


@pytest.mark.asyncio
async def test_angles_answer_as_bare_array(client) -> None:
    body = {
        "identifier": "generateAngles",
        "data": {"brandId": str(uuid.uuid4()), **BRAND, "brandTone": "Bold, friendly", "platforms": ["linkedin"]},
    }
    resp = await _post(client, body)
    assert resp.status_code == 200
    angles = resp.json()
    assert isinstance(angles, list) and len(angles) == 6
    assert all({"header", "description", "tonality", "objective"} <= set(a) for a in angles)
    assert all(a["tonality"].endswith("with bold approach") for a in angles)


@pytest.mark.asyncio
async def test_ideas_answer_wrapped(client) -> None:
    body = {
        "identifier": "generateIdeas",
        "data": {
            "angleId": str(uuid.uuid4()),
            "platform": "newsletter",
            "selectedAngle": ANGLE,
            "brandData": {**BRAND, "imageGuidelines": "blue palette"},
        },
    }
    resp = await _post(client, body)
    assert resp.status_code == 200
    ideas = resp.json()["ideas"]
    assert len(ideas) == 10
    assert all("Behind the Scenes" in i["description"] for i in ideas)
    assert all(i["imagePrompt"].endswith("following brand guidelines: blue palette") for i in ideas)


@pytest.mark.asyncio
async def test_content_answer_is_object(client) -> None:
    body = {
        "identifier": "generateContent",
        "data": {
            "ideaId": str(uuid.uuid4()),
            "platform": "linkedin",
            "contentIdea": {"topic": "t", "imagePrompt": "team photo"},
            "brandData": BRAND,
            "selectedAngle": ANGLE,
        },
    }
    resp = await _post(client, body)
    assert resp.status_code == 200
    answer = resp.json()
    assert "[Brand Name]" not in answer["content"]
    assert "Acme" in answer["content"]
    assert answer["content"].endswith("[Tone: Candid]")
    assert answer["imageUrl"].startswith("https://")


@pytest.mark.asyncio
async def test_autofill_uses_domain_templates(client) -> None:
    tesla = await _post(client, {"identifier": "autofill", "data": {"name": "Tesla", "website": "www.tesla.com"}})
    other = await _post(
        client,
        {"identifier": "autofill", "data": {"name": "Acme", "website": "acme.example", "additionalInfo": "B2B SaaS"}},
    )
    assert tesla.status_code == other.status_code == 200
    assert tesla.json()["targetAudience"] != other.json()["targetAudience"]
    assert other.json()["targetAudience"].endswith("with specific focus on b2b saas")


def test_domain_of() -> None:
    assert domain_of("https://www.Nike.com/path") == "nike.com"
    assert domain_of("airbnb.com") == "airbnb.com"


@pytest.mark.asyncio
async def test_simulated_latency_scales(monkeypatch) -> None:
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr("content_studio.services.mock_workflow.asyncio.sleep", fake_sleep)
    workflow = MockWorkflow(delay_scale=0.5)
    await workflow.handle({"identifier": "autofill", "data": BRAND})
    assert slept == [DELAYS[GenerationIdentifier.AUTOFILL] * 0.5]

    with pytest.raises(MockWorkflowError):
        await workflow.handle({"identifier": "autofill", "data": {}})
