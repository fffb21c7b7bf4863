"""
GenerationGateway against a scripted webhook (httpx.MockTransport):
envelope, auth header, failure variants, fallback to the mock, payload validation.
"""
import json
import random
import uuid

import httpx
import pytest

from content_studio.errors import (
    GenerationConnectionError,
    GenerationParseError,
    GenerationStatusError,
    InvalidPayloadError,
    ServiceUnavailableError,
    UnrecognizedShapeError,
)
from content_studio.routers.mock_n8n import build_mock_app
from content_studio.schemas.generation import AngleBrief, BrandBrief, GenerateIdeasData, IdeasResult
from content_studio.services.generation_gateway import GenerationGateway
from content_studio.services.mock_workflow import MockWorkflow
from helpers import FAKE_WEBHOOK_URL, make_settings

IDEA = {"topic": "a", "description": "b", "imagePrompt": "c"}


def _ideas_data() -> GenerateIdeasData:
    return GenerateIdeasData(
        angle_id=uuid.uuid4(),
        platform="twitter",
        selected_angle=AngleBrief(header="Customer Success Stories", tonality="Warm"),
        brand_data=BrandBrief(name="Acme", website="https://acme.example"),
    )


def _gateway(handler, **kwargs) -> GenerationGateway:
    return GenerationGateway(FAKE_WEBHOOK_URL, transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_sends_envelope_with_camel_case_and_auth() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"ideas": [IDEA]}])

    gateway = _gateway(handler, auth_header="Bearer secret")
    result = await gateway.generate_ideas(_ideas_data())

    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["identifier"] == "generateIdeas"
    data = seen["body"]["data"]
    assert set(data) == {"angleId", "platform", "selectedAngle", "brandData"}
    assert data["selectedAngle"]["header"] == "Customer Success Stories"
    assert data["brandData"]["name"] == "Acme"
    assert result == IdeasResult.model_validate({"ideas": [IDEA]})


@pytest.mark.asyncio
async def test_non_2xx_is_status_error() -> None:
    gateway = _gateway(lambda request: httpx.Response(502, text="workflow crashed"))
    with pytest.raises(GenerationStatusError) as exc:
        await gateway.generate_ideas(_ideas_data())
    assert exc.value.status_code == 502
    assert exc.value.extra["body"] == "workflow crashed"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "   ", "<html>oops</html>"])
async def test_empty_or_non_json_body_is_parse_error(body) -> None:
    gateway = _gateway(lambda request: httpx.Response(200, text=body))
    with pytest.raises(GenerationParseError):
        await gateway.generate_ideas(_ideas_data())


@pytest.mark.asyncio
async def test_network_failure_is_connection_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gateway = _gateway(handler)
    with pytest.raises(GenerationConnectionError) as exc:
        await gateway.generate_ideas(_ideas_data())
    assert isinstance(exc.value, ServiceUnavailableError)


@pytest.mark.asyncio
async def test_unknown_shape_is_not_an_empty_result() -> None:
    gateway = _gateway(lambda request: httpx.Response(200, json={"foo": 123}))
    with pytest.raises(UnrecognizedShapeError):
        await gateway.generate_ideas(_ideas_data())


@pytest.mark.asyncio
async def test_non_2xx_falls_back_to_mock_when_enabled() -> None:
    mock = GenerationGateway.for_mock(build_mock_app(MockWorkflow(0, random.Random(1))))
    gateway = _gateway(lambda request: httpx.Response(503, text="down"), fallback=mock)
    result = await gateway.generate_ideas(_ideas_data())
    assert len(result.ideas) == 10


@pytest.mark.asyncio
async def test_generate_validates_before_sending() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"ideas": [IDEA]})

    gateway = _gateway(handler)
    with pytest.raises(InvalidPayloadError):
        await gateway.generate("summarize", {})
    with pytest.raises(InvalidPayloadError):
        await gateway.generate(
            "generateIdeas",
            {
                "angleId": str(uuid.uuid4()),
                "platform": "tiktok",
                "selectedAngle": {"header": "H"},
                "brandData": {"name": "Acme", "website": "acme.example"},
            },
        )
    with pytest.raises(InvalidPayloadError):
        await gateway.generate("generateAngles", {"name": "Acme", "website": "acme.example", "platforms": ["twitter"]})
    assert calls == []

    result = await gateway.generate(
        "generateIdeas",
        {
            "angleId": str(uuid.uuid4()),
            "platform": "linkedin",
            "selectedAngle": {"header": "H"},
            "brandData": {"name": "Acme", "website": "acme.example"},
        },
    )
    assert result.ideas[0].image_prompt == "c"
    assert len(calls) == 1


def test_from_settings_picks_mock_or_real_webhook() -> None:
    mock_app = build_mock_app(MockWorkflow(0))
    assert GenerationGateway.from_settings(make_settings(), mock_app).is_mock

    real = GenerationGateway.from_settings(
        make_settings(N8N_WEBHOOK_URL="https://n8n.example/webhook/x", N8N_WEBHOOK_AUTH_HEADER="Bearer t"),
        mock_app,
    )
    assert not real.is_mock
    assert real.url == "https://n8n.example/webhook/x"
    assert real.auth_header == "Bearer t"
