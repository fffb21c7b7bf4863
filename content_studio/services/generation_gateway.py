"""
Generation gateway: POST {identifier, data} to the n8n workflow webhook and
normalize the answer. No persistence, no retries; every failure is a typed
GenerationError for the caller to surface.
Without N8N_WEBHOOK_URL the in-process mock webhook answers (ASGI transport).
"""
import json
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ValidationError

from content_studio.config import Settings
from content_studio.errors import (
    GenerationConnectionError,
    GenerationParseError,
    GenerationStatusError,
    InvalidPayloadError,
)
from content_studio.logging_config import get_logger
from content_studio.schemas.generation import (
    REQUEST_MODELS,
    AnglesResult,
    AutofillData,
    AutofillResult,
    ContentResult,
    GenerateAnglesData,
    GenerateContentData,
    GenerateIdeasData,
    GenerationIdentifier,
    IdeasResult,
)
from content_studio.services import response_shapes

logger = get_logger(__name__)

MOCK_WEBHOOK_URL = "http://mock-n8n/api/mock-n8n"


class GenerationGateway:
    """Client for the generation webhook; one instance per process."""

    def __init__(
        self,
        url: str,
        *,
        auth_header: Optional[str] = None,
        timeout_seconds: float = 90.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        fallback: Optional["GenerationGateway"] = None,
    ) -> None:
        self.url = url
        self.auth_header = auth_header
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._fallback = fallback

    @classmethod
    def for_mock(cls, mock_app: Any, timeout_seconds: float = 90.0) -> "GenerationGateway":
        """Gateway answering from the mock webhook app in-process."""
        return cls(
            MOCK_WEBHOOK_URL,
            timeout_seconds=timeout_seconds,
            transport=httpx.ASGITransport(app=mock_app),
        )

    @classmethod
    def from_settings(cls, settings: Settings, mock_app: Any) -> "GenerationGateway":
        mock = cls.for_mock(mock_app, settings.n8n_webhook_timeout_seconds)
        url = (settings.n8n_webhook_url or "").strip()
        if not url:
            logger.info("generation.using_mock_webhook")
            return mock
        return cls(
            url,
            auth_header=settings.n8n_webhook_auth_header,
            timeout_seconds=settings.n8n_webhook_timeout_seconds,
            fallback=mock if settings.fallback_to_mock else None,
        )

    @property
    def is_mock(self) -> bool:
        return self.url == MOCK_WEBHOOK_URL

    async def forward(self, body: Dict[str, Any]) -> Any:
        """POST a raw envelope and return the parsed JSON body."""
        headers = {"Content-Type": "application/json"}
        if self.auth_header:
            headers["Authorization"] = self.auth_header
        identifier = body.get("identifier") if isinstance(body, dict) else None
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                resp = await client.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("generation.connection_failed", identifier=identifier, error=str(e))
            raise GenerationConnectionError(f"Failed to connect to generation service: {e}") from e

        if not resp.is_success:
            logger.warning(
                "generation.bad_status",
                identifier=identifier,
                status=resp.status_code,
                body=resp.text[:500],
            )
            if self._fallback is not None:
                logger.info("generation.fallback_to_mock", identifier=identifier)
                return await self._fallback.forward(body)
            raise GenerationStatusError(resp.status_code, resp.text)

        text = resp.text
        if not text.strip():
            raise GenerationParseError("Empty response from generation webhook")
        try:
            data = json.loads(text)
        except ValueError as e:
            logger.warning("generation.invalid_json", identifier=identifier, body=text[:200])
            raise GenerationParseError(
                f"Invalid JSON response from generation webhook: {e}",
                extra={"raw": text[:200]},
            ) from e
        logger.info("generation.response", identifier=identifier, status=resp.status_code)
        return data

    async def _call(self, identifier: GenerationIdentifier, data: BaseModel) -> Any:
        return await self.forward({"identifier": identifier.value, "data": data.to_wire()})

    async def autofill(self, data: AutofillData) -> AutofillResult:
        raw = await self._call(GenerationIdentifier.AUTOFILL, data)
        return response_shapes.decode_autofill(raw)

    async def generate_angles(self, data: GenerateAnglesData) -> AnglesResult:
        raw = await self._call(GenerationIdentifier.GENERATE_ANGLES, data)
        return response_shapes.decode_angles(raw)

    async def generate_ideas(self, data: GenerateIdeasData) -> IdeasResult:
        raw = await self._call(GenerationIdentifier.GENERATE_IDEAS, data)
        return response_shapes.decode_ideas(raw)

    async def generate_content(self, data: GenerateContentData) -> ContentResult:
        raw = await self._call(GenerationIdentifier.GENERATE_CONTENT, data)
        return response_shapes.decode_content(raw)

    async def generate(self, identifier: str, payload: Dict[str, Any]) -> BaseModel:
        """Validate an untyped payload for `identifier`, call the webhook and return the canonical result."""
        try:
            ident = GenerationIdentifier(identifier)
        except ValueError as e:
            raise InvalidPayloadError(f"Unknown identifier: {identifier}") from e
        try:
            data = REQUEST_MODELS[ident].model_validate(payload)
        except ValidationError as e:
            raise InvalidPayloadError(
                f"Invalid payload for {ident.value}",
                extra={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
        handlers = {
            GenerationIdentifier.AUTOFILL: self.autofill,
            GenerationIdentifier.GENERATE_ANGLES: self.generate_angles,
            GenerationIdentifier.GENERATE_IDEAS: self.generate_ideas,
            GenerationIdentifier.GENERATE_CONTENT: self.generate_content,
        }
        return await handlers[ident](data)
