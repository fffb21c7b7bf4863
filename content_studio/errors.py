"""Error taxonomy shared by the store, the generation gateway and the routers."""
from typing import Any, Dict, Optional


class StudioError(Exception):
    """Base class; `code` is the stable machine-readable error code."""

    code = "error"

    def __init__(self, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra or {}


class InvalidPayloadError(StudioError):
    """Malformed or missing request fields."""

    code = "invalid_payload"


class ServiceUnavailableError(StudioError):
    """Record store or generation backend unreachable."""

    code = "service_unavailable"


class NotFoundError(StudioError):
    """Referenced brand/angle/idea/content does not exist (or is not owned by the caller)."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: Any, *, redirect_to: str = "/dashboard") -> None:
        super().__init__(
            f"{entity} not found",
            extra={"entity": entity, "id": str(entity_id), "redirect_to": redirect_to},
        )
        self.entity = entity
        self.entity_id = entity_id
        self.redirect_to = redirect_to


class ConfirmationRequiredError(StudioError):
    """Destructive call issued without the exact confirmation token."""

    code = "confirmation_required"


class StoreValidationError(InvalidPayloadError):
    """Store rejected a write (constraint violation)."""

    code = "store_validation"


class StoreConnectionError(ServiceUnavailableError):
    """Store unreachable or failed mid-operation."""

    code = "store_unavailable"


class GenerationError(StudioError):
    """Generation webhook failed; never retried automatically."""

    code = "generation_failed"


class GenerationConnectionError(GenerationError, ServiceUnavailableError):
    """Network failure or timeout talking to the webhook."""

    code = "generation_unreachable"


class GenerationStatusError(GenerationError):
    """Webhook answered with a non-2xx status."""

    code = "generation_status"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"Generation webhook returned status {status_code}",
            extra={"status": status_code, "body": body[:300]},
        )
        self.status_code = status_code
        self.body = body


class GenerationParseError(GenerationError):
    """Webhook body was empty or not JSON."""

    code = "generation_parse"


class UnrecognizedShapeError(GenerationError):
    """Webhook JSON matched none of the known response shapes."""

    code = "generation_unrecognized_shape"


class NothingGeneratedError(GenerationError):
    """Response decoded fine but carried zero items."""

    code = "generation_empty"
