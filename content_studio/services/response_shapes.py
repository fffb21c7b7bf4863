"""
Normalize generation webhook responses into canonical results.

The webhook returns array-bearing results in three observed shapes:
  (a) bare array of items:            [{...item}, ...]
  (b) array holding one wrapper:      [{"ideas": [{...item}, ...]}]
  (c) wrapper object:                 {"ideas": [{...item}, ...]}
Each shape is an explicit variant (predicate + extractor). Anything else is an
UnrecognizedShapeError, never an empty result.
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from content_studio.errors import UnrecognizedShapeError
from content_studio.schemas.generation import (
    AngleDraft,
    AnglesResult,
    AutofillResult,
    ContentResult,
    IdeaDraft,
    IdeasResult,
)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ShapeVariant:
    name: str
    matches: Callable[[Any], bool]
    extract: Callable[[Any], List[Any]]


def _first_dict(payload: Any) -> Any:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        return payload[0]
    return None


def item_list_variants(wrapper_key: str, item_field: str) -> Tuple[ShapeVariant, ...]:
    """Variants for a list of items under `wrapper_key`; bare items are recognized by `item_field`."""

    def array_wrapped(payload: Any) -> bool:
        first = _first_dict(payload)
        return first is not None and isinstance(first.get(wrapper_key), list)

    def bare_array(payload: Any) -> bool:
        first = _first_dict(payload)
        return first is not None and item_field in first

    def object_wrapped(payload: Any) -> bool:
        return isinstance(payload, dict) and isinstance(payload.get(wrapper_key), list)

    return (
        ShapeVariant("array_wrapped", array_wrapped, lambda p: p[0][wrapper_key]),
        ShapeVariant("bare_array", bare_array, lambda p: list(p)),
        ShapeVariant("object_wrapped", object_wrapped, lambda p: p[wrapper_key]),
    )


ANGLE_VARIANTS = item_list_variants("angles", "header")
IDEA_VARIANTS = item_list_variants("ideas", "topic")


def decode_items(payload: Any, variants: Sequence[ShapeVariant], item_model: Type[M]) -> Tuple[str, List[M]]:
    """Return (variant name, validated items). Raises UnrecognizedShapeError."""
    for variant in variants:
        if not variant.matches(payload):
            continue
        raw_items = variant.extract(payload)
        try:
            items = TypeAdapter(List[item_model]).validate_python(raw_items)
        except ValidationError as e:
            raise UnrecognizedShapeError(
                f"Items in '{variant.name}' response failed validation",
                extra={"variant": variant.name, "errors": e.error_count()},
            ) from e
        return variant.name, items
    raise UnrecognizedShapeError(
        "Response matched no known shape",
        extra={"received": type(payload).__name__, "expected": [v.name for v in variants]},
    )


def decode_angles(payload: Any) -> AnglesResult:
    _, angles = decode_items(payload, ANGLE_VARIANTS, AngleDraft)
    return AnglesResult(angles=angles)


def decode_ideas(payload: Any) -> IdeasResult:
    _, ideas = decode_items(payload, IDEA_VARIANTS, IdeaDraft)
    return IdeasResult(ideas=ideas)


def _single_object(payload: Any, required_field: str) -> dict:
    """Object-valued results arrive either bare or as the first element of an array."""
    if isinstance(payload, dict) and required_field in payload:
        return payload
    first = _first_dict(payload)
    if first is not None and required_field in first:
        return first
    raise UnrecognizedShapeError(
        f"Response has no '{required_field}' object",
        extra={"received": type(payload).__name__},
    )


def decode_autofill(payload: Any) -> AutofillResult:
    obj = _single_object(payload, "targetAudience")
    try:
        return AutofillResult.model_validate(obj)
    except ValidationError as e:
        raise UnrecognizedShapeError("Autofill response failed validation") from e


def unescape_content(text: str) -> str:
    """Strip one layer of JSON-style escaping: surrounding quotes, \\" and \\n."""
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    return text.replace('\\"', '"').replace("\\n", "\n")


def decode_content(payload: Any) -> ContentResult:
    obj = _single_object(payload, "content")
    content = obj.get("content")
    if not isinstance(content, str):
        raise UnrecognizedShapeError("Content field is not a string")
    content = unescape_content(content)
    if not content.strip():
        raise UnrecognizedShapeError("Response carried empty content")
    image_url = obj.get("imageUrl") or ""
    if not isinstance(image_url, str):
        raise UnrecognizedShapeError("imageUrl field is not a string")
    return ContentResult(content=content, image_url=image_url)
