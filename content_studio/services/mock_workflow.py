"""
Local stand-in for the n8n generation workflow.
Same envelope and answer shapes as the real webhook, with simulated latency.
Answers: autofill and content as objects, angles as a bare array, ideas wrapped
in {"ideas": [...]}.
"""
import asyncio
import random
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from content_studio.logging_config import get_logger
from content_studio.schemas.common import Platform
from content_studio.schemas.generation import GenerationIdentifier
from content_studio.services import mock_data

logger = get_logger(__name__)

DELAYS = {
    GenerationIdentifier.AUTOFILL: 1.5,
    GenerationIdentifier.GENERATE_ANGLES: 3.0,
    GenerationIdentifier.GENERATE_IDEAS: 2.5,
    GenerationIdentifier.GENERATE_CONTENT: 4.0,
}

REQUIRED_FIELDS = {
    GenerationIdentifier.AUTOFILL: ("website", "name"),
    GenerationIdentifier.GENERATE_ANGLES: ("brandId", "name", "website", "platforms"),
    GenerationIdentifier.GENERATE_IDEAS: ("angleId", "platform", "selectedAngle", "brandData"),
    GenerationIdentifier.GENERATE_CONTENT: ("ideaId", "platform", "contentIdea", "brandData", "selectedAngle"),
}

# Fields that must be JSON objects when present.
OBJECT_FIELDS = ("selectedAngle", "brandData", "contentIdea")

ANGLES_PER_CALL = 6
IDEAS_PER_CALL = 10
_VALID_PLATFORMS = {p.value for p in Platform}


class MockWorkflowError(Exception):
    """Rejected request; rendered as {"error": message} with `status`."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def domain_of(website: str) -> str:
    parsed = urlparse(website if "://" in website else f"https://{website}")
    host = (parsed.hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def image_url_for(prompt: str) -> str:
    prompt = (prompt or "").lower()
    for keywords, url in mock_data.IMAGE_BY_KEYWORD:
        if any(k in prompt for k in keywords):
            return url
    return mock_data.DEFAULT_IMAGE_URL


def _check_required(identifier: GenerationIdentifier, data: Dict[str, Any]) -> None:
    fields = REQUIRED_FIELDS[identifier]
    if any(not data.get(f) for f in fields):
        raise MockWorkflowError(f"Missing required fields: {', '.join(fields)}")
    for name in OBJECT_FIELDS:
        if name in data and not isinstance(data[name], dict):
            raise MockWorkflowError(f"{name} must be an object")
    if "platforms" in fields and not isinstance(data["platforms"], list):
        raise MockWorkflowError("platforms must be a non-empty list")


def _check_platform(value: Any) -> None:
    if value not in _VALID_PLATFORMS:
        raise MockWorkflowError("Invalid platform. Must be twitter, linkedin, or newsletter")


class MockWorkflow:
    def __init__(self, delay_scale: float = 1.0, rng: Optional[random.Random] = None) -> None:
        self.delay_scale = delay_scale
        self._rng = rng or random.Random()

    async def handle(self, body: Any) -> Any:
        """Answer one {identifier, data} envelope; raises MockWorkflowError on bad input."""
        if not isinstance(body, dict):
            raise MockWorkflowError("Request body must be an object")
        raw_identifier = body.get("identifier")
        try:
            identifier = GenerationIdentifier(raw_identifier)
        except ValueError:
            raise MockWorkflowError(f"Unknown identifier: {raw_identifier}") from None
        data = body.get("data")
        if not isinstance(data, dict):
            data = {}

        delay = DELAYS[identifier] * self.delay_scale
        if delay > 0:
            await asyncio.sleep(delay)

        _check_required(identifier, data)
        handler = {
            GenerationIdentifier.AUTOFILL: self.autofill,
            GenerationIdentifier.GENERATE_ANGLES: self.generate_angles,
            GenerationIdentifier.GENERATE_IDEAS: self.generate_ideas,
            GenerationIdentifier.GENERATE_CONTENT: self.generate_content,
        }[identifier]
        answer = handler(data)
        logger.info("mock_n8n.answered", identifier=identifier.value)
        return answer

    def autofill(self, data: Dict[str, Any]) -> Dict[str, str]:
        templates = mock_data.AUTOFILL_BY_DOMAIN
        answer = dict(templates.get(domain_of(data["website"]), templates["default"]))
        if data.get("additionalInfo"):
            answer["targetAudience"] += f" with specific focus on {str(data['additionalInfo']).lower()}"
        return answer

    def generate_angles(self, data: Dict[str, Any]) -> List[Dict[str, str]]:
        for platform in data["platforms"]:
            _check_platform(platform)
        tone = data.get("brandTone")
        angles = []
        for template in self._rng.sample(mock_data.ANGLES, min(ANGLES_PER_CALL, len(mock_data.ANGLES))):
            angle = dict(template)
            angle["description"] = angle["description"].replace("the brand", data["name"])
            if tone:
                angle["tonality"] = f"{angle['tonality']} with {tone.split(',')[0].strip().lower()} approach"
            angles.append(angle)
        return angles

    def generate_ideas(self, data: Dict[str, Any]) -> Dict[str, List[Dict[str, str]]]:
        _check_platform(data["platform"])
        selected = data["selectedAngle"]
        brand = data["brandData"]
        pool = mock_data.IDEAS[data["platform"]]
        ideas = []
        for template in self._rng.sample(pool, min(IDEAS_PER_CALL, len(pool))):
            idea = dict(template)
            idea["topic"] = idea["topic"].replace("Brand", brand.get("name") or "Your Brand", 1)
            idea["description"] = (
                f"{idea['description']} Aligned with {selected.get('header', '')} strategy, "
                f"maintaining {selected.get('tonality', '')} tone."
            )
            if brand.get("imageGuidelines"):
                idea["imagePrompt"] = f"{idea['imagePrompt']}, following brand guidelines: {brand['imageGuidelines']}"
            ideas.append(idea)
        return {"ideas": ideas}

    def generate_content(self, data: Dict[str, Any]) -> Dict[str, str]:
        _check_platform(data["platform"])
        text = self._rng.choice(mock_data.CONTENT[data["platform"]])
        brand = data["brandData"]
        if brand.get("name"):
            text = text.replace("[Brand Name]", brand["name"])
        tonality = data["selectedAngle"].get("tonality")
        if tonality:
            text += f"\n\n[Tone: {tonality}]"
        prompt = data["contentIdea"].get("imagePrompt", "")
        return {"content": text, "imageUrl": image_url_for(prompt)}


def error_body(error: MockWorkflowError) -> Tuple[int, Dict[str, str]]:
    return error.status, {"error": error.message}
