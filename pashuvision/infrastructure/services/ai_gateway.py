from __future__ import annotations

import json
import logging
from collections import OrderedDict
from pathlib import Path
from typing import Any
from uuid import uuid4

from pashuvision.application.errors import NotFound
from pashuvision.application.interfaces.ai_gateway import AIGateway, ImageInput
from pashuvision.domain.breeds import BUFFALO_BREEDS, CATTLE_BREEDS
from pashuvision.domain.models.breed_identification import (
    AnimalDetectionResult,
    BreedFacts,
    BreedIdentificationResult,
    DetectedAnimal,
    SchemeInfo,
    SchemeLookup,
    VaccinationSchedule,
    VaccinationSuggestion,
)
from pashuvision.infrastructure.services import ai_schemas

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent / "prompts"


def _prompt(name: str) -> str:
    return (PROMPTS_DIR / f"{name}.txt").read_text(encoding="utf-8").strip()


IDENTIFY_BREED_SYSTEM = _prompt("identify_breed_system")
IDENTIFY_BREED_PROMPT = _prompt("identify_breed")
DETECT_DETAILS_PROMPT = _prompt("detect_animal_details")
BREED_FACTS_PROMPT = _prompt("breed_facts")
SCHEMES_PROMPT = _prompt("schemes")
VACCINATIONS_PROMPT = _prompt("vaccinations")
BREED_CHAT_SYSTEM = _prompt("breed_chat_system")
GENERAL_CHAT_SYSTEM = _prompt("general_chat_system")

IDENTIFY_FAILED = (
    "Failed to communicate with AI service. Please check your connection and API key."
)
DETECT_FAILED = "Failed to auto-detect details from image."
FACTS_FAILED = "Failed to communicate with the AI service."
FACTS_FALLBACK_TEXT = (
    "Could not retrieve detailed information for this breed at the moment. "
    "Please try again later."
)
SCHEMES_FAILED = "Could not retrieve scheme information at this time. Please try again later."
VACCINATIONS_FAILED = "Could not retrieve AI-powered vaccination suggestions at this time."
BREED_CHAT_FAILED = "Sorry, I encountered an error. Please try again."
GENERAL_CHAT_FAILED = "Sorry, I'm having trouble connecting right now. Please try again later."

MAX_CHAT_SESSIONS = 200
# User and assistant messages kept per session, excluding the system prompt
MAX_HISTORY_MESSAGES = 20


def parse_json_content(content: str | None) -> dict[str, Any]:
    """Parse a model reply, tolerating markdown code fences around the JSON."""
    if not content:
        raise ValueError("Empty response from OpenAI")
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        if "```json" in content:
            json_start = content.find("```json") + 7
        elif "```" in content:
            json_start = content.find("```") + 3
        else:
            raise
        json_end = content.find("```", json_start)
        data = json.loads(content[json_start:json_end].strip())
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object in the AI response")
    return data


def normalise_error(value: Any) -> str | None:
    """The model reports success as the string "null"; treat it as no error."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == "null":
        return None
    return text


def _image_part(image: ImageInput) -> dict[str, Any]:
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{image.mime_type};base64,{image.data}", "detail": "high"},
    }


class OpenAIGateway(AIGateway):
    """AI gateway backed by the OpenAI chat completions API.

    Every call turns provider or parsing failures into an error-carrying
    result, so callers never see an exception from the model.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        client: Any | None = None,
        max_sessions: int = MAX_CHAT_SESSIONS,
        max_history_messages: int = MAX_HISTORY_MESSAGES,
    ) -> None:
        if client is None:
            from openai import AsyncOpenAI

            client = AsyncOpenAI(api_key=api_key)
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_sessions = max_sessions
        self.max_history_messages = max_history_messages
        self._sessions: OrderedDict[str, list[dict[str, Any]]] = OrderedDict()
        self._general_session_id: str | None = None

    async def _complete(
        self,
        messages: list[dict[str, Any]],
        *,
        schema_name: str | None = None,
        schema: dict[str, Any] | None = None,
        max_tokens: int = 1500,
    ) -> str | None:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": max_tokens,
        }
        if schema is not None:
            kwargs["response_format"] = ai_schemas.response_format(schema_name or "result", schema)
        response = await self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content

    async def identify_breed(self, images: list[ImageInput]) -> BreedIdentificationResult:
        prompt = IDENTIFY_BREED_PROMPT.format(
            cattle_breeds=", ".join(CATTLE_BREEDS),
            buffalo_breeds=", ".join(BUFFALO_BREEDS),
        )
        messages = [
            {"role": "system", "content": IDENTIFY_BREED_SYSTEM},
            {
                "role": "user",
                "content": [*(_image_part(i) for i in images), {"type": "text", "text": prompt}],
            },
        ]
        try:
            content = await self._complete(
                messages,
                schema_name="breed_identification",
                schema=ai_schemas.BREED_IDENTIFICATION,
            )
            data = parse_json_content(content)
            data["error"] = normalise_error(data.get("error"))
            if data.get("species") not in ai_schemas.SPECIES_VALUES:
                data["species"] = "Cattle"
            if not data.get("top_candidates"):
                data["top_candidates"] = None
            data.pop("is_user_verified", None)
            return BreedIdentificationResult.from_dict(data)
        except Exception as exc:
            logger.error("Breed identification failed: %s", exc, exc_info=True)
            return BreedIdentificationResult.failure(IDENTIFY_FAILED)

    async def detect_animal_details(self, image: ImageInput) -> AnimalDetectionResult:
        messages = [
            {
                "role": "user",
                "content": [_image_part(image), {"type": "text", "text": DETECT_DETAILS_PROMPT}],
            }
        ]
        try:
            content = await self._complete(
                messages, schema_name="animal_details", schema=ai_schemas.ANIMAL_DETAILS
            )
            data = parse_json_content(content)
            animals = [
                DetectedAnimal(
                    species=str(item["species"]),
                    sex=str(item["sex"]),
                    sex_confidence=str(item["sex_confidence"]),
                )
                for item in data.get("animals") or []
            ]
            return AnimalDetectionResult(error=normalise_error(data.get("error")), animals=animals)
        except Exception as exc:
            logger.error("Animal detail detection failed: %s", exc, exc_info=True)
            return AnimalDetectionResult(error=DETECT_FAILED, animals=[])

    async def get_breed_facts(self, breed_name: str, species: str) -> BreedFacts:
        prompt = BREED_FACTS_PROMPT.format(breed_name=breed_name, species=species)
        try:
            content = await self._complete([{"role": "user", "content": prompt}])
            if not content:
                raise ValueError("Empty response from OpenAI")
            return BreedFacts(facts=content.strip(), sources=[], error=None)
        except Exception as exc:
            logger.error("Fetching facts for %s failed: %s", breed_name, exc, exc_info=True)
            return BreedFacts(facts=FACTS_FALLBACK_TEXT, sources=[], error=FACTS_FAILED)

    async def get_scheme_info(self, breed_name: str, species: str) -> SchemeLookup:
        prompt = SCHEMES_PROMPT.format(breed_name=breed_name, species=species)
        try:
            content = await self._complete(
                [{"role": "user", "content": prompt}],
                schema_name="schemes",
                schema=ai_schemas.SCHEMES,
            )
            data = parse_json_content(content)
            schemes = [
                SchemeInfo(
                    scheme_name=str(item["scheme_name"]),
                    issuing_body=str(item.get("issuing_body", "")),
                    description=str(item.get("description", "")),
                    eligibility=str(item.get("eligibility", "")),
                    health_check_required=bool(item.get("health_check_required", False)),
                    health_check_frequency=str(
                        item.get("health_check_frequency") or "Not Applicable"
                    ),
                )
                for item in data.get("schemes") or []
            ]
            return SchemeLookup(schemes=schemes, error=None)
        except Exception as exc:
            logger.error("Fetching schemes for %s failed: %s", breed_name, exc, exc_info=True)
            return SchemeLookup(schemes=[], error=SCHEMES_FAILED)

    async def get_vaccination_schedule(
        self, breed_name: str, species: str
    ) -> VaccinationSchedule:
        prompt = VACCINATIONS_PROMPT.format(breed_name=breed_name, species=species)
        try:
            content = await self._complete(
                [{"role": "user", "content": prompt}],
                schema_name="vaccinations",
                schema=ai_schemas.VACCINATIONS,
            )
            data = parse_json_content(content)
            suggestions = [
                VaccinationSuggestion(
                    vaccine_name=str(item["vaccine_name"]),
                    schedule=str(item.get("schedule", "")),
                    importance=str(item.get("importance", "")),
                )
                for item in data.get("suggestions") or []
            ]
            return VaccinationSchedule(suggestions=suggestions, error=None)
        except Exception as exc:
            logger.error(
                "Fetching vaccination schedule for %s failed: %s", breed_name, exc, exc_info=True
            )
            return VaccinationSchedule(suggestions=[], error=VACCINATIONS_FAILED)

    # Chat sessions live in process memory; the least recently used are evicted
    # once more than `max_sessions` are open.

    def _open_session(self, system_prompt: str) -> str:
        session_id = uuid4().hex
        self._sessions[session_id] = [{"role": "system", "content": system_prompt}]
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted chat session %s", evicted)
        return session_id

    def start_breed_chat(self, breed_name: str) -> str:
        session_id = self._open_session(BREED_CHAT_SYSTEM.format(breed_name=breed_name))
        logger.info("Started breed chat %s for %s", session_id, breed_name)
        return session_id

    async def _send(self, session_id: str, message: str, fallback: str) -> str:
        self._sessions.move_to_end(session_id)
        history = self._sessions[session_id]
        turn = {"role": "user", "content": message}
        try:
            content = await self._complete([*history, turn])
            if not content:
                raise ValueError("Empty response from OpenAI")
        except Exception as exc:
            logger.error("Chat message in session %s failed: %s", session_id, exc, exc_info=True)
            return fallback
        history.extend([turn, {"role": "assistant", "content": content}])
        overflow = len(history) - 1 - self.max_history_messages
        if overflow > 0:
            del history[1 : 1 + overflow]
        return content

    async def send_chat_message(self, session_id: str, message: str) -> str:
        if session_id not in self._sessions or session_id == self._general_session_id:
            raise NotFound("Chat session not found", details={"session_id": session_id})
        return await self._send(session_id, message, BREED_CHAT_FAILED)

    async def send_general_message(self, message: str) -> str:
        if self._general_session_id not in self._sessions:
            self._general_session_id = self._open_session(GENERAL_CHAT_SYSTEM)
        return await self._send(self._general_session_id, message, GENERAL_CHAT_FAILED)
