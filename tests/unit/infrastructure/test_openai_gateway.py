from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from pashuvision.application.errors import NotFound
from pashuvision.application.interfaces.ai_gateway import ImageInput
from pashuvision.domain.models.breed_identification import TranslatableText
from pashuvision.infrastructure.services import ai_gateway
from pashuvision.infrastructure.services.ai_gateway import OpenAIGateway, parse_json_content


class FakeCompletions:
    def __init__(self, replies: list) -> None:
        self.replies = list(replies)
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_gateway(*replies) -> tuple[OpenAIGateway, FakeCompletions]:
    completions = FakeCompletions(list(replies))
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIGateway(client=client, model="test-model"), completions


IMAGE = ImageInput(mime_type="image/png", data="aGVsbG8=")

IDENTIFICATION = {
    "error": "null",
    "species": "Buffalo",
    "breed_name": "Murrah",
    "confidence": 82,
    "milk_yield_potential": {"en": "High", "hi": "उच्च"},
    "care_notes": {"en": "Keep cool", "hi": "ठंडा रखें"},
    "reasoning": {"en": "Curled horns", "hi": "मुड़े सींग"},
    "top_candidates": [],
}


def test_parse_json_content_strips_code_fences():
    assert parse_json_content('```json\n{"a": 1}\n```') == {"a": 1}
    assert parse_json_content('Here:\n```\n{"b": 2}\n```') == {"b": 2}
    with pytest.raises(ValueError):
        parse_json_content("")


@pytest.mark.asyncio
async def test_identify_breed_normalises_null_error():
    gateway, completions = make_gateway(json.dumps(IDENTIFICATION))

    result = await gateway.identify_breed([IMAGE])

    assert result.error is None
    assert result.succeeded
    assert result.breed_name == "Murrah"
    assert result.reasoning == TranslatableText(en="Curled horns", hi="मुड़े सींग")
    assert result.top_candidates is None

    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert request["response_format"]["type"] == "json_schema"
    user_content = request["messages"][1]["content"]
    assert user_content[0]["image_url"]["url"] == "data:image/png;base64,aGVsbG8="
    assert "Murrah" in user_content[-1]["text"]


@pytest.mark.asyncio
async def test_identify_breed_keeps_validation_error_and_candidates():
    payload = dict(
        IDENTIFICATION,
        error="Poor image quality for reliable identification.",
        confidence=60,
        top_candidates=[
            {"breed_name": "Murrah", "confidence_percentage": 50},
            {"breed_name": "Nili-Ravi", "confidence_percentage": 30},
            {"breed_name": "Jaffarabadi", "confidence_percentage": 20},
        ],
    )
    gateway, _ = make_gateway(f"```json\n{json.dumps(payload)}\n```")

    result = await gateway.identify_breed([IMAGE])

    assert result.error == "Poor image quality for reliable identification."
    assert [c.breed_name for c in result.top_candidates] == ["Murrah", "Nili-Ravi", "Jaffarabadi"]


@pytest.mark.asyncio
async def test_identify_breed_provider_failure_returns_fallback():
    gateway, _ = make_gateway(RuntimeError("boom"))

    result = await gateway.identify_breed([IMAGE])

    assert result.error == ai_gateway.IDENTIFY_FAILED
    assert result.species == "Cattle"
    assert result.breed_name == "Unknown"
    assert result.confidence == 0
    assert result.milk_yield_potential == TranslatableText.na()


@pytest.mark.asyncio
async def test_detect_animal_details():
    reply = {
        "error": "NULL",
        "animals": [{"species": "Cattle", "sex": "Male", "sex_confidence": "Medium"}],
    }
    gateway, _ = make_gateway(json.dumps(reply))

    result = await gateway.detect_animal_details(IMAGE)

    assert result.error is None
    assert result.animals[0].sex == "Male"


@pytest.mark.asyncio
async def test_detect_animal_details_failure():
    gateway, _ = make_gateway("not json at all")

    result = await gateway.detect_animal_details(IMAGE)

    assert result.error == "Failed to auto-detect details from image."
    assert result.animals == []


@pytest.mark.asyncio
async def test_breed_facts_success_and_failure():
    gateway, completions = make_gateway("Gir cattle come from Gujarat.", RuntimeError("down"))

    facts = await gateway.get_breed_facts("Gir", "Cattle")
    failed = await gateway.get_breed_facts("Gir", "Cattle")

    assert facts.facts == "Gir cattle come from Gujarat."
    assert facts.error is None
    assert "response_format" not in completions.requests[0]
    assert failed.error == "Failed to communicate with the AI service."
    assert failed.facts == ai_gateway.FACTS_FALLBACK_TEXT
    assert failed.sources == []


@pytest.mark.asyncio
async def test_scheme_info_and_failure():
    reply = {
        "schemes": [
            {
                "scheme_name": "National Livestock Mission",
                "issuing_body": "Central Government",
                "description": "Support for entrepreneurship.",
                "eligibility": "Farmers",
                "health_check_required": False,
                "health_check_frequency": "Not Applicable",
            }
        ]
    }
    gateway, _ = make_gateway(json.dumps(reply), RuntimeError("down"))

    lookup = await gateway.get_scheme_info("Gir", "Cattle")
    failed = await gateway.get_scheme_info("Gir", "Cattle")

    assert lookup.schemes[0].scheme_name == "National Livestock Mission"
    assert lookup.error is None
    assert failed.schemes == []
    assert failed.error == (
        "Could not retrieve scheme information at this time. Please try again later."
    )


@pytest.mark.asyncio
async def test_vaccination_schedule_failure():
    gateway, _ = make_gateway(RuntimeError("down"))

    schedule = await gateway.get_vaccination_schedule("Gir", "Cattle")

    assert schedule.suggestions == []
    assert schedule.error == "Could not retrieve AI-powered vaccination suggestions at this time."


@pytest.mark.asyncio
async def test_breed_chat_keeps_history():
    gateway, completions = make_gateway("Feed green fodder.", "Twice a day.")

    session_id = gateway.start_breed_chat("Gir")
    first = await gateway.send_chat_message(session_id, "What to feed?")
    second = await gateway.send_chat_message(session_id, "How often?")

    assert (first, second) == ("Feed green fodder.", "Twice a day.")
    messages = completions.requests[1]["messages"]
    assert messages[0]["role"] == "system"
    assert "Gir" in messages[0]["content"]
    assert [m["role"] for m in messages[1:]] == ["user", "assistant", "user"]


@pytest.mark.asyncio
async def test_chat_failure_returns_apology_and_unknown_session_raises():
    gateway, _ = make_gateway(RuntimeError("down"), RuntimeError("down"))

    session_id = gateway.start_breed_chat("Gir")
    reply = await gateway.send_chat_message(session_id, "Hello")
    general = await gateway.send_general_message("Hello")

    assert reply == "Sorry, I encountered an error. Please try again."
    assert general == "Sorry, I'm having trouble connecting right now. Please try again later."
    with pytest.raises(NotFound):
        await gateway.send_chat_message("missing", "Hello")


@pytest.mark.asyncio
async def test_general_chat_reuses_single_session():
    gateway, completions = make_gateway("Namaste!", "Open the registration wizard.")

    await gateway.send_general_message("Hi")
    await gateway.send_general_message("How do I register?")

    messages = completions.requests[1]["messages"]
    assert "PashuVision" in messages[0]["content"]
    assert [m["content"] for m in messages[1:]] == ["Hi", "Namaste!", "How do I register?"]


@pytest.mark.asyncio
async def test_chat_sessions_are_capped_least_recently_used_first():
    completions = FakeCompletions(["ok"])
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    gateway = OpenAIGateway(client=client, max_sessions=2)

    oldest = gateway.start_breed_chat("Gir")
    recent = gateway.start_breed_chat("Sahiwal")
    await gateway.send_chat_message(oldest, "still here?")
    newest = gateway.start_breed_chat("Murrah")

    with pytest.raises(NotFound):
        await gateway.send_chat_message(recent, "hello")
    assert set(gateway._sessions) == {oldest, newest}


@pytest.mark.asyncio
async def test_chat_history_is_trimmed_to_recent_messages():
    replies = [f"reply {i}" for i in range(4)]
    completions = FakeCompletions(replies)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    gateway = OpenAIGateway(client=client, max_history_messages=4)

    session_id = gateway.start_breed_chat("Gir")
    for i in range(4):
        await gateway.send_chat_message(session_id, f"question {i}")

    last_request = completions.requests[-1]["messages"]
    assert last_request[0]["role"] == "system"
    assert [m["content"] for m in last_request[1:]] == [
        "question 1",
        "reply 1",
        "question 2",
        "reply 2",
        "question 3",
    ]
    assert len(gateway._sessions[session_id]) == 5
