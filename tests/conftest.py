from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("SYNC_INTERVAL_SECONDS", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from pashuvision.application.errors import NotFound
from pashuvision.config.settings import Settings
from pashuvision.domain.models.breed_identification import (
    AnimalDetectionResult,
    BreedFacts,
    BreedIdentificationResult,
    DetectedAnimal,
    SchemeInfo,
    SchemeLookup,
    TranslatableText,
    VaccinationSchedule,
    VaccinationSuggestion,
)
from pashuvision.domain.models.registration import (
    AnimalResult,
    OwnerData,
    Registration,
)
from pashuvision.infrastructure.db.session import create_schema
from pashuvision.infrastructure.sync.remote_backend import SimulatedRemoteBackend
from pashuvision.interfaces.http.main import create_app


class InMemoryRegistrations:
    def __init__(self) -> None:
        self.items: dict[str, Registration] = {}

    async def list_all(self) -> list[Registration]:
        return sorted(self.items.values(), key=lambda r: (r.timestamp, r.id))

    async def get(self, registration_id: str) -> Registration | None:
        return self.items.get(registration_id)

    async def upsert(self, registration: Registration) -> Registration:
        self.items[registration.id] = registration
        return registration

    async def add_many(self, registrations: list[Registration]) -> None:
        for registration in registrations:
            self.items[registration.id] = registration

    async def count(self) -> int:
        return len(self.items)


class InMemoryUnitOfWork:
    def __init__(self, registrations: InMemoryRegistrations | None = None) -> None:
        self.registrations = registrations or InMemoryRegistrations()
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> InMemoryUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class FakeAIGateway:
    """Canned AI answers; records what it was asked."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.identification = make_ai_result("Gir", confidence=91)
        self.facts = BreedFacts(facts="Gir originates from the Gir hills of Gujarat.")
        self.sessions: dict[str, list[str]] = {}

    async def identify_breed(self, images):
        self.calls.append(("identify_breed", len(images)))
        return self.identification

    async def detect_animal_details(self, image):
        self.calls.append(("detect_animal_details", image.mime_type))
        return AnimalDetectionResult(
            error=None,
            animals=[DetectedAnimal(species="Cattle", sex="Female", sex_confidence="High")],
        )

    async def get_breed_facts(self, breed_name, species):
        self.calls.append(("get_breed_facts", breed_name))
        return self.facts

    async def get_scheme_info(self, breed_name, species):
        self.calls.append(("get_scheme_info", breed_name))
        return SchemeLookup(
            schemes=[
                SchemeInfo(
                    scheme_name="Rashtriya Gokul Mission",
                    issuing_body="Central Government",
                    description="Conservation of indigenous breeds.",
                    eligibility="Owners of indigenous cattle.",
                    health_check_required=True,
                    health_check_frequency="Annual",
                )
            ]
        )

    async def get_vaccination_schedule(self, breed_name, species):
        self.calls.append(("get_vaccination_schedule", (breed_name, species)))
        return VaccinationSchedule(
            suggestions=[
                VaccinationSuggestion(
                    vaccine_name="FMD Vaccine",
                    schedule="Every 6 months",
                    importance="Protects against foot-and-mouth disease.",
                )
            ]
        )

    def start_breed_chat(self, breed_name):
        session_id = f"session-{len(self.sessions) + 1}"
        self.sessions[session_id] = []
        return session_id

    async def send_chat_message(self, session_id, message):
        if session_id not in self.sessions:
            raise NotFound("Chat session not found", details={"session_id": session_id})
        self.sessions[session_id].append(message)
        return f"About {message}"

    async def send_general_message(self, message):
        self.calls.append(("send_general_message", message))
        return "Hello from PashuHelper"


def make_ai_result(
    breed: str = "Gir", *, confidence: int = 90, error: str | None = None
) -> BreedIdentificationResult:
    if error:
        return BreedIdentificationResult.failure(error)
    return BreedIdentificationResult(
        error=None,
        species="Cattle",
        breed_name=breed,
        confidence=confidence,
        milk_yield_potential=TranslatableText(en="High", hi="उच्च"),
        care_notes=TranslatableText(en="Needs shade", hi="छाया चाहिए"),
        reasoning=TranslatableText(en="Domed forehead", hi="उभरा माथा"),
    )


def make_registration(
    registration_id: str = "reg-1",
    *,
    breeds: list[str] | None = None,
    errors: int = 0,
    timestamp: datetime | None = None,
    synced: bool = False,
    is_sample: bool = False,
    status: str = "Completed",
    owner: OwnerData | None = None,
) -> Registration:
    animals = [
        AnimalResult(
            id=f"{registration_id}-animal-{i}",
            species="Cattle",
            age_value="4",
            age_unit="Years",
            sex="Female",
            ai_result=make_ai_result(breed),
        )
        for i, breed in enumerate(breeds if breeds is not None else ["Gir"])
    ]
    for i in range(errors):
        animals.append(
            AnimalResult(
                id=f"{registration_id}-failed-{i}",
                species="Buffalo",
                age_value="8",
                age_unit="Months",
                sex="Male",
                ai_result=make_ai_result(error="Poor image quality for reliable identification."),
            )
        )
    return Registration(
        id=registration_id,
        timestamp=timestamp or datetime(2024, 5, 10, 6, 0, tzinfo=timezone.utc),
        owner=owner
        or OwnerData(
            name="Ramesh Patel",
            mobile="9876543210",
            village="Rampur",
            district="Anand",
            state="Gujarat",
            id_type="Aadhaar",
            id_number="123412341234",
        ),
        animals=animals,
        synced=synced,
        is_sample=is_sample,
        status=status,
    )


@pytest.fixture()
def registration_factory():
    return make_registration


@pytest.fixture()
def ai_result_factory():
    return make_ai_result


@pytest.fixture()
def memory_uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


@pytest.fixture()
def fake_gateway() -> FakeAIGateway:
    return FakeAIGateway()


@pytest.fixture()
def remote_backend() -> SimulatedRemoteBackend:
    return SimulatedRemoteBackend(latency_seconds=0)


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "seed_sample_data": False,
            "create_schema_on_startup": False,
            "sync_interval_seconds": 0,
            "sync_simulated_latency_ms": 0,
            "sync_start_online": True,
        }
    )


@pytest.fixture()
def app(test_settings: Settings, fake_gateway: FakeAIGateway, remote_backend):
    return create_app(
        settings=test_settings, ai_gateway=fake_gateway, remote_backend=remote_backend
    )


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    await create_schema(app.state.engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await app.state.engine.dispose()


@pytest.fixture()
def registration_payload() -> dict[str, Any]:
    return {
        "status": "Completed",
        "owner": {
            "name": "Sita Devi",
            "mobile": "9123456780",
            "gender": "Female",
            "village": "Kishanpur",
            "district": "Karnal",
            "state": "Haryana",
            "pincode": "132001",
            "id_type": "Aadhaar",
            "id_number": "567856785678",
            "caste_category": "OBC",
        },
        "animals": [
            {
                "species": "Buffalo",
                "age_value": "5",
                "age_unit": "Years",
                "sex": "Female",
                "ai_result": {
                    "error": None,
                    "species": "Buffalo",
                    "breed_name": "Murrah",
                    "confidence": 88,
                    "milk_yield_potential": {"en": "Very high", "hi": "बहुत अधिक"},
                    "care_notes": {"en": "Wallowing helps", "hi": "पानी में रखें"},
                    "reasoning": {"en": "Tightly curled horns", "hi": "मुड़े हुए सींग"},
                },
            }
        ],
    }
