from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pashuvision.domain.models.breed_identification import (
    AnimalDetectionResult,
    BreedFacts,
    BreedIdentificationResult,
    SchemeLookup,
    VaccinationSchedule,
)


@dataclass(slots=True)
class ImageInput:
    mime_type: str
    data: str  # base64, no data-URL prefix


class AIGateway(Protocol):
    async def identify_breed(self, images: list[ImageInput]) -> BreedIdentificationResult: ...

    async def detect_animal_details(self, image: ImageInput) -> AnimalDetectionResult: ...

    async def get_breed_facts(self, breed_name: str, species: str) -> BreedFacts: ...

    async def get_scheme_info(self, breed_name: str, species: str) -> SchemeLookup: ...

    async def get_vaccination_schedule(
        self, breed_name: str, species: str
    ) -> VaccinationSchedule: ...

    def start_breed_chat(self, breed_name: str) -> str: ...

    async def send_chat_message(self, session_id: str, message: str) -> str: ...

    async def send_general_message(self, message: str) -> str: ...
