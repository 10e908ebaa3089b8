"""Pseudo-random registrations used to populate an empty store for demos."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from pashuvision.domain.breeds import breeds_for
from pashuvision.domain.locations import INDIAN_STATES_AND_DISTRICTS
from pashuvision.domain.models.breed_identification import (
    BreedChoice,
    BreedIdentificationResult,
)
from pashuvision.domain.models.registration import AnimalResult, OwnerData, Registration
from pashuvision.domain.value_objects.owner import CasteCategory, Gender, IdType
from pashuvision.domain.value_objects.registration_status import RegistrationStatus
from pashuvision.domain.value_objects.species import AgeUnit, Sex, Species

SAMPLE_REGISTRATION_COUNT = 115
SAMPLE_USER_REGISTRATION_COUNT = 5

FIRST_NAMES = [
    "Rajesh", "Priya", "Amit", "Sunita", "Vikram", "Anjali", "Sanjay", "Meena", "Arun",
    "Pooja", "Deepak", "Lalita", "Kiran", "Suresh", "Kavita", "Ravi", "Geeta",
]  # fmt: skip
LAST_NAMES = [
    "Kumar", "Sharma", "Singh", "Patel", "Gupta", "Verma", "Reddy", "Yadav", "Chauhan",
    "Mehta", "Joshi", "Mishra",
]  # fmt: skip
VILLAGES = [
    "Ramgarh", "Devipur", "Sitapur", "Madhavpur", "Krishnanagar", "Gopalganj",
    "Lakshmipur", "Durgapur", "Shantipur", "Alipur",
]  # fmt: skip
AI_ERRORS = [
    "Image too blurry for analysis.",
    "Animal is obstructed.",
    "Multiple animals detected in photo.",
]


class SampleDataGenerator:
    def __init__(self, rng: random.Random | None = None, now: datetime | None = None) -> None:
        self.rng = rng or random.Random()
        self.now = now or datetime.now(timezone.utc)

    def _digits(self, low: int, high: int) -> str:
        return str(self.rng.randint(low, high))

    def owner(self) -> OwnerData:
        state = self.rng.choice(list(INDIAN_STATES_AND_DISTRICTS))
        district = self.rng.choice(INDIAN_STATES_AND_DISTRICTS[state])
        dob = (
            f"{self.rng.randint(1960, 1999)}-"
            f"{self.rng.randint(1, 12):02d}-{self.rng.randint(1, 28):02d}"
        )
        return OwnerData(
            name=f"{self.rng.choice(FIRST_NAMES)} {self.rng.choice(LAST_NAMES)}",
            mobile=f"9{self._digits(100000000, 999999999)}",
            dob=dob,
            gender=self.rng.choice([Gender.MALE, Gender.FEMALE, Gender.OTHER]).value,
            address=f"{self.rng.randint(10, 99)} Main Road",
            village=self.rng.choice(VILLAGES),
            district=district,
            state=state,
            pincode=self._digits(100000, 999999),
            id_type=IdType.AADHAAR.value,
            id_number=self._digits(100000000000, 999999999999),
            caste_category=self.rng.choice(list(CasteCategory)).value,
            bank_account="",
            ifsc_code="",
        )

    def ai_result(self, species: str, breed_name: str) -> BreedIdentificationResult:
        outcome = self.rng.random()

        if outcome < 0.1:
            return BreedIdentificationResult(
                error=self.rng.choice(AI_ERRORS),
                species=species,
                breed_name="Unknown",
                confidence=0,
                milk_yield_potential="N/A",
                care_notes="N/A",
                reasoning="AI analysis could not be completed due to poor image quality.",
            )

        if outcome < 0.3:
            breed_list = breeds_for(species)
            candidates: list[str] = []
            for name in (breed_name, self.rng.choice(breed_list), self.rng.choice(breed_list)):
                if name not in candidates:
                    candidates.append(name)
            first = self.rng.randint(40, 59)
            second = self.rng.randint(20, 39)
            picked = self.rng.choice(candidates)
            reasoning = (
                "Visual markers are ambiguous. Key features match several breeds like "
                f"{', '.join(candidates)}."
            )
            while len(candidates) < 3:
                candidates.append(self.rng.choice(breed_list))
            return BreedIdentificationResult(
                error=None,
                species=species,
                breed_name=picked,
                confidence=self.rng.randint(50, 73),
                milk_yield_potential="Varies based on breed; requires confirmation.",
                care_notes=(
                    "General care suitable for most local breeds is recommended "
                    "until breed is confirmed."
                ),
                reasoning=reasoning,
                top_candidates=[
                    BreedChoice(breed_name=candidates[0], confidence_percentage=first),
                    BreedChoice(breed_name=candidates[1], confidence_percentage=second),
                    BreedChoice(
                        breed_name=candidates[2], confidence_percentage=100 - first - second
                    ),
                ],
                is_user_verified=True,
            )

        return BreedIdentificationResult(
            error=None,
            species=species,
            breed_name=breed_name,
            confidence=self.rng.randint(75, 99),
            milk_yield_potential=f"Average for {breed_name} is typically between 8-12 liters/day.",
            care_notes=(
                f"The {breed_name} is a hardy breed, well-suited for local climates. "
                "Ensure regular vaccinations and a balanced diet."
            ),
            reasoning=(
                "Clear visual confirmation of breed-specific traits such as horn shape, "
                "coat color, and body structure."
            ),
        )

    def animal(self) -> AnimalResult:
        species = self.rng.choice(list(Species)).value
        breed_name = self.rng.choice(breeds_for(species))
        age_unit = self.rng.choice(list(AgeUnit)).value
        if age_unit == AgeUnit.YEARS.value:
            age_value = self.rng.randint(1, 8)
        else:
            age_value = self.rng.randint(6, 11)
        now_ms = int(self.now.timestamp() * 1000)
        return AnimalResult(
            id=f"animal-{now_ms}-{self.rng.getrandbits(32):08x}",
            species=species,
            age_value=str(age_value),
            age_unit=age_unit,
            sex=self.rng.choice(list(Sex)).value,
            photos=[],
            ai_result=self.ai_result(species, breed_name),
        )

    def timestamp(self) -> datetime:
        week_ago = self.now - timedelta(days=7)
        return week_ago + (self.now - week_ago) * self.rng.random()

    def registrations(
        self,
        sample_count: int = SAMPLE_REGISTRATION_COUNT,
        user_count: int = SAMPLE_USER_REGISTRATION_COUNT,
    ) -> list[Registration]:
        generated: list[Registration] = []

        for i in range(sample_count):
            animal_count = 1 if self.rng.random() < 0.8 else 2
            generated.append(self._registration(f"{i}", animal_count))

        # Former "user" records; flagged as samples so recent-activity views skip them
        for i in range(user_count):
            generated.append(self._registration(f"user-{i}", 1))

        return generated

    def _registration(self, suffix: str, animal_count: int) -> Registration:
        owner = self.owner()
        animals = [self.animal() for _ in range(animal_count)]
        timestamp = self.timestamp()
        return Registration(
            id=f"reg-{int(timestamp.timestamp() * 1000)}-{suffix}",
            timestamp=timestamp,
            owner=owner,
            animals=animals,
            is_sample=True,
            synced=True,
            status=RegistrationStatus.COMPLETED.value,
        )


def generate_sample_registrations(
    *, rng: random.Random | None = None, now: datetime | None = None
) -> list[Registration]:
    return SampleDataGenerator(rng=rng, now=now).registrations()
