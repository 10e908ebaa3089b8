from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(slots=True)
class TranslatableText:
    en: str
    hi: str

    @classmethod
    def na(cls) -> TranslatableText:
        return cls(en="N/A", hi="लागू नहीं")


# AI replies carry bilingual objects; older and generated records carry plain strings.
LocalizedText = Union[TranslatableText, str]


def localized_from_value(value: Any) -> LocalizedText:
    if isinstance(value, TranslatableText):
        return value
    if isinstance(value, dict):
        return TranslatableText(en=str(value.get("en", "")), hi=str(value.get("hi", "")))
    if value is None:
        return ""
    return str(value)


def localized_to_value(value: LocalizedText) -> dict[str, str] | str:
    if isinstance(value, TranslatableText):
        return {"en": value.en, "hi": value.hi}
    return value


def english_text(value: LocalizedText) -> str:
    if isinstance(value, TranslatableText):
        return value.en
    return value or ""


@dataclass(slots=True)
class BreedChoice:
    breed_name: str
    confidence_percentage: int


@dataclass(slots=True)
class BreedIdentificationResult:
    error: str | None
    species: str  # Species value or "" when unknown
    breed_name: str
    confidence: int
    milk_yield_potential: LocalizedText
    care_notes: LocalizedText
    reasoning: LocalizedText
    is_user_verified: bool | None = None
    top_candidates: list[BreedChoice] | None = None

    @property
    def succeeded(self) -> bool:
        return not self.error

    @classmethod
    def failure(cls, error: str, species: str = "Cattle") -> BreedIdentificationResult:
        return cls(
            error=error,
            species=species,
            breed_name="Unknown",
            confidence=0,
            milk_yield_potential=TranslatableText.na(),
            care_notes=TranslatableText.na(),
            reasoning=TranslatableText(
                en="An error occurred during AI analysis.",
                hi="एआई विश्लेषण के दौरान एक त्रुटि हुई।",
            ),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BreedIdentificationResult:
        candidates = data.get("top_candidates")
        return cls(
            error=data.get("error") or None,
            species=data.get("species") or "",
            breed_name=data.get("breed_name") or "Unknown",
            confidence=int(data.get("confidence") or 0),
            milk_yield_potential=localized_from_value(data.get("milk_yield_potential")),
            care_notes=localized_from_value(data.get("care_notes")),
            reasoning=localized_from_value(data.get("reasoning")),
            is_user_verified=data.get("is_user_verified"),
            top_candidates=(
                [
                    BreedChoice(
                        breed_name=str(c["breed_name"]),
                        confidence_percentage=int(c["confidence_percentage"]),
                    )
                    for c in candidates
                ]
                if candidates is not None
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "species": self.species,
            "breed_name": self.breed_name,
            "confidence": self.confidence,
            "milk_yield_potential": localized_to_value(self.milk_yield_potential),
            "care_notes": localized_to_value(self.care_notes),
            "reasoning": localized_to_value(self.reasoning),
            "is_user_verified": self.is_user_verified,
            "top_candidates": (
                [
                    {
                        "breed_name": c.breed_name,
                        "confidence_percentage": c.confidence_percentage,
                    }
                    for c in self.top_candidates
                ]
                if self.top_candidates is not None
                else None
            ),
        }


@dataclass(slots=True)
class DetectedAnimal:
    species: str
    sex: str
    sex_confidence: str


@dataclass(slots=True)
class AnimalDetectionResult:
    error: str | None
    animals: list[DetectedAnimal] = field(default_factory=list)


@dataclass(slots=True)
class BreedSource:
    uri: str
    title: str


@dataclass(slots=True)
class BreedFacts:
    facts: str
    sources: list[BreedSource] = field(default_factory=list)
    error: str | None = None


@dataclass(slots=True)
class SchemeInfo:
    scheme_name: str
    issuing_body: str
    description: str
    eligibility: str
    health_check_required: bool
    health_check_frequency: str


@dataclass(slots=True)
class SchemeLookup:
    schemes: list[SchemeInfo]
    error: str | None = None


@dataclass(slots=True)
class VaccinationSuggestion:
    vaccine_name: str
    schedule: str
    importance: str


@dataclass(slots=True)
class VaccinationSchedule:
    suggestions: list[VaccinationSuggestion]
    error: str | None = None
