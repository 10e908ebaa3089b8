from __future__ import annotations

from dataclasses import dataclass, field

from pashuvision.domain.models.breed_identification import BreedSource

PENDING_FACTS_TEXT = (
    "Detailed facts for this breed are being compiled and will be available soon."
)


@dataclass(slots=True)
class BreedInfo:
    name: str
    species: str
    facts: str = PENDING_FACTS_TEXT
    sources: list[BreedSource] = field(default_factory=list)

    @property
    def has_facts(self) -> bool:
        return self.facts != PENDING_FACTS_TEXT
