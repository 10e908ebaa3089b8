from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from pashuvision.application.errors import NotFound, ServiceUnavailable
from pashuvision.application.interfaces.ai_gateway import AIGateway
from pashuvision.domain.breeds import BUFFALO_BREEDS, CATTLE_BREEDS
from pashuvision.domain.models.breed import BreedInfo
from pashuvision.domain.value_objects.species import Species

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BreedDetails:
    breed: BreedInfo
    error: str | None = None


class BreedCatalog:
    """Every known cattle and buffalo breed, with AI facts cached once fetched."""

    def __init__(self) -> None:
        self._breeds: dict[str, BreedInfo] = {}
        for name in CATTLE_BREEDS:
            self._breeds[name.lower()] = BreedInfo(name=name, species=Species.CATTLE.value)
        for name in BUFFALO_BREEDS:
            self._breeds[name.lower()] = BreedInfo(name=name, species=Species.BUFFALO.value)

    def list(self, *, search: str | None = None, species: str | None = None) -> list[BreedInfo]:
        term = (search or "").strip().lower()
        return [
            b
            for b in self._breeds.values()
            if (not term or term in b.name.lower()) and (not species or b.species == species)
        ]

    def get(self, name: str) -> BreedInfo:
        breed = self._breeds.get(name.strip().lower())
        if breed is None:
            raise NotFound("Breed not found", details={"name": name})
        return breed

    async def details(self, name: str, gateway: AIGateway | None) -> BreedDetails:
        breed = self.get(name)
        if breed.has_facts:
            return BreedDetails(breed=breed)
        if gateway is None:
            raise ServiceUnavailable("AI service is not configured")

        result = await gateway.get_breed_facts(breed.name, breed.species)
        if result.error:
            return BreedDetails(breed=replace(breed, facts=result.facts), error=result.error)

        cached = replace(breed, facts=result.facts, sources=list(result.sources))
        self._breeds[breed.name.lower()] = cached
        logger.info("Cached facts for breed %s", breed.name)
        return BreedDetails(breed=cached)
