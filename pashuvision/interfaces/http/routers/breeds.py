from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from pashuvision.application.interfaces.ai_gateway import AIGateway
from pashuvision.infrastructure.services.breed_catalog import BreedCatalog
from pashuvision.interfaces.http.deps import get_breed_catalog, get_optional_ai_gateway
from pashuvision.interfaces.http.schemas.ai import BreedSourceResponse
from pashuvision.interfaces.http.schemas.breeds import BreedDetailResponse, BreedResponse

router = APIRouter(prefix="/breeds", tags=["breeds"])


@router.get("", response_model=list[BreedResponse])
async def list_breeds(
    search: str | None = Query(None),
    species: str | None = Query(None),
    catalog: BreedCatalog = Depends(get_breed_catalog),
):
    return [
        BreedResponse(name=b.name, species=b.species, has_facts=b.has_facts)
        for b in catalog.list(search=search, species=species)
    ]


@router.get("/{name}", response_model=BreedDetailResponse)
async def get_breed(
    name: str,
    catalog: BreedCatalog = Depends(get_breed_catalog),
    gateway: AIGateway | None = Depends(get_optional_ai_gateway),
):
    """Breed facts; fetched from the AI service on first access and cached."""
    details = await catalog.details(name, gateway)
    breed = details.breed
    return BreedDetailResponse(
        name=breed.name,
        species=breed.species,
        facts=breed.facts,
        sources=[BreedSourceResponse(uri=s.uri, title=s.title) for s in breed.sources],
        error=details.error,
    )
