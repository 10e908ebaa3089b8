from __future__ import annotations

from pydantic import BaseModel

from pashuvision.interfaces.http.schemas.ai import BreedSourceResponse


class BreedResponse(BaseModel):
    name: str
    species: str
    has_facts: bool


class BreedDetailResponse(BaseModel):
    name: str
    species: str
    facts: str
    sources: list[BreedSourceResponse]
    error: str | None = None
