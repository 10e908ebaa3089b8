from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ImagePayload(BaseModel):
    mime_type: str = "image/jpeg"
    data: str = Field(..., min_length=1, description="Base64 image data, optionally as a data URL")

    @field_validator("data")
    def strip_data_url(cls, v: str) -> str:
        """Accept `data:image/png;base64,...` as sent by browsers."""
        if v.startswith("data:") and "," in v:
            return v.split(",", 1)[1]
        return v


class IdentifyBreedRequest(BaseModel):
    images: list[ImagePayload] = Field(..., min_length=1, max_length=5)


class DetectDetailsRequest(BaseModel):
    image: ImagePayload


class QuickIdRequest(BaseModel):
    image: ImagePayload


class DetectedAnimalResponse(BaseModel):
    species: str
    sex: str
    sex_confidence: str


class DetectDetailsResponse(BaseModel):
    error: str | None
    animals: list[DetectedAnimalResponse]


class BreedQuery(BaseModel):
    breed_name: str = Field(..., min_length=1)
    species: str = Field(..., min_length=1)


class BreedSourceResponse(BaseModel):
    uri: str
    title: str


class BreedFactsResponse(BaseModel):
    facts: str
    sources: list[BreedSourceResponse]
    error: str | None


class SchemeInfoResponse(BaseModel):
    scheme_name: str
    issuing_body: str
    description: str
    eligibility: str
    health_check_required: bool
    health_check_frequency: str


class SchemeLookupResponse(BaseModel):
    schemes: list[SchemeInfoResponse]
    error: str | None


class StartChatRequest(BaseModel):
    breed_name: str = Field(..., min_length=1)


class StartChatResponse(BaseModel):
    session_id: str


class ChatMessageRequest(BaseModel):
    message: str = Field(..., min_length=1)


class ChatMessageResponse(BaseModel):
    reply: str
