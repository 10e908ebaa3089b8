from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Literal, Union

from pydantic import BaseModel, Field, field_validator

from pashuvision.domain.models.registration import AnimalResult, OwnerData, Registration

SpeciesValue = Literal["Cattle", "Buffalo", ""]
SexValue = Literal["Male", "Female", ""]
StatusValue = Literal["Draft", "Completed"]


class TranslatableTextSchema(BaseModel):
    en: str
    hi: str


LocalizedTextSchema = Union[TranslatableTextSchema, str]


class BreedChoiceSchema(BaseModel):
    breed_name: str
    confidence_percentage: int = Field(ge=0, le=100)


class BreedIdentificationSchema(BaseModel):
    error: str | None = None
    species: SpeciesValue = ""
    breed_name: str = "Unknown"
    confidence: int = Field(0, ge=0, le=100)
    milk_yield_potential: LocalizedTextSchema = ""
    care_notes: LocalizedTextSchema = ""
    reasoning: LocalizedTextSchema = ""
    is_user_verified: bool | None = None
    top_candidates: list[BreedChoiceSchema] | None = None


class PhotoSchema(BaseModel):
    id: str
    base64_data: str = ""
    mime_type: str = ""
    preview_url: str = ""


class VaccinationRecordSchema(BaseModel):
    id: str
    vaccine_name: str
    administered_date: date
    due_date: date
    notes: str | None = None


class OwnerSchema(BaseModel):
    name: str = ""
    mobile: str = ""
    dob: str = ""
    gender: str = ""
    address: str = ""
    village: str = ""
    district: str = ""
    state: str = ""
    pincode: str = ""
    id_type: str = ""
    id_number: str = ""
    caste_category: str = ""
    bank_account: str = ""
    ifsc_code: str = ""

    def to_domain(self) -> OwnerData:
        return OwnerData.from_dict(self.model_dump())


class AnimalSchema(BaseModel):
    id: str | None = None
    species: SpeciesValue = ""
    age_value: str = ""
    age_unit: Literal["Years", "Months"] = "Years"
    sex: SexValue = ""
    photos: list[PhotoSchema] = Field(default_factory=list)
    sex_confidence: Literal["High", "Medium", "Low"] | None = None
    ai_result: BreedIdentificationSchema
    vaccinations: list[VaccinationRecordSchema] | None = None

    @field_validator("age_value", mode="before")
    def age_as_text(cls, v):
        return "" if v is None else str(v)

    def to_domain(self) -> AnimalResult:
        return AnimalResult.from_dict(self.model_dump(mode="json"))


def _aware_utc(v: datetime | None) -> datetime | None:
    if v is None:
        return None
    if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class RegistrationCreate(BaseModel):
    """Wizard submission. Omit `id` for a new record; send it again to overwrite a draft."""

    id: str | None = None
    timestamp: datetime | None = None
    status: StatusValue = "Completed"
    owner: OwnerSchema
    animals: list[AnimalSchema] = Field(default_factory=list)

    @field_validator("timestamp")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _aware_utc(v)


class RegistrationUpdate(BaseModel):
    timestamp: datetime | None = None
    status: StatusValue = "Completed"
    owner: OwnerSchema
    animals: list[AnimalSchema] = Field(default_factory=list)

    @field_validator("timestamp")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _aware_utc(v)


class RegistrationResponse(BaseModel):
    id: str
    timestamp: datetime
    status: StatusValue
    synced: bool
    is_sample: bool
    analysis_outcome: str
    owner: OwnerSchema
    animals: list[AnimalSchema]

    @classmethod
    def from_domain(cls, registration: Registration) -> RegistrationResponse:
        data = registration.to_dict()
        data["analysis_outcome"] = registration.analysis_outcome.value
        return cls.model_validate(data)


class RegistrationListResponse(BaseModel):
    items: list[RegistrationResponse]
    total: int


class VaccinationCreate(BaseModel):
    vaccine_name: str | None = None
    administered_date: date | None = None
    due_date: date | None = None
    notes: str | None = None


class VaccinationSuggestionSchema(BaseModel):
    vaccine_name: str
    schedule: str
    importance: str


class VaccinationSuggestionsResponse(BaseModel):
    suggestions: list[VaccinationSuggestionSchema]
    error: str | None = None
