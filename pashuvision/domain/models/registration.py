from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any
from uuid import uuid4

from pashuvision.domain.models.breed_identification import BreedIdentificationResult
from pashuvision.domain.value_objects.registration_status import (
    AnalysisOutcome,
    RegistrationStatus,
)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(slots=True)
class OwnerData:
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

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OwnerData:
        known = {name: str(data.get(name) or "") for name in cls.__dataclass_fields__}
        return cls(**known)

    def to_dict(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


@dataclass(slots=True)
class PhotoFile:
    id: str
    base64_data: str
    mime_type: str
    preview_url: str = ""


@dataclass(slots=True)
class VaccinationRecord:
    id: str
    vaccine_name: str
    administered_date: date
    due_date: date
    notes: str | None = None

    @classmethod
    def create(
        cls,
        vaccine_name: str,
        administered_date: date,
        due_date: date,
        notes: str | None = None,
    ) -> VaccinationRecord:
        return cls(
            id=f"vac-{_epoch_ms()}-{uuid4().hex[:4]}",
            vaccine_name=vaccine_name,
            administered_date=administered_date,
            due_date=due_date,
            notes=notes,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VaccinationRecord:
        return cls(
            id=str(data["id"]),
            vaccine_name=str(data["vaccine_name"]),
            administered_date=_parse_date(data["administered_date"]),
            due_date=_parse_date(data["due_date"]),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "vaccine_name": self.vaccine_name,
            "administered_date": self.administered_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "notes": self.notes,
        }


@dataclass(slots=True)
class AnimalResult:
    id: str
    species: str  # Species value or ""
    age_value: str
    age_unit: str  # AgeUnit
    sex: str  # Sex value or ""
    ai_result: BreedIdentificationResult
    photos: list[PhotoFile] = field(default_factory=list)
    sex_confidence: str | None = None
    vaccinations: list[VaccinationRecord] | None = None

    @staticmethod
    def new_id() -> str:
        return f"animal-{_epoch_ms()}-{uuid4().hex[:8]}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnimalResult:
        vaccinations = data.get("vaccinations")
        return cls(
            id=str(data.get("id") or cls.new_id()),
            species=data.get("species") or "",
            age_value=str(data.get("age_value") or ""),
            age_unit=data.get("age_unit") or "Years",
            sex=data.get("sex") or "",
            ai_result=BreedIdentificationResult.from_dict(data.get("ai_result") or {}),
            photos=[
                PhotoFile(
                    id=str(p["id"]),
                    base64_data=p.get("base64_data", ""),
                    mime_type=p.get("mime_type", ""),
                    preview_url=p.get("preview_url", ""),
                )
                for p in data.get("photos") or []
            ],
            sex_confidence=data.get("sex_confidence"),
            vaccinations=(
                [VaccinationRecord.from_dict(v) for v in vaccinations]
                if vaccinations is not None
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "species": self.species,
            "age_value": self.age_value,
            "age_unit": self.age_unit,
            "sex": self.sex,
            "photos": [
                {
                    "id": p.id,
                    "base64_data": p.base64_data,
                    "mime_type": p.mime_type,
                    "preview_url": p.preview_url,
                }
                for p in self.photos
            ],
            "sex_confidence": self.sex_confidence,
            "ai_result": self.ai_result.to_dict(),
            "vaccinations": (
                [v.to_dict() for v in self.vaccinations] if self.vaccinations is not None else None
            ),
        }

    @property
    def age_label(self) -> str:
        return f"{self.age_value} {self.age_unit}"


@dataclass(slots=True)
class Registration:
    id: str
    timestamp: datetime
    owner: OwnerData
    animals: list[AnimalResult] = field(default_factory=list)
    synced: bool = False
    is_sample: bool = False
    status: str = RegistrationStatus.COMPLETED.value

    @staticmethod
    def new_id() -> str:
        return f"reg-{_epoch_ms()}-{uuid4().hex[:8]}"

    @classmethod
    def create(
        cls,
        owner: OwnerData,
        animals: list[AnimalResult],
        *,
        status: str = RegistrationStatus.COMPLETED.value,
        registration_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> Registration:
        return cls(
            id=registration_id or cls.new_id(),
            timestamp=_parse_datetime(timestamp or datetime.now(timezone.utc)),
            owner=owner,
            animals=animals,
            synced=False,
            is_sample=False,
            status=status,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Registration:
        return cls(
            id=str(data["id"]),
            timestamp=_parse_datetime(data["timestamp"]),
            owner=OwnerData.from_dict(data.get("owner") or {}),
            animals=[AnimalResult.from_dict(a) for a in data.get("animals") or []],
            synced=bool(data.get("synced", False)),
            is_sample=bool(data.get("is_sample", False)),
            status=data.get("status") or RegistrationStatus.COMPLETED.value,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "owner": self.owner.to_dict(),
            "animals": [a.to_dict() for a in self.animals],
            "synced": self.synced,
            "is_sample": self.is_sample,
            "status": self.status,
        }

    @property
    def is_draft(self) -> bool:
        return self.status == RegistrationStatus.DRAFT.value

    @property
    def is_completed(self) -> bool:
        return not self.is_draft

    @property
    def analysis_outcome(self) -> AnalysisOutcome:
        succeeded = sum(1 for a in self.animals if a.ai_result.succeeded)
        if succeeded == len(self.animals):
            return AnalysisOutcome.SUCCESS
        if succeeded > 0:
            return AnalysisOutcome.PARTIAL
        return AnalysisOutcome.FAILED

    def find_animal(self, animal_id: str) -> AnimalResult | None:
        for animal in self.animals:
            if animal.id == animal_id:
                return animal
        return None

    def with_animal(self, updated: AnimalResult) -> Registration:
        """Return a copy with the animal of the same id replaced."""
        animals = [updated if a.id == updated.id else a for a in self.animals]
        return replace(self, animals=animals)

    def mark_synced(self) -> Registration:
        return replace(self, synced=True)
