from __future__ import annotations

import csv
import io
from datetime import timezone

from pashuvision.domain.models.breed_identification import english_text
from pashuvision.domain.models.registration import Registration

CSV_FILENAME = "pashuvision_registrations.csv"

CSV_HEADERS = [
    "Registration ID",
    "Timestamp",
    "Sync Status",
    "Owner Name",
    "Owner Mobile",
    "Owner ID Type",
    "Owner ID Number",
    "Owner State",
    "Owner District",
    "Owner Village",
    "Animal UID",
    "Species",
    "Sex",
    "Age",
    "Breed Name",
    "Confidence",
    "AI Analysis Status",
    "AI Reasoning",
    "Milk Yield Potential",
    "Care Notes",
    "AI Error",
]


def _timestamp(registration: Registration) -> str:
    utc = registration.timestamp.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def registration_rows(registration: Registration) -> list[list[str]]:
    """One row per animal."""
    owner = registration.owner
    rows = []
    for animal in registration.animals:
        ai = animal.ai_result
        rows.append(
            [
                registration.id,
                _timestamp(registration),
                "Synced" if registration.synced else "Pending",
                owner.name,
                owner.mobile,
                owner.id_type,
                owner.id_number,
                owner.state,
                owner.district,
                owner.village,
                animal.id,
                animal.species,
                animal.sex,
                animal.age_label,
                ai.breed_name,
                str(ai.confidence),
                "Failed" if ai.error else "Success",
                english_text(ai.reasoning),
                english_text(ai.milk_yield_potential),
                english_text(ai.care_notes),
                ai.error or "",
            ]
        )
    return rows


def export_registrations_csv(registrations: list[Registration]) -> str:
    """Render completed registrations as CSV text with CRLF line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(CSV_HEADERS)
    for registration in registrations:
        if registration.is_completed:
            writer.writerows(registration_rows(registration))
    return buffer.getvalue()
