"""JSON schemas passed as ``response_format`` to the chat completions API."""

from __future__ import annotations

from typing import Any

from pashuvision.domain.value_objects.species import Confidence, Sex, Species

SPECIES_VALUES = [s.value for s in Species]

_TRANSLATABLE = {
    "type": "object",
    "properties": {
        "en": {"type": "string", "description": "The content in English."},
        "hi": {"type": "string", "description": "The content in Hindi."},
    },
    "required": ["en", "hi"],
}

_BREED_CHOICE = {
    "type": "object",
    "properties": {
        "breed_name": {"type": "string", "description": "A potential breed from the list."},
        "confidence_percentage": {
            "type": "integer",
            "description": "Confidence in this breed as a percentage.",
        },
    },
    "required": ["breed_name", "confidence_percentage"],
}

BREED_IDENTIFICATION: dict[str, Any] = {
    "type": "object",
    "properties": {
        "error": {
            "type": "string",
            "description": "Why validation failed, or the string 'null' on success.",
        },
        "species": {"type": "string", "enum": SPECIES_VALUES},
        "breed_name": {"type": "string"},
        "confidence": {"type": "integer", "minimum": 0, "maximum": 100},
        "milk_yield_potential": _TRANSLATABLE,
        "care_notes": _TRANSLATABLE,
        "reasoning": _TRANSLATABLE,
        "top_candidates": {
            "type": "array",
            "description": "Only when confidence is below 75: the top 3 breeds, percentages sum to 100.",
            "items": _BREED_CHOICE,
        },
    },
    "required": [
        "error",
        "species",
        "breed_name",
        "confidence",
        "milk_yield_potential",
        "care_notes",
        "reasoning",
    ],
}

ANIMAL_DETAILS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "error": {"type": "string"},
        "animals": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "species": {"type": "string", "enum": SPECIES_VALUES},
                    "sex": {"type": "string", "enum": [s.value for s in Sex]},
                    "sex_confidence": {
                        "type": "string",
                        "enum": [c.value for c in Confidence],
                    },
                },
                "required": ["species", "sex", "sex_confidence"],
            },
        },
    },
    "required": ["error", "animals"],
}

SCHEMES: dict[str, Any] = {
    "type": "object",
    "properties": {
        "schemes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "scheme_name": {"type": "string"},
                    "issuing_body": {"type": "string"},
                    "description": {"type": "string"},
                    "eligibility": {"type": "string"},
                    "health_check_required": {"type": "boolean"},
                    "health_check_frequency": {"type": "string"},
                },
                "required": [
                    "scheme_name",
                    "issuing_body",
                    "description",
                    "eligibility",
                    "health_check_required",
                    "health_check_frequency",
                ],
            },
        }
    },
    "required": ["schemes"],
}

VACCINATIONS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "suggestions": {
            "type": "array",
            "description": "3-5 of the most critical vaccination recommendations.",
            "items": {
                "type": "object",
                "properties": {
                    "vaccine_name": {"type": "string"},
                    "schedule": {"type": "string"},
                    "importance": {"type": "string"},
                },
                "required": ["vaccine_name", "schedule", "importance"],
            },
        }
    },
    "required": ["suggestions"],
}


def response_format(name: str, schema: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "schema": schema, "strict": False},
    }
