from __future__ import annotations

from enum import Enum


class Species(str, Enum):
    CATTLE = "Cattle"
    BUFFALO = "Buffalo"


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class AgeUnit(str, Enum):
    YEARS = "Years"
    MONTHS = "Months"


class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
