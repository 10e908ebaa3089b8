from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    UNDISCLOSED = "Prefer not to say"


class IdType(str, Enum):
    AADHAAR = "Aadhaar"
    VOTER_ID = "Voter ID"
    RATION_CARD = "Ration Card"
    PASSPORT = "Passport"


class CasteCategory(str, Enum):
    GENERAL = "General"
    OBC = "OBC"
    SC = "SC"
    ST = "ST"
