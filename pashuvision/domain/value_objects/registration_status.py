from __future__ import annotations

from enum import Enum


class RegistrationStatus(str, Enum):
    DRAFT = "Draft"
    COMPLETED = "Completed"


class AnalysisOutcome(str, Enum):
    """Aggregate AI outcome of a registration's animals."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
