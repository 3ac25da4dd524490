from __future__ import annotations

from enum import Enum


class PersonnelStatus(str, Enum):
    """Presence status of an operator for the day (stored as the Persian label)."""

    PRESENT = "حاضر"
    LEAVE = "مرخصی"
    SICK_LEAVE = "استعلاجی"


class AdvanceValidation(str, Enum):
    """When `next` enforces validation before auto-saving."""

    NEW_ONLY = "new_only"
    ALWAYS = "always"


class StoreBackend(str, Enum):
    JSON = "json"
    MYSQL = "mysql"
