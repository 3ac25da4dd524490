from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Operator:
    """Lookup-table row: operator code -> name and assigned machine."""

    code: str
    full_name: str
    machine_code: str
