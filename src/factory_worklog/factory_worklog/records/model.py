from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Tuple

from ..common.time_utils import duration, generate_id, now_millis, today_display
from ..core.constants import (
    DEFAULT_ENTRY_TIME,
    DEFAULT_EXIT_TIME,
    DEFAULT_LOG_END_TIME,
    DEFAULT_LOG_START_TIME,
)
from ..core.enums import PersonnelStatus


@dataclass(frozen=True)
class WorkLog:
    """One itemized task with its own time span and product."""

    id: str
    product_description: str = ""
    start_time: str = DEFAULT_LOG_START_TIME
    end_time: str = DEFAULT_LOG_END_TIME

    @property
    def duration(self) -> str:
        return duration(self.start_time, self.end_time)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productDescription": self.product_description,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkLog":
        return cls(
            id=str(data["id"]),
            product_description=str(data.get("productDescription") or ""),
            start_time=str(data.get("startTime") or ""),
            end_time=str(data.get("endTime") or ""),
        )


@dataclass(frozen=True)
class PersonnelRecord:
    """Daily personnel record for one operator.

    `total_presence` is derived from entry/exit on every read and is never
    stored as an independent value.
    """

    id: str
    date: str
    operator_code: str = ""
    full_name: str = ""
    machine_code: str = ""
    status: PersonnelStatus = PersonnelStatus.PRESENT
    entry_time: str = DEFAULT_ENTRY_TIME
    exit_time: str = DEFAULT_EXIT_TIME
    work_logs: Tuple[WorkLog, ...] = field(default_factory=tuple)
    created_at: int = 0

    @property
    def total_presence(self) -> str:
        return duration(self.entry_time, self.exit_time)

    @property
    def is_present(self) -> bool:
        return self.status == PersonnelStatus.PRESENT

    def with_changes(self, **changes) -> "PersonnelRecord":
        return replace(self, **changes)

    def find_log(self, log_id: str) -> WorkLog | None:
        return next((log for log in self.work_logs if log.id == log_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "operatorCode": self.operator_code,
            "fullName": self.full_name,
            "machineCode": self.machine_code,
            "status": self.status.value,
            "entryTime": self.entry_time,
            "exitTime": self.exit_time,
            "totalPresence": self.total_presence,
            "workLogs": [log.to_dict() for log in self.work_logs],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonnelRecord":
        # totalPresence is ignored on load; it is recomputed from entry/exit.
        return cls(
            id=str(data["id"]),
            date=str(data.get("date") or ""),
            operator_code=str(data.get("operatorCode") or ""),
            full_name=str(data.get("fullName") or ""),
            machine_code=str(data.get("machineCode") or ""),
            status=PersonnelStatus(data.get("status") or PersonnelStatus.PRESENT.value),
            entry_time=str(data.get("entryTime") or ""),
            exit_time=str(data.get("exitTime") or ""),
            work_logs=tuple(WorkLog.from_dict(log) for log in data.get("workLogs") or []),
            created_at=int(data.get("createdAt") or 0),
        )


def new_work_log() -> WorkLog:
    return WorkLog(id=generate_id())


def new_empty_record() -> PersonnelRecord:
    """Fresh form: default presence window and a single empty work log."""
    return PersonnelRecord(
        id=generate_id(),
        date=today_display(),
        work_logs=(new_work_log(),),
        created_at=now_millis(),
    )
