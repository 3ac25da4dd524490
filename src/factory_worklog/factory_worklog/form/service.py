from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from ..common.validators import require_hh_mm
from ..core.constants import SAVED_INDICATOR_SECONDS
from ..core.enums import AdvanceValidation, PersonnelStatus
from ..core.exceptions import OperationInProgressError, StorageError, ValidationError
from ..operators.catalog import ProductCatalog
from ..operators.directory import OperatorDirectory
from ..records.model import PersonnelRecord, WorkLog, new_empty_record, new_work_log
from ..records.repository import RecordStore
from . import validation

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "در حال ارتباط با سرور..."

RECORD_FIELDS = ("date", "operatorCode", "status", "entryTime", "exitTime")
LOG_FIELDS = {"productDescription": "product_description", "startTime": "start_time", "endTime": "end_time"}


def parse_status(value) -> PersonnelStatus:
    """Accept the enum, its Persian label or its name (e.g. "SICK_LEAVE")."""
    if isinstance(value, PersonnelStatus):
        return value
    try:
        return PersonnelStatus(value)
    except ValueError:
        pass
    try:
        return PersonnelStatus[str(value).strip().upper()]
    except KeyError:
        raise ValidationError("وضعیت نامعتبر است", {"status": "وضعیت نامعتبر است"})


class FormService:
    """Use case: edit the daily personnel records one at a time.

    Navigation state is `Editing(index)` with index in [0, length]; index ==
    length is the unsaved new record. Store calls are awaited one at a time:
    a second save/delete/next/prev while one is in flight raises
    OperationInProgressError, and a failed store call leaves the form as it
    was.
    """

    def __init__(
        self,
        store: RecordStore,
        operators: OperatorDirectory,
        products: Optional[ProductCatalog] = None,
        *,
        advance_validation: AdvanceValidation = AdvanceValidation.NEW_ONLY,
        saved_indicator_seconds: float = SAVED_INDICATOR_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self._operators = operators
        self._products = products
        self._advance_validation = AdvanceValidation(advance_validation)
        self._saved_indicator_seconds = float(saved_indicator_seconds)
        self._clock = clock

        self._records: List[PersonnelRecord] = []
        self._index = 0
        self._current = new_empty_record()
        self._errors: Dict[str, str] = {}
        self._saved_at: Optional[float] = None
        self._in_flight = threading.Lock()

    # ----- read side -----

    @property
    def records(self) -> Tuple[PersonnelRecord, ...]:
        return tuple(self._records)

    @property
    def current(self) -> PersonnelRecord:
        return self._current

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return len(self._records)

    @property
    def is_new(self) -> bool:
        return self._index >= len(self._records)

    @property
    def is_absent(self) -> bool:
        return not self._current.is_present

    @property
    def is_busy(self) -> bool:
        return self._in_flight.locked()

    @property
    def is_saved(self) -> bool:
        if self._saved_at is None:
            return False
        return self._clock() - self._saved_at < self._saved_indicator_seconds

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    @property
    def position_label(self) -> str:
        return f"رکورد {self._index + 1} از {max(len(self._records), self._index + 1)}"

    def snapshot(self) -> dict:
        return {
            "record": self._current.to_dict(),
            "index": self._index,
            "length": len(self._records),
            "position": self.position_label,
            "isNew": self.is_new,
            "isAbsent": self.is_absent,
            "isSaved": self.is_saved,
            "isBusy": self.is_busy,
            "errors": self.errors,
        }

    def export_records(self) -> List[PersonnelRecord]:
        """Stored records with the on-screen edits overlaid.

        An unsaved new record is included once it has an operator code.
        """
        records = list(self._records)
        for i, r in enumerate(records):
            if r.id == self._current.id:
                records[i] = self._current
                break
        else:
            if self._current.operator_code:
                records.append(self._current)
        return records

    # ----- in-flight guard -----

    @contextmanager
    def _guard(self):
        if not self._in_flight.acquire(blocking=False):
            raise OperationInProgressError(BUSY_MESSAGE)
        try:
            yield
        finally:
            self._in_flight.release()

    # ----- state helpers -----

    def _show(self, index: int) -> None:
        self._index = index
        self._current = self._records[index]
        self._errors = {}
        self._saved_at = None

    def _start_new_record(self) -> None:
        self._index = len(self._records)
        self._current = new_empty_record()
        self._errors = {}
        self._saved_at = None

    def _remember(self, record: PersonnelRecord) -> None:
        for i, r in enumerate(self._records):
            if r.id == record.id:
                self._records[i] = record
                return
        self._records.append(record)

    def _edit(self, record: PersonnelRecord, clear: Tuple[str, ...] = ()) -> None:
        self._current = record
        for key in clear:
            self._errors.pop(key, None)
        self._saved_at = None

    # ----- lifecycle -----

    async def load(self) -> None:
        with self._guard():
            try:
                records = await self._store.fetch_all()
            except StorageError as e:
                logger.warning("Could not load records, starting with an empty form: %s", e)
                records = []

            self._records = list(records)
            if self._records:
                self._show(0)
            else:
                self._start_new_record()
            logger.info("Form loaded with %d record(s)", len(self._records))

    def validate(self) -> bool:
        self._errors = validation.validate_record(self._current, self._products)
        return not self._errors

    async def save(self) -> PersonnelRecord:
        with self._guard():
            record = self._current
            if not self.validate():
                raise ValidationError(validation.FORM_INVALID_MESSAGE, self._errors)

            await self._store.upsert(record)
            self._remember(record)
            self._saved_at = self._clock()
            logger.info("Saved record %s (operator %s)", record.id, record.operator_code or "-")
            return record

    async def next(self) -> PersonnelRecord:
        """Auto-save the current record, then move forward.

        Validation blocks the move only on the new record unless the policy
        is ALWAYS; existing records are saved as they are.
        """
        with self._guard():
            record = self._current
            enforce = self._advance_validation == AdvanceValidation.ALWAYS or self.is_new
            if enforce and not self.validate():
                raise ValidationError(validation.ADVANCE_INVALID_MESSAGE, self._errors)

            await self._store.upsert(record)
            self._remember(record)

            if self._index < len(self._records) - 1:
                self._show(self._index + 1)
            else:
                self._start_new_record()
            return self._current

    def prev(self) -> bool:
        """Step back one record, dropping unsaved edits to the one being left."""
        with self._guard():
            if self._index <= 0:
                return False
            self._show(self._index - 1)
            return True

    async def delete(self) -> None:
        with self._guard():
            record_id = self._current.id
            await self._store.remove(record_id)

            self._records = [r for r in self._records if r.id != record_id]
            logger.info("Deleted record %s (%d left)", record_id, len(self._records))
            if self._records:
                self._show(max(0, self._index - 1))
            else:
                self._start_new_record()

    # ----- edits -----
    # Edits hold the in-flight guard too, so a save/next cannot start between
    # reading the current record and replacing it.

    def set_field(self, field: str, value) -> PersonnelRecord:
        if field not in RECORD_FIELDS:
            raise ValidationError(f"فیلد {field} قابل ویرایش نیست", {field: "قابل ویرایش نیست"})

        with self._guard():
            record = self._current
            clear = validation.keys_touched_by(field)

            if field == "status":
                record = record.with_changes(status=parse_status(value))
            elif field == "date":
                record = record.with_changes(date=str(value or ""))
            elif field == "operatorCode":
                code = str(value or "")
                operator = self._operators.lookup(code)
                if operator:
                    record = record.with_changes(
                        operator_code=code, full_name=operator.full_name, machine_code=operator.machine_code
                    )
                    clear = clear + (validation.FULL_NAME,)
                else:
                    record = record.with_changes(operator_code=code, full_name="", machine_code="")
            elif field == "entryTime":
                record = record.with_changes(entry_time=require_hh_mm(value, field))
            elif field == "exitTime":
                record = record.with_changes(exit_time=require_hh_mm(value, field))

            self._edit(record, clear)
            return record

    def set_status(self, status) -> PersonnelRecord:
        return self.set_field("status", status)

    def add_work_log(self) -> WorkLog:
        with self._guard():
            log = new_work_log()
            self._edit(self._current.with_changes(work_logs=self._current.work_logs + (log,)))
            return log

    def update_work_log(self, log_id: str, field: str, value) -> WorkLog:
        attr = LOG_FIELDS.get(field)
        if attr is None:
            raise ValidationError(f"فیلد {field} قابل ویرایش نیست", {field: "قابل ویرایش نیست"})

        with self._guard():
            log = self._current.find_log(log_id)
            if log is None:
                raise ValidationError("ردیف مورد نظر یافت نشد", {"workLogs": "ردیف مورد نظر یافت نشد"})

            if attr == "product_description":
                value = str(value or "")
            else:
                value = require_hh_mm(value, field)

            updated = replace(log, **{attr: value})
            logs = tuple(updated if w.id == log_id else w for w in self._current.work_logs)
            self._edit(self._current.with_changes(work_logs=logs), validation.log_keys_touched_by(log_id, field))
            return updated

    def remove_work_log(self, log_id: str) -> None:
        with self._guard():
            logs = tuple(w for w in self._current.work_logs if w.id != log_id)
            self._edit(self._current.with_changes(work_logs=logs), validation.log_keys(log_id))
