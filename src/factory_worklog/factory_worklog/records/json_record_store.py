from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Mapping, Optional

from ..core.constants import DEFAULT_STORE_LATENCY, DEFAULT_STORE_SLOT
from ..core.exceptions import StorageError
from .model import PersonnelRecord
from .repository import RecordStore

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """Local key-value storage: a JSON document on disk, records kept under one slot.

    Every operation waits for an artificial latency first so callers behave
    the same way they would against a slow remote backend.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        slot: str = DEFAULT_STORE_SLOT,
        latency: Optional[Mapping[str, float]] = None,
    ):
        self._path = Path(path)
        self._slot = slot
        self._latency = dict(DEFAULT_STORE_LATENCY)
        if latency is not None:
            self._latency.update(latency)

    @property
    def path(self) -> Path:
        return self._path

    async def _delay(self, operation: str) -> None:
        seconds = float(self._latency.get(operation, 0) or 0)
        if seconds > 0:
            await asyncio.sleep(seconds)

    def _read_document(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read record store {self._path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Record store {self._path} is corrupt: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"Record store {self._path} is corrupt: expected an object")
        return document

    def _read_slot(self) -> List[dict]:
        items = self._read_document().get(self._slot) or []
        if not isinstance(items, list):
            raise StorageError(f"Slot {self._slot!r} is corrupt: expected a list")
        return items

    def _write_slot(self, items: List[dict]) -> None:
        document = self._read_document()
        document[self._slot] = items
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write record store {self._path}: {e}") from e

    def _load_records(self) -> List[PersonnelRecord]:
        items = self._read_slot()
        try:
            return [PersonnelRecord.from_dict(item) for item in items]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Slot {self._slot!r} holds an invalid record: {e}") from e

    def _store_record(self, record: PersonnelRecord) -> int:
        items = self._read_slot()
        data = record.to_dict()

        for i, item in enumerate(items):
            if isinstance(item, dict) and item.get("id") == record.id:
                items[i] = data
                break
        else:
            items.append(data)

        self._write_slot(items)
        return len(items)

    def _drop_record(self, record_id: str) -> bool:
        if not self._path.exists():
            return False
        items = self._read_slot()
        kept = [item for item in items if not (isinstance(item, dict) and item.get("id") == record_id)]
        if len(kept) == len(items):
            return False
        self._write_slot(kept)
        return True

    # File access runs in a worker thread so the event loop stays responsive.

    async def fetch_all(self) -> List[PersonnelRecord]:
        await self._delay("fetch")
        return await asyncio.to_thread(self._load_records)

    async def upsert(self, record: PersonnelRecord) -> None:
        await self._delay("upsert")
        count = await asyncio.to_thread(self._store_record, record)
        logger.debug("Stored record %s (%d in slot %s)", record.id, count, self._slot)

    async def remove(self, record_id: str) -> None:
        await self._delay("remove")
        if await asyncio.to_thread(self._drop_record, record_id):
            logger.debug("Removed record %s from slot %s", record_id, self._slot)
