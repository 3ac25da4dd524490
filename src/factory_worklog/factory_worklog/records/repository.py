from __future__ import annotations

from typing import List, Protocol

from .model import PersonnelRecord


class RecordStore(Protocol):
    """Async CRUD façade over the ordered list of personnel records.

    Implementations raise `StorageError` when the medium is unreadable or a
    write fails. Local and remote stores share this contract so the form
    never needs to know which one it talks to.
    """

    async def fetch_all(self) -> List[PersonnelRecord]:
        raise NotImplementedError

    async def upsert(self, record: PersonnelRecord) -> None:
        """Replace the entry with the same id in place, or append it."""

        raise NotImplementedError

    async def remove(self, record_id: str) -> None:
        """Delete by id; an unknown id is not an error."""

        raise NotImplementedError
