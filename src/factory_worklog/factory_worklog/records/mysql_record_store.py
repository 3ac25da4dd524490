from __future__ import annotations

import asyncio
import logging
from typing import List

import mysql.connector

from ..core.enums import PersonnelStatus
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PersonnelRecord, WorkLog
from .repository import RecordStore

logger = logging.getLogger(__name__)


class MySQLRecordStore(RecordStore):
    """Remote store with the same contract as the local JSON slot.

    Order is kept through a `position` column on both tables.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    async def _run(self, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except mysql.connector.Error as e:
            logger.error("MySQL record store failure: %s", e)
            raise StorageError(str(e)) from e

    async def fetch_all(self) -> List[PersonnelRecord]:
        return await self._run(self._fetch_all)

    async def upsert(self, record: PersonnelRecord) -> None:
        await self._run(self._upsert, record)

    async def remove(self, record_id: str) -> None:
        await self._run(self._remove, record_id)

    def _fetch_all(self) -> List[PersonnelRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, record_date, operator_code, full_name, machine_code,
                       status, entry_time, exit_time, created_at
                FROM personnel_records
                ORDER BY position
                """
            )
            rows = fetchall(cur)

            cur.execute(
                """
                SELECT log_id, record_id, product_description, start_time, end_time
                FROM work_logs
                ORDER BY record_id, position
                """
            )
            logs_by_record: dict[str, list[WorkLog]] = {}
            for r in fetchall(cur):
                logs_by_record.setdefault(r["record_id"], []).append(
                    WorkLog(
                        id=r["log_id"],
                        product_description=r["product_description"] or "",
                        start_time=r["start_time"] or "",
                        end_time=r["end_time"] or "",
                    )
                )

        return [
            PersonnelRecord(
                id=r["record_id"],
                date=r["record_date"] or "",
                operator_code=r["operator_code"] or "",
                full_name=r["full_name"] or "",
                machine_code=r["machine_code"] or "",
                status=PersonnelStatus(r["status"]),
                entry_time=r["entry_time"] or "",
                exit_time=r["exit_time"] or "",
                work_logs=tuple(logs_by_record.get(r["record_id"], [])),
                created_at=int(r["created_at"] or 0),
            )
            for r in rows
        ]

    def _upsert(self, record: PersonnelRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(position), -1) + 1 AS next_pos FROM personnel_records")
            next_pos = int(cur.fetchone()["next_pos"])

            # position is left untouched on update so existing entries keep their place.
            cur.execute(
                """
                INSERT INTO personnel_records(
                    record_id, position, record_date, operator_code, full_name, machine_code,
                    status, entry_time, exit_time, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    record_date=VALUES(record_date),
                    operator_code=VALUES(operator_code),
                    full_name=VALUES(full_name),
                    machine_code=VALUES(machine_code),
                    status=VALUES(status),
                    entry_time=VALUES(entry_time),
                    exit_time=VALUES(exit_time)
                """,
                (
                    record.id,
                    next_pos,
                    record.date,
                    record.operator_code,
                    record.full_name,
                    record.machine_code,
                    record.status.value,
                    record.entry_time,
                    record.exit_time,
                    record.created_at,
                ),
            )

            cur.execute("DELETE FROM work_logs WHERE record_id=%s", (record.id,))
            if record.work_logs:
                cur.executemany(
                    """
                    INSERT INTO work_logs(log_id, record_id, position, product_description, start_time, end_time)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (log.id, record.id, i, log.product_description, log.start_time, log.end_time)
                        for i, log in enumerate(record.work_logs)
                    ],
                )

    def _remove(self, record_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_logs WHERE record_id=%s", (record_id,))
            cur.execute("DELETE FROM personnel_records WHERE record_id=%s", (record_id,))
