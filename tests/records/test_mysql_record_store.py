from __future__ import annotations

import asyncio

import mysql.connector
import pytest

from src.factory_worklog.factory_worklog.core.enums import PersonnelStatus
from src.factory_worklog.factory_worklog.core.exceptions import StorageError
from src.factory_worklog.factory_worklog.records.model import PersonnelRecord, WorkLog
from src.factory_worklog.factory_worklog.records.mysql_record_store import MySQLRecordStore


class FakeCursor:
    def __init__(self, results):
        self._results = list(results)
        self.executed = []
        self._last = None

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))
        self._last = self._results.pop(0) if self._results else []

    def executemany(self, sql, rows):
        self.executed.append((" ".join(sql.split()), list(rows)))

    def fetchall(self):
        return self._last

    def fetchone(self):
        return self._last[0] if self._last else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, results=None, error=None):
        self.cursor = FakeCursor(results or [])
        self.connection = FakeConnection(self.cursor)
        self._error = error

    def connect(self):
        if self._error:
            raise self._error
        return self.connection


def test_fetch_all_groups_logs_under_records_in_order():
    factory = FakeConnFactory(
        results=[
            [
                {
                    "record_id": "a",
                    "record_date": "1403/01/01",
                    "operator_code": "47",
                    "full_name": "کبرا نعمتی",
                    "machine_code": "1382",
                    "status": "مرخصی",
                    "entry_time": "08:00",
                    "exit_time": "16:00",
                    "created_at": 5,
                }
            ],
            [
                {"log_id": "l1", "record_id": "a", "product_description": "نخ", "start_time": "08:00", "end_time": "09:00"},
                {"log_id": "l2", "record_id": "a", "product_description": None, "start_time": "09:00", "end_time": "10:00"},
            ],
        ]
    )

    records = asyncio.run(MySQLRecordStore(factory).fetch_all())

    assert len(records) == 1
    assert records[0].status == PersonnelStatus.LEAVE
    assert [w.id for w in records[0].work_logs] == ["l1", "l2"]
    assert records[0].work_logs[1].product_description == ""
    assert factory.connection.committed


def test_upsert_rewrites_work_logs_with_positions():
    factory = FakeConnFactory(results=[[{"next_pos": 3}]])
    record = PersonnelRecord(
        id="a",
        date="1403/01/01",
        work_logs=(WorkLog(id="l1"), WorkLog(id="l2")),
    )

    asyncio.run(MySQLRecordStore(factory).upsert(record))

    statements = [sql for sql, _ in factory.cursor.executed]
    assert statements[1].startswith("INSERT INTO personnel_records")
    assert "ON DUPLICATE KEY UPDATE" in statements[1]
    assert factory.cursor.executed[1][1][1] == 3
    assert statements[2].startswith("DELETE FROM work_logs")
    rows = factory.cursor.executed[3][1]
    assert [(r[0], r[2]) for r in rows] == [("l1", 0), ("l2", 1)]


def test_driver_errors_become_storage_errors():
    store = MySQLRecordStore(FakeConnFactory(error=mysql.connector.Error("connection refused")))

    with pytest.raises(StorageError):
        asyncio.run(store.fetch_all())
    with pytest.raises(StorageError):
        asyncio.run(store.remove("a"))
