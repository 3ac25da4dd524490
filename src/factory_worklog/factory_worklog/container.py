from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .core.constants import DEFAULT_STORE_SLOT, SAVED_INDICATOR_SECONDS
from .core.enums import AdvanceValidation, StoreBackend
from .database.connection import DBConfig, DatabaseConnection
from .export.service import WorkReportExporter
from .form.service import FormService
from .operators.catalog import ProductCatalog, load_products
from .operators.directory import OperatorDirectory, load_operators
from .records.json_record_store import JsonFileRecordStore
from .records.mysql_record_store import MySQLRecordStore
from .records.repository import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    record_store: RecordStore
    operators: OperatorDirectory
    products: ProductCatalog

    form_service: FormService
    exporter: WorkReportExporter

    conn: Optional[DatabaseConnection] = None


def build_record_store(settings: Any) -> tuple[RecordStore, Optional[DatabaseConnection]]:
    backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", StoreBackend.JSON.value)).lower())
    if backend == StoreBackend.MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        return MySQLRecordStore(conn), conn

    store = JsonFileRecordStore(
        getattr(settings, "STORE_PATH"),
        slot=getattr(settings, "STORE_SLOT", DEFAULT_STORE_SLOT),
        latency=getattr(settings, "STORE_LATENCY", None),
    )
    return store, None


def build_container(settings: Any, *, record_store: Optional[RecordStore] = None) -> Container:
    conn = None
    if record_store is None:
        record_store, conn = build_record_store(settings)
    logger.info("Record store: %s", type(record_store).__name__)

    operators = load_operators(getattr(settings, "OPERATORS_FILE", "") or None)
    products = load_products(getattr(settings, "PRODUCTS_FILE", "") or None)

    form_service = FormService(
        record_store,
        operators,
        products,
        advance_validation=AdvanceValidation(getattr(settings, "ADVANCE_VALIDATION", AdvanceValidation.NEW_ONLY.value)),
        saved_indicator_seconds=float(getattr(settings, "SAVED_INDICATOR_SECONDS", SAVED_INDICATOR_SECONDS)),
    )

    return Container(
        record_store=record_store,
        operators=operators,
        products=products,
        form_service=form_service,
        exporter=WorkReportExporter(),
        conn=conn,
    )
