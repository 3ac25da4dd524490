from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, List, Optional

import pandas as pd

from ..common.time_utils import now_millis
from ..core.constants import EXPORT_FILENAME_PREFIX, EXPORT_SHEET_NAME
from ..core.exceptions import ValidationError
from ..records.model import PersonnelRecord

# Fixed column order of the exported sheet.
COLUMNS = [
    "تاریخ",
    "کد اپراتور",
    "نام و نام خانوادگی",
    "کد دستگاه",
    "وضعیت",
    "ساعت ورود",
    "ساعت خروج",
    "نام محصول",
    "شروع کار",
    "پایان کار",
]

NOTHING_TO_EXPORT = "اطلاعاتی برای خروجی وجود ندارد."

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes


def flatten_records(records: Iterable[PersonnelRecord]) -> List[dict]:
    """One row per work log; a record with no logs yields no rows."""
    rows: List[dict] = []
    for record in records:
        for log in record.work_logs:
            rows.append(
                dict(
                    zip(
                        COLUMNS,
                        [
                            record.date or "",
                            record.operator_code,
                            record.full_name,
                            record.machine_code,
                            record.status.value,
                            record.entry_time,
                            record.exit_time,
                            log.product_description,
                            log.start_time,
                            log.end_time,
                        ],
                    )
                )
            )
    return rows


class WorkReportExporter:
    """Builds the daily work report workbook (right-to-left sheet)."""

    def __init__(self, *, sheet_name: str = EXPORT_SHEET_NAME, filename_prefix: str = EXPORT_FILENAME_PREFIX):
        self._sheet_name = sheet_name
        self._filename_prefix = filename_prefix

    def filename(self, timestamp_ms: Optional[int] = None) -> str:
        return f"{self._filename_prefix}{timestamp_ms if timestamp_ms is not None else now_millis()}.xlsx"

    def build(self, records: Iterable[PersonnelRecord], *, timestamp_ms: Optional[int] = None) -> ExportFile:
        records = list(records)
        if not records:
            raise ValidationError(NOTHING_TO_EXPORT)

        df = pd.DataFrame(flatten_records(records), columns=COLUMNS)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=self._sheet_name)
            writer.sheets[self._sheet_name].sheet_view.rightToLeft = True

        return ExportFile(filename=self.filename(timestamp_ms), content=output.getvalue())
