from __future__ import annotations

from typing import Container, Dict, Optional, Tuple

from ..common.time_utils import minutes_since_midnight
from ..common.validators import is_blank
from ..records.model import PersonnelRecord

# Stable error keys addressed by the presentation layer.
DATE = "date"
OPERATOR_CODE = "operatorCode"
FULL_NAME = "fullName"
TIME_RANGE = "timeRange"

MESSAGES = {
    DATE: "تاریخ الزامی است",
    OPERATOR_CODE: "کد اپراتور الزامی است",
    FULL_NAME: "نام پرسنل نامعتبر است",
    TIME_RANGE: "ساعت خروج باید بعد از ورود باشد",
    "log_product": "محصول را انتخاب کنید",
    "log_time": "پایان باید بعد از شروع باشد",
    "log_range": "باید در بازه حضور باشد",
}

FORM_INVALID_MESSAGE = "لطفا خطاهای موجود در فرم را برطرف کنید."
ADVANCE_INVALID_MESSAGE = "لطفا اطلاعات را تکمیل کنید."


def log_product_key(log_id: str) -> str:
    return f"log_product_{log_id}"


def log_time_key(log_id: str) -> str:
    return f"log_time_{log_id}"


def log_range_key(log_id: str) -> str:
    return f"log_range_{log_id}"


def log_keys(log_id: str) -> Tuple[str, ...]:
    return log_product_key(log_id), log_time_key(log_id), log_range_key(log_id)


def keys_touched_by(field: str) -> Tuple[str, ...]:
    """Error keys that an edit of a record-level field invalidates."""
    if field in ("entryTime", "exitTime"):
        return (TIME_RANGE,)
    if field == OPERATOR_CODE:
        return (OPERATOR_CODE,)
    if field == DATE:
        return (DATE,)
    return ()


def log_keys_touched_by(log_id: str, field: str) -> Tuple[str, ...]:
    if field == "productDescription":
        return (log_product_key(log_id),)
    if field in ("startTime", "endTime"):
        return log_time_key(log_id), log_range_key(log_id)
    return ()


def validate_record(record: PersonnelRecord, products: Optional[Container[str]] = None) -> Dict[str, str]:
    """Return a field-key -> message map; the record is valid iff it is empty.

    Nothing is checked for LEAVE or SICK_LEAVE: such a record has no
    countable work. The presence window itself must not cross midnight.
    """

    errors: Dict[str, str] = {}
    if not record.is_present:
        return errors

    if is_blank(record.date):
        errors[DATE] = MESSAGES[DATE]
    if is_blank(record.operator_code):
        errors[OPERATOR_CODE] = MESSAGES[OPERATOR_CODE]
    if is_blank(record.full_name):
        errors[FULL_NAME] = MESSAGES[FULL_NAME]

    entry_min = minutes_since_midnight(record.entry_time)
    exit_min = minutes_since_midnight(record.exit_time)
    if exit_min <= entry_min:
        errors[TIME_RANGE] = MESSAGES[TIME_RANGE]

    for log in record.work_logs:
        start_min = minutes_since_midnight(log.start_time)
        end_min = minutes_since_midnight(log.end_time)

        if not log.product_description or (products is not None and log.product_description not in products):
            errors[log_product_key(log.id)] = MESSAGES["log_product"]
        if end_min <= start_min:
            errors[log_time_key(log.id)] = MESSAGES["log_time"]
        if start_min < entry_min or end_min > exit_min:
            errors[log_range_key(log.id)] = MESSAGES["log_range"]

    return errors
