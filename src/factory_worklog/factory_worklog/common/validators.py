from __future__ import annotations

from ..core.exceptions import ValidationError

_DIGITS = str.maketrans("۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩", "01234567890123456789")


def normalize_digits(value: str) -> str:
    """Map Persian and Arabic-Indic digits to ASCII."""
    return (value or "").translate(_DIGITS)


def is_blank(value) -> bool:
    return not value or not str(value).strip()


def require_hh_mm(value: str, field_name: str) -> str:
    """Accept "H:MM" / "HH:MM" on the 24h clock and return it zero-padded."""
    try:
        hours, minutes = (int(p) for p in str(value).strip().split(":"))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name}: ساعت نامعتبر است", {field_name: "ساعت نامعتبر است"})
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValidationError(f"{field_name}: ساعت نامعتبر است", {field_name: "ساعت نامعتبر است"})
    return f"{hours:02d}:{minutes:02d}"
