"""Format predicates used by the record validator. All are total: bad input -> False."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Optional

_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_SSN = re.compile(r"[0-9]{3}-[0-9]{2}-[0-9]{4}")
_MASKED_SSN = re.compile(r"XXX-XX-[0-9]{4}")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_STATE = re.compile(r"[A-Za-z]{2}")
_ZIP = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")
_ROUTING = re.compile(r"[0-9]{9}")

FLSA_STATUSES = ("Exempt", "Non-Exempt")
PAY_FREQUENCIES = ("Weekly", "Bi-weekly", "Semi-monthly", "Monthly")


def is_valid_date(value: str) -> bool:
    """YYYY-MM-DD and a real calendar day."""
    if not _DATE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_ssn(value: str) -> bool:
    return bool(_SSN.fullmatch(value) or _MASKED_SSN.fullmatch(value))


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL.fullmatch(value))


def is_valid_state_code(value: str) -> bool:
    return bool(_STATE.fullmatch(value))


def is_valid_zip(value: str) -> bool:
    return bool(_ZIP.fullmatch(value))


def is_valid_routing_number(value: str) -> bool:
    return bool(_ROUTING.fullmatch(value))


def parse_number(value: str) -> Optional[float]:
    """Finite float or None. No currency or locale handling."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_numeric(value: str) -> bool:
    return parse_number(value) is not None


def is_percent_split(split_type: Optional[str]) -> bool:
    return (split_type or "").strip().lower() == "percent"


def format_number(value: float) -> str:
    """Render like a spreadsheet would: ``105`` not ``105.0``."""
    return str(int(value)) if value.is_integer() else str(value)
