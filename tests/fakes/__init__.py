"""Shared test doubles and sample data."""

from __future__ import annotations

import csv
import io
from typing import Iterable

from hirefeed.persistence.memory_backend import MemoryKeyValueStore

VALID_EMPLOYEE: dict[str, str] = {
    "employee_id": "E1001",
    "first_name": "Jane",
    "last_name": "Doe",
    "dob": "1990-05-15",
    "ssn": "123-45-6789",
    "home_street": "123 Main St",
    "home_city": "Hanahan",
    "home_state": "SC",
    "home_zip": "29410",
    "hire_date": "2025-11-01",
    "job_title": "Payroll Analyst",
    "flsa_status": "Exempt",
    "annual_salary": "120000",
    "pay_frequency": "Bi-weekly",
    "fed_status": "Single",
    "fed_allowances": "2",
    "fed_extra_wh_per_paycheck": "0.00",
    "state_code": "SC",
    "state_extra_wh_per_paycheck": "0.00",
    "i9_status": "Completed",
    "e_verify_status": "Authorized",
    "dd1_routing_number": "021000021",
    "dd1_account_number": "987654321",
    "dd1_account_type": "Checking",
    "dd1_split_type": "Percent",
    "dd1_split_value": "100",
}

TRACKING = {"record_type": "DET", "record_sequence": "1", "company_id": "ACME"}


def employee_row(**overrides: str) -> dict[str, str]:
    """Valid detail row with ``overrides`` applied."""
    return {**TRACKING, **VALID_EMPLOYEE, **overrides}


def build_csv(rows: Iterable[dict[str, str]], fieldnames: list[str] | None = None) -> str:
    rows = list(rows)
    if fieldnames is None:
        fieldnames = []
        for row in rows:
            fieldnames.extend(k for k in row if k not in fieldnames)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, restval="", lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


__all__ = ["MemoryKeyValueStore", "VALID_EMPLOYEE", "TRACKING", "employee_row", "build_csv"]
