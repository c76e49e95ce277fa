"""Canonical employee record: the normalized structure every stage operates on.

Every batch row, whatever messy shape it arrived in, is parsed into this
schema. Fields stay opaque strings here; numeric, date and enum semantics are
enforced by the validator, never by the type.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel

TRACKING_FIELDS = ("record_type", "record_sequence", "company_id")


class RecordType(StrEnum):
    HEADER = "HDR"
    DETAIL = "DET"
    FOOTER = "FTR"


class CanonicalRecord(BaseModel):
    """Single new-hire record in canonical format."""

    # --- Identity (required) ---
    employee_id: str = ""
    first_name: str = ""
    last_name: str = ""
    dob: str = ""  # YYYY-MM-DD
    ssn: str = ""  # 123-45-6789 or XXX-XX-6789

    # --- Home Address (required, drives tax) ---
    home_street: str = ""
    home_city: str = ""
    home_state: str = ""
    home_zip: str = ""

    # --- Work Address ---
    work_street: Optional[str] = None
    work_city: Optional[str] = None
    work_state: Optional[str] = None
    work_zip: Optional[str] = None

    # --- Employment Dates ---
    hire_date: str = ""
    original_hire_date: Optional[str] = None
    rehire_date: Optional[str] = None
    termination_date: Optional[str] = None

    # --- Job ---
    job_title: str = ""
    department: Optional[str] = None
    manager_email: Optional[str] = None

    # --- Contact ---
    employee_email: Optional[str] = None
    employee_phone: Optional[str] = None

    # --- Compensation (required) ---
    flsa_status: str = ""  # Exempt / Non-Exempt
    annual_salary: str = ""
    pay_frequency: str = ""  # Weekly / Bi-weekly / Semi-monthly / Monthly

    # --- Employment Details ---
    employment_type: Optional[str] = None
    employee_status: Optional[str] = None
    pay_rate_type: Optional[str] = None
    hours_per_week: Optional[str] = None

    # --- Tax Withholding ---
    fed_status: str = ""
    fed_allowances: str = ""
    fed_extra_wh_per_paycheck: str = ""
    state_code: str = ""
    state_extra_wh_per_paycheck: str = ""
    local_tax_code_1: Optional[str] = None

    # --- Compliance ---
    i9_status: str = ""  # Completed / Pending_Section_2 / Not_Started
    e_verify_status: str = ""  # Authorized / Pending / Not_Started

    # --- Direct Deposit (primary, required) ---
    dd1_routing_number: str = ""
    dd1_account_number: str = ""
    dd1_account_type: str = ""  # Checking / Savings
    dd1_split_type: str = ""  # Percent / Flat_Amount
    dd1_split_value: str = ""

    # --- Direct Deposit (secondary) ---
    dd2_routing_number: Optional[str] = None
    dd2_account_number: Optional[str] = None
    dd2_account_type: Optional[str] = None
    dd2_split_type: Optional[str] = None
    dd2_split_value: Optional[str] = None

    # --- Union ---
    union_employee: Optional[str] = None
    union_start_date: Optional[str] = None
    union_dues_amount_per_paycheck: Optional[str] = None

    # --- Benefits ---
    health_plan_name: Optional[str] = None
    health_deduction_per_paycheck: Optional[str] = None
    disability_plan_code: Optional[str] = None

    # --- Retirement ---
    retirement_plan_type: Optional[str] = None
    retirement_contribution_percent: Optional[str] = None
    retirement_loan_repayment: Optional[str] = None

    # --- Garnishments ---
    garnishment_type: Optional[str] = None
    garnishment_amount_per_paycheck: Optional[str] = None

    # --- Emergency Contact ---
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    # --- EEO-1 ---
    gender: Optional[str] = None
    ethnicity: Optional[str] = None
    disability_status: Optional[str] = None
    veteran_status: Optional[str] = None

    model_config = {"frozen": True, "extra": "ignore"}

    def value_of(self, field: str) -> str:
        """Return a field as a string, ``""`` when absent or unknown."""
        value = getattr(self, field, None)
        return "" if value is None else str(value)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class DetailRecord(CanonicalRecord):
    """A ``DET`` row: canonical employee data plus batch tracking fields."""

    record_type: str = ""
    record_sequence: str = ""
    company_id: str = ""

    def to_canonical(self) -> CanonicalRecord:
        """Drop the tracking fields."""
        return CanonicalRecord(**self.model_dump(exclude=set(TRACKING_FIELDS)))


class HeaderRecord(BaseModel):
    """``HDR`` row: file-level metadata. Parsed, never validated."""

    record_type: str = RecordType.HEADER
    format_version: str = ""
    upload_id: str = ""
    file_timestamp: str = ""
    file_name: str = ""
    directory_path: str = ""
    employer_id: str = ""
    total_records: str = ""
    processing_date: str = ""

    model_config = {"extra": "ignore"}


class FooterRecord(BaseModel):
    """``FTR`` row: summary totals. Never reconciled against actual counts."""

    record_type: str = RecordType.FOOTER
    total_employees_processed: str = ""
    total_employees_skipped: str = ""
    total_errors: str = ""

    model_config = {"extra": "ignore"}


CANONICAL_FIELDS: tuple[str, ...] = tuple(CanonicalRecord.model_fields)
