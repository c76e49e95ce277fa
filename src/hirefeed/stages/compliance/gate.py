"""ComplianceGate: I-9 / E-Verify eligibility check.

Runs after validation but independently of its outcome: a record can carry
validation errors and still pass, or be clean and still be skipped.
"""

from __future__ import annotations

from hirefeed.models.employee_record import CanonicalRecord

I9_COMPLETED = "Completed"
E_VERIFY_AUTHORIZED = "Authorized"


def is_compliant(record: CanonicalRecord) -> bool:
    """True only for a completed I-9 and an authorized E-Verify case."""
    return record.i9_status == I9_COMPLETED and record.e_verify_status == E_VERIFY_AUTHORIZED


def skip_reason(record: CanonicalRecord) -> str:
    """Human-readable reason naming both status values."""
    return f"I-9 status: {record.i9_status}, E-Verify status: {record.e_verify_status}"
