"""Correction workflow: audit entry plus a new record, never an in-place edit."""

from __future__ import annotations

from typing import Optional, Sequence

from hirefeed.core.exceptions import CorrectionTargetError
from hirefeed.ledger.error_ledger import ErrorLedger
from hirefeed.models.employee_record import CanonicalRecord
from hirefeed.models.issues import Correction, ValidationError
from hirefeed.stages.validator.record_validator import validate_record


def apply_correction(
    record: CanonicalRecord,
    error: ValidationError,
    corrected_value: str,
    ledger: ErrorLedger,
    *,
    note: Optional[str] = None,
    corrected_by: Optional[str] = None,
) -> tuple[CanonicalRecord, Correction]:
    """Record the correction and return ``(updated_record, correction)``.

    The input record is left untouched.

    Raises:
        CorrectionTargetError: ``error.field`` is not a field of the record.
        UnknownErrorIdError: the ledger never recorded ``error``.
    """
    if error.field not in type(record).model_fields:
        raise CorrectionTargetError(error.id, error.field)

    correction = ledger.record_correction(
        error.id, error.value, corrected_value, note=note, corrected_by=corrected_by,
    )
    return record.model_copy(update={error.field: corrected_value}), correction


def still_reproduces(
    record: CanonicalRecord,
    error: ValidationError,
    header_fields: Optional[Sequence[str]] = None,
) -> bool:
    """Re-run validation for the error's row and look for the same field/kind."""
    return any(
        e.field == error.field and e.error_type == error.error_type
        for e in validate_record(record, error.row - 1, header_fields)
    )
