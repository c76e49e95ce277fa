"""Error ledger endpoints: listing, CSV report and correction history."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from hirefeed.api.deps import get_ledger
from hirefeed.ledger.error_ledger import ErrorLedger
from hirefeed.models.issues import Correction, ValidationError

router = APIRouter(tags=["errors"])


class CorrectionRequest(BaseModel):
    corrected_value: str
    original_value: Optional[str] = None  # defaults to the error's recorded value
    note: Optional[str] = None
    corrected_by: Optional[str] = None


@router.get("", response_model=list[ValidationError])
def list_errors(ledger: ErrorLedger = Depends(get_ledger)) -> list[ValidationError]:
    return ledger.errors()


@router.get("/report")
def error_report(ledger: ErrorLedger = Depends(get_ledger)) -> PlainTextResponse:
    return PlainTextResponse(
        ledger.error_report_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="error_report.csv"'},
    )


@router.delete("")
def reset_ledger(ledger: ErrorLedger = Depends(get_ledger)) -> dict[str, str]:
    ledger.reset()
    return {"status": "cleared"}


@router.get("/{error_id}", response_model=ValidationError)
def get_error(error_id: str, ledger: ErrorLedger = Depends(get_ledger)) -> ValidationError:
    return ledger.get_error(error_id)


@router.post("/{error_id}/corrections", response_model=Correction, status_code=201)
def add_correction(
    error_id: str,
    payload: CorrectionRequest,
    ledger: ErrorLedger = Depends(get_ledger),
) -> Correction:
    error = ledger.get_error(error_id)
    original = payload.original_value if payload.original_value is not None else error.value
    return ledger.record_correction(
        error_id, original, payload.corrected_value,
        note=payload.note, corrected_by=payload.corrected_by,
    )


@router.get("/{error_id}/corrections", response_model=list[Correction])
def list_corrections(error_id: str, ledger: ErrorLedger = Depends(get_ledger)) -> list[Correction]:
    ledger.get_error(error_id)
    return ledger.corrections_for(error_id)
