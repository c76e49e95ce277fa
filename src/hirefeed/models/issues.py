"""Validation errors, normalization warnings, parse failures and corrections."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


def new_issue_id() -> str:
    return f"error_{uuid.uuid4().hex}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorType(StrEnum):
    PARSE_ERROR = "PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_FORMAT = "INVALID_FORMAT"
    BUSINESS_LOGIC_ERROR = "BUSINESS_LOGIC_ERROR"
    COMPLIANCE_GATE_FAILED = "COMPLIANCE_GATE_FAILED"


class ValidationError(BaseModel):
    """One failed rule on one row, traceable back to its source column."""

    id: str = Field(default_factory=new_issue_id)
    row_id: str
    row: int  # 1-based
    field: str
    column_index: Optional[int] = None  # 0-based, from the captured header order
    value: str = ""
    error_type: ErrorType
    message: str
    suggested_fix: Optional[str] = None
    timestamp: str = Field(default_factory=utc_timestamp)

    model_config = {"frozen": True}


class ValidationWarning(BaseModel):
    """Non-fatal notice that the normalizer rewrote input data."""

    id: str = Field(default_factory=new_issue_id)
    row_id: str
    row: int
    field: str
    original_value: str
    message: str
    timestamp: str = Field(default_factory=utc_timestamp)

    model_config = {"frozen": True}


class ParseFailure(BaseModel):
    """Row-level structural failure recorded by the parser; never fatal."""

    row: Optional[int] = None
    message: str


class Correction(BaseModel):
    """Audit entry for a corrected value. Append-only; latest wins."""

    error_id: str
    original_value: str
    corrected_value: str
    corrected_by: Optional[str] = None
    corrected_at: str = Field(default_factory=utc_timestamp)
    notes: Optional[str] = None

    model_config = {"frozen": True}
