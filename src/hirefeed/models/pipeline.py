"""Batch parsing and processing result models."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from hirefeed.models.employee_record import (
    CanonicalRecord,
    DetailRecord,
    FooterRecord,
    HeaderRecord,
)
from hirefeed.models.issues import (
    ErrorType,
    ParseFailure,
    ValidationError,
    ValidationWarning,
    new_issue_id,
    utc_timestamp,
)


class LogLevel(StrEnum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


class ProcessingLog(BaseModel):
    """User-facing log line emitted while a batch runs."""

    id: str = Field(default_factory=new_issue_id)
    timestamp: str = Field(default_factory=utc_timestamp)
    level: LogLevel
    message: str
    row: Optional[int] = None
    employee_id: Optional[str] = None


class BatchParseResult(BaseModel):
    """Output of the record parser for one uploaded batch."""

    rows: list[CanonicalRecord] = Field(default_factory=list)
    detail_records: list[DetailRecord] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)
    parse_errors: list[ParseFailure] = Field(default_factory=list)
    header_field_order: list[str] = Field(default_factory=list)
    header: Optional[HeaderRecord] = None
    footer: Optional[FooterRecord] = None


class ProcessedEmployee(BaseModel):
    """A record that passed the compliance gate, with one output per provider."""

    employee: CanonicalRecord
    outputs: dict[str, dict[str, str]] = Field(default_factory=dict)
    has_errors: bool = False


class SkippedEmployee(BaseModel):
    """A record routed away by the compliance gate."""

    employee: CanonicalRecord
    reason: str
    error_type: ErrorType = ErrorType.COMPLIANCE_GATE_FAILED


class ProgressEvent(BaseModel):
    """One observer notification during parsing or processing."""

    current: int
    total: int
    is_complete: bool = False
    logs: list[ProcessingLog] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)


class ProcessingResult(BaseModel):
    """Everything a batch run produced, in row order."""

    processed_employees: list[ProcessedEmployee] = Field(default_factory=list)
    skipped_employees: list[SkippedEmployee] = Field(default_factory=list)
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)
    logs: list[ProcessingLog] = Field(default_factory=list)

    @property
    def processed_count(self) -> int:
        return len(self.processed_employees)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_employees)


class BatchRunResult(BaseModel):
    """Parse and processing output for one uploaded batch."""

    parse: BatchParseResult
    processing: ProcessingResult
