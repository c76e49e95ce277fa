"""BatchProcessor: drives parsed records through validate, gate and transform.

Records are handled strictly one at a time, in input order, so log lines and
row numbers are reproducible. Errors reach the ledger as a single append once
the run finishes.
"""

from __future__ import annotations

import logging
from typing import Callable, Generator, Iterable, Optional, Sequence

from hirefeed.core.config import AppSettings
from hirefeed.core.protocols import IProgressSink
from hirefeed.ledger.error_ledger import ErrorLedger
from hirefeed.models.employee_record import CanonicalRecord
from hirefeed.models.issues import ErrorType, ValidationError
from hirefeed.models.mapping import ProviderMapping
from hirefeed.models.pipeline import (
    BatchRunResult,
    LogLevel,
    ProcessedEmployee,
    ProcessingLog,
    ProcessingResult,
    ProgressEvent,
    SkippedEmployee,
)
from hirefeed.persistence.mapping_store import MappingRepository
from hirefeed.stages.compliance.gate import is_compliant, skip_reason
from hirefeed.stages.intake.batch_parser import BatchParser
from hirefeed.stages.transform.default_mappings import default_mapping
from hirefeed.stages.transform.engine import resolve_transformations, transform
from hirefeed.stages.validator.record_validator import RecordValidator

logger = logging.getLogger(__name__)

ProgressStream = Generator[ProgressEvent, None, ProcessingResult]


class BatchProcessor:
    """Runs a batch of employee records end to end.

    Dependencies are injected at construction time. Without a mapping
    repository or explicit ``mappings`` the built-in provider mappings are
    used; without a ledger errors are only returned, never recorded.
    """

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        ledger: ErrorLedger | None = None,
        mappings: MappingRepository | dict[str, ProviderMapping] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._ledger = ledger
        self._mappings = mappings
        self._validator = RecordValidator(self._settings.pipeline.detail_marker)

    def _provider_mappings(self) -> dict[str, ProviderMapping]:
        providers = self._settings.pipeline.providers
        if isinstance(self._mappings, MappingRepository):
            resolved = self._mappings.all(providers)
        elif self._mappings is not None:
            resolved = dict(self._mappings)
        else:
            resolved = {name: default_mapping(name) for name in providers}
        for mapping in resolved.values():
            resolve_transformations(mapping)
        return resolved

    def _steps(
        self,
        employees: Sequence[CanonicalRecord],
        header_fields: Optional[Sequence[str]],
    ) -> ProgressStream:
        mappings = self._provider_mappings()
        window = self._settings.pipeline.progress_log_window
        result = ProcessingResult()
        total = len(employees)

        def add_log(level: LogLevel, message: str, employee_id: str | None = None,
                    row: int | None = None) -> None:
            result.logs.append(ProcessingLog(
                level=level, message=message, employee_id=employee_id, row=row,
            ))

        add_log(LogLevel.INFO, f"Starting processing of {total} employees")
        logger.info("Processing %d employees for %s", total, ", ".join(mappings))

        for index, employee in enumerate(employees):
            row = index + 1
            try:
                self._process_one(employee, index, header_fields, mappings, result, add_log)
            except Exception as exc:
                logger.exception("Row %d (%s) failed", row, employee.employee_id)
                result.errors.append(ValidationError(
                    row_id=employee.employee_id or f"row_{row}",
                    row=row,
                    field="general",
                    value="",
                    error_type=ErrorType.PARSE_ERROR,
                    message=f"Failed to process employee: {exc}",
                ))
                add_log(LogLevel.ERROR, f"Failed to process employee {employee.employee_id}",
                        employee.employee_id, row)

            yield ProgressEvent(
                current=row,
                total=total,
                is_complete=row == total,
                logs=result.logs[-window:],
            )

        if self._ledger is not None and result.errors:
            self._ledger.record_errors(result.errors)

        add_log(
            LogLevel.INFO,
            f"Processing complete. {result.processed_count} employees processed, "
            f"{result.skipped_count} employees skipped",
        )
        logger.info(
            "Processed %d, skipped %d, %d errors",
            result.processed_count, result.skipped_count, len(result.errors),
        )
        return result

    def _process_one(
        self,
        employee: CanonicalRecord,
        index: int,
        header_fields: Optional[Sequence[str]],
        mappings: dict[str, ProviderMapping],
        result: ProcessingResult,
        add_log: Callable[..., None],
    ) -> None:
        row = index + 1
        employee_id = employee.employee_id
        label = f"Employee {employee_id} ({employee.display_name})"

        errors = self._validator.validate(employee, index, header_fields)
        result.errors.extend(errors)
        if errors:
            fields = ", ".join(e.field for e in errors)
            add_log(
                LogLevel.ERROR,
                f"Row {row}, Column {fields}: Validation failed - {len(errors)} issue(s) detected",
                employee_id, row,
            )

        if not is_compliant(employee):
            reason = skip_reason(employee)
            result.skipped_employees.append(SkippedEmployee(employee=employee, reason=reason))
            add_log(LogLevel.WARNING, f"{label}: Compliance check failed - {reason}", employee_id, row)
            return

        outputs = {provider: transform(employee, mapping) for provider, mapping in mappings.items()}
        result.processed_employees.append(ProcessedEmployee(
            employee=employee, outputs=outputs, has_errors=bool(errors),
        ))

        if errors:
            add_log(
                LogLevel.INFO,
                f"{label}: Transformed with validation errors - export disabled until corrected",
                employee_id, row,
            )
        else:
            add_log(LogLevel.SUCCESS, f"{label}: Validated and ready for export", employee_id, row)

    def iter_progress(
        self,
        employees: Iterable[CanonicalRecord],
        header_fields: Optional[Sequence[str]] = None,
    ) -> ProgressStream:
        """Lazy variant of :meth:`process`; the generator returns the result."""
        return (yield from self._steps(list(employees), header_fields))

    def process(
        self,
        employees: Iterable[CanonicalRecord],
        header_fields: Optional[Sequence[str]] = None,
        on_progress: Optional[IProgressSink] = None,
    ) -> ProcessingResult:
        steps = self._steps(list(employees), header_fields)
        while True:
            try:
                event = next(steps)
            except StopIteration as done:
                return done.value
            if on_progress is not None:
                on_progress(event)

    def run_batch(
        self,
        source: str | Iterable[str],
        on_progress: Optional[IProgressSink] = None,
    ) -> BatchRunResult:
        """Parse ``source`` then process its detail records.

        Raises:
            BatchReadError: the input cannot be split into rows.
        """
        parsed = BatchParser(self._settings.pipeline).parse(source)
        processing = self.process(parsed.detail_records, parsed.header_field_order, on_progress)
        processing.warnings.extend(parsed.warnings)
        return BatchRunResult(parse=parsed, processing=processing)
