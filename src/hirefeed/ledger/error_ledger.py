"""ErrorLedger: append-only history of validation errors and their corrections.

Writes are serialized by a lock so batch runs and correction requests served
from worker threads can share one instance. The ledger never touches
employee records; writing a corrected value back is the caller's job (see
``hirefeed.ledger.corrections``). Optionally mirrored to a key-value store so
history survives restarts.
"""

from __future__ import annotations

import csv
import io
import logging
import threading
from typing import Iterable, Optional, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from hirefeed.core.exceptions import UnknownErrorIdError
from hirefeed.core.protocols import IKeyValueStore
from hirefeed.models.issues import Correction, ValidationError

logger = logging.getLogger(__name__)

ERROR_STORAGE_KEY = "payroll_errors"
CORRECTION_STORAGE_KEY = "payroll_corrections"

REPORT_COLUMNS = (
    "Error ID",
    "Row",
    "Field",
    "Original Value",
    "Error Type",
    "Error Message",
    "Suggested Fix",
    "Corrected Value",
    "Corrected At",
    "Timestamp",
)

_ERRORS = TypeAdapter(list[ValidationError])
_CORRECTIONS = TypeAdapter(list[Correction])

T = TypeVar("T")


class ErrorLedger:
    """Addressable-by-id log of errors plus full correction history."""

    def __init__(self, store: Optional[IKeyValueStore] = None) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._errors: list[ValidationError] = self._load(ERROR_STORAGE_KEY, _ERRORS)
        self._corrections: list[Correction] = self._load(CORRECTION_STORAGE_KEY, _CORRECTIONS)
        self._by_id: dict[str, ValidationError] = {e.id: e for e in self._errors}

    # ---- persistence ----

    def _load(self, key: str, adapter: TypeAdapter[list[T]]) -> list[T]:
        if self._store is None:
            return []
        raw = self._store.get(key)
        if raw is None:
            return []
        try:
            return adapter.validate_json(raw)
        except SchemaError as exc:
            logger.warning("Discarding unreadable ledger entry %r: %s", key, exc)
            return []

    def _flush(self, key: str, adapter: TypeAdapter[list[T]], items: list[T]) -> None:
        if self._store is not None:
            self._store.set(key, adapter.dump_json(items).decode())

    # ---- errors ----

    def record_errors(self, errors: Iterable[ValidationError]) -> int:
        """Append a batch of errors; returns how many were added."""
        batch = list(errors)
        if not batch:
            return 0
        with self._lock:
            self._errors.extend(batch)
            self._by_id.update((e.id, e) for e in batch)
            self._flush(ERROR_STORAGE_KEY, _ERRORS, self._errors)
            total = len(self._errors)
        logger.debug("Ledger recorded %d errors (%d total)", len(batch), total)
        return len(batch)

    def errors(self) -> list[ValidationError]:
        with self._lock:
            return list(self._errors)

    def get_error(self, error_id: str) -> ValidationError:
        try:
            return self._by_id[error_id]
        except KeyError:
            raise UnknownErrorIdError(error_id) from None

    def clear_errors(self) -> None:
        with self._lock:
            self._errors.clear()
            self._by_id.clear()
            if self._store is not None:
                self._store.delete(ERROR_STORAGE_KEY)

    # ---- corrections ----

    def record_correction(
        self,
        error_id: str,
        original_value: str,
        corrected_value: str,
        note: Optional[str] = None,
        corrected_by: Optional[str] = None,
    ) -> Correction:
        """Append a correction. Earlier corrections for the same error are kept.

        Raises:
            UnknownErrorIdError: the ledger has no error with ``error_id``.
        """
        correction = Correction(
            error_id=error_id,
            original_value=original_value,
            corrected_value=corrected_value,
            corrected_by=corrected_by,
            notes=note,
        )
        with self._lock:
            self.get_error(error_id)
            self._corrections.append(correction)
            self._flush(CORRECTION_STORAGE_KEY, _CORRECTIONS, self._corrections)
        logger.info("Correction recorded for %s", error_id)
        return correction

    def corrections(self) -> list[Correction]:
        with self._lock:
            return list(self._corrections)

    def corrections_for(self, error_id: str) -> list[Correction]:
        return [c for c in self.corrections() if c.error_id == error_id]

    def latest_correction(self, error_id: str) -> Optional[Correction]:
        history = self.corrections_for(error_id)
        return history[-1] if history else None

    def clear_corrections(self) -> None:
        with self._lock:
            self._corrections.clear()
            if self._store is not None:
                self._store.delete(CORRECTION_STORAGE_KEY)

    def reset(self) -> None:
        with self._lock:
            self.clear_errors()
            self.clear_corrections()

    # ---- reporting ----

    def error_report(self) -> list[dict[str, str]]:
        """One row per error, joined with its latest correction."""
        with self._lock:
            errors = list(self._errors)
            corrections = list(self._corrections)

        latest: dict[str, Correction] = {}
        for correction in corrections:
            latest[correction.error_id] = correction

        rows = []
        for error in errors:
            correction = latest.get(error.id)
            rows.append({
                "Error ID": error.id,
                "Row": str(error.row),
                "Field": error.field,
                "Original Value": error.value,
                "Error Type": str(error.error_type),
                "Error Message": error.message,
                "Suggested Fix": error.suggested_fix or "",
                "Corrected Value": correction.corrected_value if correction else "",
                "Corrected At": correction.corrected_at if correction else "",
                "Timestamp": error.timestamp,
            })
        return rows

    def error_report_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=REPORT_COLUMNS, lineterminator="\n")
        writer.writeheader()
        writer.writerows(self.error_report())
        return buffer.getvalue()
