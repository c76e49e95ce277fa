"""BatchParser: streams a delimited batch file into canonical employee records.

Each row is classified by its ``record_type`` discriminator. Only detail rows
are normalized and promoted; header and footer rows are captured as metadata
and everything else is skipped silently. One bad row never aborts the batch.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from typing import Iterable, Iterator, Optional

from hirefeed.core.config import PipelineConfig
from hirefeed.core.exceptions import BatchReadError
from hirefeed.core.protocols import IProgressSink
from hirefeed.core.types import RawRow
from hirefeed.models.employee_record import DetailRecord, FooterRecord, HeaderRecord
from hirefeed.models.issues import ParseFailure
from hirefeed.models.pipeline import BatchParseResult, ProgressEvent
from hirefeed.stages.intake.normalizer import normalize_row

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_header(name: str) -> str:
    """Trim, lower-case and collapse whitespace runs to a single underscore."""
    return _WHITESPACE_RUN.sub("_", name.strip().lower())


def _is_blank(cells: list[str]) -> bool:
    return not cells or (len(cells) == 1 and not cells[0].strip())


class BatchParser:
    """Parses one batch at a time; holds no state between calls."""

    def __init__(self, config: PipelineConfig | None = None) -> None:
        self._config = config or PipelineConfig()

    def _rows(self, source: str | Iterable[str]) -> Iterator[list[str]]:
        lines = io.StringIO(source, newline="") if isinstance(source, str) else source
        return csv.reader(lines, delimiter=self._config.delimiter)

    def _read_header(self, reader: Iterator[list[str]]) -> list[str]:
        try:
            for cells in reader:
                if not _is_blank(cells):
                    cells[0] = cells[0].lstrip("\ufeff")
                    return [normalize_header(c) for c in cells]
        except (csv.Error, UnicodeDecodeError) as exc:
            raise BatchReadError(f"CSV parsing failed: {exc}") from exc
        raise BatchReadError("CSV parsing failed: input has no header row")

    def parse(
        self,
        source: str | Iterable[str],
        on_progress: Optional[IProgressSink] = None,
    ) -> BatchParseResult:
        """Parse ``source`` (text or an iterable of lines, e.g. an open file).

        Raises:
            BatchReadError: the input cannot be split into rows at all.
        """
        reader = self._rows(source)
        header = self._read_header(reader)
        result = BatchParseResult(header_field_order=list(header))

        detail = self._config.detail_marker.upper()
        header_marker = self._config.header_marker.upper()
        footer_marker = self._config.footer_marker.upper()
        row_number = 0

        while True:
            try:
                cells = next(reader)
            except StopIteration:
                break
            except UnicodeDecodeError as exc:
                raise BatchReadError(f"CSV parsing failed: {exc}") from exc
            except csv.Error as exc:
                row_number += 1
                logger.warning("Row %d could not be split: %s", row_number, exc)
                result.parse_errors.append(ParseFailure(
                    row=row_number,
                    message=f"Failed to process row {row_number}: {exc}",
                ))
                continue

            if _is_blank(cells):
                continue
            row_number += 1

            try:
                if len(cells) != len(header):
                    logger.debug(
                        "Row %d has %d fields, header has %d", row_number, len(cells), len(header)
                    )
                row: RawRow = dict(zip(header, cells + [""] * (len(header) - len(cells))))
                record_type = (row.get("record_type") or "").strip().upper()

                if record_type == detail:
                    self._promote_detail(row, row_number, result)
                    if on_progress is not None:
                        on_progress(ProgressEvent(
                            current=row_number,
                            total=row_number + 1,
                            warnings=result.warnings[-1:],
                        ))
                elif record_type == header_marker:
                    result.header = result.header or HeaderRecord.model_validate(row)
                elif record_type == footer_marker:
                    result.footer = FooterRecord.model_validate(row)
                else:
                    logger.debug("Row %d skipped, record_type=%r", row_number, record_type)
            except Exception as exc:
                logger.warning("Row %d failed to parse: %s", row_number, exc)
                result.parse_errors.append(ParseFailure(
                    row=row_number,
                    message=f"Failed to process row {row_number}: {exc}",
                ))

        if on_progress is not None:
            on_progress(ProgressEvent(
                current=len(result.rows),
                total=len(result.rows),
                is_complete=True,
            ))

        logger.info(
            "Parsed %d detail rows (%d parse errors, %d warnings)",
            len(result.rows), len(result.parse_errors), len(result.warnings),
        )
        return result

    def _promote_detail(self, row: RawRow, row_number: int, result: BatchParseResult) -> None:
        cleaned = normalize_row(row, row_number, result.warnings)

        for tracking_field in ("record_sequence", "company_id"):
            if not (cleaned.get(tracking_field) or "").strip():
                result.parse_errors.append(ParseFailure(
                    row=row_number,
                    message=(
                        f"Row {row_number}: Missing required field '{tracking_field}' "
                        f"in DET record. Available fields: {', '.join(cleaned)}"
                    ),
                ))

        record = DetailRecord.model_validate(cleaned)
        result.detail_records.append(record)
        result.rows.append(record.to_canonical())


def parse_batch(
    source: str | Iterable[str],
    *,
    config: PipelineConfig | None = None,
    on_progress: Optional[IProgressSink] = None,
) -> BatchParseResult:
    """Convenience wrapper around :class:`BatchParser`."""
    return BatchParser(config).parse(source, on_progress=on_progress)
