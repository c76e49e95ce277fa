"""MessyDataNormalizer: reconciles combined input fields into canonical ones.

Rules run independently, in order, per row:
  1. home_address  -> home_street / home_city / home_state / home_zip
  2. work_address  -> work_street / work_city / work_state / work_zip
  3. full_name     -> first_name / last_name

Warnings are appended to the caller-owned list; nothing is returned but the
rewritten row.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel

from hirefeed.core.types import RawRow
from hirefeed.models.issues import ValidationWarning

_ZIP_AT_END = re.compile(r"(\d{5}(?:-\d{4})?)\s*$")


class ParsedAddress(BaseModel):
    street: str
    city: str
    state: str
    zip: str


def parse_address(address: str) -> Optional[ParsedAddress]:
    """Split ``"street(, more street)*, city, STATE ZIP"``.

    Returns None when no trailing ZIP is found or fewer than two
    comma-separated parts precede it.
    """
    if not address or not address.strip():
        return None

    trimmed = address.strip()
    match = _ZIP_AT_END.search(trimmed)
    if match is None:
        return None

    zip_code = match.group(1)
    before_zip = trimmed[: trimmed.rfind(zip_code)].strip()
    parts = [p.strip() for p in before_zip.split(",")]
    if len(parts) < 2:
        return None

    return ParsedAddress(
        street=", ".join(parts[:-2]),
        city=parts[-2],
        state=parts[-1],
        zip=zip_code,
    )


def _split_address_group(
    row: RawRow,
    prefix: str,
    row_id: str,
    row_index: int,
    warnings: list[ValidationWarning],
) -> None:
    combined_field = f"{prefix}_address"
    combined = row.get(combined_field)
    if row.get(f"{prefix}_street") or not combined:
        return

    parsed = parse_address(combined)
    if parsed is not None:
        row[f"{prefix}_street"] = parsed.street
        row[f"{prefix}_city"] = parsed.city
        row[f"{prefix}_state"] = parsed.state
        row[f"{prefix}_zip"] = parsed.zip
        warnings.append(ValidationWarning(
            row_id=row_id,
            row=row_index,
            field=combined_field,
            original_value=combined,
            message=(
                f"Combined address field split into {prefix}_street, "
                f"{prefix}_city, {prefix}_state, {prefix}_zip"
            ),
        ))
    del row[combined_field]


def _split_full_name(
    row: RawRow,
    row_id: str,
    row_index: int,
    warnings: list[ValidationWarning],
) -> None:
    full_name = row.get("full_name")
    if row.get("first_name") or not full_name:
        return

    parts = full_name.split()
    if len(parts) >= 2:
        row["first_name"] = parts[0]
        row["last_name"] = " ".join(parts[1:])
        warnings.append(ValidationWarning(
            row_id=row_id,
            row=row_index,
            field="full_name",
            original_value=full_name,
            message="Combined name field split into first_name and last_name",
        ))
    del row["full_name"]


def normalize_row(
    row: RawRow,
    row_index: int,
    warnings: list[ValidationWarning],
) -> RawRow:
    """Return a reconciled copy of ``row``; append any warnings to ``warnings``."""
    normalized = dict(row)
    row_id = normalized.get("employee_id") or f"row_{row_index}"

    _split_address_group(normalized, "home", row_id, row_index, warnings)
    _split_address_group(normalized, "work", row_id, row_index, warnings)
    _split_full_name(normalized, row_id, row_index, warnings)

    return normalized
