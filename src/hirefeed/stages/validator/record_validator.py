"""RecordValidator: required-field, format and cross-field business rules.

One rule set serves both entry points. Tracking metadata (record_type,
record_sequence, company_id) is checked only when validating a detail row.
Validation never raises and never short-circuits: every applicable rule runs
and errors come back in rule order.
"""

from __future__ import annotations

from typing import Optional, Sequence

from hirefeed.models.employee_record import CanonicalRecord, DetailRecord, RecordType
from hirefeed.models.issues import ErrorType, ValidationError
from hirefeed.stages.validator import checks

REQUIRED_TRACKING_FIELDS: tuple[str, ...] = ("record_type", "record_sequence", "company_id")

REQUIRED_EMPLOYEE_FIELDS: tuple[str, ...] = (
    "employee_id",
    "first_name",
    "last_name",
    "dob",
    "ssn",
    "home_street",
    "home_city",
    "home_state",
    "home_zip",
    "hire_date",
    "job_title",
    "flsa_status",
    "annual_salary",
    "pay_frequency",
    "fed_status",
    "fed_allowances",
    "fed_extra_wh_per_paycheck",
    "state_code",
    "state_extra_wh_per_paycheck",
    "i9_status",
    "e_verify_status",
    "dd1_routing_number",
    "dd1_account_number",
    "dd1_account_type",
    "dd1_split_type",
    "dd1_split_value",
)

# (field, label, example)
DATE_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("dob", "Date of birth", "1990-05-15"),
    ("hire_date", "Hire date", "2025-11-01"),
    ("original_hire_date", "Original hire date", "2025-11-01"),
    ("rehire_date", "Rehire date", "2025-11-01"),
    ("termination_date", "Termination date", "2025-11-01"),
    ("union_start_date", "Union start date", "2025-11-01"),
)
EMAIL_FIELDS = ("manager_email", "employee_email")
STATE_FIELDS = ("home_state", "work_state", "state_code")
ZIP_FIELDS = ("home_zip", "work_zip")

# (field, label, example)
NUMERIC_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("annual_salary", "Annual salary", "120000"),
    ("fed_allowances", "Federal allowances", "2"),
    ("fed_extra_wh_per_paycheck", "Federal extra withholding", "0.00"),
    ("state_extra_wh_per_paycheck", "State extra withholding", "0.00"),
    ("hours_per_week", "Hours per week", "40"),
    ("union_dues_amount_per_paycheck", "Union dues amount", "25.00"),
    ("health_deduction_per_paycheck", "Health deduction", "85.50"),
    ("retirement_contribution_percent", "Retirement contribution percent", "6"),
    ("retirement_loan_repayment", "Retirement loan repayment", "0.00"),
    ("garnishment_amount_per_paycheck", "Garnishment amount", "150.00"),
)

SPLIT_TOLERANCE = 0.01


class _RowErrors:
    """Collects errors for one row, stamping identity and column position."""

    def __init__(self, row_id: str, row_index: int, header_fields: Optional[Sequence[str]]) -> None:
        self.row_id = row_id
        self.row = row_index + 1
        self._header_fields = list(header_fields or [])
        self.errors: list[ValidationError] = []

    def column_index(self, field: str) -> Optional[int]:
        try:
            return self._header_fields.index(field)
        except ValueError:
            return None

    def add(
        self,
        field: str,
        value: str,
        error_type: ErrorType,
        message: str,
        suggested_fix: Optional[str] = None,
    ) -> None:
        self.errors.append(ValidationError(
            row_id=self.row_id,
            row=self.row,
            field=field,
            column_index=self.column_index(field),
            value=value,
            error_type=error_type,
            message=message,
            suggested_fix=suggested_fix,
        ))


class RecordValidator:
    """Evaluates every rule against one record."""

    def __init__(self, detail_marker: str = RecordType.DETAIL) -> None:
        self._detail_marker = detail_marker

    def validate(
        self,
        record: CanonicalRecord,
        row_index: int,
        header_fields: Optional[Sequence[str]] = None,
        *,
        check_tracking: Optional[bool] = None,
    ) -> list[ValidationError]:
        """Return all errors for ``record`` at 0-based ``row_index``.

        ``check_tracking`` defaults to whether the record carries tracking
        metadata (i.e. is a :class:`DetailRecord`).
        """
        if check_tracking is None:
            check_tracking = isinstance(record, DetailRecord)

        sequence = record.value_of("record_sequence") if check_tracking else ""
        row_id = record.employee_id or sequence or f"row_{row_index}"
        out = _RowErrors(row_id, row_index, header_fields)

        if check_tracking:
            self._check_tracking(record, out)
        self._check_required(record, out)
        self._check_dates(record, out)
        self._check_ssn(record, out)
        self._check_emails(record, out)
        self._check_states(record, out)
        self._check_zips(record, out)
        self._check_routing_numbers(record, out)
        self._check_numerics(record, out)
        self._check_enumerations(record, out)
        self._check_direct_deposit_split(record, out)
        return out.errors

    # ---- tracking metadata ----

    def _check_tracking(self, record: CanonicalRecord, out: _RowErrors) -> None:
        record_type = record.value_of("record_type")
        if record_type != self._detail_marker:
            out.add(
                "record_type", record_type, ErrorType.INVALID_FORMAT,
                f"Expected record_type '{self._detail_marker}', got '{record_type}'",
                f"Set record_type to '{self._detail_marker}' for detail records",
            )

        for field in REQUIRED_TRACKING_FIELDS:
            if not record.value_of(field).strip():
                out.add(
                    field, "", ErrorType.REQUIRED_FIELD_MISSING,
                    f"Required DET field '{field}' is missing or empty",
                    f"Please provide a value for {field}",
                )

        sequence = record.value_of("record_sequence")
        if sequence and not checks.is_numeric(sequence):
            out.add(
                "record_sequence", sequence, ErrorType.INVALID_FORMAT,
                f"Record sequence must be numeric, got: {sequence}",
                "Provide a numeric sequence number",
            )

    # ---- employee fields ----

    def _check_required(self, record: CanonicalRecord, out: _RowErrors) -> None:
        for field in REQUIRED_EMPLOYEE_FIELDS:
            if not record.value_of(field).strip():
                out.add(
                    field, "", ErrorType.REQUIRED_FIELD_MISSING,
                    f"Required employee field '{field}' is missing or empty",
                    f"Please provide a value for {field}",
                )

    def _check_dates(self, record: CanonicalRecord, out: _RowErrors) -> None:
        for field, label, example in DATE_FIELDS:
            value = record.value_of(field)
            if value and not checks.is_valid_date(value):
                out.add(
                    field, value, ErrorType.INVALID_FORMAT,
                    f"{label} must be in YYYY-MM-DD format, got: {value}",
                    f"Format as YYYY-MM-DD (e.g., {example})",
                )

    def _check_ssn(self, record: CanonicalRecord, out: _RowErrors) -> None:
        if record.ssn and not checks.is_valid_ssn(record.ssn):
            out.add(
                "ssn", record.ssn, ErrorType.INVALID_FORMAT,
                f"SSN must be in XXX-XX-XXXX format, got: {record.ssn}",
                "Format as XXX-XX-XXXX",
            )

    def _check_emails(self, record: CanonicalRecord, out: _RowErrors) -> None:
        for field in EMAIL_FIELDS:
            value = record.value_of(field)
            if value and not checks.is_valid_email(value):
                out.add(
                    field, value, ErrorType.INVALID_FORMAT,
                    f"Invalid email format: {value}",
                    "Please provide a valid email address",
                )

    def _check_states(self, record: CanonicalRecord, out: _RowErrors) -> None:
        for field in STATE_FIELDS:
            value = record.value_of(field)
            if value and not checks.is_valid_state_code(value):
                out.add(
                    field, value, ErrorType.INVALID_FORMAT,
                    f"State code must be 2 letters, got: {value}",
                    "Use 2-letter state code (e.g., SC, GA, NC)",
                )

    def _check_zips(self, record: CanonicalRecord, out: _RowErrors) -> None:
        for field in ZIP_FIELDS:
            value = record.value_of(field)
            if value and not checks.is_valid_zip(value):
                out.add(
                    field, value, ErrorType.INVALID_FORMAT,
                    f"ZIP code must be 5 or 9 digits, got: {value}",
                    "Format as 12345 or 12345-6789",
                )

    def _check_routing_numbers(self, record: CanonicalRecord, out: _RowErrors) -> None:
        primary = record.dd1_routing_number
        if primary and not checks.is_valid_routing_number(primary):
            out.add(
                "dd1_routing_number", primary, ErrorType.INVALID_FORMAT,
                f"Routing number must be 9 digits, got: {primary}",
                "Provide a 9-digit routing number",
            )

        secondary = record.value_of("dd2_routing_number")
        if secondary.strip() and not checks.is_valid_routing_number(secondary):
            out.add(
                "dd2_routing_number", secondary, ErrorType.INVALID_FORMAT,
                f"Routing number must be 9 digits, got: {secondary}",
                "Provide a 9-digit routing number or leave empty",
            )

    def _check_numerics(self, record: CanonicalRecord, out: _RowErrors) -> None:
        for field, label, example in NUMERIC_FIELDS:
            value = record.value_of(field)
            if value and not checks.is_numeric(value):
                out.add(
                    field, value, ErrorType.INVALID_FORMAT,
                    f"{label} must be numeric, got: {value}",
                    f"Provide a numeric value (e.g., {example})",
                )

    def _check_enumerations(self, record: CanonicalRecord, out: _RowErrors) -> None:
        if record.flsa_status and record.flsa_status not in checks.FLSA_STATUSES:
            out.add(
                "flsa_status", record.flsa_status, ErrorType.INVALID_FORMAT,
                f"FLSA status must be 'Exempt' or 'Non-Exempt', got: {record.flsa_status}",
                'Use "Exempt" or "Non-Exempt"',
            )

        if record.pay_frequency and record.pay_frequency not in checks.PAY_FREQUENCIES:
            valid = ", ".join(checks.PAY_FREQUENCIES)
            out.add(
                "pay_frequency", record.pay_frequency, ErrorType.INVALID_FORMAT,
                f"Pay frequency must be one of: {valid}, got: {record.pay_frequency}",
                f"Use one of: {valid}",
            )

    # ---- cross-field business rules ----

    def _check_direct_deposit_split(self, record: CanonicalRecord, out: _RowErrors) -> None:
        primary_value = record.dd1_split_value
        if not (checks.is_percent_split(record.dd1_split_type) and primary_value):
            return

        primary = checks.parse_number(primary_value)
        if primary is None or not 0 <= primary <= 100:
            out.add(
                "dd1_split_value", primary_value, ErrorType.BUSINESS_LOGIC_ERROR,
                f"Split percentage must be between 0 and 100, got: {primary_value}",
                "Provide a percentage between 0 and 100",
            )

        secondary_value = record.value_of("dd2_split_value")
        if not (checks.is_percent_split(record.dd2_split_type) and secondary_value):
            return

        secondary = checks.parse_number(secondary_value)
        if primary is None or secondary is None:
            return
        total = primary + secondary
        if abs(total - 100) > SPLIT_TOLERANCE:
            out.add(
                "dd1_split_value", f"{primary_value} + {secondary_value}",
                ErrorType.BUSINESS_LOGIC_ERROR,
                f"Direct deposit split percentages must sum to 100%, "
                f"got: {checks.format_number(total)}%",
                "Adjust split values so they sum to 100%",
            )


_default_validator = RecordValidator()


def validate_record(
    record: CanonicalRecord,
    row_index: int,
    header_fields: Optional[Sequence[str]] = None,
) -> list[ValidationError]:
    """Validate a canonical or detail record; tracking checks follow the record type."""
    return _default_validator.validate(record, row_index, header_fields)


def validate_employee_record(
    record: CanonicalRecord,
    row_index: int,
    header_fields: Optional[Sequence[str]] = None,
) -> list[ValidationError]:
    """Employee fields only, even when handed a detail record."""
    return _default_validator.validate(record, row_index, header_fields, check_tracking=False)


def validate_detail_record(
    record: CanonicalRecord,
    row_index: int,
    header_fields: Optional[Sequence[str]] = None,
) -> list[ValidationError]:
    """Employee fields plus discriminator, sequence and company checks."""
    return _default_validator.validate(record, row_index, header_fields, check_tracking=True)
