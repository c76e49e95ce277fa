"""Named transformation strategies referenced by provider mappings.

Every strategy is a pure ``(value, record) -> str`` function. Missing or
empty upstream fields yield a safe default, typically ``""`` or ``"0.00"``.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Optional

from hirefeed.core.exceptions import UnknownTransformationError
from hirefeed.models.employee_record import CanonicalRecord
from hirefeed.stages.validator.checks import is_percent_split

Transformation = Callable[[str, CanonicalRecord], str]

PAY_PERIODS_PER_YEAR: dict[str, int] = {
    "Weekly": 52,
    "Bi-weekly": 26,
    "Semi-monthly": 24,
    "Monthly": 12,
}
DEFAULT_PAY_PERIODS = PAY_PERIODS_PER_YEAR["Bi-weekly"]
CENTS = Decimal("0.01")
ZERO_AMOUNT = "0.00"

ADP_FILING_STATUS: dict[str, str] = {
    "Single": "S",
    "Married": "M",
    "Married Filing Separately": "MFS",
    "Head of Household": "HOH",
}

QUICKBOOKS_FILING_STATUS: dict[str, str] = {
    "Single": "single",
    "Married": "married_filing_jointly",
    "Married Filing Separately": "married_filing_separately",
    "Head of Household": "head_of_household",
}

_REGISTRY: dict[str, Transformation] = {}


def register_transformation(name: str) -> Callable[[Transformation], Transformation]:
    """Decorator adding a strategy to the registry under ``name``."""
    def decorator(fn: Transformation) -> Transformation:
        _REGISTRY[name] = fn
        return fn
    return decorator


def get_transformation(name: str) -> Transformation:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise UnknownTransformationError(name) from None


def registered_transformations() -> list[str]:
    return sorted(_REGISTRY)


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------

def _to_decimal(value: Optional[str]) -> Optional[Decimal]:
    try:
        number = Decimal((value or "").strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _period_amount(annual_salary: Optional[str], pay_frequency: Optional[str]) -> Decimal:
    salary = _to_decimal(annual_salary)
    if salary is None:
        return Decimal("0")
    periods = PAY_PERIODS_PER_YEAR.get(pay_frequency or "", DEFAULT_PAY_PERIODS)
    return salary / Decimal(periods)


def _cents(amount: Decimal) -> str:
    try:
        return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation:  # beyond the decimal context's precision
        return ZERO_AMOUNT


def per_paycheck_rate(annual_salary: Optional[str], pay_frequency: Optional[str]) -> str:
    """Annual salary divided by pay periods, rounded half-up to cents."""
    return _cents(_period_amount(annual_salary, pay_frequency))


def retirement_amount(record: CanonicalRecord) -> Optional[str]:
    """Per-paycheck retirement contribution, or None when not enrolled."""
    if not (record.retirement_plan_type and record.annual_salary and record.retirement_contribution_percent):
        return None
    percent = _to_decimal(record.retirement_contribution_percent)
    if percent is None:
        return None
    per_paycheck = _period_amount(record.annual_salary, record.pay_frequency)
    return _cents(per_paycheck * percent / Decimal(100))


def _has_loan(record: CanonicalRecord) -> bool:
    amount = _to_decimal(record.retirement_loan_repayment)
    return amount is not None and amount > 0


def _address_block(street: Optional[str], city: Optional[str], state: Optional[str], zip_code: Optional[str]) -> str:
    if not any((street, city, state, zip_code)):
        return ""
    return f"{street or ''}, {city or ''}, {state or ''} {zip_code or ''}".strip()


# ---------------------------------------------------------------------------
# Generic
# ---------------------------------------------------------------------------

@register_transformation("uppercase")
def uppercase(value: str, record: CanonicalRecord) -> str:
    return value.upper()


@register_transformation("lowercase")
def lowercase(value: str, record: CanonicalRecord) -> str:
    return value.lower()


@register_transformation("trim")
def trim(value: str, record: CanonicalRecord) -> str:
    return value.strip()


@register_transformation("per_paycheck_rate")
def pay_rate(value: str, record: CanonicalRecord) -> str:
    return per_paycheck_rate(record.annual_salary, record.pay_frequency)


# ---------------------------------------------------------------------------
# ADP
# ---------------------------------------------------------------------------

@register_transformation("adp_filing_status")
def adp_filing_status(value: str, record: CanonicalRecord) -> str:
    return ADP_FILING_STATUS.get(value, value)


@register_transformation("health_plan_code")
def health_plan_code(value: str, record: CanonicalRecord) -> str:
    return record.health_plan_name or ""


@register_transformation("health_deduction_amount")
def health_deduction_amount(value: str, record: CanonicalRecord) -> str:
    return record.health_deduction_per_paycheck or ZERO_AMOUNT


@register_transformation("retirement_plan_code")
def retirement_plan_code(value: str, record: CanonicalRecord) -> str:
    return record.retirement_plan_type or ""


@register_transformation("retirement_deduction_amount")
def retirement_deduction_amount(value: str, record: CanonicalRecord) -> str:
    return retirement_amount(record) or ZERO_AMOUNT


@register_transformation("retirement_loan_code")
def retirement_loan_code(value: str, record: CanonicalRecord) -> str:
    return "401k Loan" if _has_loan(record) else ""


@register_transformation("retirement_loan_amount")
def retirement_loan_amount(value: str, record: CanonicalRecord) -> str:
    return record.retirement_loan_repayment or ZERO_AMOUNT


@register_transformation("garnishment_code")
def garnishment_code(value: str, record: CanonicalRecord) -> str:
    return record.garnishment_type or ""


@register_transformation("garnishment_amount")
def garnishment_amount(value: str, record: CanonicalRecord) -> str:
    return record.garnishment_amount_per_paycheck or ZERO_AMOUNT


# ---------------------------------------------------------------------------
# QuickBooks
# ---------------------------------------------------------------------------

@register_transformation("full_name")
def full_name(value: str, record: CanonicalRecord) -> str:
    return record.display_name


@register_transformation("home_address_block")
def home_address_block(value: str, record: CanonicalRecord) -> str:
    return _address_block(record.home_street, record.home_city, record.home_state, record.home_zip)


@register_transformation("work_address_block")
def work_address_block(value: str, record: CanonicalRecord) -> str:
    return _address_block(record.work_street, record.work_city, record.work_state, record.work_zip)


@register_transformation("quickbooks_filing_status")
def quickbooks_filing_status(value: str, record: CanonicalRecord) -> str:
    if value in QUICKBOOKS_FILING_STATUS:
        return QUICKBOOKS_FILING_STATUS[value]
    return re.sub(r"\s+", "_", value.lower())


@register_transformation("direct_deposit_1_summary")
def direct_deposit_1_summary(value: str, record: CanonicalRecord) -> str:
    if not (record.dd1_routing_number and record.dd1_account_number and record.dd1_account_type):
        return ""
    if is_percent_split(record.dd1_split_type):
        split = f"{record.dd1_split_value}%"
    else:
        split = f"${record.dd1_split_value}"
    return f"{record.dd1_routing_number}-{record.dd1_account_number}-{record.dd1_account_type}-{split}"


@register_transformation("direct_deposit_2_summary")
def direct_deposit_2_summary(value: str, record: CanonicalRecord) -> str:
    if not (record.dd2_routing_number and record.dd2_account_number and record.dd2_account_type):
        return ""
    return f"{record.dd2_routing_number}-{record.dd2_account_number}-{record.dd2_account_type}"


@register_transformation("health_deduction_summary")
def health_deduction_summary(value: str, record: CanonicalRecord) -> str:
    if record.health_plan_name and record.health_deduction_per_paycheck:
        return f"{record.health_plan_name} - {record.health_deduction_per_paycheck}"
    return ""


@register_transformation("retirement_deduction_summary")
def retirement_deduction_summary(value: str, record: CanonicalRecord) -> str:
    amount = retirement_amount(record)
    if amount is None:
        return ""
    return f"{record.retirement_plan_type} - {record.retirement_contribution_percent}% (${amount})"


@register_transformation("retirement_loan_summary")
def retirement_loan_summary(value: str, record: CanonicalRecord) -> str:
    return f"${record.retirement_loan_repayment}" if _has_loan(record) else ""


@register_transformation("garnishment_summary")
def garnishment_summary(value: str, record: CanonicalRecord) -> str:
    if record.garnishment_type and record.garnishment_amount_per_paycheck:
        return f"{record.garnishment_type} - ${record.garnishment_amount_per_paycheck}"
    return ""
