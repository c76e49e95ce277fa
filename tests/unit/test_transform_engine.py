"""Tests for the transformation registry, engine and built-in mappings."""

from __future__ import annotations

import pytest

from hirefeed.core.exceptions import UnknownProviderError, UnknownTransformationError
from hirefeed.models.employee_record import CanonicalRecord
from hirefeed.models.mapping import FieldMapping, ProviderMapping
from hirefeed.stages.transform.default_mappings import ADP_MAPPING, default_mapping
from hirefeed.stages.transform.engine import transform, transform_batch
from hirefeed.stages.transform.transformations import (
    get_transformation,
    per_paycheck_rate,
    register_transformation,
    registered_transformations,
)
from tests.fakes import VALID_EMPLOYEE


def _employee(**overrides) -> CanonicalRecord:
    return CanonicalRecord(**{**VALID_EMPLOYEE, **overrides})


class TestPerPaycheckRate:
    @pytest.mark.parametrize("frequency, expected", [
        ("Bi-weekly", "4615.38"),
        ("Weekly", "2307.69"),
        ("Semi-monthly", "5000.00"),
        ("Monthly", "10000.00"),
        ("Fortnightly", "4615.38"),
        ("", "4615.38"),
    ])
    def test_divisor_by_frequency(self, frequency, expected):
        assert per_paycheck_rate("120000", frequency) == expected

    def test_rounds_half_up(self):
        assert per_paycheck_rate("0.13", "Weekly") == "0.00"
        assert per_paycheck_rate("26.13", "Bi-weekly") == "1.01"
        assert per_paycheck_rate("1.3", "Bi-weekly") == "0.05"

    def test_bad_salary_is_zero(self):
        assert per_paycheck_rate("abc", "Weekly") == "0.00"
        assert per_paycheck_rate("", "Weekly") == "0.00"
        assert per_paycheck_rate(None, None) == "0.00"


class TestRegistry:
    def test_builtins_registered(self):
        names = registered_transformations()
        assert "per_paycheck_rate" in names
        assert "quickbooks_filing_status" in names

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownTransformationError):
            get_transformation("does_not_exist")

    def test_custom_registration(self):
        @register_transformation("test_reverse")
        def reverse(value, record):
            return value[::-1]

        mapping = ProviderMapping(
            provider="Custom",
            field_mappings=[FieldMapping(source_field="first_name", target_field="Name")],
            transformations={"Name": "test_reverse"},
        )
        assert transform(_employee(), mapping) == {"Name": "enaJ"}


class TestEngine:
    def test_output_keys_match_target_fields(self, employee):
        for provider in ("ADP", "QuickBooks"):
            mapping = default_mapping(provider)
            assert list(transform(employee, mapping)) == mapping.target_fields

    def test_pure_and_deterministic(self, employee):
        before = employee.model_dump()
        first = transform(employee, ADP_MAPPING)
        second = transform(employee, ADP_MAPPING)
        assert first == second
        assert employee.model_dump() == before

    def test_transformation_overrides_copied_value(self, employee):
        assert transform(employee, ADP_MAPPING)["Fed_W4_Status"] == "S"

    def test_derived_column_without_source(self, employee):
        output = transform(employee, ADP_MAPPING)
        assert output["PayRate"] == "4615.38"

    def test_missing_source_is_empty_string(self, employee):
        assert transform(employee, ADP_MAPPING)["Dept"] == ""

    def test_default_value_used_when_source_empty(self, employee):
        mapping = ProviderMapping(
            provider="Custom",
            field_mappings=[FieldMapping(source_field="department", target_field="Dept", default_value="GEN")],
        )
        assert transform(employee, mapping) == {"Dept": "GEN"}

    def test_field_level_transformation(self, employee):
        mapping = ProviderMapping(
            provider="Custom",
            field_mappings=[FieldMapping(source_field="last_name", target_field="LN", transformation="uppercase")],
        )
        assert transform(employee, mapping) == {"LN": "DOE"}

    def test_unknown_transformation_in_mapping_raises(self, employee):
        mapping = ProviderMapping(provider="Custom", transformations={"X": "nope"})
        with pytest.raises(UnknownTransformationError):
            transform(employee, mapping)

    def test_batch(self, employee):
        outputs = transform_batch([employee, employee], ADP_MAPPING)
        assert len(outputs) == 2


class TestAdpDeductions:
    def test_not_enrolled_defaults(self, employee):
        output = transform(employee, ADP_MAPPING)
        assert output["Deduct_Code_1"] == ""
        assert output["Deduct_Amt_1"] == "0.00"
        assert output["Deduct_Amt_2"] == "0.00"
        assert output["Deduct_Code_3"] == ""

    def test_enrolled_amounts(self):
        record = _employee(
            health_plan_name="PPO Gold", health_deduction_per_paycheck="85.50",
            retirement_plan_type="401k", retirement_contribution_percent="6",
            retirement_loan_repayment="50.00",
            garnishment_type="Child Support", garnishment_amount_per_paycheck="150.00",
        )
        output = transform(record, ADP_MAPPING)
        assert output["Deduct_Code_1"] == "PPO Gold"
        assert output["Deduct_Amt_1"] == "85.50"
        assert output["Deduct_Code_2"] == "401k"
        assert output["Deduct_Amt_2"] == "276.92"
        assert output["Deduct_Code_3"] == "401k Loan"
        assert output["Deduct_Amt_3"] == "50.00"
        assert output["Deduct_Code_4"] == "Child Support"

    def test_unknown_filing_status_passes_through(self):
        output = transform(_employee(fed_status="Qualifying Widow"), ADP_MAPPING)
        assert output["Fed_W4_Status"] == "Qualifying Widow"


class TestQuickBooks:
    def test_derived_fields(self):
        record = _employee(
            fed_status="Head of Household",
            dd2_routing_number="011000015", dd2_account_number="555", dd2_account_type="Savings",
        )
        output = transform(record, default_mapping("QuickBooks"))
        assert output["Full Name"] == "Jane Doe"
        assert output["Home Address"] == "123 Main St, Hanahan, SC 29410"
        assert output["Work Location"] == ""
        assert output["Pay Rate ($)"] == "4615.38"
        assert output["Federal Filing Status"] == "head_of_household"
        assert output["Direct Deposit 1"] == "021000021-987654321-Checking-100%"
        assert output["Direct Deposit 2"] == "011000015-555-Savings"
        assert output["Health Deduction"] == ""

    def test_filing_status_snake_case_fallback(self):
        output = transform(_employee(fed_status="Qualifying  Widow"), default_mapping("QuickBooks"))
        assert output["Federal Filing Status"] == "qualifying_widow"

    def test_flat_amount_direct_deposit(self):
        record = _employee(dd1_split_type="Flat_Amount", dd1_split_value="500")
        output = transform(record, default_mapping("QuickBooks"))
        assert output["Direct Deposit 1"] == "021000021-987654321-Checking-$500"

    def test_retirement_summary(self):
        record = _employee(retirement_plan_type="401k", retirement_contribution_percent="6")
        output = transform(record, default_mapping("QuickBooks"))
        assert output["Retirement Deduction"] == "401k - 6% ($276.92)"


class TestDefaultMappings:
    def test_returns_copy(self):
        first = default_mapping("ADP")
        first.transformations["PayRate"] = "uppercase"
        assert default_mapping("ADP").transformations["PayRate"] == "per_paycheck_rate"

    def test_unknown_provider(self):
        with pytest.raises(UnknownProviderError):
            default_mapping("Gusto")
