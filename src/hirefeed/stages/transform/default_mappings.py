"""Built-in ADP and QuickBooks mappings.

Admins may replace either one wholesale through the mapping repository;
replacement is total, never a field-by-field merge.
"""

from __future__ import annotations

from hirefeed.core.exceptions import UnknownProviderError
from hirefeed.models.mapping import FieldMapping, ProviderMapping


def _pairs(*pairs: tuple[str, str]) -> list[FieldMapping]:
    return [FieldMapping(source_field=s, target_field=t) for s, t in pairs]


ADP_MAPPING = ProviderMapping(
    provider="ADP",
    field_mappings=_pairs(
        ("employee_id", "Employee No"),
        ("ssn", "SSN"),
        ("first_name", "FName"),
        ("last_name", "LName"),
        ("dob", "DOB"),
        ("home_street", "Home_Addr1"),
        ("home_city", "Home_City"),
        ("home_state", "Home_State"),
        ("home_zip", "Home_Zip"),
        ("work_street", "Work_Addr1"),
        ("work_city", "Work_City"),
        ("work_state", "Work_State"),
        ("work_zip", "Work_Zip"),
        ("hire_date", "HiredDate"),
        ("job_title", "JobTitle"),
        ("department", "Dept"),
        ("flsa_status", "FLSA_Status"),
        ("pay_frequency", "PayFreq"),
        ("fed_status", "Fed_W4_Status"),
        ("fed_allowances", "Fed_W4_Allow"),
        ("fed_extra_wh_per_paycheck", "Fed_W4_Extra"),
        ("state_code", "State_Tax_Code"),
        ("state_extra_wh_per_paycheck", "State_Extra_WH"),
        ("local_tax_code_1", "Local_Tax_Code_1"),
        ("dd1_routing_number", "DD1_Routing"),
        ("dd1_account_number", "DD1_Acct"),
        ("dd1_account_type", "DD1_Type"),
        ("dd1_split_type", "DD1_SplitType"),
        ("dd1_split_value", "DD1_SplitValue"),
        ("dd2_routing_number", "DD2_Routing"),
        ("dd2_account_number", "DD2_Acct"),
        ("dd2_account_type", "DD2_Type"),
    ),
    transformations={
        "Fed_W4_Status": "adp_filing_status",
        "PayRate": "per_paycheck_rate",
        "Deduct_Code_1": "health_plan_code",
        "Deduct_Amt_1": "health_deduction_amount",
        "Deduct_Code_2": "retirement_plan_code",
        "Deduct_Amt_2": "retirement_deduction_amount",
        "Deduct_Code_3": "retirement_loan_code",
        "Deduct_Amt_3": "retirement_loan_amount",
        "Deduct_Code_4": "garnishment_code",
        "Deduct_Amt_4": "garnishment_amount",
    },
)

QUICKBOOKS_MAPPING = ProviderMapping(
    provider="QuickBooks",
    field_mappings=_pairs(
        ("employee_id", "Employee #"),
        ("ssn", "SSN"),
        ("dob", "Date of Birth"),
        ("hire_date", "Hire Date"),
        ("job_title", "Job Title"),
        ("department", "Department"),
        ("flsa_status", "FLSA Status"),
        ("pay_frequency", "Per"),
        ("fed_status", "Federal Filing Status"),
        ("fed_allowances", "Federal Allowances"),
        ("fed_extra_wh_per_paycheck", "Federal Extra Withholding"),
        ("state_code", "State Tax (Work)"),
        ("state_extra_wh_per_paycheck", "State Extra Withholding"),
        ("local_tax_code_1", "Local Tax"),
        ("i9_status", "I-9 Status"),
        ("e_verify_status", "E-Verify Status"),
        ("gender", "EEO Gender"),
        ("ethnicity", "EEO Ethnicity"),
    ),
    transformations={
        "Full Name": "full_name",
        "Home Address": "home_address_block",
        "Work Location": "work_address_block",
        "Pay Rate ($)": "per_paycheck_rate",
        "Federal Filing Status": "quickbooks_filing_status",
        "Direct Deposit 1": "direct_deposit_1_summary",
        "Direct Deposit 2": "direct_deposit_2_summary",
        "Health Deduction": "health_deduction_summary",
        "Retirement Deduction": "retirement_deduction_summary",
        "Retirement Loan": "retirement_loan_summary",
        "Garnishment": "garnishment_summary",
    },
)

DEFAULT_MAPPINGS: dict[str, ProviderMapping] = {
    ADP_MAPPING.provider: ADP_MAPPING,
    QUICKBOOKS_MAPPING.provider: QUICKBOOKS_MAPPING,
}


def default_mapping(provider: str) -> ProviderMapping:
    """Fresh copy of the built-in mapping for ``provider``."""
    try:
        return DEFAULT_MAPPINGS[provider].model_copy(deep=True)
    except KeyError:
        raise UnknownProviderError(provider) from None
