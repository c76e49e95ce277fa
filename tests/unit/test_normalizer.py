"""Tests for combined-field normalization."""

from __future__ import annotations

from hirefeed.stages.intake.normalizer import normalize_row, parse_address


class TestParseAddress:
    def test_standard_address(self):
        parsed = parse_address("123 Main St, Hanahan, SC 29410")
        assert parsed is not None
        assert (parsed.street, parsed.city, parsed.state, parsed.zip) == ("123 Main St", "Hanahan", "SC", "29410")

    def test_multi_part_street_and_zip_plus_four(self):
        parsed = parse_address("500 Oak Ave, Suite 4, Charleston, SC 29401-1234")
        assert parsed.street == "500 Oak Ave, Suite 4"
        assert parsed.city == "Charleston"
        assert parsed.zip == "29401-1234"

    def test_no_zip_returns_none(self):
        assert parse_address("123 Main St, Hanahan, SC") is None

    def test_too_few_parts_returns_none(self):
        assert parse_address("Hanahan SC 29410") is None

    def test_blank_returns_none(self):
        assert parse_address("   ") is None


class TestNormalizeRow:
    def test_home_address_split(self):
        warnings = []
        row = {"employee_id": "E1", "home_street": "", "home_address": "123 Main St, Hanahan, SC 29410"}
        result = normalize_row(row, 1, warnings)

        assert result["home_street"] == "123 Main St"
        assert result["home_city"] == "Hanahan"
        assert result["home_state"] == "SC"
        assert result["home_zip"] == "29410"
        assert "home_address" not in result
        assert len(warnings) == 1
        assert warnings[0].field == "home_address"
        assert warnings[0].row_id == "E1"

    def test_input_row_not_mutated(self):
        row = {"home_address": "123 Main St, Hanahan, SC 29410"}
        normalize_row(row, 1, [])
        assert "home_address" in row

    def test_existing_street_wins(self):
        warnings = []
        row = {"home_street": "9 Elm St", "home_address": "123 Main St, Hanahan, SC 29410"}
        result = normalize_row(row, 1, warnings)
        assert result["home_street"] == "9 Elm St"
        assert result["home_address"] == "123 Main St, Hanahan, SC 29410"
        assert warnings == []

    def test_unparseable_address_dropped_without_warning(self):
        warnings = []
        result = normalize_row({"work_address": "somewhere"}, 3, warnings)
        assert "work_address" not in result
        assert "work_street" not in result
        assert warnings == []

    def test_full_name_split(self):
        warnings = []
        result = normalize_row({"full_name": "Mary Ann Smith"}, 2, warnings)
        assert result["first_name"] == "Mary"
        assert result["last_name"] == "Ann Smith"
        assert "full_name" not in result
        assert warnings[0].row_id == "row_2"

    def test_single_token_name_not_split(self):
        warnings = []
        result = normalize_row({"full_name": "Cher"}, 2, warnings)
        assert "first_name" not in result
        assert warnings == []

    def test_row_without_combined_fields_is_noop(self):
        warnings = []
        row = {"employee_id": "E1", "home_street": "1 A St"}
        assert normalize_row(row, 1, warnings) == row
        assert warnings == []
