"""
Tests for the partial-update SQL helpers.

Tests cover:
- SET clause rendering and placeholder numbering
- Value ordering and null handling
- Field descriptor checks
"""

import pytest

from jobly.core.errors import (
    ImmutableFieldError,
    InvalidFieldValueError,
    NoFieldsError,
    UnknownFieldError,
)
from jobly.core.sql import ColumnField, check_update_fields, column_map, sql_for_partial_update
from jobly.models.company import COMPANY_FIELDS
from jobly.models.job import JOB_FIELDS

USER_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


class TestSqlForPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_translates_columns_in_order(self):
        """Test columns, values and placeholders follow input order"""
        result = sql_for_partial_update(
            {"firstName": "test", "lastName": "test", "isAdmin": False},
            USER_COLUMNS,
        )

        assert [a.column for a in result.assignments] == ["first_name", "last_name", "is_admin"]
        assert [a.index for a in result.assignments] == [1, 2, 3]
        assert result.values == ["test", "test", False]
        assert result.set_cols == '"first_name"=:p1, "last_name"=:p2, "is_admin"=:p3'
        assert result.params == {"p1": "test", "p2": "test", "p3": False}

    def test_untranslated_field_keeps_its_name(self):
        """Test fields missing from the table are used as column names"""
        result = sql_for_partial_update({"age": 32, "firstName": "Aliya"}, USER_COLUMNS)

        assert result.set_cols == '"age"=:p1, "first_name"=:p2'
        assert result.values == [32, "Aliya"]

    def test_order_follows_insertion_not_table(self):
        """Test the translation table order does not affect output"""
        result = sql_for_partial_update({"isAdmin": True, "firstName": "a"}, USER_COLUMNS)

        assert [a.column for a in result.assignments] == ["is_admin", "first_name"]

    def test_nulls_are_kept(self):
        """Test explicit None values become assignments"""
        result = sql_for_partial_update({"salary": None, "equity": None}, {})

        assert result.values == [None, None]
        assert result.set_cols == '"salary"=:p1, "equity"=:p2'

    def test_values_are_not_coerced_or_interpolated(self):
        """Test values never appear in the SQL text"""
        payload = "x'; DROP TABLE companies; --"
        result = sql_for_partial_update({"name": payload, "numEmployees": "12"}, {})

        assert payload not in result.set_cols
        assert result.values == [payload, "12"]

    def test_empty_data_raises(self):
        """Test an empty mapping is rejected"""
        with pytest.raises(NoFieldsError):
            sql_for_partial_update({}, USER_COLUMNS)

    def test_no_fields_error_is_bad_request(self):
        """Test NoFieldsError surfaces as a 400"""
        with pytest.raises(NoFieldsError) as exc_info:
            sql_for_partial_update({}, {})

        assert exc_info.value.status_code == 400


class TestFieldDescriptors:
    """Tests for ColumnField and check_update_fields"""

    def test_column_map_for_company(self):
        assert column_map(COMPANY_FIELDS) == {
            "handle": "handle",
            "name": "name",
            "description": "description",
            "numEmployees": "num_employees",
            "logoUrl": "logo_url",
        }

    def test_bool_is_not_an_int(self):
        """Test True is rejected where only int is declared"""
        field = ColumnField("numEmployees", "num_employees", (int,))

        assert field.accepts(10)
        assert field.accepts(None)
        assert not field.accepts(True)

    def test_non_nullable_field_rejects_none(self):
        field = ColumnField("name", "name", (str,), nullable=False)

        assert not field.accepts(None)

    def test_valid_update_passes(self):
        check_update_fields({"salary": 1000, "equity": "0.2", "title": "New"}, JOB_FIELDS)

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            check_update_fields({"badField": 1}, COMPANY_FIELDS)

        assert exc_info.value.field == "badField"

    def test_immutable_company_handle(self):
        """Test a job's companyHandle cannot be changed"""
        with pytest.raises(ImmutableFieldError):
            check_update_fields({"companyHandle": "c1-new"}, JOB_FIELDS)

    def test_immutable_handle(self):
        with pytest.raises(ImmutableFieldError):
            check_update_fields({"handle": "new"}, COMPANY_FIELDS)

    def test_wrong_value_type(self):
        with pytest.raises(InvalidFieldValueError):
            check_update_fields({"numEmployees": "lots"}, COMPANY_FIELDS)
