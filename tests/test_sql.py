"""
Unit tests for the SQL clause builders.

Tests cover:
- Partial update SET clauses
- Company filter WHERE clauses
- Job filter WHERE clauses
"""

import pytest

from jobly.core.errors import InvalidInput
from jobly.helpers.sql import (
    EMPTY_CLAUSE,
    ClauseResult,
    FilterPredicate,
    sql_for_company_filter,
    sql_for_filter,
    sql_for_job_filter,
    sql_for_partial_update,
)

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_builds_set_clause(self):
        """Mapped fields use their column name, others pass through"""
        data = {"name": "testCompany", "description": "test description", "numEmployees": 10}

        set_cols, values = sql_for_partial_update(data, JS_TO_SQL)

        assert set_cols == '"name"=$1, "description"=$2, "num_employees"=$3'
        assert values == ("testCompany", "test description", 10)

    def test_follows_payload_order(self):
        result = sql_for_partial_update({"logoUrl": None, "name": "N"}, JS_TO_SQL)

        assert result.clause == '"logo_url"=$1, "name"=$2'
        assert result.values == (None, "N")

    def test_single_field(self):
        result = sql_for_partial_update({"title": "New"}, {})

        assert result == ClauseResult('"title"=$1', ("New",))

    def test_placeholders_match_values(self):
        """One fragment per field, $1..$n with no gaps"""
        data = {f"field{i}": i for i in range(7)}

        result = sql_for_partial_update(data, {})
        fragments = result.clause.split(", ")

        assert len(fragments) == len(result.values) == 7
        for idx, fragment in enumerate(fragments, start=1):
            assert fragment.endswith(f"=${idx}")

    def test_empty_data_fails(self):
        with pytest.raises(InvalidInput) as exc_info:
            sql_for_partial_update({}, JS_TO_SQL)

        assert exc_info.value.message == "No data"

    def test_empty_data_fails_without_map(self):
        with pytest.raises(InvalidInput):
            sql_for_partial_update({}, {})

    def test_immutable_field_fails(self):
        with pytest.raises(InvalidInput) as exc_info:
            sql_for_partial_update({"handle": "new", "name": "N"}, JS_TO_SQL, immutable=("handle",))

        assert exc_info.value.message == "Cannot update handle"

    def test_same_input_same_output(self):
        data = {"name": "n", "numEmployees": 3}

        assert sql_for_partial_update(data, JS_TO_SQL) == sql_for_partial_update(data, JS_TO_SQL)


class TestCompanyFilter:
    """Tests for sql_for_company_filter"""

    def test_name_and_min(self):
        result = sql_for_company_filter({"name": "net", "minEmployees": 5})

        assert result.clause == "WHERE name ILIKE $1 AND num_employees >= $2"
        assert result.values == ("%net%", 5)

    def test_all_filters(self):
        result = sql_for_company_filter({"maxEmployees": 30, "minEmployees": 10, "name": "c"})

        assert result.clause == "WHERE name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        assert result.values == ("%c%", 10, 30)

    def test_order_independent_of_input(self):
        a = sql_for_company_filter({"name": "x", "maxEmployees": 9, "minEmployees": 1})
        b = sql_for_company_filter({"minEmployees": 1, "maxEmployees": 9, "name": "x"})

        assert a == b

    def test_max_only(self):
        result = sql_for_company_filter({"maxEmployees": 2})

        assert result == ClauseResult("WHERE num_employees <= $1", (2,))

    def test_equal_bounds_allowed(self):
        result = sql_for_company_filter({"minEmployees": 5, "maxEmployees": 5})

        assert result.values == (5, 5)

    def test_impossible_bounds_fail(self):
        with pytest.raises(InvalidInput) as exc_info:
            sql_for_company_filter({"minEmployees": 40, "maxEmployees": 10})

        assert "Impossible" in exc_info.value.message

    @pytest.mark.parametrize("params, key", [
        ({"minEmployees": "5", "maxEmployees": "40"}, "minEmployees"),
        ({"maxEmployees": "40"}, "maxEmployees"),
        ({"minEmployees": True}, "minEmployees"),
    ])
    def test_non_numeric_bounds_fail(self, params, key):
        with pytest.raises(InvalidInput) as exc_info:
            sql_for_company_filter(params)

        assert exc_info.value.message == f"{key} must be a number"

    def test_disallowed_key_fails(self):
        with pytest.raises(InvalidInput) as exc_info:
            sql_for_company_filter({"description": "tech"})

        assert "Can only filter on name, minEmployees, maxEmployees" in exc_info.value.message
        assert "description" in exc_info.value.message

    def test_disallowed_key_fails_alongside_valid(self):
        with pytest.raises(InvalidInput):
            sql_for_company_filter({"name": "c", "handle": "c1"})

    def test_empty_params(self):
        assert sql_for_company_filter({}) is EMPTY_CLAUSE

    def test_none_params(self):
        assert sql_for_company_filter(None) is EMPTY_CLAUSE

    def test_no_applicable_predicate(self):
        assert sql_for_company_filter({"name": None}) is EMPTY_CLAUSE

    def test_sentinel_is_empty(self):
        assert EMPTY_CLAUSE.clause == ""
        assert EMPTY_CLAUSE.values == ()


class TestJobFilter:
    """Tests for sql_for_job_filter"""

    def test_all_filters(self):
        result = sql_for_job_filter({"hasEquity": True, "minSalary": 100, "title": "eng"})

        assert result.clause == "WHERE title ILIKE $1 AND salary >= $2 AND equity > $3"
        assert result.values == ("%eng%", 100, 0)

    def test_has_equity_true(self):
        result = sql_for_job_filter({"hasEquity": True})

        assert result.clause == "WHERE equity > $1"
        assert result.values == (0,)

    def test_has_equity_false(self):
        assert sql_for_job_filter({"hasEquity": False}) is EMPTY_CLAUSE

    def test_has_equity_false_does_not_shift_indexes(self):
        result = sql_for_job_filter({"title": "j", "hasEquity": False, "minSalary": 5})

        assert result.clause == "WHERE title ILIKE $1 AND salary >= $2"
        assert result.values == ("%j%", 5)

    def test_numbers_not_wrapped(self):
        result = sql_for_job_filter({"minSalary": 0})

        assert result == ClauseResult("WHERE salary >= $1", (0,))

    def test_disallowed_key_fails(self):
        with pytest.raises(InvalidInput) as exc_info:
            sql_for_job_filter({"companyHandle": "c1"})

        assert "title, minSalary, hasEquity" in exc_info.value.message

    def test_company_keys_not_allowed(self):
        with pytest.raises(InvalidInput):
            sql_for_job_filter({"minEmployees": 1})

    def test_empty_params(self):
        assert sql_for_job_filter({}) is EMPTY_CLAUSE

    def test_same_input_same_output(self):
        params = {"title": "a", "minSalary": 1, "hasEquity": True}

        assert sql_for_job_filter(params) == sql_for_job_filter(dict(params))


class TestFilterTable:
    """Tests for the table-driven sql_for_filter"""

    def test_custom_table(self):
        table = (
            FilterPredicate("city", "city = {}"),
            FilterPredicate("remote", "remote = {}", transform=lambda v: 1, applies=lambda v: v is True),
        )

        result = sql_for_filter({"remote": True, "city": "Oslo"}, table)

        assert result == ClauseResult("WHERE city = $1 AND remote = $2", ("Oslo", 1))

    def test_checks_run_before_building(self):
        calls = []

        def reject(params):
            calls.append(dict(params))
            raise InvalidInput("nope")

        with pytest.raises(InvalidInput):
            sql_for_filter({"city": "x"}, (FilterPredicate("city", "city = {}"),), checks=(reject,))

        assert calls == [{"city": "x"}]
