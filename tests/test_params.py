"""
Tests for query string parsing.
"""

import pytest

from jobly.core.errors import BadRequestError
from jobly.crud.params import parse_bool, parse_companies_query, parse_jobs_query, parse_number


class TestScalars:
    """Tests for string coercion helpers"""

    @pytest.mark.parametrize("raw, expected", [
        ("10", 10),
        (" 7 ", 7),
        ("-3", -3),
        ("ten", None),
        ("1.5", 1.5),
        ("nan", None),
        ("inf", None),
        ("", None),
        (None, None),
    ])
    def test_parse_number(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("true", True),
        ("false", False),
        ("yes", None),
        ("True", None),
        ("", None),
        (None, None),
    ])
    def test_parse_bool_is_strict(self, raw, expected):
        assert parse_bool(raw) is expected


class TestCompaniesQuery:
    """Tests for parse_companies_query"""

    def test_all_fields(self):
        filters = parse_companies_query({"name": "net", "minEmployees": "10", "maxEmployees": "300"})

        assert filters.name == "net"
        assert filters.min_employees == 10
        assert filters.max_employees == 300

    def test_unknown_keys_dropped(self):
        """Unrecognized keys are ignored, not errors"""
        filters = parse_companies_query({"color": "blue", "title": "x"})

        assert filters.model_dump(exclude_none=True) == {}

    def test_non_numeric_bound_omitted(self):
        """A bound that doesn't parse is left out, never zero-filled"""
        filters = parse_companies_query({"minEmployees": "lots"})

        assert filters.min_employees is None

    def test_negative_bound_rejected(self):
        with pytest.raises(BadRequestError):
            parse_companies_query({"maxEmployees": "-1"})

    def test_decimal_bound_kept(self):
        filters = parse_companies_query({"minEmployees": "1.5"})

        assert filters.min_employees == 1.5

    def test_bound_beyond_integer_column_rejected(self):
        with pytest.raises(BadRequestError):
            parse_companies_query({"maxEmployees": "99999999999999999999"})


class TestJobsQuery:
    """Tests for parse_jobs_query"""

    def test_all_fields(self):
        filters = parse_jobs_query({"title": "eng", "minSalary": "50000", "hasEquity": "true"})

        assert filters.title == "eng"
        assert filters.min_salary == 50000
        assert filters.has_equity is True

    def test_decimal_min_salary_kept(self):
        """A fractional salary floor is applied, not dropped"""
        assert parse_jobs_query({"minSalary": "25.5"}).min_salary == 25.5

    def test_min_salary_beyond_integer_column_rejected(self):
        with pytest.raises(BadRequestError):
            parse_jobs_query({"minSalary": "99999999999999999999"})

    def test_has_equity_false_string(self):
        """The literal "false" is False, not a truthy string"""
        assert parse_jobs_query({"hasEquity": "false"}).has_equity is False

    def test_has_equity_other_string_dropped(self):
        assert parse_jobs_query({"hasEquity": "maybe"}).has_equity is None

    def test_empty_title_dropped(self):
        assert parse_jobs_query({"title": ""}).title is None
