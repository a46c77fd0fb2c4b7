"""Unit tests for the PaySpan enumeration."""

import json

import pytest

from paydate.core.types import PaySpan
from paydate.exceptions import InvalidPaySpanError


class TestPaySpan:
    """Test PaySpan values and parsing."""

    def test_values(self):
        assert [s.value for s in PaySpan] == ["weekly", "bi-weekly", "monthly"]

    def test_str_enum_compares_to_wire_value(self):
        assert PaySpan.BI_WEEKLY == "bi-weekly"
        assert json.dumps(PaySpan.MONTHLY) == '"monthly"'

    def test_period_days(self):
        assert PaySpan.WEEKLY.period_days == 7
        assert PaySpan.BI_WEEKLY.period_days == 14
        assert PaySpan.MONTHLY.period_days is None

    def test_index_is_stable(self):
        assert [s.index for s in PaySpan] == [0, 1, 2]

    @pytest.mark.parametrize("value", ["weekly", "bi-weekly", "monthly"])
    def test_parse_string(self, value):
        assert PaySpan.parse(value).value == value

    def test_parse_member(self):
        assert PaySpan.parse(PaySpan.WEEKLY) is PaySpan.WEEKLY

    @pytest.mark.parametrize("value", ["quarterly", "Weekly", "biweekly", "", " monthly"])
    def test_parse_invalid_string(self, value):
        with pytest.raises(InvalidPaySpanError) as exc_info:
            PaySpan.parse(value)
        assert exc_info.value.pay_span == value
        assert "Invalid paySpan" in str(exc_info.value)

    def test_parse_invalid_type(self):
        with pytest.raises(InvalidPaySpanError):
            PaySpan.parse(14)
