"""Tests for the paydate command-line interface."""

import json

import pytest

from paydate.cli import main
from paydate.engine.calculator import ENV_MAX_ADJUSTMENT_DAYS


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestCli:
    """End-to-end command runs."""

    def test_prints_due_date(self, capsys):
        code, out, _ = run(
            capsys,
            "--fund-date", "2024-05-01",
            "--pay-span", "bi-weekly",
            "--reference-pay-date", "2024-05-10",
            "--holiday", "2024-05-27",
            "--holiday", "2024-07-04",
        )
        assert code == 0
        assert out.strip() == "2024-05-24"

    def test_no_direct_deposit(self, capsys):
        code, out, _ = run(
            capsys,
            "--fund-date", "2024-05-01",
            "--pay-span", "weekly",
            "--reference-pay-date", "2024-05-05",
            "--no-direct-deposit",
        )
        assert code == 0
        assert out.strip() == "2024-05-10"

    def test_explain(self, capsys):
        code, out, _ = run(
            capsys,
            "--fund-date", "2024-06-01",
            "--pay-span", "monthly",
            "--reference-pay-date", "2024-06-27",
            "--holiday", "2024-06-27",
            "--explain",
        )
        assert code == 0
        assert json.loads(out) == {
            "min_due_date": "2024-06-11",
            "pay_date": "2024-06-27",
            "due_date": "2024-06-28",
            "days_shifted": 1,
        }

    def test_invalid_pay_span(self, capsys):
        code, out, err = run(
            capsys,
            "--fund-date", "2024-05-01",
            "--pay-span", "quarterly",
            "--reference-pay-date", "2024-05-10",
        )
        assert code == 2
        assert out == ""
        assert "Invalid paySpan: quarterly" in err

    def test_invalid_date(self, capsys):
        code, _, err = run(
            capsys,
            "--fund-date", "2024-02-30",
            "--pay-span", "weekly",
            "--reference-pay-date", "2024-05-10",
        )
        assert code == 2
        assert "error:" in err

    def test_no_business_day(self, capsys, monkeypatch):
        monkeypatch.setenv(ENV_MAX_ADJUSTMENT_DAYS, "1")
        code, _, err = run(
            capsys,
            "--fund-date", "2024-05-01",
            "--pay-span", "weekly",
            "--reference-pay-date", "2024-05-04",
        )
        assert code == 1
        assert "No business day reachable" in err

    def test_missing_required_argument(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--fund-date", "2024-05-01"])
        assert exc_info.value.code == 2

    def test_out_of_range_offset(self, capsys):
        code, out, err = run(
            capsys,
            "--fund-date", "2024-05-01T10:00+25:00",
            "--pay-span", "weekly",
            "--reference-pay-date", "2024-05-10",
        )
        assert code == 2
        assert out == ""
        assert "error:" in err
