"""核心计算测试"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import math
from dataclasses import replace
from datetime import date

import pytest
from core.calculator import (
    calc_effective_annual_rate,
    calc_instalment,
    generate_schedule,
    schedule_to_frame,
    summarize_loan,
)
from config.constants import AMORTIZATION_COLUMNS


class TestInstalment:
    """等额本息每期还款额"""

    def test_standard_emi(self):
        """12 万, 月利率 1%, 12 期 -> 约 10661.85"""
        emi = calc_instalment(120000, 0.01, 12)
        expected = 120000 * 0.01 * 1.01 ** 12 / (1.01 ** 12 - 1)
        assert emi == pytest.approx(expected)
        assert round(emi, 2) == 10661.85

    def test_zero_rate(self):
        assert calc_instalment(12000, 0.0, 12) == 1000.0

    def test_zero_count(self):
        assert calc_instalment(12000, 0.01, 0) == 0.0

    def test_single_instalment(self):
        assert calc_instalment(10000, 0.01, 1) == pytest.approx(10100)


class TestScheduleGeneration:
    """还款计划生成测试"""

    def test_length_and_numbering(self):
        sch = generate_schedule(120000, 0.01, 12, date(2024, 1, 15))
        assert len(sch) == 12
        assert sch[0].installment_number == 1
        assert sch[-1].installment_number == 12

    def test_principal_sums_to_loan(self):
        principal = 500000
        sch = generate_schedule(principal, 0.0075, 120, date(2024, 1, 1))
        total = sum(row.principal_amount for row in sch)
        assert total == pytest.approx(principal, rel=1e-6)
        # 最后一期剩余本金应为 0
        assert abs(sch[-1].principal_balance) < 1e-6

    def test_row_identity(self):
        sch = generate_schedule(250000, 0.02, 24, date(2024, 1, 1), 3)
        for row in sch:
            assert row.principal_amount + row.interest_amount == pytest.approx(row.total_installment)

    def test_level_instalment(self):
        sch = generate_schedule(250000, 0.02, 24, date(2024, 1, 1))
        assert len({row.total_installment for row in sch}) == 1

    def test_balance_decreases(self):
        sch = generate_schedule(120000, 0.01, 12, date(2024, 1, 15))
        balances = [row.principal_balance for row in sch]
        assert balances == sorted(balances, reverse=True)

    def test_first_row_interest(self):
        sch = generate_schedule(120000, 0.01, 12, date(2024, 1, 15))
        assert sch[0].interest_amount == pytest.approx(1200)

    def test_zero_rate_schedule(self):
        sch = generate_schedule(12000, 0.0, 12, date(2024, 1, 1))
        for row in sch:
            assert row.total_installment == 1000
            assert row.principal_amount == 1000
            assert row.interest_amount == 0
        assert sch[-1].principal_balance == 0

    def test_no_nan(self):
        sch = generate_schedule(12000, 0.0, 12, date(2024, 1, 1))
        assert all(math.isfinite(row.total_installment) for row in sch)

    def test_zero_count_is_empty(self):
        assert generate_schedule(12000, 0.01, 0, date(2024, 1, 1)) == []

    def test_idempotent(self):
        a = generate_schedule(987654.32, 0.00875, 180, date(2024, 3, 31), 1)
        b = generate_schedule(987654.32, 0.00875, 180, date(2024, 3, 31), 1)
        assert a == b

    def test_due_dates_clamp_month_end(self):
        """1/31 起按月推进：2/29、3/31、4/30"""
        sch = generate_schedule(12000, 0.01, 4, date(2024, 1, 31))
        assert [row.due_date for row in sch] == [
            date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30),
        ]

    def test_due_dates_quarterly(self):
        sch = generate_schedule(12000, 0.03, 4, date(2024, 1, 15), 3)
        assert [row.due_date for row in sch] == [
            date(2024, 1, 15), date(2024, 4, 15), date(2024, 7, 15), date(2024, 10, 15),
        ]


class TestScheduleFrame:
    def test_columns_and_rounding(self):
        sch = generate_schedule(120000, 0.01, 12, date(2024, 1, 15))
        df = schedule_to_frame(sch)
        assert list(df.columns) == AMORTIZATION_COLUMNS
        assert len(df) == 12
        assert df.iloc[0]["total_installment"] == 10661.85
        assert df.iloc[0]["due_date"] == "2024-01-15"

    def test_empty(self):
        df = schedule_to_frame([])
        assert df.empty
        assert list(df.columns) == AMORTIZATION_COLUMNS


class TestLoanSummary:
    def test_monthly_summary(self, monthly_loan):
        summary, sch = summarize_loan(monthly_loan)
        assert round(summary.instalment_amount, 2) == 10661.85
        assert summary.emi_per_month == summary.instalment_amount
        assert summary.last_due_date == date(2024, 12, 15)
        assert summary.total_payment == pytest.approx(summary.instalment_amount * 12)
        assert summary.total_interest == pytest.approx(summary.total_payment - 120000)
        assert len(sch) == 12

    def test_quarterly_emi_per_month(self, monthly_loan):
        params = replace(monthly_loan, instalment_frequency="quarterly", instalment_count=4)
        summary, sch = summarize_loan(params)
        assert summary.emi_per_month == pytest.approx(summary.instalment_amount / 3)
        assert summary.last_due_date == date(2024, 10, 15)

    def test_zero_rate_summary(self, monthly_loan):
        params = replace(monthly_loan, principal=12000, annual_rate=0)
        summary, _ = summarize_loan(params)
        assert summary.instalment_amount == 1000
        assert summary.total_interest == 0


class TestEffectiveAnnualRate:
    def test_close_to_effective_rate(self):
        """月利率 1% 的 IRR 年化约 12.68%"""
        sch = generate_schedule(120000, 0.01, 12, date(2024, 1, 15))
        assert calc_effective_annual_rate(120000, sch) == pytest.approx(12.6825, abs=0.01)

    def test_quarterly(self):
        sch = generate_schedule(120000, 0.03, 8, date(2024, 1, 15), 3)
        assert calc_effective_annual_rate(120000, sch, 3) == pytest.approx((1.03 ** 4 - 1) * 100, abs=0.01)

    def test_zero_rate(self):
        sch = generate_schedule(12000, 0.0, 12, date(2024, 1, 1))
        assert calc_effective_annual_rate(12000, sch) == pytest.approx(0.0, abs=1e-6)

    def test_yearly_high_rate(self):
        """按年还款、年利率 100% 按月计息：期利率约 161%"""
        period_rate = (1 + 1.0 / 12) ** 12 - 1
        sch = generate_schedule(100000, period_rate, 5, date(2024, 1, 15), 12)
        irr = calc_effective_annual_rate(100000, sch, 12)
        assert irr > 100
        assert irr == pytest.approx(period_rate * 100, abs=0.01)

    def test_yearly_high_rate_summary(self, monthly_loan):
        params = replace(monthly_loan, principal=100000, annual_rate=100,
                         instalment_count=5, instalment_frequency="yearly")
        summary, _ = summarize_loan(params)
        assert summary.effective_annual_rate == pytest.approx(((1 + 1.0 / 12) ** 12 - 1) * 100, abs=0.01)

    def test_empty_schedule(self):
        assert calc_effective_annual_rate(12000, []) == 0.0
