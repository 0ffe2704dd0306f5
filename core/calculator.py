"""核心计算：等额本息月供、还款计划表、IRR"""
import logging
from datetime import date
from typing import List, Tuple

import numpy as np
import pandas as pd
from scipy import optimize

from config.constants import AMORTIZATION_COLUMNS
from config.settings import AMOUNT_PRECISION
from core.period_rate import months_per_instalment, resolve_period_rate
from data_manager.schema import AmortizationRow, LoanParameters, LoanSummary
from utils.date_utils import add_months

logger = logging.getLogger(__name__)


def calc_instalment(principal: float, period_rate: float, count: int) -> float:
    """
    等额本息每期还款额。

    EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)，r = 0 时为 P / n。
    count <= 0 时返回 0。
    """
    if count <= 0:
        return 0.0
    if period_rate == 0:
        return principal / count
    factor = (1 + period_rate) ** count
    return principal * period_rate * factor / (factor - 1)


def generate_schedule(
    principal: float,
    period_rate: float,
    count: int,
    start_date: date,
    months_step: int = 1,
) -> List[AmortizationRow]:
    """生成还款计划表（等额本息，逐期递减余额）"""
    instalment = calc_instalment(principal, period_rate, count)
    rows = []
    remaining = principal

    for i in range(max(count, 0)):
        due = add_months(start_date, i * months_step)
        interest = remaining * period_rate
        prin = instalment - interest
        remaining -= prin
        rows.append(AmortizationRow(
            installment_number=i + 1,
            due_date=due,
            principal_amount=prin,
            interest_amount=interest,
            total_installment=instalment,
            principal_balance=remaining,
        ))

    logger.debug("generated %d rows, instalment=%.4f, rate=%.8f", len(rows), instalment, period_rate)
    return rows


def schedule_to_frame(schedule: List[AmortizationRow]) -> pd.DataFrame:
    """还款计划转 DataFrame，金额保留两位小数"""
    records = [{
        "installment_number": row.installment_number,
        "due_date": row.due_date.strftime("%Y-%m-%d"),
        "principal_amount": round(row.principal_amount, AMOUNT_PRECISION),
        "interest_amount": round(row.interest_amount, AMOUNT_PRECISION),
        "total_installment": round(row.total_installment, AMOUNT_PRECISION),
        "principal_balance": round(row.principal_balance, AMOUNT_PRECISION),
    } for row in schedule]
    return pd.DataFrame(records, columns=AMORTIZATION_COLUMNS)


def calc_effective_annual_rate(
    principal: float,
    schedule: List[AmortizationRow],
    months_step: int = 1,
) -> float:
    """用 IRR 法计算真实年化率 (%)，无解时返回 0"""
    if not schedule or principal <= 0:
        return 0.0
    cash_flows = np.array([-principal] + [row.total_installment for row in schedule])
    periods = np.arange(len(cash_flows))

    def npv(rate):
        return float(np.sum(cash_flows / (1 + rate) ** periods))

    # 搜索上界随期利率放大（按年还款时期利率可超过 100%）
    period_rate = schedule[0].interest_amount / principal
    upper = max(1.0, 2 * period_rate + 1)
    try:
        period_irr = optimize.brentq(npv, -0.5, upper)
    except (ValueError, RuntimeError):
        logger.debug("IRR has no root in [-0.5, %.4f]", upper)
        return 0.0
    annual_irr = (1 + period_irr) ** (12 / months_step) - 1
    return round(annual_irr * 100, 4)


def build_schedule(params: LoanParameters) -> Tuple[float, int, List[AmortizationRow]]:
    """按贷款参数生成计划，返回 (期利率, 每期月数, 计划表)"""
    months_step = months_per_instalment(params.instalment_frequency)
    rate = resolve_period_rate(params.annual_rate / 100, params.compounding, months_step)
    schedule = generate_schedule(
        params.principal, rate, params.instalment_count,
        params.instalment_start_date, months_step,
    )
    return rate, months_step, schedule


def summarize_loan(params: LoanParameters) -> Tuple[LoanSummary, List[AmortizationRow]]:
    """贷款计算器：返回 (汇总, 还款计划表)"""
    rate, months_step, schedule = build_schedule(params)
    instalment = calc_instalment(params.principal, rate, params.instalment_count)

    total_interest = sum(row.interest_amount for row in schedule)
    total_payment = sum(row.total_installment for row in schedule)
    last_due = schedule[-1].due_date if schedule else None

    summary = LoanSummary(
        instalment_amount=instalment,
        emi_per_month=instalment / months_step,
        last_due_date=last_due,
        total_interest=total_interest,
        total_payment=total_payment,
        effective_annual_rate=calc_effective_annual_rate(params.principal, schedule, months_step),
    )
    return summary, schedule
