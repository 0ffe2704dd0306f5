"""定期存款计算：到期金额、APY、逐月明细"""
import logging
from dataclasses import replace
from typing import List, Tuple

import pandas as pd

from config.constants import DEPOSIT_COLUMNS, PERIODS_PER_YEAR, PayoutMethod
from config.settings import AMOUNT_PRECISION
from data_manager.schema import DepositResult, DepositRow, DepositState

logger = logging.getLogger(__name__)


def compounds_per_year(compounding: str) -> int:
    """每年复利次数，单利为 0，未选择时按月"""
    return PERIODS_PER_YEAR.get(compounding, 12)


def calc_apy(nominal: float, m: int) -> float:
    """年化收益率 APY，nominal 为小数"""
    if m > 0:
        return (1 + nominal / m) ** m - 1
    return nominal


def calc_monthly_growth(nominal: float, m: int) -> float:
    """等效月利率 j"""
    if m > 0:
        return (1 + nominal / m) ** (m / 12) - 1
    return nominal / 12


def _monthly_interest_payout(state: DepositState) -> Tuple[float, float, List[DepositRow]]:
    # 每月利息 = 本金 * 年利率% / (1200 + 年利率%)，利息按月支付，不计入余额
    rate_pct = state.annual_rate
    contribution = state.monthly_contribution
    balance = state.principal
    cum_interest = 0.0
    rows = []
    for month in range(1, state.term_months + 1):
        base = balance + contribution
        interest = base * rate_pct / (1200 + rate_pct)
        cum_interest += interest
        balance = base
        rows.append(DepositRow(month, contribution, cum_interest, balance))
    return balance, cum_interest, rows


def _simple_interest_maturity(state: DepositState, nominal: float) -> Tuple[float, float, List[DepositRow]]:
    monthly_rate = nominal / 12
    contribution = state.monthly_contribution
    balance = state.principal
    cum_interest = 0.0
    rows = []
    for month in range(1, state.term_months + 1):
        base = balance + contribution
        cum_interest += base * monthly_rate
        balance = base
        rows.append(DepositRow(month, contribution, cum_interest, balance))
    return balance + cum_interest, cum_interest, rows


def _compound_maturity(state: DepositState, j: float, total_principal: float) -> Tuple[float, float, List[DepositRow]]:
    n = state.term_months
    contribution = state.monthly_contribution

    fv_lump = state.principal * (1 + j) ** n
    # 每月月初存入，按期初年金计算
    if contribution > 0 and j != 0:
        fv_monthly = contribution * ((1 + j) ** n - 1) / j * (1 + j)
    else:
        fv_monthly = contribution * n
    maturity_value = fv_lump + fv_monthly
    interest_amount = max(0.0, maturity_value - total_principal)

    balance = state.principal
    cum_interest = 0.0
    rows = []
    for month in range(1, n + 1):
        base = balance + contribution
        interest = base * j
        balance = base + interest
        cum_interest += interest
        rows.append(DepositRow(month, contribution, cum_interest, balance))
    return maturity_value, interest_amount, rows


def compute_deposit(state: DepositState) -> Tuple[DepositResult, List[DepositRow]]:
    """
    计算定期存款。

    payout_method:
      monthly-interest  按月付息，到期只返还本金和存入额
      maturity          到期一次付清；单利时利息不滚存，复利时按等效月利率滚存
    """
    nominal = state.annual_rate / 100
    m = compounds_per_year(state.compounding)
    apy = calc_apy(nominal, m)
    j = calc_monthly_growth(nominal, m)
    months = max(0, state.term_months)
    # 未填写月存款额按 0 处理
    state = replace(state, term_months=months, monthly_contribution=state.monthly_contribution or 0.0)
    total_principal = state.principal + state.monthly_contribution * months

    if state.payout_method == PayoutMethod.MONTHLY_INTEREST.value:
        maturity_value, interest_amount, rows = _monthly_interest_payout(state)
    elif m == 0:
        maturity_value, interest_amount, rows = _simple_interest_maturity(state, nominal)
    else:
        maturity_value, interest_amount, rows = _compound_maturity(state, j, total_principal)

    logger.debug(
        "deposit %s/%s over %d months: maturity=%.4f", state.payout_method, state.compounding,
        months, maturity_value,
    )
    result = DepositResult(
        total_principal=total_principal,
        interest_amount=interest_amount,
        maturity_value=maturity_value,
        apy=apy,
    )
    return result, rows


def deposit_rows_to_frame(rows: List[DepositRow]) -> pd.DataFrame:
    """逐月明细转 DataFrame"""
    records = [{
        "month": row.month,
        "contribution": round(row.contribution, AMOUNT_PRECISION),
        "interest": round(row.interest, AMOUNT_PRECISION),
        "balance": round(row.balance, AMOUNT_PRECISION),
    } for row in rows]
    return pd.DataFrame(records, columns=DEPOSIT_COLUMNS)
