"""
DCB (Demand, Collection & Balance) 逾期分析

根据还款计划表 + 截止日期 + 三种还款信息输入方式之一，计算应收、已收、
结余以及逾期本金/利息、逾期起始日和逾期天数。
"""
import logging
from datetime import date
from typing import List, Optional

from core.calculator import build_schedule, calc_instalment
from data_manager.schema import (
    AmortizationRow, CollectionAmounts, DCBInput, DCBResult,
    InstalmentsPaid, LoanParameters, OutstandingAmounts,
)
from utils.date_utils import days_between

logger = logging.getLogger(__name__)


def _paid_count_from_outstanding(schedule: List[AmortizationRow], principal_outstanding: float) -> int:
    """第一个剩余本金小于未还本金的期次下标，找不到则视为 0 期已还"""
    for i, row in enumerate(schedule):
        if row.principal_balance < principal_outstanding:
            return i
    logger.debug("no row below outstanding %.2f, treating as nothing paid", principal_outstanding)
    return 0


def _resolve_paid_count(schedule: List[AmortizationRow], mode: DCBInput, principal: float) -> int:
    if isinstance(mode, InstalmentsPaid):
        return min(max(int(mode.count), 0), len(schedule))
    if isinstance(mode, OutstandingAmounts):
        return _paid_count_from_outstanding(schedule, mode.principal)
    if isinstance(mode, CollectionAmounts):
        return _paid_count_from_outstanding(schedule, principal - mode.principal)
    raise TypeError(f"Unsupported DCB input: {type(mode).__name__}")


def classify(
    schedule: List[AmortizationRow],
    as_of: date,
    mode: DCBInput,
    principal: Optional[float] = None,
    instalment_amount: Optional[float] = None,
    months_step: int = 1,
) -> DCBResult:
    """
    计算 DCB 结果。

    principal 缺省时取计划表本金合计（即贷款本金）。
    instalment_amount 缺省时取首期还款额。
    """
    if principal is None or not schedule:
        # 空计划表（0 期）所有汇总为 0
        principal = sum(row.principal_amount for row in schedule)
    if instalment_amount is None:
        instalment_amount = schedule[0].total_installment if schedule else 0.0

    due_rows = [row for row in schedule if row.due_date <= as_of]
    due_count = len(due_rows)
    paid_count = _resolve_paid_count(schedule, mode, principal)

    paid_rows = schedule[:paid_count]
    overdue_rows = schedule[paid_count:due_count]
    overdue_count = max(0, due_count - paid_count)

    paid_principal = sum(row.principal_amount for row in paid_rows)
    paid_interest = sum(row.interest_amount for row in paid_rows)
    overdue_principal = sum(row.principal_amount for row in overdue_rows)
    overdue_interest = sum(row.interest_amount for row in overdue_rows)

    total_interest = sum(row.interest_amount for row in schedule)
    outstanding_principal = principal - paid_principal - overdue_principal
    outstanding_interest = total_interest - paid_interest - overdue_interest

    principal_demand = sum(row.principal_amount for row in due_rows)
    interest_demand = sum(row.interest_amount for row in due_rows)
    demand = principal_demand + interest_demand
    collection = paid_principal + paid_interest
    balance = demand - collection

    # 贷款总余额：本金 - 已还本金；应收利息 - 已还利息
    total_principal_balance = principal - paid_principal
    total_interest_balance = interest_demand - paid_interest

    if isinstance(mode, OutstandingAmounts):
        # 余额直接取输入值；逾期利息等于利息余额
        total_principal_balance = mode.principal
        total_interest_balance = mode.interest
        overdue_principal = max(0.0, total_principal_balance - outstanding_principal)
        overdue_interest = total_interest_balance
    elif isinstance(mode, CollectionAmounts):
        overdue_principal = max(0.0, principal_demand - mode.principal)
        overdue_interest = max(0.0, interest_demand - mode.interest)

    overdue_since = None
    if overdue_count > 0 and paid_count < len(schedule):
        overdue_since = schedule[paid_count].due_date
    overdue_days = max(0, days_between(overdue_since, as_of)) if overdue_since else None

    logger.debug(
        "dcb as of %s: due=%d paid=%d overdue=%d", as_of, due_count, paid_count, overdue_count,
    )
    return DCBResult(
        instalment_amount=instalment_amount,
        emi_per_month=instalment_amount / months_step if months_step else instalment_amount,
        principal_demand=principal_demand,
        interest_demand=interest_demand,
        overdue_principal=overdue_principal,
        overdue_interest=overdue_interest,
        instalments_to_be_paid=overdue_count,
        outstanding_principal=outstanding_principal,
        outstanding_interest=outstanding_interest,
        total_principal_balance=total_principal_balance,
        total_interest_balance=total_interest_balance,
        demand=demand,
        collection=collection,
        balance=balance,
        overdue_since_date=overdue_since,
        overdue_days=overdue_days,
        schedule=list(schedule),
    )


def calculate_dcb(params: LoanParameters, as_of: date, mode: DCBInput) -> DCBResult:
    """DCB 计算器入口：生成计划表后按截止日期分析"""
    rate, months_step, schedule = build_schedule(params)
    instalment = calc_instalment(params.principal, rate, params.instalment_count)
    return classify(
        schedule, as_of, mode,
        principal=params.principal,
        instalment_amount=instalment,
        months_step=months_step,
    )
