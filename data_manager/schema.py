from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Union


@dataclass(frozen=True)
class LoanParameters:
    principal: float
    annual_rate: float  # 年利率 %
    instalment_count: int
    instalment_frequency: str  # monthly / quarterly / half-yearly / yearly
    compounding: str  # daily / monthly / quarterly / half-yearly / yearly / no-compound
    sanction_date: date
    instalment_start_date: date


@dataclass(frozen=True)
class AmortizationRow:
    installment_number: int
    due_date: date
    principal_amount: float
    interest_amount: float
    total_installment: float
    principal_balance: float  # 本期还款后剩余本金


@dataclass(frozen=True)
class LoanSummary:
    instalment_amount: float
    emi_per_month: float
    last_due_date: Optional[date]
    total_interest: float
    total_payment: float
    effective_annual_rate: float  # IRR 年化 %


# DCB 三种输入方式，互斥
@dataclass(frozen=True)
class InstalmentsPaid:
    count: int


@dataclass(frozen=True)
class OutstandingAmounts:
    principal: float
    interest: float


@dataclass(frozen=True)
class CollectionAmounts:
    principal: float
    interest: float


DCBInput = Union[InstalmentsPaid, OutstandingAmounts, CollectionAmounts]


@dataclass(frozen=True)
class DCBResult:
    instalment_amount: float
    emi_per_month: float
    principal_demand: float
    interest_demand: float
    overdue_principal: float
    overdue_interest: float
    instalments_to_be_paid: int
    outstanding_principal: float
    outstanding_interest: float
    total_principal_balance: float
    total_interest_balance: float
    demand: float
    collection: float
    balance: float
    overdue_since_date: Optional[date] = None
    overdue_days: Optional[int] = None
    schedule: List[AmortizationRow] = field(default_factory=list)


@dataclass(frozen=True)
class DepositState:
    principal: float
    monthly_contribution: float
    term_months: int
    annual_rate: float  # 年利率 %
    compounding: str
    payout_method: str = "maturity"  # monthly-interest / maturity


@dataclass(frozen=True)
class DepositRow:
    month: int
    contribution: float
    interest: float  # 累计利息
    balance: float


@dataclass(frozen=True)
class DepositResult:
    total_principal: float
    interest_amount: float
    maturity_value: float
    apy: float  # 小数，0.1268 -> 12.68%
