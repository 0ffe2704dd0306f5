from enum import Enum


class InstalmentFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half-yearly"
    YEARLY = "yearly"


class Compounding(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half-yearly"
    YEARLY = "yearly"
    NO_COMPOUND = "no-compound"  # 单利


class PayoutMethod(str, Enum):
    MONTHLY_INTEREST = "monthly-interest"  # 按月付息
    MATURITY = "maturity"  # 到期一次付清


class DCBMode(str, Enum):
    INSTALMENTS = "instalments"  # 已还期数
    OUTSTANDING = "outstanding"  # 未还本金/利息
    COLLECTION = "collection"  # 已收本金/利息


# 每期月数（daily 只用于到期日推进，按 1 个月处理）
MONTHS_PER_INSTALMENT = {
    "daily": 1,
    "monthly": 1,
    "quarterly": 3,
    "half-yearly": 6,
    "yearly": 12,
}

# 每年计息次数，单利为 0
PERIODS_PER_YEAR = {
    "daily": 365,
    "monthly": 12,
    "quarterly": 4,
    "half-yearly": 2,
    "yearly": 1,
    "no-compound": 0,
}

# 列定义
AMORTIZATION_COLUMNS = [
    "installment_number", "due_date", "principal_amount",
    "interest_amount", "total_installment", "principal_balance",
]

DEPOSIT_COLUMNS = ["month", "contribution", "interest", "balance"]
