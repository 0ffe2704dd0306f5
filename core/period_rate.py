"""期利率换算：名义年利率 + 计息频率 -> 每期实际利率"""
from config.constants import Compounding, MONTHS_PER_INSTALMENT, PERIODS_PER_YEAR


def months_per_instalment(frequency: str) -> int:
    """还款频率对应的月数，未知频率按月"""
    return MONTHS_PER_INSTALMENT.get(frequency, 1)


def periods_per_year(compounding: str) -> int:
    """每年计息次数。单利返回 0，未知频率按年 (1)"""
    return PERIODS_PER_YEAR.get(compounding, 1)


def resolve_period_rate(
    annual_rate: float,
    compounding: str,
    period_months: int,
) -> float:
    """
    计算一个还款期内的实际利率。

    annual_rate 为小数形式的名义年利率（12% -> 0.12）。
    单利: annual_rate * period_months / 12
    复利: (1 + annual_rate / m) ** (m * period_months / 12) - 1
    """
    years = period_months / 12
    if compounding == Compounding.NO_COMPOUND.value:
        return annual_rate * years
    m = periods_per_year(compounding)
    return (1 + annual_rate / m) ** (m * years) - 1
