from config.settings import APY_PRECISION, CURRENCY_SYMBOL


def _group_indian(integer_part: str) -> str:
    # 印度计数：末三位一组，其余两位一组 (12,34,567)
    if len(integer_part) <= 3:
        return integer_part
    head, tail = integer_part[:-3], integer_part[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def fmt_amount(value: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """格式化金额：1234567.891 -> ₹12,34,567.89"""
    text = f"{abs(value):.2f}"
    sign = "-" if value < 0 and text != "0.00" else ""
    integer_part, fraction = text.split(".")
    return f"{sign}{symbol}{_group_indian(integer_part)}.{fraction}"


def fmt_rate(value: float) -> str:
    """格式化利率百分比：12.5 -> 12.50%"""
    return f"{value:.2f}%"


def fmt_percent(value: float, digits: int = APY_PRECISION) -> str:
    """格式化比例：0.126825 -> 12.6825%"""
    return f"{value * 100:.{digits}f}%"


def fmt_days(days: int) -> str:
    """格式化天数：1 -> 1 day, 45 -> 45 days"""
    return f"{days} day" if days == 1 else f"{days} days"
