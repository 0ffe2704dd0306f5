from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from config.settings import DATE_FORMAT


def add_months(d: date, months: int) -> date:
    """日期加 N 个月（月末自动截断，如 1/31 + 1 个月 -> 2/28）"""
    return d + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    """end - start 的天数，可能为负"""
    return (end - start).days


def parse_date_input(value: str) -> date:
    """解析 DD/MM/YYYY 文本日期，非法时抛出 ValueError"""
    text = (value or "").strip()
    if not text:
        raise ValueError("Date is required")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date '{value}', expected DD/MM/YYYY") from exc


def format_date(d: date) -> str:
    """date -> DD/MM/YYYY"""
    return d.strftime(DATE_FORMAT) if d else ""
