import math
from datetime import date
from typing import Optional, Tuple

from config.constants import Compounding, DCBMode, InstalmentFrequency, PayoutMethod
from config.settings import MAX_ANNUAL_RATE, MAX_DEPOSIT_MONTHS, MAX_INSTALMENT_COUNT


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_loan_inputs(
    principal: Optional[float],
    annual_rate: Optional[float],
    instalment_count: Optional[int],
    instalment_frequency: Optional[str],
    compounding: Optional[str],
    sanction_date: Optional[date],
    instalment_start_date: Optional[date],
) -> Tuple[bool, str]:
    """校验贷款输入，返回 (是否合法, 错误信息)"""
    if None in (principal, annual_rate, instalment_count, instalment_frequency,
                compounding, sanction_date, instalment_start_date):
        return False, "Please fill all required fields"

    if not _is_number(principal) or principal <= 0:
        return False, "Loan amount must be greater than 0"

    if not _is_number(annual_rate) or not 0 <= annual_rate <= MAX_ANNUAL_RATE:
        return False, f"Interest rate must be between 0 and {MAX_ANNUAL_RATE:g}%"

    if not isinstance(instalment_count, int) or isinstance(instalment_count, bool):
        return False, "Number of instalments must be a whole number"

    if not 1 <= instalment_count <= MAX_INSTALMENT_COUNT:
        return False, f"Number of instalments must be between 1 and {MAX_INSTALMENT_COUNT}"

    if instalment_frequency not in [e.value for e in InstalmentFrequency]:
        return False, f"Invalid instalment frequency: {instalment_frequency}"

    if compounding not in [e.value for e in Compounding]:
        return False, f"Invalid interest application frequency: {compounding}"

    return True, ""


def validate_dcb_inputs(
    mode: Optional[str],
    as_of: Optional[date],
    instalments_paid: Optional[int] = None,
    principal_outstanding: Optional[float] = None,
    interest_outstanding: Optional[float] = None,
    principal_collection: Optional[float] = None,
    interest_collection: Optional[float] = None,
) -> Tuple[bool, str]:
    """校验 DCB 截止日期及所选输入方式的字段"""
    if as_of is None:
        return False, "Please fill all required fields"

    if mode not in [e.value for e in DCBMode]:
        return False, f"Invalid DCB input option: {mode}"

    if mode == DCBMode.INSTALMENTS.value:
        if instalments_paid is None:
            return False, "Number of instalments paid is required"
        if not isinstance(instalments_paid, int) or instalments_paid < 0:
            return False, "Number of instalments paid must be a non-negative whole number"
    elif mode == DCBMode.OUTSTANDING.value:
        if principal_outstanding is None or interest_outstanding is None:
            return False, "Principal and interest outstanding are required"
        if not _is_number(principal_outstanding) or principal_outstanding < 0:
            return False, "Principal outstanding must not be negative"
        if not _is_number(interest_outstanding) or interest_outstanding < 0:
            return False, "Interest outstanding must not be negative"
    else:
        if principal_collection is None or interest_collection is None:
            return False, "Principal and interest collection are required"
        if not _is_number(principal_collection) or principal_collection < 0:
            return False, "Principal collection must not be negative"
        if not _is_number(interest_collection) or interest_collection < 0:
            return False, "Interest collection must not be negative"

    return True, ""


def validate_deposit_inputs(
    principal: Optional[float],
    monthly_contribution: Optional[float],
    term_months: Optional[int],
    annual_rate: Optional[float],
    compounding: Optional[str],
    payout_method: Optional[str],
) -> Tuple[bool, str]:
    """校验定期存款输入"""
    if not _is_number(principal) or principal < 0:
        return False, "Principal amount must not be negative"

    if monthly_contribution is not None and (not _is_number(monthly_contribution) or monthly_contribution < 0):
        return False, "Monthly deposit must not be negative"

    if not isinstance(term_months, int) or not 1 <= term_months <= MAX_DEPOSIT_MONTHS:
        return False, f"Period must be between 1 and {MAX_DEPOSIT_MONTHS} months"

    if not _is_number(annual_rate) or not 0 <= annual_rate <= MAX_ANNUAL_RATE:
        return False, f"Interest rate must be between 0 and {MAX_ANNUAL_RATE:g}%"

    if compounding not in [e.value for e in Compounding]:
        return False, f"Invalid compounding: {compounding}"

    if payout_method not in [e.value for e in PayoutMethod]:
        return False, f"Invalid payment method: {payout_method}"

    return True, ""
