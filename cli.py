import click

from config.constants import Compounding, DCBMode, InstalmentFrequency, PayoutMethod
from config.settings import setup_logging
from core.calculator import schedule_to_frame, summarize_loan
from core.dcb import calculate_dcb
from core.deposit import compute_deposit, deposit_rows_to_frame
from data_manager.data_validator import (
    validate_dcb_inputs,
    validate_deposit_inputs,
    validate_loan_inputs,
)
from data_manager.schema import (
    CollectionAmounts,
    DepositState,
    InstalmentsPaid,
    LoanParameters,
    OutstandingAmounts,
)
from utils.date_utils import format_date, parse_date_input
from utils.formatters import fmt_amount, fmt_days, fmt_percent, fmt_rate

FREQUENCY_CHOICES = [e.value for e in InstalmentFrequency]
COMPOUNDING_CHOICES = [e.value for e in Compounding]


def _parse_date_option(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_date_input(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)


def loan_options(f):
    """贷款计算器与 DCB 计算器共用的参数"""
    options = [
        click.option('--principal', type=float, required=True, help='Loan sanction amount'),
        click.option('--annual-rate', type=float, required=True, help='Annual interest rate (%)'),
        click.option('--instalments', type=int, required=True, help='Number of instalments'),
        click.option('--frequency', type=click.Choice(FREQUENCY_CHOICES), default='monthly',
                     show_default=True, help='Instalment frequency'),
        click.option('--compounding', type=click.Choice(COMPOUNDING_CHOICES), default='monthly',
                     show_default=True, help='Interest application frequency'),
        click.option('--sanction-date', type=str, required=True, callback=_parse_date_option,
                     help='Loan sanction date (DD/MM/YYYY)'),
        click.option('--start-date', type=str, required=True, callback=_parse_date_option,
                     help='Instalment start date (DD/MM/YYYY)'),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _build_loan_params(principal, annual_rate, instalments, frequency, compounding,
                       sanction_date, start_date) -> LoanParameters:
    ok, message = validate_loan_inputs(
        principal, annual_rate, instalments, frequency, compounding, sanction_date, start_date,
    )
    if not ok:
        raise click.UsageError(message)
    return LoanParameters(
        principal=principal,
        annual_rate=annual_rate,
        instalment_count=instalments,
        instalment_frequency=frequency,
        compounding=compounding,
        sanction_date=sanction_date,
        instalment_start_date=start_date,
    )


@click.group()
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """Banking calculators: term loan EMI, DCB overdue analysis and term deposit."""
    setup_logging("DEBUG" if verbose else None)


@cli.command()
@loan_options
def emi(principal, annual_rate, instalments, frequency, compounding, sanction_date, start_date):
    """Calculates the instalment amount and loan totals."""
    params = _build_loan_params(principal, annual_rate, instalments, frequency, compounding,
                                sanction_date, start_date)
    summary, _ = summarize_loan(params)
    click.echo(f"Instalment amount: {fmt_amount(summary.instalment_amount)}")
    if frequency != InstalmentFrequency.MONTHLY.value:
        click.echo(f"EMI per month: {fmt_amount(summary.emi_per_month)}")
    click.echo(f"Last instalment date: {format_date(summary.last_due_date)}")
    click.echo(f"Total interest: {fmt_amount(summary.total_interest)}")
    click.echo(f"Total payment: {fmt_amount(summary.total_payment)}")
    click.echo(f"Effective annual rate: {fmt_rate(summary.effective_annual_rate)}")


@cli.command('schedule')
@loan_options
def schedule_command(principal, annual_rate, instalments, frequency, compounding, sanction_date, start_date):
    """Generates the amortization schedule and outputs it as CSV."""
    params = _build_loan_params(principal, annual_rate, instalments, frequency, compounding,
                                sanction_date, start_date)
    _, schedule = summarize_loan(params)
    click.echo(schedule_to_frame(schedule).to_csv(index=False))


@cli.command()
@loan_options
@click.option('--as-of', type=str, required=True, callback=_parse_date_option,
              help='Calculate up to date (DD/MM/YYYY)')
@click.option('--mode', type=click.Choice([e.value for e in DCBMode]), default='instalments',
              show_default=True, help='Which repayment details are supplied')
@click.option('--instalments-paid', type=int, help='Number of instalments paid')
@click.option('--principal-outstanding', type=float, help='Principal outstanding')
@click.option('--interest-outstanding', type=float, help='Interest outstanding')
@click.option('--principal-collection', type=float, help='Principal collected')
@click.option('--interest-collection', type=float, help='Interest collected')
@click.option('--show-schedule', is_flag=True, help='Also print the amortization schedule')
def dcb(principal, annual_rate, instalments, frequency, compounding, sanction_date, start_date,
        as_of, mode, instalments_paid, principal_outstanding, interest_outstanding,
        principal_collection, interest_collection, show_schedule):
    """Calculates demand, collection, balance and overdue amounts."""
    params = _build_loan_params(principal, annual_rate, instalments, frequency, compounding,
                                sanction_date, start_date)
    ok, message = validate_dcb_inputs(
        mode, as_of, instalments_paid,
        principal_outstanding, interest_outstanding,
        principal_collection, interest_collection,
    )
    if not ok:
        raise click.UsageError(message)

    if mode == DCBMode.INSTALMENTS.value:
        dcb_input = InstalmentsPaid(instalments_paid)
    elif mode == DCBMode.OUTSTANDING.value:
        dcb_input = OutstandingAmounts(principal_outstanding, interest_outstanding)
    else:
        dcb_input = CollectionAmounts(principal_collection, interest_collection)

    result = calculate_dcb(params, as_of, dcb_input)

    click.echo(f"Instalment amount: {fmt_amount(result.instalment_amount)}")
    click.echo("--- Total Loan Balance ---")
    click.echo(f"Total principal balance: {fmt_amount(result.total_principal_balance)}")
    click.echo(f"Total interest balance: {fmt_amount(result.total_interest_balance)}")
    click.echo("--- Overdue ---")
    click.echo(f"Overdue principal: {fmt_amount(result.overdue_principal)}")
    click.echo(f"Overdue interest: {fmt_amount(result.overdue_interest)}")
    click.echo(f"Outstanding principal: {fmt_amount(result.outstanding_principal)}")
    click.echo(f"Outstanding interest: {fmt_amount(result.outstanding_interest)}")
    click.echo(f"Instalments to be paid: {result.instalments_to_be_paid}")
    if result.overdue_since_date is not None:
        click.echo(f"Overdue since: {format_date(result.overdue_since_date)}"
                   f" ({fmt_days(result.overdue_days)})")
    click.echo("--- DCB ---")
    click.echo(f"Demand: {fmt_amount(result.demand)}")
    click.echo(f"Collection: {fmt_amount(result.collection)}")
    click.echo(f"Balance: {fmt_amount(result.balance)}")
    if show_schedule:
        click.echo()
        click.echo(schedule_to_frame(result.schedule).to_string(index=False))


@cli.command()
@click.option('--principal', type=float, required=True, help='Principal amount')
@click.option('--monthly', type=float, default=0.0, show_default=True, help='Monthly deposit')
@click.option('--months', type=int, required=True, help='Period in months')
@click.option('--annual-rate', type=float, required=True, help='Annual interest rate (%)')
@click.option('--compounding', type=click.Choice(COMPOUNDING_CHOICES), default='monthly',
              show_default=True, help='Compounding')
@click.option('--payout', type=click.Choice([e.value for e in PayoutMethod]), default='maturity',
              show_default=True, help='Payment method')
@click.option('--table', is_flag=True, help='Also print the month-by-month table')
def deposit(principal, monthly, months, annual_rate, compounding, payout, table):
    """Calculates the maturity value of a term deposit."""
    ok, message = validate_deposit_inputs(principal, monthly, months, annual_rate, compounding, payout)
    if not ok:
        raise click.UsageError(message)

    state = DepositState(
        principal=principal,
        monthly_contribution=monthly,
        term_months=months,
        annual_rate=annual_rate,
        compounding=compounding,
        payout_method=payout,
    )
    result, rows = compute_deposit(state)
    click.echo(f"Total principal: {fmt_amount(result.total_principal)}")
    click.echo(f"Interest amount: {fmt_amount(result.interest_amount)}")
    click.echo(f"Maturity value: {fmt_amount(result.maturity_value)}")
    click.echo(f"APY: {fmt_percent(result.apy)}")
    if table:
        click.echo()
        click.echo(deposit_rows_to_frame(rows).to_string(index=False))


if __name__ == "__main__":
    cli()
