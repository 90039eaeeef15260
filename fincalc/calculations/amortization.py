"""
Loan Amortization Calculations

Implements the monthly payment formula and a month-by-month amortization
schedule with optional extra principal payments. Shared by the mortgage and
VA loan calculators.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

DEFAULT_START_DATE = date(2026, 1, 1)

MAX_TERM_YEARS = 50
MAX_INTEREST_RATE = 30


@dataclass
class OneTimePayment:
    """A lump sum applied to principal in a specific month."""

    amount: float
    month: int  # 1-based month number


@dataclass
class ExtraPayments:
    """Extra principal payments on top of the scheduled payment."""

    monthly_extra: float = 0.0
    monthly_extra_start_month: int = 1
    yearly_extra: float = 0.0
    yearly_extra_start_month: int = 1
    one_time_payments: List[OneTimePayment] = field(default_factory=list)

    def amount_for_month(self, month: int) -> float:
        """Total extra principal scheduled for a 1-based month."""
        extra = 0.0

        if self.monthly_extra > 0 and month >= self.monthly_extra_start_month:
            extra += self.monthly_extra

        # Yearly extra recurs on the anniversary of its start month
        if (
            self.yearly_extra > 0
            and month >= self.yearly_extra_start_month
            and (month - self.yearly_extra_start_month) % 12 == 0
        ):
            extra += self.yearly_extra

        extra += sum(p.amount for p in self.one_time_payments if p.month == month)

        return extra


@dataclass
class AmortizationRow:
    """One month of an amortization schedule."""

    month: int
    date: date
    payment: float  # scheduled P&I payment
    principal: float
    interest: float
    extra_payment: float
    balance: float
    cumulative_principal: float  # includes extra payments
    cumulative_interest: float


def calculate_monthly_payment(
    principal: float, annual_rate: float, term_years: float
) -> float:
    """
    Calculate monthly loan payment (principal and interest).

    M = P * r(1+r)^n / ((1+r)^n - 1)

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as percentage (e.g., 6.5)
        term_years: Loan term in years

    Returns:
        Monthly payment amount, 0 for a non-positive principal or term
    """
    if principal <= 0 or term_years <= 0:
        return 0.0

    number_of_payments = term_years * 12

    if annual_rate == 0:
        return principal / number_of_payments

    monthly_rate = annual_rate / 100 / 12
    growth = (1 + monthly_rate) ** number_of_payments

    # Rates too small to move (1 + r)^n off 1.0 amortize like a zero rate
    if growth == 1:
        return principal / number_of_payments

    return principal * monthly_rate * growth / (growth - 1)


def payment_date(start_date: date, month: int) -> date:
    """Date of the payment for a 1-based month."""
    return start_date + relativedelta(months=month - 1)


def generate_amortization_schedule(
    loan_amount: float,
    annual_rate: float,
    term_years: float,
    start_date: Optional[date] = None,
    extra_payments: Optional[ExtraPayments] = None,
) -> List[AmortizationRow]:
    """
    Generate a full amortization schedule.

    Extra payments go straight to principal in the month they are made; the
    scheduled payment is never re-amortized, so extra principal only
    shortens the tail of the loan.

    Args:
        loan_amount: Amount financed
        annual_rate: Annual interest rate as percentage
        term_years: Loan term in years
        start_date: Date of the first payment
        extra_payments: Optional extra principal payments

    Returns:
        List of amortization rows, empty for a non-positive loan or term
    """
    if start_date is None:
        start_date = DEFAULT_START_DATE

    number_of_payments = int(round(term_years * 12)) if term_years > 0 else 0
    monthly_payment = calculate_monthly_payment(loan_amount, annual_rate, term_years)
    monthly_rate = annual_rate / 100 / 12

    schedule = []
    balance = max(0.0, loan_amount)
    cumulative_principal = 0.0
    cumulative_interest = 0.0

    for month in range(1, number_of_payments + 1):
        if balance <= 0:
            break

        interest = balance * monthly_rate
        principal = monthly_payment - interest

        # Final scheduled month clears whatever float residue is left
        if principal >= balance or month == number_of_payments:
            principal = balance

        extra = 0.0
        if extra_payments is not None:
            extra = min(extra_payments.amount_for_month(month), balance - principal)
            extra = max(0.0, extra)

        balance = balance - principal - extra
        if balance < 0:
            balance = 0.0

        cumulative_principal += principal + extra
        cumulative_interest += interest

        schedule.append(
            AmortizationRow(
                month=month,
                date=payment_date(start_date, month),
                payment=monthly_payment,
                principal=principal,
                interest=interest,
                extra_payment=extra,
                balance=balance,
                cumulative_principal=cumulative_principal,
                cumulative_interest=cumulative_interest,
            )
        )

        if balance == 0:
            if month < number_of_payments:
                logger.debug(f"Loan paid off early in month {month} of {number_of_payments}")
            break

    return schedule


def calculate_total_interest(schedule: List[AmortizationRow]) -> float:
    """Calculate total interest paid over the schedule."""
    return sum(row.interest for row in schedule)


def calculate_total_principal(schedule: List[AmortizationRow]) -> float:
    """Calculate total principal repaid, extra payments included."""
    return sum(row.principal + row.extra_payment for row in schedule)


def calculate_payoff_date(start_date: Optional[date], months: int) -> date:
    """Date one month after the last payment of a schedule."""
    if start_date is None:
        start_date = DEFAULT_START_DATE
    return start_date + relativedelta(months=months)


def validate_extra_payments(extra_payments: ExtraPayments, loan_term: float) -> List[str]:
    """Problems with an extra payment plan; empty when valid."""
    errors = []
    term_months = loan_term * 12

    if extra_payments.monthly_extra < 0 or extra_payments.yearly_extra < 0:
        errors.append("Extra payments cannot be negative")

    if extra_payments.monthly_extra_start_month < 1 or extra_payments.yearly_extra_start_month < 1:
        errors.append("Extra payment start month must be 1 or later")

    for payment in extra_payments.one_time_payments:
        if payment.amount < 0:
            errors.append("One-time payments cannot be negative")
            break
    for payment in extra_payments.one_time_payments:
        if not 1 <= payment.month <= term_months:
            errors.append("One-time payment month must fall within the loan term")
            break

    return errors


def validate_amortization_inputs(
    principal: float,
    annual_rate: float,
    term_years: float,
    extra_payments: Optional[ExtraPayments] = None,
) -> List[str]:
    """Return a list of problems with a bare loan; empty when valid."""
    errors = []

    if principal <= 0:
        errors.append("Principal must be greater than 0")

    if not 1 <= term_years <= MAX_TERM_YEARS:
        errors.append("Loan term must be between 1 and 50 years")

    if not 0 <= annual_rate <= MAX_INTEREST_RATE:
        errors.append("Interest rate must be between 0% and 30%")

    if extra_payments is not None:
        errors.extend(validate_extra_payments(extra_payments, term_years))

    return errors
