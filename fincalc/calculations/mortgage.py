"""
Mortgage Calculations

Monthly housing cost, lifetime totals and payoff date for a conventional
mortgage, with optional extra principal payments.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from fincalc.calculations.amortization import (
    MAX_INTEREST_RATE,
    MAX_TERM_YEARS,
    AmortizationRow,
    ExtraPayments,
    calculate_monthly_payment,
    calculate_payoff_date,
    calculate_total_interest,
    generate_amortization_schedule,
    validate_extra_payments,
)

PMI_DOWN_PAYMENT_THRESHOLD = 0.20
PMI_REMOVAL_LTV = 0.78


@dataclass
class MortgageInputs:
    """Inputs for the mortgage calculator. Annual costs unless noted."""

    home_price: float
    down_payment: float
    loan_term: float  # years
    interest_rate: float  # annual percentage
    property_tax: float = 0.0
    home_insurance: float = 0.0
    pmi: float = 0.0
    hoa_fee: float = 0.0  # monthly
    other_costs: float = 0.0  # monthly
    start_date: Optional[date] = None


@dataclass
class MonthlyPaymentBreakdown:
    principal_and_interest: float
    property_tax: float
    home_insurance: float
    pmi: float
    hoa_fee: float
    other_costs: float
    total_monthly: float


@dataclass
class MortgageTotals:
    total_mortgage_payment: float
    total_interest: float
    total_of_all_payments: float
    total_property_tax: float
    total_home_insurance: float
    total_pmi: float
    total_hoa: float
    total_other_costs: float


@dataclass
class MortgageResults:
    loan_amount: float
    monthly_payment: MonthlyPaymentBreakdown
    total_payments: MortgageTotals
    payoff_date: date
    pmi_removal_month: Optional[int]
    amortization_schedule: List[AmortizationRow]


def calculate_loan_amount(home_price: float, down_payment: float) -> float:
    """Amount financed after the down payment."""
    return max(0.0, home_price - down_payment)


def is_pmi_required(home_price: float, down_payment: float) -> bool:
    """PMI applies when less than 20% is put down."""
    if home_price <= 0:
        return False
    return down_payment / home_price < PMI_DOWN_PAYMENT_THRESHOLD


def calculate_pmi_removal_month(
    home_price: float, schedule: List[AmortizationRow]
) -> Optional[int]:
    """First month the balance falls to 78% of the home price, if ever."""
    threshold = home_price * PMI_REMOVAL_LTV
    for row in schedule:
        if row.balance <= threshold:
            return row.month
    return None


def calculate_total_monthly_payment(inputs: MortgageInputs) -> MonthlyPaymentBreakdown:
    """Monthly P&I plus escrow items, HOA and other costs."""
    loan_amount = calculate_loan_amount(inputs.home_price, inputs.down_payment)
    principal_and_interest = calculate_monthly_payment(
        loan_amount, inputs.interest_rate, inputs.loan_term
    )

    property_tax = inputs.property_tax / 12
    home_insurance = inputs.home_insurance / 12
    pmi = inputs.pmi / 12 if is_pmi_required(inputs.home_price, inputs.down_payment) else 0.0

    return MonthlyPaymentBreakdown(
        principal_and_interest=principal_and_interest,
        property_tax=property_tax,
        home_insurance=home_insurance,
        pmi=pmi,
        hoa_fee=inputs.hoa_fee,
        other_costs=inputs.other_costs,
        total_monthly=(
            principal_and_interest
            + property_tax
            + home_insurance
            + pmi
            + inputs.hoa_fee
            + inputs.other_costs
        ),
    )


def calculate_mortgage(
    inputs: MortgageInputs, extra_payments: Optional[ExtraPayments] = None
) -> MortgageResults:
    """
    Calculate a complete mortgage breakdown.

    Recurring costs are totaled over the actual schedule length, so extra
    payments that shorten the loan also shorten escrow and HOA totals. PMI
    is only paid until the balance reaches 78% of the home price.
    """
    loan_amount = calculate_loan_amount(inputs.home_price, inputs.down_payment)
    monthly = calculate_total_monthly_payment(inputs)

    schedule = generate_amortization_schedule(
        loan_amount,
        inputs.interest_rate,
        inputs.loan_term,
        start_date=inputs.start_date,
        extra_payments=extra_payments,
    )
    months = len(schedule)

    total_interest = calculate_total_interest(schedule)
    total_mortgage_payment = loan_amount + total_interest

    pmi_removal_month = None
    if monthly.pmi > 0:
        pmi_removal_month = calculate_pmi_removal_month(inputs.home_price, schedule)
    pmi_months = pmi_removal_month or months

    total_property_tax = monthly.property_tax * months
    total_home_insurance = monthly.home_insurance * months
    total_pmi = monthly.pmi * pmi_months
    total_hoa = monthly.hoa_fee * months
    total_other_costs = monthly.other_costs * months

    return MortgageResults(
        loan_amount=loan_amount,
        monthly_payment=monthly,
        total_payments=MortgageTotals(
            total_mortgage_payment=total_mortgage_payment,
            total_interest=total_interest,
            total_of_all_payments=(
                total_mortgage_payment
                + total_property_tax
                + total_home_insurance
                + total_pmi
                + total_hoa
                + total_other_costs
            ),
            total_property_tax=total_property_tax,
            total_home_insurance=total_home_insurance,
            total_pmi=total_pmi,
            total_hoa=total_hoa,
            total_other_costs=total_other_costs,
        ),
        payoff_date=calculate_payoff_date(inputs.start_date, months),
        pmi_removal_month=pmi_removal_month,
        amortization_schedule=schedule,
    )


def validate_mortgage_inputs(
    inputs: MortgageInputs, extra_payments: Optional[ExtraPayments] = None
) -> List[str]:
    """Return a list of problems with the inputs; empty when valid."""
    errors = []

    if inputs.home_price <= 0:
        errors.append("Home price must be greater than 0")

    if inputs.down_payment < 0:
        errors.append("Down payment cannot be negative")
    elif inputs.down_payment > inputs.home_price:
        errors.append("Down payment cannot exceed home price")

    if not 1 <= inputs.loan_term <= MAX_TERM_YEARS:
        errors.append("Loan term must be between 1 and 50 years")

    if not 0 <= inputs.interest_rate <= MAX_INTEREST_RATE:
        errors.append("Interest rate must be between 0% and 30%")

    if min(inputs.property_tax, inputs.home_insurance, inputs.pmi) < 0:
        errors.append("Property tax, insurance and PMI cannot be negative")

    if min(inputs.hoa_fee, inputs.other_costs) < 0:
        errors.append("HOA fees and other costs cannot be negative")

    if extra_payments is not None:
        errors.extend(validate_extra_payments(extra_payments, inputs.loan_term))

    return errors
