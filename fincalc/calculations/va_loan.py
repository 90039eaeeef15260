"""
VA Loan Calculations

VA loans need no down payment and carry no PMI, but charge a one-time funding
fee that depends on service type, prior use of the benefit and the down
payment. Veterans with a service-connected disability are exempt. The fee can
be financed into the loan.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from fincalc.calculations.amortization import (
    MAX_INTEREST_RATE,
    MAX_TERM_YEARS,
    AmortizationRow,
    calculate_monthly_payment,
    calculate_payoff_date,
    calculate_total_interest,
    generate_amortization_schedule,
)

SERVICE_TYPES = ("regular", "reserves")
LOAN_USAGES = ("first", "subsequent")

# Funding fee percentages by service type, usage and down payment bucket
VA_FUNDING_FEE_RATES = {
    "regular": {
        "first": {"zero_down": 2.15, "five_to_ten": 1.5, "ten_plus": 1.25},
        "subsequent": {"zero_down": 3.3, "five_to_ten": 1.5, "ten_plus": 1.25},
    },
    "reserves": {
        "first": {"zero_down": 2.15, "five_to_ten": 1.5, "ten_plus": 1.25},
        "subsequent": {"zero_down": 3.3, "five_to_ten": 1.5, "ten_plus": 1.25},
    },
}

CONVENTIONAL_PMI_RATE = 0.005  # annual, on the loan amount
CONVENTIONAL_PMI_THRESHOLD = 20  # percent down
FHA_UFMIP_RATE = 0.0175
FHA_HIGH_LTV = 95
FHA_MIP_HIGH_LTV = 0.55  # annual percent
FHA_MIP_LOW_LTV = 0.50


@dataclass
class VALoanInputs:
    """Inputs for the VA loan calculator. Annual costs unless noted."""

    home_price: float
    down_payment: float
    loan_term: float  # years
    interest_rate: float  # annual percentage
    service_type: str = "regular"
    loan_usage: str = "first"
    is_disabled: bool = False
    finance_funding_fee: bool = True
    property_tax: float = 0.0
    home_insurance: float = 0.0
    hoa_fee: float = 0.0  # monthly
    other_costs: float = 0.0  # monthly
    start_date: Optional[date] = None


@dataclass
class VALoanDetails:
    base_loan_amount: float
    down_payment_percent: float
    funding_fee_rate: float  # percent
    funding_fee_amount: float
    total_loan_amount: float  # includes the fee when financed
    ltv: float  # percent


@dataclass
class VAMonthlyPayment:
    principal_and_interest: float
    property_tax: float
    home_insurance: float
    hoa_fee: float
    other_costs: float
    total_monthly: float


@dataclass
class VALoanTotals:
    total_principal_and_interest: float
    total_interest: float
    total_property_tax: float
    total_home_insurance: float
    total_hoa: float
    total_other_costs: float
    total_of_all_payments: float  # includes an unfinanced funding fee


@dataclass
class VALoanResults:
    loan_details: VALoanDetails
    monthly_payment: VAMonthlyPayment
    total_payments: VALoanTotals
    payoff_date: date
    amortization_schedule: List[AmortizationRow]


@dataclass
class ConventionalLoanResults:
    loan_amount: float
    monthly_payment: float
    total_interest: float
    total_payment: float
    pmi_required: bool
    monthly_pmi: float


@dataclass
class FHALoanResults:
    loan_amount: float
    monthly_payment: float
    total_interest: float
    total_payment: float
    monthly_mip: float
    ufmip: float


def calculate_base_loan_amount(home_price: float, down_payment: float) -> float:
    return max(0.0, home_price - down_payment)


def calculate_down_payment_percent(home_price: float, down_payment: float) -> float:
    if home_price <= 0:
        return 0.0
    return down_payment / home_price * 100


def calculate_ltv(home_price: float, down_payment: float) -> float:
    """Loan-to-value ratio as a percentage."""
    if home_price <= 0:
        return 0.0
    return calculate_base_loan_amount(home_price, down_payment) / home_price * 100


def _down_payment_bucket(down_payment_percent: float) -> str:
    if down_payment_percent >= 10:
        return "ten_plus"
    if down_payment_percent >= 5:
        return "five_to_ten"
    return "zero_down"


def get_va_funding_fee_rate(
    down_payment_percent: float,
    service_type: str,
    loan_usage: str,
    is_disabled: bool,
) -> float:
    """
    Look up the VA funding fee rate.

    Args:
        down_payment_percent: Down payment as percent of the home price
        service_type: regular or reserves
        loan_usage: first or subsequent
        is_disabled: Service-connected disability exemption

    Returns:
        Funding fee as a percentage of the base loan (0 when exempt)
    """
    if is_disabled:
        return 0.0

    by_usage = VA_FUNDING_FEE_RATES.get(service_type, VA_FUNDING_FEE_RATES["reserves"])
    by_bucket = by_usage.get(loan_usage, by_usage["subsequent"])
    return by_bucket[_down_payment_bucket(down_payment_percent)]


def calculate_va_funding_fee(base_loan_amount: float, funding_fee_rate: float) -> float:
    return base_loan_amount * funding_fee_rate / 100


def calculate_total_loan_amount(
    base_loan_amount: float, funding_fee_amount: float, finance_funding_fee: bool
) -> float:
    if finance_funding_fee:
        return base_loan_amount + funding_fee_amount
    return base_loan_amount


def calculate_va_loan_details(inputs: VALoanInputs) -> VALoanDetails:
    """Loan amounts and funding fee before amortization."""
    base = calculate_base_loan_amount(inputs.home_price, inputs.down_payment)
    down_payment_percent = calculate_down_payment_percent(inputs.home_price, inputs.down_payment)

    rate = get_va_funding_fee_rate(
        down_payment_percent, inputs.service_type, inputs.loan_usage, inputs.is_disabled
    )
    fee = calculate_va_funding_fee(base, rate)

    return VALoanDetails(
        base_loan_amount=base,
        down_payment_percent=down_payment_percent,
        funding_fee_rate=rate,
        funding_fee_amount=fee,
        total_loan_amount=calculate_total_loan_amount(base, fee, inputs.finance_funding_fee),
        ltv=calculate_ltv(inputs.home_price, inputs.down_payment),
    )


def calculate_va_loan(inputs: VALoanInputs) -> VALoanResults:
    """Calculate a complete VA loan breakdown."""
    details = calculate_va_loan_details(inputs)

    principal_and_interest = calculate_monthly_payment(
        details.total_loan_amount, inputs.interest_rate, inputs.loan_term
    )
    schedule = generate_amortization_schedule(
        details.total_loan_amount,
        inputs.interest_rate,
        inputs.loan_term,
        start_date=inputs.start_date,
    )
    months = len(schedule)

    property_tax = inputs.property_tax / 12
    home_insurance = inputs.home_insurance / 12

    total_interest = calculate_total_interest(schedule)
    total_principal_and_interest = details.total_loan_amount + total_interest
    total_property_tax = property_tax * months
    total_home_insurance = home_insurance * months
    total_hoa = inputs.hoa_fee * months
    total_other_costs = inputs.other_costs * months
    unfinanced_fee = 0.0 if inputs.finance_funding_fee else details.funding_fee_amount

    return VALoanResults(
        loan_details=details,
        monthly_payment=VAMonthlyPayment(
            principal_and_interest=principal_and_interest,
            property_tax=property_tax,
            home_insurance=home_insurance,
            hoa_fee=inputs.hoa_fee,
            other_costs=inputs.other_costs,
            total_monthly=(
                principal_and_interest
                + property_tax
                + home_insurance
                + inputs.hoa_fee
                + inputs.other_costs
            ),
        ),
        total_payments=VALoanTotals(
            total_principal_and_interest=total_principal_and_interest,
            total_interest=total_interest,
            total_property_tax=total_property_tax,
            total_home_insurance=total_home_insurance,
            total_hoa=total_hoa,
            total_other_costs=total_other_costs,
            total_of_all_payments=(
                total_principal_and_interest
                + total_property_tax
                + total_home_insurance
                + total_hoa
                + total_other_costs
                + unfinanced_fee
            ),
        ),
        payoff_date=calculate_payoff_date(inputs.start_date, months),
        amortization_schedule=schedule,
    )


def calculate_conventional_loan(
    home_price: float, down_payment_percent: float, loan_term: float, interest_rate: float
) -> ConventionalLoanResults:
    """Conventional loan quote for comparison, with an estimated 0.5% PMI."""
    loan_amount = home_price * (1 - down_payment_percent / 100)
    monthly_payment = calculate_monthly_payment(loan_amount, interest_rate, loan_term)
    total_payment = monthly_payment * loan_term * 12
    pmi_required = down_payment_percent < CONVENTIONAL_PMI_THRESHOLD

    return ConventionalLoanResults(
        loan_amount=loan_amount,
        monthly_payment=monthly_payment,
        total_interest=total_payment - loan_amount,
        total_payment=total_payment,
        pmi_required=pmi_required,
        monthly_pmi=loan_amount * CONVENTIONAL_PMI_RATE / 12 if pmi_required else 0.0,
    )


def calculate_fha_loan(
    home_price: float, down_payment_percent: float, loan_term: float, interest_rate: float
) -> FHALoanResults:
    """FHA loan quote for comparison: financed upfront MIP plus annual MIP."""
    base_loan_amount = home_price * (1 - down_payment_percent / 100)
    ufmip = base_loan_amount * FHA_UFMIP_RATE
    total_loan_amount = base_loan_amount + ufmip

    monthly_payment = calculate_monthly_payment(total_loan_amount, interest_rate, loan_term)
    total_payment = monthly_payment * loan_term * 12

    ltv = base_loan_amount / home_price * 100 if home_price > 0 else 0.0
    annual_mip_rate = FHA_MIP_HIGH_LTV if ltv > FHA_HIGH_LTV else FHA_MIP_LOW_LTV

    return FHALoanResults(
        loan_amount=total_loan_amount,
        monthly_payment=monthly_payment,
        total_interest=total_payment - total_loan_amount,
        total_payment=total_payment,
        monthly_mip=base_loan_amount * annual_mip_rate / 100 / 12,
        ufmip=ufmip,
    )


def validate_va_loan_inputs(inputs: VALoanInputs) -> List[str]:
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

    if inputs.service_type not in SERVICE_TYPES:
        errors.append("Service type must be either regular or reserves")

    if inputs.loan_usage not in LOAN_USAGES:
        errors.append("Loan usage must be either first or subsequent")

    if min(inputs.property_tax, inputs.home_insurance, inputs.hoa_fee, inputs.other_costs) < 0:
        errors.append("Property tax, insurance, HOA fees and other costs cannot be negative")

    return errors
