"""
Salary and Paycheck Calculations

Converts pay between cadences and estimates federal, state and FICA taxes to
arrive at take-home pay.
"""

from dataclasses import dataclass, field
from typing import List

from fincalc.calculations.brackets import apply_brackets, marginal_rate
from fincalc.calculations.tax_tables import (
    FILING_STATUSES,
    STATE_INCOME_TAX,
    TAX_YEAR,
    get_federal_brackets,
    get_fica_limits,
    get_standard_deduction,
    get_state_income_tax,
    get_state_income_tax_brackets,
)

WEEKS_PER_YEAR = 52

# Fixed divisors used when spreading annual totals over pay periods
PERIODS_PER_YEAR = {
    "annual": 1,
    "quarterly": 4,
    "monthly": 12,
    "semi_monthly": 24,
    "bi_weekly": 26,
    "weekly": 52,
    "daily": 260,
    "hourly": 2080,
}

SALARY_PERIODS = tuple(PERIODS_PER_YEAR)

# Other progressive states are approximated at a share of their top rate
PROGRESSIVE_STATE_FACTOR = 0.7

MAX_HOURS_PER_WEEK = 168
MAX_DAYS_OFF = 260


@dataclass
class PreTaxDeductions:
    """Annual pre-tax deductions."""

    retirement_401k: float = 0.0
    health_insurance: float = 0.0
    hsa: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return self.retirement_401k + self.health_insurance + self.hsa + self.other


@dataclass
class SalaryInputs:
    """Inputs for the salary calculator."""

    salary: float
    salary_period: str = "annual"
    hours_per_week: float = 40
    days_per_week: float = 5
    holidays_per_year: float = 0
    vacation_days: float = 0
    federal_filing_status: str = "single"
    state: str = "TX"
    state_filing_status: str = "single"
    pre_tax_deductions: PreTaxDeductions = field(default_factory=PreTaxDeductions)
    post_tax_deductions: float = 0.0  # annual


@dataclass
class PeriodAmount:
    """An amount with and without the holiday/vacation adjustment."""

    unadjusted: float
    adjusted: float


@dataclass
class SalaryConversion:
    """A salary expressed in every pay cadence."""

    annual: PeriodAmount
    quarterly: PeriodAmount
    monthly: PeriodAmount
    semi_monthly: PeriodAmount
    bi_weekly: PeriodAmount
    weekly: PeriodAmount
    daily: PeriodAmount
    hourly: PeriodAmount


@dataclass
class PayPeriodAmounts:
    """An annual figure spread over standard pay periods."""

    annual: float
    quarterly: float
    monthly: float
    semi_monthly: float
    bi_weekly: float
    weekly: float
    daily: float
    hourly: float


@dataclass
class FICATax:
    social_security: float
    medicare: float
    additional_medicare: float
    total: float


@dataclass
class FICABreakdown:
    social_security: PayPeriodAmounts
    medicare: PayPeriodAmounts
    additional_medicare: PayPeriodAmounts
    total: PayPeriodAmounts


@dataclass
class YearlyBreakdown:
    gross: float
    pre_tax_deductions: float
    taxable_income: float
    federal_tax: float
    state_tax: float
    fica_tax: float
    post_tax_deductions: float
    net_income: float


@dataclass
class SalaryResults:
    """Complete paycheck breakdown."""

    gross: PayPeriodAmounts
    adjusted_gross: PayPeriodAmounts
    federal_tax: PayPeriodAmounts
    state_tax: PayPeriodAmounts
    fica: FICABreakdown
    pre_tax_deductions: PayPeriodAmounts
    post_tax_deductions: PayPeriodAmounts
    net: PayPeriodAmounts
    take_home_percentage: float
    effective_tax_rate: float
    marginal_tax_rate: float
    yearly_breakdown: YearlyBreakdown


def _divide(amount: float, divisor: float) -> float:
    return amount / divisor if divisor else 0.0


def convert_salary(
    amount: float,
    period: str,
    hours_per_week: float,
    days_per_week: float,
    holidays_per_year: float,
    vacation_days: float,
) -> SalaryConversion:
    """
    Convert a salary from one pay cadence to all others.

    Holidays and vacation days are counted in five-day-week units and
    rescaled to the actual work week before being taken off the working year.

    Args:
        amount: Pay amount in the given cadence
        period: One of SALARY_PERIODS
        hours_per_week: Hours worked per week
        days_per_week: Days worked per week
        holidays_per_year: Paid holidays per year
        vacation_days: Paid vacation days per year

    Returns:
        Unadjusted and adjusted amounts for every cadence
    """
    working_days = days_per_week * WEEKS_PER_YEAR
    days_off = (holidays_per_year + vacation_days) * (days_per_week / 5)
    adjusted_working_days = working_days - days_off
    adjusted_weeks = _divide(adjusted_working_days, days_per_week)

    multipliers = {
        "hourly": hours_per_week * WEEKS_PER_YEAR,
        "daily": working_days,
        "weekly": WEEKS_PER_YEAR,
        "bi_weekly": 26,
        "semi_monthly": 24,
        "monthly": 12,
        "quarterly": 4,
        "annual": 1,
    }
    annual = amount * multipliers.get(period, 1)

    if period == "hourly":
        annual_adjusted = amount * hours_per_week * adjusted_weeks
    elif period == "daily":
        annual_adjusted = amount * adjusted_working_days
    else:
        annual_adjusted = annual * adjusted_weeks / WEEKS_PER_YEAR

    return SalaryConversion(
        annual=PeriodAmount(annual, annual_adjusted),
        quarterly=PeriodAmount(annual / 4, annual_adjusted / 4),
        monthly=PeriodAmount(annual / 12, annual_adjusted / 12),
        semi_monthly=PeriodAmount(annual / 24, annual_adjusted / 24),
        bi_weekly=PeriodAmount(annual / 26, annual_adjusted / 26),
        weekly=PeriodAmount(
            annual / WEEKS_PER_YEAR, _divide(annual_adjusted, adjusted_weeks)
        ),
        daily=PeriodAmount(
            _divide(annual, working_days),
            _divide(annual_adjusted, adjusted_working_days),
        ),
        hourly=PeriodAmount(
            _divide(annual, hours_per_week * WEEKS_PER_YEAR),
            _divide(annual_adjusted, hours_per_week * adjusted_weeks),
        ),
    )


def pay_period_amounts(annual: float) -> PayPeriodAmounts:
    """Spread an annual figure over standard pay periods (260 days, 2080 hours)."""
    return PayPeriodAmounts(
        **{name: annual / count for name, count in PERIODS_PER_YEAR.items()}
    )


def federal_taxable_income(
    annual_income: float,
    filing_status: str,
    pre_tax_deductions: float,
    year: int = TAX_YEAR,
) -> float:
    """Income left after pre-tax deductions and the standard deduction."""
    deduction = get_standard_deduction(filing_status, year)
    return max(0.0, annual_income - pre_tax_deductions - deduction)


def calculate_federal_tax(
    annual_income: float,
    filing_status: str,
    pre_tax_deductions: float = 0.0,
    year: int = TAX_YEAR,
) -> float:
    """
    Calculate federal income tax.

    Args:
        annual_income: Gross annual income
        filing_status: single, married or head
        pre_tax_deductions: Annual pre-tax deductions
        year: Tax year of the tables to use

    Returns:
        Annual federal income tax
    """
    taxable = federal_taxable_income(annual_income, filing_status, pre_tax_deductions, year)
    if taxable == 0:
        return 0.0
    return apply_brackets(taxable, get_federal_brackets(filing_status, year))


def calculate_fica_tax(
    annual_income: float, filing_status: str = "single", year: int = TAX_YEAR
) -> FICATax:
    """
    Calculate Social Security and Medicare taxes, rounded to cents.

    Social Security stops at the wage base; the additional Medicare surtax
    applies only to wages above the filing-status threshold.
    """
    limits = get_fica_limits(year)
    wages = max(0.0, annual_income)

    social_security = min(wages, limits.social_security_wage_base) * limits.social_security_rate
    medicare = wages * limits.medicare_rate

    threshold = limits.additional_medicare_threshold.get(
        filing_status, limits.additional_medicare_threshold["single"]
    )
    additional_medicare = max(0.0, wages - threshold) * limits.additional_medicare_rate

    return FICATax(
        social_security=round(social_security, 2),
        medicare=round(medicare, 2),
        additional_medicare=round(additional_medicare, 2),
        total=round(social_security + medicare + additional_medicare, 2),
    )


def calculate_state_tax(annual_income: float, state: str, year: int = TAX_YEAR) -> float:
    """Estimate state income tax on income after pre-tax deductions."""
    info = get_state_income_tax(state, year)
    income = max(0.0, annual_income)

    if info.kind == "none":
        return 0.0

    brackets = get_state_income_tax_brackets(state, year)
    if brackets is not None:
        return apply_brackets(income, brackets)

    if info.kind == "flat":
        return income * info.rate

    return income * info.rate * PROGRESSIVE_STATE_FACTOR


def calculate_salary_results(inputs: SalaryInputs, year: int = TAX_YEAR) -> SalaryResults:
    """Calculate a complete paycheck breakdown for validated inputs."""
    conversion = convert_salary(
        inputs.salary,
        inputs.salary_period,
        inputs.hours_per_week,
        inputs.days_per_week,
        inputs.holidays_per_year,
        inputs.vacation_days,
    )
    gross = conversion.annual.unadjusted
    adjusted_gross = conversion.annual.adjusted
    pre_tax = inputs.pre_tax_deductions.total

    federal_tax = calculate_federal_tax(gross, inputs.federal_filing_status, pre_tax, year)
    state_tax = calculate_state_tax(gross - pre_tax, inputs.state, year)
    fica = calculate_fica_tax(gross, inputs.federal_filing_status, year)

    net = gross - pre_tax - federal_tax - state_tax - fica.total - inputs.post_tax_deductions
    total_tax = federal_tax + state_tax + fica.total

    taxable = federal_taxable_income(gross, inputs.federal_filing_status, pre_tax, year)
    brackets = get_federal_brackets(inputs.federal_filing_status, year)

    return SalaryResults(
        gross=pay_period_amounts(gross),
        adjusted_gross=pay_period_amounts(adjusted_gross),
        federal_tax=pay_period_amounts(federal_tax),
        state_tax=pay_period_amounts(state_tax),
        fica=FICABreakdown(
            social_security=pay_period_amounts(fica.social_security),
            medicare=pay_period_amounts(fica.medicare),
            additional_medicare=pay_period_amounts(fica.additional_medicare),
            total=pay_period_amounts(fica.total),
        ),
        pre_tax_deductions=pay_period_amounts(pre_tax),
        post_tax_deductions=pay_period_amounts(inputs.post_tax_deductions),
        net=pay_period_amounts(net),
        take_home_percentage=_divide(net, gross) * 100,
        effective_tax_rate=_divide(total_tax, gross) * 100,
        marginal_tax_rate=marginal_rate(taxable, brackets) * 100,
        yearly_breakdown=YearlyBreakdown(
            gross=gross,
            pre_tax_deductions=pre_tax,
            taxable_income=gross - pre_tax,
            federal_tax=federal_tax,
            state_tax=state_tax,
            fica_tax=fica.total,
            post_tax_deductions=inputs.post_tax_deductions,
            net_income=net,
        ),
    )


def validate_salary_inputs(inputs: SalaryInputs, year: int = TAX_YEAR) -> List[str]:
    """Return a list of problems with the inputs; empty when valid."""
    errors = []
    limits = get_fica_limits(year)
    deductions = inputs.pre_tax_deductions

    if inputs.salary < 0:
        errors.append("Salary must be a positive number")
    if inputs.salary == 0:
        errors.append("Salary must be greater than 0")

    if inputs.salary_period not in SALARY_PERIODS:
        errors.append(f"Salary period must be one of: {', '.join(SALARY_PERIODS)}")

    for status in (inputs.federal_filing_status, inputs.state_filing_status):
        if status not in FILING_STATUSES:
            errors.append(f"Filing status must be one of: {', '.join(FILING_STATUSES)}")
            break

    if inputs.state not in STATE_INCOME_TAX.get(year, {}):
        errors.append(f"Unknown state code: {inputs.state}")

    if not 1 <= inputs.hours_per_week <= MAX_HOURS_PER_WEEK:
        errors.append("Hours per week must be between 1 and 168")

    if not 1 <= inputs.days_per_week <= 7:
        errors.append("Days per week must be between 1 and 7")

    if not 0 <= inputs.holidays_per_year <= MAX_DAYS_OFF:
        errors.append("Holidays must be between 0 and 260")

    if not 0 <= inputs.vacation_days <= MAX_DAYS_OFF:
        errors.append("Vacation days cannot exceed 260 working days per year")

    if inputs.holidays_per_year + inputs.vacation_days > MAX_DAYS_OFF:
        errors.append("Total holidays and vacation days cannot exceed 260 working days")

    if deductions.retirement_401k > limits.max_401k_contribution:
        errors.append(
            f"401(k) contribution cannot exceed ${limits.max_401k_contribution:,.0f} ({year} limit)"
        )

    if inputs.federal_filing_status == "married":
        hsa_limit, coverage = limits.max_hsa_family, "family"
    else:
        hsa_limit, coverage = limits.max_hsa_individual, "individual"

    if deductions.hsa > hsa_limit:
        errors.append(
            f"HSA contribution cannot exceed ${hsa_limit:,.0f} for {coverage} coverage ({year} limit)"
        )

    annual_salary = convert_salary(
        inputs.salary,
        inputs.salary_period,
        inputs.hours_per_week,
        inputs.days_per_week,
        0,
        0,
    ).annual.unadjusted

    if deductions.total > annual_salary:
        errors.append("Total pre-tax deductions cannot exceed gross salary")

    if (
        min(
            deductions.retirement_401k,
            deductions.health_insurance,
            deductions.hsa,
            deductions.other,
            inputs.post_tax_deductions,
        )
        < 0
    ):
        errors.append("Deductions cannot be negative")

    return errors
