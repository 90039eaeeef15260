"""
Social Security Claiming Age Calculations

Compares claiming ages by the present value of the benefit stream and finds
break-even ages where a later, larger benefit catches up with an earlier one.
"""

import math
from dataclasses import dataclass, field
from typing import List

EARLIEST_CLAIM_AGE = 62
LATEST_CLAIM_AGE = 70
MAX_AGE = 100

# Baseline benefit at full retirement age used to compare claim ages
FULL_BENEFIT_BASELINE = 2500

EARLY_REDUCTION_TIER_MONTHS = 36
EARLY_REDUCTION_TIER_1 = 5 / 9 * 0.01  # per month, first 36 months
EARLY_REDUCTION_TIER_2 = 5 / 12 * 0.01  # per month beyond 36
DELAYED_CREDIT_PER_MONTH = 2 / 3 * 0.01

COMPARISON_AGES = (85, 90, 95)
LAST_COMPARISON_AGE = 95

# Full retirement age by birth year for the phase-in years
_FRA_BY_BIRTH_YEAR = {
    1938: 65.167,
    1939: 65.333,
    1940: 65.5,
    1941: 65.667,
    1942: 65.833,
    1955: 66.167,
    1956: 66.333,
    1957: 66.5,
    1958: 66.667,
    1959: 66.833,
}


@dataclass
class IdealAgeInputs:
    birth_year: int
    life_expectancy: float
    investment_return: float  # annual percent
    cola: float  # annual percent


@dataclass
class CompareAgesInputs:
    claim_age_1: float
    monthly_payment_1: float
    claim_age_2: float
    monthly_payment_2: float
    investment_return: float  # annual percent
    cola: float  # annual percent


@dataclass
class AgeAnalysis:
    age: int
    monthly_benefit: float
    annual_benefit: float
    lifetime_value: float
    present_value: float
    percent_of_fra: float


@dataclass
class IdealAgeResults:
    full_retirement_age: float
    ideal_claim_age: int
    monthly_benefit_at_ideal_age: float
    annual_benefit_at_ideal_age: float
    lifetime_value_at_ideal_age: float
    present_value_at_ideal_age: float
    age_analysis: List[AgeAnalysis]
    recommendation: str
    break_even_vs_early: float  # math.inf = never
    break_even_vs_late: float


@dataclass
class ClaimOption:
    claim_age: float
    monthly_benefit: float
    annual_benefit: float
    lifetime_value_85: float
    lifetime_value_90: float
    lifetime_value_95: float
    present_value_85: float
    present_value_90: float
    present_value_95: float


@dataclass
class CumulativeComparison:
    age: float
    years_from_start: float
    option_1_cumulative: float
    option_2_cumulative: float
    difference: float


@dataclass
class CompareAgesResults:
    option_1: ClaimOption
    option_2: ClaimOption
    break_even_age: float  # math.inf = never
    better_option: int
    difference_at_85: float
    difference_at_90: float
    difference_at_95: float
    recommendation: str
    cumulative_comparison: List[CumulativeComparison] = field(default_factory=list)


def get_full_retirement_age(birth_year: int) -> float:
    """Full retirement age in years for a birth year."""
    if birth_year <= 1937:
        return 65
    if 1943 <= birth_year <= 1954:
        return 66
    if birth_year >= 1960:
        return 67
    return _FRA_BY_BIRTH_YEAR[birth_year]


def calculate_monthly_benefit(
    full_benefit: float, claim_age: float, full_retirement_age: float
) -> float:
    """
    Scale the full-retirement-age benefit to a claim age.

    Early claiming loses 5/9 of 1% per month for the first 36 months and
    5/12 of 1% per month beyond that. Delayed claiming earns 2/3 of 1% per
    month, with no credit after age 70.
    """
    months = (claim_age - full_retirement_age) * 12

    if months < 0:
        months_early = -months
        tier_1 = min(months_early, EARLY_REDUCTION_TIER_MONTHS)
        tier_2 = max(0.0, months_early - EARLY_REDUCTION_TIER_MONTHS)
        reduction = tier_1 * EARLY_REDUCTION_TIER_1 + tier_2 * EARLY_REDUCTION_TIER_2
        return full_benefit * (1 - reduction)

    if months > 0:
        max_months = (LATEST_CLAIM_AGE - full_retirement_age) * 12
        return full_benefit * (1 + min(months, max_months) * DELAYED_CREDIT_PER_MONTH)

    return full_benefit


def calculate_lifetime_value(
    monthly_benefit: float,
    claim_age: float,
    life_expectancy: float,
    cola: float,
    investment_return: float,
) -> float:
    """
    Present value at the claim age of benefits received until life expectancy.

    Each year's benefit grows with COLA and is discounted at the investment
    return. Rounded to whole dollars.
    """
    years = life_expectancy - claim_age
    if years <= 0:
        return 0.0

    growth = 1 + cola / 100
    discount = 1 + investment_return / 100

    total = sum(
        monthly_benefit * growth ** year * 12 / discount ** year
        for year in range(math.ceil(years))
    )
    return float(round(total))


def calculate_break_even_age(
    early_age: float,
    early_benefit: float,
    later_age: float,
    later_benefit: float,
    cola: float,
) -> float:
    """
    First age at which cumulative benefits of the later claim exceed those of
    the earlier claim.

    Returns:
        Break-even age, or math.inf when the later claim never catches up by
        age 100
    """
    if later_benefit <= early_benefit:
        return math.inf

    growth = 1 + cola / 100
    early_total = 0.0
    later_total = 0.0

    age = early_age
    while age <= MAX_AGE:
        early_years = max(0, age - early_age)
        later_years = max(0, age - later_age)

        if early_years > 0:
            early_total += early_benefit * growth ** (early_years - 1) * 12
        if later_years > 0:
            later_total += later_benefit * growth ** (later_years - 1) * 12

        if later_years > 0 and later_total > early_total:
            return age
        age += 1

    return math.inf


def _discount_to_earliest(value: float, claim_age: float, investment_return: float) -> float:
    """Discount a value at the claim age back to age 62."""
    years_to_wait = claim_age - EARLIEST_CLAIM_AGE
    return value / (1 + investment_return / 100) ** years_to_wait


def _ideal_age_recommendation(ideal_age: int, life_expectancy: float, investment_return: float) -> str:
    if ideal_age <= 64:
        return (
            f"Based on your life expectancy of {life_expectancy:g} and investment return of "
            f"{investment_return:g}%, claiming benefits earlier at age {ideal_age} maximizes your "
            "lifetime value. The higher investment returns make it beneficial to receive money sooner."
        )
    if ideal_age >= 68:
        return (
            f"Given your life expectancy of {life_expectancy:g} and investment return of "
            f"{investment_return:g}%, delaying benefits until age {ideal_age} is optimal. The increased "
            "monthly payments and your longer life expectancy outweigh the opportunity cost of waiting."
        )
    return (
        f"For your situation with a life expectancy of {life_expectancy:g} and {investment_return:g}% "
        f"investment return, claiming at age {ideal_age} provides the best balance between monthly "
        "benefit amount and total lifetime value."
    )


def calculate_ideal_claim_age(inputs: IdealAgeInputs) -> IdealAgeResults:
    """
    Find the claim age between 62 and 70 with the highest present value.

    Benefits are scaled from a $2,500 full-retirement-age baseline so ages
    can be compared independently of the actual benefit amount.
    """
    fra = get_full_retirement_age(inputs.birth_year)
    analysis = []
    best_value = 0.0
    ideal_age = EARLIEST_CLAIM_AGE

    for age in range(EARLIEST_CLAIM_AGE, LATEST_CLAIM_AGE + 1):
        monthly = calculate_monthly_benefit(FULL_BENEFIT_BASELINE, age, fra)
        lifetime_value = calculate_lifetime_value(
            monthly, age, inputs.life_expectancy, inputs.cola, inputs.investment_return
        )
        present_value = _discount_to_earliest(lifetime_value, age, inputs.investment_return)

        analysis.append(
            AgeAnalysis(
                age=age,
                monthly_benefit=float(round(monthly)),
                annual_benefit=float(round(monthly * 12)),
                lifetime_value=lifetime_value,
                present_value=float(round(present_value)),
                percent_of_fra=monthly / FULL_BENEFIT_BASELINE * 100,
            )
        )

        if present_value > best_value:
            best_value = present_value
            ideal_age = age

    by_age = {row.age: row for row in analysis}
    ideal = by_age[ideal_age]
    early = by_age[EARLIEST_CLAIM_AGE]
    late = by_age[LATEST_CLAIM_AGE]

    return IdealAgeResults(
        full_retirement_age=fra,
        ideal_claim_age=ideal_age,
        monthly_benefit_at_ideal_age=ideal.monthly_benefit,
        annual_benefit_at_ideal_age=ideal.annual_benefit,
        lifetime_value_at_ideal_age=ideal.lifetime_value,
        present_value_at_ideal_age=ideal.present_value,
        age_analysis=analysis,
        recommendation=_ideal_age_recommendation(
            ideal_age, inputs.life_expectancy, inputs.investment_return
        ),
        break_even_vs_early=calculate_break_even_age(
            EARLIEST_CLAIM_AGE, early.monthly_benefit, ideal_age, ideal.monthly_benefit, inputs.cola
        ),
        break_even_vs_late=calculate_break_even_age(
            ideal_age, ideal.monthly_benefit, LATEST_CLAIM_AGE, late.monthly_benefit, inputs.cola
        ),
    )


def _claim_option(claim_age: float, monthly_benefit: float, investment_return: float, cola: float) -> ClaimOption:
    lifetime = {
        age: calculate_lifetime_value(monthly_benefit, claim_age, age, cola, investment_return)
        for age in COMPARISON_AGES
    }
    present = {
        age: float(round(_discount_to_earliest(value, claim_age, investment_return)))
        for age, value in lifetime.items()
    }

    return ClaimOption(
        claim_age=claim_age,
        monthly_benefit=monthly_benefit,
        annual_benefit=monthly_benefit * 12,
        lifetime_value_85=lifetime[85],
        lifetime_value_90=lifetime[90],
        lifetime_value_95=lifetime[95],
        present_value_85=present[85],
        present_value_90=present[90],
        present_value_95=present[95],
    )


def _cumulative_benefit(monthly_benefit: float, claim_age: float, age: float, growth: float) -> float:
    """Nominal benefits collected from the claim age through the given age."""
    if age < claim_age:
        return 0.0
    years = int(age - claim_age)
    return sum(monthly_benefit * growth ** y * 12 for y in range(years + 1))


def _compare_recommendation(inputs: CompareAgesInputs, better_option: int, break_even: float) -> str:
    if better_option == 1:
        if math.isinf(break_even):
            return (
                f"Option 1 (claiming at age {inputs.claim_age_1:g}) is always better due to equal "
                "or higher monthly benefits starting earlier."
            )
        if break_even > 85:
            return (
                f"Option 1 (claiming at age {inputs.claim_age_1:g}) is recommended. While Option 2 "
                f"offers higher monthly payments, the break-even age of {round(break_even)} is "
                "beyond typical life expectancy, making early claiming more valuable."
            )
        return (
            f"Option 1 (claiming at age {inputs.claim_age_1:g}) provides better value given your "
            f"{inputs.investment_return:g}% investment return. The opportunity to invest benefits "
            "earlier outweighs the higher monthly payments of Option 2."
        )

    if break_even < 80:
        return (
            f"Option 2 (claiming at age {inputs.claim_age_2:g}) is strongly recommended. The "
            f"break-even age is {round(break_even)}, and the higher monthly payments provide "
            "significantly more value over a typical retirement."
        )
    increase = (inputs.monthly_payment_2 / inputs.monthly_payment_1 - 1) * 100
    return (
        f"Option 2 (claiming at age {inputs.claim_age_2:g}) is recommended for most scenarios. "
        f"The {increase:.1f}% higher monthly benefit provides better long-term value despite "
        "the delay."
    )


def compare_two_claim_ages(inputs: CompareAgesInputs) -> CompareAgesResults:
    """Compare two claim ages with their actual monthly benefits."""
    option_1 = _claim_option(
        inputs.claim_age_1, inputs.monthly_payment_1, inputs.investment_return, inputs.cola
    )
    option_2 = _claim_option(
        inputs.claim_age_2, inputs.monthly_payment_2, inputs.investment_return, inputs.cola
    )

    break_even = calculate_break_even_age(
        inputs.claim_age_1,
        inputs.monthly_payment_1,
        inputs.claim_age_2,
        inputs.monthly_payment_2,
        inputs.cola,
    )

    growth = 1 + inputs.cola / 100
    start_age = min(inputs.claim_age_1, inputs.claim_age_2)
    comparison = []
    age = start_age
    while age <= LAST_COMPARISON_AGE:
        cumulative_1 = _cumulative_benefit(inputs.monthly_payment_1, inputs.claim_age_1, age, growth)
        cumulative_2 = _cumulative_benefit(inputs.monthly_payment_2, inputs.claim_age_2, age, growth)
        comparison.append(
            CumulativeComparison(
                age=age,
                years_from_start=age - start_age,
                option_1_cumulative=float(round(cumulative_1)),
                option_2_cumulative=float(round(cumulative_2)),
                difference=float(round(cumulative_1 - cumulative_2)),
            )
        )
        age += 1

    better_option = 1 if option_1.present_value_85 > option_2.present_value_85 else 2

    return CompareAgesResults(
        option_1=option_1,
        option_2=option_2,
        break_even_age=break_even if math.isinf(break_even) else float(round(break_even)),
        better_option=better_option,
        difference_at_85=option_1.present_value_85 - option_2.present_value_85,
        difference_at_90=option_1.present_value_90 - option_2.present_value_90,
        difference_at_95=option_1.present_value_95 - option_2.present_value_95,
        recommendation=_compare_recommendation(inputs, better_option, break_even),
        cumulative_comparison=comparison,
    )


def validate_ideal_age_inputs(inputs: IdealAgeInputs) -> List[str]:
    """Return a list of problems with the inputs; empty when valid."""
    errors = []

    if not 1940 <= inputs.birth_year <= 2010:
        errors.append("Birth year must be between 1940 and 2010")
    if not 65 <= inputs.life_expectancy <= 110:
        errors.append("Life expectancy must be between 65 and 110")
    if not 0 <= inputs.investment_return <= 15:
        errors.append("Investment return must be between 0% and 15%")
    if not 0 <= inputs.cola <= 10:
        errors.append("COLA must be between 0% and 10%")

    return errors


def validate_compare_ages_inputs(inputs: CompareAgesInputs) -> List[str]:
    """Return a list of problems with the inputs; empty when valid."""
    errors = []

    for claim_age in (inputs.claim_age_1, inputs.claim_age_2):
        if not EARLIEST_CLAIM_AGE <= claim_age <= LATEST_CLAIM_AGE:
            errors.append("Claim age must be between 62 and 70")
    for payment in (inputs.monthly_payment_1, inputs.monthly_payment_2):
        if payment <= 0:
            errors.append("Monthly payment must be greater than 0")
    if not 0 <= inputs.investment_return <= 15:
        errors.append("Investment return must be between 0% and 15%")
    if not 0 <= inputs.cola <= 10:
        errors.append("COLA must be between 0% and 10%")

    return errors
