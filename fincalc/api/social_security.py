"""
Social Security claiming age API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from fincalc.api.dependencies import reject_invalid, to_payload
from fincalc.calculations import social_security

router = APIRouter()


class IdealAgeInput(BaseModel):
    """Input for the ideal claim age search. Rates are percentages."""

    birth_year: int
    life_expectancy: float = 85
    investment_return: float = 5
    cola: float = 2.5


class CompareAgesInput(BaseModel):
    """Input for comparing two claim ages. Rates are percentages."""

    claim_age_1: float
    monthly_payment_1: float
    claim_age_2: float
    monthly_payment_2: float
    investment_return: float = 5
    cola: float = 2.5


@router.post("/ideal-age")
async def calculate_ideal_age(inputs: IdealAgeInput):
    """Find the claim age with the highest present value."""
    ideal_inputs = social_security.IdealAgeInputs(**inputs.model_dump())

    reject_invalid(
        "Social Security ideal age",
        social_security.validate_ideal_age_inputs(ideal_inputs),
    )

    return to_payload(social_security.calculate_ideal_claim_age(ideal_inputs))


@router.post("/compare")
async def compare_claim_ages(inputs: CompareAgesInput):
    """Compare two claim ages; a break-even age of never is returned as null."""
    compare_inputs = social_security.CompareAgesInputs(**inputs.model_dump())

    reject_invalid(
        "Social Security comparison",
        social_security.validate_compare_ages_inputs(compare_inputs),
    )

    return to_payload(social_security.compare_two_claim_ages(compare_inputs))
