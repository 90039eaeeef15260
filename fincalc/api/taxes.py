"""
Tax calculator API endpoints: salary/paycheck and estate tax.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from fincalc.api.dependencies import reject_invalid, to_payload
from fincalc.calculations import estate_tax, salary
from fincalc.config import Settings, get_settings

router = APIRouter()


class PreTaxDeductionsInput(BaseModel):
    """Annual pre-tax deductions."""

    retirement_401k: float = 0.0
    health_insurance: float = 0.0
    hsa: float = 0.0
    other: float = 0.0


class SalaryInput(BaseModel):
    """Input for salary calculation."""

    salary: float
    salary_period: str = "annual"
    hours_per_week: float = 40
    days_per_week: float = 5
    holidays_per_year: float = 0
    vacation_days: float = 0
    federal_filing_status: str = "single"
    state: str = "TX"
    state_filing_status: str = "single"
    pre_tax_deductions: PreTaxDeductionsInput = PreTaxDeductionsInput()
    post_tax_deductions: float = 0.0


@router.post("/salary")
async def calculate_salary(
    inputs: SalaryInput, settings: Settings = Depends(get_settings)
):
    """Convert pay between cadences and estimate taxes and take-home pay."""
    salary_inputs = salary.SalaryInputs(
        **inputs.model_dump(exclude={"pre_tax_deductions"}),
        pre_tax_deductions=salary.PreTaxDeductions(**inputs.pre_tax_deductions.model_dump()),
    )

    try:
        reject_invalid("salary", salary.validate_salary_inputs(salary_inputs, settings.tax_year))
        results = salary.calculate_salary_results(salary_inputs, settings.tax_year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    conversion = salary.convert_salary(
        inputs.salary,
        inputs.salary_period,
        inputs.hours_per_week,
        inputs.days_per_week,
        inputs.holidays_per_year,
        inputs.vacation_days,
    )

    return {**to_payload(results), "conversion": to_payload(conversion)}


class EstateTaxInput(BaseModel):
    """Input for estate tax calculation."""

    total_assets: float
    total_debts: float = 0.0
    marital_status: str = "single"
    state: str = "none"
    gifts_given_lifetime: float = 0.0
    charitable_deductions: float = 0.0


@router.post("/estate-tax")
async def calculate_estate_tax(
    inputs: EstateTaxInput, settings: Settings = Depends(get_settings)
):
    """Calculate federal and state estate tax."""
    estate_inputs = estate_tax.EstateTaxInputs(**inputs.model_dump())

    reject_invalid("estate tax", estate_tax.validate_estate_tax_inputs(estate_inputs))

    try:
        results = estate_tax.calculate_estate_tax(estate_inputs, settings.tax_year)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return to_payload(results)
