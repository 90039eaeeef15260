"""
Loan calculator API endpoints: amortization, mortgage and VA loan.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional
from datetime import date

from fincalc.api.dependencies import reject_invalid, to_payload
from fincalc.calculations import amortization, mortgage, va_loan

router = APIRouter()


class OneTimePaymentInput(BaseModel):
    amount: float
    month: int


class ExtraPaymentsInput(BaseModel):
    """Extra principal payments."""

    monthly_extra: float = 0.0
    monthly_extra_start_month: int = 1
    yearly_extra: float = 0.0
    yearly_extra_start_month: int = 1
    one_time_payments: List[OneTimePaymentInput] = []

    def to_extra_payments(self) -> amortization.ExtraPayments:
        return amortization.ExtraPayments(
            monthly_extra=self.monthly_extra,
            monthly_extra_start_month=self.monthly_extra_start_month,
            yearly_extra=self.yearly_extra,
            yearly_extra_start_month=self.yearly_extra_start_month,
            one_time_payments=[
                amortization.OneTimePayment(amount=p.amount, month=p.month)
                for p in self.one_time_payments
            ],
        )


class AmortizationInput(BaseModel):
    """Input for amortization calculation. Rate is an annual percentage."""

    principal: float
    annual_rate: float
    term_years: float
    start_date: Optional[date] = None
    extra_payments: Optional[ExtraPaymentsInput] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    extra = inputs.extra_payments.to_extra_payments() if inputs.extra_payments else None

    reject_invalid(
        "amortization",
        amortization.validate_amortization_inputs(
            inputs.principal, inputs.annual_rate, inputs.term_years, extra
        ),
    )

    schedule = amortization.generate_amortization_schedule(
        inputs.principal,
        inputs.annual_rate,
        inputs.term_years,
        start_date=inputs.start_date,
        extra_payments=extra,
    )

    return {
        "monthly_payment": amortization.calculate_monthly_payment(
            inputs.principal, inputs.annual_rate, inputs.term_years
        ),
        "schedule": to_payload(schedule),
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_principal": amortization.calculate_total_principal(schedule),
    }


class MortgageInput(BaseModel):
    """Input for mortgage calculation."""

    home_price: float
    down_payment: float
    loan_term: float
    interest_rate: float
    property_tax: float = 0.0
    home_insurance: float = 0.0
    pmi: float = 0.0
    hoa_fee: float = 0.0
    other_costs: float = 0.0
    start_date: Optional[date] = None
    extra_payments: Optional[ExtraPaymentsInput] = None


@router.post("/mortgage")
async def calculate_mortgage(inputs: MortgageInput):
    """Calculate monthly cost, totals and schedule for a mortgage."""
    mortgage_inputs = mortgage.MortgageInputs(
        **inputs.model_dump(exclude={"extra_payments"})
    )
    extra = inputs.extra_payments.to_extra_payments() if inputs.extra_payments else None

    reject_invalid("mortgage", mortgage.validate_mortgage_inputs(mortgage_inputs, extra))

    return to_payload(mortgage.calculate_mortgage(mortgage_inputs, extra))


class VALoanInput(BaseModel):
    """Input for VA loan calculation."""

    home_price: float
    down_payment: float = 0.0
    loan_term: float = 30
    interest_rate: float
    service_type: str = "regular"
    loan_usage: str = "first"
    is_disabled: bool = False
    finance_funding_fee: bool = True
    property_tax: float = 0.0
    home_insurance: float = 0.0
    hoa_fee: float = 0.0
    other_costs: float = 0.0
    start_date: Optional[date] = None


@router.post("/va-loan")
async def calculate_va_loan(inputs: VALoanInput):
    """Calculate a VA loan with conventional and FHA quotes for comparison."""
    va_inputs = va_loan.VALoanInputs(**inputs.model_dump())

    reject_invalid("VA loan", va_loan.validate_va_loan_inputs(va_inputs))

    results = va_loan.calculate_va_loan(va_inputs)
    down_payment_percent = results.loan_details.down_payment_percent

    return {
        **to_payload(results),
        "comparison": {
            "conventional": to_payload(
                va_loan.calculate_conventional_loan(
                    inputs.home_price, down_payment_percent, inputs.loan_term, inputs.interest_rate
                )
            ),
            "fha": to_payload(
                va_loan.calculate_fha_loan(
                    inputs.home_price, down_payment_percent, inputs.loan_term, inputs.interest_rate
                )
            ),
        },
    }
