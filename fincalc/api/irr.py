"""
IRR calculator API endpoint.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional

from fincalc.api.dependencies import reject_invalid, to_payload
from fincalc.calculations import irr

router = APIRouter()


class CashFlowInput(BaseModel):
    """A single cash flow."""

    period: int
    amount: float
    label: Optional[str] = None


class IRRInput(BaseModel):
    """Input for IRR calculation. Rates are percentages."""

    cash_flows: List[CashFlowInput]
    finance_rate: Optional[float] = None
    reinvestment_rate: Optional[float] = None


@router.post("/irr")
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR, MIRR, NPV and payback for given cash flows."""
    irr_inputs = irr.IRRInputs(
        cash_flows=[
            irr.CashFlow(period=cf.period, amount=cf.amount, label=cf.label)
            for cf in inputs.cash_flows
        ],
        finance_rate=inputs.finance_rate,
        reinvestment_rate=inputs.reinvestment_rate,
    )

    reject_invalid("IRR", irr.validate_irr_inputs(irr_inputs))

    return to_payload(irr.calculate_irr_results(irr_inputs))
