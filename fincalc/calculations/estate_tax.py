"""
Estate Tax Calculations

Federal estate tax on the taxable estate above the exemption, using the
graduated unified rate schedule, plus a simplified state estate tax.
"""

import math
from dataclasses import dataclass
from typing import List

from fincalc.calculations.brackets import apply_brackets, marginal_rate
from fincalc.calculations.tax_tables import (
    MARITAL_STATUSES,
    TAX_YEAR,
    StateEstateTax,
    get_federal_estate_brackets,
    get_federal_estate_exemption,
    get_state_estate_tax,
)


@dataclass
class EstateTaxInputs:
    """Inputs for the estate tax calculator."""

    total_assets: float
    total_debts: float = 0.0
    marital_status: str = "single"
    state: str = "none"
    gifts_given_lifetime: float = 0.0
    charitable_deductions: float = 0.0


@dataclass
class EstateTaxResults:
    """Estate tax breakdown."""

    gross_estate: float
    total_deductions: float
    adjusted_gross_estate: float
    taxable_estate: float
    federal_exemption: float
    federal_taxable_amount: float
    federal_estate_tax: float
    state_estate_tax: float
    total_estate_tax: float
    net_to_heirs: float
    effective_tax_rate: float
    marginal_tax_rate: float
    total_tax_paid: float
    tax_as_percent_of_estate: float
    state_name: str
    state_exemption: float


def _round_dollars(amount: float) -> float:
    """Nearest whole dollar, halves rounded up."""
    return float(math.floor(amount + 0.5))


def calculate_federal_estate_tax(taxable_amount: float, year: int = TAX_YEAR) -> float:
    """Federal estate tax on the amount above the exemption, in whole dollars."""
    if taxable_amount <= 0:
        return 0.0
    return _round_dollars(apply_brackets(taxable_amount, get_federal_estate_brackets(year)))


def calculate_state_estate_tax(taxable_estate: float, state: StateEstateTax) -> float:
    """Flat top rate on the estate above the state exemption, in whole dollars."""
    if state.exemption == 0:
        return 0.0
    return _round_dollars(max(0.0, taxable_estate - state.exemption) * state.max_rate)


def calculate_estate_tax(inputs: EstateTaxInputs, year: int = TAX_YEAR) -> EstateTaxResults:
    """
    Calculate federal and state estate tax.

    Lifetime gifts are added back to the adjusted gross estate to get the
    taxable estate; the federal exemption depends on marital status.

    Args:
        inputs: Validated estate tax inputs
        year: Tax year of the tables to use

    Returns:
        Estate tax breakdown
    """
    gross_estate = inputs.total_assets
    total_deductions = inputs.total_debts + inputs.charitable_deductions
    adjusted_gross_estate = max(0.0, gross_estate - total_deductions)
    taxable_estate = adjusted_gross_estate + inputs.gifts_given_lifetime

    federal_exemption = get_federal_estate_exemption(inputs.marital_status, year)
    federal_taxable_amount = max(0.0, taxable_estate - federal_exemption)
    federal_tax = calculate_federal_estate_tax(federal_taxable_amount, year)

    state = get_state_estate_tax(inputs.state, year)
    state_tax = calculate_state_estate_tax(taxable_estate, state)

    total_tax = federal_tax + state_tax

    if federal_taxable_amount > 0:
        top_rate = marginal_rate(federal_taxable_amount, get_federal_estate_brackets(year))
    else:
        top_rate = 0.0

    return EstateTaxResults(
        gross_estate=gross_estate,
        total_deductions=total_deductions,
        adjusted_gross_estate=adjusted_gross_estate,
        taxable_estate=taxable_estate,
        federal_exemption=federal_exemption,
        federal_taxable_amount=federal_taxable_amount,
        federal_estate_tax=federal_tax,
        state_estate_tax=state_tax,
        total_estate_tax=total_tax,
        net_to_heirs=max(0.0, adjusted_gross_estate - total_tax),
        effective_tax_rate=(
            total_tax / adjusted_gross_estate * 100 if adjusted_gross_estate > 0 else 0.0
        ),
        marginal_tax_rate=top_rate * 100,
        total_tax_paid=total_tax,
        tax_as_percent_of_estate=total_tax / gross_estate * 100 if gross_estate > 0 else 0.0,
        state_name=state.name,
        state_exemption=state.exemption,
    )


def validate_estate_tax_inputs(inputs: EstateTaxInputs) -> List[str]:
    """Return a list of problems with the inputs; empty when valid."""
    errors = []

    if inputs.total_assets < 0:
        errors.append("Total assets cannot be negative")
    if inputs.total_debts < 0:
        errors.append("Total debts cannot be negative")
    if inputs.gifts_given_lifetime < 0:
        errors.append("Lifetime gifts cannot be negative")
    if inputs.charitable_deductions < 0:
        errors.append("Charitable deductions cannot be negative")
    if inputs.total_debts > inputs.total_assets:
        errors.append("Total debts cannot exceed total assets")
    if inputs.marital_status not in MARITAL_STATUSES:
        errors.append("Marital status must be either single or married")

    return errors
