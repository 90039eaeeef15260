"""
Progressive Tax Brackets

Marginal bracket evaluation shared by the salary and estate tax calculators.
Only the slice of an amount that falls inside a bracket is taxed at that
bracket's rate.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class TaxBracket:
    """A bracket [min, max) taxed at rate. max=None means open-ended."""

    min: float
    max: Optional[float]
    rate: float  # decimal, e.g. 0.22


def apply_brackets(taxable_amount: float, brackets: Sequence[TaxBracket]) -> float:
    """
    Calculate tax on an amount using progressive brackets.

    Args:
        taxable_amount: Amount subject to tax
        brackets: Brackets sorted ascending by min

    Returns:
        Total tax (0 for non-positive amounts)
    """
    tax = 0.0

    for bracket in brackets:
        if taxable_amount <= bracket.min:
            continue
        upper = taxable_amount if bracket.max is None else min(taxable_amount, bracket.max)
        tax += (upper - bracket.min) * bracket.rate

    return tax


def marginal_rate(taxable_amount: float, brackets: Sequence[TaxBracket]) -> float:
    """Rate of the highest bracket the amount reaches into, 0 if none."""
    rate = 0.0
    for bracket in brackets:
        if taxable_amount > bracket.min:
            rate = bracket.rate
    return rate


def validate_brackets(brackets: Sequence[TaxBracket]) -> List[str]:
    """Check that brackets partition [0, inf) in ascending order."""
    errors = []

    if not brackets:
        return ["At least one bracket is required"]

    if brackets[0].min != 0:
        errors.append("First bracket must start at 0")

    for i, bracket in enumerate(brackets):
        if bracket.rate < 0:
            errors.append(f"Bracket {i + 1} has a negative rate")
        if bracket.max is not None and bracket.max <= bracket.min:
            errors.append(f"Bracket {i + 1} max must be greater than its min")

        if i + 1 < len(brackets):
            if bracket.max is None:
                errors.append(f"Only the last bracket may be open-ended (bracket {i + 1})")
            elif brackets[i + 1].min != bracket.max:
                errors.append(f"Bracket {i + 2} must start where bracket {i + 1} ends")

    if brackets[-1].max is not None:
        errors.append("Last bracket must be open-ended")

    return errors
