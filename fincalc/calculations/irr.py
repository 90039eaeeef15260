"""
IRR, MIRR and NPV Calculations

Implements IRR using Newton-Raphson with a one-way fallback to bisection.
Rates passed to NPV are decimals; IRR and MIRR are returned as percentages.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-7

DEFAULT_LOWER_BOUND = -0.99
DEFAULT_UPPER_BOUND = 10.0
MAX_BRACKET_EXPANSIONS = 8

MIN_RATE_PERCENT = -100.0
MAX_RATE_PERCENT = 100.0


@dataclass
class CashFlow:
    """A single cash flow at an integer period."""

    period: int  # 0 = initial investment
    amount: float  # negative = outflow, positive = inflow
    label: Optional[str] = None


@dataclass
class IRRInputs:
    """Inputs for the IRR calculator."""

    cash_flows: List[CashFlow]
    finance_rate: Optional[float] = None  # percent, used for MIRR
    reinvestment_rate: Optional[float] = None  # percent, used for MIRR


@dataclass
class CashFlowDetail:
    """One row of the discounted cash flow schedule."""

    period: int
    amount: float
    label: Optional[str]
    discounted_value: float
    cumulative_cash_flow: float
    present_value_factor: float  # (1 + IRR)^-period


@dataclass
class IRRResults:
    """Calculated IRR metrics."""

    irr: Optional[float]  # percent
    mirr: Optional[float]  # percent
    npv: Optional[float]  # NPV at the IRR, ~0
    npv_at_zero: float
    total_investment: float
    total_returns: float
    profit_loss: float
    payback_period: Optional[float]
    cash_flow_schedule: List[CashFlowDetail] = field(default_factory=list)


class _Method(enum.Enum):
    NEWTON = "newton"
    BISECTION = "bisection"


def _sorted(cash_flows: List[CashFlow]) -> List[CashFlow]:
    return sorted(cash_flows, key=lambda cf: cf.period)


def _totals(cash_flows: List[CashFlow]) -> Tuple[float, float]:
    """Return (total_investment, total_returns), both non-negative."""
    total_investment = abs(sum(cf.amount for cf in cash_flows if cf.amount < 0))
    total_returns = sum(cf.amount for cf in cash_flows if cf.amount > 0)
    return total_investment, total_returns


def calculate_npv(cash_flows: List[CashFlow], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Cash flows at integer periods
        discount_rate: Periodic discount rate as decimal (e.g., 0.10 for 10%)

    Returns:
        NPV value (may be non-finite when discount_rate <= -1)
    """
    if not cash_flows:
        return 0.0

    periods = np.array([cf.period for cf in cash_flows], dtype=float)
    amounts = np.array([cf.amount for cf in cash_flows], dtype=float)

    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        factors = np.power(1.0 + discount_rate, -periods)
        return float(np.sum(amounts * factors))


def _npv_derivative(cash_flows: List[CashFlow], rate: float) -> float:
    """Derivative of NPV with respect to rate. Period 0 contributes nothing."""
    periods = np.array([cf.period for cf in cash_flows if cf.period != 0], dtype=float)
    amounts = np.array([cf.amount for cf in cash_flows if cf.period != 0], dtype=float)

    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        return float(-np.sum(periods * amounts / np.power(1.0 + rate, periods + 1)))


def _find_bracket(cash_flows: List[CashFlow]) -> Tuple[float, float, bool]:
    """
    Find [lower, upper] with NPV of opposite sign at each end.

    Starts from the default bounds and widens whichever bound has the smaller
    |NPV|: the lower bound moves geometrically toward -1, the upper bound
    grows by a factor of 10.

    Returns:
        (lower, upper, bracketed)
    """
    lower, upper = DEFAULT_LOWER_BOUND, DEFAULT_UPPER_BOUND
    npv_lower = calculate_npv(cash_flows, lower)
    npv_upper = calculate_npv(cash_flows, upper)

    for _ in range(MAX_BRACKET_EXPANSIONS):
        if npv_lower * npv_upper < 0:
            return lower, upper, True
        if not (math.isfinite(npv_lower) and math.isfinite(npv_upper)):
            break

        if abs(npv_lower) < abs(npv_upper):
            lower = -1 + (1 + lower) / 10
            npv_lower = calculate_npv(cash_flows, lower)
        else:
            upper *= 10
            npv_upper = calculate_npv(cash_flows, upper)
        logger.debug(f"Widened IRR bracket to [{lower}, {upper}]")

    return lower, upper, npv_lower * npv_upper < 0


def calculate_irr(cash_flows: List[CashFlow]) -> Optional[float]:
    """
    Calculate IRR (Internal Rate of Return).

    Newton-Raphson is tried first. Once it produces a derivative below
    tolerance, a step outside the bracket or a non-finite step, the search
    switches to bisection for the remaining iterations and never switches
    back.

    Args:
        cash_flows: Cash flows in any order

    Returns:
        IRR as a percentage (e.g., 15.32), or None when every cash flow has
        the same sign. After MAX_ITERATIONS the last estimate is returned.
    """
    has_positive = any(cf.amount > 0 for cf in cash_flows)
    has_negative = any(cf.amount < 0 for cf in cash_flows)

    if not has_positive or not has_negative:
        return None

    flows = _sorted(cash_flows)
    total_investment, total_returns = _totals(flows)
    last_period = flows[-1].period or 1

    lower, upper, bracketed = _find_bracket(flows)

    # Simple-return guess, kept inside the bracket
    rate = (total_returns - total_investment) / total_investment / last_period
    rate = min(max(rate, lower), upper)

    method = _Method.NEWTON

    for _ in range(MAX_ITERATIONS):
        npv = calculate_npv(flows, rate)

        if abs(npv) < TOLERANCE:
            return rate * 100

        if method is _Method.NEWTON:
            dnpv = _npv_derivative(flows, rate)

            if abs(dnpv) < TOLERANCE:
                method = _Method.BISECTION
                logger.debug("IRR derivative too small, switching to bisection")
                continue

            new_rate = rate - npv / dnpv

            if not math.isfinite(new_rate) or not lower <= new_rate <= upper:
                method = _Method.BISECTION
                logger.debug(f"Newton step {new_rate} left bracket, switching to bisection")
                continue

            rate = new_rate
        else:
            if not bracketed:
                logger.debug("No sign change inside IRR bracket, returning last estimate")
                break

            mid = (lower + upper) / 2
            npv_mid = calculate_npv(flows, mid)

            if abs(npv_mid) < TOLERANCE:
                return mid * 100

            if calculate_npv(flows, lower) * npv_mid < 0:
                upper = mid
            else:
                lower = mid

            rate = mid

    return rate * 100


def calculate_mirr(
    cash_flows: List[CashFlow], finance_rate: float, reinvestment_rate: float
) -> Optional[float]:
    """
    Calculate MIRR (Modified Internal Rate of Return).

    MIRR = (FV of positive flows / PV of negative flows)^(1/n) - 1

    Args:
        cash_flows: Cash flows in any order
        finance_rate: Rate for discounting outflows (percent)
        reinvestment_rate: Rate for compounding inflows (percent)

    Returns:
        MIRR as a percentage, or None when the horizon is zero or there is
        nothing to discount
    """
    if not cash_flows:
        return None

    n = max(cf.period for cf in cash_flows)
    if n == 0:
        return None

    finance = finance_rate / 100
    reinvest = reinvestment_rate / 100

    # Outflows cannot be discounted at -100% or below
    if finance <= -1:
        return None

    pv_negative = sum(
        abs(cf.amount) * (1 + finance) ** -cf.period
        for cf in cash_flows
        if cf.amount < 0
    )
    fv_positive = sum(
        cf.amount * (1 + reinvest) ** (n - cf.period)
        for cf in cash_flows
        if cf.amount > 0
    )

    if pv_negative == 0:
        return None

    mirr = (fv_positive / pv_negative) ** (1 / n) - 1
    return mirr * 100


def calculate_payback_period(cash_flows: List[CashFlow]) -> Optional[float]:
    """
    Calculate the (fractional) period at which cumulative cash flow turns
    non-negative.

    Returns:
        Payback period, or None if it is beyond the last cash flow
    """
    cumulative = 0.0

    for cf in _sorted(cash_flows):
        cumulative += cf.amount
        if cumulative >= 0:
            previous = cumulative - cf.amount
            if cf.amount != 0 and previous < 0:
                fraction = abs(previous) / cf.amount
                return cf.period - (1 - fraction)
            return float(cf.period)

    return None


def calculate_irr_results(inputs: IRRInputs) -> IRRResults:
    """Run every IRR metric for a validated set of inputs."""
    flows = _sorted(inputs.cash_flows)

    irr = calculate_irr(flows)

    mirr = None
    if inputs.finance_rate is not None and inputs.reinvestment_rate is not None:
        mirr = calculate_mirr(flows, inputs.finance_rate, inputs.reinvestment_rate)

    npv = calculate_npv(flows, irr / 100) if irr is not None else None
    total_investment, total_returns = _totals(flows)

    schedule = []
    cumulative = 0.0
    for cf in flows:
        cumulative += cf.amount
        factor = (1 + irr / 100) ** -cf.period if irr is not None else 1.0
        schedule.append(
            CashFlowDetail(
                period=cf.period,
                amount=cf.amount,
                label=cf.label,
                discounted_value=cf.amount * factor,
                cumulative_cash_flow=cumulative,
                present_value_factor=factor,
            )
        )

    return IRRResults(
        irr=irr,
        mirr=mirr,
        npv=npv,
        npv_at_zero=sum(cf.amount for cf in flows),
        total_investment=total_investment,
        total_returns=total_returns,
        profit_loss=total_returns - total_investment,
        payback_period=calculate_payback_period(flows),
        cash_flow_schedule=schedule,
    )


def validate_irr_inputs(inputs: IRRInputs) -> List[str]:
    """Return a list of problems with the inputs; empty when valid."""
    errors = []
    cash_flows = inputs.cash_flows or []

    if len(cash_flows) < 2:
        errors.append("At least two cash flows are required")

    if cash_flows:
        if not any(cf.amount > 0 for cf in cash_flows):
            errors.append("At least one positive cash flow (return) is required")
        if not any(cf.amount < 0 for cf in cash_flows):
            errors.append("At least one negative cash flow (investment) is required")

        periods = [cf.period for cf in cash_flows]
        if len(periods) != len(set(periods)):
            errors.append("Each period must be unique")

        if any(p < 0 for p in periods):
            errors.append("Periods cannot be negative")

    if inputs.finance_rate is not None:
        if not MIN_RATE_PERCENT <= inputs.finance_rate <= MAX_RATE_PERCENT:
            errors.append("Finance rate must be between -100% and 100%")

    if inputs.reinvestment_rate is not None:
        if not MIN_RATE_PERCENT <= inputs.reinvestment_rate <= MAX_RATE_PERCENT:
            errors.append("Reinvestment rate must be between -100% and 100%")

    return errors
