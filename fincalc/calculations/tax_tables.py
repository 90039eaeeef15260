"""
Tax Tables

Static, versioned tax constants keyed by tax year. Adding a year means adding
entries here; the calculators only look tables up.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from fincalc.calculations.brackets import TaxBracket

TAX_YEAR = 2025

FILING_STATUSES = ("single", "married", "head")
MARITAL_STATUSES = ("single", "married")


@dataclass(frozen=True)
class FicaLimits:
    """Payroll tax rates, caps and contribution limits for one year."""

    social_security_rate: float
    social_security_wage_base: float
    medicare_rate: float
    additional_medicare_rate: float
    additional_medicare_threshold: Dict[str, float]
    max_401k_contribution: float
    max_401k_catch_up: float
    max_hsa_individual: float
    max_hsa_family: float
    max_hsa_catch_up: float


@dataclass(frozen=True)
class StateIncomeTax:
    """Headline state income tax rate. kind is 'none', 'flat' or 'progressive'."""

    rate: float
    kind: str


@dataclass(frozen=True)
class StateEstateTax:
    """State estate tax: flat top rate applied above the exemption."""

    name: str
    exemption: float
    max_rate: float
    has_inheritance_tax: bool


def _brackets(*rows: Tuple[float, float, float]) -> Tuple[TaxBracket, ...]:
    """Build a bracket table from (min, max, rate) rows; max None = open."""
    return tuple(TaxBracket(min=lo, max=hi, rate=rate) for lo, hi, rate in rows)


FEDERAL_TAX_BRACKETS = {
    2025: {
        "single": _brackets(
            (0, 11925, 0.10),
            (11925, 48475, 0.12),
            (48475, 103350, 0.22),
            (103350, 197300, 0.24),
            (197300, 250525, 0.32),
            (250525, 626350, 0.35),
            (626350, None, 0.37),
        ),
        "married": _brackets(
            (0, 23850, 0.10),
            (23850, 96950, 0.12),
            (96950, 206700, 0.22),
            (206700, 394600, 0.24),
            (394600, 501050, 0.32),
            (501050, 751600, 0.35),
            (751600, None, 0.37),
        ),
        "head": _brackets(
            (0, 17000, 0.10),
            (17000, 64850, 0.12),
            (64850, 103350, 0.22),
            (103350, 197300, 0.24),
            (197300, 250500, 0.32),
            (250500, 626350, 0.35),
            (626350, None, 0.37),
        ),
    },
}

STANDARD_DEDUCTIONS = {
    2025: {
        "single": 15750,
        "married": 31500,
        "head": 23625,
    },
}

FICA_LIMITS = {
    2025: FicaLimits(
        social_security_rate=0.062,
        social_security_wage_base=176100,
        medicare_rate=0.0145,
        additional_medicare_rate=0.009,
        additional_medicare_threshold={
            "single": 200000,
            "married": 250000,
            "head": 200000,
        },
        max_401k_contribution=23000,
        max_401k_catch_up=7500,
        max_hsa_individual=4300,
        max_hsa_family=8550,
        max_hsa_catch_up=1000,
    ),
}

# Headline rates; progressive states other than CA and NY are approximated
STATE_INCOME_TAX = {
    2025: {
        "AL": StateIncomeTax(0.05, "flat"),
        "AK": StateIncomeTax(0, "none"),
        "AZ": StateIncomeTax(0.025, "flat"),
        "AR": StateIncomeTax(0.047, "progressive"),
        "CA": StateIncomeTax(0.093, "progressive"),
        "CO": StateIncomeTax(0.044, "flat"),
        "CT": StateIncomeTax(0.0699, "progressive"),
        "DE": StateIncomeTax(0.066, "progressive"),
        "FL": StateIncomeTax(0, "none"),
        "GA": StateIncomeTax(0.0549, "flat"),
        "HI": StateIncomeTax(0.11, "progressive"),
        "ID": StateIncomeTax(0.058, "flat"),
        "IL": StateIncomeTax(0.0495, "flat"),
        "IN": StateIncomeTax(0.0315, "flat"),
        "IA": StateIncomeTax(0.057, "flat"),
        "KS": StateIncomeTax(0.057, "progressive"),
        "KY": StateIncomeTax(0.04, "flat"),
        "LA": StateIncomeTax(0.0425, "progressive"),
        "ME": StateIncomeTax(0.0715, "progressive"),
        "MD": StateIncomeTax(0.0575, "progressive"),
        "MA": StateIncomeTax(0.05, "flat"),
        "MI": StateIncomeTax(0.04, "flat"),
        "MN": StateIncomeTax(0.0985, "progressive"),
        "MS": StateIncomeTax(0.045, "flat"),
        "MO": StateIncomeTax(0.0495, "progressive"),
        "MT": StateIncomeTax(0.0675, "progressive"),
        "NE": StateIncomeTax(0.0664, "progressive"),
        "NV": StateIncomeTax(0, "none"),
        "NH": StateIncomeTax(0, "none"),  # interest/dividends only
        "NJ": StateIncomeTax(0.1075, "progressive"),
        "NM": StateIncomeTax(0.059, "progressive"),
        "NY": StateIncomeTax(0.109, "progressive"),
        "NC": StateIncomeTax(0.045, "flat"),
        "ND": StateIncomeTax(0.029, "progressive"),
        "OH": StateIncomeTax(0.035, "progressive"),
        "OK": StateIncomeTax(0.0475, "progressive"),
        "OR": StateIncomeTax(0.099, "progressive"),
        "PA": StateIncomeTax(0.0307, "flat"),
        "RI": StateIncomeTax(0.0599, "progressive"),
        "SC": StateIncomeTax(0.064, "progressive"),
        "SD": StateIncomeTax(0, "none"),
        "TN": StateIncomeTax(0, "none"),
        "TX": StateIncomeTax(0, "none"),
        "UT": StateIncomeTax(0.0485, "flat"),
        "VT": StateIncomeTax(0.0875, "progressive"),
        "VA": StateIncomeTax(0.0575, "progressive"),
        "WA": StateIncomeTax(0, "none"),
        "WV": StateIncomeTax(0.065, "progressive"),
        "WI": StateIncomeTax(0.0765, "progressive"),
        "WY": StateIncomeTax(0, "none"),
        "DC": StateIncomeTax(0.1075, "progressive"),
    },
}

# Single-filer schedules for states modeled bracket by bracket
STATE_INCOME_TAX_BRACKETS = {
    2025: {
        "CA": _brackets(
            (0, 10099, 0.01),
            (10099, 23942, 0.02),
            (23942, 37788, 0.04),
            (37788, 52455, 0.06),
            (52455, 66295, 0.08),
            (66295, 338639, 0.093),
            (338639, 406364, 0.103),
            (406364, 677275, 0.113),
            (677275, None, 0.123),
        ),
        "NY": _brackets(
            (0, 8500, 0.04),
            (8500, 11700, 0.045),
            (11700, 13900, 0.0525),
            (13900, 80650, 0.0585),
            (80650, 215400, 0.0625),
            (215400, 1077550, 0.0685),
            (1077550, 25000000, 0.0965),
            (25000000, None, 0.109),
        ),
    },
}

# IRS unified rate schedule, applied to the amount above the exemption
FEDERAL_ESTATE_TAX_BRACKETS = {
    2025: _brackets(
        (0, 10000, 0.18),
        (10000, 20000, 0.20),
        (20000, 40000, 0.22),
        (40000, 60000, 0.24),
        (60000, 80000, 0.26),
        (80000, 100000, 0.28),
        (100000, 150000, 0.30),
        (150000, 250000, 0.32),
        (250000, 500000, 0.34),
        (500000, 750000, 0.37),
        (750000, 1000000, 0.39),
        (1000000, None, 0.40),
    ),
}

FEDERAL_ESTATE_TAX_EXEMPTIONS = {
    2025: {
        "single": 13990000,
        "married": 27980000,  # with portability
    },
}

ANNUAL_GIFT_EXCLUSION = {
    2025: 19000,
}

NO_STATE_ESTATE_TAX = "none"

STATE_ESTATE_TAXES = {
    2025: {
        NO_STATE_ESTATE_TAX: StateEstateTax("No State Estate Tax", 0, 0, False),
        "CT": StateEstateTax("Connecticut", 13990000, 0.12, False),
        "HI": StateEstateTax("Hawaii", 5490000, 0.20, False),
        "IL": StateEstateTax("Illinois", 4000000, 0.16, False),
        "ME": StateEstateTax("Maine", 6800000, 0.12, False),
        "MD": StateEstateTax("Maryland", 5000000, 0.16, True),
        "MA": StateEstateTax("Massachusetts", 2000000, 0.16, False),
        "MN": StateEstateTax("Minnesota", 3000000, 0.16, False),
        "NY": StateEstateTax("New York", 7160000, 0.16, False),
        "OR": StateEstateTax("Oregon", 1000000, 0.16, False),
        "RI": StateEstateTax("Rhode Island", 1733264, 0.16, False),
        "VT": StateEstateTax("Vermont", 5000000, 0.16, False),
        "WA": StateEstateTax("Washington", 2193000, 0.20, False),
        "DC": StateEstateTax("Washington DC", 4528800, 0.16, False),
    },
}


def _for_year(table: dict, year: int, name: str):
    try:
        return table[year]
    except KeyError:
        raise ValueError(f"No {name} available for tax year {year}")


def _for_key(table: dict, key: str, name: str):
    try:
        return table[key]
    except KeyError:
        raise ValueError(f"Unknown {name}: {key}")


def get_federal_brackets(filing_status: str, year: int = TAX_YEAR) -> Tuple[TaxBracket, ...]:
    """Federal income tax brackets for a filing status."""
    by_status = _for_year(FEDERAL_TAX_BRACKETS, year, "federal tax brackets")
    return _for_key(by_status, filing_status, "filing status")


def get_standard_deduction(filing_status: str, year: int = TAX_YEAR) -> float:
    """Federal standard deduction for a filing status."""
    by_status = _for_year(STANDARD_DEDUCTIONS, year, "standard deductions")
    return _for_key(by_status, filing_status, "filing status")


def get_fica_limits(year: int = TAX_YEAR) -> FicaLimits:
    return _for_year(FICA_LIMITS, year, "FICA limits")


def get_state_income_tax(state: str, year: int = TAX_YEAR) -> StateIncomeTax:
    by_state = _for_year(STATE_INCOME_TAX, year, "state income tax rates")
    return _for_key(by_state, state, "state code")


def get_state_income_tax_brackets(state: str, year: int = TAX_YEAR):
    """Bracket schedule for a state, or None when only a headline rate is modeled."""
    return _for_year(STATE_INCOME_TAX_BRACKETS, year, "state tax brackets").get(state)


def get_federal_estate_brackets(year: int = TAX_YEAR) -> Tuple[TaxBracket, ...]:
    return _for_year(FEDERAL_ESTATE_TAX_BRACKETS, year, "estate tax brackets")


def get_federal_estate_exemption(marital_status: str, year: int = TAX_YEAR) -> float:
    by_status = _for_year(FEDERAL_ESTATE_TAX_EXEMPTIONS, year, "estate tax exemptions")
    return _for_key(by_status, marital_status, "marital status")


def get_state_estate_tax(state: str, year: int = TAX_YEAR) -> StateEstateTax:
    """State estate tax entry; states without one map to the 'none' entry."""
    by_state = _for_year(STATE_ESTATE_TAXES, year, "state estate taxes")
    return by_state.get(state, by_state[NO_STATE_ESTATE_TAX])
