"""
Financial Calculation Engine

Pure calculation modules behind each calculator. Every function is a
deterministic function of its inputs; validators return lists of messages
instead of raising.
"""

from fincalc.calculations import (
    amortization,
    brackets,
    estate_tax,
    irr,
    mortgage,
    salary,
    social_security,
    tax_tables,
    va_loan,
)

__all__ = [
    "amortization",
    "brackets",
    "estate_tax",
    "irr",
    "mortgage",
    "salary",
    "social_security",
    "tax_tables",
    "va_loan",
]
