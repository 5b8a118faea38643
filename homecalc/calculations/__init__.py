"""
Financial Calculation Engine

Pure calculation modules for home purchase analysis: mortgage payments and
amortization, land transfer taxes, closing costs, rental returns,
affordability and rent vs buy. No module holds state, performs I/O or logs.
"""

from homecalc.calculations import (
    affordability,
    amortization,
    closing_costs,
    investment,
    land_transfer_tax,
    mortgage_insurance,
    rent_vs_buy,
    validation,
)

__all__ = [
    "affordability",
    "amortization",
    "closing_costs",
    "investment",
    "land_transfer_tax",
    "mortgage_insurance",
    "rent_vs_buy",
    "validation",
]
