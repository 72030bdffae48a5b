"""Indian income-tax calculation under the new regime (FY 2024-25).

Tax Slabs:
    ₹0 – ₹3,00,000           → 0 %
    ₹3,00,001 – ₹7,00,000    → 5 % on amount above ₹3 L
    ₹7,00,001 – ₹10,00,000   → 10 % on amount above ₹7 L
    ₹10,00,001 – ₹12,00,000  → 15 % on amount above ₹10 L
    ₹12,00,001 – ₹15,00,000  → 20 % on amount above ₹12 L
    Above ₹15,00,000          → 30 % on amount above ₹15 L

Cumulative tax at the slab tops: ₹20,000 (7 L), ₹50,000 (10 L),
₹80,000 (12 L), ₹1,40,000 (15 L).
"""

from __future__ import annotations
from salarycalc.utils.helpers import round_currency

# Slab boundaries and marginal rates
_SLABS: list[tuple[float, float, float]] = [
    # (lower_bound, upper_bound, marginal_rate)
    (0.0,         300_000.0,   0.00),
    (300_000.0,   700_000.0,   0.05),
    (700_000.0,   1_000_000.0, 0.10),
    (1_000_000.0, 1_200_000.0, 0.15),
    (1_200_000.0, 1_500_000.0, 0.20),
    (1_500_000.0, float("inf"), 0.30),
]

def calculate_income_tax(annual_taxable_income: float) -> float:
    """Compute annual tax liability using the new-regime slabs.

    Parameters
    ----------
    annual_taxable_income:
        Annual taxable income in INR, after deductions.

    Returns
    -------
    float
        Total tax liability in INR (rounded to 2 dp).
    """
    if annual_taxable_income <= 0:
        return 0.0

    tax = 0.0
    for lower, upper, rate in _SLABS:
        if annual_taxable_income <= lower:
            break
        taxable_in_slab = min(annual_taxable_income, upper) - lower
        tax += taxable_in_slab * rate

    return round_currency(tax)
