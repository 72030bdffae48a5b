"""CTC → monthly in-hand salary derivation.

Processing Order:
    Step 1  Partition CTC: fixed = ctc − variable − insurance − relocation
    Step 2  Split fixed CTC 50 / 40 / 10 into Basic / HRA / Special Allowance
    Step 3  EPF  = 12 % of monthly basic (no wage cap)
    Step 4  ESI  = 0.75 % of monthly gross when gross ≤ ₹21,000
    Step 5  Professional tax from the city tax lookup
    Step 6  HRA exemption: min(HRA, basic × 50 % metro / 40 % non-metro)
    Step 7  Taxable income = basic + taxable HRA + special − ₹50,000
            − annual EPF − annual ESI − annual professional tax, floored at 0
    Step 8  Gratuity accrual = basic × 15/26 × 5 years (reported, not deducted)
    Step 9  Aggregate deductions and in-hand pay

Variable pay, insurance and relocation allowance are paid outside the
monthly structure, so they never reach Basic / HRA / Special Allowance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Optional, Tuple

from salarycalc.config import settings
from salarycalc.models.schemas import SalaryBreakdown, SalaryInput
from salarycalc.services.city_tax_service import CityTaxLookup
from salarycalc.services.tax_service import calculate_income_tax
from salarycalc.utils.helpers import monthly, round_currency

logger = logging.getLogger(__name__)

METRO_CITIES: frozenset[str] = frozenset({"Mumbai", "Delhi", "Kolkata", "Chennai"})

# (name fragments, special-allowance multiplier, HRA multiplier, metro only)
_COMPANY_RULES: Tuple[Tuple[Tuple[str, ...], float, float, bool], ...] = (
    (("google", "microsoft", "amazon"), 1.1, 1.0, False),
    (("goldman", "morgan", "jpmorgan"), 1.0, 1.15, True),
)


@dataclass(frozen=True)
class CompanyAdjustment:
    special_allowance_multiplier: float = 1.0
    hra_multiplier: float = 1.0
    reason: Optional[str] = None


# ── Pure helpers ──────────────────────────────────────────────────────────

def partition_ctc(
    ctc: float,
    variable_pay: float = 0.0,
    insurance: float = 0.0,
    relocation_allowance: float = 0.0,
) -> float:
    """Fixed CTC subject to the monthly structure.

    No floor: components summing above ``ctc`` yield a negative value.
    """
    return ctc - variable_pay - insurance - relocation_allowance


def calculate_epf(basic_monthly: float) -> float:
    return basic_monthly * settings.EPF_RATE


def calculate_esi(gross_monthly: float) -> float:
    """0.75 % of gross for earners at or below the ₹21,000 wage limit."""
    if gross_monthly <= settings.ESI_WAGE_LIMIT:
        return gross_monthly * settings.ESI_RATE
    return 0.0


def is_metro(city: str, metros: AbstractSet[str] = METRO_CITIES) -> bool:
    return city in metros


def hra_exemption_percent(city: str, metros: AbstractSet[str] = METRO_CITIES) -> float:
    if is_metro(city, metros):
        return settings.METRO_HRA_EXEMPTION
    return settings.NON_METRO_HRA_EXEMPTION


def calculate_hra_exemption(basic_annual: float, hra_annual: float, city: str) -> float:
    """Exempt HRA = min(HRA received, basic × exemption percent)."""
    return min(hra_annual, basic_annual * hra_exemption_percent(city))


def calculate_taxable_income(
    basic_annual: float,
    taxable_hra_annual: float,
    special_allowance_annual: float,
    pf_monthly: float,
    esi_monthly: float,
    professional_tax_monthly: float,
) -> float:
    gross_annual = basic_annual + taxable_hra_annual + special_allowance_annual
    taxable = (
        gross_annual
        - settings.STANDARD_DEDUCTION
        - pf_monthly * 12
        - esi_monthly * 12
        - professional_tax_monthly * 12
    )
    return max(0.0, taxable)


def calculate_gratuity(basic_annual: float, years: int = settings.GRATUITY_YEARS) -> float:
    """Monthly gratuity accrual for *years* of service."""
    return monthly(basic_annual * (15 / 26) * years)


def company_adjustment(company: Optional[str], city: str) -> CompanyAdjustment:
    """Employer-specific multipliers, matched on a lower-cased name fragment.

    The result is informational only: ``compute_breakdown`` does not apply it.
    """
    if not company:
        return CompanyAdjustment()

    name = company.lower()
    for fragments, special_mult, hra_mult, metro_only in _COMPANY_RULES:
        matched = next((f for f in fragments if f in name), None)
        if matched is None:
            continue
        if metro_only and not is_metro(city):
            return CompanyAdjustment()
        return CompanyAdjustment(
            special_allowance_multiplier=special_mult,
            hra_multiplier=hra_mult,
            reason=matched,
        )
    return CompanyAdjustment()


# ── Public API ────────────────────────────────────────────────────────────

def compute_breakdown(
    ctc: float,
    city: str,
    variable_pay: float,
    insurance: float,
    relocation_allowance: float,
    professional_tax: float,
    company: Optional[str] = None,
    is_relocation: bool = False,
    gratuity_years: int = settings.GRATUITY_YEARS,
) -> SalaryBreakdown:
    """Derive the full monthly breakdown once professional tax is known."""
    fixed_ctc = partition_ctc(ctc, variable_pay, insurance, relocation_allowance)
    if fixed_ctc < 0:
        logger.warning(
            "Salary components exceed CTC; fixed CTC is negative and will "
            "propagate through the breakdown."
        )

    basic_annual = fixed_ctc * settings.BASIC_SHARE
    hra_annual = fixed_ctc * settings.HRA_SHARE
    special_annual = fixed_ctc * settings.SPECIAL_ALLOWANCE_SHARE

    basic_salary = monthly(basic_annual)
    hra = monthly(hra_annual)
    special_allowance = monthly(special_annual)
    gross_monthly = basic_salary + hra + special_allowance

    pf = calculate_epf(basic_salary)
    esi = calculate_esi(gross_monthly)

    taxable_hra_annual = hra_annual - calculate_hra_exemption(basic_annual, hra_annual, city)
    taxable_income = calculate_taxable_income(
        basic_annual, taxable_hra_annual, special_annual, pf, esi, professional_tax
    )
    income_tax = monthly(calculate_income_tax(taxable_income))

    gratuity = calculate_gratuity(basic_annual, gratuity_years)

    adjustment = company_adjustment(company, city)
    if adjustment.reason is not None:
        # Computed for reporting; multipliers are not applied to the figures.
        logger.debug("Company adjustment for '%s': %s", company, adjustment)

    # Aggregates are built from the rounded components so the reported
    # figures add up to the paisa.
    basic_salary, hra, special_allowance = (
        round_currency(basic_salary), round_currency(hra), round_currency(special_allowance)
    )
    pf, esi = round_currency(pf), round_currency(esi)
    professional_tax, income_tax = round_currency(professional_tax), round_currency(income_tax)

    monthly_deductions = round_currency(pf + esi + professional_tax + income_tax)
    in_hand_salary = round_currency(basic_salary + hra + special_allowance - monthly_deductions)

    return SalaryBreakdown(
        ctc=round_currency(ctc),
        fixedCtc=round_currency(fixed_ctc),
        variablePay=round_currency(variable_pay),
        insurance=round_currency(insurance),
        relocationAllowance=round_currency(relocation_allowance),
        basicSalary=basic_salary,
        hra=hra,
        specialAllowance=special_allowance,
        pf=pf,
        esi=esi,
        professionalTax=professional_tax,
        incomeTax=income_tax,
        gratuity=round_currency(gratuity),
        inHandSalary=in_hand_salary,
        monthlyDeductions=monthly_deductions,
        annualDeductions=round_currency(monthly_deductions * 12),
        company=company,
        isRelocation=is_relocation,
    )


async def calculate_salary(data: SalaryInput, lookup: CityTaxLookup) -> SalaryBreakdown:
    """Resolve the city's professional tax, then compute the breakdown."""
    professional_tax = await lookup.get_professional_tax(data.city)
    return compute_breakdown(
        ctc=data.ctc,
        city=data.city,
        variable_pay=data.variablePay,
        insurance=data.insurance,
        relocation_allowance=data.relocationAllowance,
        professional_tax=professional_tax,
        company=data.company,
        is_relocation=data.isRelocation,
    )
