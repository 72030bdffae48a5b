"""Persistence of salary calculations for per-user history."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salarycalc.config import settings
from salarycalc.models.db_models import SalaryCalculation
from salarycalc.models.schemas import SalaryBreakdown, SalaryHistoryItem, SalaryInput

logger = logging.getLogger(__name__)


def to_record(
    data: SalaryInput,
    breakdown: SalaryBreakdown,
    user_id: Optional[str],
) -> SalaryCalculation:
    """Map a request and its breakdown onto a ``salary_calculations`` row."""
    return SalaryCalculation(
        user_id=user_id,
        ctc=breakdown.ctc,
        city=data.city,
        company=breakdown.company,
        designation=data.designation,
        is_relocation=breakdown.isRelocation,
        relocation_allowance=breakdown.relocationAllowance,
        variable_pay=breakdown.variablePay,
        insurance=breakdown.insurance,
        fixed_ctc=breakdown.fixedCtc,
        basic_salary=breakdown.basicSalary,
        hra=breakdown.hra,
        special_allowance=breakdown.specialAllowance,
        pf=breakdown.pf,
        esi=breakdown.esi,
        professional_tax=breakdown.professionalTax,
        income_tax=breakdown.incomeTax,
        gratuity=breakdown.gratuity,
        in_hand_salary=breakdown.inHandSalary,
        monthly_deductions=breakdown.monthlyDeductions,
        annual_deductions=breakdown.annualDeductions,
    )


def to_history_item(row: SalaryCalculation) -> SalaryHistoryItem:
    return SalaryHistoryItem(
        id=row.id,
        city=row.city,
        designation=row.designation,
        createdAt=row.created_at,
        ctc=row.ctc,
        fixedCtc=row.fixed_ctc,
        variablePay=row.variable_pay or 0.0,
        insurance=row.insurance or 0.0,
        relocationAllowance=row.relocation_allowance,
        basicSalary=row.basic_salary,
        hra=row.hra,
        specialAllowance=row.special_allowance,
        pf=row.pf,
        esi=row.esi,
        professionalTax=row.professional_tax,
        incomeTax=row.income_tax,
        gratuity=row.gratuity,
        inHandSalary=row.in_hand_salary,
        monthlyDeductions=row.monthly_deductions,
        annualDeductions=row.annual_deductions,
        company=row.company,
        isRelocation=row.is_relocation,
    )


async def save_calculation(
    session: AsyncSession,
    data: SalaryInput,
    breakdown: SalaryBreakdown,
    user_id: Optional[str] = None,
) -> SalaryCalculation:
    row = to_record(data, breakdown, user_id)
    session.add(row)
    await session.flush()
    logger.info("Saved salary calculation id=%s user_id=%s", row.id, user_id)
    return row


async def user_calculations(
    session: AsyncSession,
    user_id: str,
    limit: int = settings.HISTORY_LIMIT,
) -> List[SalaryCalculation]:
    """Newest-first calculations for *user_id*."""
    result = await session.execute(
        select(SalaryCalculation)
        .where(SalaryCalculation.user_id == user_id)
        .order_by(SalaryCalculation.created_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())

