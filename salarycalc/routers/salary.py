"""Routers for salary endpoints:
    POST  /api/salary/calculate
    GET   /api/salary/history
"""

from __future__ import annotations
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from salarycalc.database import get_db
from salarycalc.models.schemas import SalaryBreakdown, SalaryHistoryItem, SalaryInput
from salarycalc.services.city_tax_service import CityTaxLookup
from salarycalc.services.history_service import (
    save_calculation,
    to_history_item,
    user_calculations,
)
from salarycalc.services.salary_service import calculate_salary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/salary",
    tags=["Salary"],
)

# ── 1. Calculate ──────────────────────────────────────────────────────────

@router.post(
    "/calculate",
    response_model=SalaryBreakdown,
    summary="Estimate monthly in-hand salary from CTC",
)
async def salary_calculate(
    body: SalaryInput,
    session: Optional[AsyncSession] = Depends(get_db),
    x_user_id: Optional[str] = Header(None),
) -> SalaryBreakdown:
    """Split CTC into Basic / HRA / Special Allowance, apply EPF, ESI,
    professional tax and new-regime income tax, and return the monthly
    in-hand figure.  The breakdown is stored for the requesting user when
    the database is available.
    """
    breakdown = await calculate_salary(body, CityTaxLookup(session))

    if session is not None:
        await save_calculation(session, body, breakdown, x_user_id)

    return breakdown

# ── 2. History ────────────────────────────────────────────────────────────

@router.get(
    "/history",
    response_model=List[SalaryHistoryItem],
    summary="Previous calculations of the requesting user",
)
async def salary_history(
    session: Optional[AsyncSession] = Depends(get_db),
    x_user_id: Optional[str] = Header(None),
) -> List[SalaryHistoryItem]:
    """Newest first.  Empty without a user id or without a database."""
    if session is None or not x_user_id:
        return []
    rows = await user_calculations(session, x_user_id)
    return [to_history_item(row) for row in rows]
