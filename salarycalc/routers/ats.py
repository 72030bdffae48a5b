"""Routers for resume ATS checks:
    POST  /api/ats/check
    GET   /api/ats/history
"""

from __future__ import annotations
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
from salarycalc.database import get_db
from salarycalc.models.schemas import AtsCheckRequest, AtsCheckResponse, AtsHistoryItem
from salarycalc.services.ats_service import analyse_resume, save_check, user_checks

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/ats",
    tags=["ATS"],
)


@router.post(
    "/check",
    response_model=AtsCheckResponse,
    summary="Score a resume's ATS compatibility",
)
async def ats_check(
    body: AtsCheckRequest,
    session: Optional[AsyncSession] = Depends(get_db),
    x_user_id: Optional[str] = Header(None),
) -> AtsCheckResponse:
    """Keyword coverage, section detection, action verbs and quantified
    results combined into a 0–100 score with suggestions.
    """
    result = analyse_resume(body.text, file_size=body.fileSize)

    if session is not None:
        await save_check(session, result, x_user_id)

    return result


@router.get(
    "/history",
    response_model=List[AtsHistoryItem],
    summary="Previous ATS checks of the requesting user",
)
async def ats_history(
    session: Optional[AsyncSession] = Depends(get_db),
    x_user_id: Optional[str] = Header(None),
) -> List[AtsHistoryItem]:
    if session is None or not x_user_id:
        return []
    return await user_checks(session, x_user_id)
