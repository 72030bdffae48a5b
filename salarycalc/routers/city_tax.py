"""Routers for city tax data:
    GET     /api/salary/city-tax
    GET     /api/salary/city-tax/{city}
    POST    /api/salary/city-tax
    PUT     /api/salary/city-tax/{city}
    DELETE  /api/salary/city-tax/{city}
    GET     /api/common/cities
"""

from __future__ import annotations
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from salarycalc.database import get_db
from salarycalc.exceptions import CityTaxNotFoundError, PersistenceUnavailableError
from salarycalc.models.db_models import CityTaxData
from salarycalc.models.schemas import (
    CitiesResponse,
    CityTaxCreate,
    CityTaxOut,
    CityTaxUpdate,
    DeleteResponse,
)
from salarycalc.services.city_tax_service import (
    create_city_tax,
    delete_city_tax,
    get_city_tax,
    known_cities,
    list_city_tax,
    update_city_tax,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/salary/city-tax",
    tags=["City Tax"],
)

common_router = APIRouter(
    prefix="/api/common",
    tags=["Common"],
)


def _to_out(row: CityTaxData) -> CityTaxOut:
    return CityTaxOut(
        city=row.city,
        state=row.state,
        professionalTax=row.professional_tax,
        hraExemptionPercent=row.hra_exemption_percent,
        additionalDeductions=row.additional_deductions,
        defaultTaxRegime=row.default_tax_regime,
    )


def _require(session: Optional[AsyncSession]) -> AsyncSession:
    if session is None:
        raise PersistenceUnavailableError()
    return session


@router.get("", response_model=List[CityTaxOut], summary="All stored city tax profiles")
async def city_tax_list(session: Optional[AsyncSession] = Depends(get_db)) -> List[CityTaxOut]:
    if session is None:
        return []
    return [_to_out(row) for row in await list_city_tax(session)]


@router.get("/{city}", response_model=CityTaxOut, summary="One stored city tax profile")
async def city_tax_get(
    city: str,
    session: Optional[AsyncSession] = Depends(get_db),
) -> CityTaxOut:
    row = await get_city_tax(_require(session), city)
    if row is None:
        raise CityTaxNotFoundError(city)
    return _to_out(row)


@router.post("", response_model=CityTaxOut, status_code=201, summary="Add a city tax profile")
async def city_tax_create(
    body: CityTaxCreate,
    session: Optional[AsyncSession] = Depends(get_db),
) -> CityTaxOut:
    return _to_out(await create_city_tax(_require(session), body))


@router.put("/{city}", response_model=CityTaxOut, summary="Update a city tax profile")
async def city_tax_update(
    city: str,
    body: CityTaxUpdate,
    session: Optional[AsyncSession] = Depends(get_db),
) -> CityTaxOut:
    return _to_out(await update_city_tax(_require(session), city, body))


@router.delete("/{city}", response_model=DeleteResponse, summary="Remove a city tax profile")
async def city_tax_delete(
    city: str,
    session: Optional[AsyncSession] = Depends(get_db),
) -> DeleteResponse:
    return DeleteResponse(success=await delete_city_tax(_require(session), city))


@common_router.get("/cities", response_model=CitiesResponse, summary="Cities known to the calculator")
async def common_cities(session: Optional[AsyncSession] = Depends(get_db)) -> CitiesResponse:
    return CitiesResponse(cities=await known_cities(session))
