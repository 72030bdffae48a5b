"""City tax profiles — professional tax and HRA exemption per city.

Lookup order for a city name (exact, case-sensitive):
    1. ``city_tax_data`` table, when a database session is available
    2. Static table of major cities (Delhi levies none)
    3. Flat default of ₹200 / month

An unknown city is never an error; it silently receives the default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salarycalc.config import settings
from salarycalc.exceptions import CityTaxExistsError, CityTaxNotFoundError
from salarycalc.models.db_models import CityTaxData
from salarycalc.models.schemas import CityTaxCreate, CityTaxUpdate

logger = logging.getLogger(__name__)

# Monthly professional tax by city
STATIC_PROFESSIONAL_TAX: Mapping[str, float] = MappingProxyType({
    "Mumbai": 200.0,
    "Pune": 200.0,
    "Delhi": 0.0,
    "Bangalore": 200.0,
    "Hyderabad": 200.0,
    "Chennai": 200.0,
    "Kolkata": 110.0,
    "Ahmedabad": 200.0,
    "Jaipur": 200.0,
    "Surat": 200.0,
    "Lucknow": 200.0,
    "Kanpur": 200.0,
    "Nagpur": 200.0,
    "Indore": 200.0,
    "Thane": 200.0,
    "Bhopal": 200.0,
    "Visakhapatnam": 200.0,
    "Patna": 200.0,
    "Vadodara": 200.0,
    "Ghaziabad": 200.0,
    "Ludhiana": 200.0,
    "Agra": 200.0,
    "Nashik": 200.0,
    "Faridabad": 200.0,
})


@dataclass(frozen=True)
class CityTaxProfile:
    city: str
    professional_tax: float
    hra_exemption_percent: float
    source: str  # "store" | "static" | "default"


class CityTaxLookup:
    """Resolve a city's tax profile through the store → static → default chain."""

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        fallback: Mapping[str, float] = STATIC_PROFESSIONAL_TAX,
        default: float = settings.DEFAULT_PROFESSIONAL_TAX,
    ) -> None:
        self._session = session
        self._fallback = fallback
        self._default = default

    async def get_profile(self, city: str) -> CityTaxProfile:
        if self._session is not None:
            row = await get_city_tax(self._session, city)
            if row is not None:
                return CityTaxProfile(
                    city=row.city,
                    professional_tax=float(row.professional_tax),
                    hra_exemption_percent=float(row.hra_exemption_percent),
                    source="store",
                )

        # ``in`` rather than truthiness: Delhi's 0 is a real amount.
        if city in self._fallback:
            return CityTaxProfile(
                city=city,
                professional_tax=float(self._fallback[city]),
                hra_exemption_percent=settings.DEFAULT_HRA_EXEMPTION_PERCENT,
                source="static",
            )

        logger.info("No tax profile for city '%s'; using default professional tax.", city)
        return CityTaxProfile(
            city=city,
            professional_tax=float(self._default),
            hra_exemption_percent=settings.DEFAULT_HRA_EXEMPTION_PERCENT,
            source="default",
        )

    async def get_professional_tax(
        self, city: str, gross_monthly: Optional[float] = None
    ) -> float:
        """Monthly professional tax for *city*.

        ``gross_monthly`` is accepted for slab-based states but the amount
        is currently flat per city, so it is ignored.
        """
        profile = await self.get_profile(city)
        return profile.professional_tax


# ── City tax data management ──────────────────────────────────────────────

async def list_city_tax(session: AsyncSession) -> List[CityTaxData]:
    result = await session.execute(select(CityTaxData).order_by(CityTaxData.city.asc()))
    return list(result.scalars().all())


async def get_city_tax(session: AsyncSession, city: str) -> Optional[CityTaxData]:
    result = await session.execute(select(CityTaxData).where(CityTaxData.city == city))
    return result.scalar_one_or_none()


async def create_city_tax(session: AsyncSession, data: CityTaxCreate) -> CityTaxData:
    if await get_city_tax(session, data.city) is not None:
        raise CityTaxExistsError(data.city)

    row = CityTaxData(
        city=data.city,
        state=data.state,
        professional_tax=data.professionalTax,
        hra_exemption_percent=(
            data.hraExemptionPercent
            if data.hraExemptionPercent is not None
            else settings.DEFAULT_HRA_EXEMPTION_PERCENT
        ),
        additional_deductions=(
            [d.model_dump() for d in data.additionalDeductions]
            if data.additionalDeductions is not None
            else None
        ),
        default_tax_regime=data.defaultTaxRegime or settings.DEFAULT_TAX_REGIME,
    )
    session.add(row)
    await session.flush()
    logger.info("Created city tax data city=%s", data.city)
    return row


_UPDATE_COLUMNS: Dict[str, str] = {
    "state": "state",
    "professionalTax": "professional_tax",
    "hraExemptionPercent": "hra_exemption_percent",
    "additionalDeductions": "additional_deductions",
    "defaultTaxRegime": "default_tax_regime",
}


async def update_city_tax(
    session: AsyncSession, city: str, data: CityTaxUpdate
) -> CityTaxData:
    row = await get_city_tax(session, city)
    if row is None:
        raise CityTaxNotFoundError(city)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(row, _UPDATE_COLUMNS[field], value)
    await session.flush()
    logger.info("Updated city tax data city=%s", city)
    return row


async def delete_city_tax(session: AsyncSession, city: str) -> bool:
    row = await get_city_tax(session, city)
    if row is None:
        return False
    await session.delete(row)
    await session.flush()
    logger.info("Deleted city tax data city=%s", city)
    return True


async def known_cities(
    session: Optional[AsyncSession],
    fallback: Mapping[str, float] = STATIC_PROFESSIONAL_TAX,
) -> List[str]:
    """Sorted union of stored and static city names."""
    names = set(fallback)
    if session is not None:
        names.update(row.city for row in await list_city_tax(session))
    return sorted(names)
