# Test type: Unit Test
# Validation to be executed: Validates the city tax lookup chain (store →
#   static table → default) and the city tax data management functions.
# Command: pytest test/test_unit_city_tax.py -v

"""Unit tests for salarycalc.services.city_tax_service module."""

import pytest

from conftest import FakeSession
from salarycalc.exceptions import CityTaxExistsError, CityTaxNotFoundError
from salarycalc.models.db_models import CityTaxData
from salarycalc.models.schemas import CityTaxCreate, CityTaxUpdate
from salarycalc.services.city_tax_service import (
    STATIC_PROFESSIONAL_TAX,
    CityTaxLookup,
    create_city_tax,
    delete_city_tax,
    known_cities,
    update_city_tax,
)

pytestmark = pytest.mark.anyio


def _row(city="Pune", professional_tax=175.0, **kwargs):
    return CityTaxData(
        city=city,
        state=kwargs.get("state", "Maharashtra"),
        professional_tax=professional_tax,
        hra_exemption_percent=kwargs.get("hra_exemption_percent", 40.0),
        default_tax_regime="new",
    )


class TestCityTaxLookup:
    async def test_static_table_without_session(self):
        lookup = CityTaxLookup()
        assert await lookup.get_professional_tax("Mumbai") == 200.0
        assert await lookup.get_professional_tax("Kolkata") == 110.0

    async def test_delhi_zero_is_not_defaulted(self):
        profile = await CityTaxLookup().get_profile("Delhi")
        assert profile.professional_tax == 0.0
        assert profile.source == "static"

    async def test_unknown_city_defaults_to_200(self):
        profile = await CityTaxLookup().get_profile("Nowhereville")
        assert profile.professional_tax == 200.0
        assert profile.source == "default"

    async def test_static_lookup_is_case_sensitive(self):
        profile = await CityTaxLookup().get_profile("delhi")
        assert profile.source == "default"
        assert profile.professional_tax == 200.0

    async def test_store_takes_precedence(self):
        session = FakeSession(results=[[_row("Pune", 175.0)]])
        profile = await CityTaxLookup(session).get_profile("Pune")
        assert profile.professional_tax == 175.0
        assert profile.hra_exemption_percent == 40.0
        assert profile.source == "store"

    async def test_store_miss_falls_back_to_static(self):
        session = FakeSession(results=[[]])
        assert await CityTaxLookup(session).get_professional_tax("Delhi") == 0.0
        assert len(session.statements) == 1

    async def test_store_miss_and_unknown_city(self):
        session = FakeSession()
        assert await CityTaxLookup(session).get_professional_tax("Nowhereville") == 200.0

    async def test_gross_monthly_ignored(self):
        lookup = CityTaxLookup()
        assert await lookup.get_professional_tax("Pune", 5_000) == await lookup.get_professional_tax("Pune", 500_000)

    async def test_injected_tables(self):
        lookup = CityTaxLookup(fallback={"Shillong": 208.0}, default=150.0)
        assert await lookup.get_professional_tax("Shillong") == 208.0
        assert await lookup.get_professional_tax("Mumbai") == 150.0

    async def test_static_table_size(self):
        assert len(STATIC_PROFESSIONAL_TAX) == 24
        assert all(0 <= v <= 200 for v in STATIC_PROFESSIONAL_TAX.values())


class TestCityTaxManagement:
    async def test_create_applies_defaults(self):
        session = FakeSession()
        row = await create_city_tax(
            session, CityTaxCreate(city="Kochi", state="Kerala", professionalTax=208)
        )
        assert session.added == [row]
        assert row.hra_exemption_percent == 50.0
        assert row.default_tax_regime == "new"
        assert row.additional_deductions is None

    async def test_create_keeps_deductions(self):
        session = FakeSession()
        row = await create_city_tax(
            session,
            CityTaxCreate(
                city="Kochi",
                state="Kerala",
                professionalTax=208,
                hraExemptionPercent=40,
                additionalDeductions=[{"name": "Labour welfare", "amount": 20, "type": "fixed"}],
                defaultTaxRegime="old",
            ),
        )
        assert row.hra_exemption_percent == 40
        assert row.additional_deductions == [{"name": "Labour welfare", "amount": 20.0, "type": "fixed"}]
        assert row.default_tax_regime == "old"

    async def test_create_duplicate_raises(self):
        session = FakeSession(results=[[_row("Kochi")]])
        with pytest.raises(CityTaxExistsError):
            await create_city_tax(
                session, CityTaxCreate(city="Kochi", state="Kerala", professionalTax=208)
            )
        assert session.added == []

    async def test_update_partial(self):
        existing = _row("Pune", 175.0)
        session = FakeSession(results=[[existing]])
        row = await update_city_tax(session, "Pune", CityTaxUpdate(professionalTax=200))
        assert row is existing
        assert row.professional_tax == 200
        assert row.state == "Maharashtra"

    async def test_update_missing_raises(self):
        with pytest.raises(CityTaxNotFoundError, match="Atlantis"):
            await update_city_tax(FakeSession(), "Atlantis", CityTaxUpdate(professionalTax=1))

    async def test_delete(self):
        existing = _row("Pune")
        session = FakeSession(results=[[existing]])
        assert await delete_city_tax(session, "Pune") is True
        assert session.deleted == [existing]

    async def test_delete_missing(self):
        assert await delete_city_tax(FakeSession(), "Atlantis") is False

    async def test_known_cities_merges_store(self):
        session = FakeSession(results=[[_row("Kochi"), _row("Pune")]])
        cities = await known_cities(session)
        assert "Kochi" in cities
        assert cities.count("Pune") == 1
        assert cities == sorted(cities)

    async def test_known_cities_without_store(self):
        assert await known_cities(None) == sorted(STATIC_PROFESSIONAL_TAX)
