# Test type: Integration Test
# Validation to be executed: End-to-end business logic integration — combines
#   request validation, the city tax lookup chain and the salary breakdown to
#   verify the worked ₹12 L Delhi example and lookup-driven professional tax.
# Command: pytest test/test_integration_pipeline.py -v

"""Integration tests that exercise the full salary pipeline without HTTP."""

import pytest

from conftest import FakeSession
from salarycalc.models.db_models import CityTaxData
from salarycalc.models.schemas import SalaryInput
from salarycalc.services.city_tax_service import CityTaxLookup
from salarycalc.services.salary_service import calculate_salary

pytestmark = pytest.mark.anyio


class TestWorkedExample:
    """Reproduce the ₹12 L Delhi walk-through programmatically."""

    @pytest.fixture
    def breakdown_args(self):
        return SalaryInput(ctc=1_200_000, city="Delhi")

    async def test_full_breakdown(self, breakdown_args):
        b = await calculate_salary(breakdown_args, CityTaxLookup())

        assert b.ctc == 1_200_000
        assert b.fixedCtc == 1_200_000
        assert b.basicSalary == 50_000.00
        assert b.hra == 40_000.00
        assert b.specialAllowance == 10_000.00
        assert b.pf == 6_000.00
        assert b.esi == 0.0
        assert b.professionalTax == 0.0        # Delhi levies none
        assert b.incomeTax == 2_316.67         # 27,800 / 12
        assert b.monthlyDeductions == 8_316.67
        assert b.inHandSalary == 91_683.33
        assert b.annualDeductions == pytest.approx(8_316.67 * 12)

    async def test_gratuity_reported(self, breakdown_args):
        b = await calculate_salary(breakdown_args, CityTaxLookup())
        # 6,00,000 × 15/26 × 5 / 12
        assert b.gratuity == pytest.approx(144_230.77, abs=0.01)


class TestLookupDrivesProfessionalTax:
    async def test_unknown_city_pays_default(self):
        b = await calculate_salary(SalaryInput(ctc=900_000, city="Nowhereville"), CityTaxLookup())
        assert b.professionalTax == 200.0

    async def test_kolkata_static_amount(self):
        b = await calculate_salary(SalaryInput(ctc=900_000, city="Kolkata"), CityTaxLookup())
        assert b.professionalTax == 110.0

    async def test_stored_profile_overrides_static(self):
        row = CityTaxData(
            city="Pune", state="Maharashtra", professional_tax=175.0,
            hra_exemption_percent=40.0, default_tax_regime="new",
        )
        session = FakeSession(results=[[row]])
        b = await calculate_salary(SalaryInput(ctc=900_000, city="Pune"), CityTaxLookup(session))
        assert b.professionalTax == 175.0

    async def test_professional_tax_reduces_in_hand(self):
        delhi = await calculate_salary(SalaryInput(ctc=900_000, city="Delhi"), CityTaxLookup())
        mumbai = await calculate_salary(SalaryInput(ctc=900_000, city="Mumbai"), CityTaxLookup())
        # Both metros: identical structure and HRA exemption, only PT differs.
        assert mumbai.professionalTax - delhi.professionalTax == 200.0
        assert mumbai.inHandSalary < delhi.inHandSalary
