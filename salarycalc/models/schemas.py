"""Pydantic request / response schemas for all API endpoints.

Field names are camelCase to match the JSON contract consumed by the
frontend:
  - SalaryInput     → validated calculation request
  - SalaryBreakdown → monthly in-hand derivation, also the persisted record
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from salarycalc.config import settings
from salarycalc.utils.helpers import sanitize_city, sanitize_company

# ── 1. Salary calculation  (/api/salary/calculate) ───────────────────────

class SalaryInput(BaseModel):
    """Validated salary calculation request."""
    ctc: float = Field(..., gt=0, le=settings.MAX_CTC, description="Annual cost to company in INR")
    city: str = Field(..., max_length=settings.MAX_CITY_LENGTH, description="City of employment")
    company: Optional[str] = Field(None, max_length=settings.MAX_COMPANY_LENGTH)
    designation: Optional[str] = Field(None, max_length=settings.MAX_COMPANY_LENGTH)
    isRelocation: bool = Field(False, description="Offer includes relocation")
    relocationAllowance: float = Field(0.0, ge=0, description="One-time relocation allowance")
    variablePay: float = Field(0.0, ge=0, description="Annual variable / bonus component")
    insurance: float = Field(0.0, ge=0, description="Annual insurance component")

    @field_validator("city", mode="before")
    @classmethod
    def _clean_city(cls, value):
        return sanitize_city(value) if isinstance(value, str) else value

    @field_validator("company", "designation", mode="before")
    @classmethod
    def _clean_company(cls, value):
        if isinstance(value, str):
            return sanitize_company(value) or None
        return value

    @model_validator(mode="after")
    def _check_components(self) -> "SalaryInput":
        if not self.city:
            raise ValueError("City is required")
        components = self.variablePay + self.insurance + self.relocationAllowance
        if components > self.ctc:
            raise ValueError(
                f"Variable pay, insurance and relocation allowance ({components}) "
                f"cannot exceed CTC ({self.ctc})"
            )
        return self

class SalaryBreakdown(BaseModel):
    """Monthly salary structure derived from CTC. All amounts in INR, 2 dp."""
    ctc: float
    fixedCtc: float = Field(..., description="CTC minus variable pay, insurance and relocation")
    variablePay: float
    insurance: float
    relocationAllowance: Optional[float] = None
    basicSalary: float = Field(..., description="Monthly basic")
    hra: float = Field(..., description="Monthly house rent allowance")
    specialAllowance: float
    pf: float = Field(..., description="Employee provident fund contribution (monthly)")
    esi: float = Field(..., description="Employee state insurance (monthly)")
    professionalTax: float
    incomeTax: float = Field(..., description="Monthly share of annual income tax")
    gratuity: Optional[float] = Field(None, description="Monthly gratuity accrual (not deducted)")
    inHandSalary: float
    monthlyDeductions: float
    annualDeductions: float
    company: Optional[str] = None
    isRelocation: Optional[bool] = None

class SalaryHistoryItem(SalaryBreakdown):
    """A persisted calculation as returned by the history endpoint."""
    id: str
    city: str
    designation: Optional[str] = None
    createdAt: Optional[datetime] = None

# ── 2. City tax data  (/api/salary/city-tax) ─────────────────────────────

class AdditionalDeduction(BaseModel):
    name: str = Field(..., min_length=1)
    amount: float
    type: Literal["fixed", "percentage"]

class CityTaxCreate(BaseModel):
    city: str = Field(..., min_length=1, max_length=settings.MAX_CITY_LENGTH)
    state: str = Field(..., min_length=1, max_length=50)
    professionalTax: float = Field(..., ge=0, description="Monthly professional tax")
    hraExemptionPercent: Optional[float] = Field(None, ge=0, le=100)
    additionalDeductions: Optional[List[AdditionalDeduction]] = None
    defaultTaxRegime: Optional[Literal["old", "new"]] = None

class CityTaxUpdate(BaseModel):
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    professionalTax: Optional[float] = Field(None, ge=0)
    hraExemptionPercent: Optional[float] = Field(None, ge=0, le=100)
    additionalDeductions: Optional[List[AdditionalDeduction]] = None
    defaultTaxRegime: Optional[Literal["old", "new"]] = None

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "CityTaxUpdate":
        # Only additionalDeductions may be cleared; the other columns are NOT NULL.
        nulled = sorted(
            name for name in self.model_fields_set
            if name != "additionalDeductions" and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self

class CityTaxOut(BaseModel):
    city: str
    state: str
    professionalTax: float
    hraExemptionPercent: float
    additionalDeductions: Optional[List[AdditionalDeduction]] = None
    defaultTaxRegime: str

class DeleteResponse(BaseModel):
    success: bool

class CitiesResponse(BaseModel):
    cities: List[str]

# ── 3. ATS check  (/api/ats/check) ───────────────────────────────────────

class AtsCheckRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Plain text extracted from the resume")
    fileSize: int = Field(0, ge=0, description="Size of the uploaded file in bytes")

class MatchScore(BaseModel):
    score: int
    match: str

class CompanyComparisons(BaseModel):
    goldmanSachs: MatchScore
    google: MatchScore

class DetailedAnalysis(BaseModel):
    keywordDensity: float = Field(..., description="Matched keywords per 1000 words")
    sectionCompleteness: int
    actionVerbUsage: int
    quantifiableResults: int
    technicalSkills: int

class AtsCheckResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    suggestions: List[str]
    strengths: List[str]
    weaknesses: List[str]
    keywordMatches: int
    totalKeywords: int
    fileSize: int
    wordCount: int
    companyComparisons: CompanyComparisons
    detailedAnalysis: DetailedAnalysis

class AtsHistoryItem(AtsCheckResponse):
    id: str
    createdAt: Optional[datetime] = None
