"""SQLAlchemy ORM models for PostgreSQL persistence."""

from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import JSON, Boolean, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _uuid() -> str:
    return str(uuid.uuid4())


def _money(nullable: bool = False, default: float | None = None):
    return mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=nullable, default=default
    )


class Base(DeclarativeBase):
    pass

class SalaryCalculation(Base):
    """One salary breakdown, stored verbatim for the requesting user."""

    __tablename__ = "salary_calculations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    # Input context
    ctc: Mapped[float] = _money()
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    designation: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_relocation: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    relocation_allowance: Mapped[float | None] = _money(nullable=True, default=0)
    variable_pay: Mapped[float | None] = _money(nullable=True, default=0)
    insurance: Mapped[float | None] = _money(nullable=True, default=0)

    # Calculated values
    fixed_ctc: Mapped[float] = _money()
    basic_salary: Mapped[float] = _money()
    hra: Mapped[float] = _money()
    special_allowance: Mapped[float] = _money()
    pf: Mapped[float] = _money()
    esi: Mapped[float] = _money()
    professional_tax: Mapped[float] = _money()
    income_tax: Mapped[float] = _money()
    gratuity: Mapped[float | None] = _money(nullable=True)
    in_hand_salary: Mapped[float] = _money()
    monthly_deductions: Mapped[float] = _money()
    annual_deductions: Mapped[float] = _money()

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class CityTaxData(Base):
    """Per-city professional tax and HRA exemption profile."""

    __tablename__ = "city_tax_data"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    city: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    professional_tax: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False, default=200
    )
    hra_exemption_percent: Mapped[float] = mapped_column(
        Numeric(5, 2, asdecimal=False), nullable=False, default=50
    )
    additional_deductions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    default_tax_regime: Mapped[str] = mapped_column(String(10), nullable=False, default="new")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class AtsCheck(Base):
    """Stored result of a resume ATS compatibility check."""

    __tablename__ = "ats_checks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    keyword_matches: Mapped[int] = mapped_column(Integer, nullable=False)
    total_keywords: Mapped[int] = mapped_column(Integer, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    suggestions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    strengths: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    weaknesses: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    company_comparisons: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    detailed_analysis: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
