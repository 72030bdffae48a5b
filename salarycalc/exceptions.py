"""Domain errors raised by the service layer.

Each error carries the HTTP status the API answers with; the handler in
``salarycalc.main`` turns them into ``{"detail": ...}`` responses.
"""

from __future__ import annotations


class SalaryCalcError(RuntimeError):
    def __init__(self, message: str, *, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class CityTaxNotFoundError(SalaryCalcError):
    def __init__(self, city: str):
        super().__init__(f"City tax data for {city} not found", status_code=404)
        self.city = city


class CityTaxExistsError(SalaryCalcError):
    def __init__(self, city: str):
        super().__init__(f"City tax data for {city} already exists", status_code=409)
        self.city = city


class PersistenceUnavailableError(SalaryCalcError):
    def __init__(self, message: str = "Database unavailable — city tax data is read-only"):
        super().__init__(message, status_code=503)
