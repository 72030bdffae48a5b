"""FastAPI application entry point.

Starts the Salary Calculator API on port 3000.

Usage:
    uvicorn salarycalc.main:app --host 0.0.0.0 --port 3000 --reload
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from salarycalc.config import settings
from salarycalc.database import close_db, init_db
from salarycalc.exceptions import SalaryCalcError
from salarycalc.routers import ats, city_tax, salary

# ── Logging ──────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan (startup + shutdown) ────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Salary Calculator API on port %s …", settings.APP_PORT)
    await init_db()
    yield
    await close_db()
    logger.info("Application shutdown complete.")


# ── Application factory ──────────────────────────────────────────────────

app = FastAPI(
    title="Salary Calculator API",
    description=(
        "In-hand salary estimation for the Indian job market.  Splits CTC "
        "into Basic, HRA and Special Allowance, applies EPF, ESI, state "
        "professional tax and new-regime income tax, and scores resumes "
        "for ATS compatibility."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request-level timing middleware ───────────────────────────────────────

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
    logger.debug("%s %s took %.2f ms", request.method, request.url.path, elapsed_ms)
    return response


# ── Exception handlers ───────────────────────────────────────────────────

@app.exception_handler(SalaryCalcError)
async def salary_calc_error_handler(request: Request, exc: SalaryCalcError):
    logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. Please check the logs."},
    )


# ── Register routers ─────────────────────────────────────────────────────
app.include_router(salary.router)
app.include_router(city_tax.router)
app.include_router(city_tax.common_router)
app.include_router(ats.router)


# ── Health check ──────────────────────────────────────────────────────────

@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy", "port": settings.APP_PORT}


# ── Dev entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "salarycalc.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
