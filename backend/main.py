"""
Paie Maroc - Main Application Entry Point

Moroccan payroll calculation API: payslips, batch runs, statutory tables.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import get_settings
from backend.middleware.audit_log import AuditLogMiddleware
from backend.routers.v1 import payroll
from engines.exceptions import ConfigurationError, ValidationError

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Initialize Sentry for error monitoring
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"paie-maroc@{settings.app_version}",
        traces_sample_rate=0.1 if settings.environment == "production" else 1.0,
        integrations=[FastApiIntegration()],
    )


app = FastAPI(
    title=settings.app_name,
    description=(
        "Moroccan payroll engine: seniority bonus, CNSS, AMO, professional "
        "expenses, IR brackets, family deductions and employer charges, "
        "returned as a fully itemized payslip."
    ),
    version=settings.app_version,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    openapi_url="/api/openapi.json" if settings.debug else None,
)

# Audit logging middleware (outermost, captures all requests)
app.add_middleware(AuditLogMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def payroll_validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Invalid employee data: list every rejected field."""
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "code": exc.code, "errors": exc.errors},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    """Malformed statutory table: a deployment bug, never a client error."""
    logger.critical(f"Statutory constants misconfigured: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Payroll constants are misconfigured", "code": exc.code},
    )


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "paie-maroc-api",
        "instance": settings.instance,
        "version": settings.app_version,
    }


# API v1 routes
app.include_router(
    payroll.router,
    prefix=f"{settings.api_v1_prefix}/payroll",
    tags=["Payroll"],
)
