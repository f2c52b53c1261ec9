"""
FastAPI application for the Payment Resolution QC Service.

Provides REST API endpoints for:
- Health check
- Rule listing
- Cross-document validation of invoice, purchase order and receipt
"""

import json
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .boundary import DocumentSchemaError, parse_documents
from .config import logger, API_HOST, API_PORT
from .schemas import ApiResponse
from .validator import validate_and_package


# ============================================================================
# FastAPI App Configuration
# ============================================================================

app = FastAPI(
    title="Payment Resolution QC API",
    description="""
    Payment Resolution Quality Control API.

    Cross-checks the data extracted from an invoice, its purchase order and
    the receipt acknowledgment, and returns an APPROVED or FLAGGED verdict
    with an itemized list of discrepancies.

    ## Features

    - **Validate**: Submit the three extracted documents for cross-validation
    - **Rules**: Inspect the rules applied and the checks they decide
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ApiResponse(success=False, error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns the service status and version information.
    """
    from . import __version__
    return HealthResponse(status="ok", version=__version__)


@app.post(
    "/validate",
    tags=["Validation"],
    summary="Cross-validate invoice, purchase order and receipt",
)
async def validate_documents_endpoint(request: Request) -> JSONResponse:
    """
    Validate the three extracted documents for one payment.

    The body must be a JSON object with `invoice`, `purchase_order` and
    `receipt`. Fields may be blank; the response then reports them as
    discrepancies. Structurally invalid bodies are rejected with 400.

    **Checks Applied:**
    - Supplier tax ID matches across the three documents
    - Invoice total does not exceed the purchase order total
    - Invoice total equals the received amount
    - Required fields present and receipt declared conforming
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error_response(
            400,
            "Request body is not valid JSON. Send an object with invoice, purchase_order and receipt.",
        )

    try:
        documents = parse_documents(payload)
    except DocumentSchemaError as e:
        return _error_response(
            400,
            "Request body does not match the expected document set schema.",
            "; ".join(e.issues),
        )

    logger.info("Running cross-document validation")
    package = validate_and_package(documents)
    logger.info(
        f"Result: {package.validation.verdict.value} "
        f"({len(package.validation.discrepancies)} discrepancies)"
    )

    body = ApiResponse(success=True, data=package.model_dump(mode="json"))
    return JSONResponse(status_code=200, content=body.model_dump(mode="json"))


@app.get("/rules", tags=["System"])
async def list_rules():
    """
    List all validation rules applied by the service.

    Returns each rule in execution order with its description and the
    checklist entries it decides.
    """
    from .rules import VALIDATION_RULES

    return {
        "total_rules": len(VALIDATION_RULES),
        "rules": [
            {
                "name": rule.name,
                "description": rule.description,
                "checks": [check.value for check in rule.checks],
            }
            for rule in VALIDATION_RULES
        ],
    }


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return _error_response(500, "Internal error during cross-document validation.", str(exc))


# ============================================================================
# Startup/Shutdown Events
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Log startup information."""
    logger.info(f"Payment Resolution QC API starting on {API_HOST}:{API_PORT}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Payment Resolution QC API shutting down")


# ============================================================================
# Main Entry Point
# ============================================================================

def run_server():
    """Run the API server using uvicorn."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    run_server()
