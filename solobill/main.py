"""
SoloBill Ads API - Main Application Entry Point
Billing and invoicing for digital-advertising freelancers.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from solobill.core.config import settings
from solobill.core.seed import demo_state
from solobill.core.store import store
from solobill.api.v1.router import api_router
from solobill.services.assistant import insight_feed
from solobill.services.currency import UnsupportedCurrencyError


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    print(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"📊 Environment: {settings.ENVIRONMENT}")

    if settings.SEED_DEMO_DATA:
        state = store.reset(demo_state())
        print(f"✅ Demo data loaded ({len(state.clients)} clients, {len(state.invoices)} invoices)")

    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set - assistant will return fallback text")

    yield

    # Shutdown
    print("👋 Shutting down...")
    insight_feed.reset()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## 📣 SoloBill Ads API

Billing backend for digital-advertising freelancers and small agencies.

### Features:

* **👥 Clients** - Clients with a preferred currency and negotiated exchange rate
* **🧾 Invoices** - Ad spend, service fees, 15% management margin and tax
* **💱 Currencies** - USD, THB and MMK display
* **🔁 Recurring billing** - Estimated monthly recurring revenue
* **✨ Assistant** - Drafted invoice notes and financial insights
* **📄 Export** - PDF and email

All data lives in memory and is reset on restart.
    """,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with a flat list of field messages."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": errors,
        },
    )


@app.exception_handler(UnsupportedCurrencyError)
async def currency_exception_handler(request: Request, exc: UnsupportedCurrencyError):
    """Refuse to display money in a currency without a rate."""
    logger.warning(str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get(
    "/health",
    tags=["Health"],
    summary="Server health check",
)
async def health_check():
    """Check if the API is running."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Root endpoint
@app.get(
    "/",
    tags=["Info"],
    summary="API information",
)
async def root():
    """Get API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Billing and invoicing for digital-advertising freelancers",
        "docs": "/docs" if settings.is_development else "Disabled in production",
        "health": "/health",
    }


# For running with uvicorn directly
if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "solobill.main:app",
        host=settings.HOST,
        port=port,
        reload=settings.is_development,
    )
