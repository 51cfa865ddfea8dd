"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from tradesman_finance.api.middleware import MetricsMiddleware, RequestIDMiddleware
from tradesman_finance.api.v1 import calculators, quotes, sessions
from tradesman_finance.config import settings
from tradesman_finance.infrastructure.database.session import init_db
from tradesman_finance.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Tradesman Finance Engine",
        description="Loan, affordability, equipment, vehicle and invoice finance calculators",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    init_db()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(calculators.router, prefix="/v1", tags=["calculators"])
    app.include_router(sessions.router, prefix="/v1", tags=["sessions"])
    app.include_router(quotes.router, prefix="/v1", tags=["quotes"])

    return app


app = create_app()
