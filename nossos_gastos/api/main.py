"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from nossos_gastos.api.middleware import RequestIDMiddleware, MetricsMiddleware
from nossos_gastos.api.v1 import (
    cards,
    categories,
    installments,
    investments,
    invoices,
    recurring,
    summary,
    transactions,
)
from nossos_gastos.infrastructure.observability.logging import setup_logging
from nossos_gastos.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Nossos Gastos",
        description="Shared expenses, card statements, installment plans and investments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(cards.router, prefix="/v1", tags=["cards"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(invoices.router, prefix="/v1", tags=["invoices"])
    app.include_router(summary.router, prefix="/v1", tags=["summary"])
    app.include_router(recurring.router, prefix="/v1", tags=["salaries", "recurring"])
    app.include_router(investments.router, prefix="/v1", tags=["investments"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])

    return app


app = create_app()
