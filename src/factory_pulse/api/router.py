"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from factory_pulse.api.routes import health, projects, supplier_quotes, workflow

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(projects.router)
api_router.include_router(supplier_quotes.router)
api_router.include_router(workflow.router)
