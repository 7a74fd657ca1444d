"""API v1 routes."""

from fastapi import APIRouter

from mcprovider.api.v1 import health, resources

router = APIRouter()

# Health checks (no prefix)
router.include_router(health.router, tags=["health"])

# Resource lifecycle
router.include_router(resources.router, prefix="/resources", tags=["resources"])
