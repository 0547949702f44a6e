"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.accounts import router as accounts_router
from api.routers.patients import router as patients_router

__all__ = ["health_router", "accounts_router", "patients_router"]
