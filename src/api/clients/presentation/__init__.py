"""Client Management presentation layer.

Organized by aggregate (clients, groups, associations). Each package
contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from clients.presentation import associations, clients, groups

router = APIRouter()

router.include_router(clients.router)
router.include_router(groups.router)
router.include_router(associations.router)

__all__ = ["router"]
