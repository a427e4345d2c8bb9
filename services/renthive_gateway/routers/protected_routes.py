"""Routes behind the Supabase auth gate."""

from __future__ import annotations

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from renthive_service_libs.auth import Identity

router = APIRouter(route_class=DishkaRoute)


@router.get("/protected")
async def protected(identity: FromDishka[Identity]) -> dict[str, Any]:
    return {
        "success": True,
        "message": "This is a protected route",
        "data": {"user": identity.public_profile()},
    }


@router.get("/protected/profile")
async def protected_profile(identity: FromDishka[Identity]) -> dict[str, Any]:
    return {
        "success": True,
        "message": "Profile data retrieved successfully",
        "data": {"user": identity.public_profile()},
    }
