"""Routes describing the authenticated caller."""

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter

from bastion.domain.auth.query.get_current_user import (
    GetCurrentUser,
    GetCurrentUserHandler,
    GetCurrentUserResult,
)

router = APIRouter(prefix="/auth", tags=["Authentication"], route_class=DishkaRoute)


@router.get("/me", response_model=GetCurrentUserResult)
async def get_me(handler: FromDishka[GetCurrentUserHandler]) -> GetCurrentUserResult:
    """The caller's role and effective permissions, for pre-emptively disabling UI controls."""
    return await handler.run(GetCurrentUser())
