"""User account routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from hublink.application.usecase.account import GetAssociationsUseCase
from hublink.application.usecase.account.get_associations import (
    GetAssociationsResponse,
)
from hublink.domain.service import JWTService, UserService
from hublink.interface.api.session import CookieSessionContext

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/me/associations", response_model=GetAssociationsResponse)
async def get_my_associations(
    get_associations_use_case: FromDishka[GetAssociationsUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    auth_token: str | None = Cookie(default=None),
) -> GetAssociationsResponse:
    """List the identity providers linked to the signed-in account.

    Example:
        GET /users/me/associations
        Cookie: auth_token=...

        Response:
        {
            "associations": [
                {
                    "associated": true,
                    "provider_name": "GitHub",
                    "icon": "fa-github",
                    "action_url": "http://localhost:8000/deauth/github"
                }
            ]
        }

    Raises:
        NotAuthenticatedError: Rendered as 401 when nobody is signed in
    """
    session = CookieSessionContext(jwt_service, user_service, auth_token)
    return await get_associations_use_case.execute(session)
