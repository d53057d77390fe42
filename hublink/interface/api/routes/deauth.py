"""Deauthorization routes for removing a linked identity provider."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from hublink.application.usecase.account import UnlinkUseCase
from hublink.config import Settings
from hublink.domain.error import NotAuthenticatedError
from hublink.domain.service import IdentityLinker, JWTService, UserService
from hublink.interface.api.session import CookieSessionContext, is_trusted_origin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deauth", tags=["deauth"], route_class=DishkaRoute)


class DeauthConfirmationResponse(BaseModel):
    """Data for the "disconnect GitHub?" confirmation page."""

    service: str
    icon: str
    associated: bool
    action_url: str


@router.get("/github", response_model=DeauthConfirmationResponse)
async def confirm_github_deauth(
    identity_linker: FromDishka[IdentityLinker],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    auth_token: str | None = Cookie(default=None),
) -> DeauthConfirmationResponse:
    """Describe what the deauthorization form will disconnect."""
    session = CookieSessionContext(jwt_service, user_service, auth_token)
    user_id = await session.current_uid()
    if user_id is None:
        raise NotAuthenticatedError("disconnect accounts")

    association = await identity_linker.get_association_status(user_id)
    return DeauthConfirmationResponse(
        service=association.provider_name,
        icon=association.icon,
        associated=association.associated,
        action_url=association.action_url,
    )


@router.post("/github")
async def github_deauth(
    request: Request,
    unlink_use_case: FromDishka[UnlinkUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
) -> RedirectResponse:
    """Unlink GitHub from the signed-in account and return to the profile page.

    Only accepted from our own origin, since the session cookie alone
    would let any site submit this form on the user's behalf.
    """
    if not is_trusted_origin(request, settings):
        logger.warning(
            "Rejected deauth from untrusted origin: origin=%s referer=%s",
            request.headers.get("origin"),
            request.headers.get("referer"),
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Untrusted origin"
        )

    session = CookieSessionContext(jwt_service, user_service, auth_token)
    await unlink_use_case.execute(session)
    return RedirectResponse(
        url=f"{settings.api.frontend_url}/me/edit",
        status_code=status.HTTP_302_FOUND,
    )
