"""Authentication routes."""

import logging
import secrets
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from hublink.adapter.error import ProviderError
from hublink.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from hublink.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from hublink.application.usecase.auth.login import LoginRequest
from hublink.config import Settings
from hublink.domain.error import (
    NotFoundError,
    RegistrationDisabledError,
    StorageError,
)
from hublink.domain.service import AuthService, JWTService, UserService
from hublink.domain.value import Resolution
from hublink.interface.api.session import (
    CookieSessionContext,
    clear_auth_cookie,
    clear_state_cookie,
    set_auth_cookie,
    set_state_cookie,
    state_matches,
)
from hublink.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return current user if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


@router.get("/github")
async def initiate_github_login(
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Start the GitHub OAuth flow.

    Also used from the profile page to link GitHub to the signed-in
    account; the callback sees the session cookie and attaches instead
    of logging in.

    The state is also set as a short-lived cookie so the callback can
    only be completed by the browser that started the flow.

    Returns:
        HTTP 302 redirect to GitHub's authorization page
    """
    state = secrets.token_urlsafe(32)
    auth_url = await auth_service.initiate_login(state)
    redirect = RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)
    set_state_cookie(redirect, state, settings)
    return redirect


@router.get("/github/callback")
async def github_callback(
    code: str,
    state: str,
    login_use_case: FromDishka[LoginUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
    oauth_state: str | None = Cookie(default=None),
) -> RedirectResponse:
    """Handle the GitHub OAuth callback.

    Resolves the GitHub identity to a local account, issues the session
    cookie and redirects to the frontend. Failures redirect to the
    frontend error page with an error code.

    Example:
        GET /auth/github/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:3000
        Sets cookie: auth_token
    """
    logger.info("GitHub callback received: state=%s", state)

    if not state_matches(oauth_state, state):
        logger.warning("OAuth state mismatch: state=%s", state)
        return _error_redirect(settings, "invalid_state", "OAuth state mismatch")

    session = CookieSessionContext(jwt_service, user_service, auth_token)

    try:
        login_response = await login_use_case.execute(
            LoginRequest(code=code, state=state), session
        )
    except RegistrationDisabledError as e:
        logger.warning("Registration disabled during GitHub callback: %s", e)
        return _error_redirect(settings, "registration_disabled", str(e))
    except ProviderError as e:
        logger.error("GitHub OAuth error during callback: %s", e)
        return _error_redirect(settings, "auth_failed", str(e))
    except StorageError as e:
        logger.error("Storage error during GitHub callback: %s", e)
        return _error_redirect(settings, "storage", str(e))
    except Exception as e:
        logger.exception("Unexpected error during GitHub callback: %s", e)
        return _error_redirect(settings, "unexpected", str(e))

    logger.info(
        "Login successful: user=%s resolution=%s",
        login_response.username,
        login_response.resolution.value,
    )

    # Linking from the profile page returns there
    if login_response.resolution == Resolution.ATTACHED:
        redirect_url = f"{settings.api.frontend_url}/me/edit"
    else:
        redirect_url = settings.api.frontend_url

    # Cookies must be set on the returned response object itself
    redirect_response = RedirectResponse(
        url=redirect_url, status_code=status.HTTP_302_FOUND
    )
    if session.issued_token:
        set_auth_cookie(redirect_response, session.issued_token, settings)
    clear_state_cookie(redirect_response)

    return redirect_response


def _error_redirect(settings: Settings, error: str, message: str) -> RedirectResponse:
    query = urlencode({"error": error, "message": message})
    redirect = RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/error?{query}",
        status_code=status.HTTP_302_FOUND,
    )
    clear_state_cookie(redirect)
    return redirect


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing authentication cookie."""
    clear_auth_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call without authentication: returns authenticated=false
    instead of an error so the frontend can check login state.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {
                "user_id": "...",
                "username": "octocat",
                "external_id": "583231",
                ...
            }
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, user=user)

    except JWTError:
        # Invalid or expired token - expected, not an error
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # JWT valid but user not found in database (orphaned token)
        return AuthStatusResponse(authenticated=False)
