"""Cookie-backed session context and auth cookie helpers."""

import secrets
from urllib.parse import urlparse
from uuid import UUID

from fastapi import Request, Response

from hublink.config import Settings
from hublink.domain.error import NotFoundError
from hublink.domain.service import JWTService, SessionContext, UserService
from hublink.domain.value import UserId

AUTH_COOKIE = "auth_token"
STATE_COOKIE = "oauth_state"
STATE_COOKIE_PATH = "/auth/github"
STATE_MAX_AGE = 10 * 60


class CookieSessionContext(SessionContext):
    """Session state carried by the ``auth_token`` JWT cookie.

    ``issued_token`` is set when a session is established during the
    request; the route is responsible for writing it back as a cookie.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        user_service: UserService,
        token: str | None,
    ) -> None:
        self.jwt_service = jwt_service
        self.user_service = user_service
        self.token = token
        self.issued_token: str | None = None

    async def current_uid(self) -> UserId | None:
        raw_user_id = self.jwt_service.get_user_id_from_token(self.token)
        if raw_user_id is None:
            return None

        try:
            user_id = UserId(UUID(raw_user_id))
            await self.user_service.get_by_id(user_id)
        except (ValueError, NotFoundError):
            # Token for a user that no longer exists
            return None

        return user_id

    async def establish_session(self, user_id: UserId) -> None:
        user = await self.user_service.get_by_id(user_id)
        self.issued_token = self.jwt_service.create_token(str(user_id), user.username)
        self.token = self.issued_token


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session cookie to a response.

    Production serves the API and frontend from sibling subdomains, which
    needs a cross-site cookie (samesite=none, secure). Development runs
    both on localhost over plain HTTP.
    """
    is_production = settings.environment == "production"
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        domain=settings.auth.cookie_domain if is_production else None,
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    """Delete the session cookie with the same domain/path it was set with."""
    is_production = settings.environment == "production"
    response.delete_cookie(
        key=AUTH_COOKIE,
        domain=settings.auth.cookie_domain if is_production else None,
        path="/",
    )


def set_state_cookie(response: Response, state: str, settings: Settings) -> None:
    """Bind an OAuth state to the browser that started the flow.

    The callback is a top-level redirect from GitHub, so samesite=lax is
    enough for the cookie to come back with it.
    """
    response.set_cookie(
        key=STATE_COOKIE,
        value=state,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path=STATE_COOKIE_PATH,
        max_age=STATE_MAX_AGE,
    )


def clear_state_cookie(response: Response) -> None:
    """Drop the OAuth state once its callback has been handled."""
    response.delete_cookie(key=STATE_COOKIE, path=STATE_COOKIE_PATH)


def state_matches(expected: str | None, received: str) -> bool:
    """Check a callback's state against the one issued to this browser."""
    if not expected or not received:
        return False
    return secrets.compare_digest(expected.encode(), received.encode())


def is_trusted_origin(request: Request, settings: Settings) -> bool:
    """Check that a state-changing request came from our own pages.

    Uses the Origin header, falling back to the scheme and host of the
    Referer. Requests carrying neither are rejected.
    """
    source = request.headers.get("origin")
    if not source:
        referer = request.headers.get("referer")
        if not referer:
            return False
        parsed = urlparse(referer)
        source = f"{parsed.scheme}://{parsed.netloc}"

    trusted = {
        _origin_of(settings.api.frontend_url),
        _origin_of(settings.api.base_url),
    }
    return _origin_of(source) in trusted


def _origin_of(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}".lower()
