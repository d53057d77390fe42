"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from hublink.domain.service import JWTService, UserService
from hublink.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    username: str
    email: str
    email_confirmed: bool
    fullname: str | None
    picture: str | None
    external_id: str | None  # Public so profile pages can show the link
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Args:
            request: Request with JWT token

        Returns:
            User information if token is valid and user exists

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        payload = self.jwt_service.verify_token(request.token)

        user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))

        return GetCurrentUserResponse(
            user_id=str(user.id),
            username=user.username,
            email=user.email,
            email_confirmed=user.email_confirmed,
            fullname=user.fullname,
            picture=user.picture,
            external_id=user.external_id,
            created_at=user.created_at,
        )
