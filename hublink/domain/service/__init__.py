"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_linker import IdentityLinker
from .jwt_service import JWTService
from .session import SessionContext
from .user_service import UserService

__all__ = [
    "AuthService",
    "IdentityLinker",
    "JWTService",
    "OAuthClient",
    "Service",
    "SessionContext",
    "UserService",
]
