"""Domain layer errors."""

from typing import Any

from hublink.domain.value.identifiers import UserId


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StorageError(DomainError):
    """Raised when a repository read or write fails.

    Safe to retry; carries the affected user ID when one is known.
    """

    def __init__(self, message: str, user_id: UserId | None = None):
        self.user_id = user_id
        if user_id is not None:
            message = f"{message} (user {user_id})"
        super().__init__(message)


class DuplicateError(DomainError):
    """Raised when creating a record collides with an existing unique value."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Duplicate {field}: {value}")


class RegistrationDisabledError(DomainError):
    """Raised when a new account would be created but SSO registration is off."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"Registration via {provider} is disabled. "
            f"Sign in with an existing account and link {provider} from your profile."
        )


class NotAuthenticatedError(DomainError):
    """Raised when an operation requires a signed-in user and there is none."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Sign in to {action}")
