"""Test doubles shared across test modules."""

from hublink.domain.service import SessionContext
from hublink.domain.value import ExternalId, ExternalIdentity, UserId


class FakeSession(SessionContext):
    """In-process SessionContext.

    ``signed_in`` is the user the request is authenticated as, and
    ``established`` records every ``establish_session`` call.
    """

    def __init__(self, signed_in: UserId | None = None) -> None:
        self.signed_in = signed_in
        self.established: list[UserId] = []

    async def current_uid(self) -> UserId | None:
        return self.signed_in

    async def establish_session(self, user_id: UserId) -> None:
        self.established.append(user_id)
        self.signed_in = user_id


def make_identity(
    external_id: str = "583231",
    username: str = "octocat",
    email: str = "octocat@example.com",
    display_name: str = "The Octocat",
    avatar_url: str = "https://avatars.githubusercontent.com/u/583231",
) -> ExternalIdentity:
    """Build a GitHub identity with overridable defaults."""
    return ExternalIdentity(
        external_id=ExternalId(external_id),
        username=username,
        email=email,
        display_name=display_name,
        avatar_url=avatar_url,
    )
