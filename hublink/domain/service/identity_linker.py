"""Identity linking domain service.

Decides which local account an external identity belongs to and keeps
the identity index and the user's external_id field in step.

Resolution order (first match wins):
1. A user is already signed in: link the identity to that user.
2. The external ID is already in the index: log that user in.
3. A user owns the (possibly synthesised) email: merge into that account.
4. Otherwise provision a new account, unless SSO registration is disabled.
"""

import logfire

from hublink.domain.error import RegistrationDisabledError, StorageError
from hublink.domain.repository import (
    AdminSettingsRepository,
    IdentityIndexRepository,
    PendingValidationRepository,
)
from hublink.domain.value import (
    AssociationInfo,
    ExternalIdentity,
    LocalAccountRef,
    ProviderDescriptor,
    Resolution,
    UserField,
    UserId,
)

from .base import Service
from .session import SessionContext
from .user_service import UserService


class IdentityLinker(Service):
    """Links provider identities to local accounts."""

    def __init__(
        self,
        user_service: UserService,
        identity_index_repository: IdentityIndexRepository,
        pending_validation_repository: PendingValidationRepository,
        admin_settings_repository: AdminSettingsRepository,
        provider: ProviderDescriptor,
        noreply_domain: str,
        base_url: str,
    ) -> None:
        """Initialize identity linker.

        Args:
            user_service: User domain service
            identity_index_repository: External ID to user ID index
            pending_validation_repository: Pending validation registry
            admin_settings_repository: Admin toggles (registration gate)
            provider: Display metadata of the identity provider
            noreply_domain: Domain for placeholder emails
            base_url: Public base URL used to build action links
        """
        self.user_service = user_service
        self.identity_index_repository = identity_index_repository
        self.pending_validation_repository = pending_validation_repository
        self.admin_settings_repository = admin_settings_repository
        self.provider = provider
        self.noreply_domain = noreply_domain
        self.base_url = base_url

    def placeholder_email(self, username: str) -> str:
        """Build the non-routable email used when the provider shares none."""
        return f"{username}@{self.noreply_domain}"

    async def resolve_login(
        self, identity: ExternalIdentity, session: SessionContext
    ) -> LocalAccountRef:
        """Resolve an external identity to a local account.

        Args:
            identity: Verified identity from the provider
            session: Authentication state of the current request

        Returns:
            The local account and how it was resolved

        Raises:
            RegistrationDisabledError: If a new account is needed but SSO
                registration is switched off
            DuplicateError: If a concurrent login created the same account
            StorageError: If any repository call fails
        """
        with logfire.span(
            "identity_linker.resolve_login",
            provider=self.provider.slug,
            external_id=identity.external_id,
            username=identity.username,
        ):
            session_uid = await session.current_uid()
            if session_uid is not None:
                await self._attach(session_uid, identity)
                return self._resolved(session_uid, Resolution.ATTACHED, identity)

            user_id = await self.identity_index_repository.get(identity.external_id)
            if user_id is not None:
                return self._resolved(user_id, Resolution.EXISTING, identity)

            email = identity.email or self.placeholder_email(identity.username)

            user_id = await self.user_service.get_uid_by_email(email)
            if user_id is not None:
                await self._link(user_id, identity)
                return self._resolved(user_id, Resolution.MERGED, identity)

            if await self.admin_settings_repository.is_registration_disabled():
                logfire.warn(
                    "Registration rejected - SSO registration disabled",
                    provider=self.provider.slug,
                    external_id=identity.external_id,
                    email=email,
                )
                raise RegistrationDisabledError(self.provider.name)

            user_id = await self.user_service.create_user(identity.username, email)
            await self._link(user_id, identity)
            return self._resolved(user_id, Resolution.CREATED, identity)

    async def get_association_status(self, user_id: UserId) -> AssociationInfo:
        """Report whether a local account is linked to the provider.

        Args:
            user_id: Local user ID

        Returns:
            Association info with the matching action URL

        Raises:
            NotFoundError: If the user does not exist
            StorageError: If the lookup fails
        """
        with logfire.span(
            "identity_linker.get_association_status", user_id=str(user_id)
        ):
            external_id = await self.user_service.get_field(
                user_id, UserField.EXTERNAL_ID
            )
            if external_id:
                action_url = f"{self.base_url}/deauth/{self.provider.slug}"
            else:
                action_url = f"{self.base_url}/auth/{self.provider.slug}"

            return AssociationInfo(
                associated=bool(external_id),
                provider_name=self.provider.name,
                icon=self.provider.icon,
                action_url=action_url,
            )

    async def unlink(self, user_id: UserId) -> None:
        """Remove the provider link from a user. Unlinked users are a no-op.

        The index entry is removed before the user field; a failure between
        the two is not rolled back and a retry finishes the job.

        Args:
            user_id: Local user ID

        Raises:
            StorageError: If either removal fails, with user_id attached
        """
        with logfire.span("identity_linker.unlink", user_id=str(user_id)):
            try:
                external_id = await self.user_service.get_field(
                    user_id, UserField.EXTERNAL_ID
                )
                if not external_id:
                    logfire.info("No linked identity to remove", user_id=str(user_id))
                    return

                await self.identity_index_repository.delete(external_id)
                await self.user_service.set_field(
                    user_id, UserField.EXTERNAL_ID, None
                )
            except StorageError as e:
                logfire.error(
                    "Could not remove external identity",
                    provider=self.provider.slug,
                    user_id=str(user_id),
                    error=str(e),
                )
                raise StorageError(
                    f"Could not remove {self.provider.name} link", user_id=user_id
                ) from e

            logfire.info(
                "External identity removed",
                provider=self.provider.slug,
                user_id=str(user_id),
                external_id=external_id,
            )

    async def _attach(self, user_id: UserId, identity: ExternalIdentity) -> None:
        """Link to the signed-in user, taking the ID over from any other owner."""
        owner = await self.identity_index_repository.get(identity.external_id)
        if owner is not None and owner != user_id:
            logfire.warn(
                "External identity moved to signed-in user",
                external_id=identity.external_id,
                previous_user_id=str(owner),
                user_id=str(user_id),
            )
            await self.user_service.set_field(owner, UserField.EXTERNAL_ID, None)
        await self._link(user_id, identity)

    async def _link(self, user_id: UserId, identity: ExternalIdentity) -> None:
        """Write the user field and index entry; enrich on a fresh link."""
        previous = await self.user_service.get_field(user_id, UserField.EXTERNAL_ID)

        await self.user_service.set_field(
            user_id, UserField.EXTERNAL_ID, identity.external_id
        )
        await self.identity_index_repository.set(identity.external_id, user_id)

        if previous == identity.external_id:
            return

        if previous:
            # One forward link per user
            await self.identity_index_repository.delete(previous)

        await self._enrich(user_id, identity)

    async def _enrich(self, user_id: UserId, identity: ExternalIdentity) -> None:
        """Apply first-login profile data without overwriting the user's own."""
        # The provider has verified the address
        await self.user_service.set_field(user_id, UserField.EMAIL_CONFIRMED, True)
        await self.pending_validation_repository.clear_confirmation(user_id)
        await self.pending_validation_repository.remove(user_id)

        info = await self.user_service.get_fields(
            user_id, [UserField.PICTURE, UserField.FULLNAME]
        )

        if not info[UserField.PICTURE] and identity.avatar_url:
            await self.user_service.set_field(
                user_id, UserField.UPLOADED_PICTURE, identity.avatar_url
            )
            await self.user_service.set_field(
                user_id, UserField.PICTURE, identity.avatar_url
            )

        if not info[UserField.FULLNAME] and identity.display_name:
            await self.user_service.set_field(
                user_id, UserField.FULLNAME, identity.display_name
            )

    def _resolved(
        self, user_id: UserId, resolution: Resolution, identity: ExternalIdentity
    ) -> LocalAccountRef:
        logfire.info(
            "Login resolved",
            provider=self.provider.slug,
            external_id=identity.external_id,
            user_id=str(user_id),
            resolution=resolution.value,
        )
        return LocalAccountRef(user_id=user_id, resolution=resolution)
