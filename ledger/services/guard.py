import logging

from ledger.exceptions import (
    ProfileNotFound,
    UnauthenticatedError,
    UnauthorizedError,
)
from ledger.models import Profile

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """
    Resolves the calling profile and verifies ownership of resources.

    The profile is always re-derived from the authenticated identity; no
    client-supplied profile id is ever trusted.
    """

    @staticmethod
    def resolve_profile(identity) -> Profile:
        """
        Load the profile behind an authenticated request identity.

        Raises:
            UnauthenticatedError: If no authenticated identity is attached,
                or the profile behind it is not activated.
            ProfileNotFound: If the identity no longer maps to a stored profile.
        """
        if identity is None or not getattr(identity, "is_authenticated", False):
            raise UnauthenticatedError()

        profile = Profile.objects.filter(pk=identity.pk).first()
        if profile is None:
            logger.warning("Authenticated identity %s has no profile.", identity.pk)
            raise ProfileNotFound()
        if not profile.is_active:
            raise UnauthenticatedError("Account is not active.")
        return profile

    @staticmethod
    def ensure_owner(profile: Profile, resource) -> None:
        """Raise UnauthorizedError unless ``profile`` owns ``resource``."""
        if not resource.is_owned_by(profile):
            logger.warning(
                "Ownership violation: profile=%s %s=%s",
                profile.pk,
                resource.__class__.__name__,
                resource.pk,
            )
            raise UnauthorizedError()
