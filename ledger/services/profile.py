import logging
import secrets
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth.models import update_last_login
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import RefreshToken

from ledger.exceptions import (
    AccountInactive,
    DuplicateEmail,
    InvalidCredentials,
    NotFoundError,
    ValidationError,
)
from ledger.models import Profile
from ledger.utils import send_email

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("full_name", "phone", "bio", "profile_image_url")


class ProfileService:
    """Registration, activation, login and self-service profile edits."""

    @staticmethod
    def activation_link(token: str) -> str:
        base_url = getattr(
            settings, "LEDGER_ACTIVATION_URL", "http://localhost:8000/api/v1.0/activate"
        )
        return f"{base_url}?{urlencode({'token': token})}"

    @staticmethod
    @transaction.atomic
    def register(email: str, password: str, **details) -> Profile:
        """
        Create an inactive profile and email its activation link.

        The email is sent after the profile row is committed; a failed
        delivery is logged and does not undo the registration.

        Raises:
            ValidationError: If email or password is missing.
            DuplicateEmail: If the email is already registered.
        """
        email = Profile.objects.normalize_email((email or "").strip())
        if not email or not password:
            raise ValidationError("Email and password are required.")
        if Profile.objects.filter(email__iexact=email).exists():
            raise DuplicateEmail()

        fields = {key: details[key] for key in EDITABLE_FIELDS if details.get(key)}
        try:
            profile = Profile.objects.create_user(
                email=email,
                password=password,
                is_active=False,
                activation_token=secrets.token_urlsafe(32),
                **fields,
            )
        except IntegrityError:
            raise DuplicateEmail()

        link = ProfileService.activation_link(profile.activation_token)
        body = (
            f"Hi {profile.full_name or profile.email},<br><br>"
            f"Click the link below to activate your Equitrack account:<br><br>"
            f"<a href='{link}'>Activate account</a>"
        )
        transaction.on_commit(
            lambda: send_email(profile.email, "Activate your Equitrack account", body)
        )

        logger.info("Profile registered: profile=%s", profile.pk)
        return profile

    @staticmethod
    @transaction.atomic
    def activate(token: str) -> Profile:
        """
        Redeem a single-use activation token.

        Raises:
            NotFoundError: If the token is unknown or was already used.
        """
        if not token:
            raise NotFoundError("Activation token not found or already used.")
        profile = Profile.objects.select_for_update().filter(activation_token=token).first()
        if profile is None:
            raise NotFoundError("Activation token not found or already used.")

        profile.is_active = True
        profile.activation_token = None
        profile.save(update_fields=["is_active", "activation_token", "updated_at"])

        logger.info("Profile activated: profile=%s", profile.pk)
        return profile

    @staticmethod
    def authenticate(email: str, password: str) -> dict:
        """
        Verify credentials and issue a JWT pair.

        Returns:
            {"profile": Profile, "access": str, "refresh": str}

        Raises:
            InvalidCredentials: Unknown email or wrong password.
            AccountInactive: Correct credentials on a profile not yet activated.
        """
        profile = Profile.objects.filter(email__iexact=(email or "").strip()).first()
        if profile is None or not profile.check_password(password or ""):
            logger.warning("Login failed: email=%s", email)
            raise InvalidCredentials()
        if not profile.is_active:
            raise AccountInactive()

        refresh = RefreshToken.for_user(profile)
        update_last_login(None, profile)

        logger.info("Login succeeded: profile=%s", profile.pk)
        return {
            "profile": profile,
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }

    @staticmethod
    def update_profile(profile: Profile, **changes) -> Profile:
        """Update the editable profile fields; everything else is ignored."""
        changed = [key for key in EDITABLE_FIELDS if key in changes]
        for key in changed:
            setattr(profile, key, changes[key] or "")
        if changed:
            profile.save(update_fields=changed + ["updated_at"])
            logger.info("Profile updated: profile=%s fields=%s", profile.pk, changed)
        return profile
