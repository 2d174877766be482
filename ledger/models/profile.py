from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models

from ledger.models.base import BaseModel


class ProfileManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required.")
        profile = self.model(email=self.normalize_email(email), **extra_fields)
        profile.set_password(password)
        profile.save(using=self._db)
        return profile

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(email, password, **extra_fields)


class Profile(AbstractBaseUser, BaseModel):
    """
    Identity root for all owned data.

    Profiles are created inactive and become active once their single-use
    activation token is redeemed.
    """

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    bio = models.CharField(max_length=500, blank=True)
    profile_image_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=False)
    activation_token = models.CharField(
        max_length=64, unique=True, null=True, blank=True, editable=False
    )
    is_staff = models.BooleanField(default=False)
    is_superuser = models.BooleanField(default=False)

    objects = ProfileManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    def __str__(self):
        return self.email

    def has_perm(self, perm, obj=None):
        return self.is_active and self.is_superuser

    def has_module_perms(self, app_label):
        return self.is_active and self.is_superuser
