from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model providing common timestamp fields.

    Every mutable model in the ledger app inherits from this to keep
    created_at / updated_at tracking consistent.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


class OwnedModel(BaseModel):
    """
    Abstract base for rows that belong to exactly one Profile.

    Ownership is a plain foreign key with no reverse accessor; rows are
    always looked up by ``profile_id``.
    """

    profile = models.ForeignKey(
        "ledger.Profile",
        on_delete=models.CASCADE,
        related_name="+",
    )

    class Meta(BaseModel.Meta):
        abstract = True

    def is_owned_by(self, profile) -> bool:
        return profile is not None and self.profile_id == profile.pk
