from decimal import Decimal

from django.conf import settings
from django.db import models

from ledger.models.base import OwnedModel


def default_currency():
    return getattr(settings, "LEDGER_DEFAULT_CURRENCY", "PHP")


class Wallet(OwnedModel):
    """
    A named balance container owned by one profile.

    Balance is a fixed-point decimal that may never go negative; the check
    constraint backs up the service layer, which serializes writers with
    select_for_update() and applies changes through F() expressions.
    """

    class State(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        INACTIVE = "INACTIVE", "Inactive"

    balance = models.DecimalField(
        max_digits=19, decimal_places=2, default=Decimal("0.00")
    )
    currency = models.CharField(max_length=50, default=default_currency)
    wallet_type = models.CharField(max_length=50)
    is_active = models.BooleanField(default=True)

    class Meta(OwnedModel.Meta):
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name="wallet_balance_non_negative",
            ),
            models.UniqueConstraint(
                fields=["profile", "wallet_type"],
                name="uniq_wallet_type_per_profile",
            ),
        ]
        indexes = [
            models.Index(fields=["profile", "is_active"], name="idx_wallet_profile_active"),
        ]

    def __str__(self):
        return f"Wallet {self.id} {self.wallet_type} ({self.balance} {self.currency})"

    @property
    def state(self):
        return self.State.ACTIVE if self.is_active else self.State.INACTIVE
