from django.db import models

from ledger.models.wallet import Wallet


class WalletActivity(models.Model):
    """
    Immutable record of one balance change on a wallet.

    Amounts are signed: inflows positive, outflows negative. Transfer legs
    point at each other through ``related_wallet_id``. Rows are only ever
    removed by WalletService.delete_wallet, which clears them before the
    wallet itself; the RESTRICT foreign key refuses any other path.
    """

    class ActivityType(models.TextChoices):
        DEPOSIT = "DEPOSIT", "Deposit"
        WITHDRAW = "WITHDRAW", "Withdraw"
        TRANSFER_OUT = "TRANSFER_OUT", "Transfer out"
        TRANSFER_IN = "TRANSFER_IN", "Transfer in"

    wallet = models.ForeignKey(
        Wallet,
        on_delete=models.RESTRICT,
        related_name="+",
    )
    profile = models.ForeignKey(
        "ledger.Profile",
        on_delete=models.CASCADE,
        related_name="+",
    )
    amount = models.DecimalField(max_digits=19, decimal_places=2)
    activity_type = models.CharField(max_length=12, choices=ActivityType.choices)
    related_wallet_id = models.BigIntegerField(null=True, blank=True)
    idempotency_key = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        editable=False,
        help_text="Client-supplied key for safe resubmission.",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "wallet activities"
        indexes = [
            models.Index(fields=["wallet", "created_at"], name="idx_activity_wallet"),
            models.Index(fields=["profile", "created_at"], name="idx_activity_profile"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["profile", "idempotency_key"],
                name="uniq_activity_idempotency_per_profile",
            ),
        ]

    def __str__(self):
        return f"Activity {self.id} | {self.activity_type} | {self.amount}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Wallet activity is append-only.")
        super().save(*args, **kwargs)

    def is_owned_by(self, profile) -> bool:
        return profile is not None and self.profile_id == profile.pk
