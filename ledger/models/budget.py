from django.db import models

from ledger.models.base import OwnedModel
from ledger.models.category import Category


class Budget(OwnedModel):
    """Spending limit for one category over a weekly or monthly period."""

    class Period(models.TextChoices):
        MONTHLY = "MONTHLY", "Monthly"
        WEEKLY = "WEEKLY", "Weekly"

    category = models.ForeignKey(
        Category,
        on_delete=models.CASCADE,
        related_name="+",
    )
    limit_amount = models.DecimalField(max_digits=19, decimal_places=2)
    period = models.CharField(max_length=10, choices=Period.choices)
    description = models.CharField(max_length=255, blank=True)

    class Meta(OwnedModel.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["profile", "category"], name="uniq_budget_per_category"
            ),
        ]

    def __str__(self):
        return f"Budget {self.id} {self.period} limit={self.limit_amount}"
