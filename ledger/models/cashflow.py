from decimal import Decimal

from django.db import models
from django.utils import timezone

from ledger.models.base import OwnedModel
from ledger.models.category import Category


class CashFlowEntry(OwnedModel):
    """Shared shape of incomes and expenses."""

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="+",
    )
    name = models.CharField(max_length=255)
    icon = models.CharField(max_length=255, blank=True)
    date = models.DateField(default=timezone.localdate)
    amount = models.DecimalField(
        max_digits=19, decimal_places=2, default=Decimal("0.00")
    )

    class Meta(OwnedModel.Meta):
        abstract = True
        ordering = ["-date", "-created_at"]

    def __str__(self):
        return f"{self.name} {self.amount} on {self.date}"


class Income(CashFlowEntry):
    class Meta(CashFlowEntry.Meta):
        indexes = [
            models.Index(fields=["profile", "date"], name="idx_income_profile_date"),
        ]


class Expense(CashFlowEntry):
    class Meta(CashFlowEntry.Meta):
        indexes = [
            models.Index(fields=["profile", "date"], name="idx_expense_profile_date"),
        ]
