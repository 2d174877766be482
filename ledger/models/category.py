from django.db import models

from ledger.models.base import OwnedModel


class Category(OwnedModel):
    class Type(models.TextChoices):
        INCOME = "income", "Income"
        EXPENSE = "expense", "Expense"

    name = models.CharField(max_length=100)
    type = models.CharField(max_length=10, choices=Type.choices)
    icon = models.CharField(max_length=255, blank=True)

    class Meta(OwnedModel.Meta):
        verbose_name_plural = "categories"
        constraints = [
            models.UniqueConstraint(
                fields=["profile", "name"], name="uniq_category_name_per_profile"
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.type})"
