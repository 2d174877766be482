import logging

from django.db import transaction

from ledger.exceptions import BudgetNotFound, DuplicateBudget, ValidationError
from ledger.models import Budget, Profile
from ledger.services.category import CategoryService
from ledger.services.guard import AuthorizationGuard
from ledger.services.wallet import parse_amount

logger = logging.getLogger(__name__)


def parse_period(value) -> str:
    period = (value or "").strip().upper()
    if period not in Budget.Period.values:
        raise ValidationError("Period must be 'MONTHLY' or 'WEEKLY'.")
    return period


class BudgetService:
    @staticmethod
    @transaction.atomic
    def create(
        profile: Profile, category_id: int, limit_amount, period: str, description: str = ""
    ) -> Budget:
        """
        Create a budget for one of the caller's categories.

        Raises:
            ValidationError: For a bad period.
            InvalidAmount: For a non-positive limit.
            CategoryNotFound / UnauthorizedError: For a missing or foreign category.
            DuplicateBudget: If the category already has a budget.
        """
        period = parse_period(period)
        limit_amount = parse_amount(limit_amount, label="Limit amount")
        category = CategoryService.get_category(profile, category_id)

        if Budget.objects.filter(profile_id=profile.pk, category_id=category.pk).exists():
            raise DuplicateBudget(f"A budget already exists for category '{category.name}'.")

        budget = Budget.objects.create(
            profile_id=profile.pk,
            category=category,
            limit_amount=limit_amount,
            period=period,
            description=description or "",
        )
        logger.info(
            "Budget created: budget=%s profile=%s category=%s limit=%s period=%s",
            budget.pk,
            profile.pk,
            category.pk,
            limit_amount,
            period,
        )
        return budget

    @staticmethod
    def list(profile: Profile, period: str = None):
        budgets = Budget.objects.filter(profile_id=profile.pk).select_related("category")
        if period:
            budgets = budgets.filter(period=parse_period(period))
        return budgets

    @staticmethod
    def get(profile: Profile, budget_id: int) -> Budget:
        budget = Budget.objects.select_related("category").filter(pk=budget_id).first()
        if budget is None:
            raise BudgetNotFound()
        AuthorizationGuard.ensure_owner(profile, budget)
        return budget

    @staticmethod
    @transaction.atomic
    def update(profile: Profile, budget_id: int, **changes) -> Budget:
        """Partial update; every supplied value is validated, none is dropped."""
        budget = BudgetService.get(profile, budget_id)

        if changes.get("category_id") is not None:
            category = CategoryService.get_category(profile, changes["category_id"])
            taken = (
                Budget.objects.filter(profile_id=profile.pk, category_id=category.pk)
                .exclude(pk=budget.pk)
                .exists()
            )
            if taken:
                raise DuplicateBudget(
                    f"A budget already exists for category '{category.name}'."
                )
            budget.category = category
        if changes.get("limit_amount") is not None:
            budget.limit_amount = parse_amount(changes["limit_amount"], label="Limit amount")
        if changes.get("period") is not None:
            budget.period = parse_period(changes["period"])
        if changes.get("description") is not None:
            budget.description = changes["description"]

        budget.save()
        logger.info("Budget updated: budget=%s", budget.pk)
        return budget

    @staticmethod
    @transaction.atomic
    def delete(profile: Profile, budget_id: int) -> None:
        budget = BudgetService.get(profile, budget_id)
        budget.delete()
        logger.info("Budget deleted: budget=%s profile=%s", budget_id, profile.pk)
