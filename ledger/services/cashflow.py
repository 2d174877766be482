import datetime
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Q, Sum
from django.utils import timezone

from ledger.exceptions import EntryNotFound, ValidationError
from ledger.models import Category, Expense, Income, Profile
from ledger.services.category import CategoryService
from ledger.services.guard import AuthorizationGuard
from ledger.services.wallet import parse_amount

logger = logging.getLogger(__name__)

SORT_FIELDS = ("date", "amount", "name", "created_at")


class CashFlowService:
    """
    Shared operations for incomes and expenses.

    Subclasses bind ``model`` and the category type entries must carry.
    """

    model = None
    category_type = None

    @classmethod
    def _entries(cls, profile: Profile):
        return cls.model.objects.filter(profile_id=profile.pk).select_related("category")

    @classmethod
    @transaction.atomic
    def add(cls, profile: Profile, category_id: int, name: str, amount, date=None, icon=""):
        """
        Record a new entry under one of the caller's categories.

        Raises:
            InvalidAmount: If the amount is not a positive two-place number.
            CategoryNotFound / UnauthorizedError: For a missing or foreign category.
            ValidationError: For a blank name or a category of the wrong type.
        """
        amount = parse_amount(amount)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required.")

        category = CategoryService.get_category(profile, category_id)
        if category.type != cls.category_type:
            raise ValidationError(f"Category must be of type '{cls.category_type}'.")

        entry = cls.model.objects.create(
            profile_id=profile.pk,
            category=category,
            name=name,
            icon=icon or "",
            amount=amount,
            date=date or timezone.localdate(),
        )
        logger.info(
            "%s added: id=%s profile=%s amount=%s",
            cls.model.__name__,
            entry.pk,
            profile.pk,
            amount,
        )
        return entry

    @classmethod
    def current_month(cls, profile: Profile):
        today = timezone.localdate()
        return cls._entries(profile).filter(
            date__gte=today.replace(day=1), date__lte=today
        )

    @classmethod
    def all(cls, profile: Profile):
        return cls._entries(profile)

    @classmethod
    def latest(cls, profile: Profile, limit: int = 5):
        return cls._entries(profile).order_by("-date", "-created_at")[:limit]

    @classmethod
    def total(cls, profile: Profile) -> Decimal:
        total = cls.model.objects.filter(profile_id=profile.pk).aggregate(
            total=Sum("amount")
        )["total"]
        return total or Decimal("0.00")

    @classmethod
    def on_date(cls, profile: Profile, date: datetime.date):
        return cls._entries(profile).filter(date=date)

    @classmethod
    def filter(
        cls,
        profile: Profile,
        start_date=None,
        end_date=None,
        keyword="",
        sort_field="date",
        sort_order="asc",
    ):
        """Entries between two dates whose name contains ``keyword``."""
        sort_field = sort_field or "date"
        if sort_field not in SORT_FIELDS:
            raise ValidationError(
                f"Sort field must be one of: {', '.join(SORT_FIELDS)}."
            )
        prefix = "-" if (sort_order or "").lower() == "desc" else ""

        entries = cls._entries(profile).filter(
            date__lte=end_date or timezone.localdate()
        )
        if start_date:
            entries = entries.filter(date__gte=start_date)
        if keyword:
            entries = entries.filter(Q(name__icontains=keyword))
        return entries.order_by(f"{prefix}{sort_field}", f"{prefix}id")

    @classmethod
    @transaction.atomic
    def delete(cls, profile: Profile, entry_id: int) -> None:
        entry = cls.model.objects.filter(pk=entry_id).first()
        if entry is None:
            raise EntryNotFound(f"{cls.model.__name__} not found.")
        AuthorizationGuard.ensure_owner(profile, entry)
        entry.delete()
        logger.info("%s deleted: id=%s profile=%s", cls.model.__name__, entry_id, profile.pk)


class IncomeService(CashFlowService):
    model = Income
    category_type = Category.Type.INCOME


class ExpenseService(CashFlowService):
    model = Expense
    category_type = Category.Type.EXPENSE
