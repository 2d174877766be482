import logging

from django.db import transaction

from ledger.exceptions import CategoryNotFound, DuplicateCategory, ValidationError
from ledger.models import Category, Profile
from ledger.services.guard import AuthorizationGuard

logger = logging.getLogger(__name__)


def parse_category_type(value) -> str:
    category_type = (value or "").strip().lower()
    if category_type not in Category.Type.values:
        raise ValidationError("Category type must be 'income' or 'expense'.")
    return category_type


class CategoryService:
    @staticmethod
    @transaction.atomic
    def create(profile: Profile, name: str, category_type: str, icon: str = "") -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required.")
        category_type = parse_category_type(category_type)
        if Category.objects.filter(profile_id=profile.pk, name=name).exists():
            raise DuplicateCategory(f"Category '{name}' already exists.")

        category = Category.objects.create(
            profile_id=profile.pk, name=name, type=category_type, icon=icon or ""
        )
        logger.info("Category created: category=%s profile=%s", category.pk, profile.pk)
        return category

    @staticmethod
    def list(profile: Profile, category_type: str = None):
        categories = Category.objects.filter(profile_id=profile.pk)
        if category_type:
            categories = categories.filter(type=parse_category_type(category_type))
        return categories

    @staticmethod
    def get_category(profile: Profile, category_id: int) -> Category:
        category = Category.objects.filter(pk=category_id).first()
        if category is None:
            raise CategoryNotFound()
        AuthorizationGuard.ensure_owner(profile, category)
        return category

    @staticmethod
    @transaction.atomic
    def update(profile: Profile, category_id: int, **changes) -> Category:
        category = CategoryService.get_category(profile, category_id)

        if changes.get("name") is not None:
            name = changes["name"].strip()
            if not name:
                raise ValidationError("Category name cannot be blank.")
            taken = (
                Category.objects.filter(profile_id=profile.pk, name=name)
                .exclude(pk=category.pk)
                .exists()
            )
            if taken:
                raise DuplicateCategory(f"Category '{name}' already exists.")
            category.name = name
        if changes.get("type") is not None:
            category.type = parse_category_type(changes["type"])
        if changes.get("icon") is not None:
            category.icon = changes["icon"]

        category.save()
        logger.info("Category updated: category=%s", category.pk)
        return category
