from django.contrib import admin

from ledger.models import Budget, Category, Expense, Income, Profile, Wallet, WalletActivity


class ReadOnlyAdminMixin:
    """
    Makes an admin model browsable but not editable.

    Balances and activity rows only change through WalletService.
    """

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "full_name", "is_active", "is_staff", "created_at")
    list_filter = ("is_active", "is_staff")
    search_fields = ("email", "full_name")
    readonly_fields = ("password", "activation_token", "last_login", "created_at", "updated_at")


@admin.register(Wallet)
class WalletAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("id", "profile", "wallet_type", "balance", "currency", "is_active", "created_at")
    list_filter = ("is_active", "currency")
    search_fields = ("profile__email", "wallet_type")


@admin.register(WalletActivity)
class WalletActivityAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "id",
        "wallet",
        "profile",
        "activity_type",
        "amount",
        "related_wallet_id",
        "created_at",
    )
    list_filter = ("activity_type",)
    search_fields = ("profile__email",)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "profile", "name", "type", "created_at")
    list_filter = ("type",)


@admin.register(Income, Expense)
class CashFlowEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "profile", "name", "amount", "date", "category")
    date_hierarchy = "date"


@admin.register(Budget)
class BudgetAdmin(admin.ModelAdmin):
    list_display = ("id", "profile", "category", "limit_amount", "period")
    list_filter = ("period",)
