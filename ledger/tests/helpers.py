from decimal import Decimal

from ledger.models import Category, Profile
from ledger.services import WalletService

PASSWORD = "correct-horse-battery"


def make_profile(email="alice@example.com", active=True, **extra):
    return Profile.objects.create_user(
        email=email, password=PASSWORD, is_active=active, **extra
    )


def make_wallet(profile, wallet_type="Cash", balance=None, **extra):
    """Create a wallet through the ledger, funding it with a deposit if asked."""
    wallet = WalletService.create_wallet(profile, wallet_type, **extra)
    if balance:
        WalletService.deposit(profile, wallet.pk, Decimal(balance))
        wallet.refresh_from_db()
    return wallet


def make_category(profile, name="Salary", category_type="income"):
    return Category.objects.create(profile=profile, name=name, type=category_type)
