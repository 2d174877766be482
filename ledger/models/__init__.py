from ledger.models.base import BaseModel, OwnedModel
from ledger.models.profile import Profile
from ledger.models.wallet import Wallet
from ledger.models.activity import WalletActivity
from ledger.models.category import Category
from ledger.models.cashflow import Expense, Income
from ledger.models.budget import Budget

__all__ = [
    "BaseModel",
    "OwnedModel",
    "Profile",
    "Wallet",
    "WalletActivity",
    "Category",
    "Income",
    "Expense",
    "Budget",
]
