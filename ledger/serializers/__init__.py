from ledger.serializers.wallet import (
    WalletCreateSerializer,
    WalletSerializer,
    WalletUpdateSerializer,
)
from ledger.serializers.amount import AmountSerializer, TransferSerializer
from ledger.serializers.activity import WalletActivitySerializer
from ledger.serializers.profile import (
    LoginSerializer,
    ProfileSerializer,
    RegisterSerializer,
)
from ledger.serializers.category import (
    CategoryInputSerializer,
    CategorySerializer,
    CategoryUpdateSerializer,
)
from ledger.serializers.cashflow import CashFlowEntrySerializer, CashFlowInputSerializer
from ledger.serializers.budget import (
    BudgetInputSerializer,
    BudgetSerializer,
    BudgetUpdateSerializer,
)
from ledger.serializers.filter import FilterSerializer

__all__ = [
    "WalletSerializer",
    "WalletCreateSerializer",
    "WalletUpdateSerializer",
    "AmountSerializer",
    "TransferSerializer",
    "WalletActivitySerializer",
    "ProfileSerializer",
    "RegisterSerializer",
    "LoginSerializer",
    "CategorySerializer",
    "CategoryInputSerializer",
    "CategoryUpdateSerializer",
    "CashFlowEntrySerializer",
    "CashFlowInputSerializer",
    "BudgetSerializer",
    "BudgetInputSerializer",
    "BudgetUpdateSerializer",
    "FilterSerializer",
]
