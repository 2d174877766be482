from ledger.views.health import HealthView
from ledger.views.auth import ActivateView, LoginView, ProfileView, RegisterView
from ledger.views.wallet import (
    ActivateWalletView,
    ActiveWalletListView,
    ActivityListView,
    DeactivateWalletView,
    DepositView,
    TotalBalanceView,
    TransferView,
    WalletDetailView,
    WalletListCreateView,
    WithdrawView,
)
from ledger.views.category import CategoryDetailView, CategoryListCreateView
from ledger.views.cashflow import (
    ExpenseAllView,
    ExpenseDetailView,
    ExpenseListCreateView,
    IncomeAllView,
    IncomeDetailView,
    IncomeListCreateView,
)
from ledger.views.budget import BudgetDetailView, BudgetListCreateView
from ledger.views.dashboard import DashboardView, FilterView
from ledger.views.report import ReportDownloadView, ReportEmailView

__all__ = [
    "HealthView",
    "RegisterView",
    "ActivateView",
    "LoginView",
    "ProfileView",
    "WalletListCreateView",
    "ActiveWalletListView",
    "TotalBalanceView",
    "TransferView",
    "WalletDetailView",
    "DepositView",
    "WithdrawView",
    "DeactivateWalletView",
    "ActivateWalletView",
    "ActivityListView",
    "CategoryListCreateView",
    "CategoryDetailView",
    "IncomeListCreateView",
    "IncomeAllView",
    "IncomeDetailView",
    "ExpenseListCreateView",
    "ExpenseAllView",
    "ExpenseDetailView",
    "BudgetListCreateView",
    "BudgetDetailView",
    "DashboardView",
    "FilterView",
    "ReportDownloadView",
    "ReportEmailView",
]
