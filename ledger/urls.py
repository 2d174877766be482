from django.urls import path

from ledger.views import (
    ActivateView,
    ActivateWalletView,
    ActiveWalletListView,
    ActivityListView,
    BudgetDetailView,
    BudgetListCreateView,
    CategoryDetailView,
    CategoryListCreateView,
    DashboardView,
    DeactivateWalletView,
    DepositView,
    ExpenseAllView,
    ExpenseDetailView,
    ExpenseListCreateView,
    FilterView,
    HealthView,
    IncomeAllView,
    IncomeDetailView,
    IncomeListCreateView,
    LoginView,
    ProfileView,
    RegisterView,
    ReportDownloadView,
    ReportEmailView,
    TotalBalanceView,
    TransferView,
    WalletDetailView,
    WalletListCreateView,
    WithdrawView,
)

urlpatterns = [
    path("status/", HealthView.as_view(), name="status"),
    path("health/", HealthView.as_view(), name="health"),
    # Accounts
    path("register", RegisterView.as_view(), name="register"),
    path("activate", ActivateView.as_view(), name="activate"),
    path("login", LoginView.as_view(), name="login"),
    path("profile", ProfileView.as_view(), name="profile"),
    # Wallets
    path("wallets/", WalletListCreateView.as_view(), name="wallet-list"),
    path("wallets/active/", ActiveWalletListView.as_view(), name="wallet-active"),
    path(
        "wallets/total-balance/",
        TotalBalanceView.as_view(),
        name="wallet-total-balance",
    ),
    path("wallets/transfer/", TransferView.as_view(), name="wallet-transfer"),
    path("wallets/<int:wallet_id>/", WalletDetailView.as_view(), name="wallet-detail"),
    path(
        "wallets/<int:wallet_id>/deposit",
        DepositView.as_view(),
        name="wallet-deposit",
    ),
    path(
        "wallets/<int:wallet_id>/withdraw",
        WithdrawView.as_view(),
        name="wallet-withdraw",
    ),
    path(
        "wallets/<int:wallet_id>/deactivate",
        DeactivateWalletView.as_view(),
        name="wallet-deactivate",
    ),
    path(
        "wallets/<int:wallet_id>/activate",
        ActivateWalletView.as_view(),
        name="wallet-activate",
    ),
    path("transactions/", ActivityListView.as_view(), name="activity-list"),
    # Categories, incomes, expenses, budgets
    path("categories/", CategoryListCreateView.as_view(), name="category-list"),
    path(
        "categories/<int:category_id>/",
        CategoryDetailView.as_view(),
        name="category-detail",
    ),
    path("incomes/", IncomeListCreateView.as_view(), name="income-list"),
    path("incomes/all/", IncomeAllView.as_view(), name="income-all"),
    path("incomes/<int:entry_id>/", IncomeDetailView.as_view(), name="income-detail"),
    path("expenses/", ExpenseListCreateView.as_view(), name="expense-list"),
    path("expenses/all/", ExpenseAllView.as_view(), name="expense-all"),
    path(
        "expenses/<int:entry_id>/",
        ExpenseDetailView.as_view(),
        name="expense-detail",
    ),
    path("budgets/", BudgetListCreateView.as_view(), name="budget-list"),
    path("budgets/<int:budget_id>/", BudgetDetailView.as_view(), name="budget-detail"),
    # Aggregates and reports
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
    path("filter/", FilterView.as_view(), name="filter"),
    path(
        "excel/download/<str:kind>",
        ReportDownloadView.as_view(),
        name="report-download",
    ),
    path("email/<str:kind>-excel", ReportEmailView.as_view(), name="report-email"),
]
