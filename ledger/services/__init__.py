from ledger.services.guard import AuthorizationGuard
from ledger.services.wallet import WalletService, parse_amount
from ledger.services.audit import LedgerAuditService
from ledger.services.profile import ProfileService
from ledger.services.category import CategoryService
from ledger.services.cashflow import CashFlowService, ExpenseService, IncomeService
from ledger.services.budget import BudgetService
from ledger.services.dashboard import DashboardService
from ledger.services.filter import filter_transactions
from ledger.services.report import ReportService

__all__ = [
    "AuthorizationGuard",
    "WalletService",
    "parse_amount",
    "LedgerAuditService",
    "ProfileService",
    "CategoryService",
    "CashFlowService",
    "IncomeService",
    "ExpenseService",
    "BudgetService",
    "DashboardService",
    "filter_transactions",
    "ReportService",
]
