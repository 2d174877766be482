from django.conf import settings

from ledger.models import Profile
from ledger.services.cashflow import ExpenseService, IncomeService
from ledger.services.wallet import WalletService


class DashboardService:
    """Read-only aggregation of a profile's finances."""

    @staticmethod
    def get_dashboard(profile: Profile) -> dict:
        limit = getattr(settings, "LEDGER_RECENT_LIMIT", 5)

        total_income = IncomeService.total(profile)
        total_expense = ExpenseService.total(profile)
        recent_incomes = list(IncomeService.latest(profile, limit))
        recent_expenses = list(ExpenseService.latest(profile, limit))

        feed = [("income", entry) for entry in recent_incomes] + [
            ("expense", entry) for entry in recent_expenses
        ]
        # Newest date first, then newest creation time.
        feed.sort(key=lambda item: (item[1].date, item[1].created_at), reverse=True)

        return {
            "total_balance": total_income - total_expense,
            "total_income": total_income,
            "total_expense": total_expense,
            "wallets": list(WalletService.list_wallets(profile, active_only=True)),
            "total_wallet_balance": WalletService.get_total_balance(profile),
            "recent_5_incomes": recent_incomes,
            "recent_5_expenses": recent_expenses,
            "recent_transactions": [
                {"type": kind, "entry": entry} for kind, entry in feed
            ],
        }
