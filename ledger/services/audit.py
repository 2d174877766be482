import logging
from decimal import Decimal

from django.db.models import Sum

from ledger.models import Wallet, WalletActivity

logger = logging.getLogger(__name__)


class LedgerAuditService:
    """Cross-checks stored balances against the activity log."""

    @staticmethod
    def find_discrepancies(profile_id: int = None) -> list:
        """
        Return one dict per wallet whose balance differs from the sum of its
        activity amounts.
        """
        totals = {
            row["wallet_id"]: row["total"]
            for row in WalletActivity.objects.order_by().values("wallet_id").annotate(
                total=Sum("amount")
            )
        }
        wallets = Wallet.objects.order_by("pk")
        if profile_id is not None:
            wallets = wallets.filter(profile_id=profile_id)

        discrepancies = []
        for wallet in wallets:
            expected = totals.get(wallet.pk) or Decimal("0.00")
            if wallet.balance != expected:
                logger.error(
                    "Ledger drift: wallet=%s balance=%s activity_total=%s",
                    wallet.pk,
                    wallet.balance,
                    expected,
                )
                discrepancies.append(
                    {"wallet_id": wallet.pk, "balance": wallet.balance, "expected": expected}
                )
        return discrepancies
