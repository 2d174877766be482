from rest_framework.response import Response

from ledger.serializers import CashFlowEntrySerializer, FilterSerializer, WalletSerializer
from ledger.services import DashboardService, filter_transactions
from ledger.views.base import ProfileAPIView


class DashboardView(ProfileAPIView):
    """GET /dashboard/ — Totals, active wallets and the recent activity feed."""

    def get(self, request, *args, **kwargs):
        data = DashboardService.get_dashboard(self.profile)
        return Response(
            {
                "total_balance": str(data["total_balance"]),
                "total_income": str(data["total_income"]),
                "total_expense": str(data["total_expense"]),
                "wallets": WalletSerializer(data["wallets"], many=True).data,
                "total_wallet_balance": str(data["total_wallet_balance"]),
                "recent_5_incomes": CashFlowEntrySerializer(
                    data["recent_5_incomes"], many=True
                ).data,
                "recent_5_expenses": CashFlowEntrySerializer(
                    data["recent_5_expenses"], many=True
                ).data,
                "recent_transactions": [
                    {"type": item["type"], **CashFlowEntrySerializer(item["entry"]).data}
                    for item in data["recent_transactions"]
                ],
            }
        )


class FilterView(ProfileAPIView):
    """
    POST /filter/ — Filter incomes or expenses.

    Request body: {"type", "start_date"?, "end_date"?, "keyword"?,
    "sort_field"?, "sort_order"?}
    """

    def post(self, request, *args, **kwargs):
        serializer = FilterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        criteria = serializer.validated_data
        entries = filter_transactions(
            self.profile,
            criteria.get("type"),
            start_date=criteria.get("start_date"),
            end_date=criteria.get("end_date"),
            keyword=criteria.get("keyword"),
            sort_field=criteria.get("sort_field"),
            sort_order=criteria.get("sort_order"),
        )
        return Response(CashFlowEntrySerializer(entries, many=True).data)
