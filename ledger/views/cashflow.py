from rest_framework import status
from rest_framework.response import Response

from ledger.serializers import CashFlowEntrySerializer, CashFlowInputSerializer
from ledger.services import ExpenseService, IncomeService
from ledger.views.base import ProfileAPIView


class CashFlowListCreateView(ProfileAPIView):
    """
    GET  /incomes/ or /expenses/ — Entries for the current month.
    POST /incomes/ or /expenses/ — Add an entry.

    Request body: {"name", "amount", "category_id", "date"?, "icon"?}
    """

    service = None

    def get(self, request, *args, **kwargs):
        entries = self.service.current_month(self.profile)
        return Response(CashFlowEntrySerializer(entries, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = CashFlowInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = self.service.add(self.profile, **serializer.validated_data)
        return Response(
            CashFlowEntrySerializer(entry).data, status=status.HTTP_201_CREATED
        )


class CashFlowAllView(ProfileAPIView):
    """GET /incomes/all/ or /expenses/all/ — Every entry, newest first."""

    service = None

    def get(self, request, *args, **kwargs):
        entries = self.service.all(self.profile)
        return Response(CashFlowEntrySerializer(entries, many=True).data)


class CashFlowDetailView(ProfileAPIView):
    """DELETE /incomes/<id>/ or /expenses/<id>/"""

    service = None

    def delete(self, request, entry_id, *args, **kwargs):
        self.service.delete(self.profile, entry_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class IncomeListCreateView(CashFlowListCreateView):
    service = IncomeService


class IncomeAllView(CashFlowAllView):
    service = IncomeService


class IncomeDetailView(CashFlowDetailView):
    service = IncomeService


class ExpenseListCreateView(CashFlowListCreateView):
    service = ExpenseService


class ExpenseAllView(CashFlowAllView):
    service = ExpenseService


class ExpenseDetailView(CashFlowDetailView):
    service = ExpenseService
