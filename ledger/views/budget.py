from rest_framework import status
from rest_framework.response import Response

from ledger.serializers import (
    BudgetInputSerializer,
    BudgetSerializer,
    BudgetUpdateSerializer,
)
from ledger.services import BudgetService
from ledger.views.base import ProfileAPIView


class BudgetListCreateView(ProfileAPIView):
    """
    GET  /budgets/ — List budgets (``?period=MONTHLY|WEEKLY``).
    POST /budgets/ — Body: {"category_id", "limit_amount", "period", "description"?}
    """

    def get(self, request, *args, **kwargs):
        budgets = BudgetService.list(self.profile, request.query_params.get("period"))
        return Response(BudgetSerializer(budgets, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = BudgetInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        budget = BudgetService.create(self.profile, **serializer.validated_data)
        return Response(BudgetSerializer(budget).data, status=status.HTTP_201_CREATED)


class BudgetDetailView(ProfileAPIView):
    """GET / PUT / DELETE /budgets/<id>/"""

    def get(self, request, budget_id, *args, **kwargs):
        return Response(BudgetSerializer(BudgetService.get(self.profile, budget_id)).data)

    def put(self, request, budget_id, *args, **kwargs):
        serializer = BudgetUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        budget = BudgetService.update(self.profile, budget_id, **serializer.validated_data)
        return Response(BudgetSerializer(budget).data)

    def delete(self, request, budget_id, *args, **kwargs):
        BudgetService.delete(self.profile, budget_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
