import logging

from rest_framework import status
from rest_framework.response import Response

from ledger.exceptions import ValidationError
from ledger.serializers import (
    AmountSerializer,
    TransferSerializer,
    WalletActivitySerializer,
    WalletCreateSerializer,
    WalletSerializer,
    WalletUpdateSerializer,
)
from ledger.services import WalletService
from ledger.views.base import ProfileAPIView

logger = logging.getLogger(__name__)

TRUTHY = ("1", "true", "yes")


class WalletListCreateView(ProfileAPIView):
    """
    GET  /wallets/ — List the caller's wallets (``?active=true`` for active only).
    POST /wallets/ — Create a wallet. Request body: {"wallet_type", "currency"?}
    """

    def get(self, request, *args, **kwargs):
        active_only = request.query_params.get("active", "").lower() in TRUTHY
        wallets = WalletService.list_wallets(self.profile, active_only=active_only)
        return Response(WalletSerializer(wallets, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = WalletCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        wallet = WalletService.create_wallet(
            self.profile,
            wallet_type=serializer.validated_data["wallet_type"],
            currency=serializer.validated_data.get("currency"),
        )
        return Response(WalletSerializer(wallet).data, status=status.HTTP_201_CREATED)


class ActiveWalletListView(ProfileAPIView):
    """GET /wallets/active/ — List the caller's active wallets."""

    def get(self, request, *args, **kwargs):
        wallets = WalletService.list_wallets(self.profile, active_only=True)
        return Response(WalletSerializer(wallets, many=True).data)


class TotalBalanceView(ProfileAPIView):
    """GET /wallets/total-balance/ — Sum of the caller's active wallet balances."""

    def get(self, request, *args, **kwargs):
        total = WalletService.get_total_balance(self.profile)
        return Response({"total_balance": str(total)})


class WalletDetailView(ProfileAPIView):
    """
    GET    /wallets/<id>/ — Retrieve a wallet.
    PUT    /wallets/<id>/ — Partial update. Request body: {"wallet_type"?, "currency"?}
    DELETE /wallets/<id>/ — Delete the wallet and its activity log.
    """

    def get(self, request, wallet_id, *args, **kwargs):
        wallet = WalletService.get_wallet(self.profile, wallet_id)
        return Response(WalletSerializer(wallet).data)

    def put(self, request, wallet_id, *args, **kwargs):
        serializer = WalletUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        wallet = WalletService.update_wallet(
            self.profile, wallet_id, **serializer.validated_data
        )
        return Response(WalletSerializer(wallet).data)

    def delete(self, request, wallet_id, *args, **kwargs):
        WalletService.delete_wallet(self.profile, wallet_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class DepositView(ProfileAPIView):
    """
    POST /wallets/<id>/deposit — Deposit into a wallet.

    Request body: {"amount": "<decimal>"}. An ``Idempotency-Key`` header makes
    resubmission safe.
    """

    def post(self, request, wallet_id, *args, **kwargs):
        serializer = AmountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        activity = WalletService.deposit(
            self.profile,
            wallet_id,
            serializer.validated_data["amount"],
            idempotency_key=self.idempotency_key,
        )
        return Response(
            {
                "wallet": WalletSerializer(activity.wallet).data,
                "activity": WalletActivitySerializer(activity).data,
            },
            status=status.HTTP_200_OK,
        )


class WithdrawView(ProfileAPIView):
    """POST /wallets/<id>/withdraw — Withdraw from a wallet. Body: {"amount"}"""

    def post(self, request, wallet_id, *args, **kwargs):
        serializer = AmountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        activity = WalletService.withdraw(
            self.profile,
            wallet_id,
            serializer.validated_data["amount"],
            idempotency_key=self.idempotency_key,
        )
        return Response(
            {
                "wallet": WalletSerializer(activity.wallet).data,
                "activity": WalletActivitySerializer(activity).data,
            },
            status=status.HTTP_200_OK,
        )


class TransferView(ProfileAPIView):
    """
    POST /wallets/transfer/ — Move money between two of the caller's wallets.

    Request body: {"from_wallet_id", "to_wallet_id", "amount"}
    """

    def post(self, request, *args, **kwargs):
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        source, destination = WalletService.transfer(
            self.profile,
            serializer.validated_data["from_wallet_id"],
            serializer.validated_data["to_wallet_id"],
            serializer.validated_data["amount"],
            idempotency_key=self.idempotency_key,
        )
        return Response(
            {
                "from_wallet": WalletSerializer(source).data,
                "to_wallet": WalletSerializer(destination).data,
            },
            status=status.HTTP_200_OK,
        )


class DeactivateWalletView(ProfileAPIView):
    """PATCH /wallets/<id>/deactivate"""

    def patch(self, request, wallet_id, *args, **kwargs):
        wallet = WalletService.deactivate_wallet(self.profile, wallet_id)
        return Response(WalletSerializer(wallet).data)


class ActivateWalletView(ProfileAPIView):
    """PATCH /wallets/<id>/activate"""

    def patch(self, request, wallet_id, *args, **kwargs):
        wallet = WalletService.activate_wallet(self.profile, wallet_id)
        return Response(WalletSerializer(wallet).data)


class ActivityListView(ProfileAPIView):
    """
    GET /transactions/ — The caller's wallet activity, newest first.

    Query params:
        - wallet: Restrict to one wallet id
        - type: Filter by activity type (DEPOSIT, WITHDRAW, TRANSFER_OUT, TRANSFER_IN)
    """

    def get(self, request, *args, **kwargs):
        wallet_id = request.query_params.get("wallet")
        if wallet_id and not wallet_id.isdigit():
            raise ValidationError("Wallet must be a numeric id.")
        activities = WalletService.list_activities(
            self.profile, int(wallet_id) if wallet_id else None
        )

        activity_type = request.query_params.get("type")
        if activity_type:
            activities = activities.filter(activity_type=activity_type.upper())

        return Response(WalletActivitySerializer(activities, many=True).data)
