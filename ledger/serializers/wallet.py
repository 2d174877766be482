from rest_framework import serializers

from ledger.models import Wallet


class WalletSerializer(serializers.ModelSerializer):
    state = serializers.CharField(read_only=True)

    class Meta:
        model = Wallet
        fields = (
            "id",
            "wallet_type",
            "balance",
            "currency",
            "is_active",
            "state",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class WalletCreateSerializer(serializers.Serializer):
    """Validates wallet creation requests."""

    wallet_type = serializers.CharField(max_length=50)
    currency = serializers.CharField(max_length=50, required=False, allow_blank=True)


class WalletUpdateSerializer(serializers.Serializer):
    """Partial wallet update; omitted fields are left untouched."""

    wallet_type = serializers.CharField(max_length=50, required=False)
    currency = serializers.CharField(max_length=50, required=False)
