from rest_framework import serializers

from ledger.models import WalletActivity


class WalletActivitySerializer(serializers.ModelSerializer):
    """Read-only serializer for wallet activity rows."""

    wallet_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = WalletActivity
        fields = (
            "id",
            "wallet_id",
            "amount",
            "activity_type",
            "related_wallet_id",
            "created_at",
        )
        read_only_fields = fields
