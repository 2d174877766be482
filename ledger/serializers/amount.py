from rest_framework import serializers


class AmountSerializer(serializers.Serializer):
    """
    Parses deposit and withdrawal requests.

    Only the format is checked here; positivity is enforced by the ledger.
    """

    amount = serializers.DecimalField(max_digits=19, decimal_places=2)


class TransferSerializer(AmountSerializer):
    from_wallet_id = serializers.IntegerField()
    to_wallet_id = serializers.IntegerField()
