from rest_framework import serializers


class CashFlowEntrySerializer(serializers.Serializer):
    """Read-only view of an income or expense."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    icon = serializers.CharField()
    date = serializers.DateField()
    amount = serializers.DecimalField(max_digits=19, decimal_places=2)
    category_id = serializers.IntegerField()
    category_name = serializers.CharField(source="category.name")
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class CashFlowInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    icon = serializers.CharField(max_length=255, required=False, allow_blank=True)
    date = serializers.DateField(required=False)
    amount = serializers.DecimalField(max_digits=19, decimal_places=2)
    category_id = serializers.IntegerField()
