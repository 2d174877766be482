from rest_framework import serializers

from ledger.models import Budget


class BudgetSerializer(serializers.ModelSerializer):
    category_id = serializers.IntegerField(read_only=True)
    category_name = serializers.CharField(source="category.name", read_only=True)

    class Meta:
        model = Budget
        fields = (
            "id",
            "category_id",
            "category_name",
            "limit_amount",
            "period",
            "description",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class BudgetInputSerializer(serializers.Serializer):
    category_id = serializers.IntegerField()
    limit_amount = serializers.DecimalField(max_digits=19, decimal_places=2)
    period = serializers.CharField(max_length=10)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)


class BudgetUpdateSerializer(serializers.Serializer):
    category_id = serializers.IntegerField(required=False)
    limit_amount = serializers.DecimalField(max_digits=19, decimal_places=2, required=False)
    period = serializers.CharField(max_length=10, required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
