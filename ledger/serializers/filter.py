from rest_framework import serializers


class FilterSerializer(serializers.Serializer):
    """Filter criteria for income/expense queries; every field is optional."""

    type = serializers.CharField(required=False, allow_blank=True, default="")
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    keyword = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    sort_field = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    sort_order = serializers.CharField(required=False, allow_blank=True, allow_null=True)
