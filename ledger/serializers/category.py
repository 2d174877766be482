from rest_framework import serializers

from ledger.models import Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ("id", "name", "type", "icon", "created_at", "updated_at")
        read_only_fields = fields


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    type = serializers.CharField(max_length=10)
    icon = serializers.CharField(max_length=255, required=False, allow_blank=True)


class CategoryUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    type = serializers.CharField(max_length=10, required=False)
    icon = serializers.CharField(max_length=255, required=False, allow_blank=True)
