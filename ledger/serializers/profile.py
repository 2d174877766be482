from rest_framework import serializers

from ledger.models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = (
            "id",
            "email",
            "full_name",
            "phone",
            "bio",
            "profile_image_url",
            "is_active",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "email", "is_active", "created_at", "updated_at")


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    profile_image_url = serializers.URLField(required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
