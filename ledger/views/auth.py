import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ledger.serializers import LoginSerializer, ProfileSerializer, RegisterSerializer
from ledger.services import ProfileService
from ledger.views.base import ProfileAPIView

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    POST /register — Create an inactive profile and send its activation link.

    Request body: {"email", "password", "full_name"?, "phone"?, "profile_image_url"?}
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = ProfileService.register(**serializer.validated_data)
        return Response(ProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


class ActivateView(APIView):
    """GET /activate?token=<token> — Redeem an activation token."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, request, *args, **kwargs):
        ProfileService.activate(request.query_params.get("token"))
        return Response({"message": "Profile activated successfully."})


class LoginView(APIView):
    """POST /login — Exchange email and password for a JWT pair."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = ProfileService.authenticate(**serializer.validated_data)
        return Response(
            {
                "token": result["access"],
                "refresh": result["refresh"],
                "user": ProfileSerializer(result["profile"]).data,
            }
        )


class ProfileView(ProfileAPIView):
    """GET / PUT /profile — Read or edit the caller's own profile."""

    def get(self, request, *args, **kwargs):
        return Response(ProfileSerializer(self.profile).data)

    def put(self, request, *args, **kwargs):
        serializer = ProfileSerializer(self.profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = ProfileService.update_profile(self.profile, **serializer.validated_data)
        return Response(ProfileSerializer(profile).data)
