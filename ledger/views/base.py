from rest_framework.views import APIView

from ledger.services import AuthorizationGuard


class ProfileAPIView(APIView):
    """
    APIView that resolves the calling profile before any handler runs.

    Handlers read ``self.profile`` and pass it explicitly into the
    services; nothing downstream looks up the current user on its own.
    """

    profile = None

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.profile = AuthorizationGuard.resolve_profile(request.user)

    @property
    def idempotency_key(self):
        return self.request.META.get("HTTP_IDEMPOTENCY_KEY") or None
