from django.http import HttpResponse
from rest_framework import status
from rest_framework.response import Response

from ledger.services import ReportService
from ledger.utils import XLSX_CONTENT_TYPE
from ledger.views.base import ProfileAPIView


class ReportDownloadView(ProfileAPIView):
    """GET /excel/download/<kind> — Download an .xlsx report (income, expense, activity)."""

    def get(self, request, kind, *args, **kwargs):
        filename, content = ReportService.build_workbook(self.profile, kind)
        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response


class ReportEmailView(ProfileAPIView):
    """GET /email/<kind>-excel — Email an .xlsx report to the caller."""

    def get(self, request, kind, *args, **kwargs):
        sent = ReportService.email_report(self.profile, kind)
        if not sent:
            return Response(
                {"message": "Report could not be emailed. Please try again later."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response({"message": f"The {kind} report was sent to {self.profile.email}."})
