import logging

from django.utils import timezone

from ledger.exceptions import ValidationError
from ledger.models import Profile
from ledger.services.cashflow import ExpenseService, IncomeService
from ledger.services.wallet import WalletService
from ledger.utils import XLSX_CONTENT_TYPE, render_ledger_as_spreadsheet, send_email

logger = logging.getLogger(__name__)

DATE_FORMAT = "%b %d, %Y"

REPORT_KINDS = ("income", "expense", "activity")


def _cash_flow_rows(entries):
    return [
        (
            entry.name,
            entry.amount,
            entry.date.strftime(DATE_FORMAT),
            entry.category.name if entry.category_id else "Uncategorized",
        )
        for entry in entries
    ]


def _activity_rows(activities):
    return [
        (
            activity.wallet_id,
            activity.activity_type,
            activity.amount,
            activity.related_wallet_id or "",
            timezone.localtime(activity.created_at).strftime(DATE_FORMAT),
        )
        for activity in activities
    ]


class ReportService:
    """Spreadsheet exports of a profile's ledger, for download or email."""

    @staticmethod
    def build_workbook(profile: Profile, kind: str) -> tuple:
        """
        Returns:
            (filename, xlsx bytes) for ``kind`` in income, expense or activity.

        Raises:
            ValidationError: For an unknown report kind.
        """
        if kind == "income":
            content = render_ledger_as_spreadsheet(
                _cash_flow_rows(IncomeService.all(profile)),
                title="Income Details",
                headers=("Name", "Amount", "Date", "Category"),
                total_column=1,
            )
        elif kind == "expense":
            content = render_ledger_as_spreadsheet(
                _cash_flow_rows(ExpenseService.all(profile)),
                title="Expense Details",
                headers=("Name", "Amount", "Date", "Category"),
                header_color="FFC7CE",
                total_column=1,
            )
        elif kind == "activity":
            content = render_ledger_as_spreadsheet(
                _activity_rows(WalletService.list_activities(profile)),
                title="Wallet Activity",
                headers=("Wallet", "Type", "Amount", "Related wallet", "Date"),
                header_color="BDD7EE",
            )
        else:
            raise ValidationError(
                f"Report must be one of: {', '.join(REPORT_KINDS)}."
            )

        logger.info("Report built: kind=%s profile=%s bytes=%d", kind, profile.pk, len(content))
        return f"{kind}_details.xlsx", content

    @staticmethod
    def email_report(profile: Profile, kind: str) -> bool:
        """Email the ``kind`` workbook to the profile's own address."""
        filename, content = ReportService.build_workbook(profile, kind)
        return send_email(
            profile.email,
            f"Your {kind} report",
            f"Hi {profile.full_name or profile.email},<br><br>"
            f"Please find your {kind} report attached.<br><br>"
            "Best regards,<br>Equitrack Team",
            attachments=[(filename, content, XLSX_CONTENT_TYPE)],
        )
