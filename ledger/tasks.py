import logging

from celery import shared_task
from django.conf import settings
from django.utils import timezone
from django.utils.html import format_html, format_html_join

from ledger.models import Profile
from ledger.services import ExpenseService
from ledger.utils import send_email

logger = logging.getLogger(__name__)

CELL = "border:1px solid #ddd;padding:8px;"


@shared_task(bind=True, acks_late=True, max_retries=3, default_retry_delay=30)
def deliver_email(self, to: str, subject: str, body: str):
    """
    Deliver one email.

    send_email never raises, so a failed delivery is retried here with
    exponential backoff until max_retries is reached.
    """
    if send_email(to, subject, body):
        return {"to": to, "status": "SENT"}

    if self.request.retries >= self.max_retries:
        logger.error("Giving up on email to %s after %d retries.", to, self.request.retries)
        return {"to": to, "status": "FAILED"}
    raise self.retry(countdown=2**self.request.retries * 10)


@shared_task
def send_daily_reminders():
    """
    Periodic task: remind every active profile to record today's income and
    expenses.

    Runs daily at 10:00 Asia/Manila via Celery Beat.
    """
    frontend_url = getattr(settings, "LEDGER_FRONTEND_URL", "")
    profiles = Profile.objects.filter(is_active=True).order_by("pk")

    count = 0
    for profile in profiles:
        body = format_html(
            "Hi {},<br><br>This is a friendly reminder to add your income and "
            "expenses for today in Equitrack.<br><br>"
            "<a href='{}'>Go to Equitrack</a><br><br>Best regards,<br>Equitrack Team",
            profile.full_name or profile.email,
            frontend_url,
        )
        deliver_email.delay(
            profile.email, "Daily reminder: Add your income and expenses", body
        )
        count += 1

    logger.info("Daily reminders dispatched: %d", count)
    return {"dispatched": count}


@shared_task
def send_daily_expense_summaries():
    """
    Periodic task: send each profile a table of today's expenses.

    Profiles without expenses today get nothing. Runs daily at 11:00
    Asia/Manila via Celery Beat.
    """
    today = timezone.localdate()
    profiles = Profile.objects.filter(is_active=True).order_by("pk")

    count = 0
    for profile in profiles:
        expenses = list(ExpenseService.on_date(profile, today))
        if not expenses:
            continue

        rows = format_html_join(
            "",
            "<tr><td style='{0}'>{1}</td><td style='{0}'>{2}</td>"
            "<td style='{0}'>{3}</td><td style='{0}'>{4}</td></tr>",
            (
                (CELL, index, expense.name, expense.amount, expense.category.name)
                for index, expense in enumerate(expenses, start=1)
            ),
        )
        body = format_html(
            "Hi {},<br><br>Here is a summary of your expenses for today:<br><br>"
            "<table style='border-collapse:collapse;width:100%;'>"
            "<tr><th style='{}'>No</th><th style='{}'>Name</th>"
            "<th style='{}'>Amount</th><th style='{}'>Category</th></tr>{}</table>"
            "<br><br>Best regards,<br>Equitrack Team",
            profile.full_name or profile.email,
            CELL,
            CELL,
            CELL,
            CELL,
            rows,
        )
        deliver_email.delay(profile.email, "Your daily expense summary", body)
        count += 1

    logger.info("Daily expense summaries dispatched: %d", count)
    return {"dispatched": count}
