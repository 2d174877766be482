import logging
import smtplib

from django.conf import settings
from django.core.mail import EmailMessage

logger = logging.getLogger(__name__)


def send_email(to, subject, body, *, html=True, attachments=None) -> bool:
    """
    Send a single email through the configured Django email backend.

    Delivery problems are logged and reported through the return value;
    they are never raised to the caller.

    Args:
        to: Recipient address.
        subject: Subject line.
        body: Message body, HTML unless ``html`` is False.
        attachments: Optional iterable of (filename, content, mimetype).

    Returns:
        True if the backend accepted the message, False otherwise.
    """
    message = EmailMessage(
        subject=subject,
        body=body,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        to=[to],
    )
    if html:
        message.content_subtype = "html"
    for filename, content, mimetype in attachments or ():
        message.attach(filename, content, mimetype)

    try:
        sent = message.send(fail_silently=False)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Email delivery failed: to=%s subject=%r error=%s", to, subject, exc)
        return False

    logger.info("Email sent: to=%s subject=%r", to, subject)
    return bool(sent)
