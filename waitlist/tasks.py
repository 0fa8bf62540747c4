"""
Waitlist Celery Tasks

Confirmation emails for demo requests. Runs on the email_tasks queue.
"""

import logging

from celery import shared_task

from utils.logging_utils import mask_value

logger = logging.getLogger(__name__)

DEMO_CONFIRMATION_SUBJECT = "We received your ForMe demo request"


@shared_task(bind=True, max_retries=3, queue="email_tasks")
def send_demo_request_confirmation(self, demo_request_id):
    """
    Email the requester that their demo request was received.

    Args:
        demo_request_id (str): The UUID of the DemoRequest

    Returns:
        dict: {"success": bool, ...}
    """
    from infrastructure.container import container
    from infrastructure.email import EmailException, EmailMessage
    from waitlist.domain.models import DemoRequest

    try:
        demo_request = DemoRequest.objects.get(pk=demo_request_id)
    except DemoRequest.DoesNotExist:
        logger.warning(f"Demo request {demo_request_id} not found, skipping confirmation")
        return {"success": False, "error": "Demo request not found", "demo_request_id": demo_request_id}

    message = EmailMessage(
        subject=DEMO_CONFIRMATION_SUBJECT,
        body=(
            f"Hi {demo_request.name},\n\n"
            "Thanks for your interest in ForMe. Our team will reach out shortly to schedule your demo.\n\n"
            "The ForMe team"
        ),
        to=[demo_request.email],
    )

    try:
        sent = container.email().send(message)
    except EmailException as exc:
        logger.error(f"Failed to send demo confirmation to {mask_value(demo_request.email)}: {exc}")
        raise self.retry(exc=exc, countdown=60 * (2**self.request.retries))

    logger.info(f"Demo confirmation sent to {mask_value(demo_request.email)}")
    return {"success": bool(sent), "demo_request_id": demo_request_id}
