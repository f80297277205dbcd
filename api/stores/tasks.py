import logging
from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from .models import Store, ContactSubmission

logger = logging.getLogger("stores_tasks")


def single_line(value):
    """Collapse whitespace, line breaks included, so the value is safe in a mail header."""
    return ' '.join(str(value).split())


@shared_task
def notify_contact_submission(submission_id):
    """
    E-mails a contact form message to the store it was left for.
    Args:
        submission_id (int): Primary key of the ContactSubmission to send.
    Behavior:
        - Sends to the store's e-mail address, or to STORE_NOTIFICATION_EMAIL
          when the store has none.
        - Does nothing when there is no recipient at all.
        - Line breaks in the sender or store name are flattened in the subject;
          the body keeps the values as submitted.
    Returns:
        int: Number of e-mails sent (0 or 1).
    Raises:
        ContactSubmission.DoesNotExist: If the submission is unknown.
    """
    submission = ContactSubmission.objects.get(pk=submission_id)
    store = Store.objects.filter(location=submission.location).first()
    recipient = (store.email if store else '') or settings.STORE_NOTIFICATION_EMAIL
    if not recipient:
        logger.info(f"No recipient for contact submission {submission_id}, skipping e-mail.")
        return 0

    store_name = store.store_name if store and store.store_name else submission.location
    sent = send_mail(
        subject=single_line(f"New message for {store_name} from {submission.name}"),
        message=(
            f"Name: {submission.name}\n"
            f"Phone: {submission.phone}\n\n"
            f"{submission.message}\n"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[recipient],
    )
    logger.info(f"Contact submission {submission_id} e-mailed to {recipient}.")
    return sent
