import logging

from exceptions.menu import InvalidContactFormException
from models.contact import ContactFormDTO

logger = logging.getLogger(__name__)


class ContactService:

    @staticmethod
    def submit(form: ContactFormDTO) -> None:
        """
        Accept a contact form submission. Submissions are only written to the log.

        Raises:
            InvalidContactFormException: name, email or message is missing or blank
        """
        missing = [
            field for field in ("name", "email", "message")
            if not (getattr(form, field) or "").strip()
        ]
        if missing:
            raise InvalidContactFormException(missing_fields=missing)

        logger.info(
            f"Contact Form Submission:\n"
            f"    Name: {form.name}\n"
            f"    Email: {form.email}\n"
            f"    Message: {form.message}"
        )
