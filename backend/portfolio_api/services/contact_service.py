"""
Portfolio API — Contact Service
=================================

What:  Stores contact-form submissions in the `contacts` collection.
How:   Validates that name, email and message are all present and non-blank,
       inserts one ContactMessage with a server-assigned created_at, and
       commits before returning so the 201 is only sent once the row exists.
Who:   Called by POST /contact.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.exceptions import StoreError, ValidationError
from portfolio_api.models.document import ContactMessage, utcnow
from portfolio_api.schemas.portfolio import ContactRequest

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "message")


class ContactService:
    """Write-only access to the contacts collection."""

    def _clean(self, payload: ContactRequest) -> dict:
        """
        Strip every required field and reject the submission if any is empty.

        Raises:
            ValidationError: a field is missing, null, or blank (→ 400)
        """
        cleaned = {}
        missing = []
        for field in REQUIRED_FIELDS:
            value = (getattr(payload, field, None) or "").strip()
            if not value:
                missing.append(field)
            cleaned[field] = value

        if missing:
            raise ValidationError(
                message="All fields are required",
                context={"missing": missing},
            )
        return cleaned

    async def submit(self, db: AsyncSession, payload: ContactRequest) -> ContactMessage:
        """
        Persist one contact message.

        Returns:
            The inserted ContactMessage (id and created_at populated)

        Raises:
            ValidationError: a required field is missing (→ 400, nothing inserted)
            StoreError: the insert failed (→ 500)
        """
        fields = self._clean(payload)
        contact = ContactMessage(created_at=utcnow(), **fields)

        try:
            db.add(contact)
            await db.flush()
            await db.commit()
        except Exception as e:
            logger.error("Error saving contact message: %s", e, exc_info=True)
            raise StoreError(message="Server error", error=str(e))

        logger.info("Contact message %s stored", contact.id)
        return contact


contact_service = ContactService()
