"""
Portfolio API — Contact Route Handler
=======================================

What:  POST /contact, the contact-form submission endpoint.
How:   Parses the JSON body, delegates validation and the insert to
       ContactService, returns 201 with a confirmation message.

Request Flow:
    1. FastAPI parses the body into ContactRequest (malformed JSON → 400)
    2. ContactService rejects missing/blank fields (→ 400, nothing inserted)
    3. One row is inserted into `contacts` and committed
    4. 201 {"message": "Message sent successfully!"}
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db_session
from portfolio_api.schemas.portfolio import ContactRequest, ErrorResponse, MessageResponse
from portfolio_api.services.contact_service import contact_service

router = APIRouter(tags=["Contact"])


@router.post(
    "/contact",
    status_code=201,
    response_model=MessageResponse,
    responses={
        201: {"description": "Message stored", "model": MessageResponse},
        400: {"description": "A required field is missing", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Submit the contact form",
)
async def submit_contact(
    payload: Optional[ContactRequest] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    # An empty body is treated like an empty form
    await contact_service.submit(db, payload or ContactRequest())
    return MessageResponse(message="Message sent successfully!")
