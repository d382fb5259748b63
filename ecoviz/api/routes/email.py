"""
EcoViz — Email Routes
Send a calculation summary to the user.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ecoviz.api.deps import get_mailer
from ecoviz.schemas.schemas import EmailResultsRequest, MessageResponse
from ecoviz.services.mailer import Mailer, MailerError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/send-email-results",
    response_model=MessageResponse,
    summary="Email calculation results",
    description="Send an HTML summary of a footprint calculation to an email address.",
)
async def send_email_results(
    request: EmailResultsRequest,
    mailer: Mailer = Depends(get_mailer),
):
    try:
        await mailer.send_results(request.email, request.results)
    except MailerError as e:
        logger.error(f"Error sending email: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send email",
        )
    return MessageResponse(message="Email sent successfully")
