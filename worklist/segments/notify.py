"""
Email delivery of segment results through the EmailJS REST API.

Sending never raises: configuration gaps and delivery failures come back as
a NotificationResult with `success=False` and an error message, which is what
the questionnaire screen shows to the patient.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from worklist.config import Settings, get_settings
from worklist.segments.algorithm import SegmentResult
from worklist.utils.logging import get_logger

log = get_logger(__name__)

NOT_CONFIGURED_MESSAGE = "Email service is not configured. Please contact support."
SEND_FAILED_MESSAGE = "Failed to send email. Please try again later."


class UserInfo(BaseModel):
    first_name: str
    last_name: str
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class NotificationResult(BaseModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


def format_scores(result: SegmentResult, bullet: str = "") -> str:
    return "\n".join(
        f"{bullet}Segment {segment}: {score:.2f}" for segment, score in result.scores.items()
    )


def build_template_params(user: UserInfo, result: SegmentResult) -> Dict[str, Any]:
    return {
        "to_name": user.full_name,
        "to_email": user.email,
        "segment_number": result.segment,
        "segment_name": result.segment_name,
        "scores": format_scores(result),
        "user_email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
    }


async def send_results_email(
    user: UserInfo,
    result: SegmentResult,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> NotificationResult:
    """
    Send the segment result to the patient.

    Parameters
    ----------
    user : UserInfo
        Recipient.
    result : SegmentResult
        Output of `calculate_segment`.
    settings : Settings, optional
        EmailJS credentials; defaults to the cached settings.
    client : httpx.AsyncClient, optional
        Client to reuse; a short-lived one is opened otherwise.
    """
    settings = settings or get_settings()
    if not settings.email_configured:
        log.warning("EmailJS is not configured; skipping results email")
        return NotificationResult(success=False, error=NOT_CONFIGURED_MESSAGE)

    payload = {
        "service_id": settings.emailjs_service_id,
        "template_id": settings.emailjs_template_id,
        "user_id": settings.emailjs_public_key,
        "template_params": build_template_params(user, result),
    }
    try:
        if client is not None:
            response = await client.post(settings.emailjs_api_url, json=payload)
        else:
            async with httpx.AsyncClient(timeout=settings.fetch_timeout_seconds) as own_client:
                response = await own_client.post(settings.emailjs_api_url, json=payload)
    except httpx.HTTPError as exc:
        log.error("Error sending email", extra={"error": str(exc)})
        return NotificationResult(success=False, error=SEND_FAILED_MESSAGE)

    if not response.is_success:
        log.error(
            "Email service rejected the request",
            extra={"status": response.status_code, "body": response.text},
        )
        return NotificationResult(success=False, error=response.text or SEND_FAILED_MESSAGE)

    log.info("Results email sent", extra={"segment": result.segment})
    return NotificationResult(success=True, message_id=response.text)


def generate_email_content(user: UserInfo, result: SegmentResult) -> str:
    """Plain-text body of the results email, used for previews and fallbacks."""
    return (
        f"Dear {user.full_name},\n"
        "\n"
        "Thank you for completing the CareStyles™ Patient Segment Identification.\n"
        "\n"
        f"Your Patient Segment: {result.segment_name} (Segment {result.segment})\n"
        "\n"
        "Segment Scores:\n"
        f"{format_scores(result, bullet='  • ')}\n"
        "\n"
        "The segment with the highest score represents your predicted patient segment "
        "based on the CareStyles™ algorithm, which has an accuracy rate of 85.3%.\n"
        "\n"
        "Best regards,\n"
        "CareStyles™ Team"
    )


__all__ = [
    "UserInfo",
    "NotificationResult",
    "build_template_params",
    "send_results_email",
    "generate_email_content",
]
