"""
Patient segment questionnaire: scoring and result notification.
"""

from worklist.segments.algorithm import (
    QUESTION_IDS,
    SEGMENT_NAMES,
    SegmentAnswers,
    SegmentResult,
    calculate_segment,
)
from worklist.segments.notify import (
    NotificationResult,
    UserInfo,
    generate_email_content,
    send_results_email,
)

__all__ = [
    "QUESTION_IDS",
    "SEGMENT_NAMES",
    "SegmentAnswers",
    "SegmentResult",
    "calculate_segment",
    "NotificationResult",
    "UserInfo",
    "generate_email_content",
    "send_results_email",
]
