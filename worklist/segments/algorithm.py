"""
Patient segment identification from six questionnaire answers.

Each segment has a Fisher linear discriminant function: a weighted sum of the
answers to Q1C, Q1D, Q1E, Q1G, Q1H and Q1I (Likert scale 1-7) plus a
constant. The predicted segment is the one with the highest score; exact ties
go to the lowest segment number.
"""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

import pydantic
from pydantic import BaseModel, Field

from worklist.errors import ValidationError

QUESTION_IDS: Tuple[str, ...] = ("Q1C", "Q1D", "Q1E", "Q1G", "Q1H", "Q1I")

COEFFICIENTS: Dict[int, Dict[str, float]] = {
    1: {
        "Q1C": 1.19039386181128,
        "Q1D": 1.03649003888297,
        "Q1E": 5.73080695087478,
        "Q1G": 0.950006005564725,
        "Q1H": 1.31397531723995,
        "Q1I": 12.3204392841062,
        "constant": -67.0071796306531,
    },
    2: {
        "Q1C": 1.78620928911771,
        "Q1D": 1.59614399842169,
        "Q1E": 4.43116102793981,
        "Q1G": 1.36609926239298,
        "Q1H": 1.73853547911897,
        "Q1I": 10.342074596288,
        "constant": -53.3533516286633,
    },
    3: {
        "Q1C": 2.35357338157844,
        "Q1D": 2.21098553671086,
        "Q1E": 5.79236522953596,
        "Q1G": 2.43973793784768,
        "Q1H": 3.05180646916346,
        "Q1I": 12.4155836229025,
        "constant": -89.094787981231,
    },
    4: {
        "Q1C": 2.50469315181857,
        "Q1D": 2.45366871961806,
        "Q1E": 5.72743514501501,
        "Q1G": 0.833022711669993,
        "Q1H": 1.1325747318316,
        "Q1I": 12.2565135200598,
        "constant": -78.485754726542,
    },
}

SEGMENT_NAMES: Dict[int, str] = {
    1: "Proactive Skeptic",
    2: "Disengaged Health Risker",
    3: "Uncertain Reliant",
    4: "Proactive Reliant",
}


class SegmentAnswers(BaseModel):
    """Answers to the six scored questions, each on a 1-7 scale."""

    Q1C: int = Field(..., ge=1, le=7)
    Q1D: int = Field(..., ge=1, le=7)
    Q1E: int = Field(..., ge=1, le=7)
    Q1G: int = Field(..., ge=1, le=7)
    Q1H: int = Field(..., ge=1, le=7)
    Q1I: int = Field(..., ge=1, le=7)

    model_config = {"frozen": True, "extra": "ignore"}


class SegmentResult(BaseModel):
    segment: int = Field(..., ge=1, le=4)
    segment_name: str
    scores: Dict[int, float]

    model_config = {"frozen": True}


def _parse_answers(responses: "Mapping[str, int] | SegmentAnswers") -> SegmentAnswers:
    if isinstance(responses, SegmentAnswers):
        return responses
    try:
        return SegmentAnswers.model_validate(dict(responses))
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid questionnaire answers: {exc}") from exc


def segment_scores(answers: SegmentAnswers) -> Dict[int, float]:
    scores: Dict[int, float] = {}
    for segment, weights in COEFFICIENTS.items():
        total = weights["constant"]
        for question in QUESTION_IDS:
            total += getattr(answers, question) * weights[question]
        scores[segment] = total
    return scores


def calculate_segment(responses: "Mapping[str, int] | SegmentAnswers") -> SegmentResult:
    """
    Score every segment and pick the best one.

    Raises
    ------
    ValidationError
        If an answer is missing or outside 1-7.
    """
    answers = _parse_answers(responses)
    scores = segment_scores(answers)
    best = min(scores, key=lambda seg: (-scores[seg], seg))
    return SegmentResult(segment=best, segment_name=SEGMENT_NAMES[best], scores=scores)


__all__ = [
    "QUESTION_IDS",
    "COEFFICIENTS",
    "SEGMENT_NAMES",
    "SegmentAnswers",
    "SegmentResult",
    "segment_scores",
    "calculate_segment",
]
