import enum
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass


DISCLAIMER_TEXT = "This result is for guidance only and is not a diagnosis."

Score = int | float

# Plain decimal or exponent notation only; "inf", "nan" and "1_0" do not count.
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class Instrument(str, enum.Enum):
    PHQ9 = "PHQ9"
    GAD7 = "GAD7"


class Severity(str, enum.Enum):
    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    MODERATELY_SEVERE = "moderately_severe"
    SEVERE = "severe"


@dataclass(frozen=True, slots=True)
class ScreeningResponse:
    question_id: str
    answer: object = None


@dataclass(frozen=True, slots=True)
class ScoringResult:
    score: Score
    severity: Severity


QUESTION_COUNT: dict[Instrument, int] = {
    Instrument.PHQ9: 9,
    Instrument.GAD7: 7,
}

MAX_SCORE: dict[Instrument, int] = {
    Instrument.PHQ9: 27,
    Instrument.GAD7: 21,
}

# Inclusive lower bounds, highest first.
SEVERITY_THRESHOLDS: dict[Instrument, tuple[tuple[int, Severity], ...]] = {
    Instrument.PHQ9: (
        (20, Severity.SEVERE),
        (15, Severity.MODERATELY_SEVERE),
        (10, Severity.MODERATE),
        (5, Severity.MILD),
    ),
    Instrument.GAD7: (
        (15, Severity.SEVERE),
        (10, Severity.MODERATE),
        (5, Severity.MILD),
    ),
}


def question_id(instrument: Instrument, index: int) -> str:
    return f"{instrument.value.lower()}_{index}"


def coerce_answer(value: object) -> Score:
    """Turn a raw answer into a number; anything unusable counts as 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        raw = value.strip()
        if not DECIMAL_PATTERN.fullmatch(raw):
            return 0
        parsed = float(raw)
        if not math.isfinite(parsed):
            return 0
        return int(parsed) if parsed.is_integer() else parsed
    return 0


def sum_responses(responses: Iterable[ScreeningResponse]) -> Score:
    total = sum(coerce_answer(response.answer) for response in responses)
    if isinstance(total, float) and total.is_integer():
        return int(total)
    return total


def severity_for(instrument: Instrument, score: Score) -> Severity:
    for lower_bound, severity in SEVERITY_THRESHOLDS[instrument]:
        if score >= lower_bound:
            return severity
    return Severity.MINIMAL


def score_instrument(instrument: Instrument, responses: Iterable[ScreeningResponse]) -> ScoringResult:
    score = sum_responses(responses)
    return ScoringResult(score=score, severity=severity_for(instrument, score))


def score_phq9(responses: Iterable[ScreeningResponse]) -> ScoringResult:
    return score_instrument(Instrument.PHQ9, responses)


def score_gad7(responses: Iterable[ScreeningResponse]) -> ScoringResult:
    return score_instrument(Instrument.GAD7, responses)


def build_responses(instrument: Instrument, answers: dict[int, object]) -> list[ScreeningResponse]:
    return [
        ScreeningResponse(question_id=question_id(instrument, index), answer=answer)
        for index, answer in sorted(answers.items())
    ]
