import pytest

from safespace.services.result import Priority, aggregate, derive_priority, run_triage
from safespace.services.scoring import ScoringResult, ScreeningResponse, Severity
from safespace.services.triage import ProblemId


def _scored(score: int) -> ScoringResult:
    return ScoringResult(score=score, severity=Severity.MINIMAL)


@pytest.mark.parametrize(
    ("phq9", "gad7", "expected"),
    [
        (16, 2, Priority.HIGH),
        (2, 15, Priority.HIGH),
        (11, 3, Priority.MEDIUM),
        (3, 10, Priority.MEDIUM),
        (14, 14, Priority.MEDIUM),
        (3, 3, Priority.LOW),
        (9, 9, Priority.LOW),
    ],
)
def test_derive_priority(phq9: int, gad7: int, expected: Priority) -> None:
    assert derive_priority(_scored(phq9), _scored(gad7)) is expected


def test_aggregate_keeps_inputs_and_adds_priority() -> None:
    phq9 = ScoringResult(score=12, severity=Severity.MODERATE)
    gad7 = ScoringResult(score=4, severity=Severity.MINIMAL)
    result = aggregate(phq9, gad7, ProblemId.ACADEMIC_STRESS)

    assert result.phq9 is phq9
    assert result.gad7 is gad7
    assert result.problem_id is ProblemId.ACADEMIC_STRESS
    assert result.priority is Priority.MEDIUM
    assert result.redirect_to == "/problems/academic_stress"


def test_aggregate_result_is_immutable() -> None:
    result = aggregate(_scored(0), _scored(0), ProblemId.OTHER_MIXED)
    with pytest.raises(AttributeError):
        result.priority = Priority.HIGH


def test_high_depression_with_career_keywords_but_low_anxiety_falls_back() -> None:
    phq9 = [ScreeningResponse(question_id=f"phq9_{i}", answer=a) for i, a in enumerate([3, 3, 3, 3, 3, 3, 2, 1, 1])]
    gad7 = [ScreeningResponse(question_id=f"gad7_{i}", answer=a) for i, a in enumerate([1, 1, 1, 0, 0, 0, 0])]

    result = run_triage(phq9, gad7, ["placement", "interview"], {})

    assert result.phq9 == ScoringResult(score=22, severity=Severity.SEVERE)
    assert result.gad7 == ScoringResult(score=3, severity=Severity.MINIMAL)
    assert result.problem_id is ProblemId.OTHER_MIXED
    assert result.priority is Priority.HIGH
