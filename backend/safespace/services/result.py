import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from safespace.services.scoring import ScoringResult, ScreeningResponse, score_gad7, score_phq9
from safespace.services.triage import ProblemId, map_to_problem


HIGH_PRIORITY_SCORE = 15
MEDIUM_PRIORITY_SCORE = 10


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class TriageResult:
    phq9: ScoringResult
    gad7: ScoringResult
    problem_id: ProblemId
    priority: Priority

    @property
    def redirect_to(self) -> str:
        return f"/problems/{self.problem_id.value}"


def derive_priority(phq9: ScoringResult, gad7: ScoringResult) -> Priority:
    if phq9.score >= HIGH_PRIORITY_SCORE or gad7.score >= HIGH_PRIORITY_SCORE:
        return Priority.HIGH
    if phq9.score >= MEDIUM_PRIORITY_SCORE or gad7.score >= MEDIUM_PRIORITY_SCORE:
        return Priority.MEDIUM
    return Priority.LOW


def aggregate(phq9: ScoringResult, gad7: ScoringResult, problem_id: ProblemId) -> TriageResult:
    return TriageResult(
        phq9=phq9,
        gad7=gad7,
        problem_id=problem_id,
        priority=derive_priority(phq9, gad7),
    )


def run_triage(
    phq9_responses: Iterable[ScreeningResponse],
    gad7_responses: Iterable[ScreeningResponse],
    keywords: Iterable[str],
    auxiliary: Mapping[str, object] | None = None,
) -> TriageResult:
    """Score both questionnaires, pick a problem interface and combine them.

    This is the composition the onboarding flow performs once the student
    reaches the results step. Nothing is recorded; callers decide what to
    keep.
    """
    phq9 = score_phq9(phq9_responses)
    gad7 = score_gad7(gad7_responses)
    problem_id = map_to_problem(phq9.score, gad7.score, keywords, auxiliary)
    return aggregate(phq9, gad7, problem_id)
