import enum
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from safespace.services.scoring import Score, coerce_answer


logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 3
SLEEP_ISSUE_THRESHOLD = 3


class ProblemId(str, enum.Enum):
    PLACEMENT_CAREER_ANXIETY = "placement_career_anxiety"
    RELATIONSHIP_ISSUES = "relationship_issues"
    SLEEP_BURNOUT = "sleep_burnout"
    ACADEMIC_STRESS = "academic_stress"
    FAMILY_PERSONAL_ISSUES = "family_personal_issues"
    SOCIAL_ISOLATION = "social_isolation"
    OTHER_MIXED = "other_mixed"


DEFAULT_PROBLEM = ProblemId.OTHER_MIXED


@dataclass(frozen=True, slots=True)
class TriageInput:
    phq9_score: Score
    gad7_score: Score
    keyword_text: str
    auxiliary: Mapping[str, object]

    @property
    def sleep_issue_frequency(self) -> Score:
        return coerce_answer(self.auxiliary.get("sleep_issue_frequency"))


@dataclass(frozen=True, slots=True)
class TriageRule:
    problem_id: ProblemId
    predicate: Callable[[TriageInput], bool]


def _pattern(*words: str) -> re.Pattern[str]:
    return re.compile("|".join(words), re.IGNORECASE)


CAREER_PATTERN = _pattern("job", "placement", "interview", "career", "internship")
RELATIONSHIP_PATTERN = _pattern("breakup", "relationship", "dating", "partner", "love")
ACADEMIC_PATTERN = _pattern("exam", "study", "grade", "academic", "assignment", "test")
FAMILY_PATTERN = _pattern("family", "home", "parents", "personal", "conflict")
SOCIAL_PATTERN = _pattern("lonely", "isolation", "friends", "social", "alone")


def _mentions(pattern: re.Pattern[str]) -> Callable[[TriageInput], bool]:
    return lambda data: pattern.search(data.keyword_text) is not None


# First match wins; DEFAULT_PROBLEM applies when nothing matches.
TRIAGE_RULES: tuple[TriageRule, ...] = (
    TriageRule(
        ProblemId.PLACEMENT_CAREER_ANXIETY,
        lambda data: data.gad7_score >= 10 and _mentions(CAREER_PATTERN)(data),
    ),
    TriageRule(
        ProblemId.RELATIONSHIP_ISSUES,
        lambda data: data.phq9_score >= 10 and _mentions(RELATIONSHIP_PATTERN)(data),
    ),
    TriageRule(
        ProblemId.SLEEP_BURNOUT,
        lambda data: data.sleep_issue_frequency >= SLEEP_ISSUE_THRESHOLD,
    ),
    TriageRule(ProblemId.ACADEMIC_STRESS, _mentions(ACADEMIC_PATTERN)),
    TriageRule(ProblemId.FAMILY_PERSONAL_ISSUES, _mentions(FAMILY_PATTERN)),
    TriageRule(ProblemId.SOCIAL_ISOLATION, _mentions(SOCIAL_PATTERN)),
)


def join_keywords(keywords: Iterable[str]) -> str:
    # Joined with spaces, so a pattern may match across two adjacent tokens.
    return " ".join(str(k) for k in keywords).lower()


def extract_keywords(text: str | None) -> list[str]:
    return [token for token in (text or "").lower().split(" ") if len(token) >= MIN_KEYWORD_LENGTH]


def map_to_problem(
    phq9_score: Score,
    gad7_score: Score,
    keywords: Iterable[str],
    auxiliary: Mapping[str, object] | None = None,
) -> ProblemId:
    data = TriageInput(
        phq9_score=phq9_score,
        gad7_score=gad7_score,
        keyword_text=join_keywords(keywords),
        auxiliary=auxiliary or {},
    )
    for rule in TRIAGE_RULES:
        if rule.predicate(data):
            logger.debug("triage rule matched: %s", rule.problem_id.value)
            return rule.problem_id

    logger.debug("no triage rule matched, falling back to %s", DEFAULT_PROBLEM.value)
    return DEFAULT_PROBLEM
