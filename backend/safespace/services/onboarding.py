import logging
import secrets
import string
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from safespace.services.catalog import INSTITUTIONS
from safespace.services.result import TriageResult, run_triage
from safespace.services.scoring import QUESTION_COUNT, Instrument, ScoringResult, build_responses
from safespace.services.state import AppState, ConsentFlags, ScreeningRecord, Student
from safespace.services.triage import extract_keywords


logger = logging.getLogger(__name__)

BASE36 = string.digits + string.ascii_lowercase
ROLES = ("student", "counsellor", "staff")
SLEEP_FREQUENCY_OPTIONS = (0, 1, 3, 5)
DEFAULT_INSTITUTION_CODE = "default"


class OnboardingError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ConsentStep:
    id: str
    title: str
    description: str
    required: bool


CONSENT_STEPS: tuple[ConsentStep, ...] = (
    ConsentStep(
        id="data_processing",
        title="Anonymous Data Processing",
        description=(
            "We process your responses anonymously to provide personalized mental health support. "
            "No personally identifiable information is stored."
        ),
        required=True,
    ),
    ConsentStep(
        id="anonymous_chat",
        title="Anonymous Chat Sessions",
        description=(
            "Chat sessions are encrypted and anonymous. "
            "You will be assigned a temporary handle that changes each session."
        ),
        required=True,
    ),
    ConsentStep(
        id="counselor_contact",
        title="Optional Counselor Contact",
        description=(
            "You may choose to connect with counselors. "
            "Identity reveal is always optional and requires separate consent."
        ),
        required=False,
    ),
)


@dataclass(frozen=True, slots=True)
class OnboardingAnswers:
    consent: Mapping[str, bool]
    phq9_answers: Mapping[int, int]
    gad7_answers: Mapping[int, int]
    concerns: str
    sleep_issue_frequency: int = 0


def _random_base36(length: int) -> str:
    return "".join(secrets.choice(BASE36) for _ in range(length))


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def has_required_consent(consent: Mapping[str, bool]) -> bool:
    return all(consent.get(step.id, False) for step in CONSENT_STEPS if step.required)


def missing_questions(instrument: Instrument, answers: Mapping[int, int]) -> list[int]:
    return [i for i in range(QUESTION_COUNT[instrument]) if i not in answers]


def validate_answers(answers: OnboardingAnswers) -> None:
    if not has_required_consent(answers.consent):
        raise OnboardingError("Required consent has not been given.")
    for instrument, given in (
        (Instrument.PHQ9, answers.phq9_answers),
        (Instrument.GAD7, answers.gad7_answers),
    ):
        missing = missing_questions(instrument, given)
        if missing:
            raise OnboardingError(f"{instrument.value} questions not answered: {missing}")
        extra = sorted(set(given) - set(range(QUESTION_COUNT[instrument])))
        if extra:
            raise OnboardingError(f"{instrument.value} has unknown questions: {extra}")
    if not answers.concerns.strip():
        raise OnboardingError("Please describe your main concerns.")
    if answers.sleep_issue_frequency not in SLEEP_FREQUENCY_OPTIONS:
        raise OnboardingError(f"sleep_issue_frequency must be one of {list(SLEEP_FREQUENCY_OPTIONS)}")


def preview_triage(answers: OnboardingAnswers) -> TriageResult:
    return run_triage(
        build_responses(Instrument.PHQ9, dict(answers.phq9_answers)),
        build_responses(Instrument.GAD7, dict(answers.gad7_answers)),
        extract_keywords(answers.concerns),
        {"sleep_issue_frequency": answers.sleep_issue_frequency},
    )


def _screening_record(
    record_id: str,
    instrument: Instrument,
    answers: Mapping[int, int],
    scored: ScoringResult,
    result: TriageResult,
    timestamp: datetime,
) -> ScreeningRecord:
    return ScreeningRecord(
        id=record_id,
        tool=instrument,
        responses=tuple(build_responses(instrument, dict(answers))),
        score=scored.score,
        severity=scored.severity,
        problem_tags=(result.problem_id.value,),
        timestamp=timestamp,
    )


def complete_onboarding(state: AppState, answers: OnboardingAnswers, now: datetime | None = None) -> TriageResult:
    validate_answers(answers)
    now = now or datetime.now(timezone.utc)
    result = preview_triage(answers)

    state.set_student(
        Student(
            token=f"student_{_epoch_ms(now)}_{_random_base36(9)}",
            institution_code=DEFAULT_INSTITUTION_CODE,
            ephemeral_handle=f"Guest-{_random_base36(4).upper()}",
            language=state.current_language,
            consent_flags=ConsentFlags(
                data_processing=bool(answers.consent.get("data_processing", False)),
                anonymous_chat=bool(answers.consent.get("anonymous_chat", False)),
                counselor_contact=bool(answers.consent.get("counselor_contact", False)),
            ),
            created_at=now,
        )
    )
    state.add_screening_result(
        _screening_record(f"screening_{_epoch_ms(now)}", Instrument.PHQ9, answers.phq9_answers, result.phq9, result, now)
    )
    state.add_screening_result(
        _screening_record(
            f"screening_{_epoch_ms(now + timedelta(milliseconds=1))}",
            Instrument.GAD7,
            answers.gad7_answers,
            result.gad7,
            result,
            now,
        )
    )
    state.set_current_problem(result.problem_id)
    state.complete_onboarding()

    logger.info("onboarding completed: problem=%s priority=%s", result.problem_id.value, result.priority.value)
    return result


def simple_onboarding(state: AppState, institution: str, role: str, now: datetime | None = None) -> str:
    """Create an anonymous profile from institution and role only.

    Returns the path the client should open next.
    """
    if institution not in INSTITUTIONS:
        raise OnboardingError(f"Unknown institution: {institution}")
    if role not in ROLES:
        raise OnboardingError(f"Unknown role: {role}")

    anon_id = f"anon_{_random_base36(9)}"
    state.set_student(
        Student(
            token=anon_id,
            institution_code=institution,
            ephemeral_handle=anon_id,
            language=state.current_language,
            consent_flags=ConsentFlags(data_processing=True, anonymous_chat=True, counselor_contact=False),
            created_at=now or datetime.now(timezone.utc),
            role=role,
        )
    )
    state.complete_onboarding()

    logger.info("simple onboarding completed: role=%s", role)
    if role == "counsellor":
        return "/counsellor-dashboard"
    return "/dashboard"
