from safespace.schemas.screening import ScoringResultOut, ScreeningResponseIn, TriageResultOut
from safespace.schemas.state import ConsentFlagsOut, ScreeningRecordOut, StateOut, StudentOut
from safespace.services.result import TriageResult
from safespace.services.scoring import ScoringResult, ScreeningResponse
from safespace.services.state import AppState, ScreeningRecord, Student


def to_responses(items: list[ScreeningResponseIn]) -> list[ScreeningResponse]:
    return [ScreeningResponse(question_id=item.question_id, answer=item.answer) for item in items]


def scoring_out(result: ScoringResult) -> ScoringResultOut:
    return ScoringResultOut(score=result.score, severity=result.severity)


def triage_out(result: TriageResult) -> TriageResultOut:
    return TriageResultOut(
        phq9=scoring_out(result.phq9),
        gad7=scoring_out(result.gad7),
        problem_id=result.problem_id,
        priority=result.priority,
        redirect_to=result.redirect_to,
    )


def _student_out(student: Student) -> StudentOut:
    flags = student.consent_flags
    return StudentOut(
        token=student.token,
        institution_code=student.institution_code,
        ephemeral_handle=student.ephemeral_handle,
        language=student.language,
        role=student.role,
        consent_flags=ConsentFlagsOut(
            data_processing=flags.data_processing,
            anonymous_chat=flags.anonymous_chat,
            counselor_contact=flags.counselor_contact,
        ),
        created_at=student.created_at,
    )


def _record_out(record: ScreeningRecord) -> ScreeningRecordOut:
    return ScreeningRecordOut(
        id=record.id,
        tool=record.tool,
        responses=[ScreeningResponseIn(question_id=r.question_id, answer=r.answer) for r in record.responses],
        score=record.score,
        severity=record.severity,
        problem_tags=list(record.problem_tags),
        timestamp=record.timestamp,
    )


def state_out(state: AppState) -> StateOut:
    return StateOut(
        current_language=state.current_language,
        onboarding_completed=state.onboarding_completed,
        current_problem_id=state.current_problem_id,
        student=_student_out(state.student) if state.student else None,
        screening_results=[_record_out(r) for r in state.screening_results],
    )
