from fastapi import APIRouter, Depends, HTTPException, Query, status

from safespace.api.converters import triage_out
from safespace.api.deps import get_app_state, get_preferences
from safespace.schemas.onboarding import (
    ConsentStepOut,
    InstitutionListResponse,
    OnboardingRequest,
    OnboardingResponse,
    SimpleOnboardingRequest,
    SimpleOnboardingResponse,
)
from safespace.services import onboarding
from safespace.services.catalog import search_institutions
from safespace.services.state import AppState, PreferencesStore

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.get("/consent-steps", response_model=list[ConsentStepOut])
async def list_consent_steps() -> list[ConsentStepOut]:
    return [
        ConsentStepOut(id=s.id, title=s.title, description=s.description, required=s.required)
        for s in onboarding.CONSENT_STEPS
    ]


@router.post("", response_model=OnboardingResponse)
async def complete_onboarding(
    payload: OnboardingRequest,
    state: AppState = Depends(get_app_state),
    preferences: PreferencesStore = Depends(get_preferences),
) -> OnboardingResponse:
    # Request Example:
    # POST /onboarding
    # {"consent":{"data_processing":true,"anonymous_chat":true},
    #  "phq9_answers":{"0":1,...,"8":0},"gad7_answers":{"0":2,...,"6":1},
    #  "concerns":"exam stress and family","sleep_issue_frequency":1}
    #
    # Response Example:
    # 200
    # {"ephemeral_handle":"Guest-4KQZ","result":{...,"problem_id":"academic_stress","redirect_to":"/problems/academic_stress"}}
    answers = onboarding.OnboardingAnswers(
        consent=payload.consent,
        phq9_answers=payload.phq9_answers,
        gad7_answers=payload.gad7_answers,
        concerns=payload.concerns,
        sleep_issue_frequency=payload.sleep_issue_frequency,
    )
    try:
        result = onboarding.complete_onboarding(state, answers)
    except onboarding.OnboardingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    preferences.save(state)
    return OnboardingResponse(ephemeral_handle=state.student.ephemeral_handle, result=triage_out(result))


@router.get("/institutions", response_model=InstitutionListResponse)
async def list_institutions(search: str | None = Query(default=None, max_length=200)) -> InstitutionListResponse:
    items = search_institutions(search)
    return InstitutionListResponse(total=len(items), items=items)


@router.post("/simple", response_model=SimpleOnboardingResponse)
async def simple_onboarding(
    payload: SimpleOnboardingRequest,
    state: AppState = Depends(get_app_state),
    preferences: PreferencesStore = Depends(get_preferences),
) -> SimpleOnboardingResponse:
    try:
        redirect_to = onboarding.simple_onboarding(state, payload.institution, payload.role)
    except onboarding.OnboardingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    preferences.save(state)
    return SimpleOnboardingResponse(ephemeral_handle=state.student.ephemeral_handle, redirect_to=redirect_to)
