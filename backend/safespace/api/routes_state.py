from fastapi import APIRouter, Depends, HTTPException, status

from safespace.api.converters import state_out
from safespace.api.deps import get_app_state, get_preferences
from safespace.schemas.catalog import LanguageOut
from safespace.schemas.state import LanguageUpdateRequest, StateOut
from safespace.services.catalog import SUPPORTED_LANGUAGES
from safespace.services.state import AppState, PreferencesStore

router = APIRouter(prefix="/state", tags=["state"])


@router.get("", response_model=StateOut)
async def get_state(state: AppState = Depends(get_app_state)) -> StateOut:
    return state_out(state)


@router.get("/languages", response_model=list[LanguageOut])
async def list_languages() -> list[LanguageOut]:
    return [LanguageOut(code=lang["code"], name=lang["name"]) for lang in SUPPORTED_LANGUAGES]


@router.put("/language", response_model=StateOut)
async def update_language(
    payload: LanguageUpdateRequest,
    state: AppState = Depends(get_app_state),
    preferences: PreferencesStore = Depends(get_preferences),
) -> StateOut:
    try:
        state.set_language(payload.language)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    preferences.save(state)
    return state_out(state)


@router.delete("", response_model=StateOut)
async def clear_state(
    state: AppState = Depends(get_app_state),
    preferences: PreferencesStore = Depends(get_preferences),
) -> StateOut:
    state.clear_user_data()
    preferences.save(state)
    return state_out(state)
