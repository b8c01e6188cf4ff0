from fastapi import Request

from safespace.services.state import AppState, PreferencesStore


def get_app_state(request: Request) -> AppState:
    return request.app.state.store


def get_preferences(request: Request) -> PreferencesStore:
    return request.app.state.preferences
