import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from safespace.api.routes_catalog import router as catalog_router
from safespace.api.routes_onboarding import router as onboarding_router
from safespace.api.routes_screening import router as screening_router
from safespace.api.routes_state import router as state_router
from safespace.core.config import settings
from safespace.services.scoring import DISCLAIMER_TEXT
from safespace.services.state import PreferencesStore


logger = logging.getLogger(__name__)


def init_state(app: FastAPI, preferences: PreferencesStore) -> None:
    app.state.preferences = preferences
    app.state.store = preferences.load()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    init_state(
        app,
        PreferencesStore(
            settings.state_file,
            enabled=settings.state_persist,
            default_language=settings.default_language,
        ),
    )
    logger.info("state loaded (language=%s)", app.state.store.current_language)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(screening_router)
app.include_router(onboarding_router)
app.include_router(state_router)
app.include_router(catalog_router)


class RootResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    message: str
    disclaimer: str


@app.get("/", response_model=RootResponse)
async def root() -> RootResponse:
    # Request Example:
    # GET /
    #
    # Response Example:
    # 200
    # {"message":"SafeSpace API","disclaimer":"This result is for guidance only and is not a diagnosis."}
    return RootResponse(message=settings.app_name, disclaimer=DISCLAIMER_TEXT)
