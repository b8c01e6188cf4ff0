from datetime import datetime

from pydantic import BaseModel, ConfigDict

from safespace.schemas.screening import ScreeningResponseIn
from safespace.services.scoring import Instrument, Severity
from safespace.services.triage import ProblemId


class ConsentFlagsOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    data_processing: bool
    anonymous_chat: bool
    counselor_contact: bool


class StudentOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    token: str
    institution_code: str
    ephemeral_handle: str
    language: str
    role: str | None
    consent_flags: ConsentFlagsOut
    created_at: datetime


class ScreeningRecordOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    tool: Instrument
    responses: list[ScreeningResponseIn]
    score: int | float
    severity: Severity
    problem_tags: list[str]
    timestamp: datetime


class StateOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    current_language: str
    onboarding_completed: bool
    current_problem_id: ProblemId | None
    student: StudentOut | None
    screening_results: list[ScreeningRecordOut]


class LanguageUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    language: str
