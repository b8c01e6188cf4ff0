from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, conint, constr

from safespace.schemas.screening import TriageResultOut


LikertScore = conint(ge=0, le=3)
SleepFrequency = Literal[0, 1, 3, 5]
Role = Literal["student", "counsellor", "staff"]


class ConsentStepOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    title: str
    description: str
    required: bool


class OnboardingRequest(BaseModel):
    # JSON object keys arrive as strings, so question indexes are coerced.
    model_config = ConfigDict(extra="forbid")

    consent: dict[str, bool] = Field(default_factory=dict)
    phq9_answers: dict[int, LikertScore] = Field(default_factory=dict)
    gad7_answers: dict[int, LikertScore] = Field(default_factory=dict)
    concerns: constr(max_length=1000) = ""
    sleep_issue_frequency: SleepFrequency = 0


class OnboardingResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    ephemeral_handle: str
    result: TriageResultOut


class SimpleOnboardingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    institution: constr(min_length=1, max_length=200)
    role: Role


class SimpleOnboardingResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    ephemeral_handle: str
    redirect_to: str


class InstitutionListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    total: int
    items: list[str]
