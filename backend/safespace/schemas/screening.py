from pydantic import BaseModel, ConfigDict, Field

from safespace.services.result import Priority
from safespace.services.scoring import DISCLAIMER_TEXT, Severity
from safespace.services.triage import ProblemId


AnswerValue = int | float | str | None


class ScreeningResponseIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question_id: str = Field(max_length=32)
    answer: AnswerValue = None


class ScoreRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    responses: list[ScreeningResponseIn] = Field(default_factory=list, max_length=50)


class ScoringResultOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    score: int | float
    severity: Severity


class TriagePreviewRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    phq9: list[ScreeningResponseIn] = Field(default_factory=list, max_length=50)
    gad7: list[ScreeningResponseIn] = Field(default_factory=list, max_length=50)
    # Either pre-tokenized keywords or raw text to tokenize; both are merged.
    keywords: list[str] = Field(default_factory=list, max_length=200)
    concerns: str | None = Field(default=None, max_length=1000)
    auxiliary: dict[str, AnswerValue] = Field(default_factory=dict)


class TriageResultOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    phq9: ScoringResultOut
    gad7: ScoringResultOut
    problem_id: ProblemId
    priority: Priority
    redirect_to: str
    disclaimer: str = DISCLAIMER_TEXT
