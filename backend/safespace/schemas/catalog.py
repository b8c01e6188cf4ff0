from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from safespace.services.triage import ProblemId


class LanguageOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    code: str
    name: str


class ProblemInterfaceOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: ProblemId
    title: str
    description: str
    is_current: bool


class CounsellorOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    name: str
    designation: str
    department: str
    specializations: list[str]
    rating: float
    available_slots: list[str]
    contact_methods: list[str]
    location: str


class GameOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    title: str
    description: str
    duration: str
    difficulty: str
    points: int
    completed: bool


class GameListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    points: int
    completed_count: int
    total: int
    items: list[GameOut]


class TrackOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    title: str
    category: str
    duration: str
    description: str


class CounsellorRequestOut(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    student_id: str
    institution: str
    type: Literal["urgent", "scheduled", "chat"]
    message: str
    timestamp: datetime
    time_ago: str
    status: Literal["pending", "active"]


class CounsellorRequestListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    urgent_count: int
    pending_count: int
    items: list[CounsellorRequestOut]
