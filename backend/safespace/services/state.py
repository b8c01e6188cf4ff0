import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from safespace.services.catalog import LANGUAGE_CODES, find_game, mock_counsellor_requests
from safespace.services.scoring import Instrument, Score, ScreeningResponse, Severity
from safespace.services.triage import ProblemId


logger = logging.getLogger(__name__)

STORAGE_KEY = "student-safespace-storage"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True, slots=True)
class ConsentFlags:
    data_processing: bool = False
    anonymous_chat: bool = False
    counselor_contact: bool = False


@dataclass(frozen=True, slots=True)
class Student:
    token: str
    institution_code: str
    ephemeral_handle: str
    language: str
    consent_flags: ConsentFlags
    created_at: datetime
    role: str | None = None


@dataclass(frozen=True, slots=True)
class ScreeningRecord:
    id: str
    tool: Instrument
    responses: tuple[ScreeningResponse, ...]
    score: Score
    severity: Severity
    problem_tags: tuple[str, ...]
    timestamp: datetime


@dataclass(slots=True)
class AppState:
    """Everything one student session knows about itself.

    Owned by the application and handed to routes explicitly. Only
    ``current_language`` and ``onboarding_completed`` survive a restart
    (see ``to_persisted``); the profile and screening records stay in
    memory.
    """

    current_language: str = DEFAULT_LANGUAGE
    onboarding_completed: bool = False
    student: Student | None = None
    screening_results: list[ScreeningRecord] = field(default_factory=list)
    current_problem_id: ProblemId | None = None
    game_points: int = 0
    completed_games: set[str] = field(default_factory=set)
    counsellor_requests: list[dict[str, object]] = field(default_factory=mock_counsellor_requests)

    def set_student(self, student: Student) -> None:
        self.student = student

    def set_language(self, language: str) -> None:
        if language not in LANGUAGE_CODES:
            raise ValueError(f"Unsupported language: {language}")
        self.current_language = language

    def add_screening_result(self, result: ScreeningRecord) -> None:
        self.screening_results.append(result)

    def set_current_problem(self, problem_id: ProblemId) -> None:
        self.current_problem_id = ProblemId(problem_id)

    def complete_onboarding(self) -> None:
        self.onboarding_completed = True

    def clear_user_data(self) -> None:
        self.student = None
        self.screening_results = []
        self.current_problem_id = None
        self.onboarding_completed = False
        self.game_points = 0
        self.completed_games = set()

    def record_game_completion(self, game_id: str) -> int:
        game = find_game(game_id)
        if game is None:
            raise ValueError(f"Unknown game: {game_id}")
        self.game_points += int(game["points"])
        self.completed_games.add(game_id)
        return self.game_points

    def accept_counsellor_request(self, request_id: str) -> dict[str, object] | None:
        for request in self.counsellor_requests:
            if request["id"] == request_id:
                request["status"] = "active"
                return request
        return None

    def to_persisted(self) -> dict[str, object]:
        return {
            "currentLanguage": self.current_language,
            "onboardingCompleted": self.onboarding_completed,
        }

    @classmethod
    def from_persisted(cls, data: dict | None, default_language: str = DEFAULT_LANGUAGE) -> "AppState":
        state = cls()
        if default_language in LANGUAGE_CODES:
            state.current_language = default_language
        if not isinstance(data, dict):
            return state

        language = data.get("currentLanguage")
        if isinstance(language, str) and language in LANGUAGE_CODES:
            state.current_language = language
        if isinstance(data.get("onboardingCompleted"), bool):
            state.onboarding_completed = data["onboardingCompleted"]
        return state


class PreferencesStore:
    """Local JSON key-value file holding the persisted part of ``AppState``."""

    def __init__(self, path: str | Path, enabled: bool = True, default_language: str = DEFAULT_LANGUAGE) -> None:
        self.path = Path(path)
        self.enabled = enabled
        self.default_language = default_language

    def load(self) -> AppState:
        if not self.enabled or not self.path.exists():
            return AppState.from_persisted(None, self.default_language)
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable preferences file %s: %s", self.path, exc)
            document = None

        payload = document.get(STORAGE_KEY) if isinstance(document, dict) else None
        return AppState.from_persisted(payload, self.default_language)

    def save(self, state: AppState) -> None:
        if not self.enabled:
            return
        document = {STORAGE_KEY: state.to_persisted()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("could not write preferences file %s: %s", self.path, exc)
