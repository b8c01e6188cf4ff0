from datetime import datetime, timedelta, timezone

from safespace.services.triage import ProblemId


SUPPORTED_LANGUAGES: list[dict[str, str]] = [
    {"code": "en", "name": "English"},
    {"code": "hi", "name": "हिंदी"},
    {"code": "ks", "name": "کٲشُر"},
]

LANGUAGE_CODES = frozenset(lang["code"] for lang in SUPPORTED_LANGUAGES)

PROBLEM_INTERFACES: dict[ProblemId, dict[str, str]] = {
    ProblemId.PLACEMENT_CAREER_ANXIETY: {
        "title": "Placement & Career Anxiety",
        "description": "Support for interview nerves, placement season pressure and uncertainty about your career path.",
    },
    ProblemId.RELATIONSHIP_ISSUES: {
        "title": "Relationship Issues",
        "description": "A space to work through breakups, dating worries and strain with a partner.",
    },
    ProblemId.SLEEP_BURNOUT: {
        "title": "Sleep & Burnout",
        "description": "Routines and guidance for restless nights, exhaustion and recovering your energy.",
    },
    ProblemId.ACADEMIC_STRESS: {
        "title": "Academic Stress",
        "description": "Help with exam pressure, assignment overload and keeping up with coursework.",
    },
    ProblemId.FAMILY_PERSONAL_ISSUES: {
        "title": "Family & Personal Issues",
        "description": "Support for conflict at home, expectations from parents and personal difficulties.",
    },
    ProblemId.SOCIAL_ISOLATION: {
        "title": "Social Isolation",
        "description": "Ways to reconnect when you feel lonely, left out or far from friends.",
    },
    ProblemId.OTHER_MIXED: {
        "title": "General Wellbeing",
        "description": "A mix of resources and counsellor support for whatever you are going through.",
    },
}

INSTITUTIONS: list[str] = [
    "University of Kashmir",
    "National Institute of Technology Srinagar",
    "Government Medical College Srinagar",
    "Jammu University",
    "IIT Delhi",
    "Delhi University",
    "Jawaharlal Nehru University",
]

COUNSELLORS: list[dict[str, object]] = [
    {
        "id": "c1",
        "name": "Dr. Sarah Johnson",
        "designation": "Clinical Psychologist",
        "department": "Student Wellness Center",
        "specializations": ["Anxiety", "Depression", "Academic Stress"],
        "rating": 4.8,
        "available_slots": ["Today 2:00 PM", "Tomorrow 10:00 AM", "Tomorrow 3:00 PM"],
        "contact_methods": ["chat", "video", "in-person"],
        "location": "Wellness Center, Room 204",
    },
    {
        "id": "c2",
        "name": "Prof. Michael Chen",
        "designation": "Counselling Psychologist",
        "department": "Mental Health Services",
        "specializations": ["Career Anxiety", "Relationship Issues", "Life Transitions"],
        "rating": 4.9,
        "available_slots": ["Today 4:00 PM", "Tomorrow 1:00 PM"],
        "contact_methods": ["chat", "phone", "video"],
        "location": "Health Center, 3rd Floor",
    },
    {
        "id": "c3",
        "name": "Dr. Priya Sharma",
        "designation": "Mental Health Counsellor",
        "department": "Student Support Services",
        "specializations": ["Family Issues", "Cultural Adjustment", "Sleep Issues"],
        "rating": 4.7,
        "available_slots": ["Tomorrow 9:00 AM", "Tomorrow 2:00 PM", "Day after 11:00 AM"],
        "contact_methods": ["chat", "video", "in-person"],
        "location": "Student Center, Room 105",
    },
]

MINDFULNESS_GAMES: list[dict[str, object]] = [
    {
        "id": "breathing",
        "title": "Breathing Bubbles",
        "description": "Follow the expanding bubble to practice deep breathing",
        "duration": "5 min",
        "difficulty": "Easy",
        "points": 10,
    },
    {
        "id": "focus",
        "title": "Focus Garden",
        "description": "Water virtual plants by maintaining focus",
        "duration": "10 min",
        "difficulty": "Medium",
        "points": 20,
    },
    {
        "id": "memory",
        "title": "Memory Palace",
        "description": "Build concentration through pattern memory games",
        "duration": "8 min",
        "difficulty": "Hard",
        "points": 30,
    },
]

RELAXATION_TRACKS: list[dict[str, str]] = [
    {"id": "rain", "title": "Gentle Rain", "category": "Nature", "duration": "30:00", "description": "Soft rainfall for deep relaxation"},
    {"id": "ocean", "title": "Ocean Waves", "category": "Nature", "duration": "45:00", "description": "Rhythmic waves by the shore"},
    {"id": "forest", "title": "Forest Ambience", "category": "Nature", "duration": "60:00", "description": "Peaceful woodland sounds"},
    {"id": "wind", "title": "Mountain Breeze", "category": "Nature", "duration": "40:00", "description": "Calming wind through trees"},
    {"id": "meditation", "title": "Deep Focus", "category": "Meditation", "duration": "20:00", "description": "Binaural beats for concentration"},
]


def find_game(game_id: str) -> dict[str, object] | None:
    return next((g for g in MINDFULNESS_GAMES if g["id"] == game_id), None)


def filter_tracks(category: str | None = None) -> list[dict[str, str]]:
    if not category:
        return list(RELAXATION_TRACKS)
    wanted = category.strip().lower()
    return [t for t in RELAXATION_TRACKS if t["category"].lower() == wanted]


def search_institutions(search: str | None = None) -> list[str]:
    term = (search or "").strip().lower()
    return [name for name in INSTITUTIONS if term in name.lower()]


def mock_counsellor_requests(now: datetime | None = None) -> list[dict[str, object]]:
    now = now or datetime.now(timezone.utc)
    return [
        {
            "id": "1",
            "student_id": "anon_student_001",
            "institution": "University of Kashmir",
            "type": "urgent",
            "message": "Need immediate support for anxiety",
            "timestamp": now - timedelta(minutes=30),
            "status": "pending",
        },
        {
            "id": "2",
            "student_id": "anon_student_002",
            "institution": "University of Kashmir",
            "type": "scheduled",
            "message": "Would like to schedule a session for academic stress",
            "timestamp": now - timedelta(hours=2),
            "status": "pending",
        },
        {
            "id": "3",
            "student_id": "anon_student_003",
            "institution": "University of Kashmir",
            "type": "chat",
            "message": "Feeling overwhelmed with coursework",
            "timestamp": now - timedelta(hours=4),
            "status": "active",
        },
    ]


def format_time_ago(timestamp: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    minutes = int((now - timestamp).total_seconds() // 60)
    if minutes < 60:
        return f"{minutes}m ago"
    return f"{minutes // 60}h ago"
