import pytest

from safespace.services.triage import (
    DEFAULT_PROBLEM,
    TRIAGE_RULES,
    ProblemId,
    extract_keywords,
    join_keywords,
    map_to_problem,
)


def test_career_rule_beats_academic_rule() -> None:
    assert map_to_problem(0, 12, ["career", "exam"], {}) is ProblemId.PLACEMENT_CAREER_ANXIETY


def test_default_fallback() -> None:
    assert map_to_problem(0, 0, [], {}) is ProblemId.OTHER_MIXED
    assert map_to_problem(0, 0, []) is ProblemId.OTHER_MIXED


def test_sleep_rule_beats_academic_rule() -> None:
    assert map_to_problem(5, 5, ["exam"], {"sleep_issue_frequency": 4}) is ProblemId.SLEEP_BURNOUT


def test_career_keywords_need_high_anxiety() -> None:
    assert map_to_problem(20, 9, ["placement", "interview"], {}) is ProblemId.OTHER_MIXED
    assert map_to_problem(20, 10, ["placement"], {}) is ProblemId.PLACEMENT_CAREER_ANXIETY


def test_relationship_keywords_need_high_depression() -> None:
    assert map_to_problem(9, 0, ["breakup"], {}) is ProblemId.OTHER_MIXED
    assert map_to_problem(10, 0, ["breakup"], {}) is ProblemId.RELATIONSHIP_ISSUES


def test_career_rule_beats_relationship_rule() -> None:
    assert map_to_problem(15, 15, ["partner", "job"], {}) is ProblemId.PLACEMENT_CAREER_ANXIETY


def test_relationship_rule_beats_sleep_rule() -> None:
    assert map_to_problem(12, 0, ["love"], {"sleep_issue_frequency": 5}) is ProblemId.RELATIONSHIP_ISSUES


@pytest.mark.parametrize(
    ("keywords", "expected"),
    [
        (["assignment"], ProblemId.ACADEMIC_STRESS),
        (["testing"], ProblemId.ACADEMIC_STRESS),
        (["parents"], ProblemId.FAMILY_PERSONAL_ISSUES),
        (["homesick"], ProblemId.FAMILY_PERSONAL_ISSUES),
        (["lonely"], ProblemId.SOCIAL_ISOLATION),
        (["friends", "alone"], ProblemId.SOCIAL_ISOLATION),
        (["weather"], ProblemId.OTHER_MIXED),
    ],
)
def test_keyword_rules_without_score_gates(keywords: list[str], expected: ProblemId) -> None:
    assert map_to_problem(0, 0, keywords, {}) is expected


def test_academic_beats_family_beats_social() -> None:
    assert map_to_problem(0, 0, ["lonely", "family", "study"], {}) is ProblemId.ACADEMIC_STRESS
    assert map_to_problem(0, 0, ["lonely", "family"], {}) is ProblemId.FAMILY_PERSONAL_ISSUES


def test_sleep_threshold() -> None:
    assert map_to_problem(0, 0, [], {"sleep_issue_frequency": 3}) is ProblemId.SLEEP_BURNOUT
    assert map_to_problem(0, 0, [], {"sleep_issue_frequency": 1}) is ProblemId.OTHER_MIXED
    assert map_to_problem(0, 0, [], {"sleep_issue_frequency": "4"}) is ProblemId.SLEEP_BURNOUT
    assert map_to_problem(0, 0, [], {"sleep_issue_frequency": None}) is ProblemId.OTHER_MIXED
    assert map_to_problem(0, 0, [], {"sleep_issue_frequency": "often"}) is ProblemId.OTHER_MIXED


def test_matching_is_case_insensitive() -> None:
    assert map_to_problem(0, 11, ["CAREER"], {}) is ProblemId.PLACEMENT_CAREER_ANXIETY


def test_keywords_match_as_substrings_of_the_joined_text() -> None:
    assert join_keywords(["Hom", "ework"]) == "hom ework"
    assert map_to_problem(0, 0, ["hom", "ework"], {}) is ProblemId.OTHER_MIXED
    assert map_to_problem(0, 0, ["examination"], {}) is ProblemId.ACADEMIC_STRESS
    assert map_to_problem(0, 0, ["antisocial"], {}) is ProblemId.SOCIAL_ISOLATION
    assert map_to_problem(0, 11, ["jobless"], {}) is ProblemId.PLACEMENT_CAREER_ANXIETY


def test_rule_table_covers_every_problem_id() -> None:
    produced = [rule.problem_id for rule in TRIAGE_RULES] + [DEFAULT_PROBLEM]
    assert sorted(produced, key=lambda p: p.value) == sorted(ProblemId, key=lambda p: p.value)
    assert len(produced) == len(set(produced))


def test_extract_keywords() -> None:
    assert extract_keywords("Exam stress and my Family") == ["exam", "stress", "and", "family"]
    assert extract_keywords("  a  to be ") == []
    assert extract_keywords(None) == []
