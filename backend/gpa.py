import pandas as pd

from grade_scale import GRADE_LETTERS, score_to_grade
from target_solver import solve_required_gpa


def _is_planned(course: dict) -> bool:
    return bool(course.get("is_planned", False))


def _completed(courses: list[dict]) -> list[dict]:
    return [c for c in courses if not _is_planned(c)]


def _in_semester(courses: list[dict], semester: str) -> list[dict]:
    # Blank labels never match, even when asked for "".
    if not semester:
        return []
    return [
        c for c in courses
        if c.get("semester") == semester and not _is_planned(c)
    ]


def _weighted(courses: list[dict], value_of) -> float:
    total_credits = sum(c["credits"] for c in courses)
    if total_credits <= 0:
        return 0.0
    return sum(value_of(c) * c["credits"] for c in courses) / total_credits


def _gpa4_of(course: dict) -> float:
    return score_to_grade(course["score10"])["gpa4"]


def weighted_gpa4(courses: list[dict]) -> float:
    """Cumulative 4.0-scale GPA over non-planned courses. 0 when there are no credits."""
    return _weighted(_completed(courses), _gpa4_of)


def weighted_gpa10(courses: list[dict]) -> float:
    """Credit-weighted average of raw 0-10 scores over non-planned courses."""
    return _weighted(_completed(courses), lambda c: c["score10"])


def quality_points(courses: list[dict]) -> float:
    return sum(_gpa4_of(c) * c["credits"] for c in _completed(courses))


def total_credits(courses: list[dict], include_planned: bool = False) -> float:
    counted = courses if include_planned else _completed(courses)
    return sum(c["credits"] for c in counted)


def projected_gpa4(courses: list[dict]) -> float:
    """
    What-if GPA: same formula as weighted_gpa4 but planned courses count.
    The caller decides which subset to pass.
    """
    return _weighted(list(courses), _gpa4_of)


def semester_gpa4(courses: list[dict], semester: str) -> float:
    return weighted_gpa4(_in_semester(courses, semester))


def semester_gpa10(courses: list[dict], semester: str) -> float:
    return weighted_gpa10(_in_semester(courses, semester))


def semester_credits(courses: list[dict], semester: str) -> float:
    return total_credits(_in_semester(courses, semester))


def semester_summary(courses: list[dict]) -> list[dict]:
    """One row per labelled semester, in first-seen order."""
    labels = list(dict.fromkeys(
        c.get("semester") for c in _completed(courses) if c.get("semester")
    ))
    return [
        {
            "semester": label,
            "gpa4": semester_gpa4(courses, label),
            "gpa10": semester_gpa10(courses, label),
            "credits": semester_credits(courses, label),
        }
        for label in labels
    ]


def grade_distribution(courses: list[dict]) -> list[dict]:
    """
    Credits and course counts per letter grade, non-planned courses only.

    Returns rows in scale order (A first); letters with no courses are omitted:
      [{"letter": "A", "credits": 6.0, "count": 2}, ...]
    """
    completed = _completed(courses)
    if not completed:
        return []

    df = pd.DataFrame({
        "letter": [score_to_grade(c["score10"])["letter"] for c in completed],
        "credits": [float(c["credits"]) for c in completed],
    })
    grouped = df.groupby("letter", sort=False)["credits"].agg(["sum", "count"])

    rows = []
    for letter in GRADE_LETTERS:
        if letter not in grouped.index:
            continue
        rows.append({
            "letter": letter,
            "credits": float(grouped.at[letter, "sum"]),
            "count": int(grouped.at[letter, "count"]),
        })
    return rows


def required_gpa_for_courses(
    courses: list[dict],
    target_gpa: float,
    total_program_credits: float,
) -> dict:
    """
    Target calculator over a raw course list.

    Counts every non-planned course (failed ones included), unlike the
    recommender which only credits passed courses.
    """
    return solve_required_gpa(
        quality_points(courses),
        total_credits(courses),
        target_gpa,
        total_program_credits,
    )
