from plan_defaults import MAX_GPA4

# (min_score10, max_score10, gpa4, letter), highest band first.
# Lower bound inclusive; the first row whose min <= score wins.
GRADE_SCALE = (
    (8.5, 10.0, 4.0, "A"),
    (8.0, 8.5, 3.5, "B+"),
    (7.0, 8.0, 3.0, "B"),
    (6.5, 7.0, 2.5, "C+"),
    (5.5, 6.5, 2.0, "C"),
    (5.0, 5.5, 1.5, "D+"),
    (4.0, 5.0, 1.0, "D"),
    (0.0, 4.0, 0.0, "F"),
)

# Ascending. Snapping scans this order, so ties go to the lower value.
GPA_LADDER = (0.0, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0)

GRADE_LETTERS = tuple(row[3] for row in GRADE_SCALE)


def score_to_grade(score10: float) -> dict:
    """
    Convert a 0-10 score to {"gpa4", "letter"}.

    No validation: negative scores fall through to F, scores above 10 land in A.
    """
    for min_score, _max_score, gpa4, letter in GRADE_SCALE:
        if score10 >= min_score:
            return {"gpa4": gpa4, "letter": letter}
    return {"gpa4": 0.0, "letter": "F"}


def grade_to_score_range(gpa4: float) -> dict:
    """
    Inverse lookup: the 0-10 band that maps to gpa4.

    Exact for ladder values only; callers snap other values first.
    """
    for min_score, max_score, band_gpa4, _letter in GRADE_SCALE:
        if gpa4 >= band_gpa4:
            return {"min": min_score, "max": max_score}
    return {"min": 0.0, "max": 4.0}


def snap_to_ladder(value: float) -> float:
    best = GPA_LADDER[0]
    for candidate in GPA_LADDER:
        if abs(candidate - value) < abs(best - value):
            best = candidate
    return best


def ceil_to_ladder(value: float) -> float:
    """Smallest ladder value >= value (clamped to the top rung)."""
    for candidate in GPA_LADDER:
        if candidate >= value:
            return candidate
    return MAX_GPA4


def next_ladder_value(value: float) -> float | None:
    """Smallest ladder value strictly above value, or None at the top."""
    for candidate in GPA_LADDER:
        if candidate > value:
            return candidate
    return None


def letter_for_gpa4(gpa4: float) -> str:
    snapped = snap_to_ladder(gpa4)
    return score_to_grade(grade_to_score_range(snapped)["min"])["letter"]
