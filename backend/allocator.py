from grade_scale import (
    ceil_to_ladder,
    grade_to_score_range,
    letter_for_gpa4,
    next_ladder_value,
    snap_to_ladder,
)
from plan_defaults import (
    DIFFICULTY_ADJUSTMENT,
    MAX_GPA4,
    OPTIMIZED_DIFFICULTY_STEP,
    OPTIMIZED_MIN_BASELINE,
    OVERSHOOT_TOLERANCE,
)
from ranker import course_difficulty, ease_score

# Baselines are rounded before lifting onto the ladder so float noise
# (3.2 - 0.2 == 3.0000000000000004) does not push them up a rung.
_BASELINE_PRECISION = 6


def build_recommended_course(course: dict, gpa4: float) -> dict:
    return {
        "course_code": course.get("course_code"),
        "course_name": course.get("course_name", ""),
        "credits": course["credits"],
        "difficulty": course_difficulty(course),
        "suggested_gpa4": gpa4,
        "suggested_letter": letter_for_gpa4(gpa4),
        "suggested_score10_range": grade_to_score_range(gpa4),
    }


def _difficulty_adjusted(required_avg_gpa: float, difficulty: int) -> float:
    if difficulty >= 4:
        return max(0.0, required_avg_gpa - DIFFICULTY_ADJUSTMENT)
    if difficulty <= 2:
        return min(MAX_GPA4, required_avg_gpa + DIFFICULTY_ADJUSTMENT)
    return required_avg_gpa


def allocate_simple(selected_courses: list[dict], required_avg_gpa: float) -> list[dict]:
    """
    Give every course the plan's required average, nudged by difficulty,
    then snapped to the ladder.

    Best-effort: the plan's quality points need not equal the target exactly.
    """
    return [
        build_recommended_course(
            course,
            snap_to_ladder(_difficulty_adjusted(required_avg_gpa, course_difficulty(course))),
        )
        for course in selected_courses
    ]


def optimized_baseline(course: dict, baseline_gpa: float) -> float:
    """Starting rung for a course: baseline shifted by difficulty, floored, lifted onto the ladder."""
    raw = max(
        OPTIMIZED_MIN_BASELINE,
        baseline_gpa - (course_difficulty(course) - 3) * OPTIMIZED_DIFFICULTY_STEP,
    )
    return ceil_to_ladder(round(raw, _BASELINE_PRECISION))


def _greedy_raise(
    grades: tuple[float, ...],
    order: list[int],
    credits: list[float],
    total: float,
    target: float,
) -> tuple[tuple[float, ...], float]:
    """
    Single pass over `order`: each course may climb one rung while the
    running total is below target and the raise stays within tolerance.
    Returns the new grades and the new total; inputs are not modified.
    """
    updated = list(grades)
    for idx in order:
        if total >= target:
            break
        nxt = next_ladder_value(updated[idx])
        if nxt is None:
            continue
        delta = (nxt - updated[idx]) * credits[idx]
        if total + delta <= target + OVERSHOOT_TOLERANCE:
            updated[idx] = nxt
            total += delta
    return tuple(updated), total


def allocate_optimized(
    selected_courses: list[dict],
    required_plan_qp: float,
    baseline_gpa: float,
) -> list[dict]:
    """
    Greedy search that starts every course at its baseline and raises the
    easiest, heaviest courses first (ease_score order, independent of the
    selection strategy).

    Never lowers a course below its baseline. Can undershoot the target,
    since each course moves at most one rung.

    The one-rung raise counts from the baseline after it is lifted onto the
    ladder, so at baseline 3.0 a difficulty 4 or 5 course starts at 3.0, not 2.8 or 2.6.
    """
    credits = [c["credits"] for c in selected_courses]
    grades = tuple(optimized_baseline(c, baseline_gpa) for c in selected_courses)
    total = sum(g * cr for g, cr in zip(grades, credits))

    order = sorted(
        range(len(selected_courses)),
        key=lambda i: ease_score(selected_courses[i]),
        reverse=True,
    )
    grades, _ = _greedy_raise(grades, order, credits, total, required_plan_qp)

    return [
        build_recommended_course(course, gpa4)
        for course, gpa4 in zip(selected_courses, grades)
    ]
