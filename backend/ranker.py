from plan_defaults import DEFAULT_CATEGORY, DEFAULT_DIFFICULTY


def course_difficulty(course: dict) -> int:
    # Missing or 0 difficulty both mean "unrated".
    return course.get("difficulty") or DEFAULT_DIFFICULTY


def ease_score(course: dict) -> float:
    """High-credit, low-difficulty courses score highest."""
    return course["credits"] * (6 - course_difficulty(course))


def rank_courses(courses: list[dict], strategy: str) -> list[dict]:
    """
    Order courses for plan selection. Sorts are stable, so equal keys keep
    their input order. Unknown strategies return the input order unchanged.

    easiest:    difficulty asc, then credits asc
    mostImpact: credits desc
    balanced:   ease_score desc
    """
    ranked = list(courses)
    if strategy == "easiest":
        ranked.sort(key=lambda c: (course_difficulty(c), c["credits"]))
    elif strategy == "mostImpact":
        ranked.sort(key=lambda c: c["credits"], reverse=True)
    elif strategy == "balanced":
        ranked.sort(key=ease_score, reverse=True)
    return ranked


def _filter_categories(
    courses: list[dict],
    preferred_categories: list[str] | None,
    electives_only: bool,
) -> list[dict]:
    candidates = list(courses)
    if preferred_categories:
        allowed = set(preferred_categories)
        candidates = [
            c for c in candidates
            if (c.get("category") or DEFAULT_CATEGORY) in allowed
        ]
    if electives_only:
        candidates = [c for c in candidates if c.get("category") == "elective"]
    return candidates


def select_courses_for_plan(
    remaining_courses: list[dict],
    max_credits_per_term: float,
    term_count: int,
    strategy: str,
    preferred_categories: list[str] | None = None,
    electives_only: bool = False,
) -> list[dict]:
    """
    Greedy budgeted pick over the ranked list.

    A course that would push the running total past
    max_credits_per_term * term_count is skipped and the next one is tried.
    """
    candidates = _filter_categories(remaining_courses, preferred_categories, electives_only)
    ranked = rank_courses(candidates, strategy)

    budget = max_credits_per_term * term_count
    selected: list[dict] = []
    used = 0
    for course in ranked:
        if used + course["credits"] <= budget:
            selected.append(course)
            used += course["credits"]
    return selected
