"""
Pure input-validation helpers for the API endpoints.
No Flask imports. Every helper returns (error_code, message) on invalid
input and (None, None) on success. The engine itself never validates;
these checks guard it at the request boundary.
"""

from typing import Optional, Tuple

from plan_defaults import COURSE_CATEGORIES, MAX_GPA4, MODES, STRATEGIES

INVALID_INPUT = "INVALID_INPUT"

_VALID_STATUSES = {"passed", "failed", "in_progress"}

ValidationError = Tuple[Optional[str], Optional[str]]


def _as_number(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_course_records(records) -> ValidationError:
    """Course rows: name, credits > 0, score10 within [0, 10], boolean is_planned."""
    if not isinstance(records, list):
        return INVALID_INPUT, "'courses' must be a list of course objects."
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            return INVALID_INPUT, f"courses[{i}] must be an object."
        if not str(rec.get("course_name") or "").strip():
            return INVALID_INPUT, f"courses[{i}] is missing 'course_name'."
        credits = _as_number(rec.get("credits"))
        if credits is None or credits <= 0:
            return INVALID_INPUT, f"courses[{i}].credits must be a number greater than 0."
        score = _as_number(rec.get("score10"))
        if score is None or not (0 <= score <= 10):
            return INVALID_INPUT, f"courses[{i}].score10 must be a number between 0 and 10."
        planned = rec.get("is_planned")
        if planned is not None and not isinstance(planned, bool):
            return INVALID_INPUT, f"courses[{i}].is_planned must be true or false."
        status = rec.get("status")
        if status not in (None, "") and status not in _VALID_STATUSES:
            return INVALID_INPUT, f"courses[{i}].status '{status}' is not one of passed, failed, in_progress."
    return None, None


def validate_curriculum_records(records) -> ValidationError:
    """Curriculum rows: unique code, name, credits > 0, difficulty 1-5 when given."""
    if not isinstance(records, list):
        return INVALID_INPUT, "'curriculum' must be a list of course objects."
    seen: set[str] = set()
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            return INVALID_INPUT, f"curriculum[{i}] must be an object."
        code = str(rec.get("course_code") or "").strip()
        if not code:
            return INVALID_INPUT, f"curriculum[{i}] is missing 'course_code'."
        if code in seen:
            return INVALID_INPUT, f"Duplicate curriculum course_code '{code}'."
        seen.add(code)
        if not str(rec.get("course_name") or "").strip():
            return INVALID_INPUT, f"curriculum[{i}] is missing 'course_name'."
        credits = _as_number(rec.get("credits"))
        if credits is None or credits <= 0:
            return INVALID_INPUT, f"curriculum[{i}].credits must be a number greater than 0."
        difficulty = rec.get("difficulty")
        if difficulty is not None:
            if isinstance(difficulty, bool) or not isinstance(difficulty, int) or not (1 <= difficulty <= 5):
                return INVALID_INPUT, f"curriculum[{i}].difficulty must be an integer between 1 and 5."
        category = rec.get("category")
        if category not in (None, "") and category not in COURSE_CATEGORIES:
            return INVALID_INPUT, f"curriculum[{i}].category '{category}' is not a known category."
    return None, None


def validate_target_fields(body: dict) -> ValidationError:
    target = _as_number(body.get("target_gpa"))
    if target is None or not (0 <= target <= MAX_GPA4):
        return INVALID_INPUT, "target_gpa must be a number between 0 and 4."
    program = _as_number(body.get("total_program_credits"))
    if program is None or program <= 0:
        return INVALID_INPUT, "total_program_credits must be a number greater than 0."
    return None, None


def validate_recommendation_config(config) -> ValidationError:
    """
    Validate a (possibly partial) recommendation config. Absent keys are
    fine; resolve_config fills them from defaults.
    """
    if config is None:
        return None, None
    if not isinstance(config, dict):
        return INVALID_INPUT, "'config' must be an object."

    for field in ("target_gpa", "baseline_gpa"):
        if config.get(field) is None:
            continue
        val = _as_number(config[field])
        if val is None or not (0 <= val <= MAX_GPA4):
            return INVALID_INPUT, f"{field} must be a number between 0 and 4."

    for field in ("total_program_credits", "max_credits_per_term"):
        if config.get(field) is None:
            continue
        val = _as_number(config[field])
        if val is None or val <= 0:
            return INVALID_INPUT, f"{field} must be a number greater than 0."

    terms = config.get("term_count_to_plan")
    if terms is not None:
        if isinstance(terms, bool) or not isinstance(terms, int) or terms < 1:
            return INVALID_INPUT, "term_count_to_plan must be an integer of at least 1."

    strategy = config.get("strategy")
    if strategy is not None and strategy not in STRATEGIES:
        return INVALID_INPUT, f"strategy must be one of: {', '.join(STRATEGIES)}."

    mode = config.get("mode")
    if mode is not None and mode not in MODES:
        return INVALID_INPUT, f"mode must be one of: {', '.join(MODES)}."

    categories = config.get("preferred_categories")
    if categories is not None:
        if not isinstance(categories, list) or any(c not in COURSE_CATEGORIES for c in categories):
            return INVALID_INPUT, "preferred_categories must be a list of known categories."

    return None, None
