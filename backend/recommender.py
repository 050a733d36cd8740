from grade_scale import score_to_grade
from plan_defaults import DEFAULT_RECOMMENDATION_CONFIG, MAX_GPA4
from curriculum import get_remaining_courses, is_passed
from ranker import select_courses_for_plan
from allocator import allocate_optimized, allocate_simple
from target_solver import (
    FEASIBILITY_FEASIBLE,
    FEASIBILITY_IMPOSSIBLE,
    solve_required_gpa,
)

_PLAN_TOO_SMALL_MSG = (
    "This plan does not carry enough credits or the baseline GPA is too low. "
    "Increase the plan credits or the baseline GPA."
)


def resolve_config(config: dict | None) -> dict:
    """Overlay caller settings on DEFAULT_RECOMMENDATION_CONFIG. None values fall back to defaults."""
    merged = dict(DEFAULT_RECOMMENDATION_CONFIG)
    for key, value in (config or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def _empty_result(required_gpa, feasibility, message, plan_credits, remaining_after_plan) -> dict:
    return {
        "required_avg_gpa_on_remaining": required_gpa,
        "feasibility": feasibility,
        "message": message,
        "plan": [],
        "plan_total_credits": plan_credits,
        "plan_total_quality_points": 0.0,
        "remaining_after_plan": remaining_after_plan,
        "required_plan_quality_points": 0.0,
        "selected_count": 0,
    }


def generate_recommendation(
    curriculum: list[dict],
    completed_courses: list[dict],
    config: dict | None = None,
) -> dict:
    """
    Build a what-if plan that reaches config["target_gpa"].

    Pipeline: passed courses -> target solve -> rank/select remaining
    curriculum -> allocate grade points per course.

    Courses outside the plan are assumed to finish at baseline_gpa.
    Returns the recommendation result dict; inputs are never modified.
    """
    cfg = resolve_config(config)
    target_gpa = cfg["target_gpa"]
    program_credits = cfg["total_program_credits"]
    baseline_gpa = cfg["baseline_gpa"]

    passed = [c for c in completed_courses if is_passed(c)]
    current_qp = sum(score_to_grade(c["score10"])["gpa4"] * c["credits"] for c in passed)
    current_credits = sum(c["credits"] for c in passed)

    remaining_courses = get_remaining_courses(curriculum, completed_courses)

    solved = solve_required_gpa(current_qp, current_credits, target_gpa, program_credits)
    remaining_credits = solved["remaining_credits"]

    if solved["feasibility"] != FEASIBILITY_FEASIBLE:
        print(
            f"[INFO] Recommendation short-circuit: feasibility={solved['feasibility']} "
            f"remaining_credits={remaining_credits:g}"
        )
        return _empty_result(
            solved["required_gpa"],
            solved["feasibility"],
            solved["message"],
            0,
            remaining_credits,
        )

    selected = select_courses_for_plan(
        remaining_courses,
        cfg["max_credits_per_term"],
        cfg["term_count_to_plan"],
        cfg["strategy"],
        preferred_categories=cfg.get("preferred_categories"),
        electives_only=bool(cfg.get("electives_only")),
    )
    plan_credits = sum(c["credits"] for c in selected)
    remaining_after_plan = remaining_credits - plan_credits

    required_plan_qp = (
        target_gpa * program_credits
        - current_qp
        - baseline_gpa * remaining_after_plan
    )
    required_avg_on_plan = required_plan_qp / plan_credits if plan_credits > 0 else 0.0

    if required_avg_on_plan > MAX_GPA4:
        print(
            f"[INFO] Recommendation impossible for plan: required_avg_on_plan={required_avg_on_plan:.2f} "
            f"plan_credits={plan_credits:g}"
        )
        return _empty_result(
            solved["required_gpa"],
            FEASIBILITY_IMPOSSIBLE,
            _PLAN_TOO_SMALL_MSG,
            plan_credits,
            remaining_after_plan,
        )

    if cfg["mode"] == "optimized":
        plan = allocate_optimized(selected, required_plan_qp, baseline_gpa)
    else:
        plan = allocate_simple(selected, required_avg_on_plan)

    plan_qp = sum(c["suggested_gpa4"] * c["credits"] for c in plan)
    print(
        f"[INFO] Recommendation mode={cfg['mode']} strategy={cfg['strategy']} "
        f"courses={len(plan)} plan_credits={plan_credits:g} "
        f"plan_qp={plan_qp:.2f} required_plan_qp={required_plan_qp:.2f}"
    )

    return {
        "required_avg_gpa_on_remaining": solved["required_gpa"],
        "feasibility": FEASIBILITY_FEASIBLE,
        "message": solved["message"],
        "plan": plan,
        "plan_total_credits": plan_credits,
        "plan_total_quality_points": plan_qp,
        "remaining_after_plan": remaining_after_plan,
        "required_plan_quality_points": required_plan_qp,
        "selected_count": len(selected),
    }
