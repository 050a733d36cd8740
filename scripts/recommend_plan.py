"""
Command-line what-if planner.

Reads a course export (CSV or JSON) and an optional curriculum table, then
prints the current GPA and a suggested per-course plan.

Usage:
    python scripts/recommend_plan.py --courses my_courses.csv --target 3.2
    python scripts/recommend_plan.py --courses my_courses.json --curriculum mis.tsv \
        --strategy easiest --mode optimized --terms 3
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "backend"))

from curriculum import default_curriculum
from data_loader import ImportFormatError, import_courses_csv, import_courses_json, load_curriculum
from gpa import quality_points, total_credits, weighted_gpa10, weighted_gpa4
from plan_defaults import DEFAULT_RECOMMENDATION_CONFIG, MODES, STRATEGIES
from recommender import generate_recommendation
from timeline import estimate_timeline

_TAG = "[recommend-plan]"


def load_courses(path: str) -> list[dict]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if path.lower().endswith(".json"):
        return import_courses_json(text)
    return import_courses_csv(text)


def format_plan(result: dict) -> str:
    lines = [
        f"Feasibility: {result['feasibility']}",
        f"Required average on remaining credits: {result['required_avg_gpa_on_remaining']:.2f}",
        result["message"],
    ]
    if result["plan"]:
        lines.append("")
        lines.append(f"{'Code':<10} {'Course':<36} {'Cr':>4} {'Diff':>4} {'GPA':>4} {'Ltr':>3}  Score10")
        for rec in result["plan"]:
            rng = rec["suggested_score10_range"]
            lines.append(
                f"{str(rec['course_code'] or ''):<10} {rec['course_name'][:36]:<36} "
                f"{rec['credits']:>4g} {rec['difficulty']:>4} {rec['suggested_gpa4']:>4.1f} "
                f"{rec['suggested_letter']:>3}  {rng['min']:g}-{rng['max']:g}"
            )
        lines.append("")
        lines.append(
            f"Plan: {result['plan_total_credits']:g} credits, "
            f"{result['plan_total_quality_points']:.2f} quality points; "
            f"{result['remaining_after_plan']:g} credits left after the plan."
        )
    return "\n".join(lines)


def main(argv=None) -> int:
    defaults = DEFAULT_RECOMMENDATION_CONFIG
    parser = argparse.ArgumentParser(description="Suggest per-course grades to reach a target GPA")
    parser.add_argument("--courses", required=True, help="Course export (.csv or .json)")
    parser.add_argument("--curriculum", help="Curriculum CSV/TSV (default: built-in template)")
    parser.add_argument("--target", type=float, default=defaults["target_gpa"], help="Target cumulative GPA (4.0 scale)")
    parser.add_argument("--program-credits", type=float, default=defaults["total_program_credits"])
    parser.add_argument("--max-credits", type=float, default=defaults["max_credits_per_term"], help="Credit cap per term")
    parser.add_argument("--terms", type=int, default=defaults["term_count_to_plan"], help="Terms to plan")
    parser.add_argument("--baseline", type=float, default=defaults["baseline_gpa"], help="GPA assumed outside the plan")
    parser.add_argument("--strategy", choices=STRATEGIES, default=defaults["strategy"])
    parser.add_argument("--mode", choices=MODES, default=defaults["mode"])
    parser.add_argument("--category", action="append", dest="categories", help="Restrict to a category (repeatable)")
    parser.add_argument("--electives-only", action="store_true")
    args = parser.parse_args(argv)

    try:
        courses = load_courses(args.courses)
    except FileNotFoundError:
        print(f"{_TAG} ERROR: course file not found: {args.courses}", file=sys.stderr)
        return 1
    except ImportFormatError as exc:
        print(f"{_TAG} ERROR: {exc}", file=sys.stderr)
        return 1

    if args.curriculum:
        try:
            curriculum = load_curriculum(args.curriculum)
        except FileNotFoundError:
            print(f"{_TAG} ERROR: curriculum file not found: {args.curriculum}", file=sys.stderr)
            return 1
    else:
        curriculum = default_curriculum()

    print(
        f"{_TAG} {len(courses)} courses, GPA4 {weighted_gpa4(courses):.2f}, "
        f"GPA10 {weighted_gpa10(courses):.2f}, "
        f"{total_credits(courses):g} credits, {quality_points(courses):.1f} quality points"
    )

    result = generate_recommendation(curriculum, courses, {
        "target_gpa": args.target,
        "total_program_credits": args.program_credits,
        "max_credits_per_term": args.max_credits,
        "term_count_to_plan": args.terms,
        "strategy": args.strategy,
        "baseline_gpa": args.baseline,
        "mode": args.mode,
        "preferred_categories": args.categories or [],
        "electives_only": args.electives_only,
    })
    print(format_plan(result))

    timeline = estimate_timeline(
        result["remaining_after_plan"] + result["plan_total_credits"],
        args.max_credits,
    )
    print(f"{_TAG} Estimated terms to graduate: {timeline['estimated_min_terms']} ({timeline['disclaimer']})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
