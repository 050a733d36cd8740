# Difficulty assumed for curriculum rows that do not carry a rating (1-5 scale).
DEFAULT_DIFFICULTY = 3

# Highest grade point on the 4.0 scale.
MAX_GPA4 = 4.0

# Simple mode: shift applied to the required average for hard (>=4) and easy (<=2) courses.
DIFFICULTY_ADJUSTMENT = 0.2

# Optimized mode: a rung raise is accepted only if the plan overshoots its target by at most this.
OVERSHOOT_TOLERANCE = 0.1

# Optimized mode: starting grade point never goes below this floor.
OPTIMIZED_MIN_BASELINE = 2.0

# Optimized mode: baseline shift per difficulty step away from DEFAULT_DIFFICULTY.
OPTIMIZED_DIFFICULTY_STEP = 0.2

# Category assumed when a curriculum row has none (used by preferred-category filtering).
DEFAULT_CATEGORY = "general"

COURSE_CATEGORIES = ("general", "major", "elective", "internship", "thesis")

STRATEGIES = ("easiest", "mostImpact", "balanced")

MODES = ("simple", "optimized")

DEFAULT_RECOMMENDATION_CONFIG = {
    "target_gpa": 3.2,
    "total_program_credits": 130,
    "max_credits_per_term": 20,
    "term_count_to_plan": 2,
    "strategy": "balanced",
    "baseline_gpa": 3.0,
    "mode": "simple",
    "preferred_categories": [],
    "electives_only": False,
}
