from plan_defaults import MAX_GPA4

FEASIBILITY_ACHIEVED = "achieved"
FEASIBILITY_FEASIBLE = "feasible"
FEASIBILITY_IMPOSSIBLE = "impossible"

_MSG_ACHIEVED = "Target already met."
_MSG_IMPOSSIBLE = "Target is not achievable on a 4.0 scale."


def solve_required_gpa(
    current_qp: float,
    current_credits: float,
    target_gpa: float,
    total_program_credits: float,
) -> dict:
    """
    Solve for the average 4.0-scale GPA needed on the remaining credits.

    target_gpa is not clamped. Returns:
      {
        "required_gpa": 3.25,          # clamped to [0, 4.0] for display
        "remaining_credits": 60,
        "feasibility": "feasible",     # achieved | feasible | impossible
        "message": "...",
      }
    """
    remaining = total_program_credits - current_credits

    if remaining <= 0:
        return {
            "required_gpa": 0.0,
            "remaining_credits": 0,
            "feasibility": FEASIBILITY_ACHIEVED,
            "message": _MSG_ACHIEVED,
        }

    required_qp = target_gpa * total_program_credits - current_qp
    required = required_qp / remaining

    if required > MAX_GPA4:
        return {
            "required_gpa": MAX_GPA4,
            "remaining_credits": remaining,
            "feasibility": FEASIBILITY_IMPOSSIBLE,
            "message": _MSG_IMPOSSIBLE,
        }

    if required < 0:
        return {
            "required_gpa": 0.0,
            "remaining_credits": remaining,
            "feasibility": FEASIBILITY_ACHIEVED,
            "message": _MSG_ACHIEVED,
        }

    return {
        "required_gpa": required,
        "remaining_credits": remaining,
        "feasibility": FEASIBILITY_FEASIBLE,
        "message": (
            f"Need an average GPA of {required:.2f} "
            f"over the remaining {remaining:g} credits."
        ),
    }
