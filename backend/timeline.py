import math


def estimate_timeline(remaining_credits: float, max_credits_per_term: float = 20) -> dict:
    """
    Rough graduation timeline estimate based on remaining program credits.

    Args:
        remaining_credits: credits still needed (solver "remaining_credits")
        max_credits_per_term: registration cap assumed for every term

    Returns:
        {
          "remaining_credits": 60,
          "estimated_min_terms": 3,
          "disclaimer": "..."
        }
    """
    remaining = max(0, remaining_credits)
    if remaining > 0 and max_credits_per_term > 0:
        estimated_terms = math.ceil(remaining / max_credits_per_term)
    else:
        estimated_terms = 0

    return {
        "remaining_credits": remaining,
        "estimated_min_terms": estimated_terms,
        "disclaimer": (
            f"Rough estimate. Assumes {max_credits_per_term:g} credits per term "
            "and every remaining course offered each term. Ignores prerequisites "
            "and failed courses that must be retaken."
        ),
    }
