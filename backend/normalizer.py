import re

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_course_name(name: str) -> str:
    """
    Normalizes a course name for fuzzy curriculum matching.
    Handles: 'Data Structures & Algorithms' -> 'data structures  algorithms' -> collapsed,
             '  Toán cao cấp 1 ' -> 'toán cao cấp 1'
    Accented letters count as word characters and are kept.
    """
    if not name:
        return ""
    lowered = str(name).lower()
    stripped = _NON_WORD.sub("", lowered)
    return _WHITESPACE.sub(" ", stripped).strip()


def normalize_code(raw) -> str | None:
    """
    Cleans an external course code read from an import file.
    Returns None for blank values. Codes are otherwise kept verbatim;
    curriculum matching compares them by plain equality.
    """
    if raw is None:
        return None
    code = str(raw).strip()
    return code or None
