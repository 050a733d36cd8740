from normalizer import normalize_course_name

PASSING_SCORE10 = 4.0


def is_passed(course: dict) -> bool:
    """Explicit status wins; without one a course passes at score10 >= 4.0."""
    status = course.get("status")
    if status:
        return status == "passed"
    return course.get("score10", 0) >= PASSING_SCORE10


def match_course_to_curriculum(course: dict, curriculum: list[dict]) -> dict | None:
    """
    Find the curriculum row for a taken course.

    Code equality first; otherwise the first row whose normalized name matches.
    Distinct codes sharing a name can therefore match each other.
    """
    code = course.get("course_code")
    if code:
        for row in curriculum:
            if row.get("course_code") == code:
                return row

    wanted = normalize_course_name(course.get("course_name", ""))
    for row in curriculum:
        if normalize_course_name(row.get("course_name", "")) == wanted:
            return row
    return None


def get_remaining_courses(curriculum: list[dict], completed_courses: list[dict]) -> list[dict]:
    """Curriculum rows not yet passed, in curriculum order."""
    passed_codes: set[str] = set()
    passed_names: set[str] = set()
    for course in completed_courses:
        if not is_passed(course):
            continue
        if course.get("course_code"):
            passed_codes.add(course["course_code"])
        passed_names.add(normalize_course_name(course.get("course_name", "")))

    return [
        row for row in curriculum
        if row.get("course_code") not in passed_codes
        and normalize_course_name(row.get("course_name", "")) not in passed_names
    ]


def _row(code: str, name: str, credits: float, category: str, difficulty: int) -> dict:
    return {
        "course_code": code,
        "course_name": name,
        "credits": credits,
        "category": category,
        "difficulty": difficulty,
    }


_DEFAULT_MIS_CURRICULUM = (
    ("MATH101", "Calculus 1", 3, "general", 3),
    ("MATH102", "Calculus 2", 3, "general", 3),
    ("PHYS101", "General Physics", 3, "general", 2),
    ("ENG101", "English 1", 3, "general", 2),
    ("ENG102", "English 2", 3, "general", 2),
    ("CS101", "Introduction to Programming", 3, "major", 2),
    ("CS102", "Data Structures and Algorithms", 3, "major", 4),
    ("CS201", "Object-Oriented Programming", 3, "major", 3),
    ("CS202", "Databases", 3, "major", 3),
    ("CS203", "Computer Networks", 3, "major", 3),
    ("MIS301", "Management Information Systems", 3, "major", 3),
    ("MIS302", "Systems Analysis and Design", 3, "major", 4),
    ("MIS303", "IT Project Management", 3, "major", 3),
    ("MIS401", "E-Commerce", 3, "major", 3),
    ("MIS402", "Information Security", 3, "major", 4),
    ("MIS403", "ERP Systems", 3, "major", 4),
    ("MIS404", "Web Application Development", 3, "major", 3),
    ("MIS405", "Mobile Application Development", 3, "major", 3),
    ("MIS406", "AI in Management", 3, "major", 4),
    ("MIS407", "Big Data Analytics", 3, "major", 4),
    ("MIS408", "Information Systems Management", 3, "major", 3),
    ("MIS409", "Digital Innovation", 3, "major", 3),
    ("MIS410", "Graduation Internship", 6, "internship", 2),
    ("MIS411", "Graduation Thesis", 10, "thesis", 5),
    ("ELEC001", "Elective 1", 3, "elective", 2),
    ("ELEC002", "Elective 2", 3, "elective", 2),
    ("ELEC003", "Elective 3", 3, "elective", 2),
    ("ELEC004", "Elective 4", 3, "elective", 2),
    ("ELEC005", "Elective 5", 3, "elective", 2),
    ("ELEC006", "Elective 6", 3, "elective", 2),
    ("GEN001", "National Defense Education", 3, "general", 1),
    ("GEN002", "Physical Education 1", 1, "general", 1),
    ("GEN003", "Physical Education 2", 1, "general", 1),
    ("GEN004", "Soft Skills", 2, "general", 1),
    ("GEN005", "Introduction to Law", 2, "general", 2),
    ("GEN006", "Principles of Economics", 2, "general", 2),
    ("GEN007", "Principles of Management", 2, "general", 2),
    ("GEN008", "Principles of Marketing", 2, "general", 2),
    ("GEN009", "Financial Accounting", 3, "general", 3),
    ("GEN010", "Corporate Finance", 3, "general", 3),
)


def default_curriculum() -> list[dict]:
    """Built-in MIS program template (40 courses). Returns fresh dicts on every call."""
    return [_row(*entry) for entry in _DEFAULT_MIS_CURRICULUM]
