import csv
import io
import json
import sys

import pandas as pd

from normalizer import normalize_code
from plan_defaults import DEFAULT_DIFFICULTY
from validators import validate_course_records


class ImportFormatError(ValueError):
    """Raised when an import payload cannot be parsed at all."""


COURSE_CSV_COLUMNS = ["courseName", "credits", "score10", "semester"]
CURRICULUM_CSV_COLUMNS = [
    "courseCode", "courseName", "credits", "recommendedSemester", "category", "difficulty",
]

# camelCase export keys -> internal record keys.
_COURSE_KEY_MAP = {
    "id": "id",
    "courseName": "course_name",
    "courseCode": "course_code",
    "credits": "credits",
    "score10": "score10",
    "semester": "semester",
    "isPlanned": "is_planned",
    "status": "status",
}

# Header keyword -> curriculum field. First header containing a keyword wins.
_CURRICULUM_HEADER_KEYWORDS = {
    "course_code": ("code", "mã"),
    "course_name": ("name", "tên"),
    "credits": ("credit", "tín"),
    "recommended_semester": ("semester", "kỳ"),
    "category": ("category", "loại"),
    "difficulty": ("difficulty", "độ khó"),
}


def _safe_int(val, default=None):
    try:
        if pd.isna(val):
            return default
        return int(val)
    except (TypeError, ValueError):
        return default


def _fmt_number(val) -> str:
    return f"{float(val):g}"


def _read_text_table(text: str, sep: str) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        sep=sep,
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
        on_bad_lines="skip",
    ).fillna("")


def _has_data_rows(text: str) -> bool:
    return bool(text) and len(text.strip().splitlines()) >= 2


def _numeric(series: pd.Series, fill: float = 0) -> pd.Series:
    return pd.to_numeric(series.str.strip(), errors="coerce").fillna(fill)


# ── Courses ──────────────────────────────────────────────────────────────────

def import_courses_csv(text: str) -> list[dict]:
    """
    Parse a course CSV export (courseName, credits, score10[, semester]).

    Rows without a name, with credits <= 0, or with a score outside [0, 10]
    are dropped. Unparseable numbers read as 0. Missing required columns yield [].
    """
    if not _has_data_rows(text):
        return []
    df = _read_text_table(text.strip(), ",")
    df.columns = [str(c).strip() for c in df.columns]
    df = df.rename(columns={"course_name": "courseName"})

    if not {"courseName", "credits", "score10"}.issubset(df.columns):
        return []

    df = df.assign(
        courseName=df["courseName"].str.strip(),
        credits=_numeric(df["credits"]),
        score10=_numeric(df["score10"]),
        semester=df["semester"].str.strip() if "semester" in df.columns else "",
    )

    courses = []
    for pos, row in enumerate(df.to_dict(orient="records"), start=1):
        name = row["courseName"]
        cr = float(row["credits"])
        score = float(row["score10"])
        if not name or cr <= 0 or not (0 <= score <= 10):
            continue
        course = {
            "id": f"imported-{pos}",
            "course_name": name,
            "credits": cr,
            "score10": score,
        }
        if row["semester"]:
            course["semester"] = row["semester"]
        courses.append(course)
    return courses


def export_courses_csv(courses: list[dict]) -> str:
    rows = [
        [
            c.get("course_name", ""),
            _fmt_number(c["credits"]),
            _fmt_number(c["score10"]),
            c.get("semester") or "",
        ]
        for c in courses
    ]
    body = pd.DataFrame(rows, columns=COURSE_CSV_COLUMNS).to_csv(
        index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n",
    )
    return ",".join(COURSE_CSV_COLUMNS) + ("\n" + body.rstrip("\n") if rows else "")


def import_courses_json(text: str) -> list[dict]:
    """
    Parse a JSON array of course objects. Accepts camelCase or snake_case keys.

    Records are checked with validate_course_records; credits and score10
    come back as floats even when the file stores them as strings.
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ImportFormatError("Invalid JSON format") from exc
    if not isinstance(data, list):
        raise ImportFormatError("Invalid data format: expected a JSON array of courses")

    courses = []
    for item in data:
        if not isinstance(item, dict):
            raise ImportFormatError("Invalid data format: every course must be an object")
        courses.append({_COURSE_KEY_MAP.get(k, k): v for k, v in item.items()})

    err_code, err_msg = validate_course_records(courses)
    if err_code:
        raise ImportFormatError(err_msg)
    for course in courses:
        course["credits"] = float(course["credits"])
        course["score10"] = float(course["score10"])
    return courses


def export_courses_json(courses: list[dict]) -> str:
    return json.dumps(courses, indent=2, ensure_ascii=False)


# ── Curriculum ───────────────────────────────────────────────────────────────

def _locate_curriculum_columns(headers: list[str]) -> dict[str, str]:
    located = {}
    for field, keywords in _CURRICULUM_HEADER_KEYWORDS.items():
        for header in headers:
            lowered = header.strip().lower()
            if any(k in lowered for k in keywords):
                located[field] = header
                break
    return located


def parse_curriculum_text(text: str) -> list[dict]:
    """
    Parse a curriculum table pasted from a spreadsheet (tab- or comma-separated).

    Columns are located by header keyword (English or Vietnamese). Code, name
    and credits columns are required; otherwise nothing is returned.
    Missing codes become COURSE_<row>; missing difficulty becomes 3.
    """
    if not _has_data_rows(text):
        return []
    stripped = text.strip()
    header_line = stripped.splitlines()[0]
    sep = "\t" if "\t" in header_line else ","
    df = _read_text_table(stripped, sep)

    cols = _locate_curriculum_columns([str(c) for c in df.columns])
    if not {"course_code", "course_name", "credits"}.issubset(cols):
        return []

    df = df.assign(**{cols["credits"]: _numeric(df[cols["credits"]])})
    courses = []
    for pos, row in enumerate(df.to_dict(orient="records"), start=1):
        name = str(row[cols["course_name"]]).strip()
        cr = float(row[cols["credits"]])
        if not name or cr <= 0:
            continue

        difficulty = DEFAULT_DIFFICULTY
        if "difficulty" in cols:
            parsed = _safe_int(pd.to_numeric(row[cols["difficulty"]], errors="coerce"))
            difficulty = parsed or DEFAULT_DIFFICULTY

        semester = str(row[cols["recommended_semester"]]).strip() if "recommended_semester" in cols else ""
        category = str(row[cols["category"]]).strip() if "category" in cols else ""

        courses.append({
            "course_code": normalize_code(row[cols["course_code"]]) or f"COURSE_{pos}",
            "course_name": name,
            "credits": cr,
            "recommended_semester": semester or None,
            "category": category or None,
            "difficulty": difficulty,
        })
    return courses


def export_curriculum_csv(curriculum: list[dict]) -> str:
    rows = [
        [
            c.get("course_code", ""),
            c.get("course_name", ""),
            _fmt_number(c["credits"]),
            c.get("recommended_semester") or "",
            c.get("category") or "",
            str(c.get("difficulty") or DEFAULT_DIFFICULTY),
        ]
        for c in curriculum
    ]
    body = pd.DataFrame(rows, columns=CURRICULUM_CSV_COLUMNS).to_csv(
        index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n",
    )
    return ",".join(CURRICULUM_CSV_COLUMNS) + ("\n" + body.rstrip("\n") if rows else "")


def load_curriculum(path: str) -> list[dict]:
    """Load a curriculum CSV/TSV file. Raises FileNotFoundError if missing."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    curriculum = parse_curriculum_text(text)
    if not curriculum:
        print(f"[WARN] No curriculum rows parsed from {path}", file=sys.stderr)
    else:
        print(f"[OK] Loaded {len(curriculum)} curriculum courses from {path}")
    return curriculum
