import os
import sys
import time

# Ensure backend/ is on sys.path so sibling imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from curriculum import default_curriculum, get_remaining_courses
from data_loader import ImportFormatError, import_courses_csv, import_courses_json, load_curriculum
from gpa import (
    grade_distribution,
    projected_gpa4,
    quality_points,
    required_gpa_for_courses,
    semester_summary,
    total_credits,
    weighted_gpa10,
    weighted_gpa4,
)
from recommender import generate_recommendation, resolve_config
from timeline import estimate_timeline
from validators import (
    INVALID_INPUT,
    validate_course_records,
    validate_curriculum_records,
    validate_recommendation_config,
    validate_target_fields,
)

load_dotenv()

app = Flask(__name__)

API_VERSION = "1.0.0"

_NUMERIC_CONFIG_FIELDS = ("target_gpa", "baseline_gpa", "total_program_credits", "max_credits_per_term")

# ── Paths ─────────────────────────────────────────────────────────────────────
BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BACKEND_DIR)
_env_curriculum_path = os.environ.get("CURRICULUM_PATH")
if not _env_curriculum_path:
    CURRICULUM_PATH = None
elif not os.path.isabs(_env_curriculum_path):
    CURRICULUM_PATH = os.path.join(PROJECT_ROOT, _env_curriculum_path)
else:
    CURRICULUM_PATH = _env_curriculum_path


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, float(raw))
    except (TypeError, ValueError):
        return default


_SLOW_REQUEST_LOG_MS = _env_float("SLOW_REQUEST_LOG_MS", 750.0, minimum=0.0)


# ── Startup curriculum load ───────────────────────────────────────────────────
def _load_startup_curriculum() -> list[dict]:
    if CURRICULUM_PATH is None:
        curriculum = default_curriculum()
        print(f"[OK] Using built-in curriculum template ({len(curriculum)} courses)")
        return curriculum
    try:
        return load_curriculum(CURRICULUM_PATH)
    except FileNotFoundError:
        print(
            f"[WARN] CURRICULUM_PATH not found ({CURRICULUM_PATH}); "
            "falling back to the built-in curriculum template.",
            file=sys.stderr,
        )
        return default_curriculum()


_curriculum = _load_startup_curriculum()


# ── Request helpers ───────────────────────────────────────────────────────────
def _error_response(code: str, message: str, status: int = 400):
    return jsonify({
        "mode": "error",
        "error": {"error_code": code, "message": message},
    }), status


def _read_body():
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        return None
    return body


def _coerce_courses(records: list[dict]) -> list[dict]:
    """Copy course rows with numeric fields as floats (JSON may send "3")."""
    out = []
    for rec in records:
        row = dict(rec)
        row["credits"] = float(rec["credits"])
        row["score10"] = float(rec["score10"])
        row["is_planned"] = bool(rec.get("is_planned", False))
        out.append(row)
    return out


def _coerce_curriculum(records: list[dict]) -> list[dict]:
    out = []
    for rec in records:
        row = dict(rec)
        row["credits"] = float(rec["credits"])
        out.append(row)
    return out


def _courses_from_body(body: dict):
    """Returns (courses, None) or (None, error_response)."""
    raw = body.get("courses", [])
    err_code, err_msg = validate_course_records(raw)
    if err_code:
        return None, _error_response(err_code, err_msg)
    return _coerce_courses(raw), None


# -- Security headers ------------------------------------------------------
@app.before_request
def _start_request_timer():
    g._request_start_time = time.perf_counter()


@app.after_request
def _add_security_headers(response):
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "same-origin"

    started = getattr(g, "_request_start_time", None)
    if started is not None:
        duration_ms = (time.perf_counter() - started) * 1000.0
        if duration_ms >= _SLOW_REQUEST_LOG_MS:
            endpoint = request.endpoint or "unknown"
            print(
                f"[SLOW] {request.method} {request.path} "
                f"endpoint={endpoint} status={response.status_code} duration_ms={duration_ms:.1f}"
            )
    return response


# ── 500 handler ────────────────────────────────────────────────────────────────
@app.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    print(f"[ERROR] Unhandled exception on {request.path}: {e!r}", file=sys.stderr)
    return _error_response("SERVER_ERROR", "An unexpected server error occurred.", 500)


# ── Routes ─────────────────────────────────────────────────────────────────────
@app.route("/health", methods=["GET"])
def health_endpoint():
    return jsonify({
        "status": "ok",
        "version": API_VERSION,
        "curriculum_courses": len(_curriculum),
    })


@app.route("/curriculum", methods=["GET"])
def get_curriculum():
    return jsonify({"curriculum": _curriculum})


@app.route("/gpa/summary", methods=["POST"])
def gpa_summary():
    body = _read_body()
    if body is None:
        return _error_response(INVALID_INPUT, "Request body must be a JSON object.")
    courses, error = _courses_from_body(body)
    if error:
        return error

    return jsonify({
        "gpa4": weighted_gpa4(courses),
        "gpa10": weighted_gpa10(courses),
        "quality_points": quality_points(courses),
        "total_credits": total_credits(courses),
        "total_credits_with_planned": total_credits(courses, include_planned=True),
        "projected_gpa4": projected_gpa4(courses),
        "grade_distribution": grade_distribution(courses),
        "semesters": semester_summary(courses),
    })


@app.route("/gpa/target", methods=["POST"])
def gpa_target():
    body = _read_body()
    if body is None:
        return _error_response(INVALID_INPUT, "Request body must be a JSON object.")
    courses, error = _courses_from_body(body)
    if error:
        return error
    err_code, err_msg = validate_target_fields(body)
    if err_code:
        return _error_response(err_code, err_msg)

    return jsonify(required_gpa_for_courses(
        courses,
        float(body["target_gpa"]),
        float(body["total_program_credits"]),
    ))


@app.route("/recommend", methods=["POST"])
def recommend():
    body = _read_body()
    if body is None:
        return _error_response(INVALID_INPUT, "Request body must be a JSON object.")
    courses, error = _courses_from_body(body)
    if error:
        return error

    curriculum_raw = body.get("curriculum")
    if curriculum_raw is None:
        curriculum = _curriculum
    else:
        err_code, err_msg = validate_curriculum_records(curriculum_raw)
        if err_code:
            return _error_response(err_code, err_msg)
        curriculum = _coerce_curriculum(curriculum_raw)

    config_raw = body.get("config")
    err_code, err_msg = validate_recommendation_config(config_raw)
    if err_code:
        return _error_response(err_code, err_msg)
    config = resolve_config(config_raw)
    for field in _NUMERIC_CONFIG_FIELDS:
        config[field] = float(config[field])

    result = generate_recommendation(curriculum, courses, config)
    result["remaining_courses_count"] = len(get_remaining_courses(curriculum, courses))
    result["timeline"] = estimate_timeline(
        result["remaining_after_plan"] + result["plan_total_credits"],
        config["max_credits_per_term"],
    )
    return jsonify(result)


@app.route("/import/courses", methods=["POST"])
def import_courses():
    body = _read_body()
    if body is None:
        return _error_response(INVALID_INPUT, "Request body must be a JSON object.")
    fmt = str(body.get("format", "")).strip().lower()
    text = body.get("text")
    if not isinstance(text, str):
        return _error_response(INVALID_INPUT, "'text' must be a string.")

    if fmt == "csv":
        courses = import_courses_csv(text)
    elif fmt == "json":
        try:
            courses = import_courses_json(text)
        except ImportFormatError as exc:
            return _error_response(INVALID_INPUT, str(exc))
    else:
        return _error_response(INVALID_INPUT, "format must be 'csv' or 'json'.")

    print(f"[INFO] Imported {len(courses)} courses from {fmt}")
    return jsonify({"courses": courses})


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(host="0.0.0.0", port=port, debug=debug)
