"""
API tests for the Flask app.

Covers:
- GET /health and security headers
- POST /gpa/summary, /gpa/target
- POST /recommend with an inline curriculum and with the startup curriculum
- POST /import/courses for csv and json
- error envelopes for invalid input
"""

import pytest
import server


@pytest.fixture(scope="module")
def client():
    server.app.config["TESTING"] = True
    with server.app.test_client() as c:
        yield c


COURSES = [
    {"course_name": "Calculus 1", "course_code": "MATH101", "credits": 3, "score10": 8.5, "semester": "HK1"},
    {"course_name": "Physics", "course_code": "PHYS101", "credits": 4, "score10": 7.2, "semester": "HK1"},
    {"course_name": "English 1", "course_code": "ENG101", "credits": 2, "score10": 5.0, "semester": "HK2"},
    {"course_name": "Soft Skills", "credits": 1, "score10": 3.0},
]

CURRICULUM = [
    {"course_code": "CS101", "course_name": "Intro Programming", "credits": 3, "difficulty": 2},
    {"course_code": "CS102", "course_name": "Data Structures", "credits": 3, "difficulty": 4},
    {"course_code": "MATH101", "course_name": "Calculus", "credits": 4, "difficulty": 3},
    {"course_code": "ELEC001", "course_name": "Elective 1", "credits": 2, "difficulty": 1},
    {"course_code": "THESIS", "course_name": "Thesis", "credits": 10, "difficulty": 5},
]


def _error_code(resp):
    return resp.get_json()["error"]["error_code"]


class TestHealthAndHeaders:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["status"] == "ok"
        assert "version" in data

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers.get("X-Frame-Options") == "DENY"
        assert resp.headers.get("X-Content-Type-Options") == "nosniff"
        assert resp.headers.get("Referrer-Policy") == "same-origin"

    def test_unknown_route_is_404(self, client):
        assert client.get("/nope").status_code == 404

    def test_curriculum_defaults_to_template(self, client):
        data = client.get("/curriculum").get_json()
        assert len(data["curriculum"]) == 40


class TestGpaSummary:
    def test_summary(self, client):
        resp = client.post("/gpa/summary", json={"courses": COURSES})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["gpa4"] == pytest.approx(2.7)
        assert data["quality_points"] == pytest.approx(27.0)
        assert data["total_credits"] == 10
        assert [d["letter"] for d in data["grade_distribution"]] == ["A", "B", "D+", "F"]
        assert [s["semester"] for s in data["semesters"]] == ["HK1", "HK2"]

    def test_planned_counted_only_in_projection(self, client):
        planned = COURSES + [{"course_name": "Databases", "credits": 3, "score10": 9.0, "is_planned": True}]
        data = client.post("/gpa/summary", json={"courses": planned}).get_json()
        assert data["total_credits"] == 10
        assert data["total_credits_with_planned"] == 13
        assert data["projected_gpa4"] == pytest.approx(3.0)

    def test_invalid_credits(self, client):
        resp = client.post("/gpa/summary", json={"courses": [{"course_name": "X", "credits": 0, "score10": 5}]})
        assert resp.status_code == 400
        assert _error_code(resp) == "INVALID_INPUT"

    def test_string_is_planned_rejected(self, client):
        rows = [dict(COURSES[0], is_planned="false")]
        resp = client.post("/gpa/summary", json={"courses": rows})
        assert resp.status_code == 400
        assert _error_code(resp) == "INVALID_INPUT"

    def test_non_json_body(self, client):
        resp = client.post("/gpa/summary", data="not json", content_type="text/plain")
        assert resp.status_code == 400
        assert resp.get_json()["mode"] == "error"


class TestGpaTarget:
    def test_feasible(self, client):
        resp = client.post("/gpa/target", json={
            "courses": COURSES, "target_gpa": 3.0, "total_program_credits": 20,
        })
        data = resp.get_json()
        assert data["feasibility"] == "feasible"
        assert data["required_gpa"] == pytest.approx(3.3)

    def test_bad_target(self, client):
        resp = client.post("/gpa/target", json={
            "courses": COURSES, "target_gpa": 5, "total_program_credits": 20,
        })
        assert resp.status_code == 400


class TestRecommend:
    CONFIG = {
        "target_gpa": 3.0,
        "total_program_credits": 30,
        "max_credits_per_term": 10,
        "term_count_to_plan": 1,
        "strategy": "balanced",
        "baseline_gpa": 3.0,
        "mode": "simple",
    }
    DONE = [{"course_code": "CS101", "course_name": "Intro Programming", "credits": 3, "score10": 8.0}]

    def test_inline_curriculum(self, client):
        resp = client.post("/recommend", json={
            "courses": self.DONE, "curriculum": CURRICULUM, "config": self.CONFIG,
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["feasibility"] == "feasible"
        assert [c["course_code"] for c in data["plan"]] == ["MATH101", "ELEC001", "CS102"]
        assert data["remaining_courses_count"] == 4
        assert data["timeline"]["estimated_min_terms"] == 3

    def test_string_numbers_in_config(self, client):
        cfg = dict(self.CONFIG, target_gpa="3.0", max_credits_per_term="10")
        resp = client.post("/recommend", json={
            "courses": self.DONE, "curriculum": CURRICULUM, "config": cfg,
        })
        assert resp.status_code == 200
        assert resp.get_json()["plan_total_credits"] == 9

    def test_startup_curriculum_used_when_omitted(self, client):
        resp = client.post("/recommend", json={"courses": [], "config": {"target_gpa": 3.0}})
        assert resp.status_code == 200
        assert resp.get_json()["feasibility"] in {"feasible", "impossible", "achieved"}

    def test_bad_strategy(self, client):
        resp = client.post("/recommend", json={
            "courses": self.DONE, "config": dict(self.CONFIG, strategy="hardest"),
        })
        assert resp.status_code == 400
        assert _error_code(resp) == "INVALID_INPUT"

    def test_bad_curriculum(self, client):
        resp = client.post("/recommend", json={
            "courses": self.DONE, "curriculum": [{"course_code": "A", "course_name": "A", "credits": -3}],
        })
        assert resp.status_code == 400


class TestImportCourses:
    def test_csv(self, client):
        text = "courseName,credits,score10,semester\nCalculus 1,3,8.5,HK1\n"
        data = client.post("/import/courses", json={"format": "csv", "text": text}).get_json()
        assert data["courses"][0]["course_name"] == "Calculus 1"

    def test_json(self, client):
        text = '[{"courseName": "Databases", "credits": 3, "score10": 9}]'
        data = client.post("/import/courses", json={"format": "json", "text": text}).get_json()
        assert data["courses"][0]["course_name"] == "Databases"

    def test_bad_json(self, client):
        resp = client.post("/import/courses", json={"format": "json", "text": "{oops"})
        assert resp.status_code == 400
        assert _error_code(resp) == "INVALID_INPUT"

    def test_unknown_format(self, client):
        resp = client.post("/import/courses", json={"format": "xlsx", "text": "x"})
        assert resp.status_code == 400
