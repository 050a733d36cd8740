import copy

import pytest
from recommender import generate_recommendation, resolve_config
from plan_defaults import DEFAULT_RECOMMENDATION_CONFIG


@pytest.fixture
def curriculum():
    return [
        {"course_code": "CS101", "course_name": "Intro Programming", "credits": 3, "difficulty": 2, "category": "major"},
        {"course_code": "CS102", "course_name": "Data Structures", "credits": 3, "difficulty": 4, "category": "major"},
        {"course_code": "MATH101", "course_name": "Calculus", "credits": 4, "difficulty": 3, "category": "general"},
        {"course_code": "ELEC001", "course_name": "Elective 1", "credits": 2, "difficulty": 1, "category": "elective"},
        {"course_code": "THESIS", "course_name": "Thesis", "credits": 10, "difficulty": 5, "category": "thesis"},
    ]


@pytest.fixture
def completed():
    # CS101 at B+ -> 10.5 quality points over 3 credits
    return [
        {"id": "1", "course_code": "CS101", "course_name": "Intro Programming", "credits": 3, "score10": 8.0},
    ]


@pytest.fixture
def config():
    return {
        "target_gpa": 3.0,
        "total_program_credits": 30,
        "max_credits_per_term": 10,
        "term_count_to_plan": 1,
        "strategy": "balanced",
        "baseline_gpa": 3.0,
        "mode": "simple",
    }


def plan_codes(result):
    return [c["course_code"] for c in result["plan"]]


class TestFeasiblePlan:
    def test_simple_mode(self, curriculum, completed, config):
        result = generate_recommendation(curriculum, completed, config)
        assert result["feasibility"] == "feasible"
        # (3.0*30 - 10.5) / 27
        assert result["required_avg_gpa_on_remaining"] == pytest.approx(79.5 / 27)
        # balanced: MATH101 (12), ELEC001 (10), THESIS (10, over budget), CS102 (6)
        assert plan_codes(result) == ["MATH101", "ELEC001", "CS102"]
        assert result["plan_total_credits"] == 9
        assert result["remaining_after_plan"] == 18
        # 90 - 10.5 - 3.0*18
        assert result["required_plan_quality_points"] == pytest.approx(25.5)
        assert [c["suggested_gpa4"] for c in result["plan"]] == [3.0, 3.0, 2.5]
        assert result["plan_total_quality_points"] == pytest.approx(25.5)
        assert result["selected_count"] == 3

    def test_optimized_mode_starts_at_baselines(self, curriculum, completed, config):
        config["mode"] = "optimized"
        result = generate_recommendation(curriculum, completed, config)
        # baselines already cover 25.5: MATH101 3.0, ELEC001 3.5, CS102 3.0
        assert [c["suggested_gpa4"] for c in result["plan"]] == [3.0, 3.5, 3.0]
        assert result["plan_total_quality_points"] == pytest.approx(28.0)

    def test_optimized_mode_raises_toward_target(self, curriculum, completed, config):
        config.update({"mode": "optimized", "target_gpa": 3.15})
        result = generate_recommendation(curriculum, completed, config)
        # 94.5 - 10.5 - 54 = 30; MATH101 3.0 -> 3.5 adds exactly 2.0 to the 28.0 baseline
        assert result["required_plan_quality_points"] == pytest.approx(30.0)
        assert [c["suggested_gpa4"] for c in result["plan"]] == [3.5, 3.5, 3.0]
        assert result["plan_total_quality_points"] == pytest.approx(30.0)

    def test_electives_only(self, curriculum, completed, config):
        config["electives_only"] = True
        result = generate_recommendation(curriculum, completed, config)
        assert plan_codes(result) == ["ELEC001"]

    def test_failed_course_not_counted(self, curriculum, completed, config):
        completed.append({"id": "2", "course_code": "MATH101", "course_name": "Calculus", "credits": 4, "score10": 3.0})
        result = generate_recommendation(curriculum, completed, config)
        assert "MATH101" in plan_codes(result)
        assert result["required_avg_gpa_on_remaining"] == pytest.approx(79.5 / 27)

    def test_inputs_not_mutated(self, curriculum, completed, config):
        before = copy.deepcopy((curriculum, completed, config))
        generate_recommendation(curriculum, completed, config)
        assert (curriculum, completed, config) == before


class TestShortCircuits:
    def test_achieved_when_program_complete(self, curriculum, config):
        done = [{"id": "x", "course_name": "Everything", "credits": 30, "score10": 9.0}]
        result = generate_recommendation(curriculum, done, config)
        assert result["feasibility"] == "achieved"
        assert result["plan"] == []
        assert result["remaining_after_plan"] == 0
        assert result["required_avg_gpa_on_remaining"] == 0

    def test_impossible_from_solver(self, curriculum, config):
        weak = [{"id": "x", "course_code": "CS101", "course_name": "Intro Programming", "credits": 3, "score10": 5.0}]
        config.update({"target_gpa": 4.0, "total_program_credits": 10})
        result = generate_recommendation(curriculum, weak, config)
        assert result["feasibility"] == "impossible"
        assert result["required_avg_gpa_on_remaining"] == 4.0
        assert result["plan"] == []
        assert result["remaining_after_plan"] == 7

    def test_impossible_when_plan_too_small(self, curriculum, completed, config):
        config.update({"target_gpa": 3.9, "max_credits_per_term": 3})
        result = generate_recommendation(curriculum, completed, config)
        # only ELEC001 (2 credits) fits the 3-credit budget
        assert result["feasibility"] == "impossible"
        assert result["plan"] == []
        assert result["plan_total_credits"] == 2
        assert result["remaining_after_plan"] == 25
        assert "baseline" in result["message"].lower()


class TestResolveConfig:
    def test_defaults_fill_missing(self):
        cfg = resolve_config({"mode": "optimized"})
        assert cfg["mode"] == "optimized"
        assert cfg["strategy"] == DEFAULT_RECOMMENDATION_CONFIG["strategy"]

    def test_none_values_fall_back(self):
        assert resolve_config({"mode": None})["mode"] == DEFAULT_RECOMMENDATION_CONFIG["mode"]

    def test_none_config(self):
        assert resolve_config(None) == DEFAULT_RECOMMENDATION_CONFIG
