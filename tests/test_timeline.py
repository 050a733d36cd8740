from timeline import estimate_timeline


class TestEstimateTimeline:
    def test_rounds_up(self):
        result = estimate_timeline(27, 10)
        assert result["estimated_min_terms"] == 3
        assert result["remaining_credits"] == 27

    def test_exact_multiple(self):
        assert estimate_timeline(40, 20)["estimated_min_terms"] == 2

    def test_nothing_left(self):
        assert estimate_timeline(0, 20)["estimated_min_terms"] == 0

    def test_negative_remaining_clamped(self):
        result = estimate_timeline(-5, 20)
        assert result["remaining_credits"] == 0
        assert result["estimated_min_terms"] == 0

    def test_disclaimer_mentions_cap(self):
        assert "18 credits per term" in estimate_timeline(30, 18)["disclaimer"]
