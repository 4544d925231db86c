"""Tests for the timeline feasibility calculator and recommendations."""

import json
import pytest
from datetime import date, timedelta

from avd_business_case.errors import InvalidDateRangeError, InvalidFactorValueError
from avd_business_case.timeline import TimelineCalculator, TimelineRequest
from avd_business_case.timeline.calculator import weeks_between
from avd_business_case.timeline.models import RecommendationType
from avd_business_case.timeline.recommendations import generate_recommendations


def _request(start, weeks, factor_values=None):
    return TimelineRequest(
        start_date=start,
        go_live_date=start + timedelta(weeks=weeks),
        factor_values=factor_values or {},
    )


class TestTimelineRequest:
    """Tests for request validation."""

    def test_go_live_must_follow_start(self, start_date):
        with pytest.raises(InvalidDateRangeError):
            TimelineRequest(start_date=start_date, go_live_date=start_date)

    def test_go_live_before_start(self, start_date):
        with pytest.raises(InvalidDateRangeError):
            TimelineRequest(start_date=start_date, go_live_date=start_date - timedelta(days=1))

    def test_weeks_between(self, start_date):
        assert weeks_between(_request(start_date, 26)) == 26
        # 10 days = 1.43 weeks
        request = TimelineRequest(start_date, start_date + timedelta(days=10))
        assert weeks_between(request) == 1

    def test_weeks_between_rounds_half_up(self, start_date):
        # 11 days = 1.57 weeks
        request = TimelineRequest(start_date, start_date + timedelta(days=11))
        assert weeks_between(request) == 2


class TestTimelineCalculator:
    """Tests for TimelineCalculator."""

    def test_defaults_feasible(self, start_date):
        """Test default factors against a 26-week window."""
        result = TimelineCalculator().calculate(_request(start_date, 26))

        assert result.total_score == 27
        assert result.weeks_available == 26
        assert result.weeks_required_sequential == 21
        assert result.weeks_required_with_overlap == pytest.approx(16.25)
        assert result.delta == pytest.approx(9.75)
        assert result.delta_sequential == 5
        assert result.is_feasible

        rec = result.recommendations[0]
        assert rec.type == RecommendationType.SUCCESS
        assert rec.text == "Timeline is feasible with 9.75 weeks of buffer."

    def test_sequential_phase_plan(self, start_date):
        result = TimelineCalculator().calculate(_request(start_date, 26))
        assert [p.weeks for p in result.sequential_phases] == [7, 3, 3, 8, 4, 3]
        assert result.overlap.total_weeks_without_overlap == 28
        assert result.overlap.total_time_saved == pytest.approx(11.75)

    def test_all_simple(self, start_date):
        from avd_business_case.timeline.factors import FACTOR_CATALOG

        values = {d.id: 1 for d in FACTOR_CATALOG}
        result = TimelineCalculator().calculate(_request(start_date, 26, values))

        assert result.total_score == 21
        assert result.weeks_required_sequential == 19
        assert result.weeks_required_with_overlap == pytest.approx(15.75)

    def test_all_complex_short_window(self, start_date, all_max_factors):
        """Test a maximally complex project with four weeks available."""
        result = TimelineCalculator().calculate(_request(start_date, 4, all_max_factors))

        assert result.total_score == 177
        assert result.weeks_required_sequential == 77
        assert result.weeks_required_with_overlap == pytest.approx(17.25)
        assert result.delta == pytest.approx(-13.25)
        assert not result.is_feasible

        priorities = [r.priority for r in result.recommendations]
        assert priorities == [1, 2, 3, 4, 5, 6, 7]
        assert result.recommendations[0].type == RecommendationType.CRITICAL
        assert "13.25 weeks short" in result.recommendations[0].text
        assert "17.25 weeks" in result.recommendations[4].text
        assert "177 points" in result.recommendations[6].text

    def test_tight_window(self, start_date):
        """Test a buffer under four weeks produces a warning."""
        result = TimelineCalculator().calculate(_request(start_date, 18))

        assert result.delta == pytest.approx(1.75)
        assert result.recommendations[0].type == RecommendationType.WARNING
        assert "1.75 weeks buffer" in result.recommendations[0].text

    def test_breakdown_sorted_by_score(self, start_date):
        result = TimelineCalculator().calculate(_request(start_date, 26, {"modernization": 3}))
        scores = [b.score for b in result.breakdown]

        assert scores == sorted(scores, reverse=True)
        assert result.breakdown[0].factor_id == "modernization"
        assert sum(scores) == result.total_score

    def test_invalid_factor_value(self, start_date):
        with pytest.raises(InvalidFactorValueError):
            TimelineCalculator().calculate(_request(start_date, 26, {"apps": 4}))

    def test_string_factor_values(self, start_date):
        """Test numeric strings from CLI or JSON input are accepted."""
        result = TimelineCalculator().calculate(_request(start_date, 26, {"apps": "3"}))
        assert result.total_score == 27 - 2 + 9

    def test_to_dict_is_json_serializable(self, start_date):
        result = TimelineCalculator().calculate(_request(start_date, 26))
        data = json.loads(json.dumps(result.to_dict()))

        assert data["total_score"] == 27
        assert data["is_feasible"] is True
        assert len(data["phases"]) == 6
        assert data["recommendations"][0]["type"] == "success"

    def test_summary(self, start_date):
        summary = TimelineCalculator().calculate(_request(start_date, 26)).get_summary()
        assert "TIMELINE FEASIBILITY" in summary
        assert "Deploy Nerdio" in summary


class TestGenerateRecommendations:
    """Tests for the recommendation rules."""

    def test_short_without_max_factors(self):
        recs = generate_recommendations(-2, {"apps": 2}, 40)
        assert [r.priority for r in recs] == [1, 5]
        assert recs[1].text == "Extend go-live date by 6 weeks to include buffer"
        assert recs[1].impact == "high"

    def test_short_with_modernization(self):
        recs = generate_recommendations(-1, {"modernization": 3}, 40)
        assert recs[1].priority == 2
        assert "app modernization" in recs[1].text

    def test_exactly_zero_buffer_is_tight(self):
        recs = generate_recommendations(0, {}, 30)
        assert recs[0].type == RecommendationType.WARNING

    def test_four_weeks_is_feasible(self):
        recs = generate_recommendations(4, {}, 30)
        assert recs[0].type == RecommendationType.SUCCESS

    def test_high_complexity_threshold(self):
        assert not any(r.priority == 7 for r in generate_recommendations(10, {}, 80))
        assert any(r.priority == 7 for r in generate_recommendations(10, {}, 81))

    def test_sorted_by_priority(self):
        recs = generate_recommendations(-5, {"landing_zone": 3, "apps": 3}, 100)
        assert [r.priority for r in recs] == sorted(r.priority for r in recs)
