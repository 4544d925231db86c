"""Tests for phase overlap scheduling."""

import pytest

from avd_business_case.errors import InvalidPhasePlanError
from avd_business_case.timeline.models import OverlapRule, Phase
from avd_business_case.timeline.scheduler import (
    BUILD_AVD,
    DEPLOY_NERDIO,
    PILOT_TESTING,
    PREPARE_APPLICATIONS,
    PREPARE_AZURE,
    STANDARD_PHASE_NAMES,
    USER_MIGRATION,
    PhaseScheduler,
    build_standard_phases,
    timeline_comparison,
)


@pytest.fixture
def standard_phases():
    """Standard plan with a capped 9-week application phase."""
    return [
        Phase(name, weeks)
        for name, weeks in zip(STANDARD_PHASE_NAMES, [9, 3, 3, 8, 4, 3])
    ]


class TestBuildStandardPhases:
    """Tests for the sequential phase plan."""

    def test_six_phases_in_order(self):
        phases = build_standard_phases(21)
        assert [p.name for p in phases] == list(STANDARD_PHASE_NAMES)

    def test_application_phase_share(self):
        """Test the application phase is 30% of required weeks, rounded up."""
        assert build_standard_phases(19)[0].weeks == 6
        assert build_standard_phases(21)[0].weeks == 7

    def test_application_phase_capped(self):
        assert build_standard_phases(77)[0].weeks == 9

    def test_fixed_phases(self):
        assert [p.weeks for p in build_standard_phases(40)[1:]] == [3, 3, 8, 4, 3]


class TestPhaseScheduler:
    """Tests for PhaseScheduler."""

    def test_standard_schedule(self, standard_phases):
        """Test the standard plan schedules to 17.25 weeks."""
        result = PhaseScheduler().apply_overlaps(standard_phases)

        starts = [p.start_week for p in result.adjusted_phases]
        assert starts == pytest.approx([0, 4.5, 6.75, 8.25, 12.25, 14.25])
        assert result.total_weeks_without_overlap == 30
        assert result.total_weeks_with_overlap == pytest.approx(17.25)
        assert result.total_time_saved == pytest.approx(12.75)
        assert result.efficiency_gain_percent == 43

    def test_end_minus_start_is_duration(self, standard_phases):
        result = PhaseScheduler().apply_overlaps(standard_phases)
        for phase in result.adjusted_phases:
            assert phase.end_week - phase.start_week == pytest.approx(phase.weeks)

    def test_saved_equals_difference(self, standard_phases):
        """Test time saved is exactly sequential minus overlapped."""
        result = PhaseScheduler().apply_overlaps(standard_phases)
        assert result.total_time_saved == pytest.approx(
            result.total_weeks_without_overlap - result.total_weeks_with_overlap
        )

    def test_overlap_metadata(self, standard_phases):
        result = PhaseScheduler().apply_overlaps(standard_phases)
        first, azure = result.adjusted_phases[0], result.adjusted_phases[1]

        assert not first.overlaps_with_previous
        assert first.overlap_weeks == 0
        assert azure.overlaps_with_previous
        assert azure.overlap_weeks == pytest.approx(4.5)
        assert "Azure prep" in azure.overlap_description
        assert [p.phase_index for p in result.adjusted_phases] == list(range(6))

    def test_never_lengthens(self):
        """Test overlap never makes the schedule longer than sequential."""
        for weeks in range(12, 80, 7):
            result = PhaseScheduler().apply_overlaps(build_standard_phases(weeks))
            assert result.total_weeks_with_overlap <= result.total_weeks_without_overlap

    def test_no_rules_is_sequential(self):
        """Test a single-rule graph with zero overlap runs back to back."""
        rules = [OverlapRule("A", "B", 0.0, "none")]
        result = PhaseScheduler(rules).apply_overlaps([Phase("A", 2), Phase("B", 3)])

        assert result.adjusted_phases[1].start_week == 2
        assert result.total_weeks_with_overlap == 5
        assert result.total_time_saved == 0
        assert result.efficiency_gain_percent == 0

    def test_custom_rules(self):
        rules = [
            OverlapRule("Design", "Build", 0.5, "build starts mid-design"),
            OverlapRule("Build", "Test", 0.25, "test starts late in build"),
        ]
        result = PhaseScheduler(rules).apply_overlaps(
            [Phase("Design", 4), Phase("Build", 8), Phase("Test", 2)]
        )
        assert [p.start_week for p in result.adjusted_phases] == pytest.approx([0, 2, 8])
        assert result.total_weeks_with_overlap == pytest.approx(10)

    def test_zero_length_plan(self):
        rules = [OverlapRule("A", "B", 0.5, "")]
        result = PhaseScheduler(rules).apply_overlaps([Phase("A", 0), Phase("B", 0)])
        assert result.efficiency_gain_percent == 0

    def test_rejects_missing_phase(self, standard_phases):
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler().apply_overlaps(standard_phases[:-1])

    def test_rejects_unknown_phase(self, standard_phases):
        plan = standard_phases[:-1] + [Phase("Hypercare", 2)]
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler().apply_overlaps(plan)

    def test_rejects_successor_before_predecessor(self, standard_phases):
        plan = [standard_phases[1], standard_phases[0]] + standard_phases[2:]
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler().apply_overlaps(plan)

    def test_rejects_duplicate_names(self, standard_phases):
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler().apply_overlaps(standard_phases + [standard_phases[0]])

    def test_rejects_negative_weeks(self, standard_phases):
        plan = [Phase(PREPARE_APPLICATIONS, -1)] + standard_phases[1:]
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler().apply_overlaps(plan)

    def test_rejects_two_predecessors(self):
        rules = [OverlapRule("A", "C", 0.5, ""), OverlapRule("B", "C", 0.5, "")]
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler(rules)

    def test_rejects_self_loop(self):
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler([OverlapRule("A", "A", 0.5, "")])

    def test_rejects_overlap_above_one(self):
        with pytest.raises(InvalidPhasePlanError):
            PhaseScheduler([OverlapRule("A", "B", 1.5, "")])

    def test_phase_names(self):
        assert PhaseScheduler().phase_names == {
            PREPARE_APPLICATIONS,
            PREPARE_AZURE,
            DEPLOY_NERDIO,
            BUILD_AVD,
            PILOT_TESTING,
            USER_MIGRATION,
        }

    def test_rules_to_dict_percent(self, standard_phases):
        data = PhaseScheduler().apply_overlaps(standard_phases).to_dict()
        assert data["rules"][0]["overlap_percent"] == 50
        assert data["rules"][1]["overlap_percent"] == 25


class TestTimelineComparison:
    """Tests for sequential versus overlapped comparison."""

    def test_comparison(self):
        comparison = timeline_comparison(30, 17.25)
        assert comparison.weeks_saved == pytest.approx(12.8)
        assert comparison.percent_saved == 43

    def test_labels(self):
        data = timeline_comparison(30, 17.25).to_dict()
        assert data["sequential"]["label"] == "Sequential (Waterfall)"
        assert data["savings"]["label"] == "13 weeks faster"

    def test_zero_sequential(self):
        assert timeline_comparison(0, 0).percent_saved == 0
