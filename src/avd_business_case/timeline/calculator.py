"""Timeline feasibility calculator."""

import logging

from avd_business_case.rounding import round_half_up
from avd_business_case.timeline.factors import build_factors
from avd_business_case.timeline.models import (
    DAYS_PER_WEEK,
    TimelineRequest,
    TimelineResult,
)
from avd_business_case.timeline.recommendations import generate_recommendations
from avd_business_case.timeline.scheduler import (
    PhaseScheduler,
    build_standard_phases,
    timeline_comparison,
)
from avd_business_case.timeline.scorer import ComplexityScorer, weeks_required

logger = logging.getLogger(__name__)


def weeks_between(request: TimelineRequest) -> int:
    """Whole weeks between start and go-live, rounded half up."""
    return round_half_up(request.days_available / DAYS_PER_WEEK)


class TimelineCalculator:
    """
    Decides whether an AVD project fits between its start and go-live dates.

    Scores the complexity factors, converts the score to weeks, schedules
    the six rollout phases with overlaps, and recommends next steps.
    """

    def __init__(
        self,
        scorer: ComplexityScorer | None = None,
        scheduler: PhaseScheduler | None = None,
    ):
        """
        Initialize calculator.

        Args:
            scorer: Complexity scorer (defaults to standard weights)
            scheduler: Phase scheduler (defaults to standard overlap rules)
        """
        self.scorer = scorer or ComplexityScorer()
        self.scheduler = scheduler or PhaseScheduler()

    def calculate(self, request: TimelineRequest) -> TimelineResult:
        """
        Run the timeline feasibility calculation.

        Args:
            request: Validated dates and factor selections

        Returns:
            Complete timeline result
        """
        factors = build_factors(request.factor_values)
        scored = self.scorer.score(factors)

        available = weeks_between(request)
        required = weeks_required(scored.total_score)

        sequential_phases = build_standard_phases(required)
        overlap = self.scheduler.apply_overlaps(sequential_phases)
        required_with_overlap = overlap.total_weeks_with_overlap
        delta = available - required_with_overlap

        factor_values = {f.id: f.value for f in factors}
        recommendations = generate_recommendations(delta, factor_values, scored.total_score)

        logger.info(
            "Timeline: score=%d available=%d required=%d (%s with overlap) delta=%s",
            scored.total_score,
            available,
            required,
            required_with_overlap,
            delta,
        )

        return TimelineResult(
            weeks_available=available,
            weeks_required_sequential=required,
            weeks_required_with_overlap=required_with_overlap,
            delta=delta,
            delta_sequential=available - required,
            total_score=scored.total_score,
            breakdown=sorted(scored.breakdown, key=lambda b: b.score, reverse=True),
            phases=overlap.adjusted_phases,
            sequential_phases=sequential_phases,
            overlap=overlap,
            comparison=timeline_comparison(required, required_with_overlap),
            recommendations=recommendations,
        )
