"""Timeline module: complexity scoring and phase scheduling."""

from avd_business_case.timeline.calculator import TimelineCalculator
from avd_business_case.timeline.factors import FACTOR_CATALOG, build_factors
from avd_business_case.timeline.models import (
    ComplexityFactor,
    OverlapRule,
    Phase,
    Recommendation,
    RecommendationType,
    ScheduleResult,
    ScheduledPhase,
    TimelineRequest,
    TimelineResult,
)
from avd_business_case.timeline.scheduler import PhaseScheduler, build_standard_phases
from avd_business_case.timeline.scorer import ComplexityScorer, weeks_required

__all__ = [
    "FACTOR_CATALOG",
    "ComplexityFactor",
    "ComplexityScorer",
    "OverlapRule",
    "Phase",
    "PhaseScheduler",
    "Recommendation",
    "RecommendationType",
    "ScheduleResult",
    "ScheduledPhase",
    "TimelineCalculator",
    "TimelineRequest",
    "TimelineResult",
    "build_factors",
    "build_standard_phases",
    "weeks_required",
]
