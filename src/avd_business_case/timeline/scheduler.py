"""Phase overlap scheduler.

Phases in an AVD rollout do not run strictly back to back: Azure preparation
starts while application work is still in flight, pilot testing starts before
the last host pool configuration lands, and so on. The overlap rules form a
small dependency graph keyed by phase name.
"""

import logging
import math

from avd_business_case.errors import InvalidPhasePlanError
from avd_business_case.rounding import round_half_up, round_to
from avd_business_case.timeline.models import (
    OverlapRule,
    Phase,
    ScheduledPhase,
    ScheduleResult,
    TimelineComparison,
)

logger = logging.getLogger(__name__)

PREPARE_APPLICATIONS = "Prepare & Transform Applications"
PREPARE_AZURE = "Prepare Azure Environment"
DEPLOY_NERDIO = "Deploy Nerdio"
BUILD_AVD = "Design, Build & Configure AVD"
PILOT_TESTING = "Pilot Group Testing"
USER_MIGRATION = "User & Use Case Migration"

STANDARD_PHASE_NAMES = (
    PREPARE_APPLICATIONS,
    PREPARE_AZURE,
    DEPLOY_NERDIO,
    BUILD_AVD,
    PILOT_TESTING,
    USER_MIGRATION,
)

STANDARD_OVERLAP_RULES: tuple[OverlapRule, ...] = (
    OverlapRule(
        PREPARE_APPLICATIONS, PREPARE_AZURE, 0.50,
        "Azure prep can begin while app transformation is underway",
    ),
    OverlapRule(
        PREPARE_AZURE, DEPLOY_NERDIO, 0.25,
        "Nerdio deployment planning begins during Azure environment finalization",
    ),
    OverlapRule(
        DEPLOY_NERDIO, BUILD_AVD, 0.50,
        "AVD configuration begins while Nerdio deployment completes",
    ),
    OverlapRule(
        BUILD_AVD, PILOT_TESTING, 0.50,
        "Pilot testing begins before all AVD configuration is complete",
    ),
    OverlapRule(
        PILOT_TESTING, USER_MIGRATION, 0.50,
        "Migration planning and early users can begin during pilot phase",
    ),
)

# Fixed phase durations after the first; the application phase scales.
_FIXED_PHASE_WEEKS = {
    PREPARE_AZURE: 3,
    DEPLOY_NERDIO: 3,
    BUILD_AVD: 8,
    PILOT_TESTING: 4,
    USER_MIGRATION: 3,
}
_MAX_APPLICATION_WEEKS = 9
_APPLICATION_SHARE = 0.3


def build_standard_phases(weeks_required: int) -> list[Phase]:
    """
    Build the six-phase sequential plan for a project of the given length.

    The application phase takes 30% of the required weeks, capped at 9.
    """
    app_weeks = min(_MAX_APPLICATION_WEEKS, math.ceil(weeks_required * _APPLICATION_SHARE))
    phases = [Phase(PREPARE_APPLICATIONS, app_weeks)]
    phases.extend(Phase(name, _FIXED_PHASE_WEEKS[name]) for name in STANDARD_PHASE_NAMES[1:])
    return phases


class PhaseScheduler:
    """
    Places phases on an overlap-adjusted schedule.

    This is not a general project scheduler: the rule graph must name exactly
    the phases being scheduled.
    """

    def __init__(self, rules: tuple[OverlapRule, ...] | list[OverlapRule] | None = None):
        """
        Initialize scheduler.

        Args:
            rules: Overlap edges (defaults to the standard AVD rollout rules)
        """
        self.rules = tuple(rules if rules is not None else STANDARD_OVERLAP_RULES)
        self._rules_by_successor = self._index_rules(self.rules)

    @staticmethod
    def _index_rules(rules: tuple[OverlapRule, ...]) -> dict[str, OverlapRule]:
        """Index rules by successor, rejecting malformed graphs."""
        by_successor: dict[str, OverlapRule] = {}
        for rule in rules:
            if rule.successor in by_successor:
                raise InvalidPhasePlanError(
                    f"Phase '{rule.successor}' has more than one overlap predecessor"
                )
            if rule.predecessor == rule.successor:
                raise InvalidPhasePlanError(f"Phase '{rule.successor}' cannot overlap itself")
            if not 0 <= rule.overlap_percent <= 1:
                raise InvalidPhasePlanError(
                    f"Overlap for '{rule.successor}' must be between 0 and 1, "
                    f"got {rule.overlap_percent}"
                )
            by_successor[rule.successor] = rule
        return by_successor

    @property
    def phase_names(self) -> set[str]:
        """Every phase named by the rule graph."""
        names = set()
        for rule in self.rules:
            names.add(rule.predecessor)
            names.add(rule.successor)
        return names

    def _validate(self, phases: list[Phase]) -> None:
        names = [p.name for p in phases]
        if len(set(names)) != len(names):
            raise InvalidPhasePlanError(f"Duplicate phase names in plan: {names}")
        if set(names) != self.phase_names:
            raise InvalidPhasePlanError(
                f"Phase plan {names} does not match overlap rules for {sorted(self.phase_names)}"
            )
        position = {name: i for i, name in enumerate(names)}
        for rule in self.rules:
            if position[rule.predecessor] >= position[rule.successor]:
                raise InvalidPhasePlanError(
                    f"Phase '{rule.successor}' is listed before its predecessor '{rule.predecessor}'"
                )
        for phase in phases:
            if phase.weeks < 0:
                raise InvalidPhasePlanError(f"Phase '{phase.name}' has negative duration")

    def apply_overlaps(self, phases: list[Phase]) -> ScheduleResult:
        """
        Schedule phases with overlaps.

        A phase with an overlap rule starts ``overlap_percent`` of its
        predecessor's duration before the predecessor ends; any other phase
        starts when the previous one ends.

        Args:
            phases: Sequential phase plan

        Returns:
            Adjusted schedule with time saved and efficiency gain

        Raises:
            InvalidPhasePlanError: If phases do not match the rule graph
        """
        self._validate(phases)

        scheduled: dict[str, ScheduledPhase] = {}
        adjusted: list[ScheduledPhase] = []
        total_time_saved = 0.0
        cumulative_weeks = 0.0

        for index, phase in enumerate(phases):
            rule = self._rules_by_successor.get(phase.name)

            if rule is not None:
                predecessor = scheduled[rule.predecessor]
                overlap_amount = predecessor.weeks * rule.overlap_percent
                start_week = predecessor.start_week + (predecessor.weeks - overlap_amount)
                total_time_saved += overlap_amount
                placed = ScheduledPhase(
                    name=phase.name,
                    weeks=phase.weeks,
                    start_week=start_week,
                    end_week=start_week + phase.weeks,
                    phase_index=index,
                    overlaps_with_previous=True,
                    overlap_weeks=overlap_amount,
                    overlap_description=rule.description,
                )
            else:
                placed = ScheduledPhase(
                    name=phase.name,
                    weeks=phase.weeks,
                    start_week=cumulative_weeks,
                    end_week=cumulative_weeks + phase.weeks,
                    phase_index=index,
                )

            scheduled[phase.name] = placed
            adjusted.append(placed)
            cumulative_weeks = placed.end_week

        total_without = sum(p.weeks for p in phases)
        efficiency = round_half_up(total_time_saved / total_without * 100) if total_without else 0

        logger.debug(
            "Scheduled %d phases: %s weeks sequential, %s with overlap",
            len(adjusted),
            total_without,
            cumulative_weeks,
        )

        return ScheduleResult(
            adjusted_phases=adjusted,
            total_time_saved=total_time_saved,
            total_weeks_with_overlap=cumulative_weeks,
            total_weeks_without_overlap=total_without,
            efficiency_gain_percent=efficiency,
            rules=list(self.rules),
        )


def timeline_comparison(weeks_without_overlap: float, weeks_with_overlap: float) -> TimelineComparison:
    """Compare sequential and overlapped durations."""
    weeks_saved = weeks_without_overlap - weeks_with_overlap
    percent_saved = (
        round_half_up(weeks_saved / weeks_without_overlap * 100) if weeks_without_overlap else 0
    )
    return TimelineComparison(
        sequential_weeks=weeks_without_overlap,
        parallel_weeks=weeks_with_overlap,
        weeks_saved=round_to(weeks_saved, 1),
        percent_saved=percent_saved,
    )
