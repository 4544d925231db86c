"""Data models for the timeline module."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from avd_business_case.errors import InvalidDateRangeError
from avd_business_case.rounding import round_half_up

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class FactorDefinition:
    """Catalog entry describing one scored complexity dimension."""

    id: str
    name: str
    category: str
    weights: tuple[int, int, int]
    description: str = ""
    default_value: int = 1


@dataclass(frozen=True)
class ComplexityFactor:
    """A complexity factor with its selected scale value (1 = simple, 3 = complex)."""

    id: str
    name: str
    category: str
    value: int
    weights: tuple[int, int, int]

    @property
    def weight(self) -> int:
        """Weight applied at the selected value."""
        return self.weights[self.value - 1]

    @property
    def score(self) -> int:
        """Score contribution: value x weight-at-value."""
        return self.value * self.weight


@dataclass(frozen=True)
class FactorScore:
    """One row of the score breakdown."""

    factor_id: str
    name: str
    category: str
    value: int
    weight: int
    score: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "factor_id": self.factor_id,
            "name": self.name,
            "category": self.category,
            "value": self.value,
            "weight": self.weight,
            "score": self.score,
        }


@dataclass(frozen=True)
class ScoreResult:
    """Total complexity score with per-factor contributions (input order)."""

    total_score: int
    breakdown: list[FactorScore] = field(default_factory=list)

    def category_totals(self) -> dict[str, int]:
        """Sum of scores per factor category."""
        totals: dict[str, int] = {}
        for row in self.breakdown:
            totals[row.category] = totals.get(row.category, 0) + row.score
        return totals


@dataclass(frozen=True)
class Phase:
    """A project phase with its sequential duration in weeks."""

    name: str
    weeks: float


@dataclass(frozen=True)
class OverlapRule:
    """Dependency edge: ``successor`` may start before ``predecessor`` finishes.

    ``overlap_percent`` is the fraction of the predecessor's duration that the
    two phases run concurrently.
    """

    predecessor: str
    successor: str
    overlap_percent: float
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "predecessor": self.predecessor,
            "successor": self.successor,
            "overlap_percent": self.overlap_percent * 100,
            "description": self.description,
        }


@dataclass(frozen=True)
class ScheduledPhase:
    """A phase placed on the overlap-adjusted schedule."""

    name: str
    weeks: float
    start_week: float
    end_week: float
    phase_index: int = 0
    overlaps_with_previous: bool = False
    overlap_weeks: float = 0.0
    overlap_description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "weeks": self.weeks,
            "start_week": self.start_week,
            "end_week": self.end_week,
            "phase_index": self.phase_index,
            "overlaps_with_previous": self.overlaps_with_previous,
            "overlap_weeks": self.overlap_weeks,
            "overlap_description": self.overlap_description,
        }


@dataclass(frozen=True)
class ScheduleResult:
    """Output of the phase overlap scheduler."""

    adjusted_phases: list[ScheduledPhase]
    total_time_saved: float
    total_weeks_with_overlap: float
    total_weeks_without_overlap: float
    efficiency_gain_percent: int
    rules: list[OverlapRule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "adjusted_phases": [p.to_dict() for p in self.adjusted_phases],
            "total_time_saved": self.total_time_saved,
            "total_weeks_with_overlap": self.total_weeks_with_overlap,
            "total_weeks_without_overlap": self.total_weeks_without_overlap,
            "efficiency_gain_percent": self.efficiency_gain_percent,
            "rules": [r.to_dict() for r in self.rules],
        }


@dataclass(frozen=True)
class TimelineComparison:
    """Sequential (waterfall) versus overlapped (parallel) duration."""

    sequential_weeks: float
    parallel_weeks: float
    weeks_saved: float
    percent_saved: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sequential": {
                "weeks": self.sequential_weeks,
                "label": "Sequential (Waterfall)",
            },
            "parallel": {
                "weeks": self.parallel_weeks,
                "label": "Parallel (Agile)",
            },
            "savings": {
                "weeks": self.weeks_saved,
                "percent": self.percent_saved,
                "label": f"{round_half_up(self.weeks_saved)} weeks faster",
            },
        }


class RecommendationType(Enum):
    """Severity/kind of a timeline recommendation."""

    CRITICAL = "critical"
    WARNING = "warning"
    SUCCESS = "success"
    ACTION = "action"


@dataclass(frozen=True)
class Recommendation:
    """A prioritized timeline recommendation (lower priority value = first)."""

    type: RecommendationType
    text: str
    priority: int
    impact: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "text": self.text,
            "priority": self.priority,
            "impact": self.impact,
        }


@dataclass(frozen=True)
class TimelineRequest:
    """Validated input for a timeline feasibility calculation."""

    start_date: date
    go_live_date: date
    factor_values: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.go_live_date <= self.start_date:
            raise InvalidDateRangeError(self.start_date, self.go_live_date)

    @property
    def days_available(self) -> int:
        """Calendar days between start and go-live."""
        return (self.go_live_date - self.start_date).days

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "start_date": self.start_date.isoformat(),
            "go_live_date": self.go_live_date.isoformat(),
            "factor_values": dict(self.factor_values),
        }


@dataclass(frozen=True)
class TimelineResult:
    """Complete timeline feasibility result."""

    weeks_available: int
    weeks_required_sequential: int
    weeks_required_with_overlap: float
    delta: float
    delta_sequential: int
    total_score: int
    breakdown: list[FactorScore]
    phases: list[ScheduledPhase]
    sequential_phases: list[Phase]
    overlap: ScheduleResult
    comparison: TimelineComparison
    recommendations: list[Recommendation]

    @property
    def is_feasible(self) -> bool:
        """Whether the overlapped schedule fits before go-live."""
        return self.delta >= 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "weeks_available": self.weeks_available,
            "weeks_required_sequential": self.weeks_required_sequential,
            "weeks_required_with_overlap": self.weeks_required_with_overlap,
            "delta": self.delta,
            "delta_sequential": self.delta_sequential,
            "total_score": self.total_score,
            "is_feasible": self.is_feasible,
            "breakdown": [b.to_dict() for b in self.breakdown],
            "phases": [p.to_dict() for p in self.phases],
            "sequential_phases": [
                {"name": p.name, "weeks": p.weeks} for p in self.sequential_phases
            ],
            "overlap": self.overlap.to_dict(),
            "comparison": self.comparison.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "=" * 60,
            "TIMELINE FEASIBILITY",
            "=" * 60,
            "",
            f"  Complexity score:     {self.total_score} points",
            f"  Weeks available:      {self.weeks_available}",
            f"  Weeks required:       {self.weeks_required_with_overlap:g} "
            f"(sequential {self.weeks_required_sequential})",
            f"  Buffer:               {self.delta:+g} weeks",
            "",
            "SCHEDULE",
            "-" * 40,
        ]

        for phase in self.phases:
            marker = f"  (-{phase.overlap_weeks:g}w overlap)" if phase.overlaps_with_previous else ""
            lines.append(
                f"  W{phase.start_week:g}-{phase.end_week:g}  {phase.name}{marker}"
            )

        lines.extend(["", "RECOMMENDATIONS", "-" * 40])
        for rec in self.recommendations:
            lines.append(f"  [{rec.type.value}] {rec.text}")

        lines.append("")
        lines.append("=" * 60)

        return "\n".join(lines)
