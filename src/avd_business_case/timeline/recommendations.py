"""Recommendation rules for timeline feasibility."""

from avd_business_case.timeline.models import Recommendation, RecommendationType

TIGHT_BUFFER_WEEKS = 4
HIGH_COMPLEXITY_SCORE = 80
MAX_VALUE = 3


def _fmt_weeks(weeks: float) -> str:
    return f"{weeks:g}"


def generate_recommendations(
    delta: float,
    factor_values: dict[str, int],
    total_score: int,
) -> list[Recommendation]:
    """
    Generate prioritized recommendations for a timeline result.

    Args:
        delta: Weeks available minus weeks required (negative = short)
        factor_values: Selected scale value per factor id
        total_score: Total complexity score

    Returns:
        Recommendations sorted by priority (stable for equal priorities)
    """
    recs: list[Recommendation] = []

    if delta < 0:
        shortfall = abs(delta)
        recs.append(Recommendation(
            RecommendationType.CRITICAL,
            f"Timeline is {_fmt_weeks(shortfall)} weeks short. This project cannot proceed as scoped.",
            priority=1,
        ))

        if factor_values.get("modernization") == MAX_VALUE:
            recs.append(Recommendation(
                RecommendationType.ACTION,
                "Remove app modernization from Phase 1 (saves ~30 complexity points = 9+ weeks)",
                priority=2,
                impact="high",
            ))

        if factor_values.get("change_control") == MAX_VALUE:
            recs.append(Recommendation(
                RecommendationType.ACTION,
                "Streamline change control to weekly approvals (saves 4-6 weeks)",
                priority=3,
                impact="high",
            ))

        if factor_values.get("apps") == MAX_VALUE:
            recs.append(Recommendation(
                RecommendationType.ACTION,
                "Reduce application scope for Phase 1 (saves 3-5 weeks)",
                priority=4,
                impact="medium",
            ))

        recs.append(Recommendation(
            RecommendationType.ACTION,
            f"Extend go-live date by {_fmt_weeks(shortfall + TIGHT_BUFFER_WEEKS)} weeks to include buffer",
            priority=5,
            impact="high",
        ))

        if factor_values.get("landing_zone") == MAX_VALUE:
            recs.append(Recommendation(
                RecommendationType.ACTION,
                "Pre-build Azure landing zone before project start (saves 2-3 weeks)",
                priority=6,
                impact="medium",
            ))

    elif delta < TIGHT_BUFFER_WEEKS:
        recs.append(Recommendation(
            RecommendationType.WARNING,
            f"Timeline is tight with only {_fmt_weeks(delta)} weeks buffer. High risk of delays.",
            priority=1,
        ))
        recs.append(Recommendation(
            RecommendationType.ACTION,
            "Assign dedicated project delivery team to maintain pace",
            priority=2,
            impact="medium",
        ))
    else:
        recs.append(Recommendation(
            RecommendationType.SUCCESS,
            f"Timeline is feasible with {_fmt_weeks(delta)} weeks of buffer.",
            priority=1,
        ))
        recs.append(Recommendation(
            RecommendationType.ACTION,
            "Maintain buffer for unexpected complexities during implementation",
            priority=2,
            impact="low",
        ))

    if total_score > HIGH_COMPLEXITY_SCORE:
        recs.append(Recommendation(
            RecommendationType.WARNING,
            f"High complexity score ({total_score} points). Consider phased approach.",
            priority=7,
        ))

    return sorted(recs, key=lambda r: r.priority)
