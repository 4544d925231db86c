"""Weighted complexity scoring and the score-to-weeks conversion."""

import logging

from avd_business_case.errors import InvalidFactorValueError
from avd_business_case.rounding import round_half_up
from avd_business_case.timeline.factors import VALID_VALUES
from avd_business_case.timeline.models import ComplexityFactor, FactorScore, ScoreResult

logger = logging.getLogger(__name__)


class ComplexityScorer:
    """Scores a set of complexity factors."""

    def score(self, factors: list[ComplexityFactor]) -> ScoreResult:
        """
        Compute the total complexity score.

        Args:
            factors: Factors with selected scale values

        Returns:
            Total score and per-factor breakdown in input order

        Raises:
            InvalidFactorValueError: If any factor value is outside 1-3
        """
        breakdown = []
        total = 0

        for factor in factors:
            if (
                isinstance(factor.value, bool)
                or not isinstance(factor.value, int)
                or factor.value not in VALID_VALUES
            ):
                raise InvalidFactorValueError(factor.id, factor.value)
            if len(factor.weights) != 3 or any(w < 0 for w in factor.weights):
                raise ValueError(
                    f"Factor '{factor.id}' needs three non-negative weights, got {factor.weights}"
                )

            row = FactorScore(
                factor_id=factor.id,
                name=factor.name,
                category=factor.category,
                value=factor.value,
                weight=factor.weight,
                score=factor.score,
            )
            breakdown.append(row)
            total += row.score

        logger.debug("Complexity score %d from %d factors", total, len(breakdown))
        return ScoreResult(total_score=total, breakdown=breakdown)


def weeks_required(total_score: float) -> int:
    """
    Convert a complexity score into project weeks.

    Brackets use inclusive upper bounds (a score of exactly 25, 50 or 75 uses
    the lower bracket). The step at each bracket edge is kept as is.
    """
    if total_score <= 25:
        return 12 + round_half_up(total_score / 3)
    elif total_score <= 50:
        return 20 + round_half_up((total_score - 25) / 2)
    elif total_score <= 75:
        return 33 + round_half_up((total_score - 50) / 2.5)
    else:
        return 43 + round_half_up((total_score - 75) / 3)
