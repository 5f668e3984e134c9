"""Score range value object."""

import math
from dataclasses import dataclass

from score_cache.errors import ValidationError


def check_score(score: object, name: str = "score") -> float:
    """Return score as a float, rejecting non-numbers, NaN and infinities.

    Raises:
        ValidationError: If the score is not a finite real number.
    """
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValidationError(f"{name} must be a number, got {type(score).__name__}")
    try:
        score = float(score)
    except OverflowError as e:
        raise ValidationError(f"{name} is out of float range") from e
    if not math.isfinite(score):
        raise ValidationError(f"{name} must be finite, got {score}")
    return score


@dataclass(frozen=True)
class ScoreRange:
    """Inclusive score window plus a pagination slice.

    Validated on construction, so a ScoreRange that exists is always
    usable as-is for a range query.

    Attributes:
        min_score: Lower bound (inclusive)
        max_score: Upper bound (inclusive)
        offset: Matching entries to skip
        limit: Maximum entries to return; 0 requests nothing, None means no cap
    """

    min_score: float
    max_score: float
    offset: int = 0
    limit: int | None = 10

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_score", check_score(self.min_score, "min_score"))
        object.__setattr__(self, "max_score", check_score(self.max_score, "max_score"))

        if self.min_score > self.max_score:
            raise ValidationError(
                f"min_score ({self.min_score}) must not exceed max_score ({self.max_score})"
            )
        if isinstance(self.offset, bool) or not isinstance(self.offset, int) or self.offset < 0:
            raise ValidationError(f"offset must be a non-negative integer, got {self.offset!r}")
        if self.limit is not None and (
            isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0
        ):
            raise ValidationError(f"limit must be a non-negative integer or None, got {self.limit!r}")

    @property
    def is_empty_window(self) -> bool:
        """True when the caller asked for zero results."""
        return self.limit == 0
