"""Value ranges and the zero alignment of the combined chart's two axes."""

import math
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from service.climate.models import UnitChartMetadata


class ValueRange(BaseModel):
    min_value: float
    max_value: float

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, meta: UnitChartMetadata) -> "ValueRange":
        """Returns the range of meta, or [0, 0] if meta has no values."""
        if not meta.min_value <= meta.max_value:
            return cls(min_value=0.0, max_value=0.0)
        return cls(min_value=meta.min_value, max_value=meta.max_value)

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    def is_degenerate(self) -> bool:
        return self.span == 0 or not math.isfinite(self.span)

    def include_zero(self) -> "ValueRange":
        return ValueRange(
            min_value=min(self.min_value, 0.0), max_value=max(self.max_value, 0.0)
        )

    def fraction(self, value: float) -> float:
        """Returns the relative position of value in the range (0 = min, 1 = max)."""
        if self.is_degenerate():
            return 0.5
        return (value - self.min_value) / self.span


def align_dual_axes(
    left: ValueRange, right: ValueRange, ratio: float = 1.0
) -> tuple[ValueRange, ValueRange]:
    """Widens two ranges so that zero sits at the same height on both axes.

    Both ranges first include zero. Then each side is widened once by the
    other side's range converted with ratio (right units per left unit), so
    that right == left * ratio holds for both bounds afterwards.

    Raises:
        ValueError if ratio is not positive.
    """
    if not ratio > 0:
        raise ValueError(f"Scale ratio must be positive, got {ratio}")

    left = left.include_zero()
    right = right.include_zero()

    aligned_left = ValueRange(
        min_value=min(left.min_value, right.min_value / ratio),
        max_value=max(left.max_value, right.max_value / ratio),
    )
    aligned_right = ValueRange(
        min_value=min(right.min_value, left.min_value * ratio),
        max_value=max(right.max_value, left.max_value * ratio),
    )
    return aligned_left, aligned_right


def needs_zero_label(tick_values: Iterable[float], vrange: ValueRange) -> bool:
    """True if zero lies within vrange but no tick value lands on it."""
    if not vrange.min_value <= 0 <= vrange.max_value:
        return False
    tol = abs(vrange.span) * 1e-9
    return not any(math.isclose(v, 0.0, abs_tol=tol) for v in tick_values)
