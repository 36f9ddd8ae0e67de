"""Projection of (year index, month index, value) to pixel coordinates."""

import numpy as np
from pydantic import BaseModel

from service.climate.base import constants as bc
from service.climate.base import dates

from .axes import ValueRange


class ChartLayout(BaseModel):
    width: float = 960
    height: float = 400
    padding_left: float = 60
    padding_right: float = 60
    padding_top: float = 20
    padding_bottom: float = 40

    @property
    def plot_width(self) -> float:
        return self.width - self.padding_left - self.padding_right

    @property
    def plot_height(self) -> float:
        return self.height - self.padding_top - self.padding_bottom

    @property
    def left(self) -> float:
        return self.padding_left

    @property
    def right(self) -> float:
        return self.width - self.padding_right

    @property
    def top(self) -> float:
        return self.padding_top

    @property
    def bottom(self) -> float:
        return self.height - self.padding_bottom


class Tick(BaseModel):
    position: float
    value: float | None = None
    label: str


def slot_count(year_count: int, overlay: bool) -> int:
    """Number of month slots the plot width is divided into."""
    if overlay:
        return 11
    return max(year_count * 12 - 1, 0)


class Projection:

    def __init__(
        self,
        layout: ChartLayout,
        vrange: ValueRange,
        year_count: int,
        overlay: bool = False,
    ):
        self.layout = layout
        self.vrange = vrange
        self.overlay = overlay
        slots = slot_count(year_count, overlay)
        self.slot_width = layout.plot_width / slots if slots > 0 else 0.0

    def slot(self, year_index: int, month_index: int) -> int:
        return year_index * 12 + month_index

    def x(self, year_index: int, month_index: int) -> float:
        return self.layout.left + self.slot(year_index, month_index) * self.slot_width

    def y(self, value: float) -> float:
        # Degenerate ranges draw everything at mid-height.
        return self.layout.top + (1 - self.vrange.fraction(value)) * self.layout.plot_height


def value_ticks(layout: ChartLayout, vrange: ValueRange) -> list[Tick]:
    """Returns the value axis ticks from max (top) down to min (bottom)."""
    n = bc.VALUE_TICK_COUNT
    fractions = np.linspace(0.0, 1.0, n)
    values = np.linspace(vrange.max_value, vrange.min_value, n)
    return [
        Tick(
            position=layout.top + float(f) * layout.plot_height,
            value=float(v),
            label=f"{v:.2f}",
        )
        for f, v in zip(fractions, values)
    ]


def month_ticks(
    projection: Projection, year_labels: list[str], overlay: bool
) -> list[Tick]:
    """Returns the x axis ticks.

    January ticks show the year label (nothing in overlay mode), all other
    ticks the three-letter month abbreviation.
    """
    ticks = []
    labels = [""] if overlay else year_labels
    for year_index, year_label in enumerate(labels):
        for month_index in range(12):
            if month_index == 0:
                label = "" if overlay else year_label
            else:
                label = dates.month_abbr(month_index)
            ticks.append(
                Tick(position=projection.x(year_index, month_index), label=label)
            )
    return ticks
