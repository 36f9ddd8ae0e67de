"""Altair (Vega-Lite) renditions of unit charts, used for JSON exports."""

from typing import TypeAlias, Union

import altair as alt

from service.climate.base.errors import NoDataError
from service.climate.models import StyleParams, UnitChartMetadata

from . import colors
from .transform import series_frame

AltairChart: TypeAlias = Union[alt.Chart, alt.LayerChart]


def unit_line_chart(
    meta: UnitChartMetadata | None,
    style: StyleParams = StyleParams(),
    title: str | None = None,
    palette: colors.Tab20 | None = None,
) -> alt.LayerChart:
    """Returns a layered line and point chart of the series in meta.

    The x axis is the slot (year_index * 12 + month_index), so both display
    modes are supported without further case switching.

    Raises:
        NoDataError if meta has no points.
    """
    if meta is None or not meta.has_points():
        raise NoDataError(f"No data for {meta.unit if meta else 'chart'}")

    data = series_frame(meta)
    palette = palette or colors.Tab20()
    color = alt.Color(
        field="line",
        type="nominal",
        scale=palette.scale(list(data["line"].unique())),
        legend=alt.Legend(title="Series"),
    )
    highlight = alt.selection_point(fields=["line"], bind="legend")

    base = alt.Chart(data).encode(
        x=alt.X("slot:Q", title="Month"),
        y=alt.Y("value:Q", title=meta.unit, scale=alt.Scale(zero=False)),
        color=color,
        opacity=alt.condition(highlight, alt.value(1.0), alt.value(0.1)),
    )
    lines = base.mark_line(strokeWidth=style.line_thickness)
    points = base.mark_point(size=(2 * style.dot_radius) ** 2, filled=True).encode(
        tooltip=[
            alt.Tooltip("line:N", title="Series"),
            alt.Tooltip("month:N", title="Month"),
            "value:Q",
            "date:N",
        ]
    )
    return (
        alt.layer(lines, points)
        .add_params(highlight)
        .properties(
            width="container",
            autosize={"type": "fit", "contains": "padding"},
            title=title or meta.unit,
        )
    )
