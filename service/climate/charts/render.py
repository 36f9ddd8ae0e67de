"""Draws aggregated line series onto a Surface."""

from service.climate.base import dates
from service.climate.models import LineKey, Point, StyleParams, UnitChartMetadata

from .axes import ValueRange, align_dual_axes, needs_zero_label
from .colors import Tab20
from .layout import ChartLayout, Projection, month_ticks, value_ticks
from .surface import Surface

# Distance between axis lines and their tick labels.
_LABEL_GAP = 6

# Maximum decimals shown in tooltip values.
_VALUE_DECIMALS = 6


def format_value(value: float) -> str:
    """Formats a data value without exponent notation or trailing zeros."""
    text = f"{value:.{_VALUE_DECIMALS}f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def tooltip(key: LineKey, point: Point) -> str:
    """Returns the tooltip of a data point.

    Example: "Total rain - Madrid - 2017 - March - 12.5 - (date: 2017-03-04)"
    """
    month = dates.month_name(point.month_index)
    text = f"{key.label} - {month} - {format_value(point.value)}"
    if point.date:
        text += f" - (date: {point.date})"
    return text


def _draw_title(surface: Surface, layout: ChartLayout, title: str):
    surface.text(
        layout.left, layout.top - _LABEL_GAP, title, css_class="title", anchor="start"
    )


def _draw_x_axis(
    surface: Surface, projection: Projection, year_labels: list[str], overlay: bool
):
    layout = projection.layout
    surface.line(
        layout.left, layout.bottom, layout.right, layout.bottom, css_class="x-axis"
    )
    for tick in month_ticks(projection, year_labels, overlay):
        if not tick.label:
            continue
        surface.text(
            tick.position,
            layout.bottom + 3 * _LABEL_GAP,
            tick.label,
            css_class="x-tick",
        )


def _draw_y_axis(surface: Surface, layout: ChartLayout, vrange: ValueRange, right=False):
    x = layout.right if right else layout.left
    surface.line(x, layout.top, x, layout.bottom, css_class="y-axis")
    ticks = value_ticks(layout, vrange)
    for tick in ticks:
        surface.text(
            x + _LABEL_GAP if right else x - _LABEL_GAP,
            tick.position,
            tick.label,
            css_class="y-tick",
            anchor="start" if right else "end",
        )
    return ticks


def _draw_status(surface: Surface, layout: ChartLayout, meta: UnitChartMetadata):
    if meta.loading:
        surface.text(
            layout.right, layout.top - _LABEL_GAP, "Loading…", css_class="loading", anchor="end"
        )
    elif not meta.has_points():
        surface.text(
            layout.left + layout.plot_width / 2,
            layout.top + layout.plot_height / 2,
            "No data found",
            css_class="no-data",
        )


def _draw_series(
    surface: Surface,
    meta: UnitChartMetadata,
    projection: Projection,
    style: StyleParams,
    palette: Tab20,
    dash: str | None = None,
):
    for i, (key, points) in enumerate(meta.lines.items()):
        if not points:
            continue
        color = palette.color(i)
        coords = [
            (projection.x(p.year_index, p.month_index), projection.y(p.value))
            for p in points
        ]
        surface.polyline(
            coords,
            css_class="series",
            stroke=color,
            stroke_width=style.line_thickness,
            dash=dash,
        )
        for (x, y), p in zip(coords, points):
            surface.circle(
                x, y, style.dot_radius, css_class="point", fill=color, tooltip=tooltip(key, p)
            )


def render_unit_chart(
    surface: Surface,
    meta: UnitChartMetadata | None,
    layout: ChartLayout,
    year_labels: list[str],
    overlay: bool = False,
    style: StyleParams = StyleParams(),
    palette: Tab20 | None = None,
):
    """Renders the chart of a single unit.

    A None meta (no metric enabled) leaves the surface empty.

    Args:
        year_labels: labels of the processed years, in year index order.
            Determines the x axis layout in chronological mode.
    """
    surface.clear()
    if meta is None:
        return

    palette = palette or Tab20()
    vrange = ValueRange.of(meta)
    projection = Projection(layout, vrange, len(year_labels), overlay)

    _draw_title(surface, layout, meta.unit)
    _draw_x_axis(surface, projection, year_labels, overlay)
    if meta.has_points():
        _draw_y_axis(surface, layout, vrange)
    else:
        surface.line(
            layout.left, layout.top, layout.left, layout.bottom, css_class="y-axis"
        )
    _draw_status(surface, layout, meta)
    _draw_series(surface, meta, projection, style, palette)


def render_combined_chart(
    surface: Surface,
    left: UnitChartMetadata | None,
    right: UnitChartMetadata | None,
    layout: ChartLayout,
    year_labels: list[str],
    ratio: float = 1.0,
    overlay: bool = False,
    style: StyleParams = StyleParams(),
    palette: Tab20 | None = None,
):
    """Renders two units on one chart with a left and a right value axis.

    Both axes share the vertical position of zero (see align_dual_axes).
    The right unit's series are drawn dashed in the paired light colors.
    """
    surface.clear()
    if left is None and right is None:
        return

    palette = palette or Tab20()
    empty = ValueRange(min_value=0.0, max_value=0.0)
    left_range, right_range = align_dual_axes(
        ValueRange.of(left) if left is not None else empty,
        ValueRange.of(right) if right is not None else empty,
        ratio,
    )
    left_proj = Projection(layout, left_range, len(year_labels), overlay)
    right_proj = Projection(layout, right_range, len(year_labels), overlay)

    title = " / ".join(m.unit for m in (left, right) if m is not None)
    _draw_title(surface, layout, title)
    _draw_x_axis(surface, left_proj, year_labels, overlay)
    left_ticks = _draw_y_axis(surface, layout, left_range)
    right_ticks = _draw_y_axis(surface, layout, right_range, right=True)

    if needs_zero_label([t.value for t in left_ticks], left_range) and needs_zero_label(
        [t.value for t in right_ticks], right_range
    ):
        surface.text(
            layout.left - _LABEL_GAP,
            left_proj.y(0.0),
            "0",
            css_class="zero-label",
            anchor="end",
        )

    for meta in (left, right):
        if meta is not None and meta.loading:
            _draw_status(surface, layout, meta)
            break

    if left is not None:
        _draw_series(surface, left, left_proj, style, palette)
    if right is not None:
        _draw_series(surface, right, right_proj, style, palette.invert(), dash="4 4")
