"""Wires data store, filter state, aggregation, rendering and scheduling together."""

import asyncio
import logging
from typing import Any, Callable, Iterable, Iterator

from service.climate.charts import render
from service.climate.charts.aggregate import Aggregator
from service.climate.charts.colors import Tab20
from service.climate.charts.layout import ChartLayout
from service.climate.charts.surface import SvgSurface
from service.climate.data.fetch import Fetcher
from service.climate.data.schema import ClimateSchema
from service.climate.data.store import DataStore
from service.climate.metrics.registry import MetricRegistry
from service.climate.models import StateSnapshot, Unit, UnitChartMetadata
from service.climate.scheduler import AsyncioFrameClock, FrameClock, RedrawScheduler
from service.climate.state.filters import FilterState

logger = logging.getLogger("dashboard")


class ChartSurfaces:
    """One drawing surface per unit."""

    def __init__(self, units: Iterable[Unit], layout: ChartLayout):
        self._surfaces = {u: SvgSurface(layout.width, layout.height) for u in units}

    def __getitem__(self, unit: Unit) -> SvgSurface:
        return self._surfaces[unit]

    def __contains__(self, unit: object) -> bool:
        return unit in self._surfaces

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._surfaces)

    def items(self):
        return self._surfaces.items()


class ClimateDashboard:
    """Interactive charts of one schema: a chart per unit plus the combined chart.

    Every filter change and every finished year load schedules a redraw of
    the affected charts; redraws run at most once per frame.

    Year loads run on loop, or on the running event loop if loop is None.
    Headless callers driving a ManualFrameClock outside of a running loop
    pass their own loop and run settle() on it.
    """

    def __init__(
        self,
        registry: MetricRegistry,
        schema: ClimateSchema,
        fetch: Fetcher,
        clock: FrameClock | None = None,
        layout: ChartLayout | None = None,
        after_frame: Callable[[], None] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.registry = registry
        self.schema = schema
        self.layout = layout or ChartLayout()
        self.palette = Tab20()

        self.store = DataStore(
            fetch, registry, on_loaded=self._on_year_loaded, loop=loop
        )
        self.aggregator = Aggregator(registry, schema, self.store)
        self.scheduler = RedrawScheduler(
            rebuild_unit=self.rebuild_unit,
            rebuild_combined=self.rebuild_combined,
            combined_units=lambda: self.filters.combined.units,
            clock=clock or AsyncioFrameClock(loop=loop),
            after_frame=after_frame,
        )
        self.filters = FilterState(registry, schema, on_change=self._on_filters_changed)

        self.surfaces = ChartSurfaces(registry.units(), self.layout)
        self.combined_surface = SvgSurface(self.layout.width, self.layout.height)
        self._metadata: dict[Unit, UnitChartMetadata | None] = {}
        self._combined_metadata: tuple[UnitChartMetadata | None, UnitChartMetadata | None] = (
            None,
            None,
        )

        self.rebuild_all()

    def _on_filters_changed(self, units: Iterable[Unit], force_combined: bool):
        self.scheduler.request(units, force_combined=force_combined)

    def _on_year_loaded(self, units: set[Unit]):
        self.scheduler.request(units)

    def rebuild_all(self):
        self.scheduler.request(self.registry.units(), force_combined=True)

    def _year_labels(self, years: list[int]) -> list[str]:
        return [self.schema.entry(y).label() for y in years]

    def rebuild_unit(self, unit: Unit):
        f = self.filters
        years = f.effective_years()
        meta = self.aggregator.lines_for_unit(
            unit,
            years,
            f.enabled_stations(),
            f.enabled_metrics(unit),
            overlay=f.overlay,
        )
        self._metadata[unit] = meta
        render.render_unit_chart(
            self.surfaces[unit],
            meta,
            self.layout,
            self._year_labels(years),
            overlay=f.overlay,
            style=f.style,
            palette=self.palette,
        )

    def rebuild_combined(self):
        f = self.filters
        years = f.effective_years()
        left, right = f.combined.units
        self._combined_metadata = self.aggregator.lines_for_combined(
            (left, right),
            years,
            f.enabled_stations(),
            (f.enabled_metrics(left), f.enabled_metrics(right)),
            overlay=f.overlay,
        )
        render.render_combined_chart(
            self.combined_surface,
            *self._combined_metadata,
            self.layout,
            self._year_labels(years),
            ratio=f.combined.ratio,
            overlay=f.overlay,
            style=f.style,
            palette=self.palette,
        )

    def metadata(self, unit: Unit) -> UnitChartMetadata | None:
        """Returns the result of the last aggregation of unit's chart."""
        return self._metadata.get(unit)

    def combined_metadata(
        self,
    ) -> tuple[UnitChartMetadata | None, UnitChartMetadata | None]:
        return self._combined_metadata

    def export_state(self) -> dict[str, Any]:
        return self.filters.snapshot().to_dict()

    def import_state(self, state: dict[str, Any]):
        """Applies an exported state. Raises pydantic.ValidationError on invalid input."""
        self.filters.apply_snapshot(StateSnapshot.model_validate(state))

    async def settle(self):
        """Renders and loads until no frame is pending and no load is in flight."""
        while True:
            self.scheduler.flush()
            if not self.store.loading_years():
                break
            await self.store.wait_idle()
        logger.debug("Settled after %d frames", self.scheduler.frames_rendered)
