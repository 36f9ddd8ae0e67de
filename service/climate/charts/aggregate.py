"""Aggregation of raw per-year station records into keyed line series."""

import math
from typing import Collection

from service.climate.base import constants as bc
from service.climate.data.schema import ClimateSchema
from service.climate.data.store import DataStore
from service.climate.metrics.registry import MetricRegistry
from service.climate.models import LineKey, Point, Unit, UnitChartMetadata


def initial_range(unit: str) -> tuple[float, float]:
    """Returns the (min, max) a unit's value range is seeded with."""
    if unit == bc.PERCENT_UNIT:
        return 0.0, 100.0
    return math.inf, -math.inf


class Aggregator:

    def __init__(self, registry: MetricRegistry, schema: ClimateSchema, store: DataStore):
        self._registry = registry
        self._schema = schema
        self._store = store

    def lines_for_unit(
        self,
        unit: Unit,
        effective_years: Collection[int],
        enabled_stations: Collection[str],
        enabled_metrics: Collection[str],
        overlay: bool = False,
    ) -> UnitChartMetadata | None:
        """Builds the line series of one unit's chart.

        Returns None if no metric of this unit is enabled, i.e. there is
        nothing to draw (as opposed to an empty chart).

        Years whose data is not loaded yet are skipped and mark the result
        as loading; everything that is available is still aggregated.

        In overlay mode every year gets its own line (the key carries the
        year) and all points are anchored at year_index 0. Otherwise the
        year_index counts the processed schema entries.
        """
        metrics = [
            self._registry[m]
            for m in self._registry.metrics_for_unit(unit)
            if m in enabled_metrics
        ]
        if not metrics:
            return None

        years = set(effective_years)
        stations = set(enabled_stations)
        lo, hi = initial_range(unit)
        lines: dict[LineKey, list[Point]] = {}
        loading = False
        year_index = -1

        for entry in self._schema.entries:
            if entry.year not in years:
                continue
            year_index += 1

            dataset = self._store.dataset_for(entry.year, unit)
            if dataset is None:
                loading = True
                continue

            point_year_index = 0 if overlay else year_index
            for metric in metrics:
                for record in dataset.records(metric.id):
                    if record.station_id not in stations:
                        continue
                    key = LineKey(
                        metric=metric.display_name,
                        station=self._schema.station_name(record.station_id),
                        year=entry.year if overlay else None,
                    )
                    for month_index, raw in enumerate(record.monthly_values()):
                        if raw is None:
                            continue
                        value, date = metric.extract(raw)
                        lo = min(lo, value)
                        hi = max(hi, value)
                        lines.setdefault(key, []).append(
                            Point(
                                year_index=point_year_index,
                                month_index=month_index,
                                value=value,
                                date=date,
                                year=entry.year,
                            )
                        )

        return UnitChartMetadata(
            unit=unit, lines=lines, min_value=lo, max_value=hi, loading=loading
        )

    def lines_for_combined(
        self,
        units: tuple[Unit, Unit],
        effective_years: Collection[int],
        enabled_stations: Collection[str],
        enabled_metrics: tuple[Collection[str], Collection[str]],
        overlay: bool = False,
    ) -> tuple[UnitChartMetadata | None, UnitChartMetadata | None]:
        """Builds the series of both units of the combined chart."""
        left, right = units
        return (
            self.lines_for_unit(
                left, effective_years, enabled_stations, enabled_metrics[0], overlay
            ),
            self.lines_for_unit(
                right, effective_years, enabled_stations, enabled_metrics[1], overlay
            ),
        )
