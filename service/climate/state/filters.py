import logging
from typing import Callable, Iterable

from service.climate.base import constants as bc
from service.climate.data.schema import ClimateSchema
from service.climate.metrics.registry import MetricRegistry
from service.climate.models import (
    CombinedSettings,
    StateSnapshot,
    StyleParams,
    Unit,
)

from .controls import Checkbox, CheckboxGroup

logger = logging.getLogger("filters")

# Called with the units whose charts need a redraw, and whether the combined
# chart must be rebuilt regardless of its units.
ChangeListener = Callable[[Iterable[Unit], bool], None]


class FilterState:
    """Current selection of years, stations, metrics, display mode and style."""

    def __init__(
        self,
        registry: MetricRegistry,
        schema: ClimateSchema,
        on_change: ChangeListener | None = None,
    ):
        self._registry = registry
        self._schema = schema
        self._units = registry.units()
        self.on_change = on_change

        self.years = CheckboxGroup(
            "years",
            [
                Checkbox(e.year, e.label(), units=self._units, on_change=self._changed)
                for e in schema.entries
            ],
        )
        self.stations = CheckboxGroup(
            "stations",
            [
                Checkbox(s.id, s.label(), units=self._units, on_change=self._changed)
                for s in schema.stations
            ],
        )
        self.metrics: dict[Unit, CheckboxGroup] = {}
        for unit in self._units:
            boxes = []
            for metric_id in registry.metrics_for_unit(unit):
                m = registry[metric_id]
                boxes.append(
                    Checkbox(
                        metric_id,
                        f"{m.display_name} ({m.unit})",
                        units=[unit],
                        on_change=self._changed,
                    )
                )
            self.metrics[unit] = CheckboxGroup(unit, boxes)

        self._mode = bc.MODE_FULL
        self._style = StyleParams()
        right = self._units[1] if len(self._units) > 1 else self._units[0]
        self._combined = CombinedSettings(units=(self._units[0], right))

    def _changed(self, box: Checkbox):
        self._notify(box.units)

    def _notify(self, units: Iterable[Unit], force_combined: bool = False):
        if self.on_change is not None:
            self.on_change(list(units), force_combined)

    ################################################################
    # Accessors
    ################################################################

    @property
    def units(self) -> list[Unit]:
        return list(self._units)

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def overlay(self) -> bool:
        return self._mode == bc.MODE_YEARLY

    @property
    def style(self) -> StyleParams:
        return self._style

    @property
    def combined(self) -> CombinedSettings:
        return self._combined

    def enabled_years(self) -> set[int]:
        return set(self.years.checked_values())

    def effective_years(self) -> list[int]:
        """Enabled years in schema order, without aggregates in "yearly" mode."""
        enabled = self.enabled_years()
        return [
            e.year
            for e in self._schema.entries
            if e.year in enabled and not (self.overlay and e.aggregate)
        ]

    def enabled_stations(self) -> set[str]:
        return set(self.stations.checked_values())

    def enabled_metrics(self, unit: Unit) -> set[str]:
        group = self.metrics.get(unit)
        return set(group.checked_values()) if group is not None else set()

    ################################################################
    # Mutators
    ################################################################

    def set_year_enabled(self, year: int, enabled: bool) -> bool:
        return self.years.set_checked(year, enabled)

    def set_station_enabled(self, station_id: str, enabled: bool) -> bool:
        return self.stations.set_checked(station_id, enabled)

    def set_metric_enabled(self, unit: Unit, metric_id: str, enabled: bool) -> bool:
        self._registry.metrics_for_unit(unit)  # raises for unknown units
        return self.metrics[unit].set_checked(metric_id, enabled)

    def set_mode(self, mode: str) -> bool:
        if mode not in bc.VALID_MODES:
            raise ValueError(f"Invalid mode: {mode}")
        if mode == self._mode:
            return False
        self._mode = mode
        self._notify(self._units, force_combined=True)
        return True

    def set_style(
        self, line_thickness: float | None = None, dot_radius: float | None = None
    ) -> bool:
        style = StyleParams(
            line_thickness=(
                self._style.line_thickness if line_thickness is None else line_thickness
            ),
            dot_radius=self._style.dot_radius if dot_radius is None else dot_radius,
        )
        if style == self._style:
            return False
        self._style = style
        self._notify(self._units, force_combined=True)
        return True

    def set_combined_units(self, left: Unit, right: Unit) -> bool:
        for u in (left, right):
            self._registry.metrics_for_unit(u)  # raises for unknown units
        return self._set_combined(
            CombinedSettings(units=(left, right), ratio=self._combined.ratio)
        )

    def set_combined_ratio(self, ratio: float) -> bool:
        return self._set_combined(
            CombinedSettings(units=self._combined.units, ratio=ratio)
        )

    def _set_combined(self, combined: CombinedSettings) -> bool:
        if combined == self._combined:
            return False
        self._combined = combined
        self._notify([], force_combined=True)
        return True

    ################################################################
    # Snapshots
    ################################################################

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            enabled_years=self.years.checked_values(),
            enabled_stations=self.stations.checked_values(),
            mode=self._mode,
            style=self._style,
            units={u: g.checked_values() for u, g in self.metrics.items()},
            combined=self._combined,
        )

    def apply_snapshot(self, snapshot: StateSnapshot):
        """Applies an exported snapshot.

        Only controls whose state actually changes emit notifications, so
        applying the same snapshot twice is a no-op the second time.
        Years, stations, units and metrics unknown to this instance are ignored.
        """
        self._warn_unknown("years", snapshot.enabled_years, self.years)
        self._warn_unknown("stations", snapshot.enabled_stations, self.stations)
        self.years.set_checked_values(snapshot.enabled_years)
        self.stations.set_checked_values(snapshot.enabled_stations)

        for unit, metric_ids in snapshot.units.items():
            group = self.metrics.get(unit)
            if group is None:
                logger.info("Ignoring unknown unit %s in snapshot", unit)
                continue
            self._warn_unknown(f"metrics of {unit}", metric_ids, group)
            group.set_checked_values(metric_ids)

        self.set_mode(snapshot.mode)
        self.set_style(snapshot.style.line_thickness, snapshot.style.dot_radius)

        left, right = snapshot.combined.units
        if self._registry.has_unit(left) and self._registry.has_unit(right):
            self._set_combined(snapshot.combined)
        else:
            logger.info("Ignoring unknown combined units %s in snapshot", (left, right))
            self.set_combined_ratio(snapshot.combined.ratio)

    @staticmethod
    def _warn_unknown(what: str, values: Iterable, group: CheckboxGroup):
        unknown = [v for v in values if v not in group]
        if unknown:
            logger.info("Ignoring unknown %s in snapshot: %s", what, unknown)
