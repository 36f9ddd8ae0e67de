from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from service.climate.base.errors import UnknownUnitError
from service.climate.models import MetricDefinition, Unit

from . import constants as mc


class MetricRegistry:
    """Immutable catalog of metrics and their grouping by unit.

    Build it once at startup (see `default_registry`) and share the instance.
    """

    def __init__(self, metrics: Iterable[MetricDefinition]):
        by_id: dict[str, MetricDefinition] = {}
        units: dict[Unit, list[str]] = {}
        for m in metrics:
            if m.id in by_id:
                raise ValueError(f"Duplicate metric id {m.id}")
            by_id[m.id] = m
            units.setdefault(Unit(m.unit), []).append(m.id)

        self._metrics = MappingProxyType(by_id)
        self._units = MappingProxyType({u: tuple(ids) for u, ids in units.items()})

    @classmethod
    def from_table(cls, table: Mapping[str, Mapping[str, Any]]) -> "MetricRegistry":
        """Creates a registry from a {metric_id: {"pretty", "unit", ...}} table."""
        return cls(MetricDefinition(id=k, **v) for k, v in table.items())

    def __len__(self) -> int:
        return len(self._metrics)

    def __iter__(self) -> Iterator[MetricDefinition]:
        return iter(self._metrics.values())

    def __contains__(self, metric_id: object) -> bool:
        return metric_id in self._metrics

    def __getitem__(self, metric_id: str) -> MetricDefinition:
        return self._metrics[metric_id]

    def get(self, metric_id: str) -> MetricDefinition | None:
        return self._metrics.get(metric_id)

    def units(self) -> list[Unit]:
        """Returns all units in the order they first appear in the catalog."""
        return list(self._units)

    def has_unit(self, unit: str) -> bool:
        return unit in self._units

    def metrics_for_unit(self, unit: str) -> tuple[str, ...]:
        try:
            return self._units[unit]
        except KeyError:
            raise UnknownUnitError(f"Unknown unit: {unit}")

    def unit_groups(self) -> Mapping[Unit, tuple[str, ...]]:
        """Returns the read-only mapping of unit to its metric ids."""
        return self._units

    def by_code(self, code: str) -> MetricDefinition | None:
        for m in self._metrics.values():
            if m.code == code:
                return m
        return None


def default_registry() -> MetricRegistry:
    return MetricRegistry.from_table(mc.KNOWN_METRICS)
