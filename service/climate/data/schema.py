import json
from pathlib import Path
from typing import Any, Iterable

from service.climate.base.errors import StationNotFoundError
from service.climate.models import SchemaEntry, Station


class ClimateSchema:
    """The ordered list of selectable year entries and the stations reporting in them."""

    def __init__(self, entries: Iterable[SchemaEntry]):
        self._entries = list(entries)
        self._by_year = {}
        for e in self._entries:
            if e.year in self._by_year:
                raise ValueError(f"Duplicate schema entry for year {e.year}")
            self._by_year[e.year] = e

        # Union of stations across all entries, first one wins.
        self._stations: dict[str, Station] = {}
        for e in self._entries:
            for s in e.stations:
                self._stations.setdefault(s.id, s)

    def __len__(self):
        return len(self._entries)

    @property
    def entries(self) -> list[SchemaEntry]:
        return list(self._entries)

    @property
    def stations(self) -> list[Station]:
        return list(self._stations.values())

    def years(self) -> list[int]:
        return [e.year for e in self._entries]

    def entry(self, year: int) -> SchemaEntry | None:
        return self._by_year.get(year)

    def is_aggregate(self, year: int) -> bool:
        e = self._by_year.get(year)
        return e is not None and e.aggregate

    def station(self, station_id: str) -> Station:
        try:
            return self._stations[station_id]
        except KeyError:
            raise StationNotFoundError(f"Station {station_id} not found")

    def station_name(self, station_id: str) -> str:
        """Returns the station's name, or its id if the station is unknown."""
        s = self._stations.get(station_id)
        return s.name if s is not None else station_id

    @classmethod
    def from_json(cls, payload: list[dict[str, Any]]) -> "ClimateSchema":
        if not isinstance(payload, list):
            raise ValueError("Schema listing must be a JSON array")
        return cls(SchemaEntry.model_validate(e) for e in payload)

    @classmethod
    def from_file(cls, path: str | Path) -> "ClimateSchema":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_json(json.load(f))
