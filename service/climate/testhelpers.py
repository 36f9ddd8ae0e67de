import asyncio
from typing import Any
import unittest

import pandas as pd
from pandas.testing import assert_frame_equal

from service.climate.base.errors import DataFetchError
from service.climate.data.schema import ClimateSchema
from service.climate.metrics.registry import MetricRegistry
from service.climate.models import SchemaEntry, Station

# Small metric table covering three units, one scaled metric and one dated metric.
TEST_METRICS = {
    "avg_temp": {"pretty": "Average temperature", "unit": "Celsius"},
    "max_temp": {"pretty": "Max temperature", "unit": "Celsius", "with_date": True},
    "rain": {"pretty": "Total rain", "unit": "Mm"},
    "evaporation": {"pretty": "Evaporation", "unit": "Mm", "multiplier": 0.1},
    "humidity": {"pretty": "Humidity", "unit": "%"},
}


def make_registry(table: dict[str, dict[str, Any]] | None = None) -> MetricRegistry:
    return MetricRegistry.from_table(table or TEST_METRICS)


def make_station(station_id: str, name: str | None = None) -> Station:
    return Station(
        id=station_id, name=name or f"Station {station_id}", city="City", province="Prov"
    )


def make_schema(
    years: list[int],
    stations: list[str] = ("S1", "S2"),
    aggregates: dict[int, str] | None = None,
) -> ClimateSchema:
    """Returns a schema with the given years, each listing all stations.

    aggregates maps years to the label of an aggregate entry.
    """
    aggregates = aggregates or {}
    st = [make_station(s, f"Station {s}") for s in stations]
    return ClimateSchema(
        SchemaEntry(year=y, is_aggregate=aggregates.get(y), stations=st) for y in years
    )


def record(station_id: str, **months) -> dict[str, Any]:
    """A station record as found in per-year data files, e.g. record("S1", january=5)."""
    return {"station_id": station_id, **months}


class FakeFetcher:
    """In-memory Fetcher. Years without a payload fail with DataFetchError.

    If gated, every fetch waits until release() is called.
    """

    def __init__(self, payloads: dict[int, Any], gated: bool = False):
        self.payloads = payloads
        self.calls: list[int] = []
        self._gate: asyncio.Event | None = None
        self._gated = gated

    def release(self):
        self._gated = False
        if self._gate is not None:
            self._gate.set()

    async def __call__(self, year: int) -> dict[str, Any]:
        self.calls.append(year)
        if self._gated:
            if self._gate is None:
                self._gate = asyncio.Event()
            await self._gate.wait()
        if year not in self.payloads:
            raise DataFetchError(f"No data for {year}", source=f"{year}.json")
        return self.payloads[year]


class PandasTestCase(unittest.TestCase):
    def assertSeriesValuesEqual(self, series: pd.Series, expected_values: list[Any]):
        """Check only the values of a Series (ignore index, dtype, name)."""
        self.assertEqual(series.tolist(), expected_values)

    def assertFrameEqual(self, actual: pd.DataFrame, expected: pd.DataFrame, **kwargs):
        """Wrapper around assert_frame_equal with relaxed defaults."""
        kwargs.setdefault("check_dtype", False)
        kwargs.setdefault("check_column_type", False)
        kwargs.setdefault("check_index_type", False)
        assert_frame_equal(actual, expected, **kwargs)

    def assertColumnNames(self, df: pd.DataFrame, expected_names):
        self.assertEqual(df.columns.to_list(), expected_names)
