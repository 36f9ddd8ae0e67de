"""Lazy per-year data loading.

All methods must be called from the thread running the event loop; loads are
asyncio tasks on that loop and never run concurrently with aggregation.
"""

import asyncio
import logging
from typing import Any, Callable, Collection

from pydantic import ValidationError

from service.climate.base.errors import DataFetchError
from service.climate.metrics.registry import MetricRegistry
from service.climate.models import StationRecord, Unit, YearDataset

from .fetch import Fetcher

logger = logging.getLogger("store")


def parse_year_dataset(
    year: int, payload: Any, known_metrics: Collection[str]
) -> YearDataset:
    """Parses the JSON payload of a per-year data file.

    Metric ids that are not in known_metrics are dropped. A metric whose
    records cannot be parsed is dropped with a warning; the other metrics
    of the same year are kept.

    Raises:
        ValueError if payload is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Data for {year} is not a JSON object")

    metrics: dict[str, list[StationRecord]] = {}
    for metric_id, rows in payload.items():
        if metric_id not in known_metrics:
            logger.debug("Ignoring unknown metric %s in data for %d", metric_id, year)
            continue
        try:
            metrics[metric_id] = [StationRecord.model_validate(r) for r in rows]
        except (ValidationError, TypeError) as e:
            logger.warning("Ignoring malformed metric %s for %d: %s", metric_id, year, e)
    return YearDataset(year=year, metrics=metrics)


class _LoadRequest:
    """The single in-flight load of a year and the units waiting for it."""

    def __init__(self, year: int):
        self.year = year
        self.interested_units: set[Unit] = set()
        self.task: asyncio.Task | None = None


class DataStore:

    def __init__(
        self,
        fetch: Fetcher,
        registry: MetricRegistry,
        on_loaded: Callable[[set[Unit]], None] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """Creates a new DataStore.

        Args:
            fetch: async callable returning the JSON payload for a year.
            registry: metrics registry; unknown metric ids are not cached.
            on_loaded: called with the interested units once a year finished
                loading (successfully or not).
            loop: event loop that runs the loads. Defaults to the loop running
                when a load starts; pass one to request data outside of it.
        """
        self._fetch = fetch
        self._registry = registry
        self._on_loaded = on_loaded
        self._loop = loop
        self._cache: dict[int, YearDataset] = {}
        self._loading: dict[int, _LoadRequest] = {}

    def dataset_for(self, year: int, unit: Unit | None = None) -> YearDataset | None:
        """Returns the cached dataset for year, or None if it is still loading.

        The first call for an uncached year starts a load on the store's
        event loop (the running loop if none was given). unit is recorded as
        interested in the result.
        """
        dataset = self._cache.get(year)
        if dataset is not None:
            return dataset

        req = self._loading.get(year)
        if req is None:
            req = _LoadRequest(year)
            self._loading[year] = req
            loop = self._loop or asyncio.get_running_loop()
            req.task = loop.create_task(self._load(year))
            logger.debug("Started loading data for %d", year)
        if unit is not None:
            req.interested_units.add(unit)
        return None

    async def _load(self, year: int):
        try:
            payload = await self._fetch(year)
            dataset = parse_year_dataset(year, payload, self._registry)
        except DataFetchError as e:
            # Failed years are cached as empty and not retried.
            logger.warning("Failed to load data for %d: %s", year, e)
            dataset = YearDataset.empty(year)
        except Exception as e:
            # Fetchers are pluggable, so anything they raise fails the year.
            logger.warning(
                "Failed to load data for %d: %s: %s", year, type(e).__name__, e
            )
            dataset = YearDataset.empty(year)

        self._cache[year] = dataset
        req = self._loading.pop(year)
        logger.debug(
            "Loaded data for %d (%d metrics), notifying %s",
            year,
            len(dataset.metrics),
            sorted(req.interested_units),
        )
        if self._on_loaded is not None and req.interested_units:
            self._on_loaded(set(req.interested_units))

    def preload(self, dataset: YearDataset):
        """Seeds the cache with an already available dataset."""
        self._cache[dataset.year] = dataset

    def is_cached(self, year: int) -> bool:
        return year in self._cache

    def is_loading(self, year: int) -> bool:
        return year in self._loading

    def loading_years(self) -> list[int]:
        return list(self._loading)

    async def wait_idle(self):
        """Waits until no load is in flight anymore."""
        while self._loading:
            await asyncio.gather(
                *(r.task for r in list(self._loading.values()) if r.task is not None)
            )
