"""Retrieval of schema listings and per-year data files.

Fetchers are async callables `(year) -> dict` used by the DataStore. Blocking
I/O runs in a worker thread so the event loop is never blocked.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable

import requests

from service.climate.base.errors import DataFetchError

from .schema import ClimateSchema

logger = logging.getLogger("fetch")

SCHEMA_FILENAME = "schema.json"

Fetcher = Callable[[int], Awaitable[dict[str, Any]]]


def year_filename(year: int) -> str:
    return f"{year}.json"


def fetch_json(url: str, timeout: float = 10) -> Any:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as e:
        raise DataFetchError(f"Failed to fetch or parse: {e}", source=url) from e


def read_json(path: str | Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise DataFetchError(f"Failed to read or parse: {e}", source=str(path)) from e


class FileFetcher:
    """Reads per-year data files from a local directory."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    async def __call__(self, year: int) -> dict[str, Any]:
        path = self.base_dir / year_filename(year)
        logger.debug("Reading %s", path)
        return await asyncio.to_thread(read_json, path)


class HttpFetcher:
    """Downloads per-year data files from a base URL."""

    def __init__(self, base_url: str, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def __call__(self, year: int) -> dict[str, Any]:
        url = f"{self.base_url}/{year_filename(year)}"
        logger.debug("Fetching %s", url)
        return await asyncio.to_thread(fetch_json, url, self.timeout)


def make_fetcher(source: str) -> Fetcher:
    """Returns an HttpFetcher for http(s) URLs and a FileFetcher otherwise."""
    if source.startswith(("http://", "https://")):
        return HttpFetcher(source)
    return FileFetcher(source)


def load_schema(source: str, timeout: float = 10) -> ClimateSchema:
    """Loads the schema listing from a data directory or base URL."""
    if source.startswith(("http://", "https://")):
        payload = fetch_json(f"{source.rstrip('/')}/{SCHEMA_FILENAME}", timeout)
    else:
        payload = read_json(Path(source) / SCHEMA_FILENAME)
    return ClimateSchema.from_json(payload)
