import argparse
import json
import logging
from pathlib import Path
from typing import Any
import pandas as pd

from service.climate.base import logging_config as _  # configure logging

from service.climate.base import constants as bc
from service.climate.data.fetch import SCHEMA_FILENAME, year_filename
from service.climate.metrics.registry import MetricRegistry, default_registry
from service.climate.models import SchemaEntry, Station

from . import aemet

logger = logging.getLogger("data_builder")


def find_years(source_dir: Path) -> list[int]:
    """Returns the years that have a station master file in source_dir."""
    years = []
    for p in source_dir.iterdir():
        if p.is_dir() and p.name.isdigit() and aemet.stations_path(source_dir, int(p.name)).exists():
            years.append(int(p.name))
    return sorted(years)


def build_year(
    source_dir: Path, year: int, registry: MetricRegistry
) -> tuple[SchemaEntry, dict[str, Any]]:
    """Builds the schema entry and the per-year data file contents for year.

    Metrics whose monthly table is missing are skipped.
    """
    stations = aemet.read_stations(aemet.stations_path(source_dir, year))
    entry = SchemaEntry(year=year, stations=stations)

    payload: dict[str, Any] = {
        "year": year,
        "is_aggregate": None,
        "stations": [s.model_dump() for s in stations],
    }
    for metric in registry:
        if metric.code is None:
            continue
        path = aemet.monthly_path(source_dir, year, metric.code)
        if not path.exists():
            logger.info("No %s table for %d, skipping %s", metric.code, year, metric.id)
            continue
        payload[metric.id] = aemet.read_monthly_table(path, year)
    return entry, payload


def aggregate_year(years: list[int]) -> int:
    """Returns the schema id of the aggregate of years, e.g. 20162019."""
    return min(years) * 10000 + max(years)


def _cell_value(cell: Any) -> float | None:
    if isinstance(cell, dict):
        return cell.get("value")
    return cell


def _monthly_means(payloads: list[dict[str, Any]], metric_id: str) -> list[dict[str, Any]]:
    rows = [
        {"station_id": r["station_id"], "month": m, "value": _cell_value(r.get(m))}
        for p in payloads
        for r in p.get(metric_id, [])
        for m in bc.MONTHS
    ]
    if not rows:
        return []
    df = pd.DataFrame(rows, columns=["station_id", "month", "value"])
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    means = df.groupby(["station_id", "month"])["value"].mean().unstack("month")

    records = []
    for station_id, row in means.iterrows():
        record: dict[str, Any] = {"station_id": station_id}
        for m in bc.MONTHS:
            v = row.get(m)
            record[m] = None if v is None or pd.isna(v) else round(float(v), 2)
        records.append(record)
    return records


def build_aggregate(
    payloads: list[dict[str, Any]], label: str, registry: MetricRegistry
) -> tuple[SchemaEntry, dict[str, Any]]:
    """Builds a multi-year entry holding per-station monthly means of payloads.

    Dated values contribute their value only; the means carry no dates.
    Stations are the union of all years, the first occurrence wins.
    """
    year = aggregate_year([p["year"] for p in payloads])
    stations: dict[str, dict[str, Any]] = {}
    for p in payloads:
        for s in p["stations"]:
            stations.setdefault(s["id"], s)
    entry = SchemaEntry(
        year=year,
        is_aggregate=label,
        stations=[Station.model_validate(s) for s in stations.values()],
    )

    payload: dict[str, Any] = {
        "year": year,
        "is_aggregate": label,
        "stations": list(stations.values()),
    }
    for metric in registry:
        records = _monthly_means(payloads, metric.id)
        if records:
            payload[metric.id] = records
    return entry, payload


def write_json(path: Path, data: Any):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def run_build(
    source_dir: Path,
    out_dir: Path,
    years: list[int] | None = None,
    registry: MetricRegistry | None = None,
    aggregate: str | None = None,
) -> list[SchemaEntry]:
    """Converts the AEMET exports of years (default: all found) into data files.

    If aggregate is set, an aggregate entry labelled with it is appended to
    the schema after the years.
    """
    registry = registry or default_registry()
    if not years:
        years = find_years(source_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    schema: list[SchemaEntry] = []

    def write_entry(entry: SchemaEntry, payload: dict[str, Any]):
        write_json(out_dir / year_filename(entry.year), payload)
        logger.info(
            "Wrote %s (%d stations, %d metrics)",
            year_filename(entry.year),
            len(entry.stations),
            sum(1 for k in payload if k in registry),
        )
        schema.append(entry)

    payloads = []
    for year in years:
        entry, payload = build_year(source_dir, year, registry)
        write_entry(entry, payload)
        payloads.append(payload)
    if aggregate and payloads:
        write_entry(*build_aggregate(payloads, aggregate, registry))

    write_json(out_dir / SCHEMA_FILENAME, [e.model_dump() for e in schema])
    logger.info("Wrote %s with %d entries", SCHEMA_FILENAME, len(schema))
    return schema


def main():
    parser = argparse.ArgumentParser(
        description="Convert AEMET monthly statistics into climate chart data files.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--source-dir",
        dest="source_dir",
        metavar="PATH",
        required=True,
        help="Directory with one subdirectory per year of AEMET CSV exports.",
    )
    parser.add_argument(
        "--out-dir",
        dest="out_dir",
        metavar="PATH",
        required=True,
        help="Output directory for schema.json and the per-year files.",
    )
    parser.add_argument(
        "--years",
        nargs="*",
        type=int,
        help="Years to convert (default: all years found in --source-dir).",
    )
    parser.add_argument(
        "--aggregate",
        metavar="LABEL",
        help="Also write an entry with per-station monthly means of all "
        "converted years, shown as LABEL.",
    )
    args = parser.parse_args()

    source_dir = Path(args.source_dir)
    if not source_dir.is_dir():
        parser.error(f"--source-dir {source_dir} is not a directory.")
    for year in args.years or []:
        if not aemet.stations_path(source_dir, year).exists():
            parser.error(f"No station master file for {year} in {source_dir}.")
    if args.aggregate is not None and not args.aggregate.strip():
        parser.error("--aggregate needs a non-empty label.")

    run_build(source_dir, Path(args.out_dir), args.years, aggregate=args.aggregate)


if __name__ == "__main__":
    main()
