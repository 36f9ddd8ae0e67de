"""Headless renderer: writes the charts of a data source to files."""

import argparse
import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any

from service.climate.base import logging_config as _  # configure logging

from service.climate.base.errors import DataFetchError, NoDataError
from service.climate.charts import vega
from service.climate.charts.transform import series_frame
from service.climate.dashboard import ClimateDashboard
from service.climate.data.fetch import load_schema, make_fetcher
from service.climate.data.schema import ClimateSchema
from service.climate.env import ChartOptions
from service.climate.metrics.registry import MetricRegistry, default_registry
from service.climate.models import Unit
from service.climate.scheduler import AsyncioFrameClock

logger = logging.getLogger("cli")

FORMAT_SVG = "svg"
FORMAT_VEGA = "vega"
FORMAT_CSV = "csv"

COMBINED_BASENAME = "combined"


def unit_basename(unit: Unit) -> str:
    """Returns a file name friendly version of unit ("%" -> "percent", "km/h" -> "km_h")."""
    if unit == "%":
        return "percent"
    return re.sub(r"[^a-z0-9]+", "_", unit.lower()).strip("_")


def apply_overrides(
    dashboard: ClimateDashboard,
    mode: str | None = None,
    combined_units: tuple[Unit, Unit] | None = None,
    ratio: float | None = None,
):
    f = dashboard.filters
    if mode is not None:
        f.set_mode(mode)
    if combined_units is not None:
        f.set_combined_units(*combined_units)
    if ratio is not None:
        f.set_combined_ratio(ratio)


def write_outputs(dashboard: ClimateDashboard, out_dir: Path, fmt: str) -> list[Path]:
    """Writes one file per unit chart plus one for the combined chart (SVG only).

    Charts without any data are skipped for the Vega and CSV formats.
    Returns the written paths.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []

    if fmt == FORMAT_SVG:
        for unit, surface in dashboard.surfaces.items():
            path = out_dir / f"{unit_basename(unit)}.svg"
            path.write_text(surface.to_svg(), encoding="utf-8")
            written.append(path)
        path = out_dir / f"{COMBINED_BASENAME}.svg"
        path.write_text(dashboard.combined_surface.to_svg(), encoding="utf-8")
        written.append(path)
        return written

    for unit in dashboard.surfaces:
        meta = dashboard.metadata(unit)
        if fmt == FORMAT_VEGA:
            try:
                chart = vega.unit_line_chart(meta, style=dashboard.filters.style)
            except NoDataError:
                logger.info("No data for unit %s, skipping", unit)
                continue
            path = out_dir / f"{unit_basename(unit)}.vl.json"
            path.write_text(chart.to_json(), encoding="utf-8")
        elif fmt == FORMAT_CSV:
            df = series_frame(meta)
            if df.empty:
                logger.info("No data for unit %s, skipping", unit)
                continue
            path = out_dir / f"{unit_basename(unit)}.csv"
            df.to_csv(path, index=False)
        else:
            raise ValueError(f"Unsupported format: {fmt}")
        written.append(path)
    return written


async def render_all(
    registry: MetricRegistry,
    schema: ClimateSchema,
    source: str,
    options: ChartOptions,
    state: dict[str, Any] | None = None,
    **overrides,
) -> ClimateDashboard:
    """Builds a dashboard for source, applies state and overrides and waits for all data."""
    dashboard = ClimateDashboard(
        registry,
        schema,
        make_fetcher(source),
        clock=AsyncioFrameClock(options.frame_interval()),
        layout=options.layout(),
    )
    if state is not None:
        dashboard.import_state(state)
    apply_overrides(dashboard, **overrides)
    await dashboard.settle()
    return dashboard


def main():
    parser = argparse.ArgumentParser(
        description="Render climate charts to files.", allow_abbrev=False
    )
    parser.add_argument(
        "--data-dir",
        dest="data_dir",
        metavar="PATH",
        help="Directory with schema.json and per-year files (defaults to $CLIMATE_DATA_DIR).",
    )
    parser.add_argument(
        "--data-url",
        dest="data_url",
        metavar="URL",
        help="Base URL of the data files (defaults to $CLIMATE_DATA_URL).",
    )
    parser.add_argument(
        "--out-dir",
        dest="out_dir",
        metavar="PATH",
        required=True,
        help="Output directory.",
    )
    parser.add_argument(
        "--format",
        choices=[FORMAT_SVG, FORMAT_VEGA, FORMAT_CSV],
        default=FORMAT_SVG,
        help="Output format (default: svg).",
    )
    parser.add_argument(
        "--state",
        metavar="FILE",
        help="JSON state snapshot to apply before rendering.",
    )
    parser.add_argument(
        "--export-state",
        dest="export_state",
        metavar="FILE",
        help="Write the resulting state snapshot to FILE.",
    )
    parser.add_argument("--mode", choices=["full", "yearly"], help="Display mode.")
    parser.add_argument(
        "--combined-units",
        dest="combined_units",
        nargs=2,
        metavar=("LEFT", "RIGHT"),
        help="Units of the combined chart.",
    )
    parser.add_argument(
        "--ratio", type=float, help="Right/left axis ratio of the combined chart."
    )
    parser.add_argument("--width", type=int, help="Chart width in pixels.")
    parser.add_argument("--height", type=int, help="Chart height in pixels.")

    args = parser.parse_args()

    try:
        options = ChartOptions.from_env()
    except ValueError as e:
        parser.error(str(e))
    updates = {
        k: v
        for k, v in [
            ("data_dir", args.data_dir),
            ("data_url", args.data_url),
            ("chart_width", args.width),
            ("chart_height", args.height),
        ]
        if v is not None
    }
    options = options.model_copy(update=updates)
    if args.data_dir:
        source = args.data_dir
    elif args.data_url:
        source = args.data_url
    elif options.data_dir or options.data_url:
        source = options.data_source()
    else:
        parser.error("--data-dir or --data-url is required if $CLIMATE_DATA_DIR is not set.")

    if args.ratio is not None and args.ratio <= 0:
        parser.error("--ratio must be positive.")

    registry = default_registry()
    if args.combined_units:
        unknown = [u for u in args.combined_units if not registry.has_unit(u)]
        if unknown:
            parser.error(f"Unknown units {unknown}, expected some of {registry.units()}")

    state = None
    if args.state:
        with open(args.state, encoding="utf-8") as f:
            state = json.load(f)

    try:
        schema = load_schema(source)
    except DataFetchError as e:
        logger.error("Cannot load schema: %s", e)
        raise SystemExit(1)
    logger.info("Loaded schema with %d entries from %s", len(schema), source)

    dashboard = asyncio.run(
        render_all(
            registry,
            schema,
            source,
            options,
            state=state,
            mode=args.mode,
            combined_units=tuple(args.combined_units) if args.combined_units else None,
            ratio=args.ratio,
        )
    )

    written = write_outputs(dashboard, Path(args.out_dir), args.format)
    logger.info("Wrote %d files to %s", len(written), args.out_dir)

    if args.export_state:
        with open(args.export_state, "w", encoding="utf-8") as f:
            json.dump(dashboard.export_state(), f, indent=2)


if __name__ == "__main__":
    main()
