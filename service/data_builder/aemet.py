"""Readers for AEMET monthly climate statistics CSV exports.

Format description:
http://www.aemet.es/documentos/es/datos_abiertos/Estadisticas/Estadisticas_meteorofenologicas/evmf_formatos.pdf
"""

import logging
import re
from pathlib import Path
from typing import Any

import pandas as pd

from service.climate.base import constants as bc
from service.climate.base import dates
from service.climate.models import Station

logger = logging.getLogger("data_builder")

# Month columns of the monthly tables, in calendar order.
SPANISH_MONTHS = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]

STATION_ID_COLUMN = "Indicativo"

# Station master ("Maestro climatológico") columns.
STATION_COLUMNS = {
    "INDICATIVO": "id",
    "NOMBRE": "name",
    "PROVINCIA": "province",
    "MUNICIPIO": "city",
    "ALTITUD": "altitude",
    "LATITUD": "latitude",
    "LONGITUD": "longitude",
}

# "38.4(25)": value 38.4 observed on day 25.
_DATED_CELL_RE = re.compile(r"^(?P<value>-?\d+(?:[.,]\d+)?)\s*\((?P<day>\d{1,2})\)$")

CSV_ENCODING = "latin-1"


def stations_path(source_dir: Path, year: int) -> Path:
    return source_dir / str(year) / f"Maestro_Climatologico_{year}.csv"


def monthly_path(source_dir: Path, year: int, code: str) -> Path:
    return source_dir / str(year) / "mensuales" / f"{code}_{year}.csv"


def _read_csv(path: Path) -> pd.DataFrame:
    df = pd.read_csv(
        path, sep=";", dtype=str, keep_default_na=False, encoding=CSV_ENCODING
    )
    df.columns = [c.strip() for c in df.columns]
    return df


def read_stations(path: Path) -> list[Station]:
    """Reads the station master file of one year."""
    df = _read_csv(path)
    missing = set(STATION_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"{path} is missing columns {sorted(missing)}")

    df = df[list(STATION_COLUMNS)].rename(columns=STATION_COLUMNS)
    df = df.apply(lambda col: col.str.strip())
    df["altitude"] = pd.to_numeric(df["altitude"], errors="coerce")
    stations = []
    for row in df.to_dict(orient="records"):
        altitude = row["altitude"]
        row["altitude"] = None if pd.isna(altitude) else float(altitude)
        stations.append(Station.model_validate(row))
    return stations


def parse_cell(text: str, year: int, month_index: int) -> float | dict[str, Any] | None:
    """Parses one monthly cell.

    Returns None for empty cells, a float for plain values and a
    {"value", "date"} dict for values annotated with the day of the month.

    Raises:
        ValueError if text is neither.
    """
    text = text.strip()
    if not text:
        return None
    mo = _DATED_CELL_RE.match(text)
    if mo:
        value = float(mo.group("value").replace(",", "."))
        day = int(mo.group("day"))
        return {"value": value, "date": dates.iso_date(year, month_index, day)}
    return float(text.replace(",", "."))


def read_monthly_table(path: Path, year: int) -> list[dict[str, Any]]:
    """Reads one monthly statistics table into per-station records.

    The yearly summary column ("anual") is ignored. Unparseable cells are
    logged and treated as absent.
    """
    df = _read_csv(path)
    if STATION_ID_COLUMN not in df.columns:
        raise ValueError(f"{path} has no {STATION_ID_COLUMN} column")

    records = []
    for row in df.to_dict(orient="records"):
        record: dict[str, Any] = {"station_id": row[STATION_ID_COLUMN].strip()}
        for month_index, col in enumerate(SPANISH_MONTHS):
            try:
                value = parse_cell(row.get(col, ""), year, month_index)
            except ValueError:
                logger.warning(
                    "Ignoring invalid value %r for %s/%s in %s",
                    row.get(col),
                    record["station_id"],
                    col,
                    path.name,
                )
                value = None
            record[bc.MONTHS[month_index]] = value
        records.append(record)
    return records
