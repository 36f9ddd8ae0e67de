from typing import Literal, NamedTuple, NewType
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from service.climate.base import constants as bc
from service.climate.base import coords

# A physical measurement unit ("Celsius", "Days", "%", ...). Charts are keyed by unit.
Unit = NewType("Unit", str)


################################################################
# Metrics
################################################################


class DatedValue(BaseModel):
    """A monthly value that also carries the date it was observed on."""

    value: float
    date: str

    model_config = ConfigDict(frozen=True)


# A single monthly reading: absent, a bare number, or a dated value.
MonthlyValue = float | DatedValue | None


class MetricDefinition(BaseModel):
    id: str
    display_name: str = Field(alias="pretty")
    unit: str
    multiplier: float | None = None
    carries_date: bool = Field(default=False, alias="with_date")
    # File name prefix of the AEMET monthly table this metric is built from.
    code: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def extract(self, raw: DatedValue | float) -> tuple[float, str | None]:
        """Returns the (scaled value, date) of a present monthly reading."""
        if isinstance(raw, DatedValue):
            value, date = raw.value, raw.date
        else:
            value, date = float(raw), None
        if self.multiplier is not None:
            value *= self.multiplier
        return value, date


################################################################
# Schema
################################################################


class Station(BaseModel):
    id: str
    name: str
    city: str = ""
    province: str = ""
    altitude: float | None = None
    latitude: float | None = None
    longitude: float | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("latitude", mode="before")
    @classmethod
    def _dms_latitude(cls, v):
        if isinstance(v, str) and len(v.strip()) == 6:
            return coords.parse_latitude(v)
        return v

    @field_validator("longitude", mode="before")
    @classmethod
    def _dms_longitude(cls, v):
        if isinstance(v, str) and len(v.strip()) == 7:
            return coords.parse_longitude(v)
        return v

    def label(self) -> str:
        return f"{self.id} - {self.name} ({self.city}, {self.province})"


class SchemaEntry(BaseModel):
    """One selectable year slot. Aggregate entries summarize several years."""

    year: int
    is_aggregate: bool | str | None = None
    stations: list[Station] = []

    @property
    def aggregate(self) -> bool:
        if isinstance(self.is_aggregate, str):
            return self.is_aggregate.strip() != ""
        return bool(self.is_aggregate)

    def label(self) -> str:
        if isinstance(self.is_aggregate, str) and self.is_aggregate.strip():
            return self.is_aggregate.strip()
        return str(self.year)


################################################################
# Per-year data
################################################################


class StationRecord(BaseModel):
    station_id: str
    january: MonthlyValue = None
    february: MonthlyValue = None
    march: MonthlyValue = None
    april: MonthlyValue = None
    may: MonthlyValue = None
    june: MonthlyValue = None
    july: MonthlyValue = None
    august: MonthlyValue = None
    september: MonthlyValue = None
    october: MonthlyValue = None
    november: MonthlyValue = None
    december: MonthlyValue = None

    def monthly_values(self) -> list[MonthlyValue]:
        return [getattr(self, m) for m in bc.MONTHS]


class YearDataset(BaseModel):
    """Raw data of one year: metric id -> station records."""

    year: int
    metrics: dict[str, list[StationRecord]] = {}

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls, year: int) -> "YearDataset":
        return cls(year=year)

    def records(self, metric_id: str) -> list[StationRecord]:
        return self.metrics.get(metric_id, [])

    def __contains__(self, metric_id: str) -> bool:
        return metric_id in self.metrics


################################################################
# Aggregation results
################################################################


class LineKey(NamedTuple):
    """Identity of one rendered series within a chart."""

    metric: str
    station: str
    year: int | None = None

    @property
    def label(self) -> str:
        if self.year is None:
            return f"{self.metric} - {self.station}"
        return f"{self.metric} - {self.station} - {self.year}"


class Point(BaseModel):
    # Dense index over the processed years, not the literal year.
    year_index: int
    month_index: int
    value: float
    date: str | None = None
    year: int | None = None


class UnitChartMetadata(BaseModel):
    unit: str
    lines: dict[LineKey, list[Point]] = {}
    min_value: float
    max_value: float
    loading: bool = False

    def has_points(self) -> bool:
        return any(self.lines.values())

    def point_count(self) -> int:
        return sum(len(points) for points in self.lines.values())


################################################################
# Filter state snapshot
################################################################


class StyleParams(BaseModel):
    line_thickness: float = Field(default=bc.DEFAULT_LINE_THICKNESS, gt=0)
    dot_radius: float = Field(default=bc.DEFAULT_DOT_RADIUS, gt=0)

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class CombinedSettings(BaseModel):
    # (left unit, right unit)
    units: tuple[str, str]
    # Right-axis units per left-axis unit.
    ratio: float = Field(default=bc.DEFAULT_COMBINED_RATIO, gt=0)

    model_config = ConfigDict(frozen=True)


class StateSnapshot(BaseModel):
    """Exportable filter state. Serialized with camelCase keys."""

    enabled_years: list[int]
    enabled_stations: list[str]
    mode: Literal["full", "yearly"] = bc.MODE_FULL
    style: StyleParams = StyleParams()
    units: dict[str, list[str]] = {}
    combined: CombinedSettings

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
