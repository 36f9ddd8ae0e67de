import pandas as pd

from service.climate.base import dates
from service.climate.models import UnitChartMetadata

from .render import tooltip

SERIES_COLUMNS = [
    "line",
    "metric",
    "station",
    "year",
    "year_index",
    "month_index",
    "slot",
    "month",
    "value",
    "date",
    "tooltip",
]


def series_frame(meta: UnitChartMetadata | None) -> pd.DataFrame:
    """Returns the points of all line series of meta in long format.

    One row per point, ordered by line and then by x position.
    An absent or empty meta yields an empty DataFrame with the same columns.
    """
    rows = []
    if meta is not None:
        for key, points in meta.lines.items():
            for p in points:
                rows.append(
                    [
                        key.label,
                        key.metric,
                        key.station,
                        p.year,
                        p.year_index,
                        p.month_index,
                        p.year_index * 12 + p.month_index,
                        dates.month_abbr(p.month_index),
                        p.value,
                        p.date,
                        tooltip(key, p),
                    ]
                )
    df = pd.DataFrame(rows, columns=SERIES_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(["line", "slot"], kind="stable").reset_index(drop=True)
