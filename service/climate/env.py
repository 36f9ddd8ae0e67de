"""Helpers for dealing with environment variables.

Chart sizes, the data location and the frame interval can be provided as
env vars; command line flags take precedence.
"""

import os
from pydantic import BaseModel, Field

from service.climate.charts.layout import ChartLayout


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {val!r}") from None


class ChartOptions(BaseModel):
    data_dir: str | None = None
    data_url: str | None = None
    frame_interval_ms: int = Field(default=16, ge=0)
    chart_width: int = Field(default=960, gt=0)
    chart_height: int = Field(default=400, gt=0)

    @classmethod
    def from_env(cls):
        return cls(
            data_dir=os.getenv("CLIMATE_DATA_DIR") or None,
            data_url=os.getenv("CLIMATE_DATA_URL") or None,
            frame_interval_ms=_env_int("CLIMATE_FRAME_INTERVAL_MS", 16),
            chart_width=_env_int("CLIMATE_CHART_WIDTH", 960),
            chart_height=_env_int("CLIMATE_CHART_HEIGHT", 400),
        )

    def data_source(self) -> str:
        """Returns the data directory or, if none is set, the data URL."""
        source = self.data_dir or self.data_url
        if not source:
            raise ValueError("Neither CLIMATE_DATA_DIR nor CLIMATE_DATA_URL is set")
        return source

    def frame_interval(self) -> float:
        return self.frame_interval_ms / 1000

    def layout(self) -> ChartLayout:
        return ChartLayout(width=self.chart_width, height=self.chart_height)
