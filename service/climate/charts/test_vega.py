import json

import altair as alt
import pytest

from service.climate.base.errors import NoDataError
from service.climate.models import LineKey, Point, StyleParams, UnitChartMetadata

from . import vega


def _meta(points):
    return UnitChartMetadata(
        unit="Mm",
        lines={LineKey("Total rain", "Madrid"): points} if points else {},
        min_value=0,
        max_value=10,
    )


def test_unit_line_chart():
    meta = _meta(
        [
            Point(year_index=0, month_index=0, value=3, year=2016),
            Point(year_index=0, month_index=1, value=10, year=2016),
        ]
    )
    chart = vega.unit_line_chart(meta, style=StyleParams(line_thickness=4))
    assert isinstance(chart, alt.LayerChart)
    vl = json.loads(chart.to_json())
    assert vl["title"] == "Mm"
    assert len(vl["layer"]) == 2
    assert vl["layer"][0]["mark"]["strokeWidth"] == 4


def test_unit_line_chart_custom_title():
    meta = _meta([Point(year_index=0, month_index=0, value=3)])
    chart = vega.unit_line_chart(meta, title="Rain in Madrid")
    assert json.loads(chart.to_json())["title"] == "Rain in Madrid"


@pytest.mark.parametrize("meta", [None, _meta([])])
def test_unit_line_chart_no_data(meta):
    with pytest.raises(NoDataError):
        vega.unit_line_chart(meta)
