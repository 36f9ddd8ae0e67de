import pytest
from pydantic import ValidationError

from service.climate.models import (
    DatedValue,
    LineKey,
    MetricDefinition,
    SchemaEntry,
    StateSnapshot,
    Station,
    StationRecord,
    StyleParams,
)


def test_metric_extract_applies_multiplier():
    m = MetricDefinition(id="evap", pretty="Evaporation", unit="Mm", multiplier=0.1)
    value, date = m.extract(5)
    assert value == pytest.approx(0.5)
    assert date is None


def test_metric_extract_dated_value():
    m = MetricDefinition(id="tmax", pretty="Max", unit="Celsius", with_date=True)
    assert m.carries_date
    assert m.extract(DatedValue(value=38.4, date="2017-07-25")) == (38.4, "2017-07-25")


def test_station_parses_dms_coordinates():
    s = Station.model_validate(
        {
            "id": "3195",
            "name": "MADRID, RETIRO",
            "latitude": "402443",
            "longitude": "0340392",
        }
    )
    assert s.latitude == pytest.approx(40.411944)
    assert s.longitude == pytest.approx(-3.6775)
    assert s.label() == "3195 - MADRID, RETIRO (, )"


def test_station_accepts_decimal_coordinates():
    s = Station(id="1", name="x", latitude=40.5, longitude=-3.25)
    assert (s.latitude, s.longitude) == (40.5, -3.25)


@pytest.mark.parametrize(
    "is_aggregate, aggregate, label",
    [
        (None, False, "2017"),
        (False, False, "2017"),
        ("", False, "2017"),
        ("1981-2010", True, "1981-2010"),
        (True, True, "2017"),
    ],
)
def test_schema_entry_aggregate(is_aggregate, aggregate, label):
    e = SchemaEntry(year=2017, is_aggregate=is_aggregate)
    assert e.aggregate == aggregate
    assert e.label() == label


def test_station_record_monthly_values():
    r = StationRecord.model_validate(
        {"station_id": "S1", "january": 1.5, "march": {"value": 2, "date": "2017-03-04"}}
    )
    values = r.monthly_values()
    assert len(values) == 12
    assert values[0] == 1.5
    assert values[1] is None
    assert values[2] == DatedValue(value=2, date="2017-03-04")


def test_line_key_label():
    assert LineKey("Rain", "Madrid").label == "Rain - Madrid"
    assert LineKey("Rain", "Madrid", 2017).label == "Rain - Madrid - 2017"


def test_style_params_must_be_positive():
    with pytest.raises(ValidationError):
        StyleParams(line_thickness=0)


def test_state_snapshot_camel_case():
    snap = StateSnapshot.model_validate(
        {
            "enabledYears": [2016],
            "enabledStations": ["S1"],
            "mode": "yearly",
            "style": {"lineThickness": 3, "dotRadius": 1.5},
            "units": {"Celsius": ["avg_temp"]},
            "combined": {"units": ["Celsius", "Mm"], "ratio": 2},
        }
    )
    d = snap.to_dict()
    assert d["enabledYears"] == [2016]
    assert d["style"] == {"lineThickness": 3.0, "dotRadius": 1.5}
    assert d["combined"] == {"units": ["Celsius", "Mm"], "ratio": 2.0}


def test_state_snapshot_rejects_invalid_mode():
    with pytest.raises(ValidationError):
        StateSnapshot(
            enabled_years=[],
            enabled_stations=[],
            mode="weekly",
            combined={"units": ("Celsius", "Mm")},
        )
