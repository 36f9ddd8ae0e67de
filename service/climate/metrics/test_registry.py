import pytest

from service.climate.base.errors import UnknownUnitError
from service.climate.models import MetricDefinition

from . import constants as mc
from .registry import MetricRegistry, default_registry


def test_default_registry_units_in_first_seen_order():
    reg = default_registry()
    assert reg.units() == [
        mc.UNIT_CELSIUS,
        mc.UNIT_DAYS,
        mc.UNIT_MM,
        mc.UNIT_PERCENT,
        mc.UNIT_HPA,
        mc.UNIT_HOURS,
        mc.UNIT_KM,
        mc.UNIT_KMH,
    ]
    assert len(reg) == len(mc.KNOWN_METRICS)


def test_every_metric_has_exactly_one_unit():
    reg = default_registry()
    seen = []
    for unit in reg.units():
        seen.extend(reg.metrics_for_unit(unit))
    assert sorted(seen) == sorted(mc.KNOWN_METRICS)


def test_metrics_for_unknown_unit_raises():
    with pytest.raises(UnknownUnitError):
        default_registry().metrics_for_unit("Furlongs")


def test_duplicate_metric_id_raises():
    m = MetricDefinition(id="x", pretty="X", unit="Days")
    with pytest.raises(ValueError):
        MetricRegistry([m, m])


def test_lookup_and_codes():
    reg = default_registry()
    m = reg["average_temperature"]
    assert m.display_name == "Average temperature"
    assert reg.by_code("TM_MES") is m
    assert reg.by_code("NOPE") is None
    assert reg.get("nope") is None
    assert "average_temperature" in reg
    assert reg.has_unit("%")


def test_dated_metrics():
    reg = default_registry()
    assert reg["absolute_max_temperature"].carries_date
    assert not reg["average_temperature"].carries_date


def test_unit_groups_read_only():
    reg = default_registry()
    groups = reg.unit_groups()
    assert list(groups) == reg.units()
    assert groups[mc.UNIT_KMH] == ("average_wind_speed",)
    with pytest.raises(TypeError):
        groups["x"] = ()
