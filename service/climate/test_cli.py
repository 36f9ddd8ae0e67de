import asyncio
import json
import sys

import pytest

from service.climate.testhelpers import make_registry, make_schema, record

from . import cli
from .data.fetch import SCHEMA_FILENAME
from .env import ChartOptions

PAYLOADS = {
    2016: {"rain": [record("S1", january=10, february=20)], "avg_temp": [record("S1", january=5)]},
    2017: {"rain": [record("S1", january=30)]},
}


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    schema = make_schema([2016, 2017])
    (d / SCHEMA_FILENAME).write_text(
        json.dumps([e.model_dump() for e in schema.entries]), encoding="utf-8"
    )
    for year, payload in PAYLOADS.items():
        (d / f"{year}.json").write_text(json.dumps(payload), encoding="utf-8")
    return d


@pytest.mark.parametrize(
    "unit, name", [("%", "percent"), ("km/h", "km_h"), ("Celsius", "celsius")]
)
def test_unit_basename(unit, name):
    assert cli.unit_basename(unit) == name


def _render(data_dir, **kwargs):
    return asyncio.run(
        cli.render_all(
            make_registry(),
            make_schema([2016, 2017]),
            str(data_dir),
            ChartOptions(frame_interval_ms=0),
            **kwargs,
        )
    )


def test_write_svg(data_dir, tmp_path):
    dash = _render(data_dir)
    out = tmp_path / "out"
    written = cli.write_outputs(dash, out, cli.FORMAT_SVG)
    assert sorted(p.name for p in written) == [
        "celsius.svg",
        "combined.svg",
        "mm.svg",
        "percent.svg",
    ]
    svg = (out / "mm.svg").read_text(encoding="utf-8")
    assert svg.startswith("<svg ")
    assert "Total rain - Station S1 - February - 20" in svg


def test_write_csv_skips_empty_charts(data_dir, tmp_path):
    dash = _render(data_dir)
    written = cli.write_outputs(dash, tmp_path / "out", cli.FORMAT_CSV)
    # No humidity data at all.
    assert sorted(p.name for p in written) == ["celsius.csv", "mm.csv"]
    lines = (tmp_path / "out" / "mm.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("line,metric,station,year")
    assert len(lines) == 4


def test_write_vega(data_dir, tmp_path):
    dash = _render(data_dir)
    written = cli.write_outputs(dash, tmp_path / "out", cli.FORMAT_VEGA)
    assert sorted(p.name for p in written) == ["celsius.vl.json", "mm.vl.json"]
    vl = json.loads((tmp_path / "out" / "mm.vl.json").read_text(encoding="utf-8"))
    assert vl["title"] == "Mm"


def test_render_all_applies_state_and_overrides(data_dir):
    state = {
        "enabledYears": [2017],
        "enabledStations": ["S1", "S2"],
        "combined": {"units": ["Mm", "%"], "ratio": 2},
    }
    dash = _render(data_dir, state=state, mode="yearly", ratio=4.0)
    f = dash.filters
    assert f.enabled_years() == {2017}
    assert f.mode == "yearly"
    assert f.combined.units == ("Mm", "%")
    assert f.combined.ratio == 4.0
    assert dash.metadata("Mm").point_count() == 1


def test_main(data_dir, tmp_path, monkeypatch):
    out = tmp_path / "out"
    exported = tmp_path / "state.json"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "cli",
            "--data-dir",
            str(data_dir),
            "--out-dir",
            str(out),
            "--combined-units",
            "Celsius",
            "Mm",
            "--export-state",
            str(exported),
        ],
    )
    cli.main()
    assert (out / "combined.svg").exists()
    state = json.loads(exported.read_text(encoding="utf-8"))
    assert state["combined"]["units"] == ["Celsius", "Mm"]
    assert state["mode"] == "full"


def test_main_unknown_unit(data_dir, tmp_path, monkeypatch):
    monkeypatch.setattr(
        sys,
        "argv",
        ["cli", "--data-dir", str(data_dir), "--out-dir", str(tmp_path), "--combined-units", "Celsius", "Furlongs"],
    )
    with pytest.raises(SystemExit):
        cli.main()


def test_main_requires_data_source(tmp_path, monkeypatch):
    monkeypatch.delenv("CLIMATE_DATA_DIR", raising=False)
    monkeypatch.delenv("CLIMATE_DATA_URL", raising=False)
    monkeypatch.setattr(sys, "argv", ["cli", "--out-dir", str(tmp_path)])
    with pytest.raises(SystemExit):
        cli.main()
