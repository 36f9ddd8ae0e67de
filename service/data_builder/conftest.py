"""Fixtures with small AEMET style CSV exports."""

import pytest

STATIONS_CSV = """INDICATIVO;NOMBRE;PROVINCIA;MUNICIPIO;ALTITUD;LONGITUD;LATITUD;DATUM
3195;MADRID, RETIRO;MADRID;MADRID;667;0340392;402443;ETRS89
0076;BARCELONA AEROPUERTO;BARCELONA;EL PRAT DE LLOBREGAT;4;0020412;411735;ETRS89
"""

MONTHS = "enero;febrero;marzo;abril;mayo;junio;julio;agosto;septiembre;octubre;noviembre;diciembre;anual"

TM_MES_CSV = f"""Indicativo;{MONTHS}
3195;6.5;8.1;11.0;13.2;18.5;24.9;26.1;25.7;21.2;15.9;9.4;6.0;15.5
0076;9.8;10.7;;15.1;18.2;22.6;25.3;25.8;22.4;19.1;13.6;10.9;17.7
"""

TA_MAX_CSV = f"""Indicativo;{MONTHS}
3195;15.2(12);18.0(28);22.5(31);25.1(2);33.0(29);38.4(25);39.9(13);38.5(3);35.0(1);28.2(6);20.1(9);14.9(20);39.9(13)
"""


@pytest.fixture
def aemet_dir(tmp_path):
    """An export tree with 2016 (two tables) and 2017 (station list only)."""
    src = tmp_path / "aemet"
    for year in (2016, 2017):
        monthly = src / str(year) / "mensuales"
        monthly.mkdir(parents=True)
        (src / str(year) / f"Maestro_Climatologico_{year}.csv").write_text(
            STATIONS_CSV, encoding="latin-1"
        )
    (src / "2016" / "mensuales" / "TM_MES_2016.csv").write_text(TM_MES_CSV, encoding="latin-1")
    (src / "2016" / "mensuales" / "TA_MAX_2016.csv").write_text(TA_MAX_CSV, encoding="latin-1")
    (src / "notayear").mkdir()
    return src
