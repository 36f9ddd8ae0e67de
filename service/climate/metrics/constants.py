"""Static catalog of known metrics.

Keys are the metric ids used in per-year data files. "code" is the prefix of
the AEMET monthly statistics file (e.g. "TM_MES" for "TM_MES_2017.csv") the
metric is extracted from. See
http://www.aemet.es/documentos/es/datos_abiertos/Estadisticas/Estadisticas_meteorofenologicas/evmf_parametros.pdf
"""

UNIT_CELSIUS = "Celsius"
UNIT_DAYS = "Days"
UNIT_MM = "Mm"
UNIT_PERCENT = "%"
UNIT_HPA = "hPa"
UNIT_HOURS = "Hours"
UNIT_KM = "Km"
UNIT_KMH = "km/h"

KNOWN_METRICS = {
    # Temperature
    "average_temperature": {
        "pretty": "Average temperature",
        "unit": UNIT_CELSIUS,
        "code": "TM_MES",
    },
    "average_max_temperature": {
        "pretty": "Average max temperature",
        "unit": UNIT_CELSIUS,
        "code": "TM_MAX",
    },
    "average_min_temperature": {
        "pretty": "Average min temperature",
        "unit": UNIT_CELSIUS,
        "code": "TM_MIN",
    },
    "higher_min_temperature": {
        "pretty": "Higher min temperature",
        "unit": UNIT_CELSIUS,
        "code": "TS_MIN",
    },
    "lower_max_temperature": {
        "pretty": "Lower max temperature",
        "unit": UNIT_CELSIUS,
        "code": "TI_MAX",
    },
    "absolute_max_temperature": {
        "pretty": "Absolute max temperature",
        "unit": UNIT_CELSIUS,
        "with_date": True,
        "code": "TA_MAX",
    },
    "absolute_min_temperature": {
        "pretty": "Absolute min temperature",
        "unit": UNIT_CELSIUS,
        "with_date": True,
        "code": "TA_MIN",
    },
    "number_of_days_gteq_30_celsius": {
        "pretty": "Number of days with >= 30 degrees celsius",
        "unit": UNIT_DAYS,
        "code": "NT_30",
    },
    "number_of_days_lteq_0_celsius": {
        "pretty": "Number of days with <= 0 degrees celsius",
        "unit": UNIT_DAYS,
        "code": "NT_00",
    },
    # Rain
    "total_rain": {
        "pretty": "Total rain",
        "unit": UNIT_MM,
        "code": "P_MES",
    },
    "max_daily_rain": {
        "pretty": "Max daily rain",
        "unit": UNIT_MM,
        "with_date": True,
        "code": "P_MAX",
    },
    "days_with_appreciable_rain": {
        "pretty": "Days with appreciable rain (>= 0.1mm)",
        "unit": UNIT_DAYS,
        "multiplier": 0.1,
        "code": "NP_001",
    },
    "days_with_rain_gteq_1_mm": {
        "pretty": "Days with >= 1mm of rain",
        "unit": UNIT_DAYS,
        "code": "NP_010",
    },
    "days_with_rain_gteq_10_mm": {
        "pretty": "Days with >= 10mm of rain",
        "unit": UNIT_DAYS,
        "code": "NP_100",
    },
    "days_with_rain_gteq_30_mm": {
        "pretty": "Days with >= 30mm of rain",
        "unit": UNIT_DAYS,
        "code": "NP_300",
    },
    # Humidity
    "average_relative_humidity": {
        "pretty": "Average relative humidity (%)",
        "unit": UNIT_PERCENT,
        "code": "HR",
    },
    "average_vapor_tension": {
        "pretty": "Average vapor tension",
        "unit": UNIT_HPA,
        "multiplier": 0.1,
        "code": "E",
    },
    # Days of rain/snow/storm/fog/...
    "days_of_rain": {
        "pretty": "Days of rain",
        "unit": UNIT_DAYS,
        "code": "N_LLU",
    },
    "days_of_snow": {
        "pretty": "Days of snow",
        "unit": UNIT_DAYS,
        "code": "N_NIE",
    },
    "days_of_hail": {
        "pretty": "Days of hail",
        "unit": UNIT_DAYS,
        "code": "N_GRA",
    },
    "days_of_storm": {
        "pretty": "Days of storm",
        "unit": UNIT_DAYS,
        "code": "N_TOR",
    },
    "days_of_fog": {
        "pretty": "Days of fog",
        "unit": UNIT_DAYS,
        "code": "N_FOG",
    },
    "clear_days": {
        "pretty": "Clear days",
        "unit": UNIT_DAYS,
        "code": "N_DES",
    },
    "cloudy_days": {
        "pretty": "Cloudy days",
        "unit": UNIT_DAYS,
        "code": "N_NUB",
    },
    "covered_days": {
        "pretty": "Covered days",
        "unit": UNIT_DAYS,
        "code": "N_CUB",
    },
    # Sun
    "hours_of_sun": {
        "pretty": "Hours of sun",
        "unit": UNIT_HOURS,
        "code": "INSO",
    },
    "average_percentage_against_theoric_insolation": {
        "pretty": "Average percentage against theoric insolation",
        "unit": UNIT_PERCENT,
        "code": "P_SOL",
    },
    "evaporation": {
        "pretty": "Evaporation",
        "unit": UNIT_MM,
        "multiplier": 0.1,
        "code": "EVAP",
    },
    # Wind
    "average_distance": {
        "pretty": "Average distance",
        "unit": UNIT_KM,
        "code": "W_REC",
    },
    "days_with_wind_greater_than_55_km_per_hour": {
        "pretty": "Days with wind > 55km/h",
        "unit": UNIT_DAYS,
        "code": "NW_55",
    },
    "days_with_wind_greater_than_91_km_per_hour": {
        "pretty": "Days with wind > 91km/h",
        "unit": UNIT_DAYS,
        "code": "NW_91",
    },
    "average_wind_speed": {
        "pretty": "Average wind speed",
        "unit": UNIT_KMH,
        "code": "W_MED",
    },
    # Pressure (tenths of hPa in the source files)
    "average_pressure": {
        "pretty": "Average pressure",
        "unit": UNIT_HPA,
        "multiplier": 0.1,
        "code": "Q_MED",
    },
    "average_pressure_sea_level": {
        "pretty": "Average pressure at sea level",
        "unit": UNIT_HPA,
        "multiplier": 0.1,
        "code": "Q_MAR",
    },
    "max_pressure": {
        "pretty": "Max pressure",
        "unit": UNIT_HPA,
        "multiplier": 0.1,
        "with_date": True,
        "code": "Q_MAX",
    },
    "min_pressure": {
        "pretty": "Min pressure",
        "unit": UNIT_HPA,
        "multiplier": 0.1,
        "with_date": True,
        "code": "Q_MIN",
    },
    # Soil temperature
    "average_temperature_under_10_cm": {
        "pretty": "Average temperature under 10 cm",
        "unit": UNIT_CELSIUS,
        "multiplier": 0.1,
        "code": "TS_10",
    },
    "average_temperature_under_20_cm": {
        "pretty": "Average temperature under 20 cm",
        "unit": UNIT_CELSIUS,
        "multiplier": 0.1,
        "code": "TS_20",
    },
    "average_temperature_under_50_cm": {
        "pretty": "Average temperature under 50 cm",
        "unit": UNIT_CELSIUS,
        "multiplier": 0.1,
        "code": "TS_50",
    },
    # Visibility
    "days_with_visibility_lt_50_m": {
        "pretty": "Days with visibility < 50m",
        "unit": UNIT_DAYS,
        "code": "NV_0050",
    },
    "days_with_visibility_gteq_50_m_lt_100_m": {
        "pretty": "Days with visibility >= 50m < 100m",
        "unit": UNIT_DAYS,
        "code": "NV_0100",
    },
    "days_with_visibility_gteq_100_m_lt_1000_m": {
        "pretty": "Days with visibility >= 100m < 1000m",
        "unit": UNIT_DAYS,
        "code": "NV_1000",
    },
}
