from .models import *

__all__ = [
    "CombinedSettings",
    "DatedValue",
    "LineKey",
    "MetricDefinition",
    "MonthlyValue",
    "Point",
    "SchemaEntry",
    "StateSnapshot",
    "Station",
    "StationRecord",
    "StyleParams",
    "Unit",
    "UnitChartMetadata",
    "YearDataset",
]
