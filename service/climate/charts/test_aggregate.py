import asyncio
import math
import unittest

from service.climate.data.store import DataStore, parse_year_dataset
from service.climate.models import LineKey
from service.climate.testhelpers import (
    FakeFetcher,
    make_registry,
    make_schema,
    record,
)

from .aggregate import Aggregator, initial_range


def _aggregator(payloads, years, aggregates=None):
    reg = make_registry()
    schema = make_schema(years, aggregates=aggregates)
    store = DataStore(FakeFetcher({}), reg)
    for year, payload in payloads.items():
        store.preload(parse_year_dataset(year, payload, reg))
    return Aggregator(reg, schema, store)


ALL_STATIONS = {"S1", "S2"}


class TestLinesForUnit(unittest.TestCase):

    def test_no_enabled_metric_is_nothing_to_draw(self):
        agg = _aggregator({2016: {}}, [2016])
        self.assertIsNone(agg.lines_for_unit("Mm", [2016], ALL_STATIONS, set()))
        # Enabled metrics of other units don't count.
        self.assertIsNone(agg.lines_for_unit("Mm", [2016], ALL_STATIONS, {"avg_temp"}))

    def test_enabled_metric_without_data_is_empty_chart(self):
        agg = _aggregator({2016: {}}, [2016])
        meta = agg.lines_for_unit("Mm", [2016], ALL_STATIONS, {"rain"})
        self.assertIsNotNone(meta)
        self.assertFalse(meta.has_points())
        self.assertFalse(meta.loading)
        self.assertTrue(math.isinf(meta.min_value))

    def test_multiplier_applied_to_values_and_range(self):
        agg = _aggregator(
            {2016: {"evaporation": [record("S1", january=5, february=-3)]}}, [2016]
        )
        meta = agg.lines_for_unit("Mm", [2016], ALL_STATIONS, {"evaporation"})
        points = meta.lines[LineKey("Evaporation", "Station S1")]
        self.assertEqual(len(points), 2)
        self.assertAlmostEqual(points[0].value, 0.5)
        self.assertAlmostEqual(points[1].value, -0.3)
        self.assertAlmostEqual(meta.min_value, -0.3)
        self.assertAlmostEqual(meta.max_value, 0.5)

    def test_overlay_mode_keys_by_year(self):
        payloads = {
            2016: {"rain": [record("S1", january=10)]},
            2017: {"rain": [record("S1", january=20)]},
        }
        agg = _aggregator(payloads, [2016, 2017])
        meta = agg.lines_for_unit("Mm", [2016, 2017], ALL_STATIONS, {"rain"}, overlay=True)
        k16 = LineKey("Total rain", "Station S1", 2016)
        k17 = LineKey("Total rain", "Station S1", 2017)
        self.assertEqual(set(meta.lines), {k16, k17})
        for key, value in [(k16, 10), (k17, 20)]:
            (p,) = meta.lines[key]
            self.assertEqual((p.year_index, p.month_index, p.value), (0, 0, value))

    def test_chronological_mode_counts_years(self):
        payloads = {
            2016: {"rain": [record("S1", january=10)]},
            2017: {"rain": [record("S1", january=20)]},
        }
        agg = _aggregator(payloads, [2016, 2017])
        meta = agg.lines_for_unit("Mm", [2016, 2017], ALL_STATIONS, {"rain"})
        points = meta.lines[LineKey("Total rain", "Station S1")]
        self.assertEqual([(p.year_index, p.year) for p in points], [(0, 2016), (1, 2017)])

    def test_disabled_years_do_not_count(self):
        payloads = {
            2016: {"rain": [record("S1", january=10)]},
            2017: {"rain": [record("S1", january=20)]},
            2018: {"rain": [record("S1", january=30)]},
        }
        agg = _aggregator(payloads, [2016, 2017, 2018])
        meta = agg.lines_for_unit("Mm", [2016, 2018], ALL_STATIONS, {"rain"})
        points = meta.lines[LineKey("Total rain", "Station S1")]
        self.assertEqual([(p.year_index, p.value) for p in points], [(0, 10), (1, 30)])

    def test_filters_stations_and_skips_absent_values(self):
        agg = _aggregator(
            {
                2016: {
                    "rain": [
                        record("S1", january=1, march=3),
                        record("S2", january=7),
                    ]
                }
            },
            [2016],
        )
        meta = agg.lines_for_unit("Mm", [2016], {"S1"}, {"rain"})
        self.assertEqual(list(meta.lines), [LineKey("Total rain", "Station S1")])
        points = meta.lines[LineKey("Total rain", "Station S1")]
        self.assertEqual([p.month_index for p in points], [0, 2])

    def test_percent_range_starts_at_0_100(self):
        self.assertEqual(initial_range("%"), (0, 100))
        agg = _aggregator({2016: {"humidity": [record("S1", january=40)]}}, [2016])
        meta = agg.lines_for_unit("%", [2016], ALL_STATIONS, {"humidity"})
        self.assertEqual((meta.min_value, meta.max_value), (0, 100))

    def test_dated_values_keep_their_date(self):
        agg = _aggregator(
            {
                2016: {
                    "max_temp": [
                        record("S1", july={"value": 38.4, "date": "2016-07-25"})
                    ]
                }
            },
            [2016],
        )
        meta = agg.lines_for_unit("Celsius", [2016], ALL_STATIONS, {"max_temp"})
        (p,) = meta.lines[LineKey("Max temperature", "Station S1")]
        self.assertEqual((p.month_index, p.value, p.date), (6, 38.4, "2016-07-25"))

    def test_pending_years_mark_loading(self):
        reg = make_registry()
        schema = make_schema([2016, 2017])
        fetcher = FakeFetcher({}, gated=True)

        async def run():
            store = DataStore(fetcher, reg)
            store.preload(
                parse_year_dataset(2017, {"rain": [record("S1", january=2)]}, reg)
            )
            agg = Aggregator(reg, schema, store)
            meta = agg.lines_for_unit("Mm", [2016, 2017], ALL_STATIONS, {"rain"})
            fetcher.release()
            await store.wait_idle()
            return meta

        meta = asyncio.run(run())
        self.assertTrue(meta.loading)
        # The pending year still takes its slot.
        (p,) = meta.lines[LineKey("Total rain", "Station S1")]
        self.assertEqual(p.year_index, 1)
        self.assertEqual(fetcher.calls, [2016])

    def test_lines_for_combined(self):
        agg = _aggregator(
            {2016: {"rain": [record("S1", january=2)], "avg_temp": [record("S1", january=9)]}},
            [2016],
        )
        left, right = agg.lines_for_combined(
            ("Celsius", "Mm"), [2016], ALL_STATIONS, ({"avg_temp"}, set())
        )
        self.assertEqual(left.unit, "Celsius")
        self.assertEqual(left.point_count(), 1)
        self.assertIsNone(right)
