from datetime import date, datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

from django.test import SimpleTestCase

from academics.utils.calendar_utils import is_date_in_period
from academics.utils.period_locator import (
    DEFAULT_PERIOD_NAME,
    PeriodWindow,
    find_current_or_next_period,
    find_current_period,
    find_next_period,
)


def make_period(name, start, end, is_special_week=False, is_active=False, pk=None):
    return SimpleNamespace(
        pk=pk or name,
        name=name,
        start_date=start,
        end_date=end,
        is_special_week=is_special_week,
        is_active=is_active,
    )


NOW = datetime(2025, 1, 15, 12, 0, tzinfo=dt_timezone.utc)


class FindCurrentPeriodTest(SimpleTestCase):
    def test_period_containing_today(self):
        january = make_period('Período 1', date(2025, 1, 6), date(2025, 2, 2))
        february = make_period('Período 2', date(2025, 2, 3), date(2025, 3, 2))
        self.assertIs(find_current_period(NOW, [february, january]), january)

    def test_latest_start_wins_when_periods_overlap(self):
        older = make_period('Older', date(2025, 1, 1), date(2025, 1, 31))
        newer = make_period('Newer', date(2025, 1, 10), date(2025, 2, 10))
        self.assertIs(find_current_period(NOW, [older, newer]), newer)
        self.assertIs(find_current_period(NOW, [newer, older]), newer)

    def test_boundary_days_are_inclusive(self):
        period = make_period('Período 1', date(2025, 1, 15), date(2025, 1, 15))
        self.assertIs(find_current_period(NOW, [period]), period)

    def test_special_weeks_are_skipped(self):
        week = make_period('Semana Especial 1', date(2025, 1, 13), date(2025, 1, 19), is_special_week=True)
        self.assertIsNone(find_current_period(NOW, [week]))

    def test_active_flag_is_ignored(self):
        stale = make_period('Stale', date(2024, 12, 2), date(2024, 12, 29), is_active=True)
        current = make_period('Current', date(2025, 1, 6), date(2025, 2, 2))
        self.assertIs(find_current_period(NOW, [stale, current]), current)

    def test_naive_datetime_is_taken_as_utc(self):
        period = make_period('Período 1', date(2025, 1, 15), date(2025, 1, 20))
        self.assertIs(find_current_period(datetime(2025, 1, 15, 0, 30), [period]), period)

    def test_aware_datetime_uses_utc_date(self):
        # 2025-01-14 22:00 in Lima is already the 15th in UTC
        lima = dt_timezone(timedelta(hours=-5))
        now = datetime(2025, 1, 14, 22, 0, tzinfo=lima)
        period = make_period('Período 1', date(2025, 1, 15), date(2025, 1, 20))
        self.assertIs(find_current_period(now, [period]), period)


class FindNextPeriodTest(SimpleTestCase):
    def test_earliest_upcoming_period(self):
        march = make_period('Período 3', date(2025, 3, 3), date(2025, 3, 30))
        february = make_period('Período 2', date(2025, 2, 3), date(2025, 3, 2))
        self.assertIs(find_next_period(NOW, [march, february]), february)

    def test_period_starting_today_is_not_next(self):
        today = make_period('Today', date(2025, 1, 15), date(2025, 2, 1))
        self.assertIsNone(find_next_period(NOW, [today]))

    def test_special_weeks_are_skipped(self):
        week = make_period('Semana Especial 1', date(2025, 3, 31), date(2025, 4, 6), is_special_week=True)
        self.assertIsNone(find_next_period(NOW, [week]))


class FindCurrentOrNextPeriodTest(SimpleTestCase):
    def test_current_period_is_preferred(self):
        current = make_period('Período 1', date(2025, 1, 6), date(2025, 2, 2), pk=7)
        upcoming = make_period('Período 2', date(2025, 2, 3), date(2025, 3, 2), pk=8)
        window = find_current_or_next_period(NOW, [upcoming, current])
        self.assertEqual(window.name, 'Período 1')
        self.assertEqual(window.period_id, '7')
        self.assertFalse(window.is_default)

    def test_falls_back_to_next_period(self):
        upcoming = make_period('Período 2', date(2025, 2, 3), date(2025, 3, 2))
        window = find_current_or_next_period(NOW, [upcoming])
        self.assertEqual(window.start_date, date(2025, 2, 3))
        self.assertFalse(window.is_default)

    def test_default_window_when_nothing_matches(self):
        past = make_period('Past', date(2024, 1, 1), date(2024, 1, 28))
        window = find_current_or_next_period(NOW, [past], default_days=28)
        self.assertTrue(window.is_default)
        self.assertEqual(window.name, DEFAULT_PERIOD_NAME)
        self.assertEqual(window.start_date, date(2025, 1, 15))
        self.assertEqual(window.end_date, date(2025, 2, 12))
        self.assertIsNone(window.period_id)

    def test_default_window_length_is_configurable(self):
        window = find_current_or_next_period(NOW, [], default_days=7)
        self.assertEqual(window.end_date, date(2025, 1, 22))

    def test_window_serialization(self):
        window = PeriodWindow('Período 1', date(2025, 1, 6), date(2025, 2, 2), period_id='1')
        self.assertEqual(window.to_dict(), {
            'id': '1',
            'name': 'Período 1',
            'startDate': '2025-01-06',
            'endDate': '2025-02-02',
            'isDefault': False,
        })


class IsDateInPeriodTest(SimpleTestCase):
    def test_inclusive_bounds(self):
        period = make_period('Período 1', date(2025, 1, 6), date(2025, 2, 2))
        self.assertTrue(is_date_in_period(date(2025, 1, 6), period))
        self.assertTrue(is_date_in_period(date(2025, 2, 2), period))
        self.assertFalse(is_date_in_period(date(2025, 2, 3), period))
