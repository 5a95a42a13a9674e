from datetime import date, timedelta

from django.test import SimpleTestCase

from academics.utils.calendar_utils import get_first_monday_of_month, get_month_name, iter_days
from academics.utils.period_generator import (
    SEASON_NAMES,
    build_regular_period_ranges,
    build_season_ranges,
    generate_academic_periods,
    get_season_name,
)


class FirstMondayTest(SimpleTestCase):
    def test_month_starting_on_monday(self):
        self.assertEqual(get_first_monday_of_month(2025, 9), date(2025, 9, 1))

    def test_month_starting_on_sunday(self):
        self.assertEqual(get_first_monday_of_month(2025, 6), date(2025, 6, 2))

    def test_month_starting_on_tuesday(self):
        self.assertEqual(get_first_monday_of_month(2025, 4), date(2025, 4, 7))

    def test_month_names_are_spanish(self):
        self.assertEqual(get_month_name(1), 'Enero')
        self.assertEqual(get_month_name(12), 'Diciembre')


class GenerateAcademicPeriods2025Test(SimpleTestCase):
    def setUp(self):
        self.periods, self.seasons = generate_academic_periods(2025, today=date(2025, 1, 15))
        self.regular = [p for p in self.periods if not p.is_special_week]
        self.special = [p for p in self.periods if p.is_special_week]

    def test_one_regular_period_per_month(self):
        self.assertEqual(len(self.regular), 12)
        self.assertEqual(self.regular[0].start_date, date(2025, 1, 6))
        self.assertEqual(self.regular[0].end_date, date(2025, 2, 2))
        self.assertEqual(self.regular[-1].start_date, date(2025, 12, 1))
        self.assertEqual(self.regular[-1].end_date, date(2025, 12, 28))

    def test_regular_periods_last_28_days_from_a_monday(self):
        for period in self.regular:
            self.assertEqual(period.start_date.weekday(), 0)
            self.assertEqual((period.end_date - period.start_date).days, 27)

    def test_special_weeks_fill_the_gaps(self):
        self.assertEqual(
            [(week.start_date, week.end_date) for week in self.special],
            [
                (date(2025, 3, 31), date(2025, 4, 6)),
                (date(2025, 6, 30), date(2025, 7, 6)),
                (date(2025, 9, 29), date(2025, 10, 5)),
            ]
        )

    def test_trailing_week_into_next_year_is_not_special(self):
        self.assertFalse(any(week.end_date.year == 2026 for week in self.special))

    def test_seasons_are_bounded_by_special_weeks(self):
        self.assertEqual(
            [(season.name, season.start_date, season.end_date) for season in self.seasons],
            [
                ('Temporada Aurora', date(2025, 1, 6), date(2025, 4, 6)),
                ('Temporada Brisa', date(2025, 4, 7), date(2025, 7, 6)),
                ('Temporada Cenit', date(2025, 7, 7), date(2025, 10, 5)),
                ('Temporada Ocaso', date(2025, 10, 6), date(2025, 12, 28)),
            ]
        )

    def test_periods_are_assigned_to_their_season(self):
        seasons_by_id = {season.id: season for season in self.seasons}
        special_week = self.special[0]
        self.assertEqual(seasons_by_id[special_week.season_id].name, 'Temporada Aurora')
        october_period = next(p for p in self.regular if p.start_date == date(2025, 10, 6))
        self.assertEqual(seasons_by_id[october_period.season_id].name, 'Temporada Ocaso')

    def test_names_and_ids(self):
        self.assertEqual(self.regular[0].name, 'Período 1')
        self.assertEqual(self.regular[0].id, 'period-2025-regular-1')
        self.assertEqual(self.special[2].name, 'Semana Especial 3')
        self.assertEqual(self.special[2].id, 'period-2025-special-3')
        self.assertEqual(self.seasons[0].id, 'season-2025-1')

    def test_only_period_containing_today_is_active(self):
        active = [p for p in self.periods if p.is_active]
        self.assertEqual([p.name for p in active], ['Período 1'])

    def test_special_week_can_be_active(self):
        periods, _ = generate_academic_periods(2025, today=date(2025, 4, 2))
        active = [p for p in periods if p.is_active]
        self.assertEqual(len(active), 1)
        self.assertTrue(active[0].is_special_week)

    def test_activation_disabled(self):
        periods, _ = generate_academic_periods(2025, activate_current=False, today=date(2025, 1, 15))
        self.assertFalse(any(p.is_active for p in periods))


class GenerateAcademicPeriodsCoverageTest(SimpleTestCase):
    """Structural guarantees checked across a range of years."""

    def test_every_day_in_span_is_covered_exactly_once(self):
        for year in range(2020, 2031):
            with self.subTest(year=year):
                periods, seasons = generate_academic_periods(year, today=date(year, 1, 1))
                first_start = min(p.start_date for p in periods)
                last_end = max(p.end_date for p in periods)
                for day in iter_days(first_start, last_end):
                    covering = [p for p in periods if p.start_date <= day <= p.end_date]
                    self.assertEqual(len(covering), 1, f"{day} covered by {[p.name for p in covering]}")

    def test_every_period_belongs_to_a_generated_season(self):
        for year in range(2020, 2031):
            with self.subTest(year=year):
                periods, seasons = generate_academic_periods(year, today=date(year, 1, 1))
                season_ids = {season.id for season in seasons}
                self.assertTrue(all(p.season_id in season_ids for p in periods))
                self.assertEqual(len(seasons), len([p for p in periods if p.is_special_week]) + 1)

    def test_year_starting_on_monday(self):
        periods, seasons = generate_academic_periods(2024, today=date(2024, 1, 1))
        special = [p for p in periods if p.is_special_week]
        self.assertEqual(periods[0].start_date, date(2024, 1, 1))
        self.assertEqual(special[0].start_date, date(2024, 1, 29))
        self.assertEqual(len(special), 4)
        self.assertEqual(len(seasons), 5)
        self.assertEqual(seasons[-1].name, 'Temporada Cosecha')


class SeasonNameTest(SimpleTestCase):
    def test_pool_order(self):
        self.assertEqual([get_season_name(i) for i in range(len(SEASON_NAMES))], SEASON_NAMES)

    def test_pool_exhaustion_adds_suffix(self):
        self.assertEqual(get_season_name(len(SEASON_NAMES)), 'Temporada Aurora 2')
        self.assertEqual(get_season_name(2 * len(SEASON_NAMES) + 1), 'Temporada Brisa 3')

    def test_single_season_without_loose_weeks(self):
        ranges = build_regular_period_ranges(2025)
        seasons = build_season_ranges(ranges, [])
        self.assertEqual(len(seasons), 1)
        self.assertEqual(seasons[0].start, date(2025, 1, 6))
        self.assertEqual(seasons[0].end, date(2025, 12, 28))

    def test_no_periods_no_seasons(self):
        self.assertEqual(build_season_ranges([], []), [])

    def test_regular_ranges_are_contiguous_or_one_week_apart(self):
        ranges = build_regular_period_ranges(2025)
        for previous, current in zip(ranges, ranges[1:]):
            gap = (current.start - previous.end) - timedelta(days=1)
            self.assertIn(gap.days, (0, 7))
