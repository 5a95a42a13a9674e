from datetime import date

from django.core.exceptions import ValidationError
from django.test import TestCase

from academics.models import AcademicPeriod, Season


class SeasonModelTest(TestCase):
    def test_end_must_follow_start(self):
        season = Season(name='Temporada Aurora', year=2025, start_date=date(2025, 3, 1), end_date=date(2025, 3, 1))
        with self.assertRaises(ValidationError):
            season.clean()

    def test_date_range_display(self):
        season = Season(name='Temporada Aurora', year=2025, start_date=date(2025, 1, 6), end_date=date(2025, 4, 6))
        self.assertEqual(season.date_range_display, '06/01/2025 - 06/04/2025')


class AcademicPeriodModelTest(TestCase):
    def setUp(self):
        self.season = Season.objects.create(
            name='Temporada Aurora', year=2025, start_date=date(2025, 1, 6), end_date=date(2025, 4, 6)
        )
        self.period = AcademicPeriod.objects.create(
            name='Período 1', start_date=date(2025, 1, 6), end_date=date(2025, 2, 2), season=self.season
        )
        self.week = AcademicPeriod.objects.create(
            name='Semana Especial 1', start_date=date(2025, 3, 31), end_date=date(2025, 4, 6),
            season=self.season, is_special_week=True
        )

    def test_duration_is_inclusive(self):
        self.assertEqual(self.period.duration_days, 28)
        self.assertEqual(self.week.duration_days, 7)

    def test_inverted_range_is_invalid(self):
        period = AcademicPeriod(name='X', start_date=date(2025, 2, 2), end_date=date(2025, 1, 6), season=self.season)
        with self.assertRaises(ValidationError):
            period.clean()

    def test_queryset_filters(self):
        self.assertEqual(list(AcademicPeriod.objects.regular()), [self.period])
        self.assertEqual(list(AcademicPeriod.objects.special_weeks()), [self.week])
        self.assertEqual(list(AcademicPeriod.objects.containing(date(2025, 2, 2))), [self.period])
        self.assertEqual(list(AcademicPeriod.objects.starting_after(date(2025, 1, 6))), [self.week])
        self.assertEqual(AcademicPeriod.objects.for_year(2025).count(), 2)
        self.assertEqual(AcademicPeriod.objects.for_year(2026).count(), 0)

    def test_to_dict(self):
        self.assertEqual(self.week.to_dict(), {
            'id': str(self.week.pk),
            'name': 'Semana Especial 1',
            'startDate': '2025-03-31',
            'endDate': '2025-04-06',
            'seasonId': str(self.season.pk),
            'isSpecialWeek': True,
            'isActive': False,
        })
