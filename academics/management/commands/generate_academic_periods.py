"""
Management command to generate academic periods and seasons.

Partitions each requested year into 28-day regular periods and special
weeks, grouped into seasons, and stores them.
"""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from academics.exceptions import PeriodsAlreadyExistError
from academics.services import create_periods_for_year
from academics.utils.calendar_utils import get_month_name


class Command(BaseCommand):
    help = 'Generate academic periods and seasons for one or more years'

    def add_arguments(self, parser):
        parser.add_argument(
            '--year',
            type=int,
            default=None,
            help='First year to generate (default: current year)'
        )
        parser.add_argument(
            '--years',
            type=int,
            default=1,
            help='Number of consecutive years to generate (default: 1)'
        )
        parser.add_argument(
            '--no-activate',
            action='store_true',
            help='Do not flag the period containing today as active'
        )
        parser.add_argument(
            '--replace',
            action='store_true',
            help='Replace periods that already exist for a year'
        )

    def handle(self, *args, **options):
        start_year = options['year'] or timezone.now().year
        years = options['years']

        if years < 1:
            raise CommandError('--years must be at least 1')

        self.stdout.write(f'Generating academic periods for {years} year(s) starting from {start_year}...')

        created_count = 0
        skipped_count = 0

        for year in range(start_year, start_year + years):
            try:
                seasons, periods = create_periods_for_year(
                    year,
                    activate_current=not options['no_activate'],
                    replace=options['replace'],
                )
            except PeriodsAlreadyExistError as e:
                skipped_count += 1
                self.stdout.write(self.style.WARNING(f'  Skipped {year}: {e} (use --replace to regenerate)'))
                continue
            except ValidationError as e:
                raise CommandError('; '.join(e.messages))

            created_count += len(periods)
            special_weeks = sum(1 for period in periods if period.is_special_week)
            self.stdout.write(
                f'  {year}: {len(seasons)} seasons, {len(periods) - special_weeks} regular periods, '
                f'{special_weeks} special weeks'
            )
            if options['verbosity'] >= 2:
                for period in periods:
                    self.stdout.write(f'    {period.name}: {self.format_date(period.start_date)} - {self.format_date(period.end_date)}')

        self.stdout.write(
            self.style.SUCCESS(
                f'Successfully generated academic periods. Created: {created_count}, Skipped years: {skipped_count}'
            )
        )

    def format_date(self, day):
        return f'{day.day} {get_month_name(day.month)} {day.year}'
