"""
Management command to write the default course catalog to Firestore.
Usage: python manage.py seed_courses [--force]
"""
from django.core.management.base import BaseCommand, CommandError
from google.api_core import exceptions as google_exceptions

from careers.catalog import DEFAULT_COURSES
from careers.exceptions import StoreUnavailable
from careers.services import get_services


class Command(BaseCommand):
    help = 'Seeds the courses collection with the default course catalog'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Overwrite courses that already exist',
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING('Seeding courses...'))

        try:
            written = get_services().courses.seed(DEFAULT_COURSES, force=options['force'])
        except StoreUnavailable as e:
            raise CommandError(f'Firestore is unavailable: {e}')
        except google_exceptions.GoogleAPICallError as e:
            raise CommandError(f'Failed to write courses: {e}')

        skipped = len(DEFAULT_COURSES) - written
        self.stdout.write(
            self.style.SUCCESS(f'✓ Wrote {written} courses ({skipped} already present).')
        )
