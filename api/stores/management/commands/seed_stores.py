from django.core.management.base import BaseCommand
from stores.hours import WeekHours
from stores.models import Store
import logging

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = [
    ('bonaqua', 'Bon Aqua'),
    ('waverly', 'Waverly'),
]


class Command(BaseCommand):
    help = 'Create the default store locations with the default weekly hours'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show which locations would be created without creating them',
        )

    def handle(self, *args, **options):
        created_count = 0
        for location, name in DEFAULT_LOCATIONS:
            if Store.objects.filter(location=location).exists():
                self.stdout.write(f'Store "{location}" already exists, skipping.')
                continue

            if options['dry_run']:
                self.stdout.write(
                    self.style.WARNING(f'Would create store "{location}" ({name})')
                )
                continue

            Store.objects.create(
                location=location,
                store_name=name,
                city=name,
                state='Tennessee',
                hours_of_operation=WeekHours.default().to_dict(),
            )
            created_count += 1
            logger.info(f'Seeded store "{location}"')

        self.stdout.write(
            self.style.SUCCESS(f'Seeding completed. Created {created_count} store(s).')
        )
