from django.core.management.base import BaseCommand, CommandError

from catalog.services import import_sale_schedules


class Command(BaseCommand):
    help = 'Import sale prices and sale windows from the configured schedule source.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--source-url',
            dest='source_url',
            help='Optional URL to override the configured SALE_SCHEDULE_SOURCE_URL setting.',
        )

    def handle(self, *args, **options):
        source_url = options.get('source_url')
        try:
            report = import_sale_schedules(source_url=source_url)
        except FileNotFoundError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f'Schedule import completed: {report.updated} updated, {report.rejected} rejected, '
                f'{report.missing} missing (rows processed: {report.total_rows})'
            )
        )
