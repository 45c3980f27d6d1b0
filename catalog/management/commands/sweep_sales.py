from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from catalog.sweeper import sweep_sale_prices


class Command(BaseCommand):
    help = 'Activate sale prices whose window has opened and expire those whose window has closed.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--now',
            dest='now',
            help='ISO 8601 timestamp to sweep at instead of the current time.',
        )

    def handle(self, *args, **options):
        now = None
        if options.get('now'):
            now = parse_datetime(options['now'])
            if now is None:
                raise CommandError(f'Invalid --now timestamp: {options["now"]}')
            if timezone.is_naive(now):
                now = timezone.make_aware(now)

        report = sweep_sale_prices(now=now)
        if report.skipped:
            raise CommandError('Another sale price sweep is in progress; nothing was done.')

        self.stdout.write(
            self.style.SUCCESS(
                f'Sweep completed: {len(report.activation.succeeded)} activated, '
                f'{len(report.expiry.succeeded)} expired, '
                f'{len(report.activation.failed) + len(report.expiry.failed)} failed; '
                f'next sweep at {report.next_sweep_at.isoformat()}'
            )
        )
