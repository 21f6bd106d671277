"""
Import opening stock from an Excel/CSV file

Usage:
    python manage.py import_batches stock.xlsx
    python manage.py import_batches stock.csv --dry-run

Columns: code, name, batch_no, quantity (+ unit, cost_price, sell_price, min_threshold)
"""

from django.core.management.base import BaseCommand, CommandError

from inventory.exceptions import InventoryError
from inventory.Services.import_service import import_batches


class Command(BaseCommand):
    help = 'Create products and opening batches from a spreadsheet'

    def add_arguments(self, parser):
        parser.add_argument('path', help='.xlsx, .xls or .csv file')
        parser.add_argument('--dry-run', action='store_true', help='Parse and validate only')

    def handle(self, *args, **options):
        try:
            result = import_batches(options['path'], dry_run=options['dry_run'])
        except FileNotFoundError:
            raise CommandError(f"file not found: {options['path']}")
        except InventoryError as e:
            raise CommandError(str(e))

        for line, message in result.errors:
            self.stdout.write(self.style.WARNING(f'Row {line}: {message} (skipped)'))

        if options['dry_run']:
            self.stdout.write(self.style.SUCCESS(
                f'Dry run: {len(result.rows)} valid rows, {len(result.errors)} rejected'
            ))
            return

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(
            f'Imported {result.batches_created} batches '
            f'({result.products_created} new products, {result.products_updated} updated), '
            f'{len(result.errors)} rows skipped'
        ))
