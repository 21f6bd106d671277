from django.core.management.base import BaseCommand

from inventory.exceptions import format_quantity
from inventory.Services.stock_service import low_stock_batches


class Command(BaseCommand):
    help = 'List batches at or below their minimum threshold'

    def handle(self, *args, **options):
        batches = list(low_stock_batches())

        self.stdout.write("=" * 60)
        if not batches:
            self.stdout.write(self.style.SUCCESS("No batch is below its minimum threshold"))
            return

        self.stdout.write(self.style.WARNING(f"{len(batches)} batch(es) low on stock"))
        self.stdout.write("=" * 60)

        for batch in batches:
            self.stdout.write(
                f"  {batch.product.code:12s} | {batch.batch_no:15s} | "
                f"{format_quantity(batch.quantity):>8s} / min {format_quantity(batch.min_threshold):>8s} "
                f"{batch.product.unit}"
            )
