"""
Import Service: opening stock from an Excel/CSV sheet

Columns:
- required: code, name, batch_no, quantity
- optional: unit, cost_price, sell_price, min_threshold

Products are matched by code (case-insensitive) and updated, or created.
Each row then opens a new batch. Bad rows are reported and skipped.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import List, Tuple

import pandas as pd
from django.db import transaction

from inventory.exceptions import InvalidInputError, InventoryError
from inventory.models import Product
from inventory.Services.product_service import ProductService
from inventory.Services.stock_service import create_batch
from inventory.Services.validation import non_negative, store_call

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['code', 'name', 'batch_no', 'quantity']


@dataclass
class ImportRow:
    line: int
    code: str
    name: str
    unit: str
    cost_price: Decimal
    sell_price: Decimal
    batch_no: str
    quantity: Decimal
    min_threshold: Decimal


@dataclass
class ImportResult:
    rows: List[ImportRow] = field(default_factory=list)
    errors: List[Tuple[int, str]] = field(default_factory=list)
    products_created: int = 0
    products_updated: int = 0
    batches_created: int = 0


def read_sheet(source, filename=None) -> pd.DataFrame:
    """
    Read an .xlsx / .xls / .csv file into a DataFrame

    Args:
        source: path or file-like object
        filename: name used to pick the reader when `source` is a file object
    """
    name = str(filename or getattr(source, 'name', source)).lower()

    if name.endswith('.csv'):
        df = pd.read_csv(source, encoding='utf-8-sig', dtype=str)
    elif name.endswith(('.xlsx', '.xls')):
        df = pd.read_excel(source, dtype=str)
    else:
        raise InvalidInputError(f"unsupported file type: {Path(name).suffix or name} (use .xlsx, .xls or .csv)")

    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise InvalidInputError(f"file is missing columns: {', '.join(missing)}")

    return df


def _cell(row, column, default=''):
    value = row.get(column)
    if value is None or pd.isna(value):
        return default
    return str(value).strip()


def parse_rows(df: pd.DataFrame) -> Tuple[List[ImportRow], List[Tuple[int, str]]]:
    """Turn sheet rows into ImportRow; line numbers match the spreadsheet (header = 1)."""
    rows, errors = [], []

    for idx, row in df.iterrows():
        line = idx + 2

        code = _cell(row, 'code').upper()
        name = _cell(row, 'name')
        if not code and not name:
            continue  # blank line

        try:
            if not code:
                raise InvalidInputError("code is required")
            if not name:
                raise InvalidInputError("name is required")
            batch_no = _cell(row, 'batch_no')
            if not batch_no:
                raise InvalidInputError("batch_no is required")

            rows.append(ImportRow(
                line=line,
                code=code,
                name=name,
                unit=_cell(row, 'unit') or 'kg',
                cost_price=non_negative(_cell(row, 'cost_price'), 'cost_price', default=0),
                sell_price=non_negative(_cell(row, 'sell_price'), 'sell_price', default=0),
                batch_no=batch_no,
                quantity=non_negative(_cell(row, 'quantity'), 'quantity'),
                min_threshold=non_negative(_cell(row, 'min_threshold'), 'min_threshold', default=0),
            ))
        except InvalidInputError as e:
            errors.append((line, str(e)))

    return rows, errors


def _upsert_product(row: ImportRow) -> Tuple[Product, bool]:
    fields = {
        'name': row.name,
        'unit': row.unit,
        'cost_price': row.cost_price,
        'sell_price': row.sell_price,
    }

    product = Product.objects.filter(code__iexact=row.code).first()
    if product:
        return ProductService.update_product(product.pk, **fields), False
    return ProductService.create_product(code=row.code, **fields), True


@store_call
def import_batches(source, filename=None, dry_run=False) -> ImportResult:
    """
    Parse the sheet and, unless dry_run, write products and batches in one transaction
    """
    df = read_sheet(source, filename=filename)
    rows, errors = parse_rows(df)
    result = ImportResult(rows=rows, errors=errors)

    if dry_run:
        return result

    with transaction.atomic():
        for row in rows:
            try:
                # per-row savepoint: a rejected row leaves nothing behind
                with transaction.atomic():
                    product, created = _upsert_product(row)
                    create_batch(product.pk, row.batch_no, row.quantity, row.min_threshold)
            except InventoryError as e:
                result.errors.append((row.line, str(e)))
                continue

            result.batches_created += 1
            if created:
                result.products_created += 1
            else:
                result.products_updated += 1

    for line, message in result.errors:
        logger.warning("IMPORT: row %s skipped: %s", line, message)
    logger.info(
        "IMPORT: %s batches, %s new products, %s updated products",
        result.batches_created, result.products_created, result.products_updated,
    )
    return result
