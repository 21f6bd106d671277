# inventory/Services/product_service.py

from decimal import Decimal
from typing import Optional

from django.db.models import Q, QuerySet, Sum
from django.forms.models import model_to_dict

from inventory.exceptions import NotFoundError, ReferentialIntegrityError
from inventory.forms import ProductForm
from inventory.models import InventoryBatch, OrderItem, Product
from inventory.Services.validation import store_call, validate_form


PRODUCT_DEFAULTS = {
    'code': '',
    'unit': 'kg',
    'cost_price': 0,
    'sell_price': 0,
    'description': '',
}


class ProductService:
    """
    Service: business logic for seed varieties
    """

    @staticmethod
    def list_products() -> QuerySet:
        return Product.objects.order_by('name')

    @staticmethod
    def search_products(query: Optional[str] = None, limit: int = 50) -> QuerySet:
        """
        Search by name or code

        Args:
            query: text typed by the user
            limit: max results

        Returns:
            QuerySet of Product
        """
        products = Product.objects.all()

        if query:
            products = products.filter(
                Q(name__icontains=query) |
                Q(code__icontains=query)
            )

        return products.annotate(stock_total=Sum('batches__quantity')).order_by('name')[:limit]

    @staticmethod
    def get_product(product_id) -> Product:
        try:
            return Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise NotFoundError(f"product {product_id} does not exist")

    @staticmethod
    @store_call
    def create_product(**data) -> Product:
        payload = dict(PRODUCT_DEFAULTS)
        payload.update({k: v for k, v in data.items() if v is not None})

        form = ProductForm(data=payload)
        validate_form(form)
        return form.save()

    @staticmethod
    @store_call
    def update_product(product_id, **changes) -> Product:
        """Partial update; created_at is never touched."""
        product = ProductService.get_product(product_id)

        changes.pop('created_at', None)
        changes.pop('id', None)

        data = model_to_dict(product, fields=ProductForm.Meta.fields)
        data.update(changes)

        form = ProductForm(data=data, instance=product)
        validate_form(form)
        return form.save()

    @staticmethod
    @store_call
    def delete_product(product_id) -> bool:
        """
        Delete a product nobody refers to

        Raises:
            ReferentialIntegrityError: a batch or an order line still points at it
        """
        product = ProductService.get_product(product_id)

        if InventoryBatch.objects.filter(product=product).exists():
            raise ReferentialIntegrityError(
                f"cannot delete {product.name}: it still has inventory batches"
            )

        if OrderItem.objects.filter(product=product).exists():
            raise ReferentialIntegrityError(
                f"cannot delete {product.name}: it appears in orders"
            )

        product.delete()
        return True

    @staticmethod
    def get_stock_status(product) -> dict:
        """Total stock across batches and a traffic-light status."""
        batches = InventoryBatch.objects.filter(product=product)
        quantity = batches.aggregate(total=Sum('quantity'))['total'] or Decimal('0')
        threshold = batches.aggregate(total=Sum('min_threshold'))['total'] or Decimal('0')

        status = 'in_stock'
        if quantity <= 0:
            status = 'out_of_stock'
        elif threshold > 0 and quantity <= threshold:
            status = 'low_stock'

        return {
            'quantity': quantity,
            'status': status,
        }
