from .product_form import ProductForm
from .customer_form import CustomerForm
from .batch_form import BatchForm, BatchEditForm

__all__ = ['ProductForm', 'CustomerForm', 'BatchForm', 'BatchEditForm']
