# inventory/Services/customer_service.py

from typing import Optional

from django.db.models import Count, Q, QuerySet
from django.forms.models import model_to_dict

from inventory.exceptions import NotFoundError, ReferentialIntegrityError
from inventory.forms import CustomerForm
from inventory.models import Customer, Order
from inventory.Services.validation import store_call, validate_form


class CustomerService:
    """
    Service: business logic for customers
    """

    @staticmethod
    def list_customers(query: Optional[str] = None) -> QuerySet:
        customers = Customer.objects.annotate(order_count=Count('orders'))
        if query:
            customers = customers.filter(
                Q(name__icontains=query) |
                Q(phone__icontains=query)
            )
        return customers.order_by('name')

    @staticmethod
    def get_customer(customer_id) -> Customer:
        try:
            return Customer.objects.get(pk=customer_id)
        except Customer.DoesNotExist:
            raise NotFoundError(f"customer {customer_id} does not exist")

    @staticmethod
    @store_call
    def create_customer(name, phone='', address='') -> Customer:
        form = CustomerForm(data={'name': name, 'phone': phone or '', 'address': address or ''})
        validate_form(form)
        return form.save()

    @staticmethod
    @store_call
    def update_customer(customer_id, **changes) -> Customer:
        customer = CustomerService.get_customer(customer_id)

        changes.pop('created_at', None)
        changes.pop('id', None)

        data = model_to_dict(customer, fields=CustomerForm.Meta.fields)
        data.update(changes)

        form = CustomerForm(data=data, instance=customer)
        validate_form(form)
        return form.save()

    @staticmethod
    @store_call
    def delete_customer(customer_id) -> bool:
        """Blocked once the customer has any order."""
        customer = CustomerService.get_customer(customer_id)

        if Order.objects.filter(customer=customer).exists():
            raise ReferentialIntegrityError(
                f"cannot delete {customer.name}: the customer has orders"
            )

        customer.delete()
        return True
