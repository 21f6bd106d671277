from django import forms

from inventory.models import Product


class ProductForm(forms.ModelForm):
    """
    Form for adding/editing a seed variety
    """

    class Meta:
        model = Product
        fields = ['code', 'name', 'unit', 'cost_price', 'sell_price', 'description']

        labels = {
            'code': 'Mã giống',
            'name': 'Tên giống',
            'unit': 'Đơn vị tính',
            'cost_price': 'Giá vốn',
            'sell_price': 'Giá bán',
            'description': 'Mô tả',
        }

        help_texts = {
            'code': 'Leave empty to generate one (SP-XXXXXXXX)',
            'unit': 'e.g. kg, bao',
        }

    def clean_code(self):
        code = (self.cleaned_data.get('code') or '').strip().upper()
        if not code:
            return ''

        # case-insensitive duplicate check, excluding self when editing
        duplicates = Product.objects.filter(code__iexact=code)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise forms.ValidationError(f'Product code "{code}" already exists')

        return code

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError('Product name is required')
        return name

    def clean_unit(self):
        unit = (self.cleaned_data.get('unit') or '').strip()
        return unit or 'kg'

    def clean_cost_price(self):
        price = self.cleaned_data.get('cost_price')
        if price is not None and price < 0:
            raise forms.ValidationError('Cost price must not be negative')
        return price

    def clean_sell_price(self):
        price = self.cleaned_data.get('sell_price')
        if price is not None and price < 0:
            raise forms.ValidationError('Sell price must not be negative')
        return price
