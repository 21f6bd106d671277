from django import forms

from inventory.models import Customer


class CustomerForm(forms.ModelForm):
    """
    Form for adding/editing a customer
    """

    class Meta:
        model = Customer
        fields = ['name', 'phone', 'address']

        labels = {
            'name': 'Tên khách hàng',
            'phone': 'Số điện thoại',
            'address': 'Địa chỉ',
        }

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError('Customer name is required')
        return name

    def clean_phone(self):
        phone = self.cleaned_data.get('phone')

        # optional (blank=True)
        if not phone or phone.strip() == '':
            return ''

        phone = phone.replace(' ', '').replace('-', '').replace('.', '')

        if not phone.replace('+', '').isdigit():
            raise forms.ValidationError('Phone number must contain digits only')

        if len(phone) < 9 or len(phone) > 13:
            raise forms.ValidationError('Phone number must have 9-13 digits')

        return phone

    def clean_address(self):
        return (self.cleaned_data.get('address') or '').strip()
