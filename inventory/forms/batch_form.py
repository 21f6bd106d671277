from django import forms

from inventory.models import InventoryBatch


class BatchForm(forms.ModelForm):
    """
    Form for receiving a new batch; current quantity starts at initial_quantity
    """

    class Meta:
        model = InventoryBatch
        fields = ['product', 'batch_no', 'initial_quantity', 'min_threshold']

        labels = {
            'product': 'Giống lúa',
            'batch_no': 'Số lô',
            'initial_quantity': 'Số lượng ban đầu',
            'min_threshold': 'Ngưỡng tối thiểu',
        }

    def clean_batch_no(self):
        batch_no = (self.cleaned_data.get('batch_no') or '').strip()
        if not batch_no:
            raise forms.ValidationError('Batch number is required')
        return batch_no

    def clean_initial_quantity(self):
        qty = self.cleaned_data.get('initial_quantity')
        if qty is not None and qty < 0:
            raise forms.ValidationError('Initial quantity must not be negative')
        return qty

    def clean_min_threshold(self):
        threshold = self.cleaned_data.get('min_threshold')
        if threshold is None:
            return 0
        if threshold < 0:
            raise forms.ValidationError('Minimum threshold must not be negative')
        return threshold


class BatchEditForm(BatchForm):
    """Quantities move only through stock operations, so they are not editable here."""

    class Meta(BatchForm.Meta):
        fields = ['batch_no', 'min_threshold']
