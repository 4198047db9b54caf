# jobs/forms.py
from django import forms

from STStudio.forms import TailwindFormMixin


class JobCreateForm(TailwindFormMixin, forms.Form):
    """New job from the dashboard.  Every field may be left blank; blanks are stored as NULL."""

    customer_name = forms.CharField(label="ชื่อลูกค้า", max_length=200, required=False, empty_value=None)
    phone = forms.CharField(
        label="เบอร์โทร",
        max_length=50,
        required=False,
        empty_value=None,
        widget=forms.TextInput(attrs={"inputmode": "tel"}),
    )
    item_type = forms.CharField(label="ประเภทสินค้า", max_length=200, required=False, empty_value=None)
    quantity = forms.IntegerField(
        label="จำนวน",
        required=False,
        min_value=0,
        widget=forms.NumberInput(attrs={"placeholder": "0"}),
    )


class StatusUpdateForm(forms.Form):
    # Free text; the dashboard datalist only offers the usual labels.
    status = forms.CharField(label="สถานะ", required=False, strip=False)


class ImageUploadForm(forms.Form):
    image = forms.FileField(label="รูปงาน")
