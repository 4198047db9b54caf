from django import forms

from STStudio.forms import TailwindFormMixin


class LoginForm(TailwindFormMixin, forms.Form):
    # Blank values are checked like any other; the failure message stays the same.
    username = forms.CharField(
        label="ชื่อผู้ใช้",
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={"autocomplete": "username"}),
    )
    password = forms.CharField(
        label="รหัสผ่าน",
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )
