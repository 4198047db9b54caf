
"""Project package initialization.

This module tweaks Django's default form error messages so that the
validation strings staff see on the dashboard appear in Thai instead of
the built-in English phrasing.  The adjustment is applied once on import
and affects all forms across the project.
"""

from django import forms


_ERROR_TRANSLATIONS = {
    'required': 'กรุณากรอกข้อมูลช่องนี้',
    'invalid': 'ข้อมูลที่กรอกไม่ถูกต้อง',
    'max_length': 'ช่องนี้ยาวได้ไม่เกิน %(max_length)s ตัวอักษร',
    'min_value': 'ค่าต้องไม่น้อยกว่า %(limit_value)s',
    'max_value': 'ค่าต้องไม่มากกว่า %(limit_value)s',
    'invalid_choice': 'ตัวเลือกไม่ถูกต้อง',
    'missing': 'ไม่พบไฟล์ที่ส่งมา',
    'empty': 'ไฟล์ที่ส่งมาว่างเปล่า',
}


def _localise_default_error_messages() -> None:
    """Patch Django form fields so default errors display in Thai."""

    for attr in dir(forms.fields):
        field_cls = getattr(forms.fields, attr)
        if not isinstance(field_cls, type) or not issubclass(field_cls, forms.Field):
            continue
        messages = getattr(field_cls, 'default_error_messages', None)
        if not isinstance(messages, dict):
            continue
        for key, value in _ERROR_TRANSLATIONS.items():
            if key in messages:
                messages[key] = value


_localise_default_error_messages()
