# ===== Tailwind styling =====
INPUT_CLS = "block w-full rounded-md border border-gray-300 p-2.5 text-sm focus:outline-none focus:ring-2 focus:ring-blue-500"


class TailwindFormMixin:
    """Apply the shared Tailwind input classes and error styling to every widget."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        for name, field in self.fields.items():
            w = field.widget
            prev = w.attrs.get("class", "")
            w.attrs["class"] = (prev + " " + INPUT_CLS).strip()
            w.attrs.setdefault("aria-label", field.label or name)

            # If the form is bound and this field contains an error, append error styling.
            if self.is_bound and name in self.errors:
                w.attrs["class"] += " ring-1 ring-red-500 focus:ring-red-300"
                w.attrs["aria-invalid"] = "true"
