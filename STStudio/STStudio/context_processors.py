from django.conf import settings

from gate.session import is_authenticated


def studio_context(request):
    return {
        'studio_name': 'ST Studio',
        'is_admin': is_authenticated(request),
        'studio_base_url': settings.STUDIO.base_url,
    }
