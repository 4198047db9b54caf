"""ASGI config for the ST Studio job tracker."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'STStudio.settings')

application = get_asgi_application()
