"""WSGI config for the ST Studio job tracker."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'STStudio.settings')

application = get_wsgi_application()
