from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    """``runserver`` that listens on the configured ``PORT`` (3000 unless set)."""

    default_port = str(settings.STUDIO.port)
