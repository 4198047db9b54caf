import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class JobsConfig(AppConfig):
    """Configuration for the jobs app.

    This app owns the ``Job`` record, the dashboard where staff create
    and update jobs, and the public tracking page customers reach by
    scanning a job's QR code.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'jobs'

    def ready(self):
        from django.conf import settings

        engine = settings.DATABASES['default']['ENGINE'].rsplit('.', 1)[-1]
        logger.info(
            "ST Studio job tracker ready: record store=%s, blob store=%s, base URL=%s",
            engine, settings.STUDIO.blob_backend, settings.STUDIO.base_url,
        )
