"""Project middleware.

``UpstreamFailureMiddleware`` is the HTTP boundary for failures of the
record store, the blob store and the QR encoder.  The job service wraps
those failures in ``UpstreamFailure``; here they become a plain 503 page
instead of Django's generic 500, and are logged with their traceback.
"""

import logging

from django.shortcuts import render

from .errors import UpstreamFailure

logger = logging.getLogger(__name__)


class UpstreamFailureMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, UpstreamFailure):
            return None
        logger.error(
            "Upstream failure (%s) while handling %s %s",
            exception.source, request.method, request.path,
            exc_info=exception,
        )
        return render(
            request,
            'errors/upstream.html',
            {'source': exception.source},
            status=503,
        )
