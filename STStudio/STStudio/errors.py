"""Error taxonomy shared by the gate and jobs apps.

Views translate these into responses: ``AuthenticationFailure`` into a
message on the login page, ``JobNotFound`` into the public "no such job"
text, and ``UpstreamFailure`` into the 503 page rendered by
``STStudio.middleware.UpstreamFailureMiddleware``.
"""

from __future__ import annotations

# Where an upstream failure came from.
RECORD_STORE = 'record_store'
BLOB_STORE = 'blob_store'
CODE_ENCODER = 'code_encoder'


class StudioError(Exception):
    """Base class for errors raised by the job tracker."""


class AuthenticationFailure(StudioError):
    def __init__(self, message: str = "เข้าสู่ระบบไม่สำเร็จ (Login Failed)"):
        super().__init__(message)


class JobNotFound(StudioError):
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"No job with id {job_id!r}")


class UpstreamFailure(StudioError):
    """A record store, blob store or QR encoder call failed."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")
