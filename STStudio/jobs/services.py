"""Job-related domain services.

Every operation on jobs goes through here: the staff dashboard (list,
create, status update, photo upload), the public tracking page and the
XLSX export.  Record store, blob store and QR encoder failures leave this
module as ``UpstreamFailure`` so that the HTTP layer can answer with one
generic failure page.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from STStudio.config import StudioConfig
from STStudio.errors import BLOB_STORE, RECORD_STORE, JobNotFound, UpstreamFailure
from .codes import qr_data_url
from .models import DEFAULT_STATUS, Job, new_job_id
from .storage import BlobStore, get_blob_store

logger = logging.getLogger(__name__)

JOB_FIELDS = ('customer_name', 'phone', 'item_type', 'quantity')


@contextmanager
def _record_store(action: str):
    """Re-raise database errors raised inside the block as ``UpstreamFailure``."""
    try:
        yield
    except DatabaseError as exc:
        raise UpstreamFailure(RECORD_STORE, f"{action} failed: {exc}") from exc


def _config(config: Optional[StudioConfig]) -> StudioConfig:
    return config if config is not None else settings.STUDIO


def tracking_url(job_id: str, config: Optional[StudioConfig] = None) -> str:
    return _config(config).tracking_url(job_id)


def _generate_unique_job_id(*, max_attempts=6) -> str:
    """Return a job id not used by any existing job."""
    for _ in range(max_attempts):
        candidate = new_job_id()
        if not Job.objects.filter(job_id=candidate).exists():
            return candidate
    raise UpstreamFailure(RECORD_STORE, f"no unused job id after {max_attempts} attempts")


def list_jobs(config: Optional[StudioConfig] = None) -> Iterator[Job]:
    """Yield every job, newest first, each carrying a fresh ``qr`` data URL.

    The QR image encodes the job's public tracking URL.  It lives only on
    the yielded instance and is rebuilt on every call.
    """
    config = _config(config)
    with _record_store("listing jobs"):
        jobs = list(Job.objects.order_by('-created_at', '-id'))
    for job in jobs:
        job.qr = qr_data_url(config.tracking_url(job.job_id))
        yield job


def create_job(fields: Mapping[str, object]) -> Job:
    """Persist a new job from ``fields``; missing fields are stored empty."""
    values = {name: fields.get(name) for name in JOB_FIELDS}
    with _record_store("creating a job"):
        job = Job.objects.create(job_id=_generate_unique_job_id(), status=DEFAULT_STATUS, **values)
    logger.info("Created job %s for %r", job.job_id, job.customer_name)
    return job


def update_status(job_id: str, new_status: Optional[str]) -> int:
    """Store ``new_status`` on the matching job and return the number of rows touched.

    Any string is accepted.  An unknown ``job_id`` touches nothing and is
    not an error.
    """
    with _record_store("updating status"):
        updated = Job.objects.filter(job_id=job_id).update(status=new_status or '')
    if updated:
        logger.info("Job %s status set to %r", job_id, new_status)
    else:
        logger.info("Status update for unknown job %s ignored", job_id)
    return updated


@contextmanager
def _staged_upload(upload):
    """Write ``upload`` (bytes or a Django ``UploadedFile``) to a temp file and yield its path.

    The temp file is removed when the block exits, including when writing
    it fails part way.
    """
    suffix = os.path.splitext(getattr(upload, 'name', '') or '')[1]
    try:
        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=suffix)
    except OSError as exc:
        raise UpstreamFailure(BLOB_STORE, f"cannot stage the upload: {exc}") from exc
    tmp_path = tmp.name
    try:
        try:
            with tmp:
                if isinstance(upload, (bytes, bytearray)):
                    tmp.write(upload)
                else:
                    for chunk in upload.chunks():
                        tmp.write(chunk)
        except OSError as exc:
            raise UpstreamFailure(BLOB_STORE, f"staging the upload failed: {exc}") from exc
        yield tmp_path
    finally:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass


def attach_image(
    job_id: str,
    upload,
    store: Optional[BlobStore] = None,
    config: Optional[StudioConfig] = None,
) -> Optional[Job]:
    """Upload a photo for ``job_id`` and store its URL on the job.

    The upload happens even when no job matches; in that case nothing is
    written and ``None`` is returned.  A later upload replaces the URL of
    an earlier one.
    """
    if store is None:
        store = get_blob_store(_config(config))
    filename = getattr(upload, 'name', '') or ''

    with _staged_upload(upload) as path:
        url = store.upload(path, prefix=f"jobs/{job_id}", filename=filename)

    with _record_store("saving the photo URL"):
        updated = Job.objects.filter(job_id=job_id).update(image_url=url)
        if not updated:
            logger.warning("Photo %s uploaded for unknown job %s; nothing saved", url, job_id)
            return None
        job = Job.objects.get(job_id=job_id)
    logger.info("Job %s photo set to %s", job_id, url)
    return job


def get_job_for_tracking(job_id: str) -> Job:
    """Public lookup by id.

    Returns the whole record: anybody holding the id (for example through
    the printed QR code) may see every field of the job.
    """
    with _record_store("looking up a job"):
        job = Job.objects.filter(job_id=job_id).first()
    if job is None:
        raise JobNotFound(job_id)
    return job


def _mask(value: Optional[str], keep_tail: int = 0, keep_head: int = 0) -> str:
    text = value or ''
    if len(text) <= keep_tail + keep_head:
        return text
    tail = text[len(text) - keep_tail:] if keep_tail else ''
    return text[:keep_head] + '•' * (len(text) - keep_tail - keep_head) + tail


def tracking_view(job: Job, redact: bool = False) -> dict:
    """Values shown on the public tracking page.

    With ``redact`` the customer name keeps its first character and the
    phone number its last three digits.
    """
    customer_name = job.customer_name or ''
    phone = job.phone or ''
    if redact:
        customer_name = _mask(customer_name, keep_head=1)
        phone = _mask(phone, keep_tail=3)
    return {
        'job_id': job.job_id,
        'customer_name': customer_name,
        'phone': phone,
        'item_type': job.item_type or '',
        'quantity': job.quantity,
        'status': job.status,
        'image_url': job.image_url,
        'created_at': job.created_at,
    }


def export_rows() -> list[list[object]]:
    """Rows for the XLSX export, in dashboard order."""
    with _record_store("exporting jobs"):
        jobs = list(Job.objects.order_by('-created_at', '-id'))
    rows = []
    for job in jobs:
        rows.append([
            job.job_id,
            job.customer_name or '',
            job.phone or '',
            job.item_type or '',
            job.quantity,
            job.status,
            job.image_url or '',
            timezone.localtime(job.created_at).strftime("%Y-%m-%d %H:%M"),
        ])
    return rows
