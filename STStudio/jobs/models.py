"""Models for the jobs app.

A ``Job`` is one customer work order at the shop.  Staff create it,
move its status along and attach a photo; customers look it up by
``job_id`` through the tracking link printed as a QR code.  Jobs are
never deleted.
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone


# Localized "received" label every new job starts with.
DEFAULT_STATUS = 'รับงานแล้ว'

# Offered in the dashboard dropdown only; ``status`` accepts any string.
STATUS_SUGGESTIONS = [
    DEFAULT_STATUS,
    'กำลังออกแบบ',
    'กำลังผลิต',
    'เสร็จแล้ว รอรับ',
    'ส่งมอบแล้ว',
]


def new_job_id() -> str:
    """Return a fresh 32-character hex id drawn from ``uuid4``."""
    return uuid.uuid4().hex


class Job(models.Model):
    # External lookup key, embedded in the tracking URL and the QR code.
    job_id = models.CharField(
        max_length=64,
        unique=True,
        editable=False,
        verbose_name="รหัสงาน",
    )
    customer_name = models.CharField(max_length=200, blank=True, null=True, verbose_name="ชื่อลูกค้า")
    phone = models.CharField(max_length=50, blank=True, null=True, verbose_name="เบอร์โทร")
    item_type = models.CharField(max_length=200, blank=True, null=True, verbose_name="ประเภทสินค้า")
    quantity = models.PositiveIntegerField(blank=True, null=True, verbose_name="จำนวน")
    status = models.TextField(default=DEFAULT_STATUS, verbose_name="สถานะ")
    image_url = models.URLField(max_length=1000, blank=True, null=True, verbose_name="รูปงาน")
    created_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Job'
        verbose_name_plural = 'Jobs'

    def save(self, *args, **kwargs):
        """Assign ``job_id`` once on initial save."""
        if not self.job_id:
            self.job_id = new_job_id()
        return super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.customer_name or '-'} ({self.status})"
