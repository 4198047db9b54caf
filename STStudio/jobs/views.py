"""Views for the jobs app.

Staff pages (dashboard, create, status update, photo upload, QR image,
XLSX export) sit behind ``gate.session.admin_required``.  The tracking
page is public on purpose: the job id in the URL is the only key a
customer needs.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from gate.session import admin_required
from STStudio.errors import JobNotFound
from utils.xlsx import build_table_response
from .codes import qr_svg
from .forms import ImageUploadForm, JobCreateForm, StatusUpdateForm
from .models import STATUS_SUGGESTIONS
from .services import (
    attach_image,
    create_job,
    export_rows,
    get_job_for_tracking,
    list_jobs,
    tracking_url,
    tracking_view,
    update_status,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "ไม่พบข้อมูลงาน"


def _first_error(form) -> str:
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return "ข้อมูลไม่ถูกต้อง"


@require_GET
@admin_required
def dashboard_view(request):
    """List all jobs, newest first, each with the QR of its tracking link."""
    jobs = list(list_jobs(settings.STUDIO))
    context = {
        'jobs': jobs,
        'create_form': JobCreateForm(),
        'status_suggestions': STATUS_SUGGESTIONS,
    }
    return render(request, 'jobs/dashboard.html', context)


@require_POST
@admin_required
def job_create_view(request):
    form = JobCreateForm(request.POST)
    if form.is_valid():
        job = create_job(form.cleaned_data)
        messages.success(request, f"สร้างงานของ {job.customer_name or '-'} แล้ว")
    else:
        messages.error(request, f"สร้างงานไม่สำเร็จ: {_first_error(form)}")
    return redirect('dashboard')


@require_POST
@admin_required
def job_status_update_view(request, job_id: str):
    form = StatusUpdateForm(request.POST)
    if form.is_valid():
        update_status(job_id, form.cleaned_data['status'])
    else:
        messages.error(request, f"เปลี่ยนสถานะไม่สำเร็จ: {_first_error(form)}")
    return redirect('dashboard')


@require_POST
@admin_required
def job_upload_view(request, job_id: str):
    """Attach the single ``image`` file of the multipart form to the job."""
    form = ImageUploadForm(request.POST, request.FILES)
    if form.is_valid():
        attach_image(job_id, form.cleaned_data['image'], config=settings.STUDIO)
    else:
        messages.error(request, f"อัปโหลดรูปไม่สำเร็จ: {_first_error(form)}")
    return redirect('dashboard')


@require_GET
@admin_required
def job_qr_svg(request, job_id: str):
    """The tracking link of ``job_id`` as a printable SVG QR code."""
    svg_bytes = qr_svg(tracking_url(job_id, settings.STUDIO))
    return HttpResponse(svg_bytes, content_type="image/svg+xml; charset=utf-8")


@require_GET
@admin_required
def jobs_export_xlsx(request):
    headers = ['รหัสงาน', 'ชื่อลูกค้า', 'เบอร์โทร', 'ประเภทสินค้า', 'จำนวน', 'สถานะ', 'รูปงาน', 'วันที่รับงาน']
    return build_table_response(
        sheet_title="งานทั้งหมด",
        report_title="รายการงาน ST Studio",
        headers=headers,
        rows=export_rows(),
        filename="ststudio_jobs.xlsx",
        column_widths=[36, 24, 16, 20, 10, 18, 40, 18],
        table_name="JobsExport",
    )


@require_GET
def track_view(request, job_id: str):
    """Public status page reached from the QR code.

    Shows the whole job unless ``STUDIO_TRACKING_REDACT`` is on.  An
    unknown id answers with plain "no such job" text.
    """
    try:
        job = get_job_for_tracking(job_id)
    except JobNotFound:
        return HttpResponse(NOT_FOUND_MESSAGE, content_type="text/plain; charset=utf-8", status=404)
    context = {
        'job': tracking_view(job, redact=settings.STUDIO.tracking_redact),
    }
    return render(request, 'jobs/track.html', context)
