"""
HTTP tests for the dashboard, job actions and public tracking page.

Dependencies: pytest, pytest-django, openpyxl
System role: Route-level behaviour including the end-to-end shop scenario
"""

import dataclasses
from io import BytesIO
from unittest.mock import patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client
from openpyxl import load_workbook

from jobs.models import DEFAULT_STATUS, Job
from STStudio.errors import BLOB_STORE, UpstreamFailure

pytestmark = pytest.mark.django_db


def _photo(name="photo.jpg"):
    return SimpleUploadedFile(name, b"\xff\xd8\xffphoto-bytes", content_type="image/jpeg")


class TestDashboard:
    def test_lists_jobs_with_qr_codes(self, staff_client):
        Job.objects.create(customer_name="Somchai")
        Job.objects.create(customer_name="Malee")

        response = staff_client.get("/")

        assert response.status_code == 200
        content = response.content.decode()
        assert "Somchai" in content and "Malee" in content
        assert content.count("data:image/svg+xml;base64,") == 2

    def test_empty_dashboard(self, staff_client):
        response = staff_client.get("/")

        assert response.status_code == 200
        assert list(response.context["jobs"]) == []


class TestCreate:
    def test_creates_job_and_redirects(self, staff_client):
        response = staff_client.post(
            "/create",
            {"customer_name": "Somchai", "phone": "0899999999", "item_type": "mug", "quantity": "2"},
        )

        assert response.status_code == 302
        assert response.url == "/"
        job = Job.objects.get()
        assert (job.customer_name, job.quantity, job.status) == ("Somchai", 2, DEFAULT_STATUS)

    def test_blank_form_still_creates_a_job(self, staff_client):
        staff_client.post("/create", {})

        job = Job.objects.get()
        assert job.customer_name is None
        assert job.quantity is None

    def test_bad_quantity_is_reported_not_saved(self, staff_client):
        response = staff_client.post("/create", {"customer_name": "Somchai", "quantity": "two"}, follow=True)

        assert Job.objects.count() == 0
        assert any("สร้างงานไม่สำเร็จ" in str(m) for m in response.context["messages"])

    def test_get_is_not_allowed(self, staff_client):
        assert staff_client.get("/create").status_code == 405


class TestUpdate:
    def test_sets_free_text_status(self, staff_client):
        job = Job.objects.create(customer_name="Somchai")

        response = staff_client.post(f"/update/{job.job_id}", {"status": "printing"})

        assert response.url == "/"
        job.refresh_from_db()
        assert job.status == "printing"

    def test_long_status_is_saved_whole(self, staff_client):
        job = Job.objects.create(customer_name="Somchai")
        long_status = "x" * 150

        response = staff_client.post(f"/update/{job.job_id}", {"status": long_status})

        assert response.url == "/"
        job.refresh_from_db()
        assert job.status == long_status

    def test_status_is_saved_verbatim(self, staff_client):
        job = Job.objects.create(customer_name="Somchai")

        staff_client.post(f"/update/{job.job_id}", {"status": "  printing  "})

        job.refresh_from_db()
        assert job.status == "  printing  "

    def test_unknown_job_redirects_quietly(self, staff_client):
        job = Job.objects.create(customer_name="Somchai")

        response = staff_client.post("/update/not-a-real-id", {"status": "printing"})

        assert response.status_code == 302
        job.refresh_from_db()
        assert job.status == DEFAULT_STATUS


class TestUpload:
    def test_attaches_photo_through_local_store(self, staff_client, media_root):
        job = Job.objects.create(customer_name="Somchai")

        response = staff_client.post(f"/upload/{job.job_id}", {"image": _photo()})

        assert response.url == "/"
        job.refresh_from_db()
        assert job.image_url.startswith(f"https://track.ststudio.test/media/jobs/{job.job_id}/")
        assert job.image_url.endswith(".jpg")

    def test_missing_file_is_reported_not_saved(self, staff_client):
        job = Job.objects.create(customer_name="Somchai")

        response = staff_client.post(f"/upload/{job.job_id}", {}, follow=True)

        job.refresh_from_db()
        assert job.image_url is None
        assert any("อัปโหลดรูปไม่สำเร็จ" in str(m) for m in response.context["messages"])

    def test_blob_failure_renders_generic_failure_page(self, staff_client):
        job = Job.objects.create(customer_name="Somchai")

        with patch("jobs.storage.LocalBlobStore.upload", side_effect=UpstreamFailure(BLOB_STORE, "down")):
            response = staff_client.post(f"/upload/{job.job_id}", {"image": _photo()})

        assert response.status_code == 503
        assert "errors/upstream.html" in [t.name for t in response.templates]
        job.refresh_from_db()
        assert job.image_url is None


class TestQrAndExport:
    def test_qr_svg(self, staff_client):
        response = staff_client.get("/qr/abc123.svg")

        assert response.status_code == 200
        assert response["Content-Type"].startswith("image/svg+xml")

    def test_export_xlsx(self, staff_client):
        Job.objects.create(customer_name="Somchai", quantity=2)

        response = staff_client.get("/export/xlsx")

        assert response.status_code == 200
        assert "attachment" in response["Content-Disposition"]
        ws = load_workbook(BytesIO(response.content)).active
        values = [cell for row in ws.iter_rows(values_only=True) for cell in row]
        assert "Somchai" in values
        assert "รหัสงาน" in values

    def test_export_without_jobs(self, staff_client):
        response = staff_client.get("/export/xlsx")

        assert response.status_code == 200


class TestTrackPage:
    def test_shows_full_job(self, client):
        job = Job.objects.create(customer_name="Somchai", phone="0899999999", status="printing")

        response = client.get(f"/track/{job.job_id}")

        content = response.content.decode()
        assert response.status_code == 200
        assert "printing" in content
        assert "Somchai" in content
        assert "0899999999" in content

    def test_unknown_job_is_plain_not_found(self, client):
        response = client.get("/track/not-a-real-id")

        assert response.status_code == 404
        assert response["Content-Type"].startswith("text/plain")
        assert response.content.decode() == "ไม่พบข้อมูลงาน"

    def test_redaction_flag(self, client, settings):
        settings.STUDIO = dataclasses.replace(settings.STUDIO, tracking_redact=True)
        job = Job.objects.create(customer_name="Somchai", phone="0899999999")

        content = client.get(f"/track/{job.job_id}").content.decode()

        assert "0899999999" not in content
        assert "999" in content

    def test_record_store_failure_is_503(self, client):
        with patch("jobs.views.get_job_for_tracking", side_effect=UpstreamFailure("record_store", "down")):
            response = client.get("/track/abc")

        assert response.status_code == 503


def test_end_to_end_shop_scenario(staff_client):
    customer = Client()
    staff_client.post(
        "/create",
        {"customer_name": "Somchai", "phone": "0899999999", "item_type": "mug", "quantity": "2"},
    )
    job = Job.objects.get()
    assert job.status == DEFAULT_STATUS

    staff_client.post(f"/update/{job.job_id}", {"status": "printing"})
    page = customer.get(f"/track/{job.job_id}")
    assert page.context["job"]["status"] == "printing"
    assert page.context["job"]["customer_name"] == "Somchai"
    assert page.context["job"]["image_url"] is None

    staff_client.post(f"/upload/{job.job_id}", {"image": _photo()})
    page = customer.get(f"/track/{job.job_id}")
    assert page.context["job"]["image_url"]
    assert page.context["job"]["image_url"] in page.content.decode()
