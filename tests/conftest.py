"""
Shared test fixtures for the ST Studio job tracker.

Provides: admin credential, temporary media root, a logged-in staff client,
an in-memory blob store double
Dependencies: pytest, pytest-django
"""

import dataclasses
import os

import pytest
from django.contrib.auth.hashers import make_password

from gate.session import SESSION_FLAG

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "1234"


@pytest.fixture(autouse=True)
def studio_config(settings):
    """Real admin hash for every test; restored by pytest-django afterwards."""
    settings.STUDIO = dataclasses.replace(
        settings.STUDIO,
        admin_username=ADMIN_USERNAME,
        admin_password_hash=make_password(ADMIN_PASSWORD),
    )
    return settings.STUDIO


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    root = tmp_path / "media"
    settings.MEDIA_ROOT = root
    return root


@pytest.fixture
def staff_client(client, db):
    """Test client whose session already carries the admin flag."""
    session = client.session
    session[SESSION_FLAG] = True
    session.save()
    return client


class FakeBlobStore:
    """Blob store double that records each staged file and hands out distinct URLs."""

    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.calls = []

    def upload(self, path, *, prefix, filename=""):
        with open(path, "rb") as fh:
            payload = fh.read()
        self.calls.append({"path": path, "prefix": prefix, "filename": filename, "payload": payload})
        if self.fail_with is not None:
            raise self.fail_with
        return f"https://img.ststudio.test/{prefix}/{len(self.calls)}.jpg"


@pytest.fixture
def blob_store():
    return FakeBlobStore()


def staged_file_removed(call) -> bool:
    return not os.path.exists(call["path"])
