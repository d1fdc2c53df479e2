import base64

import pytest
from django.core.files.storage import default_storage
from rest_framework.test import APIClient
from users.tests.factories import AdminFactory, UserFactory

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _payload(**overrides):
    body = {
        "filename": "s5iix.png",
        "content_type": "image/png",
        "data": base64.b64encode(PNG_BYTES).decode(),
    }
    body.update(overrides)
    return body


@pytest.mark.django_db
def test_upload_requires_staff():
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    resp = client.post("/api/v1/admin/catalog/uploads/", _payload(), format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_upload_stores_file_and_delete_removes_it():
    client = APIClient()
    client.force_authenticate(user=AdminFactory())

    resp = client.post("/api/v1/admin/catalog/uploads/", _payload(), format="json")
    assert resp.status_code == 201
    url = resp.data["url"]
    assert url.startswith("/media/uploads/")
    assert url.endswith(".png")

    name = url[len("/media/") :]
    assert default_storage.exists(name)

    deleted = client.delete("/api/v1/admin/catalog/uploads/", {"url": url}, format="json")
    assert deleted.status_code == 200
    assert not default_storage.exists(name)


@pytest.mark.django_db
def test_upload_rejects_non_images_bad_base64_and_oversized(settings):
    client = APIClient()
    client.force_authenticate(user=AdminFactory())

    not_image = client.post("/api/v1/admin/catalog/uploads/", _payload(content_type="text/plain"), format="json")
    assert not_image.status_code == 400

    bad = client.post("/api/v1/admin/catalog/uploads/", _payload(data="not base64!"), format="json")
    assert bad.status_code == 400

    settings.UPLOAD_MAX_BYTES = 8
    too_big = client.post("/api/v1/admin/catalog/uploads/", _payload(), format="json")
    assert too_big.status_code == 400
    assert too_big.data["detail"] == "Upload is too large."


@pytest.mark.django_db
def test_delete_rejects_foreign_url():
    client = APIClient()
    client.force_authenticate(user=AdminFactory())
    resp = client.delete(
        "/api/v1/admin/catalog/uploads/",
        {"url": "https://cdn.example.com/other.png"},
        format="json",
    )
    assert resp.status_code == 400
