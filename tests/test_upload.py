"""
Upload endpoint and media storage tests.
"""

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
import pytest

from core.config import settings
from core.storage import (
    CloudinaryStorage,
    LocalMediaStorage,
    MediaStorage,
    StorageError,
    UploadResult,
    get_storage,
)
from main import app

PDF = ("claim.pdf", b"%PDF-1.4 test", "application/pdf")


class TestPublicUpload:
    def test_public_flag(self, client, fake_storage):
        resp = client.post("/api/upload", files={"file": PDF}, data={"folder": "claims", "public": "true"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["url"].startswith("https://media.test/claims/")
        assert data["filename"] == "claim.pdf"
        assert data["size"] == len(PDF[1])
        assert data["type"] == "application/pdf"
        assert fake_storage.calls == [("claims", "claim.pdf", "application/pdf", len(PDF[1]))]

    def test_public_form_folder_needs_no_flag(self, client, fake_storage):
        resp = client.post("/api/upload", files={"file": PDF}, data={"folder": "moha/applications/cv"})
        assert resp.status_code == 200

    def test_public_type_allow_list(self, client, fake_storage):
        resp = client.post(
            "/api/upload",
            files={"file": ("run.sh", b"#!/bin/sh", "application/x-sh")},
            data={"public": "true"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid file type. Allowed: PDF, JPG, PNG, DOC, DOCX"
        assert fake_storage.calls == []

    def test_public_size_cap(self, client, fake_storage, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_bytes", 1024 * 1024)
        big = ("big.pdf", b"0" * (1024 * 1024 + 1), "application/pdf")
        resp = client.post("/api/upload", files={"file": big}, data={"public": "true"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "File size exceeds 1MB limit for public uploads"

    def test_no_file(self, client, fake_storage):
        resp = client.post("/api/upload", data={"public": "true"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "No file provided"


class TestStaffUpload:
    def test_requires_session(self, client, fake_storage):
        resp = client.post("/api/upload", files={"file": PDF}, data={"folder": "documents"})
        assert resp.status_code == 401
        assert fake_storage.calls == []

    def test_any_type_with_session(self, client, fake_storage, staff_headers):
        resp = client.post(
            "/api/upload",
            files={"file": ("rates.csv", b"a,b\n1,2\n", "text/csv")},
            data={"folder": "documents"},
            headers=staff_headers,
        )
        assert resp.status_code == 200

    def test_default_folder(self, client, fake_storage, staff_headers):
        client.post("/api/upload", files={"file": PDF}, headers=staff_headers)
        assert fake_storage.calls[0][0] == settings.default_upload_folder

    def test_size_cap(self, client, fake_storage, staff_headers, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_bytes", 1024 * 1024)
        big = ("big.pdf", b"0" * (1024 * 1024 + 1), "application/pdf")
        resp = client.post("/api/upload", files={"file": big}, headers=staff_headers)
        assert resp.json()["error"] == "File size exceeds 1MB limit"

    def test_storage_failure_is_500(self, client, staff_headers):
        class _Broken:
            def upload(self, data, folder, filename, content_type):
                raise StorageError("bucket gone")

        app.dependency_overrides[get_storage] = lambda: _Broken()
        resp = client.post("/api/upload", files={"file": PDF}, headers=staff_headers)
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to upload file to storage service"


class TestStorageBackends:
    def test_local_storage_writes_under_root(self, tmp_path):
        storage = LocalMediaStorage(root=tmp_path, url_prefix="/media/")
        result = storage.upload(b"hello", "../../etc//claims", "Scan 1.PDF", "application/pdf")
        assert result.public_id.startswith("etc/claims/")
        assert result.public_id.endswith(".pdf")
        assert result.url == f"/media/{result.public_id}"
        assert (tmp_path / result.public_id).read_bytes() == b"hello"

    def test_cloudinary_upload_uses_sdk(self, monkeypatch):
        seen = {}

        def _upload(file, **options):
            seen["data"] = file.read()
            seen["name"] = file.name
            seen.update(options)
            return {"secure_url": "https://res.cloudinary.com/demo/claims/abc.pdf", "public_id": "claims/abc"}

        monkeypatch.setattr(cloudinary.uploader, "upload", _upload)
        storage = CloudinaryStorage(cloud_name="demo", api_key="key", api_secret="secret")
        result = storage.upload(b"%PDF", "../claims", "scan.pdf", "application/pdf")

        assert result == UploadResult(url="https://res.cloudinary.com/demo/claims/abc.pdf", public_id="claims/abc")
        assert seen["data"] == b"%PDF"
        assert seen["name"] == "scan.pdf"
        assert seen["folder"] == "claims"
        assert seen["resource_type"] == "auto"
        assert cloudinary.config().cloud_name == "demo"

    def test_cloudinary_failure_is_storage_error(self, monkeypatch):
        def _upload(file, **options):
            raise cloudinary.exceptions.Error("Invalid Signature")

        monkeypatch.setattr(cloudinary.uploader, "upload", _upload)
        storage = CloudinaryStorage(cloud_name="demo", api_key="key", api_secret="secret")
        with pytest.raises(StorageError):
            storage.upload(b"x", "claims", "a.pdf", "application/pdf")

    def test_cloudinary_without_credentials(self):
        with pytest.raises(StorageError):
            CloudinaryStorage(cloud_name="", api_key="", api_secret="").upload(b"x", "f", "a.pdf", "application/pdf")

    def test_storage_interface_is_abstract(self):
        with pytest.raises(TypeError):
            MediaStorage()
