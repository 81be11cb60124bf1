"""Tests for Google Drive uploader."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from fridgelens.gdrive import GoogleDriveUploader


def _mock_googleapiclient():
    """Context manager that mocks googleapiclient.http.MediaIoBaseUpload."""
    mock_http = MagicMock()
    mock_api = MagicMock()
    mock_api.http = mock_http
    return patch.dict("sys.modules", {
        "googleapiclient": mock_api,
        "googleapiclient.http": mock_http,
    }), mock_http


def _mock_service(file_id="file_abc123"):
    mock_service = MagicMock()
    mock_files = MagicMock()
    mock_create = MagicMock()
    mock_create.execute.return_value = {"id": file_id}
    mock_files.create.return_value = mock_create
    mock_service.files.return_value = mock_files
    return mock_service, mock_files


class TestGoogleDriveUploader:
    def test_init_defaults(self):
        """Initializes with default paths."""
        uploader = GoogleDriveUploader()
        assert "gdrive_credentials.json" in str(uploader._credentials_path)
        assert "gdrive_token.json" in str(uploader._token_path)
        assert uploader._folder_id == ""

    def test_has_credentials(self, tmp_path):
        creds = tmp_path / "creds.json"
        uploader = GoogleDriveUploader(
            credentials_path=creds, token_path=tmp_path / "token.json"
        )
        assert uploader.has_credentials is False

        creds.write_text("{}")
        assert uploader.has_credentials is True

    def test_upload_bytes_success(self):
        """Uploads in-memory bytes and returns file ID."""
        uploader = GoogleDriveUploader(folder_id="folder123")
        mock_service, mock_files = _mock_service()
        uploader._service = mock_service

        patcher, mock_http = _mock_googleapiclient()
        with patcher:
            file_id = uploader.upload_bytes(b"\x89PNG", filename="fridgelens-menemen.png")

        assert file_id == "file_abc123"
        body = mock_files.create.call_args.kwargs["body"]
        assert body["name"] == "fridgelens-menemen.png"
        assert body["parents"] == ["folder123"]
        media_kwargs = mock_http.MediaIoBaseUpload.call_args.kwargs
        assert media_kwargs["mimetype"] == "image/png"
        assert mock_http.MediaIoBaseUpload.call_args.args[0].getvalue() == b"\x89PNG"

    def test_upload_bytes_folder_override(self):
        uploader = GoogleDriveUploader(folder_id="default")
        mock_service, mock_files = _mock_service()
        uploader._service = mock_service

        patcher, _ = _mock_googleapiclient()
        with patcher:
            uploader.upload_bytes(b"data", filename="x.png", folder_id="other")

        assert mock_files.create.call_args.kwargs["body"]["parents"] == ["other"]

    def test_upload_bytes_no_folder(self):
        """No parents key when no folder_id."""
        uploader = GoogleDriveUploader()
        mock_service, mock_files = _mock_service()
        uploader._service = mock_service

        patcher, _ = _mock_googleapiclient()
        with patcher:
            uploader.upload_bytes(b"data", filename="x.png")

        assert "parents" not in mock_files.create.call_args.kwargs["body"]

    def test_get_service_missing_credentials(self, tmp_path):
        """Raises FileNotFoundError when no token and no credentials exist."""
        uploader = GoogleDriveUploader(
            credentials_path=tmp_path / "missing.json",
            token_path=tmp_path / "token.json",
        )
        modules = {
            "google.auth.transport.requests": MagicMock(),
            "google.oauth2.credentials": MagicMock(),
            "google_auth_oauthlib.flow": MagicMock(),
            "googleapiclient.discovery": MagicMock(),
        }
        with patch.dict(sys.modules, modules):
            with pytest.raises(FileNotFoundError, match="OAuth credentials file not found"):
                uploader._get_service()

    def test_get_service_cached(self):
        uploader = GoogleDriveUploader()
        sentinel = MagicMock()
        uploader._service = sentinel
        assert uploader._get_service() is sentinel
