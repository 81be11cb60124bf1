"""Google Drive upload of recipe cards via OAuth 2.0."""

from __future__ import annotations

import io
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class GoogleDriveUploader:
    """Upload in-memory files to Google Drive.

    The first upload opens a browser for Google account authorization; the
    token is cached at ``token_path`` for later runs.
    """

    SCOPES = ["https://www.googleapis.com/auth/drive.file"]

    def __init__(
        self,
        credentials_path: str | Path = "~/.config/fridgelens/gdrive_credentials.json",
        token_path: str | Path = "~/.config/fridgelens/gdrive_token.json",
        folder_id: str = "",
    ) -> None:
        self._credentials_path = Path(credentials_path).expanduser()
        self._token_path = Path(token_path).expanduser()
        self._folder_id = folder_id
        self._service = None

    @property
    def has_credentials(self) -> bool:
        return self._token_path.exists() or self._credentials_path.exists()

    def _get_service(self):
        """Build and return the Drive API service, authenticating if needed."""
        if self._service is not None:
            return self._service

        try:
            from google.auth.transport.requests import Request
            from google.oauth2.credentials import Credentials
            from google_auth_oauthlib.flow import InstalledAppFlow
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "Google Drive support needs: pip install google-api-python-client "
                "google-auth google-auth-oauthlib"
            ) from None

        creds = None
        if self._token_path.exists():
            creds = Credentials.from_authorized_user_file(
                str(self._token_path), self.SCOPES
            )

        if creds is None or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not self._credentials_path.exists():
                    raise FileNotFoundError(
                        f"OAuth credentials file not found: {self._credentials_path}"
                    )
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(self._credentials_path), self.SCOPES
                )
                creds = flow.run_local_server(port=0)

            self._token_path.parent.mkdir(parents=True, exist_ok=True)
            self._token_path.write_text(creds.to_json())

        self._service = build("drive", "v3", credentials=creds)
        return self._service

    def upload_bytes(
        self,
        data: bytes,
        filename: str,
        mime_type: str = "image/png",
        folder_id: str | None = None,
    ) -> str:
        """Upload ``data`` as ``filename`` and return the Drive file ID."""
        from googleapiclient.http import MediaIoBaseUpload

        service = self._get_service()
        target_folder = folder_id or self._folder_id

        file_metadata: dict = {"name": filename}
        if target_folder:
            file_metadata["parents"] = [target_folder]

        media = MediaIoBaseUpload(io.BytesIO(data), mimetype=mime_type, resumable=True)
        result = (
            service.files()
            .create(body=file_metadata, media_body=media, fields="id")
            .execute()
        )
        logger.info("Uploaded %s to Google Drive as %s", filename, result["id"])
        return result["id"]
