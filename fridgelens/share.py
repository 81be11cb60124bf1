"""Share targets for recipe cards, with a local-save fallback."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ShareExportError

if TYPE_CHECKING:
    from .card import RecipeCard
    from .gdrive import GoogleDriveUploader

logger = logging.getLogger(__name__)


class ShareOutcome(str, Enum):
    SHARED = "shared"
    SAVED = "saved"


class Sharer(ABC):
    """A place a recipe card can be handed to."""

    @abstractmethod
    def can_share_files(self) -> bool: ...

    @abstractmethod
    def share(self, card: RecipeCard, title: str, text: str) -> None: ...


class LocalSaver(Sharer):
    """Write cards into a directory, the download fallback."""

    def __init__(self, export_dir: str | Path) -> None:
        self._export_dir = Path(export_dir).expanduser()

    def can_share_files(self) -> bool:
        return True

    def save(self, card: RecipeCard) -> Path:
        self._export_dir.mkdir(parents=True, exist_ok=True)
        path = self._export_dir / card.filename
        path.write_bytes(card.data)
        logger.info("Saved recipe card to %s", path)
        return path

    def share(self, card: RecipeCard, title: str, text: str) -> None:
        self.save(card)


class DriveSharer(Sharer):
    """Share cards by uploading them to Google Drive."""

    def __init__(
        self,
        uploader: GoogleDriveUploader,
        folder_id: str = "",
        enabled: bool = True,
    ) -> None:
        self._uploader = uploader
        self._folder_id = folder_id
        self._enabled = enabled

    def can_share_files(self) -> bool:
        return self._enabled and self._uploader.has_credentials

    def share(self, card: RecipeCard, title: str, text: str) -> None:
        self._uploader.upload_bytes(
            card.data,
            filename=card.filename,
            mime_type=card.mime_type,
            folder_id=self._folder_id or None,
        )


def share_card(
    card: RecipeCard,
    title: str,
    text: str,
    sharer: Sharer | None,
    saver: LocalSaver,
) -> ShareOutcome:
    """Share ``card`` if a capable target exists, otherwise save it locally.

    Raises:
        ShareExportError: If either path fails.
    """
    try:
        if sharer is not None and sharer.can_share_files():
            sharer.share(card, title, text)
            return ShareOutcome.SHARED
        saver.save(card)
        return ShareOutcome.SAVED
    except ShareExportError:
        raise
    except Exception as e:
        logger.exception("Sharing %s failed", card.filename)
        raise ShareExportError() from e
