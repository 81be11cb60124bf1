"""Camera capture using OpenCV, plus the image-file fallback."""

from __future__ import annotations

import base64
import logging
import mimetypes
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .errors import CameraAccessError

logger = logging.getLogger(__name__)


@dataclass
class CapturedImage:
    camera_index: int
    data: bytes  # JPEG
    captured_at: str  # ISO8601

    def to_data_url(self) -> str:
        return "data:image/jpeg;base64," + base64.b64encode(self.data).decode()


class FridgeCamera:
    """Grab single JPEG frames from a camera pointed at the fridge.

    The device is opened for each capture and released right after the
    frame is read, so nothing else has to share it.
    """

    def __init__(self, camera_index: int = 0) -> None:
        self._camera_index = camera_index

    def capture(self) -> CapturedImage:
        """Capture one frame and return it JPEG-encoded."""
        try:
            import cv2
        except ImportError as e:
            logger.error("opencv-python is required: pip install opencv-python")
            raise CameraAccessError() from e

        cap = cv2.VideoCapture(self._camera_index)
        if not cap.isOpened():
            logger.warning("Camera %d could not be opened", self._camera_index)
            cap.release()
            raise CameraAccessError()

        try:
            ret, frame = cap.read()
            if not ret or frame is None:
                logger.warning("Camera %d returned no frame", self._camera_index)
                raise CameraAccessError()

            ok, buf = cv2.imencode(".jpg", frame)
            if not ok:
                logger.warning("Frame from camera %d could not be encoded", self._camera_index)
                raise CameraAccessError()

            return CapturedImage(
                camera_index=self._camera_index,
                data=buf.tobytes(),
                captured_at=datetime.now(timezone.utc).isoformat(),
            )
        finally:
            cap.release()

    @staticmethod
    def list_cameras(max_check: int = 10) -> list[int]:
        """List available camera indices by probing."""
        try:
            import cv2
        except ImportError:
            raise ImportError(
                "opencv-python is required: pip install opencv-python"
            ) from None

        available: list[int] = []
        for i in range(max_check):
            cap = cv2.VideoCapture(i)
            if cap.isOpened():
                available.append(i)
            cap.release()
        return available


def load_image_file(path: str | Path) -> str:
    """Read an image file into a data URL."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Dosya bulunamadı: {path}")

    mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    if not mime_type.startswith("image/"):
        raise ValueError(f"Görsel dosyası değil: {path}")

    data = path.read_bytes()
    return f"data:{mime_type};base64," + base64.b64encode(data).decode()
