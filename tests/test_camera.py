"""Tests for fridge camera module (mocked OpenCV)."""

import base64
import sys
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from fridgelens.camera import CapturedImage, FridgeCamera, load_image_file
from fridgelens.errors import CameraAccessError
from fridgelens.gateway.parsing import decode_image


@pytest.fixture
def mock_cv2():
    """Inject a mock cv2 module into sys.modules."""
    mock = MagicMock()
    with patch.dict(sys.modules, {"cv2": mock}):
        yield mock


def _opened_cap(frame=None, ret=True):
    cap = MagicMock()
    cap.isOpened.return_value = True
    cap.read.return_value = (ret, frame)
    return cap


class TestFridgeCamera:
    def test_capture_success(self, mock_cv2):
        """Successful capture returns JPEG bytes and releases the device."""
        mock_cap = _opened_cap(np.zeros((480, 640, 3), dtype=np.uint8))
        mock_cv2.VideoCapture.return_value = mock_cap
        mock_cv2.imencode.return_value = (True, np.frombuffer(b"\xff\xd8jpeg", dtype=np.uint8))

        result = FridgeCamera(camera_index=1).capture()

        assert isinstance(result, CapturedImage)
        assert result.camera_index == 1
        assert result.data == b"\xff\xd8jpeg"
        assert result.captured_at  # ISO8601 string
        mock_cv2.VideoCapture.assert_called_once_with(1)
        assert mock_cv2.imencode.call_args.args[0] == ".jpg"
        mock_cap.release.assert_called_once()

    def test_capture_camera_not_found(self, mock_cv2):
        """CameraAccessError when camera cannot be opened."""
        mock_cap = MagicMock()
        mock_cap.isOpened.return_value = False
        mock_cv2.VideoCapture.return_value = mock_cap

        with pytest.raises(CameraAccessError, match="Kameraya erişilemedi"):
            FridgeCamera().capture()
        mock_cap.release.assert_called_once()

    def test_capture_read_failure(self, mock_cv2):
        """CameraAccessError when frame read fails."""
        mock_cap = _opened_cap(None, ret=False)
        mock_cv2.VideoCapture.return_value = mock_cap

        with pytest.raises(CameraAccessError):
            FridgeCamera().capture()
        mock_cap.release.assert_called_once()

    def test_capture_encode_failure(self, mock_cv2):
        mock_cap = _opened_cap(np.zeros((4, 4, 3), dtype=np.uint8))
        mock_cv2.VideoCapture.return_value = mock_cap
        mock_cv2.imencode.return_value = (False, None)

        with pytest.raises(CameraAccessError):
            FridgeCamera().capture()
        mock_cap.release.assert_called_once()

    def test_capture_without_opencv(self):
        with patch.dict(sys.modules, {"cv2": None}):
            with pytest.raises(CameraAccessError):
                FridgeCamera().capture()

    def test_list_cameras(self, mock_cv2):
        """list_cameras probes indices and returns available ones."""
        caps = {}
        for i in range(10):
            m = MagicMock()
            m.isOpened.return_value = i in (0, 2)
            caps[i] = m

        mock_cv2.VideoCapture.side_effect = lambda i: caps[i]

        result = FridgeCamera.list_cameras()
        assert result == [0, 2]
        assert all(cap.release.called for cap in caps.values())


class TestCapturedImage:
    def test_to_data_url(self):
        image = CapturedImage(camera_index=0, data=b"abc", captured_at="2025-03-10T00:00:00")
        assert image.to_data_url() == "data:image/jpeg;base64,YWJj"


class TestLoadImageFile:
    def test_reads_image_as_data_url(self, tmp_path):
        img = tmp_path / "buzdolabi.png"
        img.write_bytes(b"\x89PNGfake")

        url = load_image_file(img)

        assert url.startswith("data:image/png;base64,")
        assert base64.b64decode(url.split(",", 1)[1]) == b"\x89PNGfake"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Dosya bulunamadı"):
            load_image_file(tmp_path / "yok.jpg")

    def test_rejects_non_image(self, tmp_path):
        notes = tmp_path / "notlar.txt"
        notes.write_text("süt al")
        with pytest.raises(ValueError, match="Görsel dosyası değil"):
            load_image_file(notes)

    def test_gif_file_decodes_for_gateway(self, tmp_path):
        gif = tmp_path / "buzdolabi.gif"
        gif.write_bytes(b"GIF89afake")

        url = load_image_file(gif)

        assert url.startswith("data:image/gif;base64,")
        assert decode_image(url) == b"GIF89afake"
