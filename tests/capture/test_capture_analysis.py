import base64

import cv2
import numpy as np
import pytest

from src.school_checkin.school_checkin.capture.analysis import FaceImageAnalyzer, analyze_or_placeholder, decode_image
from src.school_checkin.school_checkin.capture.camera import UploadedFrameCamera, camera_session
from src.school_checkin.school_checkin.core.constants import ANALYSIS_UNAVAILABLE_NOTE
from src.school_checkin.school_checkin.core.exceptions import AnalysisUnavailable, CameraUnavailable


def _data_uri(img, ext=".png"):
    ok, buf = cv2.imencode(ext, img)
    assert ok
    return "data:image/png;base64," + base64.b64encode(buf.tobytes()).decode("ascii")


class DeniedCamera:
    def open(self):
        raise PermissionError("camera permission denied")


def test_session_releases_stream_on_success():
    camera = UploadedFrameCamera("data:image/jpeg;base64,AAAA")

    with camera_session(camera) as stream:
        assert stream.capture() == "data:image/jpeg;base64,AAAA"

    assert camera.stream.released


def test_session_releases_stream_on_error():
    camera = UploadedFrameCamera("data:image/jpeg;base64,AAAA")

    with pytest.raises(RuntimeError):
        with camera_session(camera):
            raise RuntimeError("boom")

    assert camera.stream.released


def test_os_error_on_open_becomes_camera_unavailable():
    with pytest.raises(CameraUnavailable):
        with camera_session(DeniedCamera()):
            pass


def test_missing_frame_is_rejected():
    with pytest.raises(CameraUnavailable):
        UploadedFrameCamera("").open()


def test_decode_normalises_grayscale_and_alpha_to_bgr():
    gray = np.full((20, 20), 128, dtype=np.uint8)
    rgba = np.zeros((20, 20, 4), dtype=np.uint8)

    assert decode_image(_data_uri(gray)).shape == (20, 20, 3)
    assert decode_image(_data_uri(rgba)).shape == (20, 20, 3)


@pytest.mark.parametrize("image_ref", ["data:image/png;base64,!!!", "data:image/png;base64,aGVsbG8=", ""])
def test_decode_rejects_non_images(image_ref):
    with pytest.raises(AnalysisUnavailable):
        decode_image(image_ref)


def test_blank_photo_has_no_person():
    blank = np.zeros((120, 120, 3), dtype=np.uint8)

    assert FaceImageAnalyzer().analyze(_data_uri(blank)) == "No person visible"


def test_missing_cascade_degrades_to_placeholder():
    analyzer = FaceImageAnalyzer(cascade_path="/nonexistent/cascade.xml")
    blank = np.zeros((60, 60, 3), dtype=np.uint8)

    assert analyze_or_placeholder(analyzer, _data_uri(blank)) == ANALYSIS_UNAVAILABLE_NOTE
