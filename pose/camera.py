# pose/camera.py
from typing import Iterator, Optional, Tuple
import cv2

from config import CAM_INDEX_CANDIDATES, CAP_BACKENDS, VIDEO_W, VIDEO_H


def resolve_backend(name: Optional[str]):
    """backend 名称 -> cv2 常量；None 为默认后端；当前平台不支持时返回 -1"""
    if name is None:
        return None
    return getattr(cv2, f"CAP_{name}", -1)


def camera_candidates() -> Iterator[Tuple[int, str, Optional[int]]]:
    """(index, backend 名称, cv2 常量)，跳过本平台没有的 backend"""
    for idx in CAM_INDEX_CANDIDATES:
        for name in CAP_BACKENDS:
            backend = resolve_backend(name)
            if backend != -1:
                yield idx, name or "DEFAULT", backend


def open_capture(idx: int, backend: Optional[int]) -> Optional[cv2.VideoCapture]:
    cap = cv2.VideoCapture(idx) if backend is None else cv2.VideoCapture(idx, backend)
    if cap is None:
        return None
    if not cap.isOpened():
        cap.release()
        return None
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, VIDEO_W)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, VIDEO_H)
    return cap


def try_open_camera() -> Tuple[Optional[cv2.VideoCapture], str]:
    """Open the first camera that works; returns (cap, info) or (None, "CAMERA_OPEN_FAILED")."""
    for idx, name, backend in camera_candidates():
        cap = open_capture(idx, backend)
        if cap is not None:
            return cap, f"CAM idx={idx}, backend={name}"
    return None, "CAMERA_OPEN_FAILED"
