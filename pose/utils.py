# pose/utils.py
from typing import Iterable, Optional, Tuple

import numpy as np

from pose.types import Keypoint


def lm_xy(lm, w, h):
    return np.array([lm.x * w, lm.y * h], dtype=np.float32)

def dist(a, b) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=np.float32) - np.asarray(b, dtype=np.float32)))

def calc_distance(p1: Keypoint, p2: Keypoint) -> float:
    return dist(p1.position, p2.position)

def bounding_box(keypoints: Iterable[Keypoint]) -> Optional[Tuple[float, float, float, float]]:
    """返回 (min_x, min_y, max_x, max_y)，没有关键点时返回 None"""
    pts = np.array([kp.position for kp in keypoints], dtype=np.float32)
    if pts.size == 0:
        return None
    mn = pts.min(axis=0)
    mx = pts.max(axis=0)
    return float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1])

def point_segment_dist(p, a, b) -> float:
    """点 p 到线段 ab 的距离"""
    p = np.asarray(p, dtype=np.float32)
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    ab = b - a
    denom = float(np.dot(ab, ab))
    if denom <= 1e-9:
        return dist(p, a)
    t = float(np.clip(np.dot(p - a, ab) / denom, 0.0, 1.0))
    return dist(p, a + t * ab)
