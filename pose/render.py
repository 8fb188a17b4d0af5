# pose/render.py
from typing import Iterable, Sequence

import pygame

from config import (
    MIN_PART_CONFIDENCE, MINI_SCALE, WRIST_RADIUS,
    LEFT_TRAIL_COLOR, RIGHT_TRAIL_COLOR,
    KEYPOINT_COLOR, SKELETON_COLOR, BOX_COLOR,
)
from pose.types import LEFT, RIGHT, Keypoint, TickResult
from pose.utils import bounding_box

# PoseNet 相邻关节，用于画骨架
CONNECTED_PARTS = [
    ("leftHip", "leftShoulder"), ("leftElbow", "leftShoulder"),
    ("leftElbow", "leftWrist"), ("leftHip", "leftKnee"),
    ("leftKnee", "leftAnkle"), ("rightHip", "rightShoulder"),
    ("rightElbow", "rightShoulder"), ("rightElbow", "rightWrist"),
    ("rightHip", "rightKnee"), ("rightKnee", "rightAnkle"),
    ("leftShoulder", "rightShoulder"), ("leftHip", "rightHip"),
]

TRAIL_COLORS = {LEFT: LEFT_TRAIL_COLOR, RIGHT: RIGHT_TRAIL_COLOR}


def _pt(kp: Keypoint, scale: float = 1.0, origin=(0, 0)):
    return int(origin[0] + kp.x * scale), int(origin[1] + kp.y * scale)


def adjacent_keypoints(keypoints: Sequence[Keypoint], min_confidence: float):
    by_part = {kp.part: kp for kp in keypoints}
    pairs = []
    for a, b in CONNECTED_PARTS:
        ka, kb = by_part.get(a), by_part.get(b)
        if ka is None or kb is None:
            continue
        if ka.score < min_confidence or kb.score < min_confidence:
            continue
        pairs.append((ka, kb))
    return pairs


def draw_keypoints(surface, keypoints: Iterable[Keypoint], min_confidence: float = MIN_PART_CONFIDENCE,
                   scale: float = 1.0, radius: int = 3, color=KEYPOINT_COLOR, origin=(0, 0)):
    for kp in keypoints:
        if kp.score < min_confidence:
            continue
        pygame.draw.circle(surface, color, _pt(kp, scale, origin), radius)


def draw_skeleton(surface, keypoints: Sequence[Keypoint], min_confidence: float = MIN_PART_CONFIDENCE,
                  scale: float = 1.0, color=SKELETON_COLOR, width: int = 2, origin=(0, 0)):
    for ka, kb in adjacent_keypoints(keypoints, min_confidence):
        pygame.draw.line(surface, color, _pt(ka, scale, origin), _pt(kb, scale, origin), width)


def draw_bounding_box(surface, keypoints: Sequence[Keypoint], color=BOX_COLOR):
    box = bounding_box(keypoints)
    if box is None:
        return
    x0, y0, x1, y1 = box
    pygame.draw.rect(surface, color, pygame.Rect(int(x0), int(y0), int(x1 - x0), int(y1 - y0)), 1)


def draw_segment(surface, a: Keypoint, b: Keypoint, color, width: int = 1):
    pygame.draw.line(surface, color, _pt(a), _pt(b), width)


def draw_tick(surface, result: TickResult):
    """
    在累积画布上画一帧的手势：clear_surface 时先清空，
    然后画出手腕点与 last -> current 轨迹
    """
    if result.clear_surface:
        surface.fill((0, 0, 0, 0))
    draw_keypoints(surface, result.keypoints, radius=WRIST_RADIUS)
    for side, last, current in result.segments:
        draw_segment(surface, last, current, TRAIL_COLORS[side])


def draw_mini(surface, keypoints: Sequence[Keypoint], origin, min_confidence: float = MIN_PART_CONFIDENCE,
              scale: float = MINI_SCALE):
    draw_keypoints(surface, keypoints, min_confidence, scale=scale, radius=2, origin=origin)
    draw_skeleton(surface, keypoints, min_confidence, scale=scale, width=1, origin=origin)
