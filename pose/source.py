# pose/source.py
"""
Keypoint source backed by MediaPipe Pose.

MediaPipe reports 33 normalized landmarks; we keep the 17 that PoseNet knows
about, rename them to PoseNet part names and convert to pixel space so the
tracker and the renderer never see MediaPipe types.
"""
from typing import Optional, Sequence

import cv2

from config import (
    MODEL_COMPLEXITY, MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE, MIRROR,
)
from pose.types import PART_NAMES, Keypoint, Pose
from pose.utils import lm_xy

# PoseNet part -> MediaPipe PoseLandmark index
MP_LANDMARK_INDEX = {
    "nose": 0,
    "leftEye": 2,
    "rightEye": 5,
    "leftEar": 7,
    "rightEar": 8,
    "leftShoulder": 11,
    "rightShoulder": 12,
    "leftElbow": 13,
    "rightElbow": 14,
    "leftWrist": 15,
    "rightWrist": 16,
    "leftHip": 23,
    "rightHip": 24,
    "leftKnee": 25,
    "rightKnee": 26,
    "leftAnkle": 27,
    "rightAnkle": 28,
}


def landmarks_to_pose(landmarks: Sequence, w: int, h: int, flip_horizontal: bool = False) -> Optional[Pose]:
    """
    landmarks: MediaPipe NormalizedLandmark 列表（需要 .x .y .visibility）
    flip_horizontal: 只翻转坐标，不交换左右标签（与 PoseNet flipHorizontal 一致）
    """
    keypoints = []
    for part in PART_NAMES:
        idx = MP_LANDMARK_INDEX[part]
        if idx >= len(landmarks):
            continue
        lm = landmarks[idx]
        px = lm_xy(lm, w, h)
        x, y = float(px[0]), float(px[1])
        if flip_horizontal:
            x = w - x
        score = float(getattr(lm, "visibility", 0.0) or 0.0)
        keypoints.append(Keypoint(part=part, x=x, y=y, score=score))

    if not keypoints:
        return None
    score = sum(kp.score for kp in keypoints) / len(keypoints)
    return Pose(score=score, keypoints=tuple(keypoints))


class MediaPipePoseSource:
    def __init__(self,
                 model_complexity: int = MODEL_COMPLEXITY,
                 min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
                 min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
                 flip_horizontal: bool = MIRROR):
        try:
            import mediapipe as mp
        except ImportError as e:
            raise RuntimeError("MediaPipe is not installed. Install it with: pip install mediapipe") from e

        self.model_complexity = int(model_complexity)
        self.flip_horizontal = flip_horizontal
        self.last_result = None

        self.mp = mp
        self._pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=self.model_complexity,
            enable_segmentation=False,
            smooth_landmarks=True,
            min_detection_confidence=float(min_detection_confidence),
            min_tracking_confidence=float(min_tracking_confidence),
        )

    def estimate(self, bgr) -> Optional[Pose]:
        # 模型看到的是未翻转的画面，左右标签保持解剖学意义
        h, w = bgr.shape[:2]
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
        self.last_result = self._pose.process(rgb)
        if not self.last_result or not self.last_result.pose_landmarks:
            return None
        return landmarks_to_pose(self.last_result.pose_landmarks.landmark, w, h, self.flip_horizontal)

    def close(self):
        if self._pose is not None:
            self._pose.close()
            self._pose = None
