# pose/types.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

LEFT = "left"
RIGHT = "right"
BOTH = "both"
SIDES = (LEFT, RIGHT)
HANDS = (LEFT, RIGHT, BOTH)

VALUE_UPDATE = "value-update"

# PoseNet part names, in PoseNet keypoint order
PART_NAMES = [
    "nose",
    "leftEye", "rightEye",
    "leftEar", "rightEar",
    "leftShoulder", "rightShoulder",
    "leftElbow", "rightElbow",
    "leftWrist", "rightWrist",
    "leftHip", "rightHip",
    "leftKnee", "rightKnee",
    "leftAnkle", "rightAnkle",
]

WRIST_PARTS = {LEFT: "leftWrist", RIGHT: "rightWrist"}


@dataclass(frozen=True)
class Keypoint:
    part: str
    x: float
    y: float
    score: float

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class Pose:
    score: float
    keypoints: Tuple[Keypoint, ...] = ()

    def find(self, part: str) -> Optional[Keypoint]:
        for kp in self.keypoints:
            if kp.part == part:
                return kp
        return None


@dataclass
class TrackedPair:
    left: Optional[Keypoint] = None
    right: Optional[Keypoint] = None

    def get(self, side: str) -> Optional[Keypoint]:
        return getattr(self, side)

    def set(self, side: str, kp: Optional[Keypoint]):
        setattr(self, side, kp)

    def is_empty(self) -> bool:
        return self.left is None and self.right is None

    def present(self) -> List[Keypoint]:
        return [kp for kp in (self.left, self.right) if kp is not None]


@dataclass(frozen=True)
class GestureEvent:
    dx: float
    dy: float
    x: float
    y: float
    side: str

    def args(self) -> list:
        """Positional payload for value-update subscribers."""
        return [self.dx, self.dy, self.x, self.y, None, self.side]


@dataclass
class TickResult:
    events: List[GestureEvent] = field(default_factory=list)
    keypoints: List[Keypoint] = field(default_factory=list)   # qualifying wrists this frame
    segments: List[Tuple[str, Keypoint, Keypoint]] = field(default_factory=list)  # (side, last, current)
    clear_surface: bool = False


@dataclass
class PoseState:
    pose: Optional[Pose] = None
    frame_id: int = 0
    label: str = "INIT"
    cam_info: str = ""
    fps: float = 0.0
    model_complexity: int = 1
