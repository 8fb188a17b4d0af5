# pose/session.py
from typing import Optional

from config import MIN_POSE_CONFIDENCE
from pose.dispatcher import PersonDragger
from pose.tracker import GestureTracker
from pose.types import VALUE_UPDATE, Pose, TickResult


class DragSession:
    """One tracker + one person dragger; ticked once per new pose frame."""

    def __init__(self,
                 tracker: Optional[GestureTracker] = None,
                 dragger: Optional[PersonDragger] = None,
                 min_pose_confidence: float = MIN_POSE_CONFIDENCE):
        self.tracker = tracker if tracker is not None else GestureTracker()
        self.dragger = dragger if dragger is not None else PersonDragger()
        self.min_pose_confidence = min_pose_confidence
        self.event_count = 0
        self.last_frame_id = 0

    def is_new_frame(self, frame_id: int) -> bool:
        """worker 每发布一帧 frame_id +1；同一帧只 tick 一次"""
        if frame_id == self.last_frame_id:
            return False
        self.last_frame_id = frame_id
        return True

    def is_confident(self, pose: Optional[Pose]) -> bool:
        return pose is not None and pose.score >= self.min_pose_confidence

    def tick(self, pose: Optional[Pose]) -> TickResult:
        if pose is None:
            return TickResult()

        result = self.tracker.process_pose(pose, self.min_pose_confidence)
        for event in result.events:
            self.dragger.fire(event.side, VALUE_UPDATE, event.args())
            self.event_count += 1
        return result

    def clear(self):
        self.tracker.clear()
