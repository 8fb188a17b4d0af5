# pose/tracker.py
from typing import Iterable, Optional, Tuple

from config import (
    MIN_PART_CONFIDENCE, SELECTED_HAND,
    X_OFFSET, Y_OFFSET, CLEAR_EVERY,
)
from pose.types import (
    LEFT, RIGHT, BOTH, SIDES, HANDS, WRIST_PARTS,
    Keypoint, Pose, TrackedPair, GestureEvent, TickResult,
)


def check_hand(hand: str) -> str:
    if hand not in HANDS:
        raise ValueError(f"selected hand must be one of {HANDS}, got {hand!r}")
    return hand


def side_delta(side: str, last: Keypoint, current: Keypoint,
               x_offset: float = 0, y_offset: float = 0) -> GestureEvent:
    """
    左右手的符号约定不同（镜像操作）：
      left : dx = current - last，位置取 current
      right: dx = last - current，位置取 last
    """
    if side == LEFT:
        dx = current.x - last.x
        dy = current.y - last.y
        anchor = current
    elif side == RIGHT:
        dx = last.x - current.x
        dy = last.y - current.y
        anchor = last
    else:
        raise ValueError(f"unknown side: {side!r}")
    return GestureEvent(dx=dx, dy=dy, x=anchor.x + x_offset, y=anchor.y + y_offset, side=side)


class GestureTracker:
    """
    Turns wrist motion into drag events, one frame at a time.

    Holds the last qualifying wrist of each side (the rolling baseline) and a
    counter of emitted events; once the counter reaches ``clear_every`` the
    next processed frame asks the renderer to wipe the trail surface.
    """

    def __init__(self,
                 min_part_confidence: float = MIN_PART_CONFIDENCE,
                 selected_hand: str = SELECTED_HAND,
                 x_offset: float = X_OFFSET,
                 y_offset: float = Y_OFFSET,
                 clear_every: int = CLEAR_EVERY):
        self.min_part_confidence = min_part_confidence
        self.selected_hand = check_hand(selected_hand)
        self.x_offset = x_offset
        self.y_offset = y_offset
        self.clear_every = clear_every

        self.last_pair: Optional[TrackedPair] = None
        self.action_count = 0

    def set_hand(self, hand: str):
        self.selected_hand = check_hand(hand)

    def sides(self) -> Tuple[str, ...]:
        if self.selected_hand == BOTH:
            return SIDES
        return (self.selected_hand,)

    def clear(self):
        self.last_pair = None
        self.action_count = 0

    def select_pair(self, keypoints: Iterable[Keypoint]) -> TrackedPair:
        pair = TrackedPair()
        for kp in keypoints:
            for side, part in WRIST_PARTS.items():
                if kp.part == part and kp.score > self.min_part_confidence and pair.get(side) is None:
                    pair.set(side, kp)
        return pair

    def process_pose(self, pose: Pose, min_pose_confidence: float) -> TickResult:
        if pose.score < min_pose_confidence:
            return TickResult()
        return self.process(pose.keypoints)

    def process(self, keypoints: Iterable[Keypoint]) -> TickResult:
        current = self.select_pair(keypoints)
        if current.is_empty():
            return TickResult()

        if self.last_pair is None:
            # 首帧只记录 baseline，不画也不出事件
            self.last_pair = current
            return TickResult()

        result = TickResult(keypoints=current.present())

        if self.action_count >= self.clear_every:
            result.clear_surface = True
            self.action_count = 0

        for side in self.sides():
            cur = current.get(side)
            if cur is None:
                continue  # 本帧该侧丢失：不出事件，也不覆盖 baseline
            last = self.last_pair.get(side)
            if last is None:
                self.last_pair.set(side, cur)
                continue

            event = side_delta(side, last, cur, self.x_offset, self.y_offset)
            result.events.append(event)
            result.segments.append((side, last, cur))
            self.last_pair.set(side, cur)
            self.action_count += 1

        return result
