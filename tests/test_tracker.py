"""Tests for GestureTracker (wrist selection, deltas, baselines, clear policy)."""

import pytest

from pose.tracker import GestureTracker, side_delta
from pose.types import Keypoint, Pose, GestureEvent


def L(x, y, score=0.9):
    return Keypoint("leftWrist", x, y, score)


def R(x, y, score=0.9):
    return Keypoint("rightWrist", x, y, score)


def make_tracker(hand="right", **kwargs):
    kwargs.setdefault("min_part_confidence", 0.1)
    kwargs.setdefault("x_offset", 0)
    kwargs.setdefault("y_offset", 0)
    kwargs.setdefault("clear_every", 2)
    return GestureTracker(selected_hand=hand, **kwargs)


class TestSelectPair:
    def test_picks_wrists_above_threshold(self):
        tracker = make_tracker()
        nose = Keypoint("nose", 1, 1, 0.99)
        pair = tracker.select_pair([nose, L(1, 2), R(3, 4)])
        assert pair.left == L(1, 2)
        assert pair.right == R(3, 4)

    def test_score_equal_to_threshold_is_absent(self):
        tracker = make_tracker(min_part_confidence=0.5)
        pair = tracker.select_pair([L(1, 2, score=0.5)])
        assert pair.left is None
        assert pair.is_empty()

    def test_first_qualifying_match_wins(self):
        tracker = make_tracker(min_part_confidence=0.5)
        pair = tracker.select_pair([L(1, 1, score=0.2), L(2, 2, score=0.8), L(3, 3, score=0.9)])
        assert pair.left == L(2, 2, score=0.8)


class TestFirstFrame:
    def test_first_frame_records_pair_without_event(self):
        tracker = make_tracker("left")
        result = tracker.process([L(100, 100)])

        assert result.events == []
        assert result.keypoints == []
        assert tracker.last_pair is not None
        assert tracker.last_pair.left == L(100, 100)
        assert tracker.action_count == 0

    def test_frame_without_wrists_changes_nothing(self):
        tracker = make_tracker("left")
        result = tracker.process([Keypoint("nose", 5, 5, 0.9), L(1, 1, score=0.05)])

        assert result.events == []
        assert result.keypoints == []
        assert tracker.last_pair is None


class TestDeltas:
    def test_left_uses_current_minus_last(self):
        tracker = make_tracker("left")
        tracker.process([L(100, 100)])
        result = tracker.process([L(110, 95)])

        assert result.events == [GestureEvent(dx=10, dy=-5, x=110, y=95, side="left")]

    def test_right_uses_last_minus_current_and_last_position(self):
        tracker = make_tracker("right")
        tracker.process([R(200, 150)])
        result = tracker.process([R(190, 150)])

        assert result.events == [GestureEvent(dx=10, dy=0, x=200, y=150, side="right")]

    def test_offset_applied_to_position(self):
        tracker = make_tracker("left", x_offset=5, y_offset=7)
        tracker.process([L(100, 100)])
        event = tracker.process([L(110, 95)]).events[0]

        assert (event.x, event.y) == (115, 102)
        assert (event.dx, event.dy) == (10, -5)

    def test_baseline_rolls_forward(self):
        tracker = make_tracker("left")
        tracker.process([L(0, 0)])
        tracker.process([L(10, 0)])
        event = tracker.process([L(15, 0)]).events[0]

        assert event.dx == 5
        assert tracker.last_pair.left == L(15, 0)

    def test_segments_record_last_and_current(self):
        tracker = make_tracker("left")
        tracker.process([L(0, 0)])
        result = tracker.process([L(3, 4)])

        assert result.segments == [("left", L(0, 0), L(3, 4))]
        assert result.keypoints == [L(3, 4)]

    def test_event_args_order(self):
        event = side_delta("left", L(0, 0), L(3, 4), 1, 2)
        assert event.args() == [3, 4, 4, 6, None, "left"]

    def test_unknown_side_raises(self):
        with pytest.raises(ValueError):
            side_delta("middle", L(0, 0), L(1, 1))


class TestHandSelection:
    def test_unselected_side_produces_no_event(self):
        tracker = make_tracker("right")
        tracker.process([L(0, 0), R(0, 0)])
        result = tracker.process([L(10, 10), R(0, 0)])

        assert [e.side for e in result.events] == ["right"]

    def test_both_hands_emit_left_then_right(self):
        tracker = make_tracker("both")
        tracker.process([L(0, 0), R(50, 50)])
        result = tracker.process([L(1, 2), R(40, 45)])

        assert [e.side for e in result.events] == ["left", "right"]
        assert (result.events[1].dx, result.events[1].dy) == (10, 5)
        assert tracker.action_count == 2

    def test_invalid_hand_rejected(self):
        with pytest.raises(ValueError):
            make_tracker("foot")
        tracker = make_tracker("left")
        with pytest.raises(ValueError):
            tracker.set_hand("middle")
        assert tracker.selected_hand == "left"


class TestMissingKeypoints:
    def test_absent_side_keeps_baseline(self):
        tracker = make_tracker("both")
        tracker.process([L(0, 0), R(0, 0)])
        result = tracker.process([L(5, 0)])

        assert [e.side for e in result.events] == ["left"]
        assert tracker.last_pair.right == R(0, 0)

    def test_baseline_established_on_first_appearance(self):
        tracker = make_tracker("both")
        tracker.process([L(0, 0)])
        result = tracker.process([L(1, 0), R(100, 100)])

        assert [e.side for e in result.events] == ["left"]
        assert tracker.last_pair.right == R(100, 100)

        result = tracker.process([L(2, 0), R(90, 100)])
        assert [e.side for e in result.events] == ["left", "right"]

    def test_reappearance_jumps_from_stale_position(self):
        tracker = make_tracker("right")
        tracker.process([R(100, 100)])
        assert tracker.process([L(0, 0)]).events == []
        event = tracker.process([R(300, 100)]).events[0]

        assert event.dx == -200
        assert event.x == 100


class TestClearPolicy:
    def test_clear_after_two_events(self):
        tracker = make_tracker("right")
        tracker.process([R(0, 0)])
        assert tracker.process([R(1, 0)]).clear_surface is False
        assert tracker.process([R(2, 0)]).clear_surface is False
        assert tracker.action_count == 2

        result = tracker.process([R(3, 0)])
        assert result.clear_surface is True
        assert tracker.action_count == 1

    def test_clear_resets_counter_even_without_event(self):
        tracker = make_tracker("right")
        tracker.process([R(0, 0)])
        tracker.process([R(1, 0)])
        tracker.process([R(2, 0)])

        result = tracker.process([L(5, 5)])
        assert result.clear_surface is True
        assert result.events == []
        assert tracker.action_count == 0

    def test_frame_without_wrists_does_not_clear(self):
        tracker = make_tracker("right")
        tracker.process([R(0, 0)])
        tracker.process([R(1, 0)])
        tracker.process([R(2, 0)])

        result = tracker.process([])
        assert result.clear_surface is False
        assert tracker.action_count == 2

    def test_explicit_clear_forgets_last_pair(self):
        tracker = make_tracker("right")
        tracker.process([R(0, 0)])
        tracker.process([R(1, 0)])
        tracker.clear()

        assert tracker.last_pair is None
        assert tracker.action_count == 0
        assert tracker.process([R(50, 0)]).events == []


class TestProcessPose:
    def test_low_confidence_pose_skipped(self):
        tracker = make_tracker("right")
        result = tracker.process_pose(Pose(score=0.2, keypoints=(R(0, 0),)), min_pose_confidence=0.5)

        assert result.events == []
        assert tracker.last_pair is None

    def test_confident_pose_processed(self):
        tracker = make_tracker("right")
        tracker.process_pose(Pose(score=0.8, keypoints=(R(10, 10),)), 0.5)
        result = tracker.process_pose(Pose(score=0.8, keypoints=(R(4, 10),)), 0.5)

        assert result.events[0].dx == 6
