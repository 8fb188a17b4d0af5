"""Tests for PoseDragger / PersonDragger."""

from unittest.mock import Mock

import pytest

from pose.dispatcher import PoseDragger, PersonDragger
from pose.types import VALUE_UPDATE


class TestPoseDragger:
    def test_fire_passes_positional_args(self):
        dragger = PoseDragger("right")
        handler = Mock()
        dragger.on(VALUE_UPDATE, handler)

        assert dragger.fire(VALUE_UPDATE, [10, 0, 200, 150, None, "right"]) is True
        handler.assert_called_once_with(10, 0, 200, 150, None, "right")

    def test_last_registration_wins(self):
        dragger = PoseDragger()
        first, second = Mock(), Mock()
        dragger.on("startDrag", first)
        dragger.on("startDrag", second)

        dragger.fire("startDrag", [])

        first.assert_not_called()
        second.assert_called_once_with()

    def test_unregistered_event_is_noop(self):
        dragger = PoseDragger()
        assert dragger.fire("nothing", [1, 2]) is False

    def test_off_removes_handler(self):
        dragger = PoseDragger()
        handler = Mock()
        dragger.on_value_update(handler)
        assert dragger.has(VALUE_UPDATE)

        dragger.off(VALUE_UPDATE)
        dragger.off(VALUE_UPDATE)

        assert dragger.fire(VALUE_UPDATE, [1]) is False
        handler.assert_not_called()

    def test_handler_errors_propagate(self):
        dragger = PoseDragger()
        dragger.on("boom", Mock(side_effect=RuntimeError("bad handler")))

        with pytest.raises(RuntimeError):
            dragger.fire("boom")


class TestPersonDragger:
    def test_sides_are_independent(self):
        person = PersonDragger()
        left, right = Mock(), Mock()
        person.left.on_value_update(left)
        person.right.on_value_update(right)

        person.fire("left", VALUE_UPDATE, [1, 2, 3, 4, None, "left"])

        left.assert_called_once_with(1, 2, 3, 4, None, "left")
        right.assert_not_called()

    def test_side_lookup(self):
        person = PersonDragger()
        assert person.side("left") is person.left
        assert person.side("right") is person.right
        assert person.right.side == "right"

    def test_unknown_side_raises(self):
        with pytest.raises(ValueError):
            PersonDragger().side("both")
