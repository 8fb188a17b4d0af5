# pose/dispatcher.py
from typing import Callable, Dict, Iterable

from pose.types import LEFT, RIGHT, SIDES, VALUE_UPDATE


class PoseDragger:
    """
    单侧（左手或右手）的事件表：每个事件名只保留一个 handler，后注册的覆盖前面的
    """

    def __init__(self, side: str = ""):
        self.side = side
        self.events: Dict[str, Callable] = {}

    def on(self, event: str, handler: Callable):
        self.events[event] = handler

    def off(self, event: str):
        self.events.pop(event, None)

    def on_value_update(self, handler: Callable):
        """handler(dx, dy, x, y, extra, side)"""
        self.on(VALUE_UPDATE, handler)

    def has(self, event: str) -> bool:
        return event in self.events

    def fire(self, event: str, args: Iterable = ()) -> bool:
        """返回 True：有 handler 被调用；未注册的事件直接忽略"""
        handler = self.events.get(event)
        if handler is None:
            return False
        handler(*args)
        return True


class PersonDragger:
    def __init__(self):
        self.left = PoseDragger(LEFT)
        self.right = PoseDragger(RIGHT)

    def side(self, name: str) -> PoseDragger:
        if name not in SIDES:
            raise ValueError(f"unknown side: {name!r}")
        return self.left if name == LEFT else self.right

    def fire(self, side: str, event: str, args: Iterable = ()) -> bool:
        return self.side(side).fire(event, args)
