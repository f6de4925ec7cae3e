from collections import deque
from typing import Deque, List, Union

from objects.event import Event

MAX_RECENT_EVENTS = 20

class EventLog:
    """Most-recent-first log of events, bounded to ``capacity`` entries."""

    def __init__(self, capacity: int = MAX_RECENT_EVENTS) -> None:
        if capacity <= 0:
            raise ValueError('capacity must be positive')
        self._capacity = capacity
        self._events: Deque[Event] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._events)

    def append(self, event: Event) -> None:
        # appendleft on a bounded deque drops the oldest entry from the right
        self._events.appendleft(event)

    def clear(self) -> None:
        self._events.clear()

    def snapshot(self, json_friendly: bool = False) -> List[Union[Event, dict]]:
        if json_friendly:
            return [event.to_dict(json_friendly=True) for event in self._events]
        return list(self._events)
