import asyncio
from typing import Dict, List, Optional

from objects.observer import Observer

class Observers:
    def __init__(self) -> None:
        self._observers: Dict[str, Observer] = {}
        self._lock = asyncio.Lock()

    async def add_observer(self, sid: str, view: Optional[str] = None) -> Observer:
        async with self._lock:
            observer = Observer(sid, view)
            self._observers[sid] = observer
            return observer

    async def remove_observer(self, sid: str) -> Optional[Observer]:
        async with self._lock:
            return self._observers.pop(sid, None)

    async def get_observer(self, sid: str) -> Optional[Observer]:
        async with self._lock:
            return self._observers.get(sid)

    async def mark_pushed(self, sid: Optional[str] = None) -> None:
        """Records a push to ``sid``, or to every observer when ``sid`` is None."""
        async with self._lock:
            if sid is None:
                for observer in self._observers.values():
                    observer.mark_pushed()
            elif sid in self._observers:
                self._observers[sid].mark_pushed()

    async def get_observer_list(self, json_friendly: bool) -> List:
        async with self._lock:
            if json_friendly:
                return [observer.to_dict(json_friendly) for observer in self._observers.values()]
            return list(self._observers.values())

    def count(self) -> int:
        return len(self._observers)
