import datetime
from typing import Optional

VIEW_BOSS = 'boss'
VIEW_ADMIN = 'admin'

class Observer:
    def __init__(self, sid: str, view: Optional[str] = None) -> None:
        self.sid: str = sid
        self.view: str | None = view
        self.connected: datetime = datetime.datetime.now()
        self.last_push: datetime | None = None
        self.push_count: int = 0

    def mark_pushed(self) -> None:
        self.last_push = datetime.datetime.now()
        self.push_count += 1

    def to_dict(self, json_friendly: bool):
        observer_obj = {
            'sid': self.sid,
            'view': self.view,
            'connected': self.connected.isoformat() if json_friendly else self.connected,
            'lastPush': (self.last_push.isoformat() if json_friendly and self.last_push else self.last_push),
            'pushCount': self.push_count
        }
        return observer_obj
