import datetime
from typing import Optional

CRYSTAL_INSERT = 'crystal_insert'
CRYSTAL_REMOVE = 'crystal_remove'
ADMIN_HP = 'admin_hp'
ADMIN_HP_REDUCE = 'admin_hp_reduce'
ADMIN_HP_DAMAGE = 'admin_hp_damage'
ADMIN_RESET = 'admin_reset'

EVENT_FIELDS = {
    CRYSTAL_INSERT: ('slot', 'damage'),
    CRYSTAL_REMOVE: ('slot',),
    ADMIN_HP: ('hp',),
    ADMIN_HP_REDUCE: ('damage', 'hp'),
    ADMIN_HP_DAMAGE: ('enabled',),
    ADMIN_RESET: (),
}

class Event:
    """A single occurrence kept in the recent events log.

    Fields are fixed by ``EVENT_FIELDS`` for each event type and the record
    is read-only once built. ``admin_reset`` is reserved: a reset clears the
    log to empty, so nothing records it today.
    """

    __slots__ = ('_type', '_data', '_timestamp')

    def __init__(self, event_type: str, timestamp: Optional[datetime.datetime] = None, **data) -> None:
        if event_type not in EVENT_FIELDS:
            raise ValueError(f'Unknown event type \'{event_type}\'')
        expected = set(EVENT_FIELDS[event_type])
        if set(data.keys()) != expected:
            raise ValueError(f'Event \'{event_type}\' needs fields {sorted(expected)}, got {sorted(data.keys())}')

        object.__setattr__(self, '_type', event_type)
        object.__setattr__(self, '_data', dict(data))
        object.__setattr__(self, '_timestamp', timestamp or datetime.datetime.now())

    def __setattr__(self, name, value):
        raise AttributeError('Event records are immutable')

    @property
    def type(self) -> str:
        return self._type

    @property
    def timestamp(self) -> datetime.datetime:
        return self._timestamp

    def get(self, field: str):
        return self._data.get(field)

    def __repr__(self) -> str:
        return f'Event({self._type}, {self._data})'

    def to_dict(self, json_friendly: bool) -> dict:
        event_obj = {'type': self._type}
        event_obj.update(self._data)
        event_obj['timestamp'] = self._timestamp.isoformat() if json_friendly else self._timestamp
        return event_obj

def crystal_insert(slot: int, damage: int) -> Event:
    return Event(CRYSTAL_INSERT, slot=slot, damage=damage)

def crystal_remove(slot: int) -> Event:
    return Event(CRYSTAL_REMOVE, slot=slot)

def admin_hp(hp: int) -> Event:
    return Event(ADMIN_HP, hp=hp)

def admin_hp_reduce(damage: int, hp: int) -> Event:
    return Event(ADMIN_HP_REDUCE, damage=damage, hp=hp)

def admin_hp_damage(enabled: bool) -> Event:
    return Event(ADMIN_HP_DAMAGE, enabled=enabled)
