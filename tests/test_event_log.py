import datetime

import pytest

from objects import event as events
from objects.event import Event, ADMIN_RESET
from objects.event_log import EventLog, MAX_RECENT_EVENTS


def test_most_recent_first_and_bounded():
    log = EventLog()
    for slot in range(25):
        log.append(events.crystal_remove(slot % 7))
        assert len(log) <= MAX_RECENT_EVENTS

    records = log.snapshot()
    assert len(records) == MAX_RECENT_EVENTS
    # slots of appends 24 down to 5; oldest five evicted
    assert [r.get('slot') for r in records] == [n % 7 for n in range(24, 4, -1)]


def test_snapshot_is_a_copy():
    log = EventLog(capacity=3)
    log.append(events.admin_hp(50))
    snap = log.snapshot()
    snap.clear()
    assert len(log) == 1

    json_snap = log.snapshot(json_friendly=True)
    json_snap[0]['hp'] = 0
    assert log.snapshot(json_friendly=True)[0]['hp'] == 50


def test_clear_empties_log():
    log = EventLog()
    log.append(events.admin_hp_damage(False))
    log.clear()
    assert log.snapshot() == []


def test_event_is_immutable():
    event = events.crystal_insert(2, 10)
    with pytest.raises(AttributeError):
        event.foo = 'bar'


def test_event_serialization():
    ts = datetime.datetime(2026, 1, 2, 3, 4, 5)
    event = Event('admin_hp_reduce', timestamp=ts, damage=5, hp=95)
    assert event.to_dict(json_friendly=True) == {
        'type': 'admin_hp_reduce',
        'damage': 5,
        'hp': 95,
        'timestamp': '2026-01-02T03:04:05',
    }
    assert event.to_dict(json_friendly=False)['timestamp'] == ts
    assert Event(ADMIN_RESET).to_dict(json_friendly=True)['type'] == 'admin_reset'


@pytest.mark.parametrize('event_type, fields', [
    ('crystal_insert', {'slot': 1}),
    ('admin_hp', {}),
    ('unknown', {}),
])
def test_event_fields_checked(event_type, fields):
    with pytest.raises(ValueError):
        Event(event_type, **fields)
