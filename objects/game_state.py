from typing import List

from objects.event import Event
from objects.event_log import EventLog, MAX_RECENT_EVENTS

SLOT_COUNT = 7

class GameState:
    def __init__(self, max_hp: int, hp_per_crystal: int, max_recent_events: int = MAX_RECENT_EVENTS) -> None:
        self.max_hp: int = max_hp
        self.hp_per_crystal: int = hp_per_crystal
        self.boss_hp: int = max_hp
        self.slots: List[bool] = [False] * SLOT_COUNT
        self.crystal_count: int = 0
        self.total_crystals_received: int = 0
        self.hp_damage_enabled: bool = True
        self.game_over: bool = False
        self.recent_events = EventLog(max_recent_events)

    def add_event(self, event: Event) -> None:
        self.recent_events.append(event)

    def hp_from_occupancy(self) -> int:
        return max(0, self.max_hp - self.crystal_count * self.hp_per_crystal)

    def update_game_over(self) -> None:
        self.game_over = self.boss_hp == 0

    def to_dict(self) -> dict:
        return {
            'bossHp': self.boss_hp,
            'maxHp': self.max_hp,
            'slots': list(self.slots),
            'crystalCount': self.crystal_count,
            'totalCrystalsReceived': self.total_crystals_received,
            'recentEvents': self.recent_events.snapshot(json_friendly=True),
            'gameOver': self.game_over,
            'hpDamageEnabled': self.hp_damage_enabled
        }
