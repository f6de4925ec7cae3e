from typing import TYPE_CHECKING

import asyncio
import logging
import socketio

from utils import admin
from utils.reconciler import apply_slot_report

if TYPE_CHECKING:
    from objects.game_state import GameState
    from objects.observers import Observers
    from utils.wled import WLEDDriver

STATE_EVENT = 'state'

log = logging.getLogger(__name__)

class GameController:
    """
    Owns the game state and serializes every mutation.

    Each operation runs validate -> mutate -> record -> lighting -> broadcast
    while holding one lock, so observers receive snapshots in commit order.
    Lighting calls are scheduled in the background and never awaited here.
    """

    def __init__(self,
                 socketio_instance: socketio.AsyncServer,
                 game: 'GameState',
                 wled: 'WLEDDriver',
                 observers_instance: 'Observers'):
        self._sio = socketio_instance
        self._game = game
        self._wled = wled
        self._observers = observers_instance
        self._lock = asyncio.Lock()

    @property
    def game(self) -> 'GameState':
        return self._game

    @property
    def wled(self) -> 'WLEDDriver':
        return self._wled

    def snapshot(self) -> dict:
        return self._game.to_dict()

    async def broadcast_state(self) -> None:
        payload = self._game.to_dict()
        log.debug(f'Broadcasting state (hp: {payload["bossHp"]}, observers: {self._observers.count()}).')
        await self._sio.emit(STATE_EVENT, payload)
        await self._observers.mark_pushed()

    async def send_state(self, sid: str) -> None:
        async with self._lock:
            log.debug(f'Sending initial state to \'{sid}\'.')
            await self._sio.emit(STATE_EVENT, self._game.to_dict(), to=sid)
            await self._observers.mark_pushed(sid)

    def _update_hp_lighting(self) -> None:
        self._wled.update_hp_tier(self._game.boss_hp, self._game.max_hp, self._game.game_over)

    async def report_slots(self, slots) -> dict:
        async with self._lock:
            apply_slot_report(self._game, slots)
            self._wled.update_slots(self._game.slots)
            self._update_hp_lighting()
            await self.broadcast_state()
            return {
                'ok': True,
                'bossHp': self._game.boss_hp,
                'gameOver': self._game.game_over,
                'slots': list(self._game.slots)
            }

    async def set_hp(self, value) -> dict:
        async with self._lock:
            admin.set_hp(self._game, value)
            self._update_hp_lighting()
            await self.broadcast_state()
            return {'ok': True, 'bossHp': self._game.boss_hp}

    async def reduce_hp(self) -> dict:
        async with self._lock:
            damage = admin.reduce_hp_by_percent(self._game)
            self._update_hp_lighting()
            await self.broadcast_state()
            return {'ok': True, 'bossHp': self._game.boss_hp, 'damage': damage}

    async def set_damage_enabled(self, flag) -> dict:
        async with self._lock:
            admin.set_damage_enabled(self._game, flag)
            self._update_hp_lighting()
            await self.broadcast_state()
            return {
                'ok': True,
                'hpDamageEnabled': self._game.hp_damage_enabled,
                'bossHp': self._game.boss_hp
            }

    async def reset(self) -> dict:
        async with self._lock:
            admin.reset(self._game)
            self._wled.update_slots(self._game.slots)
            self._update_hp_lighting()
            await self.broadcast_state()
            payload = {'ok': True}
            payload.update(self._game.to_dict())
            return payload

    def override_lighting(self, body: dict) -> dict:
        self._wled.send_raw(body)
        return {'ok': True}
