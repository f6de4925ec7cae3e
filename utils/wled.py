import enum
import asyncio
import logging
from typing import List, Optional, Sequence, Set

import aiohttp

from objects.game_state import SLOT_COUNT

WLED_STATE_PATH = '/json/state'
WLED_TIMEOUT_SECONDS = 5

FILLED_FX = 2  # Breathe
FILLED_COLOR = [0, 180, 255]
CLEARED_FX = 0  # Solid
CLEARED_COLOR = [0, 0, 0]

TIER_HIGH_BRIGHTNESS = 200
TIER_MID_BRIGHTNESS = 220
TIER_LOW_BRIGHTNESS = 255

log = logging.getLogger(__name__)

class LightingState(enum.Enum):
    UNINITIALIZED = 'uninitialized'
    READY = 'ready'

class WLEDDriver:
    """
    Drives a WLED strip split into one segment per crystal slot.

    Every public method returns immediately; the HTTP calls run as background
    tasks and failures are only logged. With an empty base URL every method
    is a no-op.

    Segment layout is set up once per process, on the first slot update:
    segment 0 is shrunk to the first unit, then one segment is created for
    each remaining unit. WLED does not accept both changes in one request.

    Slot batches go out one at a time. A batch still waiting for its turn
    sends whatever slots are newest when it runs, so the strip never ends on
    a stale report.
    """

    def __init__(self,
                 base_url: str,
                 leds_per_slot: int,
                 slot_count: int = SLOT_COUNT,
                 timeout: float = WLED_TIMEOUT_SECONDS) -> None:
        self._base_url = (base_url or '').rstrip('/')
        self._leds_per_slot = leds_per_slot
        self._slot_count = slot_count
        self._timeout = timeout
        self._state = LightingState.UNINITIALIZED
        self._init_task: Optional[asyncio.Task] = None
        self._slot_lock = asyncio.Lock()
        self._pending_slots: Optional[List[bool]] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self._base_url != ''

    @property
    def state(self) -> LightingState:
        return self._state

    @property
    def state_url(self) -> str:
        return f'{self._base_url}{WLED_STATE_PATH}'

    def shrink_first_segment_command(self) -> dict:
        return {'seg': [{'id': 0, 'start': 0, 'stop': self._leds_per_slot}]}

    def create_segments_command(self) -> dict:
        n = self._leds_per_slot
        return {'seg': [{'id': i, 'start': i * n, 'stop': (i + 1) * n}
                        for i in range(1, self._slot_count)]}

    def slot_command(self, slots: Sequence[bool]) -> dict:
        segments = []
        for index, occupied in enumerate(slots):
            if occupied:
                segments.append({'id': index, 'on': True, 'fx': FILLED_FX, 'col': [list(FILLED_COLOR)]})
            else:
                segments.append({'id': index, 'on': True, 'fx': CLEARED_FX, 'col': [list(CLEARED_COLOR)]})
        return {'on': True, 'seg': segments}

    @staticmethod
    def hp_tier_command(boss_hp: int, max_hp: int, game_over: bool) -> dict:
        pct = (boss_hp / max_hp) * 100 if max_hp else 0
        if game_over or boss_hp <= 0:
            brightness = TIER_LOW_BRIGHTNESS
        elif pct > 66:
            brightness = TIER_HIGH_BRIGHTNESS
        elif pct > 33:
            brightness = TIER_MID_BRIGHTNESS
        else:
            brightness = TIER_LOW_BRIGHTNESS
        return {'on': True, 'bri': brightness}

    async def post_state(self, body: dict) -> bool:
        """POSTs ``body`` to the device. Returns True on a 2xx response."""
        try:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.state_url, json=body) as response:
                    if 200 <= response.status < 300:
                        log.debug(f'WLED response status: {response.status}')
                        return True
                    log.warning(f'WLED request failed: {response.status}')
                    return False
        except asyncio.TimeoutError:
            log.warning(f'WLED request to {self.state_url} timed out after {self._timeout}s, abandoned.')
        except aiohttp.ClientError as e:
            log.warning(f'WLED error: {e}')
        return False

    async def _initialize_segments(self) -> None:
        log.info(f'Initializing WLED segments ({self._slot_count} x {self._leds_per_slot} LEDs)...')
        await self.post_state(self.shrink_first_segment_command())
        # Runs after step 1 regardless of its outcome
        await self.post_state(self.create_segments_command())
        self._state = LightingState.READY
        log.info('WLED segments ready.')

    async def ensure_ready(self) -> None:
        if self._state is LightingState.READY:
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize_segments())
        await self._init_task

    async def _flush_slots(self) -> None:
        await self.ensure_ready()
        async with self._slot_lock:
            # A newer update may already have sent the latest slots
            slots = self._pending_slots
            if slots is None:
                return
            self._pending_slots = None
            await self.post_state(self.slot_command(slots))

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def update_slots(self, slots: Sequence[bool]) -> None:
        if not self.enabled:
            return
        self._pending_slots = list(slots)
        self._spawn(self._flush_slots())

    def update_hp_tier(self, boss_hp: int, max_hp: int, game_over: bool) -> None:
        if not self.enabled:
            return
        self._spawn(self.post_state(self.hp_tier_command(boss_hp, max_hp, game_over)))

    def send_raw(self, body: dict) -> None:
        if not self.enabled:
            return
        log.info('Sending manual WLED override.')
        self._spawn(self.post_state(body))

    async def close(self) -> None:
        """Waits for in-flight requests; each is bounded by the timeout."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
