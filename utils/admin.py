import math
import logging

from objects import event as events
from objects.game_state import GameState, SLOT_COUNT
from utils.errors import ValidationError

HP_REDUCE_FRACTION = 0.05

log = logging.getLogger(__name__)

def _parse_hp(value) -> float:
    # bool is an int subclass, reject it explicitly
    if value is None or isinstance(value, bool):
        raise ValidationError('Invalid hp')
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError('Invalid hp')
    if not isinstance(value, (int, float)) or math.isnan(value) or value < 0:
        raise ValidationError('Invalid hp')
    return value

def set_hp(game: GameState, value) -> int:
    hp = _parse_hp(value)
    game.boss_hp = int(math.floor(min(float(game.max_hp), hp)))
    game.update_game_over()
    game.add_event(events.admin_hp(game.boss_hp))
    log.info(f'Boss HP set to {game.boss_hp}/{game.max_hp} by admin.')
    return game.boss_hp

def reduce_hp_by_percent(game: GameState, fraction: float = HP_REDUCE_FRACTION) -> int:
    damage = math.ceil(game.max_hp * fraction)
    game.boss_hp = max(0, game.boss_hp - damage)
    game.update_game_over()
    game.add_event(events.admin_hp_reduce(damage, game.boss_hp))
    log.info(f'Boss HP reduced by {damage} to {game.boss_hp}/{game.max_hp} by admin.')
    return damage

def set_damage_enabled(game: GameState, flag) -> bool:
    if not isinstance(flag, bool):
        raise ValidationError('Invalid enabled: must be a boolean')

    was_enabled = game.hp_damage_enabled
    game.hp_damage_enabled = flag
    if flag and not was_enabled:
        game.boss_hp = game.hp_from_occupancy()
        game.update_game_over()

    game.add_event(events.admin_hp_damage(flag))
    log.info(f'Crystal HP damage {"enabled" if flag else "disabled"} (hp: {game.boss_hp}/{game.max_hp}).')
    return flag

def reset(game: GameState) -> None:
    game.boss_hp = game.max_hp
    game.slots = [False] * SLOT_COUNT
    game.crystal_count = 0
    game.total_crystals_received = 0
    game.hp_damage_enabled = True
    game.game_over = False
    game.recent_events.clear()
    log.info('Game reset by admin.')
