import logging
from typing import List, Sequence, Tuple

from objects import event as events
from objects.game_state import GameState, SLOT_COUNT
from utils.errors import ValidationError

log = logging.getLogger(__name__)

def reconcile(previous_slots: Sequence[bool],
              reported_slots) -> Tuple[List[bool], List[int], List[int]]:
    """
    Diffs a reported slot vector against the previous one.

    Returns the new slot vector (the coerced report, always), the indices
    that went empty -> occupied and the indices that went occupied -> empty.
    Raises ValidationError if the report is not a list of exactly
    SLOT_COUNT entries.
    """
    if not isinstance(reported_slots, (list, tuple)):
        raise ValidationError('Invalid event: slots must be an array')
    if len(reported_slots) != SLOT_COUNT:
        raise ValidationError(f'Invalid event: slots must have exactly {SLOT_COUNT} entries')

    new_slots = [bool(value) for value in reported_slots]
    inserted = []
    removed = []
    for index, (before, after) in enumerate(zip(previous_slots, new_slots)):
        if not before and after:
            inserted.append(index)
        elif before and not after:
            removed.append(index)

    return new_slots, inserted, removed

def apply_slot_report(game: GameState, reported_slots) -> Tuple[List[int], List[int]]:
    """Reconciles a report into ``game`` and records every transition."""
    new_slots, inserted, removed = reconcile(game.slots, reported_slots)

    game.slots = new_slots
    game.crystal_count = sum(new_slots)
    game.total_crystals_received += len(inserted)

    if game.hp_damage_enabled:
        game.boss_hp = game.hp_from_occupancy()
        game.update_game_over()

    damage = game.hp_per_crystal if game.hp_damage_enabled else 0
    inserted_set = set(inserted)
    for index in sorted(inserted + removed):
        if index in inserted_set:
            game.add_event(events.crystal_insert(index, damage))
        else:
            game.add_event(events.crystal_remove(index))

    if inserted or removed:
        log.info(f'Slots reconciled (inserted: {inserted}, removed: {removed}, '
                 f'crystals: {game.crystal_count}, hp: {game.boss_hp}/{game.max_hp}).')
    else:
        log.debug('Slot report unchanged.')

    return inserted, removed
