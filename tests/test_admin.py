import pytest

from objects.game_state import SLOT_COUNT
from utils import admin
from utils.errors import ValidationError
from utils.reconciler import apply_slot_report


class TestSetHp:
    @pytest.mark.parametrize('value, expected', [
        (50, 50),
        (42.9, 42),
        ('30', 30),
        (0, 0),
        (1000, 100),
        (float('inf'), 100),
    ])
    def test_clamped_and_floored(self, game, value, expected):
        assert admin.set_hp(game, value) == expected
        assert game.boss_hp == expected
        assert game.game_over == (expected == 0)

    @pytest.mark.parametrize('value', [None, -1, -0.5, 'abc', '', True, [], {}, float('nan')])
    def test_invalid_rejected(self, game, value):
        before = game.to_dict()
        with pytest.raises(ValidationError):
            admin.set_hp(game, value)
        assert game.to_dict() == before

    def test_records_event(self, game):
        admin.set_hp(game, 75)
        record = game.recent_events.snapshot(json_friendly=True)[0]
        assert record['type'] == 'admin_hp'
        assert record['hp'] == 75


class TestReduceHp:
    def test_twice_from_full(self, game):
        assert admin.reduce_hp_by_percent(game) == 5
        admin.reduce_hp_by_percent(game)
        assert game.boss_hp == 90
        record = game.recent_events.snapshot(json_friendly=True)[0]
        assert record['type'] == 'admin_hp_reduce'
        assert record['damage'] == 5
        assert record['hp'] == 90

    def test_floored_at_zero(self, game):
        admin.set_hp(game, 3)
        admin.reduce_hp_by_percent(game)
        assert game.boss_hp == 0
        assert game.game_over is True

    def test_damage_rounds_up(self):
        from objects.game_state import GameState
        game = GameState(max_hp=30, hp_per_crystal=10)
        assert admin.reduce_hp_by_percent(game) == 2
        assert game.boss_hp == 28


class TestDamageToggle:
    def test_disable_freezes_and_enable_recomputes(self, game):
        apply_slot_report(game, [True, True] + [False] * 5)
        assert game.boss_hp == 80

        admin.set_damage_enabled(game, False)
        apply_slot_report(game, [True] * 5 + [False] * 2)
        assert game.boss_hp == 80
        apply_slot_report(game, [False] * SLOT_COUNT)
        assert game.boss_hp == 80

        apply_slot_report(game, [True] * 4 + [False] * 3)
        admin.set_damage_enabled(game, True)
        assert game.boss_hp == 60
        assert game.game_over is False

    def test_enable_when_already_enabled_keeps_admin_hp(self, game):
        admin.set_hp(game, 55)
        admin.set_damage_enabled(game, True)
        assert game.boss_hp == 55

    def test_admin_hp_while_disabled_can_clear_game_over(self, game):
        admin.set_damage_enabled(game, False)
        admin.set_hp(game, 0)
        assert game.game_over is True
        admin.set_hp(game, 20)
        assert game.game_over is False

    @pytest.mark.parametrize('flag', [None, 1, 0, 'true', 'false'])
    def test_non_boolean_rejected(self, game, flag):
        before = game.to_dict()
        with pytest.raises(ValidationError):
            admin.set_damage_enabled(game, flag)
        assert game.to_dict() == before

    def test_records_event(self, game):
        admin.set_damage_enabled(game, False)
        record = game.recent_events.snapshot(json_friendly=True)[0]
        assert record['type'] == 'admin_hp_damage'
        assert record['enabled'] is False


def test_reset_from_any_state(game):
    apply_slot_report(game, [True] * SLOT_COUNT)
    admin.set_damage_enabled(game, False)
    admin.set_hp(game, 0)
    assert game.game_over is True

    admin.reset(game)

    assert game.boss_hp == game.max_hp
    assert game.slots == [False] * SLOT_COUNT
    assert game.crystal_count == 0
    assert game.total_crystals_received == 0
    assert game.recent_events.snapshot() == []
    assert game.game_over is False
    assert game.hp_damage_enabled is True
