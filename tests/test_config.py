import json

from utils.config import Config, DEFAULT_BOSS_MAX_HP, DEFAULT_PORT


def test_defaults():
    config = Config(environ={}, config_path=None)
    assert config.port == DEFAULT_PORT
    assert config.boss_max_hp == DEFAULT_BOSS_MAX_HP
    assert config.hp_per_crystal == 10
    assert config.wled_enabled is False
    assert config.wled_url == ''


def test_environment_values():
    config = Config(environ={
        'PORT': '8080',
        'BOSS_MAX_HP': '250',
        'HP_PER_CRYSTAL': '25',
        'WLED_URL': ' http://10.0.0.5 ',
        'WLED_LEDS_PER_SLOT': '30',
    }, config_path=None)
    assert config.port == 8080
    assert config.boss_max_hp == 250
    assert config.hp_per_crystal == 25
    assert config.wled_enabled is True
    assert config.wled_url == 'http://10.0.0.5'
    assert config.wled_leds_per_slot == 30


def test_invalid_numbers_fall_back():
    config = Config(environ={'BOSS_MAX_HP': 'lots', 'HP_PER_CRYSTAL': '-4'}, config_path=None)
    assert config.boss_max_hp == DEFAULT_BOSS_MAX_HP
    assert config.hp_per_crystal == 10


def test_config_file_below_environment(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'BOSS_MAX_HP': 60, 'PORT': 4000}), encoding='utf-8')
    config = Config(environ={'PORT': '5000'}, config_path=str(path))
    assert config.boss_max_hp == 60
    assert config.port == 5000
