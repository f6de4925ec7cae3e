import os
import json
import logging
from typing import Mapping, Optional

CONFIG_PATH = 'config.json'

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 3000
DEFAULT_BOSS_MAX_HP = 100
DEFAULT_HP_PER_CRYSTAL = 10
DEFAULT_WLED_LEDS_PER_SLOT = 10
DEFAULT_STATIC_DIR = 'public'

log = logging.getLogger(__name__)

def _positive_int(raw, default: int, name: str) -> int:
    if raw is None or raw == '':
        return default
    try:
        value = int(float(raw))
    except (TypeError, ValueError):
        log.warning(f'Invalid value \'{raw}\' for {name}, using default {default}.')
        return default
    if value <= 0:
        log.warning(f'Non-positive value \'{raw}\' for {name}, using default {default}.')
        return default
    return value

class Config:
    def __init__(self,
                 environ: Optional[Mapping[str, str]] = None,
                 config_path: Optional[str] = CONFIG_PATH):
        self.host: str = DEFAULT_HOST
        self.port: int = DEFAULT_PORT

        self.boss_max_hp: int = DEFAULT_BOSS_MAX_HP
        self.hp_per_crystal: int = DEFAULT_HP_PER_CRYSTAL

        self.wled_enabled: bool = False
        self.wled_url: str = ''
        self.wled_leds_per_slot: int = DEFAULT_WLED_LEDS_PER_SLOT

        self.static_dir: str = DEFAULT_STATIC_DIR

        if environ is None:
            environ = os.environ

        config_data = {}

        if config_path and os.path.isfile(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
                    log.info('Successfully loaded config file.')

            except Exception as e:
                log.critical(f'Failed to load config file: {e}')

        def lookup(key: str):
            # Environment wins over the config file
            if key in environ:
                return environ[key]
            return config_data.get(key, None)

        # Load Server Config
        self.host = lookup('HOST') or DEFAULT_HOST
        self.port = _positive_int(lookup('PORT'), DEFAULT_PORT, 'PORT')
        self.static_dir = lookup('STATIC_DIR') or DEFAULT_STATIC_DIR

        # Load Game Config
        self.boss_max_hp = _positive_int(lookup('BOSS_MAX_HP'), DEFAULT_BOSS_MAX_HP, 'BOSS_MAX_HP')
        self.hp_per_crystal = _positive_int(lookup('HP_PER_CRYSTAL'), DEFAULT_HP_PER_CRYSTAL, 'HP_PER_CRYSTAL')

        # Load WLED Config
        wled_url = lookup('WLED_URL')
        self.wled_leds_per_slot = _positive_int(lookup('WLED_LEDS_PER_SLOT'),
                                                DEFAULT_WLED_LEDS_PER_SLOT,
                                                'WLED_LEDS_PER_SLOT')

        if isinstance(wled_url, str) and wled_url.strip() != '':
            self.wled_url = wled_url.strip()
            self.wled_enabled = True
        else:
            self.wled_url = ''
            self.wled_enabled = False
