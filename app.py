import os
import logging

DEFAULT_LOG_LEVEL = 'INFO'

log_level = os.environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()

if log_level not in logging._nameToLevel:
    log_level = DEFAULT_LOG_LEVEL

logging.basicConfig(
    format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
    level=log_level,
    datefmt='%Y-%m-%d %H:%M:%S',
)

import asyncio
import uvicorn
import socketio
from typing import Optional
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from api_routes import register_api_routes
from socket_events import register_socketio
from objects.game_state import GameState
from objects.observers import Observers
from utils.config import Config
from utils.game_controller import GameController
from utils.wled import WLEDDriver

log = logging.getLogger('main')

def create_app(config: Config, sio: Optional[socketio.AsyncServer] = None) -> FastAPI:
    if sio is None:
        sio = socketio.AsyncServer(
            async_mode='asgi',
            cors_allowed_origins='*')

    app = FastAPI()
    observers = Observers()
    game = GameState(config.boss_max_hp, config.hp_per_crystal)
    wled = WLEDDriver(config.wled_url, config.wled_leds_per_slot)
    controller = GameController(sio, game, wled, observers)

    app.state.sio = sio
    app.state.controller = controller
    app.state.observers = observers

    register_api_routes(app, controller, observers)
    register_socketio(sio, controller, observers)

    if os.path.isdir(config.static_dir):
        app.mount('/', StaticFiles(directory=config.static_dir, html=True), name='static')
    else:
        log.debug(f'Static directory \'{config.static_dir}\' not found, viewer UIs not served.')

    return app

CONFIG = Config()

sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*')

app = create_app(CONFIG, sio)
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

async def main():
    controller: GameController = app.state.controller
    try:
        log.info(f'Crystal boss server on http://{CONFIG.host}:{CONFIG.port}')
        log.info(f'  Boss view:  http://<pi-ip>:{CONFIG.port}/boss.html')
        log.info(f'  Admin:      http://<pi-ip>:{CONFIG.port}/admin.html')
        if CONFIG.wled_enabled:
            log.info(f'  WLED:       {CONFIG.wled_url}')
        else:
            log.info('  WLED:       disabled (set WLED_URL to enable)')

        uvicorn_config = uvicorn.Config(asgi_app,
                                        host=CONFIG.host,
                                        port=CONFIG.port,
                                        log_config=None,
                                        log_level=None,
                                        access_log=False)
        uvicorn_server = uvicorn.Server(uvicorn_config)
        await uvicorn_server.serve()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        log.info('Shutting down...')
        await controller.wled.close()

if __name__ == '__main__':
    asyncio.run(main())
