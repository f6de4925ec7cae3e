import logging
from urllib.parse import parse_qs

import socketio

from objects.observer import VIEW_ADMIN, VIEW_BOSS
from objects.observers import Observers
from utils.game_controller import GameController

KNOWN_VIEWS = (VIEW_BOSS, VIEW_ADMIN)

log = logging.getLogger(__name__)

def identify_view(environ: dict):
    """Reads the optional ``view`` query parameter; unknown views become None."""
    query = parse_qs(environ.get('QUERY_STRING', '') if environ else '')
    views = query.get('view')
    if views and views[0] in KNOWN_VIEWS:
        return views[0]
    return None

def register_socketio(socketio_instance: socketio.AsyncServer,
                      controller_instance: GameController,
                      observers_instance: Observers):
    """
    Registers all Socket.IO event handlers with the given AsyncServer instance.
    """

    @socketio_instance.on('connect')
    async def handle_connect(sid, environ, auth=None):
        view = identify_view(environ)
        await observers_instance.add_observer(sid, view)
        log.info(f'Observer \'{sid}\' ({view or "unknown"}) connected.')
        await controller_instance.send_state(sid)

    @socketio_instance.on('disconnect')
    async def handle_disconnect(sid, reason=None):
        observer = await observers_instance.remove_observer(sid)
        if observer is None:
            log.debug(f'Disconnected observer \'{sid}\' not found in observer list.')
            return
        log.info(f'Observer \'{sid}\' ({observer.view or "unknown"}) disconnected, '
                 f'reason: {str(reason)}, pushes: {observer.push_count}')

    return handle_connect, handle_disconnect
