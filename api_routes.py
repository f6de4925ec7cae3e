import json
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from objects.observers import Observers
from utils.errors import ValidationError
from utils.game_controller import GameController

EVENT_TYPE_CRYSTAL = 'crystal'

log = logging.getLogger(__name__)

async def read_json(request: Request):
    """Returns the decoded body, or an empty dict when there is none."""
    body = await request.body()
    if not body or not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise ValidationError('Invalid JSON body')

def register_api_routes(app_instance: FastAPI,
                        controller_instance: GameController,
                        observers_instance: Observers):
    """Registers all HTTP API routes with the given FastAPI app."""

    @app_instance.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        log.warning(f'Rejected {request.method} {request.url.path}: {exc.message}')
        return JSONResponse(status_code=400, content={'ok': False, 'error': exc.message})

    @app_instance.post('/event')
    async def post_event(request: Request):
        data = await read_json(request)
        if not isinstance(data, dict) or data.get('type') != EVENT_TYPE_CRYSTAL:
            raise ValidationError('Invalid event: need type "crystal" and slots array')
        if 'slots' not in data:
            raise ValidationError('Invalid event: slots must be an array')
        return await controller_instance.report_slots(data['slots'])

    @app_instance.get('/state')
    async def get_state():
        return controller_instance.snapshot()

    @app_instance.post('/admin/hp')
    async def post_admin_hp(request: Request):
        data = await read_json(request)
        hp = data.get('hp') if isinstance(data, dict) else None
        return await controller_instance.set_hp(hp)

    @app_instance.post('/admin/hp/reduce')
    async def post_admin_hp_reduce():
        return await controller_instance.reduce_hp()

    @app_instance.post('/admin/hp-damage')
    async def post_admin_hp_damage(request: Request):
        data = await read_json(request)
        enabled = data.get('enabled') if isinstance(data, dict) else None
        return await controller_instance.set_damage_enabled(enabled)

    @app_instance.post('/admin/reset')
    async def post_admin_reset():
        return await controller_instance.reset()

    @app_instance.post('/admin/wled')
    async def post_admin_wled(request: Request):
        data = await read_json(request)
        if not isinstance(data, dict):
            raise ValidationError('Invalid WLED command: body must be a JSON object')
        return controller_instance.override_lighting(data)

    @app_instance.get('/api/v1/health')
    async def get_health():
        wled = controller_instance.wled
        return {
            'ok': True,
            'observers': await observers_instance.get_observer_list(json_friendly=True),
            'lighting': wled.state.value if wled.enabled else 'disabled'
        }
