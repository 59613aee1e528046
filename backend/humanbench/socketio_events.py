from flask_socketio import emit
from humanbench import get_session, socketio


def handle_connect():
    emit('connected', get_session().snapshot())


def _payload(data):
    """Event payload as a dict, or None after reporting an error to the sender."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        emit('error', {'message': 'payload must be an object'})
        return None
    return data


def handle_set_view(data=None):
    payload = _payload(data)
    if payload is None:
        return
    view = payload.get('view')
    if not view:
        emit('error', {'message': 'view is required'})
        return
    session = get_session()
    if not session.set_view(view):
        emit('error', {'message': f'Unknown view {view}'})
        return
    emit('state', session.snapshot())


def handle_leave_view(data=None):
    payload = _payload(data)
    if payload is None:
        return
    view = payload.get('view')
    if not view:
        emit('error', {'message': 'view is required'})
        return
    session = get_session()
    session.notify_view_deactivated(view)
    emit('state', session.snapshot())


def handle_reaction_click(data=None):
    # result events are broadcast by the session listener
    get_session().reaction_click()
    emit('state', get_session().snapshot())


def handle_chimp_start(data=None):
    session = get_session()
    with session.lock:
        session.chimp.start_game()
    emit('state', session.snapshot())


def handle_chimp_click(data=None):
    payload = _payload(data)
    if payload is None:
        return
    position = payload.get('position')
    session = get_session()
    session.chimp_click(position)
    emit('state', session.snapshot())


def handle_typing_keystroke(data=None):
    payload = _payload(data)
    if payload is None:
        return
    text = payload.get('text')
    session = get_session()
    session.typing_keystroke(text if isinstance(text, str) else None)


def handle_typing_conclude(data=None):
    payload = _payload(data)
    if payload is None:
        return
    typed = payload.get('typed')
    session = get_session()
    session.typing_conclude(typed if isinstance(typed, str) else None)
    emit('state', session.snapshot())


def handle_clear_scores(data=None):
    session = get_session()
    session.clear_scores()
    emit('scores', session.store.bests())


def handle_ping(data):
    emit('pong', data or {})


_HANDLERS = {
    'connect': handle_connect,
    'set_view': handle_set_view,
    'leave_view': handle_leave_view,
    'reaction_click': handle_reaction_click,
    'chimp_start': handle_chimp_start,
    'chimp_click': handle_chimp_click,
    'typing_keystroke': handle_typing_keystroke,
    'typing_conclude': handle_typing_conclude,
    'clear_scores': handle_clear_scores,
    'ping': handle_ping,
}


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    for name, handler in _HANDLERS.items():
        socketio.on_event(name, handler, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        for name, handler in _HANDLERS.items():
            socketio.on_event(name, handler, namespace='/')
