from flask import Blueprint, jsonify, request
from humanbench import get_session
from humanbench.services.benchmarks import VIEWS


benchmarks = Blueprint('benchmarks', __name__)


def _json_object():
    """Request body as a dict; an absent body counts as empty, anything else as None."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _event_payload(event):
    session = get_session()
    return jsonify({
        'event': event.to_dict() if event is not None else None,
        'state': session.snapshot(),
    })


@benchmarks.route('/state', methods=['GET'])
def get_state():
    return jsonify(get_session().snapshot())


@benchmarks.route('/scores', methods=['GET'])
def get_scores():
    return jsonify(get_session().store.bests())


@benchmarks.route('/scores', methods=['DELETE'])
def clear_scores():
    session = get_session()
    session.clear_scores()
    return jsonify(session.store.bests())


@benchmarks.route('/views/<string:view>', methods=['POST'])
def activate_view(view):
    if view not in VIEWS:
        return jsonify({'error': f'Unknown view {view}'}), 404
    session = get_session()
    session.set_view(view)
    return jsonify(session.snapshot())


@benchmarks.route('/views/<string:view>/leave', methods=['POST'])
def leave_view(view):
    if view not in VIEWS:
        return jsonify({'error': f'Unknown view {view}'}), 404
    session = get_session()
    session.notify_view_deactivated(view)
    return jsonify(session.snapshot())


# ---- Reaction ----

@benchmarks.route('/reaction/click', methods=['POST'])
def reaction_click():
    return _event_payload(get_session().reaction_click())


@benchmarks.route('/reaction/start', methods=['POST'])
def reaction_start():
    session = get_session()
    with session.lock:
        session.reaction.start()
    return jsonify(session.snapshot())


@benchmarks.route('/reaction/stop', methods=['POST'])
def reaction_stop():
    session = get_session()
    with session.lock:
        session.reaction.stop()
    return jsonify(session.snapshot())


# ---- Chimp ----

@benchmarks.route('/chimp/start', methods=['POST'])
def chimp_start():
    session = get_session()
    with session.lock:
        session.chimp.start_game()
    return jsonify(session.snapshot())


@benchmarks.route('/chimp/click', methods=['POST'])
def chimp_click():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'position' not in data:
        return jsonify({'error': 'position is required'}), 400
    return _event_payload(get_session().chimp_click(data.get('position')))


@benchmarks.route('/chimp/pause', methods=['POST'])
def chimp_pause():
    session = get_session()
    with session.lock:
        session.chimp.pause()
    return jsonify(session.snapshot())


# ---- Typing ----

@benchmarks.route('/typing/samples', methods=['GET'])
def typing_samples():
    session = get_session()
    return jsonify({'samples': session.typing.samples, 'selected': session.typing.sample_index})


@benchmarks.route('/typing/sample', methods=['POST'])
def typing_select_sample():
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    index = data.get('index')
    session = get_session()
    with session.lock:
        selected = session.typing.select_sample(index)
    if not selected:
        return jsonify({'error': 'Invalid sample index'}), 400
    return jsonify(session.snapshot())


@benchmarks.route('/typing/keystroke', methods=['POST'])
def typing_keystroke():
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    text = data.get('text')
    if text is not None and not isinstance(text, str):
        return jsonify({'error': 'text must be a string'}), 400
    session = get_session()
    session.typing_keystroke(text)
    return jsonify(session.snapshot())


@benchmarks.route('/typing/conclude', methods=['POST'])
def typing_conclude():
    data = _json_object()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    typed = data.get('typed')
    if typed is not None and not isinstance(typed, str):
        return jsonify({'error': 'typed must be a string'}), 400
    return _event_payload(get_session().typing_conclude(typed))


@benchmarks.route('/typing/restart', methods=['POST'])
def typing_restart():
    session = get_session()
    with session.lock:
        session.typing.restart()
    return jsonify(session.snapshot())
