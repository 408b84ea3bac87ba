from flask import current_app
from flask_socketio import join_room, emit

from phrasebuzz import socketio
from phrasebuzz.services.game.dispatcher import EVENT_GAME_UPDATE


def _dispatcher():
    return current_app.extensions['game']


def handle_connect():
    # Every screen listens on the broadcast room and gets the current state
    channel = current_app.config.get('BROADCAST_CHANNEL', 'game-channel')
    join_room(channel)
    emit('connected', {'message': 'Connected to /ws', 'channel': channel})
    emit(EVENT_GAME_UPDATE, _dispatcher().public_state())


def handle_action(data):
    body, status = _dispatcher().dispatch(data or {})
    emit('action_result', {'status': status, **body})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('action', handle_action, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
