class SocketIONotifier:
    """Broadcasts game events to a Socket.IO room."""

    def __init__(self, socketio, namespace: str = '/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def broadcast(self, channel: str, event: str, payload: dict) -> None:
        # Use socketio.emit since this may be called from a background task
        self.socketio.emit(event, payload, to=channel, namespace=self.namespace)
