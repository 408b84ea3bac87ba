"""Game domain services: state, rules and action dispatch.

This package holds the game logic imported by the HTTP routes and socket
handlers, keeping transport concerns separated from core game mechanics.
"""

from .dispatcher import GameDispatcher
from .errors import ActionError, UploadError
from .store import GameStore
