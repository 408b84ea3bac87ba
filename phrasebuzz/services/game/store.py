import copy
import threading

from phrasebuzz.models import GameState


class GameStore:
    """Owns the live GameState for one game session.

    Handlers never touch the live object: they mutate a `snapshot()` and the
    dispatcher `commit()`s it once the whole action has succeeded. `lock` is
    held by the dispatcher for the full validate-mutate-broadcast sequence.
    """

    def __init__(self, initial_phrase: str, skip_turn_after_guess: bool = True):
        self._state = GameState(target_phrase=initial_phrase, skip_turn_after_guess=skip_turn_after_guess)
        self.lock = threading.RLock()

    def get(self) -> GameState:
        return self._state

    def snapshot(self) -> GameState:
        with self.lock:
            return copy.deepcopy(self._state)

    def commit(self, draft: GameState) -> None:
        with self.lock:
            self._state = draft

    def reset(self) -> None:
        with self.lock:
            self._state.reset()
