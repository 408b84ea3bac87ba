import time
from typing import Set


class ReenableScheduler:
    """Lifts the buzzer pause once its deadline passes.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - One background task per distinct deadline
    - The task dispatches `reenable_buzzers`, which checks the live deadline,
      so a timer superseded by a newer guess or a manual toggle does nothing
    """

    def __init__(self, app, socketio):
        self.app = app
        self.socketio = socketio
        self._pending: Set[int] = set()

    def enabled(self) -> bool:
        if not self.app.config.get('AUTO_REENABLE_BUZZERS', True):
            return False
        if self.app.config.get('TESTING') and not self.app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            return False
        return True

    def schedule(self, deadline_ms: int) -> None:
        if not self.enabled():
            return
        if deadline_ms in self._pending:
            self.app.logger.info(f"[timer-skip] deadline={deadline_ms} already scheduled")
            return
        self._pending.add(deadline_ms)
        self.app.logger.info(f"[timer-set] deadline={deadline_ms}")
        self.socketio.start_background_task(self._worker, deadline_ms)

    def _worker(self, deadline_ms: int) -> None:
        # Small margin so the dispatcher's clock is past the deadline on wake-up
        self.socketio.sleep(max(0.0, deadline_ms / 1000.0 - time.time()) + 0.05)
        self._pending.discard(deadline_ms)
        dispatcher = self.app.extensions.get('game')
        if dispatcher is None:
            return
        with self.app.app_context():
            body, status = dispatcher.dispatch({'action': 'reenable_buzzers'})
        self.app.logger.info(f"[timer-fire] deadline={deadline_ms} status={status}")
