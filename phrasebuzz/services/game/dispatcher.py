import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from phrasebuzz.models import GameState, Player, STATUS_ACTIVE, STATUS_REVEALED, STATUS_WAITING
from . import policy
from .errors import ActionError, UploadError
from .photos import InlinePhotoStore, is_image_data_url
from .projection import project, project_host

EVENT_GAME_UPDATE = 'game-update'
EVENT_BUZZ = 'buzz-event'

_ACTIONS: Dict[str, Callable] = {}


def action(name: str):
    def register(fn):
        _ACTIONS[name] = fn
        return fn
    return register


def action_names() -> List[str]:
    return sorted(_ACTIONS)


@dataclass
class Outcome:
    body: Dict[str, Any] = field(default_factory=dict)
    changed: bool = True
    events: List[Tuple[str, dict]] = field(default_factory=list)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _require_bool(payload: dict, key: str) -> bool:
    value = payload.get(key)
    if not isinstance(value, bool):
        raise ActionError(f'{key} must be boolean', 400)
    return value


class GameDispatcher:
    """Runs named actions against the game state.

    Each action works on a draft copy of the state. Only when the handler
    returns normally is the draft committed, then the public projection is
    broadcast followed by any action-specific events.
    """

    def __init__(self, store, notifier=None, photo_store=None, channel: str = 'game-channel',
                 reenable_delay_ms: int = 5000, clock: Callable[[], int] = _now_ms,
                 rng: Optional[random.Random] = None, scheduler=None, logger=None):
        self.store = store
        self.notifier = notifier
        self.photo_store = photo_store or InlinePhotoStore()
        self.channel = channel
        self.reenable_delay_ms = reenable_delay_ms
        self.clock = clock
        self.rng = rng or random.Random()
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger(__name__)

    def dispatch(self, payload) -> Tuple[dict, int]:
        if not isinstance(payload, dict):
            return {'error': 'Request body must be a JSON object'}, 400
        name = payload.get('action')
        handler = _ACTIONS.get(name) if isinstance(name, str) else None
        if handler is None:
            return {'error': 'Unknown action'}, 400

        with self.store.lock:
            previous_deadline = self.store.get().buzzers_reenable_at
            draft = self.store.snapshot()
            try:
                outcome = handler(self, draft, payload)
            except ActionError as exc:
                self.logger.info(f"[refused] action={name} status={exc.status_code} reason={exc.message}")
                return {'error': exc.message}, exc.status_code
            except UploadError as exc:
                self.logger.error(f"[upload-failed] action={name} error={exc}")
                return {'error': 'Failed to upload photo'}, 500
            except Exception:
                self.logger.exception(f"[error] action={name}")
                return {'error': 'Internal server error'}, 500

            if outcome.changed:
                self.store.commit(draft)
                self.logger.info(f"[action] {name} status={draft.status} players={len(draft.players)}")
                self.broadcast(EVENT_GAME_UPDATE, project(draft))
                for event, data in outcome.events:
                    self.broadcast(event, data)
                deadline = draft.buzzers_reenable_at
                if self.scheduler is not None and deadline is not None and deadline != previous_deadline:
                    self.scheduler.schedule(deadline)

        body = {'ok': True}
        body.update(outcome.body)
        return body, 200

    def broadcast(self, event: str, data: dict) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.broadcast(self.channel, event, data)
        except Exception:
            # Best-effort delivery: state is already committed, clients re-poll
            self.logger.exception(f"[broadcast-failed] channel={self.channel} event={event}")

    def public_state(self) -> dict:
        with self.store.lock:
            return project(self.store.get())

    def host_state(self) -> dict:
        with self.store.lock:
            return project_host(self.store.get())

    def reset(self) -> None:
        """Reset outside of an action (CLI); still broadcasts the new state."""
        with self.store.lock:
            self.store.reset()
            self.broadcast(EVENT_GAME_UPDATE, project(self.store.get()))


@action('join')
def _join(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    player_id = payload.get('playerId')
    player_name = payload.get('playerName')
    if not policy.is_text(player_id) or not policy.is_text(player_name):
        raise ActionError('Missing player info', 400)
    if state.has_player(player_id):
        return Outcome(body={'state': project(state)}, changed=False)
    state.players.append(Player(id=player_id, name=player_name))
    policy.refresh_teams(state)
    return Outcome(body={'state': project(state)})


@action('start')
def _start(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.status = STATUS_ACTIVE
    state.buzzed_player_id = None
    state.last_guesser_id = None
    state.guessed_letters = []
    state.buzzers_paused = False
    state.buzzers_reenable_at = None
    policy.refresh_teams(state)
    return Outcome()


@action('buzz')
def _buzz(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    player_id = payload.get('playerId')
    policy.check_buzz(state, player_id)
    if state.buzzed_player_id is not None:
        # Someone already holds the floor; later buzzers are ignored
        return Outcome(body={'buzzedPlayerId': state.buzzed_player_id}, changed=False)
    state.buzzed_player_id = player_id
    player = state.find_player(player_id)
    buzz_event = {'playerId': player_id, 'playerName': player.name if player else 'Unknown'}
    return Outcome(body={'buzzedPlayerId': player_id}, events=[(EVENT_BUZZ, buzz_event)])


@action('guess_letter')
def _guess_letter(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    player_id = payload.get('playerId')
    policy.check_guess(state, player_id)
    letter = policy.normalize_letter(payload.get('letter'))
    if letter is None:
        raise ActionError('Letter must be a single A-Z character', 400)
    policy.apply_guess(state, player_id, letter, dispatcher.clock(), dispatcher.reenable_delay_ms)
    return Outcome()


@action('clear_buzzer')
def _clear_buzzer(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.buzzed_player_id = None
    return Outcome()


@action('clear_cooldown')
def _clear_cooldown(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.last_guesser_id = None
    return Outcome()


@action('remove_player')
def _remove_player(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    player_id = payload.get('playerId')
    if not policy.is_text(player_id):
        raise ActionError('Missing player ID', 400)
    policy.remove_player(state, player_id)
    return Outcome()


@action('reveal_letter')
def _reveal_letter(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    if state.status != STATUS_ACTIVE:
        raise ActionError('Game not active', 400)
    letter = policy.normalize_letter(payload.get('letter'))
    if letter is None:
        letter = policy.pick_reveal_letter(state, dispatcher.rng)
        if letter is None:
            return Outcome(body={'letter': None}, changed=False)
    policy.add_letter(state, letter)
    return Outcome(body={'letter': letter})


@action('reveal')
def _reveal(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.status = STATUS_REVEALED
    state.buzzed_player_id = None
    return Outcome()


@action('reset')
def _reset(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.reset()
    return Outcome()


@action('get_state')
def _get_state(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    return Outcome(body={'state': project(state)}, changed=False)


@action('get_host_state')
def _get_host_state(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    return Outcome(body={'state': project_host(state)}, changed=False)


@action('set_winner_photo')
def _set_winner_photo(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    data_url = payload.get('winnerPhotoDataUrl')
    if not data_url or not isinstance(data_url, str):
        raise ActionError('Missing or invalid winnerPhotoDataUrl', 400)
    if not is_image_data_url(data_url):
        raise ActionError('Must be an image data URL', 400)
    state.winner_photo_data_url = dispatcher.photo_store.store(data_url)
    return Outcome(body={'winnerPhotoDataUrl': state.winner_photo_data_url})


@action('set_skip_turn')
def _set_skip_turn(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    enabled = _require_bool(payload, 'skipTurnAfterGuess')
    state.skip_turn_after_guess = enabled
    if not enabled:
        # Nobody is sitting out any more
        state.last_guesser_id = None
    return Outcome()


@action('set_dancing_unicorn')
def _set_dancing_unicorn(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.show_dancing_unicorn = _require_bool(payload, 'showDancingUnicorn')
    return Outcome()


@action('set_team_mode')
def _set_team_mode(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    enabled = _require_bool(payload, 'teamMode')
    if state.status != STATUS_WAITING:
        raise ActionError('Can only change team mode before game starts', 400)
    state.team_mode = enabled
    policy.refresh_teams(state)
    return Outcome()


@action('set_phrase')
def _set_phrase(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    phrase = payload.get('phrase')
    phrase = phrase.strip() if isinstance(phrase, str) else ''
    if not phrase:
        raise ActionError('Phrase cannot be empty', 400)
    if state.status != STATUS_WAITING:
        raise ActionError('Can only set phrase before game starts', 400)
    state.target_phrase = phrase.upper()
    return Outcome()


@action('toggle_buzzers_pause')
def _toggle_buzzers_pause(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    state.buzzers_paused = not state.buzzers_paused
    state.buzzers_reenable_at = None
    return Outcome()


@action('reenable_buzzers')
def _reenable_buzzers(dispatcher: GameDispatcher, state: GameState, payload: dict) -> Outcome:
    """Lift the pause once the recorded deadline has passed.

    The server timer normally does this. A client timer that fires even a few
    milliseconds early gets `ok` with no change and no broadcast, so clients
    should re-check state rather than assume the buzzers are live.
    """
    if not policy.reenable_due(state, dispatcher.clock()):
        return Outcome(changed=False)
    state.buzzers_paused = False
    state.buzzers_reenable_at = None
    return Outcome()
