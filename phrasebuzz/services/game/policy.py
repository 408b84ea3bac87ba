"""Turn-taking and team rules.

Pure functions over GameState: eligibility checks raise ActionError, the
`apply_*` helpers mutate the state they are given.
"""

import re
from typing import Dict, List, Optional

from phrasebuzz.models import GameState, Player, STATUS_ACTIVE, TEAM_BLUE, TEAM_RED
from .errors import ActionError

_LETTER_RE = re.compile(r'^[A-Z]$')


def assign_teams(players: List[Player]) -> Dict[str, str]:
    """Alternate blue/red over join order. Fewer than two players means no teams."""
    if len(players) < 2:
        return {}
    return {
        player.id: TEAM_BLUE if index % 2 == 0 else TEAM_RED
        for index, player in enumerate(players)
    }


def refresh_teams(state: GameState) -> None:
    if state.team_mode:
        state.team_assignments = assign_teams(state.players)
    else:
        state.team_assignments = {}


def is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def normalize_letter(value) -> Optional[str]:
    """Uppercase a single A-Z letter, or None for anything else."""
    if not isinstance(value, str):
        return None
    letter = value.strip().upper()
    if not _LETTER_RE.match(letter):
        return None
    return letter


def check_buzz(state: GameState, player_id) -> None:
    if state.status != STATUS_ACTIVE:
        raise ActionError('Game not active', 400)
    if not is_text(player_id):
        raise ActionError('Missing player ID', 400)
    if not state.has_player(player_id):
        raise ActionError('Unknown player', 400)
    if state.buzzers_paused:
        raise ActionError('Buzzers are paused, wait for the host to enable them', 403)
    # Cooldown: the last guesser sits out until someone else has buzzed
    if state.skip_turn_after_guess and state.last_guesser_id == player_id:
        raise ActionError('You must wait, another player goes first', 403)


def check_guess(state: GameState, player_id) -> None:
    if state.status != STATUS_ACTIVE:
        raise ActionError('Game not active', 400)
    if state.buzzed_player_id is None or state.buzzed_player_id != player_id:
        raise ActionError('Not your turn', 403)


def add_letter(state: GameState, letter: str) -> bool:
    if letter in state.guessed_letters:
        return False
    state.guessed_letters.append(letter)
    return True


def apply_guess(state: GameState, player_id: str, letter: str, now_ms: int, delay_ms: int) -> None:
    """Record the guess, hand the floor back and pause buzzers until `now_ms + delay_ms`."""
    add_letter(state, letter)
    state.last_guesser_id = player_id
    state.buzzed_player_id = None
    state.buzzers_paused = True
    state.buzzers_reenable_at = now_ms + delay_ms


def unguessed_letters(state: GameState) -> List[str]:
    seen = []
    for ch in state.target_phrase.upper():
        if _LETTER_RE.match(ch) and ch not in seen and ch not in state.guessed_letters:
            seen.append(ch)
    return seen


def pick_reveal_letter(state: GameState, rng) -> Optional[str]:
    available = unguessed_letters(state)
    if not available:
        return None
    return rng.choice(available)


def reenable_due(state: GameState, now_ms: int) -> bool:
    return state.buzzers_reenable_at is not None and now_ms >= state.buzzers_reenable_at


def remove_player(state: GameState, player_id: str) -> None:
    state.players = [p for p in state.players if p.id != player_id]
    if state.buzzed_player_id == player_id:
        state.buzzed_player_id = None
    if state.last_guesser_id == player_id:
        state.last_guesser_id = None
    state.team_assignments.pop(player_id, None)
    refresh_teams(state)
