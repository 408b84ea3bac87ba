from phrasebuzz.models import GameState, STATUS_REVEALED


def mask_phrase(phrase: str, guessed_letters, revealed: bool = False) -> str:
    """Hide every unguessed character behind `_`. Spaces always show."""
    guessed = set(guessed_letters)
    masked = []
    for ch in phrase:
        if ch == ' ' or revealed or ch.upper() in guessed:
            masked.append(ch)
        else:
            masked.append('_')
    return ''.join(masked)


def project(state: GameState) -> dict:
    """Public view of the game, safe to send to every screen."""
    return {
        'status': state.status,
        'players': [p.to_dict() for p in state.players],
        'buzzedPlayerId': state.buzzed_player_id,
        'lastGuesserId': state.last_guesser_id,
        'guessedLetters': list(state.guessed_letters),
        'skipTurnAfterGuess': state.skip_turn_after_guess,
        'buzzersPaused': state.buzzers_paused,
        'buzzersReenableAt': state.buzzers_reenable_at,
        'teamMode': state.team_mode,
        'teamAssignments': dict(state.team_assignments),
        'showDancingUnicorn': state.show_dancing_unicorn,
        'winnerPhotoDataUrl': state.winner_photo_data_url,
        'phraseLength': len(state.target_phrase),
        'maskedPhrase': mask_phrase(
            state.target_phrase,
            state.guessed_letters,
            revealed=state.status == STATUS_REVEALED,
        ),
    }


def project_host(state: GameState) -> dict:
    # Host screen only: includes the secret phrase, never broadcast
    payload = project(state)
    payload['targetPhrase'] = state.target_phrase
    return payload
