from dataclasses import dataclass, field
from typing import Dict, List, Optional

STATUS_WAITING = 'waiting'
STATUS_ACTIVE = 'active'
STATUS_REVEALED = 'revealed'

TEAM_BLUE = 'blue'
TEAM_RED = 'red'


@dataclass
class Player:
    id: str
    name: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
        }


@dataclass
class GameState:
    """The single authoritative record for the running game."""

    target_phrase: str
    status: str = STATUS_WAITING
    players: List[Player] = field(default_factory=list)
    buzzed_player_id: Optional[str] = None
    last_guesser_id: Optional[str] = None
    # Kept as a list so letters display in the order they were revealed
    guessed_letters: List[str] = field(default_factory=list)
    skip_turn_after_guess: bool = True
    buzzers_paused: bool = False
    buzzers_reenable_at: Optional[int] = None  # epoch ms
    team_mode: bool = False
    team_assignments: Dict[str, str] = field(default_factory=dict)
    show_dancing_unicorn: bool = True
    winner_photo_data_url: str = ''

    def __post_init__(self):
        self.target_phrase = self.target_phrase.upper()

    def find_player(self, player_id) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def has_player(self, player_id) -> bool:
        return self.find_player(player_id) is not None

    def reset(self) -> None:
        """Clear the round and the roster.

        The phrase, team mode, skip-turn toggle and winner photo survive a reset.
        """
        self.status = STATUS_WAITING
        self.players = []
        self.buzzed_player_id = None
        self.last_guesser_id = None
        self.guessed_letters = []
        self.buzzers_paused = False
        self.buzzers_reenable_at = None
        self.team_assignments = {}
        self.show_dancing_unicorn = True
