"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Configuration for a Hare & Hedgehog game."""

    exchange_amount: int = 10

    starting_carrots: int = 68
    starting_carrots_variant: int = 98
    min_players_for_variant: int = 5
    starting_salads: int = 3

    min_players: int = 2
    max_players: int = 6

    seed: Optional[int] = None

    max_turns: Optional[int] = None

    def starting_carrots_for(self, player_count: int) -> int:
        """Carrots every player starts with, larger games get the variant amount."""
        if player_count < self.min_players_for_variant:
            return self.starting_carrots
        return self.starting_carrots_variant
