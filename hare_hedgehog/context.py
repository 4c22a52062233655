"""
Query interface the tile and action layer uses to inspect the game.

Every method is a pure function of the current game state, with two
exceptions: `draw_card` rotates the action card stack and `record_event`
appends to the event log.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from hare_hedgehog.board import Board
    from hare_hedgehog.cards import ActionCard
    from hare_hedgehog.events import EventType
    from hare_hedgehog.player import Player
    from hare_hedgehog.tiles import Tile


class GameContext(ABC):
    """Read-mostly view of a running game."""

    @property
    @abstractmethod
    def board(self) -> "Board":
        """The board the game is played on."""

    @property
    @abstractmethod
    def starting_carrots(self) -> int:
        """Carrots every player started with."""

    @property
    @abstractmethod
    def exchange_amount(self) -> int:
        """Base amount of carrots in every carrot exchange."""

    @abstractmethod
    def draw_card(self) -> "ActionCard":
        """
        Draw the top action card and put it at the bottom of the stack.

        This mutates the stack. A player may draw several cards during one
        turn when cards chain onto further hare tiles.
        """

    @abstractmethod
    def get_tile(self, field: int) -> "Tile":
        """Get the behaviour of the tile at a field."""

    @abstractmethod
    def rank(self, player: "Player") -> int:
        """
        Get the 1-based rank of a player.

        Finished players rank by finish order ahead of everyone else. An
        unfinished player ranks behind every finished player and every
        unfinished player standing strictly further ahead.
        """

    @abstractmethod
    def can_finish(self, carrots: int, salads: int) -> bool:
        """Whether a player holding these resources may enter the end tile."""

    @abstractmethod
    def movement_cost(self, from_field: int, to_field: int) -> int:
        """Carrots needed to move forward; moving back is free."""

    @abstractmethod
    def max_reachable_position(self, carrots: int) -> int:
        """Largest distance n a player can pay for, i.e. n(n+1)/2 <= carrots."""

    @abstractmethod
    def available_fields(self, player: "Player") -> List[int]:
        """All fields the player can move to, ascending."""

    @abstractmethod
    def is_occupied(self, field: int) -> bool:
        """Whether any player stands on the field."""

    @abstractmethod
    def get_fallback_rank_position(self, player: "Player") -> int:
        """
        First free field behind the player that is one rank behind.

        Returns the player's own field if they are already in last place.
        May go back several ranks, down to the start field.
        """

    @abstractmethod
    def get_move_up_rank_position(self, player: "Player") -> int:
        """
        First free field ahead of the player that is one rank ahead.

        Returns the player's own field if they are already in first place.
        May go up several ranks, up to the last field.
        """

    @abstractmethod
    def get_next_carrot_field(self, player: "Player") -> int:
        """Nearest free carrot field ahead, or the player's own field."""

    @abstractmethod
    def get_last_carrot_field(self, player: "Player") -> int:
        """Nearest free carrot field behind, or the player's own field."""

    @abstractmethod
    def record_event(self, event_type: "EventType", player: "Player", **details: Any) -> None:
        """Append an event about a player to the game's event log."""
