"""
Presentation collaborator contract.

The engine never renders anything itself. It asks a `UIConnector` to show
information, offer decisions, offer fields and animate moves. Every method
that takes a continuation must invoke it exactly once, either right away or
later (after an animation or a user dismissing a dialog).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Sequence

from hare_hedgehog.cards import ActionCard
from hare_hedgehog.exceptions import InvalidFieldError

if TYPE_CHECKING:
    from hare_hedgehog.policies.base import Policy

logger = logging.getLogger(__name__)

Continuation = Callable[[], None]


class Notice(Enum):
    """Informational messages shown to the player."""

    IS_SUSPENDED = "is_suspended"
    EATING_SALAD = "eating_salad"
    NO_SALADS_TO_CONSUME = "no_salads_to_consume"
    NO_VALID_FIELD = "no_valid_field"
    NO_CARROTS_BACK_TO_START = "no_carrots_back_to_start"
    NO_CARROT_FIELD_TO_MOVE_TO = "no_carrot_field_to_move_to"
    ALREADY_FIRST_RANK = "already_first_rank"
    ALREADY_LAST_RANK = "already_last_rank"
    CANT_MOVE_UP_RANK_TO_END = "cant_move_up_rank_to_end"


class Decision(Enum):
    """Kinds of multiple-choice questions."""

    CARROT_FIELD = "carrot_field"
    EXCHANGE_CARD = "exchange_card"


class Choice(Enum):
    """Answers to a decision."""

    ADD = "add"
    REMOVE = "remove"
    MOVE = "move"
    NOTHING = "nothing"


@dataclass
class PlayerView:
    """What a connector knows about the player whose turn it is."""

    index: int = 0
    name: str = ""
    field: int = 0
    carrots: int = 0
    salads: int = 0


class UIConnector(ABC):
    """Capabilities the engine needs from a user interface."""

    @abstractmethod
    def update_player_name(self, name: str) -> None:
        """Display the name of the player whose turn it is."""

    @abstractmethod
    def update_player_carrots(self, carrots: int) -> None:
        """Display the current player's carrots."""

    @abstractmethod
    def update_player_salads(self, salads: int) -> None:
        """Display the current player's salads."""

    @abstractmethod
    def select_player_visual(self, player_index: int) -> None:
        """Mark which player's piece the following moves apply to."""

    @abstractmethod
    def enable_move_selection(
        self,
        fields: List[int],
        carrots: int,
        carrot_costs: List[int],
        on_field_selected: Callable[[int], None],
    ) -> None:
        """
        Let the player pick one of `fields`.

        Args:
            fields: Selectable fields, ascending.
            carrots: Carrots the player currently holds.
            carrot_costs: Preview cost per field; negative values are gains.
            on_field_selected: Called once with the chosen field.
        """

    @abstractmethod
    def move_player_visual(self, from_field: int, to_field: int, on_complete: Continuation) -> None:
        """Animate the selected piece from one field to another."""

    @abstractmethod
    def skip_player_visual_on_start_field(self, on_complete: Continuation) -> None:
        """Rotate the selected piece to the back of the start field queue."""

    @abstractmethod
    def show_notice(self, notice: Notice, player_name: str, on_complete: Continuation) -> None:
        """Show an informational message."""

    @abstractmethod
    def show_card(self, card: ActionCard, on_complete: Continuation) -> None:
        """Reveal a drawn action card."""

    @abstractmethod
    def show_decision(
        self,
        decision: Decision,
        amount: int,
        choices: List[Choice],
        on_choice: Callable[[Choice], None],
    ) -> None:
        """Offer `choices` and call `on_choice` once with the chosen one."""

    @abstractmethod
    def show_carrot_exchange(self, amount: int, is_addition: bool, on_complete: Continuation) -> None:
        """Show carrots being gained or paid."""

    @abstractmethod
    def show_reached_end(self, rank: int, on_complete: Continuation) -> None:
        """Congratulate the current player for finishing."""

    @abstractmethod
    def show_game_over(self, winner_name: str, on_complete: Continuation) -> None:
        """Announce the winner."""

    @abstractmethod
    def show_saving_failed(self) -> None:
        """Tell the user that the game could not be saved."""


class PolicyConnector(UIConnector):
    """
    Synchronous connector for unattended games.

    Messages and animations complete immediately. Decisions and field
    selections are delegated to one policy per player.
    """

    def __init__(self, policies: Sequence["Policy"]):
        self.policies = list(policies)
        self.view = PlayerView()
        self.positions: Dict[int, int] = {}

    def _policy(self) -> "Policy":
        return self.policies[self.view.index % len(self.policies)]

    def update_player_name(self, name: str) -> None:
        self.view.name = name

    def update_player_carrots(self, carrots: int) -> None:
        self.view.carrots = carrots

    def update_player_salads(self, salads: int) -> None:
        self.view.salads = salads

    def select_player_visual(self, player_index: int) -> None:
        self.view.index = player_index
        self.view.field = self.positions.get(player_index, 0)

    def enable_move_selection(self, fields, carrots, carrot_costs, on_field_selected) -> None:
        self.view.carrots = carrots
        field = self._policy().choose_field(self.view, list(fields), list(carrot_costs))
        if field not in fields:
            raise InvalidFieldError(f"Policy chose field {field}, offered {fields}")
        on_field_selected(field)

    def move_player_visual(self, from_field, to_field, on_complete) -> None:
        self.positions[self.view.index] = to_field
        self.view.field = to_field
        on_complete()

    def skip_player_visual_on_start_field(self, on_complete) -> None:
        on_complete()

    def show_notice(self, notice, player_name, on_complete) -> None:
        logger.info("%s: %s", player_name, notice.value)
        on_complete()

    def show_card(self, card, on_complete) -> None:
        logger.info("%s draws %s", self.view.name, card.value)
        on_complete()

    def show_decision(self, decision, amount, choices, on_choice) -> None:
        on_choice(self._policy().choose(self.view, decision, amount, list(choices)))

    def show_carrot_exchange(self, amount, is_addition, on_complete) -> None:
        on_complete()

    def show_reached_end(self, rank, on_complete) -> None:
        logger.info("%s reaches the end as %d. player", self.view.name, rank)
        on_complete()

    def show_game_over(self, winner_name, on_complete) -> None:
        logger.info("Game over, %s wins", winner_name)
        on_complete()

    def show_saving_failed(self) -> None:
        logger.warning("Saving the game failed")
