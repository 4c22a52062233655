"""
Action cards drawn on hare tiles.
"""

import random
from collections import deque
from enum import Enum
from typing import Deque, Iterable, List, Optional, Tuple


class ActionCard(Enum):
    """The different action cards."""

    EXCHANGE_CARROTS = "exchange_carrots"
    CONSUME_SALAD = "consume_salad"
    GET_SUSPENDED = "get_suspended"
    TAKE_TURN_AGAIN = "take_turn_again"
    FREE_LAST_MOVE = "free_last_move"
    MOVE_UP_RANK = "move_up_rank"
    FALL_BACK_RANK = "fall_back_rank"
    MOVE_TO_NEXT_CARROT_FIELD = "move_to_next_carrot_field"
    MOVE_TO_LAST_CARROT_FIELD = "move_to_last_carrot_field"


STANDARD_CARDS: Tuple[ActionCard, ...] = (
    ActionCard.FREE_LAST_MOVE,
    ActionCard.FREE_LAST_MOVE,
    ActionCard.EXCHANGE_CARROTS,
    ActionCard.EXCHANGE_CARROTS,
    ActionCard.GET_SUSPENDED,
    ActionCard.FALL_BACK_RANK,
    ActionCard.FALL_BACK_RANK,
    ActionCard.CONSUME_SALAD,
    ActionCard.MOVE_UP_RANK,
    ActionCard.TAKE_TURN_AGAIN,
    ActionCard.MOVE_TO_NEXT_CARROT_FIELD,
    ActionCard.MOVE_TO_LAST_CARROT_FIELD,
)


class ActionCardStack:
    """
    A recycling stack of action cards.

    Drawing never removes a card: the top card is returned and moved to the
    bottom, so the multiset of cards is constant for the whole game.
    """

    def __init__(self, seed: Optional[int] = None, cards: Iterable[ActionCard] = STANDARD_CARDS):
        self._cards: Deque[ActionCard] = deque(cards)
        if seed is not None:
            self.shuffle(seed)

    @classmethod
    def from_cards(cls, cards: Iterable[ActionCard]) -> "ActionCardStack":
        """Create a stack in the given order, top card first. Not shuffled."""
        return cls(seed=None, cards=cards)

    @property
    def cards(self) -> List[ActionCard]:
        """Current order, top card first."""
        return list(self._cards)

    def shuffle(self, seed: int) -> None:
        """Deterministically reorder the stack."""
        order = list(self._cards)
        random.Random(seed).shuffle(order)
        self._cards = deque(order)

    def draw(self) -> ActionCard:
        """Draw the top card and put it at the bottom of the stack."""
        card = self._cards.popleft()
        self._cards.append(card)
        return card

    def peek(self) -> ActionCard:
        """Look at the top card without drawing it."""
        return self._cards[0]

    def copy(self) -> "ActionCardStack":
        return ActionCardStack.from_cards(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ActionCardStack):
            return NotImplemented
        return list(self._cards) == list(other._cards)

    def __repr__(self) -> str:
        return f"ActionCardStack({[c.value for c in self._cards]})"
