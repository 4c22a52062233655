"""
Tests for the action card stack.
"""

from collections import Counter

from hare_hedgehog import GameConfig, create_game
from hare_hedgehog.cards import STANDARD_CARDS, ActionCard, ActionCardStack


def test_standard_stack_contents():
    stack = ActionCardStack(seed=1)

    assert len(stack) == 12
    assert Counter(stack.cards) == Counter(STANDARD_CARDS)
    assert Counter(stack.cards)[ActionCard.FREE_LAST_MOVE] == 2
    assert Counter(stack.cards)[ActionCard.FALL_BACK_RANK] == 2
    assert Counter(stack.cards)[ActionCard.MOVE_UP_RANK] == 1


def test_same_seed_same_order():
    assert ActionCardStack(seed=123).cards == ActionCardStack(seed=123).cards


def test_draw_moves_top_card_to_bottom():
    stack = ActionCardStack.from_cards(
        [ActionCard.MOVE_UP_RANK, ActionCard.GET_SUSPENDED, ActionCard.CONSUME_SALAD]
    )

    assert stack.peek() == ActionCard.MOVE_UP_RANK
    assert stack.draw() == ActionCard.MOVE_UP_RANK
    assert stack.cards == [ActionCard.GET_SUSPENDED, ActionCard.CONSUME_SALAD, ActionCard.MOVE_UP_RANK]


def test_full_rotation_restores_order():
    stack = ActionCardStack(seed=99)
    before = stack.cards

    drawn = [stack.draw() for _ in range(12)]

    assert stack.cards == before
    assert drawn == before


def test_copy_is_equal_and_independent():
    stack = ActionCardStack(seed=5)
    copy = stack.copy()

    assert copy == stack

    copy.draw()
    assert copy != stack
    assert len(stack) == 12


def test_game_draw_rotates_its_stack(game):
    before = game.cards.copy()

    card = game.draw_card()

    assert card == before.peek()
    assert game.cards != before
    before.draw()
    assert game.cards == before


def test_game_with_fixed_seed_shuffles_reproducibly(fake_gui):
    first = create_game(["A", "B"], fake_gui, GameConfig(seed=7))
    second = create_game(["A", "B"], fake_gui, GameConfig(seed=7))

    assert first.cards == second.cards
    assert first.seed == 7
