"""Shared test fixtures for Hare & Hedgehog tests."""

from typing import Callable, List, Optional, Tuple

import pytest

from hare_hedgehog import ActionCardStack, GameConfig, UIConnector, create_game
from hare_hedgehog.connector import Choice
from hare_hedgehog.game import Game, create_players

NAMES = ["Player 1", "Player 2", "Player 3", "Player 4", "Player 5", "Player 6"]


class FakeConnector(UIConnector):
    """
    Synchronous connector that records every call.

    Messages complete right away. Carrot decisions pick `MOVE` (or
    `NOTHING` for exchange cards) unless `choice` is set. Field selections
    stay pending until `select()` is called, unless `field_chooser` is set.
    """

    def __init__(self):
        self.calls: List[Tuple] = []
        self.choice: Optional[Choice] = None
        self.field_chooser: Optional[Callable[[List[int]], int]] = None
        self.pending_selection: Optional[Tuple[List[int], List[int], Callable[[int], None]]] = None
        self.saving_failed = 0

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def notices(self):
        return [call[1] for call in self.calls if call[0] == "show_notice"]

    def select(self, field: int) -> None:
        assert self.pending_selection is not None, "no field selection pending"
        _, _, callback = self.pending_selection
        self.pending_selection = None
        callback(field)

    def update_player_name(self, name):
        self.calls.append(("update_player_name", name))

    def update_player_carrots(self, carrots):
        self.calls.append(("update_player_carrots", carrots))

    def update_player_salads(self, salads):
        self.calls.append(("update_player_salads", salads))

    def select_player_visual(self, player_index):
        self.calls.append(("select_player_visual", player_index))

    def enable_move_selection(self, fields, carrots, carrot_costs, on_field_selected):
        self.calls.append(("enable_move_selection", list(fields), list(carrot_costs)))
        if self.field_chooser is not None:
            on_field_selected(self.field_chooser(list(fields)))
        else:
            self.pending_selection = (list(fields), list(carrot_costs), on_field_selected)

    def move_player_visual(self, from_field, to_field, on_complete):
        self.calls.append(("move_player_visual", from_field, to_field))
        on_complete()

    def skip_player_visual_on_start_field(self, on_complete):
        self.calls.append(("skip_player_visual_on_start_field",))
        on_complete()

    def show_notice(self, notice, player_name, on_complete):
        self.calls.append(("show_notice", notice, player_name))
        on_complete()

    def show_card(self, card, on_complete):
        self.calls.append(("show_card", card))
        on_complete()

    def show_decision(self, decision, amount, choices, on_choice):
        self.calls.append(("show_decision", decision, amount, list(choices)))
        if self.choice is not None:
            on_choice(self.choice)
        elif Choice.MOVE in choices:
            on_choice(Choice.MOVE)
        else:
            on_choice(Choice.NOTHING)

    def show_carrot_exchange(self, amount, is_addition, on_complete):
        self.calls.append(("show_carrot_exchange", amount, is_addition))
        on_complete()

    def show_reached_end(self, rank, on_complete):
        self.calls.append(("show_reached_end", rank))
        on_complete()

    def show_game_over(self, winner_name, on_complete):
        self.calls.append(("show_game_over", winner_name))
        on_complete()

    def show_saving_failed(self):
        self.calls.append(("show_saving_failed",))
        self.saving_failed += 1


@pytest.fixture
def names():
    """Six player names."""
    return list(NAMES)


@pytest.fixture
def fake_gui():
    """Recording connector."""
    return FakeConnector()


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def game(fake_gui, game_config):
    """Six player game, everyone on the start field with 98 carrots."""
    return create_game(NAMES, fake_gui, game_config)


@pytest.fixture
def two_player_game(fake_gui, game_config):
    """Two player game, everyone on the start field with 68 carrots."""
    return create_game(NAMES[:2], fake_gui, game_config)


@pytest.fixture
def make_game(fake_gui, game_config):
    """Factory for games with explicit cards or finished players."""

    def factory(player_names=None, cards=None, finished_players=(), config=None) -> Game:
        config = config or game_config
        player_names = list(player_names or NAMES)
        stack = ActionCardStack.from_cards(cards) if cards is not None else None
        return Game(
            create_players(player_names, config),
            fake_gui,
            config=config,
            finished_players=finished_players,
            cards=stack,
        )

    return factory
