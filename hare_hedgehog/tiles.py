"""
Tile behaviour definitions.

Each tile type has one stateless behaviour object deciding whether a player
may move onto the tile, what happens while a player's turn starts on it, and
what happens right after a player lands on it.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable

from hare_hedgehog import actions
from hare_hedgehog.actions import Action
from hare_hedgehog.board import TileType
from hare_hedgehog.events import EventType

if TYPE_CHECKING:
    from hare_hedgehog.context import GameContext
    from hare_hedgehog.player import Player


class Tile(ABC):
    """Base class for a tile behaviour."""

    tile_type: TileType

    def is_accessible(self, field: int, context: "GameContext", player: "Player") -> bool:
        """
        Whether `player` may move to `field` by ordinary movement.

        By default the field must be ahead of the player, affordable with the
        player's carrots and not occupied.
        """
        distance = field - player.field
        max_distance = context.max_reachable_position(player.carrots)
        return 0 < distance <= max_distance and not context.is_occupied(field)

    @abstractmethod
    def action(self) -> Action:
        """Action run when a player's turn starts on this tile."""

    def entry_action(self, from_field: int) -> Action:
        """Action run once right after a player landed on this tile."""
        return actions.complete

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.tile_type.value})"


class StartTile(Tile):
    """The start tile. It can only be reached by being sent back."""

    tile_type = TileType.START

    def is_accessible(self, field, context, player) -> bool:
        return False

    def action(self) -> Action:
        return actions.select_field_and_move()

    def entry_action(self, from_field: int) -> Action:
        def action(ui, context, player, on_complete):
            amount = context.starting_carrots - player.carrots
            player.add_carrots(amount)
            context.record_event(EventType.CARROT_EXCHANGE, player, amount=amount, carrots=player.carrots)
            on_complete()

        return action


class EndTile(Tile):
    """The goal. Several players may stand on it."""

    tile_type = TileType.END

    def is_accessible(self, field, context, player) -> bool:
        # Reach uses the carrot budget, affordability uses the actual cost.
        carrots = player.carrots
        distance = field - player.field
        max_distance = context.max_reachable_position(carrots)
        carrots_left = carrots - context.movement_cost(player.field, field)

        return 0 < distance <= max_distance and context.can_finish(carrots_left, player.salads)

    def action(self) -> Action:
        return actions.complete

    def entry_action(self, from_field: int) -> Action:
        def action(ui, context, player, on_complete):
            ui.show_reached_end(context.rank(player), on_complete)

        return action


class CarrotTile(Tile):
    """A carrot tile, where players may take or pay carrots instead of moving."""

    tile_type = TileType.CARROT

    def action(self) -> Action:
        return actions.carrot_exchange_decision()


class SaladTile(Tile):
    """A salad tile. Landing on it means eating a salad next turn."""

    tile_type = TileType.SALAD

    def is_accessible(self, field, context, player) -> bool:
        return super().is_accessible(field, context, player) and player.salads > 0

    def action(self) -> Action:
        return actions.select_field_and_move()

    def entry_action(self, from_field: int) -> Action:
        def action(ui, context, player, on_complete):
            player.eats_salad = True
            context.record_event(EventType.EATS_SALAD, player, eating=True)
            on_complete()

        return action


class HareTile(Tile):
    """A hare tile. Landing on it draws an action card."""

    tile_type = TileType.HARE

    def action(self) -> Action:
        return actions.select_field_and_move()

    def entry_action(self, from_field: int) -> Action:
        return actions.draw_action_card(from_field)


class HedgehogTile(Tile):
    """
    A hedgehog tile.

    Only reachable by moving back to the nearest hedgehog behind the player,
    which pays carrots for every field moved back.
    """

    tile_type = TileType.HEDGEHOG

    def is_accessible(self, field, context, player) -> bool:
        if field >= player.field or context.is_occupied(field):
            return False
        return context.board.nearest_behind(player.field, TileType.HEDGEHOG) == field

    def action(self) -> Action:
        return actions.select_field_and_move()

    def entry_action(self, from_field: int) -> Action:
        def action(ui, context, player, on_complete):
            amount = (from_field - player.field) * context.exchange_amount
            actions.carrot_exchange(amount, True)(ui, context, player, on_complete)

        return action


class NumberTile(Tile):
    """
    A number (or flag) tile.

    A player whose rank is one of the tile's reward ranks at the start of the
    turn receives ``rank * exchange_amount`` carrots before moving on.
    """

    def __init__(self, tile_type: TileType, reward_ranks: Iterable[int]):
        self.tile_type = tile_type
        self.reward_ranks: FrozenSet[int] = frozenset(reward_ranks)

    def rewards(self, rank: int) -> bool:
        return rank in self.reward_ranks

    def action(self) -> Action:
        def action(ui, context, player, on_complete):
            rank = context.rank(player)
            select = actions.select_field_and_move()
            if self.rewards(rank):
                amount = rank * context.exchange_amount
                actions.carrot_exchange(amount, True)(
                    ui, context, player, lambda: select(ui, context, player, on_complete)
                )
            else:
                select(ui, context, player, on_complete)

        return action


TILES: Dict[TileType, Tile] = {
    TileType.START: StartTile(),
    TileType.END: EndTile(),
    TileType.CARROT: CarrotTile(),
    TileType.SALAD: SaladTile(),
    TileType.HARE: HareTile(),
    TileType.HEDGEHOG: HedgehogTile(),
    TileType.TWO: NumberTile(TileType.TWO, {2}),
    TileType.THREE: NumberTile(TileType.THREE, {3}),
    TileType.FOUR: NumberTile(TileType.FOUR, {4}),
    TileType.FLAG: NumberTile(TileType.FLAG, {1, 5, 6}),
}

_unmapped = set(TileType) - set(TILES)
if _unmapped:
    raise ImportError(f"Tile types without a behaviour: {sorted(t.value for t in _unmapped)}")


def tile_for(tile_type: TileType) -> Tile:
    """Get the behaviour of a tile type."""
    return TILES[tile_type]
