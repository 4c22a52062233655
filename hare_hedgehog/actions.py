"""
Actions: composable, continuation-passing units of rule execution.

An action is a callable ``(ui, context, player, on_complete)``. It changes the
player based on the game context (and player input), asks the UI to present
what happened, and calls ``on_complete`` exactly once when it is done. Actions
chain by passing a new closure as the ``on_complete`` of a sub-action.

This is where the rules of the game are joined together, so most state
changes are recorded to the event log here.
"""

import logging
from typing import TYPE_CHECKING, Callable, Dict, List

from hare_hedgehog.board import TileType
from hare_hedgehog.cards import ActionCard
from hare_hedgehog.connector import Choice, Decision, Notice, UIConnector
from hare_hedgehog.events import EventType
from hare_hedgehog.exceptions import ContinuationError, HareHedgehogError

if TYPE_CHECKING:
    from hare_hedgehog.context import GameContext
    from hare_hedgehog.player import Player

logger = logging.getLogger(__name__)

Continuation = Callable[[], None]
Action = Callable[[UIConnector, "GameContext", "Player", Continuation], None]


def no_op() -> None:
    pass


def once(continuation: Continuation, label: str = "continuation") -> Continuation:
    """
    Guard a continuation so that a second invocation fails loudly.

    Raises:
        ContinuationError: when the returned callable is called twice.
    """
    fired = False

    def guarded() -> None:
        nonlocal fired
        if fired:
            logger.error("%s invoked more than once", label)
            raise ContinuationError(f"{label} invoked more than once")
        fired = True
        continuation()

    return guarded


def complete(ui: UIConnector, context: "GameContext", player: "Player", on_complete: Continuation) -> None:
    """Action that does nothing."""
    on_complete()


def draw_action_card(from_field: int) -> Action:
    """
    Draw a card and execute it.

    Args:
        from_field: The field the player moved from before landing on the
            hare tile. FreeLastMove refunds the cost of that move.
    """

    def action(ui, context, player, on_complete):
        card = context.draw_card()
        context.record_event(EventType.CARD_DRAW, player, card=card.value)
        convert_action_card(card, from_field)(ui, context, player, on_complete)

    return action


def carrot_exchange(amount: int, is_addition: bool) -> Action:
    """Add or remove carrots after the UI has shown the exchange."""

    def action(ui, context, player, on_complete):
        def apply() -> None:
            if is_addition:
                player.add_carrots(amount)
            else:
                player.remove_carrots(amount)
            context.record_event(
                EventType.CARROT_EXCHANGE,
                player,
                amount=amount if is_addition else -amount,
                carrots=player.carrots,
            )
            on_complete()

        ui.show_carrot_exchange(amount, is_addition, apply)

    return action


def _exchange_decision(decision: Decision, fallback: Choice) -> Action:
    """
    Offer to add or remove the exchange amount, or `fallback`.

    Removing is only offered when the player can pay the full amount.
    """

    def action(ui, context, player, on_complete):
        amount = context.exchange_amount
        choices: List[Choice] = [Choice.ADD]
        if player.carrots - amount >= 0:
            choices.append(Choice.REMOVE)
        choices.append(fallback)

        def on_choice(choice: Choice) -> None:
            if choice not in choices:
                raise HareHedgehogError(f"{choice} was not offered, expected one of {choices}")

            context.record_event(EventType.CHOICE, player, decision=decision.value, choice=choice.value)
            if choice == Choice.ADD:
                player.add_carrots(amount)
                on_complete()
            elif choice == Choice.REMOVE:
                player.remove_carrots(amount)
                on_complete()
            elif choice == Choice.MOVE:
                select_field_and_move()(ui, context, player, on_complete)
            else:
                on_complete()

        ui.show_decision(decision, amount, choices, on_choice)

    return action


def carrot_exchange_decision() -> Action:
    """Carrot tile turn: take carrots, pay carrots or move on."""
    return _exchange_decision(Decision.CARROT_FIELD, Choice.MOVE)


def consume_salad() -> Action:
    """
    Eat a salad at the start of the turn.

    Eating pays ``exchange_amount * rank`` carrots, so players further behind
    gain more. Without salads only the eating flag is cleared.
    """

    def action(ui, context, player, on_complete):
        if player.salads > 0:

            def eat() -> None:
                player.consume_salad()
                context.record_event(EventType.SALAD_CONSUMED, player, salads=player.salads)

                player.eats_salad = False
                context.record_event(EventType.EATS_SALAD, player, eating=False)

                amount = context.exchange_amount * context.rank(player)
                carrot_exchange(amount, True)(ui, context, player, on_complete)

            ui.show_notice(Notice.EATING_SALAD, player.name, eat)
        else:

            def skip() -> None:
                context.record_event(EventType.NO_SALAD, player)

                player.eats_salad = False
                context.record_event(EventType.EATS_SALAD, player, eating=False)
                on_complete()

            ui.show_notice(Notice.NO_SALADS_TO_CONSUME, player.name, skip)

    return action


def preview_costs(context: "GameContext", player: "Player", fields: List[int]) -> List[int]:
    """
    Carrot cost per field for display only.

    Backward moves can only go to a hedgehog tile and pay carrots, shown as a
    negative cost.
    """
    costs = []
    for field in fields:
        if player.field <= field:
            costs.append(context.movement_cost(player.field, field))
        else:
            costs.append(-(player.field - field) * context.exchange_amount)
    return costs


def select_field_and_move() -> Action:
    """
    Let the player choose a field and move there.

    Without any reachable field a player without carrots goes back to the
    start; a player with carrots skips the move.
    """

    def action(ui, context, player, on_complete):
        fields = context.available_fields(player)
        if not fields:
            context.record_event(EventType.NO_FIELD, player, field=player.field)

            if player.carrots <= 0:
                context.record_event(EventType.BACK_TO_START, player, field=player.field)
                start = context.board.start_field
                ui.show_notice(
                    Notice.NO_CARROTS_BACK_TO_START,
                    player.name,
                    lambda: move(start, False)(ui, context, player, on_complete),
                )
            else:
                # Only logged here: card-triggered "no field" cases happen after
                # the player already moved this turn.
                context.record_event(EventType.SKIPPED, player)

                def skip() -> None:
                    # Stay on start, but go to the back of the start queue.
                    if player.field == context.board.start_field:
                        ui.skip_player_visual_on_start_field(on_complete)
                    else:
                        on_complete()

                ui.show_notice(Notice.NO_VALID_FIELD, player.name, skip)
            return

        def on_field_selected(field: int) -> None:
            if field not in fields:
                raise HareHedgehogError(f"Field {field} was not offered, expected one of {fields}")
            move(field, True)(ui, context, player, on_complete)

        ui.enable_move_selection(fields, player.carrots, preview_costs(context, player, fields), on_field_selected)

    return action


def move(to_field: int, has_cost: bool) -> Action:
    """
    Move the player and run the entry action of the destination.

    Args:
        to_field: Destination field.
        has_cost: Whether the movement cost is paid. Card moves are free.
    """

    def action(ui, context, player, on_complete):
        tile = context.get_tile(to_field)
        from_field = player.field
        cost = context.movement_cost(from_field, to_field) if has_cost else 0
        if cost:
            player.remove_carrots(cost)

        player.field = to_field
        _record_move(context, player, from_field, to_field, cost)

        entry = tile.entry_action(from_field)
        ui.move_player_visual(from_field, to_field, lambda: entry(ui, context, player, on_complete))

    return action


def relocate(to_field: int) -> Action:
    """Put the player on a field without cost and without entry action."""

    def action(ui, context, player, on_complete):
        context.board.tile_type(to_field)
        from_field = player.field
        player.field = to_field
        _record_move(context, player, from_field, to_field, 0)
        ui.move_player_visual(from_field, to_field, on_complete)

    return action


def _record_move(context: "GameContext", player: "Player", from_field: int, to_field: int, cost: int) -> None:
    board = context.board
    context.record_event(
        EventType.MOVE,
        player,
        from_field=from_field,
        from_tile=board.tile_type(from_field).value,
        to_field=to_field,
        to_tile=board.tile_type(to_field).value,
        cost=cost,
    )


# Action cards


def _exchange_carrots_card(from_field: int) -> Action:
    return _exchange_decision(Decision.EXCHANGE_CARD, Choice.NOTHING)


def _consume_salad_card(from_field: int) -> Action:
    def action(ui, context, player, on_complete):
        def apply() -> None:
            player.eats_salad = True
            context.record_event(EventType.EATS_SALAD, player, eating=True)
            on_complete()

        ui.show_card(ActionCard.CONSUME_SALAD, apply)

    return action


def _get_suspended_card(from_field: int) -> Action:
    def action(ui, context, player, on_complete):
        def apply() -> None:
            player.suspended = True
            context.record_event(EventType.SUSPENDED, player)
            on_complete()

        ui.show_card(ActionCard.GET_SUSPENDED, apply)

    return action


def _take_turn_again_card(from_field: int) -> Action:
    def action(ui, context, player, on_complete):
        ui.show_card(
            ActionCard.TAKE_TURN_AGAIN,
            lambda: select_field_and_move()(ui, context, player, on_complete),
        )

    return action


def _free_last_move_card(from_field: int) -> Action:
    def action(ui, context, player, on_complete):
        def apply() -> None:
            refund = context.movement_cost(from_field, player.field)
            player.add_carrots(refund)
            context.record_event(EventType.CARROT_EXCHANGE, player, amount=refund, carrots=player.carrots)
            on_complete()

        ui.show_card(ActionCard.FREE_LAST_MOVE, apply)

    return action


def _move_up_rank_card(from_field: int) -> Action:
    def action(ui, context, player, on_complete):
        def apply() -> None:
            to_field = context.get_move_up_rank_position(player)
            if to_field == player.field:
                context.record_event(EventType.ALREADY_FIRST_RANK, player)
                ui.show_notice(Notice.ALREADY_FIRST_RANK, player.name, on_complete)
            elif to_field == context.board.end_field and not context.can_finish(player.carrots, player.salads):
                context.record_event(EventType.NO_FIELD, player, field=player.field)
                ui.show_notice(Notice.CANT_MOVE_UP_RANK_TO_END, player.name, on_complete)
            else:
                move(to_field, False)(ui, context, player, on_complete)

        ui.show_card(ActionCard.MOVE_UP_RANK, apply)

    return action


def _fall_back_rank_card(from_field: int) -> Action:
    def action(ui, context, player, on_complete):
        def apply() -> None:
            to_field = context.get_fallback_rank_position(player)
            if to_field == player.field:
                context.record_event(EventType.ALREADY_LAST_RANK, player)
                ui.show_notice(Notice.ALREADY_LAST_RANK, player.name, on_complete)
            elif context.board.tile_type(to_field) == TileType.HEDGEHOG:
                # Falling back onto a hedgehog does not pay the hedgehog bonus.
                relocate(to_field)(ui, context, player, on_complete)
            else:
                move(to_field, False)(ui, context, player, on_complete)

        ui.show_card(ActionCard.FALL_BACK_RANK, apply)

    return action


def _carrot_field_card(card: ActionCard, find: Callable[["GameContext", "Player"], int]) -> Callable[[int], Action]:
    def build(from_field: int) -> Action:
        def action(ui, context, player, on_complete):
            def apply() -> None:
                to_field = find(context, player)
                if to_field == player.field:
                    context.record_event(EventType.NO_FIELD, player, field=player.field)
                    ui.show_notice(Notice.NO_CARROT_FIELD_TO_MOVE_TO, player.name, on_complete)
                else:
                    move(to_field, False)(ui, context, player, on_complete)

            ui.show_card(card, apply)

        return action

    return build


_CARD_ACTIONS: Dict[ActionCard, Callable[[int], Action]] = {
    ActionCard.EXCHANGE_CARROTS: _exchange_carrots_card,
    ActionCard.CONSUME_SALAD: _consume_salad_card,
    ActionCard.GET_SUSPENDED: _get_suspended_card,
    ActionCard.TAKE_TURN_AGAIN: _take_turn_again_card,
    ActionCard.FREE_LAST_MOVE: _free_last_move_card,
    ActionCard.MOVE_UP_RANK: _move_up_rank_card,
    ActionCard.FALL_BACK_RANK: _fall_back_rank_card,
    ActionCard.MOVE_TO_NEXT_CARROT_FIELD: _carrot_field_card(
        ActionCard.MOVE_TO_NEXT_CARROT_FIELD, lambda context, player: context.get_next_carrot_field(player)
    ),
    ActionCard.MOVE_TO_LAST_CARROT_FIELD: _carrot_field_card(
        ActionCard.MOVE_TO_LAST_CARROT_FIELD, lambda context, player: context.get_last_carrot_field(player)
    ),
}

_unmapped = set(ActionCard) - set(_CARD_ACTIONS)
if _unmapped:
    raise ImportError(f"Action cards without an action: {sorted(c.value for c in _unmapped)}")


def convert_action_card(card: ActionCard, from_field: int) -> Action:
    """
    Get the action of an action card.

    Args:
        card: The drawn card.
        from_field: The field the player moved from before drawing.

    Raises:
        HareHedgehogError: if `card` is not an `ActionCard`.
    """
    try:
        build = _CARD_ACTIONS[card]
    except KeyError:
        logger.error("Unknown action card: %r", card)
        raise HareHedgehogError(f"Unknown action card: {card!r}") from None
    return build(from_field)


def execute_card(
    card: ActionCard,
    ui: UIConnector,
    context: "GameContext",
    player: "Player",
    from_field: int = 0,
    on_complete: Continuation = no_op,
) -> None:
    """Execute an action card outside of a hare tile draw."""
    convert_action_card(card, from_field)(ui, context, player, on_complete)
