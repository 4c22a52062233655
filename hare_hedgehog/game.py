"""
Main game engine and turn state machine.
"""

import logging
import math
import random
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from hare_hedgehog import actions
from hare_hedgehog.board import Board, TileType
from hare_hedgehog.cards import ActionCard, ActionCardStack
from hare_hedgehog.config import GameConfig
from hare_hedgehog.connector import Notice, UIConnector
from hare_hedgehog.context import GameContext
from hare_hedgehog.events import EventLog, EventType
from hare_hedgehog.exceptions import InvalidSetupError
from hare_hedgehog.player import Player
from hare_hedgehog.snapshot import GameSnapshot, PlayerRecord, save_snapshot
from hare_hedgehog.tiles import Tile, tile_for

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Lifecycle of a game."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class Game(GameContext):
    """
    Complete state of a Hare & Hedgehog game.

    Players take turns in list order. Each turn runs exactly one action chain
    through the UI connector and the next turn starts when that chain
    completes. The game ends once every player reached the end field (or the
    configured turn limit is hit).
    """

    def __init__(
        self,
        players: Sequence[Player],
        gui: UIConnector,
        config: Optional[GameConfig] = None,
        finished_players: Iterable[int] = (),
        current_player: int = 0,
        cards: Optional[ActionCardStack] = None,
    ):
        self.config = config or GameConfig()
        self.players: List[Player] = list(players)
        finished_players = list(finished_players)
        self.gui = gui
        self._board = Board()
        self.event_log = EventLog()

        self._validate_setup(finished_players, current_player)

        self.seed: int = self.config.seed if self.config.seed is not None else random.randrange(2**63)
        self.cards = cards if cards is not None else ActionCardStack(self.seed)

        self.finished_players: List[Player] = [self.players[i] for i in finished_players]
        self.current_player = current_player

        self.status = GameStatus.NOT_STARTED
        self.turn_number = 0

        self._loop_running = False
        self._loop_pending = False

        for player in self.players:
            self._wire_listeners(player)

    def _validate_setup(self, finished_players: Iterable[int], current_player: int) -> None:
        count = len(self.players)
        if not self.config.min_players <= count <= self.config.max_players:
            raise InvalidSetupError(
                f"Need {self.config.min_players}-{self.config.max_players} players, got {count}"
            )

        names = [p.name for p in self.players]
        if len(set(names)) != len(names):
            raise InvalidSetupError(f"Player names must be unique: {names}")

        if not 0 <= current_player < count:
            raise InvalidSetupError(f"Current player {current_player} out of range")

        finished = list(finished_players)
        if len(set(finished)) != len(finished) or any(not 0 <= i < count for i in finished):
            raise InvalidSetupError(f"Invalid finished players: {finished}")

    def _wire_listeners(self, player: Player) -> None:
        def carrots_changed(carrots: int) -> None:
            if player is self.get_current_player():
                self.gui.update_player_carrots(carrots)

        def salads_changed(salads: int) -> None:
            if player is self.get_current_player():
                self.gui.update_player_salads(salads)

        player.on_carrots_changed = carrots_changed
        player.on_salads_changed = salads_changed

    # Game flow

    def start(self) -> None:
        """Align the player visuals, then run turns until the game is over."""
        self.status = GameStatus.RUNNING
        self.event_log.log(
            EventType.GAME_START,
            players=[p.name for p in self.players],
            seed=self.seed,
            starting_carrots=self.starting_carrots,
        )
        logger.info("Starting game with seed %s", self.seed)

        def begin() -> None:
            self.gui.select_player_visual(self.current_player)
            self._run_game_loop()

        self._initialize_player_positions(len(self.players), begin)

    def _initialize_player_positions(self, remaining: int, on_complete: actions.Continuation) -> None:
        # Restored games may have several players on start or end, so the
        # visuals are placed in turn order beginning with the current player.
        if remaining <= 0:
            on_complete()
            return

        self.gui.select_player_visual(self.current_player)
        field = self.players[self.current_player].field
        self._advance_current_player()
        self.gui.move_player_visual(
            field, field, lambda: self._initialize_player_positions(remaining - 1, on_complete)
        )

    def _run_game_loop(self) -> None:
        # A continuation that fires synchronously only flags the next turn;
        # the outermost call runs it, so turns do not nest on the stack.
        self._loop_pending = True
        if self._loop_running:
            return

        self._loop_running = True
        try:
            while self._loop_pending:
                self._loop_pending = False
                if self.is_game_over():
                    self._end()
                    return
                player = self.get_current_player()
                self.start_turn_of_player(player, actions.once(self._finish_turn, f"turn {self.turn_number}"))
        finally:
            self._loop_running = False

    def start_turn_of_player(self, player: Player, on_complete: actions.Continuation) -> None:
        """
        Run one turn of `player`.

        A suspended player only gets unsuspended. A player that landed on a
        salad tile eats a salad. Everyone else runs the action of the tile
        they stand on.
        """
        gui = self.gui
        gui.select_player_visual(self.current_player)
        gui.update_player_name(player.name)
        gui.update_player_carrots(player.carrots)
        gui.update_player_salads(player.salads)

        self.record_event(
            EventType.TURN_START,
            player,
            turn=self.turn_number,
            field=player.field,
            carrots=player.carrots,
            salads=player.salads,
        )

        if player.suspended:

            def unsuspend() -> None:
                self.record_event(EventType.SKIPPED, player)
                player.suspended = False
                self.record_event(EventType.UNSUSPENDED, player)
                on_complete()

            gui.show_notice(Notice.IS_SUSPENDED, player.name, unsuspend)
            return

        if player.eats_salad:
            action = actions.consume_salad()
        else:
            action = self.get_tile(player.field).action()

        action(gui, self, player, on_complete)

    def _finish_turn(self) -> None:
        player = self.get_current_player()
        self.record_event(EventType.TURN_END, player, turn=self.turn_number)

        if player.field == self.board.end_field and not self.has_finished(player):
            self.finished_players.append(player)
            self.record_event(EventType.REACHED_END, player, rank=self.rank(player))
            logger.info("%s reached the end as %d.", player.name, self.rank(player))

        self.turn_number += 1
        self._advance_current_player()
        self._run_game_loop()

    def _advance_current_player(self) -> None:
        self.current_player = (self.current_player + 1) % len(self.players)

    def is_game_over(self) -> bool:
        """Whether every player finished or the turn limit is reached."""
        if len(self.finished_players) >= len(self.players):
            return True
        max_turns = self.config.max_turns
        return max_turns is not None and self.turn_number >= max_turns

    def _end(self) -> None:
        self.status = GameStatus.FINISHED
        winner = self.winner

        def log_ranking() -> None:
            self.event_log.log(
                EventType.GAME_END,
                winner=winner.name if winner else None,
                turns=self.turn_number,
            )
            for player in self.players:
                self.record_event(EventType.RANKED, player, rank=self.rank(player))

        logger.info("Game over after %d turns", self.turn_number)
        self.gui.show_game_over(winner.name if winner else "", log_ranking)

    # Queries

    @property
    def winner(self) -> Optional[Player]:
        """First finisher, or the best ranked player when nobody finished."""
        if self.finished_players:
            return self.finished_players[0]
        if self.status != GameStatus.FINISHED:
            return None
        return self.standings()[0][1]

    def standings(self) -> List[Tuple[int, Player]]:
        """All players with their rank, best first. Ties keep turn order."""
        ranked = [(self.rank(p), p) for p in self.players]
        return sorted(ranked, key=lambda entry: entry[0])

    def get_current_player(self) -> Player:
        return self.players[self.current_player]

    def has_finished(self, player: Player) -> bool:
        return any(p is player for p in self.finished_players)

    # GameContext

    @property
    def board(self) -> Board:
        return self._board

    @property
    def starting_carrots(self) -> int:
        return self.config.starting_carrots_for(len(self.players))

    @property
    def exchange_amount(self) -> int:
        return self.config.exchange_amount

    @property
    def max_carrots_to_finish(self) -> int:
        """Carrot ceiling for entering the end tile; rises with every finisher."""
        return self.exchange_amount * (len(self.finished_players) + 1)

    def draw_card(self) -> ActionCard:
        return self.cards.draw()

    def get_tile(self, field: int) -> Tile:
        return tile_for(self.board.tile_type(field))

    def rank(self, player: Player) -> int:
        for index, finished in enumerate(self.finished_players):
            if finished is player:
                return index + 1

        ahead = sum(
            1 for other in self.players if not self.has_finished(other) and other.field > player.field
        )
        return ahead + 1 + len(self.finished_players)

    def can_finish(self, carrots: int, salads: int) -> bool:
        return salads <= 0 and carrots <= self.max_carrots_to_finish

    def movement_cost(self, from_field: int, to_field: int) -> int:
        if from_field >= to_field:
            return 0
        distance = to_field - from_field
        return distance * (distance + 1) // 2

    def max_reachable_position(self, carrots: int) -> int:
        # Positive root of n^2 + n - 2c = 0.
        return (math.isqrt(1 + 8 * max(0, carrots)) - 1) // 2

    def available_fields(self, player: Player) -> List[int]:
        return [i for i in range(self.board.size) if self.board.is_accessible(i, self, player)]

    def is_occupied(self, field: int) -> bool:
        return any(p.field == field for p in self.players)

    def _is_open_salad(self, field: int, player: Player) -> bool:
        return not (self.board.tile_type(field) == TileType.SALAD and player.salads < 1)

    def get_fallback_rank_position(self, player: Player) -> int:
        if self.rank(player) == len(self.players):
            return player.field

        behind = player.field - 1
        while behind > 0 and not self.is_occupied(behind):
            behind -= 1

        for i in range(behind - 1, 0, -1):
            if self._is_open_salad(i, player) and not self.is_occupied(i):
                return i
        return self.board.start_field

    def get_move_up_rank_position(self, player: Player) -> int:
        if self.rank(player) == 1:
            return player.field

        size = self.board.size
        ahead = player.field + 1
        while ahead < size and not self.is_occupied(ahead):
            ahead += 1

        for i in range(ahead + 1, size):
            if (
                self._is_open_salad(i, player)
                and self.board.tile_type(i) != TileType.HEDGEHOG
                and not self.is_occupied(i)
            ):
                return i
        return self.board.last_field

    def get_next_carrot_field(self, player: Player) -> int:
        for i in range(player.field + 1, self.board.size):
            if self.board.tile_type(i) == TileType.CARROT and not self.is_occupied(i):
                return i
        return player.field

    def get_last_carrot_field(self, player: Player) -> int:
        for i in range(player.field - 1, 0, -1):
            if self.board.tile_type(i) == TileType.CARROT and not self.is_occupied(i):
                return i
        return player.field

    def record_event(self, event_type: EventType, player: Player, **details) -> None:
        self.event_log.log(event_type, player.name, **details)

    # Persistence

    def to_snapshot(self) -> GameSnapshot:
        """Capture the persisted part of the game state."""
        records = [
            PlayerRecord(
                name=p.name,
                suspended=p.suspended,
                eats_salad=p.eats_salad,
                field=p.field,
                carrots=p.carrots,
                salads=p.salads,
            )
            for p in self.players
        ]
        finished = [self._index_of(p) for p in self.finished_players]
        return GameSnapshot(current_player=self.current_player, finished_players=finished, players=records)

    def _index_of(self, player: Player) -> int:
        return next(i for i, p in enumerate(self.players) if p is player)

    def save(self, path: Union[str, Path]) -> bool:
        """
        Write the game to a save file.

        Failures are reported to the UI and logged; the game keeps running.

        Returns:
            True if the file was written, False otherwise
        """
        try:
            save_snapshot(self.to_snapshot(), path)
        except OSError as e:
            logger.exception("Failed to save game to %s", path)
            self.event_log.log(EventType.ERROR, message=f"Failed to save game to {path}: {e}")
            self.gui.show_saving_failed()
            return False
        return True

    def represents(self, snapshot: Optional[GameSnapshot]) -> bool:
        """Whether a snapshot holds exactly the current state of this game."""
        if snapshot is None:
            return False
        return self.to_snapshot() == snapshot

    @classmethod
    def from_snapshot(
        cls, snapshot: GameSnapshot, gui: UIConnector, config: Optional[GameConfig] = None
    ) -> "Game":
        """
        Restore a game from a snapshot.

        The card stack order is not saved, so the restored game always draws
        a fresh random seed and a newly shuffled stack.
        """
        config = config or GameConfig()
        if config.seed is not None:
            logger.debug("Ignoring seed %s for a restored game", config.seed)
        fresh = replace(config, seed=None)

        players = [
            Player(
                r.name,
                r.field,
                r.carrots,
                r.salads,
                suspended=r.suspended,
                eats_salad=r.eats_salad,
            )
            for r in snapshot.players
        ]
        return cls(
            players,
            gui,
            config=fresh,
            finished_players=snapshot.finished_players,
            current_player=snapshot.current_player,
        )


def create_players(names: Sequence[str], config: Optional[GameConfig] = None) -> List[Player]:
    """New players on the start field, with starting carrots by player count."""
    config = config or GameConfig()
    carrots = config.starting_carrots_for(len(names))
    start = Board().start_field
    return [Player(name, start, carrots, config.starting_salads) for name in names]


def create_game(
    names: Sequence[str],
    gui: UIConnector,
    config: Optional[GameConfig] = None,
    cards: Optional[Iterable[ActionCard]] = None,
) -> Game:
    """
    Create a new game from player names, in turn order.

    Args:
        names: Player names. Must be unique.
        gui: The UI connector driving the game.
        config: Rule configuration. Defaults to the standard rules.
        cards: Explicit stack order, top card first. Shuffled from the seed
            when omitted.
    """
    config = config or GameConfig()
    stack = ActionCardStack.from_cards(cards) if cards is not None else None
    return Game(create_players(names, config), gui, config=config, cards=stack)
