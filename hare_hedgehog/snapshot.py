"""
Save game snapshots.

A snapshot holds everything needed to continue a game: the ordered player
records, the finish order and whose turn it is. The card stack order is not
part of it; a restored game shuffles a fresh stack.

The JSON layout uses the key names of the established save file format::

    {
      "currPlayer": 0,
      "onTarget": [],
      "players": [
        {"name": "A", "suspended": false, "eatsSalad": false,
         "position": 0, "carrots": 68, "salads": 3},
        ...
      ]
    }
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from hare_hedgehog.board import Board, TileType
from hare_hedgehog.config import GameConfig
from hare_hedgehog.exceptions import InvalidSnapshotError

logger = logging.getLogger(__name__)

_DEFAULTS = GameConfig()
_BOARD = Board()


class PlayerRecord(BaseModel):
    """Persisted state of one player."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    suspended: bool = False
    eats_salad: bool = Field(default=False, alias="eatsSalad")
    field: int = Field(alias="position")
    carrots: int = Field(ge=0)
    salads: int = Field(ge=0)


class GameSnapshot(BaseModel):
    """
    Persisted state of a game.

    Validation rejects the snapshot as a whole when any rule is violated:
    player count, finish order indices, current player index, field ranges,
    one player per field (except start and end), and flags that only make
    sense on certain tiles.
    """

    model_config = ConfigDict(populate_by_name=True)

    current_player: int = Field(alias="currPlayer")
    finished_players: List[int] = Field(default_factory=list, alias="onTarget")
    players: List[PlayerRecord] = Field(
        min_length=_DEFAULTS.min_players,
        max_length=_DEFAULTS.max_players,
    )

    @model_validator(mode="after")
    def check_game_rules(self) -> "GameSnapshot":
        count = len(self.players)

        names = [record.name for record in self.players]
        if len(set(names)) != count:
            raise ValueError(f"player names must be unique: {names}")

        if not 0 <= self.current_player < count:
            raise ValueError(f"currPlayer {self.current_player} out of range for {count} players")

        if len(self.finished_players) > count:
            raise ValueError("more finished players than players")
        if len(set(self.finished_players)) != len(self.finished_players):
            raise ValueError(f"duplicate finished players: {self.finished_players}")
        for index in self.finished_players:
            if not 0 <= index < count:
                raise ValueError(f"finished player index {index} out of range")

        shared = {_BOARD.start_field, _BOARD.end_field}
        taken = set()
        for record in self.players:
            if not _BOARD.is_in_bounds(record.field):
                raise ValueError(f"{record.name}: field {record.field} is not on the board")
            if record.field not in shared:
                if record.field in taken:
                    raise ValueError(f"{record.name}: field {record.field} is occupied twice")
                taken.add(record.field)

            tile = _BOARD.tile_type(record.field)
            if record.eats_salad and tile not in (TileType.SALAD, TileType.HARE):
                raise ValueError(f"{record.name}: eats salad on a {tile.value} tile")
            if record.suspended and tile != TileType.HARE:
                raise ValueError(f"{record.name}: suspended on a {tile.value} tile")

        return self


def dump_snapshot(snapshot: GameSnapshot) -> str:
    """Serialize a snapshot to JSON text."""
    return snapshot.model_dump_json(by_alias=True, indent=2)


def parse_snapshot(text: Union[str, bytes]) -> GameSnapshot:
    """
    Parse and validate snapshot JSON.

    Raises:
        InvalidSnapshotError: if the text is not a valid snapshot.
    """
    try:
        return GameSnapshot.model_validate_json(text)
    except ValidationError as e:
        logger.error("Save game is not valid: %s", e)
        raise InvalidSnapshotError(str(e)) from e


def load_snapshot(path: Union[str, Path]) -> GameSnapshot:
    """
    Read a snapshot from a file.

    Raises:
        InvalidSnapshotError: if the file cannot be read or is not valid.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error while reading save file %s: %s", path, e)
        raise InvalidSnapshotError(f"Cannot read save file {path}: {e}") from e

    return parse_snapshot(text)


def save_snapshot(snapshot: GameSnapshot, path: Union[str, Path]) -> None:
    """Write a snapshot to a file. OSError propagates to the caller."""
    Path(path).write_text(dump_snapshot(snapshot) + "\n", encoding="utf-8")
