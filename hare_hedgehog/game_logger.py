"""
JSONL logger for Hare & Hedgehog game events.

Writes the engine's event log to a JSONL file, one JSON object per line.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[Union[str, Path]] = None, log_dir: Union[str, Path] = "."):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file, relative to `log_dir`. If None,
                generates a timestamped filename inside `log_dir`.
            log_dir: Directory for relative and generated filenames.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"hare_hedgehog_game_{timestamp}.jsonl"

        # An absolute log_file replaces log_dir.
        self.log_file = Path(log_dir) / log_file
        self.event_count = 0
        self._engine_last_idx = 0  # last flushed index of the engine's EventLog

        # Create/clear log file
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.log_file.write_text("", encoding="utf-8")
        logger.debug("Writing game log to %s", self.log_file)

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a game event to the JSONL file.

        Args:
            event_type: Type of event (e.g. "game_start", "move")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1

    def flush_engine_events(self, game) -> int:
        """Write engine events logged since the last flush.

        Returns the number of events written.
        """
        events = game.event_log.events
        if self._engine_last_idx >= len(events):
            return 0

        wrote = 0
        for event in events[self._engine_last_idx :]:
            data = event.to_dict()
            etype = data.pop("event_type")
            self.log_event(etype, **data)
            wrote += 1

        self._engine_last_idx = len(events)
        return wrote

    def log_turn_snapshot(self, game) -> None:
        """Log the state of every player."""
        for index, player in enumerate(game.players):
            self.log_player_state(
                turn_number=game.turn_number,
                player_index=index,
                player_name=player.name,
                field=player.field,
                tile=game.board.tile_type(player.field).value,
                carrots=player.carrots,
                salads=player.salads,
                suspended=player.suspended,
                eats_salad=player.eats_salad,
                rank=game.rank(player),
            )

    def log_player_state(self, turn_number: int, player_index: int, player_name: str, **state: Any) -> None:
        """Log a player's state."""
        self.log_event(
            "player_state",
            turn_number=turn_number,
            player_index=player_index,
            player_name=player_name,
            **state,
        )

    def log_game_end(self, game) -> None:
        """Log the final standings."""
        winner = game.winner
        self.log_event(
            "final_standings",
            turn_number=game.turn_number,
            winner_name=winner.name if winner else None,
            standings=[
                {"rank": rank, "player_name": p.name, "field": p.field, "carrots": p.carrots}
                for rank, p in game.standings()
            ],
        )
