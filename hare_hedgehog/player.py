"""
Player state.
"""

from typing import Callable

ChangeListener = Callable[[int], None]


def _ignore(_: int) -> None:
    pass


class Player:
    """
    Mutable state of one participant.

    The name is the player's identity and never changes. Everything else is
    changed by the actions executed during the player's own turn.
    """

    def __init__(
        self,
        name: str,
        field: int,
        carrots: int,
        salads: int,
        suspended: bool = False,
        eats_salad: bool = False,
    ):
        self._name = name
        self.field = field
        self._carrots = carrots
        self._salads = salads
        self.suspended = suspended
        self.eats_salad = eats_salad

        # Display hooks, called with the new value.
        self.on_carrots_changed: ChangeListener = _ignore
        self.on_salads_changed: ChangeListener = _ignore

    @property
    def name(self) -> str:
        return self._name

    @property
    def carrots(self) -> int:
        return self._carrots

    @property
    def salads(self) -> int:
        return self._salads

    def add_carrots(self, count: int) -> None:
        """Add carrots to the player's stock."""
        self._carrots += count
        self.on_carrots_changed(self._carrots)

    def remove_carrots(self, count: int) -> None:
        """Remove carrots. The stock never drops below zero."""
        self._carrots = max(0, self._carrots - count)
        self.on_carrots_changed(self._carrots)

    def consume_salad(self) -> None:
        """Eat one salad. The stock never drops below zero."""
        self._salads = max(0, self._salads - 1)
        self.on_salads_changed(self._salads)

    def consume_all_salads(self) -> None:
        self._salads = 0
        self.on_salads_changed(self._salads)

    def __repr__(self) -> str:
        return (
            f"Player(name='{self.name}', field={self.field}, carrots={self.carrots}, "
            f"salads={self.salads}, suspended={self.suspended}, eats_salad={self.eats_salad})"
        )
