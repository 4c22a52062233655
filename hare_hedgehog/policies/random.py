"""Random policy that picks uniformly among the offered options."""

import random
from typing import List, Optional

from hare_hedgehog.connector import Choice, Decision, PlayerView
from hare_hedgehog.policies.base import Policy


class RandomPolicy(Policy):
    """Picks any offered field or answer with equal probability."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def choose_field(self, view: PlayerView, fields: List[int], costs: List[int]) -> int:
        return self.rng.choice(fields)

    def choose(self, view: PlayerView, decision: Decision, amount: int, choices: List[Choice]) -> Choice:
        return self.rng.choice(choices)
