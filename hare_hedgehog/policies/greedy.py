"""Greedy policy that races forward while keeping a carrot reserve."""

from typing import List

from hare_hedgehog.connector import Choice, Decision, PlayerView
from hare_hedgehog.policies.base import Policy


class GreedyPolicy(Policy):
    """
    Simple policy that takes the furthest affordable field.

    Priority order for fields:
    1. The end tile (the last field, only offered when finishing is legal)
    2. The furthest forward field that leaves `reserve` carrots
    3. A hedgehog field behind (negative cost) to refill carrots
    4. The cheapest field

    For carrot decisions it sheds carrots near the end, refills when low and
    otherwise keeps moving.
    """

    def __init__(self, reserve: int = 10, low_carrots: int = 30, endgame_field: int = 50, end_field: int = 64):
        self.reserve = reserve
        self.low_carrots = low_carrots
        self.endgame_field = endgame_field
        self.end_field = end_field

    def choose_field(self, view: PlayerView, fields: List[int], costs: List[int]) -> int:
        if self.end_field in fields:
            return self.end_field

        options = list(zip(fields, costs))
        forward = [f for f, cost in options if cost >= 0 and view.carrots - cost >= self.reserve]
        if forward:
            return max(forward)

        backward = [f for f, cost in options if cost < 0]
        if backward:
            return max(backward)

        return min(options, key=lambda option: option[1])[0]

    def choose(self, view: PlayerView, decision: Decision, amount: int, choices: List[Choice]) -> Choice:
        wants_fewer = view.salads == 0 and view.field >= self.endgame_field and view.carrots > amount
        if wants_fewer and Choice.REMOVE in choices:
            return Choice.REMOVE

        if view.carrots < self.low_carrots and Choice.ADD in choices:
            return Choice.ADD

        for preferred in (Choice.MOVE, Choice.NOTHING):
            if preferred in choices:
                return preferred

        return choices[0]
