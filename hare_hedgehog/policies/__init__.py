from hare_hedgehog.policies.base import Policy
from hare_hedgehog.policies.random import RandomPolicy
from hare_hedgehog.policies.greedy import GreedyPolicy

__all__ = [
    "Policy",
    "RandomPolicy",
    "GreedyPolicy",
]
