"""Base class for decision policies driving unattended games."""

from abc import ABC, abstractmethod
from typing import List

from hare_hedgehog.connector import Choice, Decision, PlayerView


class Policy(ABC):
    """
    Abstract base class for decision policies.

    A policy answers the two kinds of questions the engine asks through a
    `PolicyConnector`: which field to move to and which option of a
    multiple-choice decision to take.
    """

    @abstractmethod
    def choose_field(self, view: PlayerView, fields: List[int], costs: List[int]) -> int:
        """
        Choose one of the offered fields.

        Args:
            view: The player whose turn it is.
            fields: Offered fields, ascending, never empty.
            costs: Carrot cost per field; negative values are gains.

        Returns:
            One of `fields`.
        """

    @abstractmethod
    def choose(self, view: PlayerView, decision: Decision, amount: int, choices: List[Choice]) -> Choice:
        """
        Choose one of the offered answers.

        Args:
            view: The player whose turn it is.
            decision: What is being decided.
            amount: Carrots at stake.
            choices: Offered answers, never empty.

        Returns:
            One of `choices`.
        """
