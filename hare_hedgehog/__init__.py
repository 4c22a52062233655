"""
Hare & Hedgehog Rules Engine

A UI-independent implementation of the Hare & Hedgehog board game rules.
"""

from .board import Board, TileType
from .cards import ActionCard, ActionCardStack
from .config import GameConfig
from .connector import PolicyConnector, UIConnector
from .game import Game, GameStatus, create_game
from .player import Player
from .snapshot import GameSnapshot, load_snapshot

__all__ = [
    "Board",
    "TileType",
    "ActionCard",
    "ActionCardStack",
    "GameConfig",
    "PolicyConnector",
    "UIConnector",
    "Game",
    "GameStatus",
    "create_game",
    "Player",
    "GameSnapshot",
    "load_snapshot",
]
