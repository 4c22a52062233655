"""
Custom exception hierarchy for the Hare & Hedgehog engine.

Only programming and data-integrity failures are exceptions. Legal game
outcomes such as "no field to move to" are branches of the action logic.
"""


class HareHedgehogError(Exception):
    """Base exception for all engine errors."""


class InvalidSetupError(HareHedgehogError):
    """A game cannot be created from the given players or configuration."""


class InvalidSnapshotError(HareHedgehogError):
    """A save snapshot is malformed or violates the game rules."""


class InvalidFieldError(HareHedgehogError):
    """A field index outside the board reached a place that requires a valid one."""


class ContinuationError(HareHedgehogError):
    """A continuation was invoked more than once."""
