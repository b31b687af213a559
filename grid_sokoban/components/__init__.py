"""Component dataclasses.

All components are frozen; a state transition creates new instances rather
than mutating existing ones.
"""

from .actor import Actor
from .position import Position

__all__ = [
    "Actor",
    "Position",
]
