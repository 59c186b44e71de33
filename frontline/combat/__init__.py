"""
Combat resolution.

Only ground combat exists: a unit that moves next to an enemy attacks it.
"""

from .base import CombatResolver, CombatReport
from .ground import GroundCombat

__all__ = [
    "CombatResolver",
    "CombatReport",
    "GroundCombat",
]
