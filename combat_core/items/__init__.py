"""
Items package for the combat core.

Contains the read-only equipment and consumable records.
"""

from .armor import Armor
from .consumable import Consumable
from .weapon import Weapon

__all__ = [
    "Armor",
    "Consumable",
    "Weapon",
]
