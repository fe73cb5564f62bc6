"""ビヘイビア モジュール"""

from .base import Behavior
from .color import ColorEvolution
from .deaths import BoundsDeath, DistanceDeath, LifetimeDeath, jittered
from .forces import AttractiveForce, LinearBoundsForce, NoiseForce

__all__ = [
    "Behavior",
    "AttractiveForce",
    "NoiseForce",
    "LinearBoundsForce",
    "BoundsDeath",
    "LifetimeDeath",
    "DistanceDeath",
    "ColorEvolution",
    "jittered",
]
