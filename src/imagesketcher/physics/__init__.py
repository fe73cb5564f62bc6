"""物理エンジン モジュール"""

from .integrator import euler_integrate
from .noise import PerlinNoise
from .utils import clamp_magnitude, from_angle, normalize

__all__ = [
    "euler_integrate",
    "PerlinNoise",
    "clamp_magnitude",
    "from_angle",
    "normalize",
]
