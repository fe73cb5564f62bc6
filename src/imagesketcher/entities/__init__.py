"""エンティティ モジュール"""

from .particle import Particle, ParticleState

__all__ = ["Particle", "ParticleState"]
