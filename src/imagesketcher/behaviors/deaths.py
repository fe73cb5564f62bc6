"""死亡判定ビヘイビア"""

import logging
from abc import abstractmethod
from imagesketcher import config
from imagesketcher.behaviors.base import Behavior, check_number

logger = logging.getLogger(__name__)


class BoundsDeath(Behavior):
    """位置が [0, width) × [0, height) の外に出たら死亡（現在のバッファ寸法で判定）"""

    name = "bounds_death"

    def update(self, sketcher):
        pass

    def apply_to_particle(self, particle):
        x, y = particle.position
        buffer = particle.buffer
        if x < 0 or y < 0 or x >= buffer.width or y >= buffer.height:
            particle.kill()


def _check_limit(name: str, limit):
    """定数（正の数）または関数 (particle) -> 数 であることを検証"""
    if callable(limit):
        return limit
    try:
        return check_number(name, limit, minimum=0.0, allow_minimum=False)
    except TypeError:
        raise TypeError(
            f"{name} must either be a number or a function which returns a number, "
            f"got {type(limit).__name__}"
        ) from None


class _PerParticleLimitDeath(Behavior):
    """
    パーティクルごとの累積値が上限に達したら死亡させるビヘイビアの共通部分

    - 補助テーブルはパーティクルの同一性をキーにした dict
    - 上限が関数なら、初めて観測したときに一度だけ評価してキャッシュ
    - 他の原因で死んだパーティクルのエントリは残るため、テーブルが
      PURGE_FACTOR × particle_count を超えたら update で死亡済みを掃除する
    """

    def __init__(self, limit_name: str, limit):
        self._limit_name = limit_name
        self._limit = _check_limit(limit_name, limit)
        self._totals = {}
        self._limits = {}

    @abstractmethod
    def _increment(self, particle) -> float:
        """今回の増分"""

    def update(self, sketcher):
        if len(self._totals) > config.PURGE_FACTOR * sketcher.particle_count:
            dead = [p for p in self._totals if not p.is_alive]
            for particle in dead:
                del self._totals[particle]
                del self._limits[particle]
            logger.debug("%s purged %d dead entries (%d remain)",
                         self.name, len(dead), len(self._totals))

    def apply_to_particle(self, particle):
        increment = self._increment(particle)
        if particle not in self._totals:
            self._limits[particle] = self._resolve_limit(particle)
            self._totals[particle] = increment
        else:
            self._totals[particle] += increment

        if self._totals[particle] >= self._limits[particle]:
            del self._totals[particle]
            del self._limits[particle]
            particle.kill()

    def _resolve_limit(self, particle) -> float:
        """
        particle の上限値（関数なら評価して検証）

        Raises:
            TypeError / ValueError: 関数が正の有限な数を返さなかった
        """
        if not callable(self._limit):
            return self._limit
        value = self._limit(particle)
        try:
            return check_number(self._limit_name, value, minimum=0.0, allow_minimum=False)
        except (TypeError, ValueError) as e:
            raise type(e)(
                f"{self._limit_name} function must return a positive number, got {value!r}"
            ) from None

    def tracked_count(self) -> int:
        """補助テーブルのエントリ数"""
        return len(self._totals)

    def total_for(self, particle) -> float | None:
        """particle の現在の累積値（未観測なら None）"""
        return self._totals.get(particle)


class LifetimeDeath(_PerParticleLimitDeath):
    """
    一定回数の更新で死亡

    カウンタは初めて観測したとき1から始まり、max_life に達した回の更新で死亡する
    （max_life = 5 なら5回目の apply_to_particle で死亡）。
    """

    name = "lifetime_death"

    def __init__(self, max_life=config.MAX_LIFE):
        super().__init__("max_life", max_life)

    def _increment(self, particle) -> float:
        return 1


class DistanceDeath(_PerParticleLimitDeath):
    """累積移動距離（毎ステップの速さの和）が max_distance に達したら死亡"""

    name = "distance_death"

    def __init__(self, max_distance):
        super().__init__("max_distance", max_distance)

    def _increment(self, particle) -> float:
        vx, vy = particle.velocity
        return float((vx * vx + vy * vy) ** 0.5)


def jittered(base: float, jitter: float = config.MAX_LIFE_JITTER):
    """
    上限を base·[1 - jitter, 1 + jitter) の一様乱数で個体ごとにばらつかせる関数を作る

    乱数は各パーティクルが所属する Sketcher の rng から引く（シード再現性のため）。
    """
    base = check_number("base", base, minimum=0.0, allow_minimum=False)
    jitter = check_number("jitter", jitter, minimum=0.0, maximum=1.0)

    def generate(particle) -> float:
        return base * particle.sketcher.rng.uniform(1.0 - jitter, 1.0 + jitter)

    return generate
