"""力を与えるビヘイビア"""

import math
import numpy as np
from imagesketcher import config
from imagesketcher.behaviors.base import Behavior, check_number, parse_kernel_size
from imagesketcher.physics.noise import PerlinNoise
from imagesketcher.physics.utils import from_angle
from imagesketcher.rendering.color import similarity

TWO_PI = 2.0 * math.pi


class AttractiveForce(Behavior):
    """
    近くの「自分と似た色」の画素へ引き寄せる力

    カーネル窓内の各画素（中心を除く）について、
        類似度 = 1 - max(|Δr|, |Δg|, |Δb|) / 255
    を重みとしてその画素方向の単位ベクトルを足し合わせる。
    バッファ外の画素は和にも個数にも含めない。
    """

    name = "attractive_force"

    def __init__(
        self,
        kernel_size=config.ATTRACTION_KERNEL_SIZE,
        force_factor: float = config.ATTRACTION_FORCE_FACTOR,
        average: bool = False,
    ):
        self.kernel_width, self.kernel_height = parse_kernel_size(kernel_size)
        self.force_factor = check_number("force_factor", force_factor)
        self.average = bool(average)

        # 偶数サイズは奇数に切り上げ（中心から左右対称に取る）
        self._half_width = self.kernel_width // 2
        self._half_height = self.kernel_height // 2

    def update(self, sketcher):
        pass

    def compute_force(self, particle) -> np.ndarray:
        """このビヘイビアが particle に与える力"""
        cx = math.floor(particle.position[0])
        cy = math.floor(particle.position[1])

        view, x0, y0 = particle.buffer.window(
            cx - self._half_width, cy - self._half_height,
            cx + self._half_width + 1, cy + self._half_height + 1,
        )
        if view.size == 0:
            return np.array([0.0, 0.0])

        rows, cols = view.shape[:2]
        offset_y, offset_x = np.mgrid[y0 - cy:y0 - cy + rows, x0 - cx:x0 - cx + cols]
        valid = (offset_x != 0) | (offset_y != 0)
        count = int(valid.sum())
        if count == 0:
            return np.array([0.0, 0.0])

        weight = similarity(view, particle.color) * valid

        distance = np.hypot(offset_x, offset_y)
        distance[~valid] = 1.0
        total = np.array([
            float((offset_x / distance * weight).sum()),
            float((offset_y / distance * weight).sum()),
        ])

        if self.average:
            return total * (self.force_factor / count)
        return total * self.force_factor

    def apply_to_particle(self, particle):
        particle.force += self.compute_force(particle)

    def __repr__(self):
        return (f"AttractiveForce(kernel_size=({self.kernel_width}, {self.kernel_height}), "
                f"force_factor={self.force_factor}, average={self.average})")


class NoiseForce(Behavior):
    """
    コヒーレントノイズで向きが決まる力（流れ場）

    角度 = (noise(x·scale, y·scale, (time_offset + update_count)·time_factor)
            · angle_spread · 2π) mod 2π

    activation_threshold を指定すると、それまでに蓄積された力が閾値未満の
    パーティクルには influence × activation_boost の強さで作用する
    （他の力が効いていない場所で流れを強める）。
    """

    name = "noise_force"

    def __init__(
        self,
        noise_scale: float = config.NOISE_SCALE,
        influence: float = config.NOISE_INFLUENCE,
        time_factor: float = config.NOISE_TIME_FACTOR,
        time_offset: float = None,
        seed: int = None,
        angle_spread: float = config.NOISE_ANGLE_SPREAD,
        activation_threshold: float = None,
        activation_boost: float = 5.0,
    ):
        self.noise_scale = check_number("noise_scale", noise_scale, minimum=0.0)
        self.influence = check_number("influence", influence)
        self.time_factor = check_number("time_factor", time_factor)
        self.angle_spread = check_number("angle_spread", angle_spread, minimum=0.0, allow_minimum=False)
        if activation_threshold is not None:
            activation_threshold = check_number("activation_threshold", activation_threshold, minimum=0.0)
        self.activation_threshold = activation_threshold
        self.activation_boost = check_number("activation_boost", activation_boost)

        self.noise = PerlinNoise(seed)
        if time_offset is None:
            # 同時に動く複数スケッチのノイズをずらすためのランダムオフセット
            time_offset = float(np.random.default_rng(seed).uniform(0.0, 10.0))
        self.time_offset = check_number("time_offset", time_offset)

        self.update_count = 0

    def update(self, sketcher):
        self.update_count += 1

    def angle_at(self, position) -> float:
        """位置 position における力の向き [0, 2π)"""
        n = self.noise(
            position[0] * self.noise_scale,
            position[1] * self.noise_scale,
            (self.time_offset + self.update_count) * self.time_factor,
        )
        return (n * self.angle_spread * TWO_PI) % TWO_PI

    def apply_to_particle(self, particle):
        influence = self.influence
        if (self.activation_threshold is not None
                and np.linalg.norm(particle.force) < self.activation_threshold):
            influence *= self.activation_boost

        particle.force += from_angle(self.angle_at(particle.position), influence)

    def __repr__(self):
        return (f"NoiseForce(noise_scale={self.noise_scale}, influence={self.influence}, "
                f"time_factor={self.time_factor}, time_offset={self.time_offset:.4f})")


_SIDES = ("top", "right", "bottom", "left")


def parse_bounds(bounds) -> dict:
    """
    境界指定を {top, right, bottom, left} の距離に正規化

    Args:
        bounds: 全辺共通の距離、または 'top'/'right'/'bottom'/'left' の
            いずれかをキーに持つ dict（指定のない辺は 0 = 無効）

    Raises:
        TypeError: 数値でも dict でもない、または値が数値でない
        ValueError: 負の距離・未知のキー・どの辺も指定されていない
    """
    if isinstance(bounds, dict):
        unknown = set(bounds) - set(_SIDES)
        if unknown:
            raise ValueError(f"unknown bounds keys: {sorted(unknown)}")
        if not bounds:
            raise ValueError("bounds dict must contain at least one of 'top', 'right', 'bottom', 'left'")
        return {side: check_number(side, bounds.get(side, 0), minimum=0.0) for side in _SIDES}

    if isinstance(bounds, bool) or not isinstance(bounds, (int, float, np.integer, np.floating)):
        raise TypeError(
            "bounds must either be a number or a dict containing the keys 'top', 'right', 'bottom' or 'left'"
        )
    inset = check_number("bounds", bounds, minimum=0.0)
    return {side: inset for side in _SIDES}


class LinearBoundsForce(Behavior):
    """
    画像の縁に近づくと内側へ押し戻す力

    各辺ごとに、内側の境界線で0、画像の縁で1となる線形ランプに force_factor を掛ける。
    同じ軸の両側が同時に反応した場合は後から判定した辺（右・下）の値で上書きされる。
    距離0の辺は無効。
    """

    name = "linear_bounds_force"

    def __init__(self, bounds=config.BOUNDS_INSET, force_factor: float = config.BOUNDS_FORCE_FACTOR):
        insets = parse_bounds(bounds)
        self.top = insets["top"]
        self.right = insets["right"]
        self.bottom = insets["bottom"]
        self.left = insets["left"]
        self.force_factor = check_number("force_factor", force_factor)

    def update(self, sketcher):
        pass

    def compute_force(self, particle) -> np.ndarray:
        """このビヘイビアが particle に与える力"""
        x, y = particle.position
        width, height = particle.buffer.width, particle.buffer.height

        force = np.array([0.0, 0.0])
        if self.left > 0 and x < self.left:
            force[0] = (self.left - x) / self.left
        if self.right > 0 and x > width - self.right:
            force[0] = (x - width) / self.right
        if self.top > 0 and y < self.top:
            force[1] = (self.top - y) / self.top
        if self.bottom > 0 and y > height - self.bottom:
            force[1] = (y - height) / self.bottom

        return force * self.force_factor

    def apply_to_particle(self, particle):
        particle.force += self.compute_force(particle)

    def __repr__(self):
        return (f"LinearBoundsForce(bounds={{'top': {self.top}, 'right': {self.right}, "
                f"'bottom': {self.bottom}, 'left': {self.left}}}, force_factor={self.force_factor})")
