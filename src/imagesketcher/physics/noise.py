"""コヒーレントノイズ (3次元パーリンノイズ)"""

import math
import numpy as np
from imagesketcher import config


def _fade(t: float) -> float:
    """パーリンのフェード関数: 6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    """線形補間"""
    return a + t * (b - a)


def _grad3d(hash_val: int, x: float, y: float, z: float) -> float:
    """12方向の勾配ベクトルとの内積（Improved Noise 2002）"""
    h = hash_val & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


class PerlinNoise:
    """
    シード付き3次元パーリンノイズ

    - 同じシード・同じ入力なら常に同じ値（再現性がテストの前提）
    - オクターブ合成（振幅は falloff 倍ずつ減衰、周波数は2倍ずつ増加）
    - 出力は [0, 1] に正規化

    使用例:
        noise = PerlinNoise(seed=42)
        n = noise(x * 0.01, y * 0.01, t)
    """

    def __init__(
        self,
        seed: int | None = None,
        octaves: int = config.NOISE_OCTAVES,
        falloff: float = config.NOISE_FALLOFF,
    ):
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        if not 0.0 < falloff <= 1.0:
            raise ValueError(f"falloff must be in (0, 1], got {falloff}")

        self.seed = seed
        self.octaves = int(octaves)
        self.falloff = float(falloff)

        # 置換テーブル（256要素を2回繰り返してラップアラウンドを省く）
        rng = np.random.default_rng(seed)
        perm = rng.permutation(256).tolist()
        self._perm = perm + perm

    def _noise(self, x: float, y: float, z: float) -> float:
        """1オクターブ分のノイズ（おおよそ [-1, 1]）"""
        p = self._perm

        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        xi, yi, zi = int(fx) & 255, int(fy) & 255, int(fz) & 255
        xf, yf, zf = x - fx, y - fy, z - fz

        u, v, w = _fade(xf), _fade(yf), _fade(zf)

        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi

        x1 = _lerp(_grad3d(p[aa], xf, yf, zf), _grad3d(p[ba], xf - 1, yf, zf), u)
        x2 = _lerp(_grad3d(p[ab], xf, yf - 1, zf), _grad3d(p[bb], xf - 1, yf - 1, zf), u)
        y1 = _lerp(x1, x2, v)

        x1 = _lerp(_grad3d(p[aa + 1], xf, yf, zf - 1), _grad3d(p[ba + 1], xf - 1, yf, zf - 1), u)
        x2 = _lerp(_grad3d(p[ab + 1], xf, yf - 1, zf - 1), _grad3d(p[bb + 1], xf - 1, yf - 1, zf - 1), u)
        y2 = _lerp(x1, x2, v)

        return _lerp(y1, y2, w)

    def __call__(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        """オクターブ合成したノイズ値 [0, 1]"""
        total = 0.0
        norm = 0.0
        amplitude = 1.0
        frequency = 1.0
        for _ in range(self.octaves):
            n = self._noise(x * frequency, y * frequency, z * frequency)
            total += amplitude * (n + 1.0) * 0.5
            norm += amplitude
            amplitude *= self.falloff
            frequency *= 2.0

        return min(max(total / norm, 0.0), 1.0)
