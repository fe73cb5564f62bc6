"""描画パーティクル (ステートマシン)"""

import math
import numpy as np
from enum import Enum, auto
from imagesketcher import config
from imagesketcher.physics.integrator import euler_integrate
from imagesketcher.physics.utils import zero_vector
from imagesketcher.rendering.color import lighten


class ParticleState(Enum):
    """パーティクルのライフサイクル"""
    SPAWNED = auto()  # 生成直後（まだ一度も更新されていない）
    ALIVE = auto()    # 更新中
    DEAD = auto()     # 終端（次の個体数調整で除去）


class Particle:
    """
    画像の上を動き回り、軌跡を描きながら画素を書き換える質点

    - 物理状態: 位置・前回位置・速度・蓄積力
    - 描画状態: 色（RGBA, float）・線の太さ/不透明度・ドロップ確率
    - 物理/描画パラメータはスポーン時に Sketcher の既定値からコピーされる
      （後から既定値を変えても既存パーティクルには影響しない）
    - バッファ・ビヘイビア・乱数は所属する Sketcher から参照する
    """

    def __init__(
        self,
        sketcher,
        position,
        color,
        velocity=None,
        dampening_factor: float = None,
        max_speed: float = None,
        drop_rate: float = None,
        drop_alpha: float = None,
        drop_max_size: float = None,
        draw_alpha: float = None,
        draw_weight: float = None,
    ):
        self.sketcher = sketcher

        self.position = np.array(position, dtype=float)
        self.last_position = self.position.copy()
        self.velocity = np.array(
            velocity if velocity is not None else sketcher.default_velocity, dtype=float
        )
        self.force = zero_vector()

        # 物理パラメータ
        self.dampening_factor = dampening_factor if dampening_factor is not None else sketcher.dampening_factor
        self.max_speed = max_speed if max_speed is not None else sketcher.max_speed

        # 描画パラメータ
        self.drop_rate = drop_rate if drop_rate is not None else sketcher.drop_rate
        self.drop_alpha = drop_alpha if drop_alpha is not None else sketcher.drop_alpha
        self.drop_max_size = drop_max_size if drop_max_size is not None else sketcher.drop_max_size
        self.draw_alpha = draw_alpha if draw_alpha is not None else sketcher.draw_alpha
        self.draw_weight = draw_weight if draw_weight is not None else sketcher.draw_weight

        rgba = [float(c) for c in color]
        self.color = np.array(rgba[:3] + [float(self.draw_alpha)])

        # ステートマシン
        self.state = ParticleState.SPAWNED
        self._retired = False  # 死亡後の update を一度受けたら描画も止める

    # --- ライフサイクル ---

    @property
    def is_alive(self) -> bool:
        """生存判定"""
        return self.state != ParticleState.DEAD

    def kill(self):
        """死亡させる（終端状態、元には戻らない）"""
        self.state = ParticleState.DEAD

    @property
    def buffer(self):
        """所属する Sketcher の現在のピクセルバッファ"""
        return self.sketcher.buffer

    # --- 更新 ---

    def update(self):
        """
        1ステップ分の更新

        1. 前回位置を保存、蓄積力をリセット
        2. ビヘイビアを登録順に適用（後のビヘイビアは前の蓄積力を参照できる）
        3. オイラー積分（減衰・速度上限）

        このステップ中に死亡しても積分と描画は一度だけ行われる。
        死亡済みで呼ばれた場合は何もしない。
        """
        if self.state == ParticleState.DEAD:
            self._retired = True
            return

        if self.state == ParticleState.SPAWNED:
            self.state = ParticleState.ALIVE

        self.last_position = self.position.copy()
        self.force = zero_vector()

        for behavior in self.sketcher.behaviors:
            behavior.apply_to_particle(self)

        self.position, self.velocity = euler_integrate(
            self.position,
            self.velocity,
            self.force,
            self.dampening_factor,
            self.max_speed,
        )

    # --- 描画 ---

    def stroke_color(self, alpha: float = None) -> tuple:
        """キャンバスへ渡す色（alpha 指定時はその不透明度で）"""
        r, g, b, a = self.color
        return (r, g, b, a if alpha is None else alpha)

    def paint(self, canvas):
        """
        前回位置→現在位置の線分を描き、その下の画素を明るくする

        drop_rate の確率で、太く濃い「インク溜まり」を重ね描きする。
        """
        if self._retired:
            return

        x1, y1 = self.last_position
        x2, y2 = self.position

        canvas.stroke(self.stroke_color())
        canvas.stroke_weight(self.draw_weight)
        canvas.line(x1, y1, x2, y2)

        if self.sketcher.rng.random() < self.drop_rate:
            upper = max(self.drop_max_size, self.draw_weight)
            bold_weight = self.sketcher.rng.uniform(self.draw_weight, upper)
            canvas.stroke(self.stroke_color(self.drop_alpha))
            canvas.stroke_weight(bold_weight)
            canvas.line(x1, y1, x2, y2)
            # 通常の不透明度に戻す
            canvas.stroke(self.stroke_color())
            canvas.stroke_weight(self.draw_weight)

        self.fade_line(x1, y1, x2, y2)

    def fade_line(self, x1: float, y1: float, x2: float, y2: float, delta: int = config.FADE_DELTA):
        """
        線分が通過した画素を明るくする（顔料を吸い取ったような効果）

        step = max(floor|dx|, floor|dy|) 点をサンプルする。バッファ外の点はスキップ。
        """
        buffer = self.buffer
        step = max(math.floor(abs(x1 - x2)), math.floor(abs(y1 - y2)))

        for i in range(step):
            x = math.floor(x1 + (x2 - x1) * i / step)
            y = math.floor(y1 + (y2 - y1) * i / step)
            if not buffer.contains(x, y):
                continue
            buffer.set(x, y, lighten(buffer.get(x, y), delta))
