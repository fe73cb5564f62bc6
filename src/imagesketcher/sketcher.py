"""スケッチャー（パーティクル・ビヘイビア・画素バッファの統括）"""

import logging
import math
from pathlib import Path
from typing import Callable
import numpy as np
from imagesketcher import config
from imagesketcher.behaviors import (
    AttractiveForce,
    Behavior,
    BoundsDeath,
    ColorEvolution,
    LifetimeDeath,
    LinearBoundsForce,
    NoiseForce,
    jittered,
)
from imagesketcher.behaviors.base import check_number
from imagesketcher.entities.particle import Particle
from imagesketcher.rendering.pixel_buffer import PixelBuffer, check_dimension
from imagesketcher.spawn import random_spawn

logger = logging.getLogger(__name__)

_PARTICLE_DEFAULTS = (
    'dampening_factor',
    'max_speed',
    'drop_rate',
    'drop_alpha',
    'drop_max_size',
    'draw_alpha',
    'draw_weight',
)


def default_behaviors(seed: int = None) -> list[Behavior]:
    """
    推奨順のビヘイビア一覧

    色の変化 → 死亡判定 → 力 の順（死ぬパーティクルに無駄な力計算をさせない）。
    """
    return [
        ColorEvolution(),
        LifetimeDeath(jittered(config.MAX_LIFE)),
        BoundsDeath(),
        LinearBoundsForce(),
        NoiseForce(seed=seed),
        AttractiveForce(),
    ]


def _check_count(name: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def _check_dimension(name: str, value):
    """明示指定の寸法は正の整数のみ（未指定は None のまま）"""
    if value is None:
        return None
    return check_dimension(name, value)


class Sketcher:
    """
    パーティクルで画像を描き起こすスケッチ

    - ピクセルバッファ（対象画像の私有コピー）を唯一所有する
    - パーティクル集団を particle_count に保ち、毎フレーム
      ビヘイビア前処理 → 各パーティクル×サブステップの更新・描画 → 死亡個体の補充
      を行う
    - ホストは preload() → setup() を一度ずつ、その後 tick(canvas) を毎フレーム呼ぶ

    パーティクル既定値（max_speed など）は属性として後から変更できるが、
    反映されるのは以降にスポーンしたパーティクルだけ。
    """

    def __init__(
        self,
        image,
        width: int = None,
        height: int = None,
        particle_count: int = config.PARTICLE_COUNT,
        steps_per_frame: int = config.STEPS_PER_FRAME,
        start_stopped: bool = config.START_STOPPED,
        behaviors: list[Behavior] = None,
        spawn_generator: Callable = None,
        style: config.PaintStyle = config.PaintStyle.INK,
        dampening_factor: float = None,
        max_speed: float = None,
        drop_rate: float = None,
        drop_alpha: float = None,
        drop_max_size: float = None,
        draw_alpha: float = None,
        draw_weight: float = None,
        default_velocity=config.DEFAULT_VELOCITY,
        seed: int = None,
        on_click: Callable = None,
        on_key: Callable = None,
    ):
        if image is None:
            raise TypeError("image is None, you must pass an image or an image path")
        if style not in config.STYLE_PRESETS:
            raise ValueError(f"unknown paint style: {style!r}")

        self.image = image
        self.width = _check_dimension("width", width)
        self.height = _check_dimension("height", height)

        self.particle_count = _check_count("particle_count", particle_count, 0)
        self.steps_per_frame = _check_count("steps_per_frame", steps_per_frame, 1)
        self.is_stopped = bool(start_stopped)

        # 乱数（スポーン位置・ドロップ・寿命のばらつき）
        self.seed = seed
        self.rng = np.random.default_rng(seed)

        if behaviors is None:
            behaviors = default_behaviors(seed)
        for behavior in behaviors:
            if not isinstance(behavior, Behavior):
                raise TypeError(f"behaviors must be Behavior instances, got {type(behavior).__name__}")
        self.behaviors = list(behaviors)

        spawn_generator = spawn_generator if spawn_generator is not None else random_spawn
        if not callable(spawn_generator):
            raise TypeError("spawn_generator must be callable: (sketcher) -> (position, color)")
        self.spawn_generator = spawn_generator

        # パーティクル既定値（スタイルのプリセット → 個別指定で上書き）
        self.style = style
        preset = config.STYLE_PRESETS[style]
        overrides = {
            'dampening_factor': dampening_factor,
            'max_speed': max_speed,
            'drop_rate': drop_rate,
            'drop_alpha': drop_alpha,
            'drop_max_size': drop_max_size,
            'draw_alpha': draw_alpha,
            'draw_weight': draw_weight,
        }
        for key in _PARTICLE_DEFAULTS:
            setattr(self, key, overrides[key] if overrides[key] is not None else preset[key])
        self.default_velocity = np.array(default_velocity, dtype=float)
        self._validate_particle_defaults()

        # リスナー
        self.on_click = on_click
        self.on_key = on_key

        # 状態
        self.buffer: PixelBuffer = None
        self.particles: list[Particle] = []
        self.frame_count = 0
        self.is_preloaded = False
        self.is_setup = False
        self._clear_requested = False
        self._repopulate_requested = False
        self._dirty = False

    def _validate_particle_defaults(self):
        """パーティクル既定値の検証"""
        check_number("dampening_factor", self.dampening_factor, minimum=0.0, maximum=1.0, allow_minimum=False)
        check_number("max_speed", self.max_speed, minimum=0.0, allow_minimum=False)
        check_number("drop_rate", self.drop_rate, minimum=0.0, maximum=1.0)
        check_number("drop_alpha", self.drop_alpha, minimum=0.0, maximum=255.0)
        check_number("drop_max_size", self.drop_max_size, minimum=0.0)
        check_number("draw_alpha", self.draw_alpha, minimum=0.0, maximum=255.0)
        check_number("draw_weight", self.draw_weight, minimum=0.0)
        if self.default_velocity.shape != (2,):
            raise ValueError(f"default_velocity must have 2 components, got {self.default_velocity.shape}")

    # --- ホストのライフサイクル ---

    def preload(self):
        """
        重い準備処理（画像ファイルの読み込み）。2回目以降は何もしない。

        Raises:
            FileNotFoundError / pygame.error: 画像が読み込めない（再試行しない）
        """
        if self.is_preloaded:
            return

        if isinstance(self.image, (str, Path)):
            self.image = PixelBuffer.load(self.image)

        self.is_preloaded = True

    def setup(self, parent=None):
        """
        寸法の決定・画像の取り込み・初期パーティクルの生成。2回目以降は何もしない。

        Args:
            parent: 親コンポーネント（ルートなら None）。寸法決定には使わない。
        """
        if self.is_setup:
            return
        if not self.is_preloaded:
            self.preload()

        source = PixelBuffer.from_image(self.image)
        self.width, self.height = self._resolve_dimensions(source)
        self.set_target_image(source)

        self.particles = [self.spawn_particle() for _ in range(self.particle_count)]
        self._repopulate_requested = False

        self.is_setup = True
        logger.info(
            "Sketcher set up: %dx%d, %d particles x %d steps, behaviors=%s",
            self.width, self.height, self.particle_count, self.steps_per_frame,
            [b.name for b in self.behaviors],
        )

    def _resolve_dimensions(self, source: PixelBuffer) -> tuple[int, int]:
        """
        幅・高さを決める

        - 両方未指定: 画像の寸法
        - 片方だけ未指定: 画像の縦横比を保って推定（切り捨て、最小1）
        明示指定の寸法は構築時に整数であることを検証済み。
        """
        width, height = self.width, self.height
        if width is None and height is None:
            width, height = source.width, source.height
        elif width is None:
            width = source.width / source.height * height
        elif height is None:
            height = source.height / source.width * width

        return max(1, math.floor(width)), max(1, math.floor(height))

    def tick(self, canvas):
        """
        1フレーム分の更新と描画

        1. クリア要求があればキャンバスを消去（画像差し替え後なら集団も破棄）
        2. 停止中ならここで終了
        3. 各ビヘイビアの前処理
        4. 個体数の調整（不足分をスポーン、超過分を除去）
        5. 各パーティクルを steps_per_frame 回 更新・描画し、死んだら即座に補充
        """
        if not self.is_setup:
            raise RuntimeError("setup() must be called before tick()")

        if self._clear_requested:
            canvas.clear()
            self._clear_requested = False
            if self._repopulate_requested:
                self.particles.clear()
                self._repopulate_requested = False

        if self.is_stopped:
            return

        for behavior in self.behaviors:
            behavior.update(self)

        self._maintain_population()

        replaced = 0
        for index in range(len(self.particles)):
            particle = self.particles[index]
            for _ in range(self.steps_per_frame):
                particle.update()
                particle.paint(canvas)
                if not particle.is_alive:
                    self.particles[index] = self.spawn_particle()
                    replaced += 1
                    break

        self._dirty = True
        self.frame_count += 1

        if self.frame_count % config.LOG_THROTTLE_FRAMES == 0:
            speeds = [np.linalg.norm(p.velocity) for p in self.particles]
            logger.debug(
                "Frame %d | particles=%d replaced=%d mean_speed=%.3f",
                self.frame_count, len(self.particles), replaced,
                float(np.mean(speeds)) if speeds else 0.0,
            )

    def _maintain_population(self):
        """個体数を particle_count に揃える"""
        while len(self.particles) < self.particle_count:
            self.particles.append(self.spawn_particle())
        if len(self.particles) > self.particle_count:
            del self.particles[self.particle_count:]

    # --- パーティクル ---

    def spawn_particle(self) -> Particle:
        """スポーンジェネレーターと現在の既定値から新しいパーティクルを作る"""
        position, color = self.spawn_generator(self)
        return Particle(
            self,
            position,
            color,
            velocity=self.default_velocity.copy(),
            **{key: getattr(self, key) for key in _PARTICLE_DEFAULTS},
        )

    # --- 画像 ---

    def set_target_image(self, image):
        """
        対象画像を差し替える

        設定済みの寸法で新しいバッファを確保して最近傍補間でコピーし、
        次の tick でキャンバスを消去・集団を作り直す。
        """
        source = image if isinstance(image, PixelBuffer) else PixelBuffer.from_image(image)
        if self.width is None or self.height is None:
            self.width, self.height = self._resolve_dimensions(source)

        buffer = PixelBuffer(math.floor(self.width), math.floor(self.height))
        buffer.copy_from(source)
        self.buffer = buffer

        self._clear_requested = True
        self._repopulate_requested = True
        self._dirty = True
        logger.info("Target image set (%dx%d -> %dx%d)",
                    source.width, source.height, buffer.width, buffer.height)

    def request_clear(self):
        """次の tick でキャンバスを消去する"""
        self._clear_requested = True

    def consume_dirty(self) -> bool:
        """バッファが前回の確認以降に変更されたか（確認するとリセット）"""
        dirty = self._dirty
        self._dirty = False
        return dirty

    # --- 停止制御 ---

    def stop(self):
        self.is_stopped = True

    def resume(self):
        self.is_stopped = False

    def toggle_stopped(self):
        self.is_stopped = not self.is_stopped
        logger.info("Sketcher %s", "stopped" if self.is_stopped else "resumed")

    # --- 入力 ---

    def on_mouse_click(self, x: float, y: float):
        """クリック（登録されたリスナーへ委譲）"""
        if self.on_click is not None:
            self.on_click(x, y)

    def on_key_press(self, key: str):
        """キー入力（'s' で停止/再開を切り替え、その後リスナーへ委譲）"""
        if key in ('s', 'S'):
            self.toggle_stopped()
        if self.on_key is not None:
            self.on_key(key)
