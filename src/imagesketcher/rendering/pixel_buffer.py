"""ピクセルバッファ (RGBA グリッド)"""

import logging
import math
import numpy as np
import pygame
from imagesketcher.rendering.color import Color, to_rgba

logger = logging.getLogger(__name__)

TRANSPARENT: Color = (0, 0, 0, 0)

Rect = tuple[int, int, int, int]


def check_dimension(name: str, value) -> int:
    """正の整数であることを検証"""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return int(value)


class PixelBuffer:
    """
    width×height の RGBA 画素グリッド

    - データは (height, width, 4) の uint8 配列（C順）
      → フラットインデックスは (y·width + x)·4
    - 範囲外アクセスの扱い（全メソッド共通）:
        get: 透明な黒 (0, 0, 0, 0) を返す
        set: 何もしない
    - 外部から渡された画像は必ずコピーして保持する（エイリアスしない）
    - サイズは生成後に変更しない。画像の差し替えは新しいバッファを作って copy_from する
    """

    def __init__(self, width: int, height: int, fill=TRANSPARENT):
        self.width = check_dimension("width", width)
        self.height = check_dimension("height", height)
        self._data = np.empty((self.height, self.width, 4), dtype=np.uint8)
        self._data[:, :] = to_rgba(fill)

    # --- 生成 ---

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """(h, w, 3) または (h, w, 4) の配列からコピーして生成"""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"array must have shape (h, w, 3|4), got {array.shape}")

        buffer = cls(array.shape[1], array.shape[0])
        channels = np.clip(np.rint(array), 0, 255).astype(np.uint8)
        buffer._data[:, :, :3] = channels[:, :, :3]
        buffer._data[:, :, 3] = channels[:, :, 3] if array.shape[2] == 4 else 255
        return buffer

    @classmethod
    def from_surface(cls, surface: pygame.Surface) -> "PixelBuffer":
        """pygame Surface からコピーして生成"""
        width, height = surface.get_size()
        raw = pygame.image.tobytes(surface, "RGBA")
        array = np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 4)
        return cls.from_array(array)

    @classmethod
    def from_image(cls, image) -> "PixelBuffer":
        """
        対応する画像表現（PixelBuffer / ndarray / pygame.Surface）からコピーを作る

        Raises:
            TypeError: 未対応の型
        """
        if isinstance(image, PixelBuffer):
            return image.copy()
        if isinstance(image, np.ndarray):
            return cls.from_array(image)
        if isinstance(image, pygame.Surface):
            return cls.from_surface(image)
        raise TypeError(
            f"image must be a PixelBuffer, numpy array or pygame.Surface, got {type(image).__name__}"
        )

    @classmethod
    def load(cls, path) -> "PixelBuffer":
        """
        画像ファイルをデコードして読み込む

        Raises:
            FileNotFoundError: ファイルが存在しない
            pygame.error: デコードに失敗した
        """
        try:
            surface = pygame.image.load(str(path))
        except (FileNotFoundError, pygame.error):
            logger.error("Failed to load image from %s", path)
            raise
        buffer = cls.from_surface(surface)
        logger.info("Loaded image %s (%dx%d)", path, buffer.width, buffer.height)
        return buffer

    def copy(self) -> "PixelBuffer":
        """独立したコピーを返す"""
        clone = PixelBuffer(self.width, self.height)
        clone._data[...] = self._data
        return clone

    # --- 画素アクセス ---

    @property
    def pixels(self) -> np.ndarray:
        """フラットな RGBA ビュー（index = (y·width + x)·4）"""
        return self._data.reshape(-1)

    def to_array(self) -> np.ndarray:
        """(h, w, 4) 配列のコピー"""
        return self._data.copy()

    def contains(self, x, y) -> bool:
        """座標がバッファ内か"""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x, y) -> Color:
        """画素色を取得（範囲外は透明な黒）"""
        ix, iy = math.floor(x), math.floor(y)
        if not self.contains(ix, iy):
            return TRANSPARENT
        r, g, b, a = self._data[iy, ix]
        return (int(r), int(g), int(b), int(a))

    def set(self, x, y, color) -> None:
        """画素色を設定（範囲外は無視）"""
        ix, iy = math.floor(x), math.floor(y)
        if not self.contains(ix, iy):
            return
        self._data[iy, ix] = to_rgba(color)

    def window(self, x0: int, y0: int, x1: int, y1: int) -> tuple[np.ndarray, int, int]:
        """
        矩形 [x0, x1) × [y0, y1) をバッファ内にクリップした読み取り用ビュー

        Returns:
            (view, clipped_x0, clipped_y0)。view は (h, w, 4)、範囲外なら空配列
        """
        cx0, cy0 = max(x0, 0), max(y0, 0)
        cx1, cy1 = min(x1, self.width), min(y1, self.height)
        if cx0 >= cx1 or cy0 >= cy1:
            return self._data[0:0, 0:0], cx0, cy0
        return self._data[cy0:cy1, cx0:cx1], cx0, cy0

    # --- コピー・リサンプル ---

    def copy_from(self, source, src_rect: Rect | None = None, dst_rect: Rect | None = None) -> None:
        """
        source の src_rect を dst_rect へ最近傍補間でコピー

        転送先画素 (dx, dy) は転送元画素
            (sx + floor((dx - x0)·sw / dw), sy + floor((dy - y0)·sh / dh))
        を取る。転送先がバッファ外の画素はスキップ。

        Args:
            source: PixelBuffer / ndarray / pygame.Surface
            src_rect: (x, y, w, h) 省略時は source 全体
            dst_rect: (x, y, w, h) 省略時はこのバッファ全体
        """
        if not isinstance(source, PixelBuffer):
            source = PixelBuffer.from_image(source)

        sx, sy, sw, sh = src_rect if src_rect is not None else (0, 0, source.width, source.height)
        dx, dy, dw, dh = dst_rect if dst_rect is not None else (0, 0, self.width, self.height)
        if sw <= 0 or sh <= 0 or dw <= 0 or dh <= 0:
            raise ValueError(f"rect sizes must be positive, got src={src_rect} dst={dst_rect}")
        if sx < 0 or sy < 0 or sx + sw > source.width or sy + sh > source.height:
            raise ValueError(
                f"src_rect {src_rect} exceeds source bounds {source.width}x{source.height}"
            )

        # 転送先のうちバッファ内に入る範囲だけを対象にする
        x_start, x_end = max(dx, 0), min(dx + dw, self.width)
        y_start, y_end = max(dy, 0), min(dy + dh, self.height)
        if x_start >= x_end or y_start >= y_end:
            return

        dst_xs = np.arange(x_start, x_end)
        dst_ys = np.arange(y_start, y_end)
        src_xs = sx + ((dst_xs - dx) * sw) // dw
        src_ys = sy + ((dst_ys - dy) * sh) // dh

        self._data[y_start:y_end, x_start:x_end] = source._data[np.ix_(src_ys, src_xs)]

    # --- ホスト連携 ---

    def to_surface(self) -> pygame.Surface:
        """pygame Surface（SRCALPHA）に変換"""
        return pygame.image.frombuffer(self._data.tobytes(), (self.width, self.height), "RGBA").copy()
