"""キャンバス（ストローク描画面）"""

import math
from typing import Protocol
import pygame
from imagesketcher.rendering.color import Color, to_rgba


class Canvas(Protocol):
    """
    コアが描画命令を出す相手

    コアは描画命令を出すだけで、キャンバスから読み戻すことはない。
    """

    def stroke(self, color) -> None: ...

    def stroke_weight(self, weight: float) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def clear(self) -> None: ...


class PygameCanvas:
    """
    pygame Surface 上のキャンバス

    透明なペイントレイヤーに線を積み重ねる。pygame.draw はアルファ合成しないため、
    線ごとに小さな一時サーフェスへ描いてからブレンド転送する。
    """

    def __init__(self, width: int, height: int):
        self.layer = pygame.Surface((width, height), pygame.SRCALPHA)
        self.layer.fill((0, 0, 0, 0))
        self._color: Color = (0, 0, 0, 255)
        self._weight = 1.0

    def stroke(self, color) -> None:
        self._color = to_rgba(color)

    def stroke_weight(self, weight: float) -> None:
        self._weight = float(weight)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """現在の色・太さで線分を描く"""
        width = max(1, int(round(self._weight)))
        pad = width + 1

        left = math.floor(min(x1, x2)) - pad
        top = math.floor(min(y1, y2)) - pad
        size = (
            math.ceil(abs(x2 - x1)) + pad * 2 + 1,
            math.ceil(abs(y2 - y1)) + pad * 2 + 1,
        )

        stamp = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.line(stamp, self._color, (x1 - left, y1 - top), (x2 - left, y2 - top), width)
        if width > 2:
            # 太線の端を丸める（インク溜まりの見た目）
            radius = width // 2
            pygame.draw.circle(stamp, self._color, (round(x1 - left), round(y1 - top)), radius)
            pygame.draw.circle(stamp, self._color, (round(x2 - left), round(y2 - top)), radius)
        self.layer.blit(stamp, (left, top))

    def clear(self) -> None:
        self.layer.fill((0, 0, 0, 0))

    def render(self, screen: pygame.Surface, background: tuple = (255, 255, 255)):
        """背景色の上にペイントレイヤーを重ねて表示"""
        screen.fill(background)
        screen.blit(self.layer, (0, 0))


class RecordingCanvas:
    """
    描画命令を記録するだけのキャンバス（ヘッドレス実行・テスト用）

    commands には ("stroke", color) / ("stroke_weight", w) / ("line", (x1, y1, x2, y2)) /
    ("clear", None) が順に積まれる。lines は線分ごとの (座標, 色, 太さ)。
    """

    def __init__(self):
        self.commands: list[tuple[str, object]] = []
        self.lines: list[tuple[tuple[float, float, float, float], Color, float]] = []
        self.clear_count = 0
        self._color: Color = (0, 0, 0, 255)
        self._weight = 1.0

    def stroke(self, color) -> None:
        self._color = to_rgba(color)
        self.commands.append(("stroke", self._color))

    def stroke_weight(self, weight: float) -> None:
        self._weight = float(weight)
        self.commands.append(("stroke_weight", self._weight))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        coords = (float(x1), float(y1), float(x2), float(y2))
        self.commands.append(("line", coords))
        self.lines.append((coords, self._color, self._weight))

    def clear(self) -> None:
        self.clear_count += 1
        self.commands.append(("clear", None))

    def reset(self):
        """記録を消去"""
        self.commands.clear()
        self.lines.clear()
        self.clear_count = 0
